"""Type definitions for token signing configuration and verification results."""

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any, Literal

from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey, RSAPublicKey
from pydantic import BaseModel, ConfigDict, SecretStr, model_validator

from signkit.crypto.types import KeyAlgorithm, KeyPair
from signkit.errors import KeyFormatError

HMAC_MIN_SECRET_BYTES = 32

TokenAlgorithm = Literal["HS256", "RS256"]

TIME_CLAIMS = frozenset({"exp", "iat", "nbf"})


def _from_numeric_date(value: int | float | None) -> datetime | None:
    if value is None:
        return None
    try:
        return datetime.fromtimestamp(value, UTC)
    except (OverflowError, OSError) as exc:
        raise ValueError(f"NumericDate {value} is out of range") from exc


class TokenServiceConfig(BaseModel):
    """Immutable signer/verifier pair for a TokenService."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    algorithm: TokenAlgorithm
    signing_key: str | RSAPrivateKey
    verification_key: str | RSAPublicKey

    @classmethod
    def from_secret(cls, secret: str | SecretStr) -> "TokenServiceConfig":
        """HS256 with a shared secret of at least 256 bits."""
        if isinstance(secret, SecretStr):
            secret = secret.get_secret_value()
        if len(secret.encode("utf-8")) < HMAC_MIN_SECRET_BYTES:
            raise KeyFormatError(
                f"HMAC secret must be at least {HMAC_MIN_SECRET_BYTES * 8} bits"
            )
        return cls(algorithm="HS256", signing_key=secret, verification_key=secret)

    @classmethod
    def from_key_pair(cls, key_pair: KeyPair) -> "TokenServiceConfig":
        """RS256 with an RSA key pair."""
        if key_pair.algorithm is not KeyAlgorithm.RSA:
            raise KeyFormatError(f"RS256 needs an RSA key pair, got {key_pair.algorithm}")
        return cls(
            algorithm="RS256",
            signing_key=key_pair.private_key,
            verification_key=key_pair.public_key,
        )


class TokenPayload(BaseModel):
    """Verified token claims; custom claims are kept as extra fields.

    ``iat`` and ``exp`` hold the raw NumericDate seconds from the token.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    sub: str | None = None
    iat: int | None = None
    exp: int | None = None
    jti: str | None = None

    @model_validator(mode="after")
    def _time_claims_in_range(self) -> "TokenPayload":
        _from_numeric_date(self.iat)
        _from_numeric_date(self.exp)
        return self

    @property
    def issued_at(self) -> datetime | None:
        return _from_numeric_date(self.iat)

    @property
    def expires_at(self) -> datetime | None:
        return _from_numeric_date(self.exp)

    def claim(self, name: str) -> Any | None:
        """Claim value by name; registered time claims come back as UTC datetimes."""
        value = self.model_dump().get(name)
        is_number = isinstance(value, int | float) and not isinstance(value, bool)
        if name in TIME_CLAIMS and is_number:
            return _from_numeric_date(value)
        return value


class TokenFailure(StrEnum):
    """Why a token did not validate."""

    MALFORMED = "malformed"
    BAD_SIGNATURE = "bad_signature"
    MISSING_EXPIRATION = "missing_expiration"
    EXPIRED = "expired"


class TokenInspection(BaseModel):
    """Outcome of parsing and checking a token."""

    model_config = ConfigDict(frozen=True)

    ok: bool
    failure: TokenFailure | None = None
    detail: str = ""
    payload: TokenPayload | None = None

    @classmethod
    def passed(cls, payload: TokenPayload) -> "TokenInspection":
        return cls(ok=True, payload=payload)

    @classmethod
    def failed(cls, failure: TokenFailure, detail: str) -> "TokenInspection":
        return cls(ok=False, failure=failure, detail=detail)
