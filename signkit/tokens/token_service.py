"""Compact signed token issuance and verification using PyJWT."""

import binascii
import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

import jwt
import uuid_utils
from jwt.types import Options
from jwt.utils import base64url_decode, base64url_encode
from pydantic import ValidationError

from signkit.core.settings import TokenSettings
from signkit.errors import InvalidClaimError, SecurityError
from signkit.tokens.types import (
    TokenFailure,
    TokenInspection,
    TokenPayload,
    TokenServiceConfig,
)

_logger = logging.getLogger(__name__)

# Time claims are checked here, after the signature, not inside PyJWT.
_DECODE_OPTIONS: Options = {
    "verify_signature": True,
    "verify_exp": False,
    "verify_nbf": False,
    "verify_iat": False,
    "verify_aud": False,
    "verify_iss": False,
}

_STRING_CLAIMS = ("sub", "jti")
_TIME_CLAIMS = ("exp", "iat", "nbf")


def _check_registered_claims(payload: Mapping[str, Any]) -> None:
    """Reject registered claims whose type would make the token unverifiable."""
    for name in _STRING_CLAIMS:
        if name in payload and not isinstance(payload[name], str):
            raise InvalidClaimError(f"claim '{name}' must be a string")
    for name in _TIME_CLAIMS:
        if name not in payload:
            continue
        value = payload[name]
        if isinstance(value, bool) or not isinstance(value, int | datetime):
            raise InvalidClaimError(
                f"claim '{name}' must be a datetime or integer NumericDate"
            )


def _has_canonical_signature(token: str) -> bool:
    """True if the signature segment re-encodes to exactly the same text."""
    segment = token.rpartition(".")[2]
    try:
        raw = base64url_decode(segment)
    except (binascii.Error, ValueError):
        return False
    return base64url_encode(raw).decode("ascii") == segment


class TokenService:
    """Issues and validates signed tokens with subject, time, and custom claims."""

    def __init__(
        self,
        config: TokenServiceConfig,
        *,
        logger: logging.Logger = _logger,
    ) -> None:
        self._config = config
        self._logger = logger

    @property
    def algorithm(self) -> str:
        return self._config.algorithm

    def issue_token(
        self,
        subject: str,
        custom_claims: Mapping[str, Any] | None,
        expires_at: datetime,
    ) -> str:
        """Create a signed token for ``subject`` that expires at ``expires_at``.

        Custom claims are merged last and may override the base claims.
        Raises InvalidClaimError if ``sub``/``jti`` end up non-string or a
        time claim is not a datetime or integer.
        """
        payload: dict[str, Any] = {
            "sub": subject,
            "exp": expires_at,
            "iat": datetime.now(UTC),
            "jti": str(uuid_utils.uuid4()),
        }
        if custom_claims:
            payload.update(custom_claims)
        _check_registered_claims(payload)
        return jwt.encode(
            payload,
            self._config.signing_key,
            algorithm=self._config.algorithm,
        )

    def _verify(self, token: str) -> TokenInspection:
        """Check the signature and parse claims; expiry is not evaluated."""
        if not isinstance(token, str) or token.count(".") != 2:
            return TokenInspection.failed(
                TokenFailure.MALFORMED, "not a compact three-part token"
            )
        if not _has_canonical_signature(token):
            return TokenInspection.failed(
                TokenFailure.BAD_SIGNATURE, "signature segment is not canonical base64url"
            )
        try:
            raw = jwt.decode(
                token,
                self._config.verification_key,
                algorithms=[self._config.algorithm],
                options=_DECODE_OPTIONS,
            )
        except jwt.InvalidSignatureError as exc:
            return TokenInspection.failed(TokenFailure.BAD_SIGNATURE, str(exc))
        except jwt.PyJWTError as exc:
            return TokenInspection.failed(TokenFailure.MALFORMED, str(exc))
        try:
            payload = TokenPayload.model_validate(raw)
        except ValidationError as exc:
            return TokenInspection.failed(TokenFailure.MALFORMED, str(exc))
        return TokenInspection.passed(payload)

    def _inspect(self, token: str) -> TokenInspection:
        """Full check: signature first, then presence and freshness of ``exp``."""
        result = self._verify(token)
        if not result.ok or result.payload is None:
            return result
        expires_at = result.payload.expires_at
        if expires_at is None:
            return TokenInspection.failed(
                TokenFailure.MISSING_EXPIRATION, "token has no exp claim"
            )
        if not datetime.now(UTC) < expires_at:
            return TokenInspection.failed(
                TokenFailure.EXPIRED, f"token expired at {expires_at.isoformat()}"
            )
        return result

    def validate_token(self, token: str) -> bool:
        """Return True only for a correctly signed, unexpired token."""
        result = self._inspect(token)
        if not result.ok:
            self._logger.debug("Token rejected (%s): %s", result.failure, result.detail)
        return result.ok

    def _trusted_payload(self, token: str) -> TokenPayload:
        result = self._verify(token)
        if not result.ok or result.payload is None:
            raise SecurityError(f"Invalid token ({result.failure}): {result.detail}")
        return result.payload

    def get_claim(self, token: str, name: str) -> Any | None:
        """Return claim ``name`` from a verified token, or None if absent.

        Raises SecurityError if the token is malformed or its signature
        does not verify. Expiry is not enforced here.
        """
        return self._trusted_payload(token).claim(name)

    def get_expiration_time(self, token: str) -> datetime | None:
        """Return the ``exp`` instant of a verified token."""
        return self._trusted_payload(token).expires_at


def create_token_service(
    settings: TokenSettings | None = None,
    *,
    logger: logging.Logger = _logger,
) -> TokenService:
    """Build an HS256 TokenService from environment settings."""
    settings = settings or TokenSettings()
    return TokenService(TokenServiceConfig.from_secret(settings.secret), logger=logger)
