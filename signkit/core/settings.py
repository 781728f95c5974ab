"""Settings loaded from environment variables."""

from datetime import UTC, datetime, timedelta

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from signkit.crypto.signature import DEFAULT_KEY_SIZE
from signkit.crypto.types import KeyAlgorithm

TOKEN_TTL_DEFAULT = 3600


class KeySettings(BaseSettings):
    """Key generation and key file locations."""

    model_config = SettingsConfigDict(env_prefix="SIGNKIT_KEY_")

    algorithm: KeyAlgorithm = KeyAlgorithm.DSA
    key_size: int = DEFAULT_KEY_SIZE
    public_key_path: str = "public.pem"
    private_key_path: str = "private.pem"


class TokenSettings(BaseSettings):
    """Token signing secret and default lifetime."""

    model_config = SettingsConfigDict(env_prefix="SIGNKIT_TOKEN_")

    secret: SecretStr = SecretStr("")
    ttl_seconds: int = TOKEN_TTL_DEFAULT

    def default_expiry(self) -> datetime:
        """Expiration instant for a token issued now."""
        return datetime.now(UTC) + timedelta(seconds=self.ttl_seconds)
