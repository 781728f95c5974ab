"""Type definitions for keys, key pairs, and PEM blocks."""

from enum import StrEnum

from cryptography.hazmat.primitives.asymmetric import dsa, rsa
from pydantic import BaseModel, ConfigDict

PrivateKey = dsa.DSAPrivateKey | rsa.RSAPrivateKey
PublicKey = dsa.DSAPublicKey | rsa.RSAPublicKey

PUBLIC_KEY_LABEL = "PUBLIC KEY"
PRIVATE_KEY_LABEL = "PRIVATE KEY"


class KeyAlgorithm(StrEnum):
    """Asymmetric key families."""

    DSA = "DSA"
    RSA = "RSA"


class SignatureAlgorithm(StrEnum):
    """Signature schemes, named the way the key family pairs them."""

    SHA256_WITH_DSA = "SHA256withDSA"
    SHA256_WITH_RSA = "SHA256withRSA"


class KeyPair(BaseModel):
    """A matched public/private key pair."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    algorithm: KeyAlgorithm
    public_key: PublicKey
    private_key: PrivateKey

    @property
    def key_size(self) -> int:
        """Nominal bit length of the pair."""
        return self.private_key.key_size


class PemBlock(BaseModel):
    """A labelled Base64 body framed by BEGIN/END markers."""

    model_config = ConfigDict(frozen=True)

    label: str
    body: str
