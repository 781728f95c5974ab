"""DSA and RSA key generation, signing, and signature verification."""

import base64
import binascii

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import dsa, padding, rsa

from signkit.crypto.types import (
    KeyAlgorithm,
    KeyPair,
    PrivateKey,
    PublicKey,
    SignatureAlgorithm,
)
from signkit.errors import KeyFormatError, UnsupportedKeySize

DEFAULT_KEY_SIZE = 2048
RSA_PUBLIC_EXPONENT = 65537

# DSA stops at 3072 (FIPS 186 L/N pairs); sub-1024 sizes are not offered.
SUPPORTED_KEY_SIZES: dict[KeyAlgorithm, frozenset[int]] = {
    KeyAlgorithm.DSA: frozenset({1024, 2048, 3072}),
    KeyAlgorithm.RSA: frozenset({1024, 2048, 3072, 4096}),
}


def supported_key_sizes(algorithm: KeyAlgorithm | str) -> tuple[int, ...]:
    """Return the accepted key sizes for ``algorithm``, ascending."""
    return tuple(sorted(SUPPORTED_KEY_SIZES[KeyAlgorithm(algorithm)]))


def generate_key_pair(
    algorithm: KeyAlgorithm | str = KeyAlgorithm.DSA,
    key_size: int = DEFAULT_KEY_SIZE,
) -> KeyPair:
    """Generate a new key pair, rejecting sizes the family does not accept."""
    family = KeyAlgorithm(algorithm)
    accepted = SUPPORTED_KEY_SIZES[family]
    if key_size not in accepted:
        raise UnsupportedKeySize(family, key_size, accepted)

    private_key: PrivateKey
    if family is KeyAlgorithm.DSA:
        private_key = dsa.generate_private_key(key_size=key_size)
    else:
        private_key = rsa.generate_private_key(
            public_exponent=RSA_PUBLIC_EXPONENT,
            key_size=key_size,
        )
    return KeyPair(
        algorithm=family,
        public_key=private_key.public_key(),
        private_key=private_key,
    )


def signature_algorithm_for(key: PrivateKey | PublicKey) -> SignatureAlgorithm:
    """Pick the signature scheme that pairs with the key's family."""
    if isinstance(key, dsa.DSAPrivateKey | dsa.DSAPublicKey):
        return SignatureAlgorithm.SHA256_WITH_DSA
    if isinstance(key, rsa.RSAPrivateKey | rsa.RSAPublicKey):
        return SignatureAlgorithm.SHA256_WITH_RSA
    raise KeyFormatError(f"unsupported key type: {type(key).__name__}")


def sign(data: bytes | str, private_key: PrivateKey) -> str:
    """Sign ``data`` and return the Base64 signature."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    scheme = signature_algorithm_for(private_key)
    if scheme is SignatureAlgorithm.SHA256_WITH_DSA:
        raw = private_key.sign(data, hashes.SHA256())
    else:
        raw = private_key.sign(data, padding.PKCS1v15(), hashes.SHA256())
    return base64.b64encode(raw).decode("ascii")


def _decode_signature(signature: str) -> bytes | None:
    """Strict Base64 decode; None unless ``signature`` is the canonical text."""
    try:
        raw = base64.b64decode(signature, validate=True)
    except (binascii.Error, ValueError):
        return None
    # Reject texts that differ only in padding bits from the canonical form.
    if base64.b64encode(raw).decode("ascii") != signature:
        return None
    return raw


def verify(data: bytes | str, public_key: PublicKey, signature: str) -> bool:
    """Check ``signature`` over ``data``; any mismatch returns False."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    scheme = signature_algorithm_for(public_key)
    raw = _decode_signature(signature)
    if raw is None:
        return False
    try:
        if scheme is SignatureAlgorithm.SHA256_WITH_DSA:
            public_key.verify(raw, data, hashes.SHA256())
        else:
            public_key.verify(raw, data, padding.PKCS1v15(), hashes.SHA256())
    except InvalidSignature:
        return False
    return True
