"""Key encoding to SPKI/PKCS#8 DER and Base64, plus PEM block framing."""

import base64
import binascii

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import dsa, rsa

from signkit.crypto.types import KeyAlgorithm, PemBlock, PrivateKey, PublicKey
from signkit.errors import KeyFormatError

_PUBLIC_TYPES = {
    KeyAlgorithm.DSA: dsa.DSAPublicKey,
    KeyAlgorithm.RSA: rsa.RSAPublicKey,
}
_PRIVATE_TYPES = {
    KeyAlgorithm.DSA: dsa.DSAPrivateKey,
    KeyAlgorithm.RSA: rsa.RSAPrivateKey,
}


def encode_public_key(key: PublicKey) -> str:
    """Base64 of the key's SubjectPublicKeyInfo DER."""
    der = key.public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return base64.b64encode(der).decode("ascii")


def encode_private_key(key: PrivateKey) -> str:
    """Base64 of the key's unencrypted PKCS#8 DER."""
    der = key.private_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    return base64.b64encode(der).decode("ascii")


def _b64decode(text: str) -> bytes:
    try:
        return base64.b64decode(text.strip(), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise KeyFormatError(f"key text is not valid Base64: {exc}") from exc


def decode_public_key(text: str, algorithm: KeyAlgorithm | str) -> PublicKey:
    """Load a public key from Base64 SubjectPublicKeyInfo text."""
    family = KeyAlgorithm(algorithm)
    der = _b64decode(text)
    try:
        key = serialization.load_der_public_key(der)
    except (ValueError, UnsupportedAlgorithm) as exc:
        raise KeyFormatError(f"not a valid SubjectPublicKeyInfo: {exc}") from exc
    if not isinstance(key, _PUBLIC_TYPES[family]):
        raise KeyFormatError(f"expected a {family} public key, got {type(key).__name__}")
    return key


def decode_private_key(text: str, algorithm: KeyAlgorithm | str) -> PrivateKey:
    """Load a private key from Base64 PKCS#8 text."""
    family = KeyAlgorithm(algorithm)
    der = _b64decode(text)
    try:
        key = serialization.load_der_private_key(der, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise KeyFormatError(f"not a valid PKCS#8 private key: {exc}") from exc
    if not isinstance(key, _PRIVATE_TYPES[family]):
        raise KeyFormatError(f"expected a {family} private key, got {type(key).__name__}")
    return key


def format_pem_block(block: PemBlock) -> str:
    """Render a block as BEGIN marker, body, END marker."""
    return (
        f"-----BEGIN {block.label}-----\n"
        f"{block.body}\n"
        f"-----END {block.label}-----"
    )


def parse_pem_block(text: str, label: str) -> PemBlock:
    """Extract the body between the BEGIN and END markers for ``label``.

    Lines are scanned in order. The BEGIN line itself is skipped, every
    line after it is stripped and concatenated, and scanning stops at the
    first END line. Anything outside the markers is ignored, so a body
    wrapped at any width parses to the same Base64 string.
    """
    begin = f"BEGIN {label}"
    end = f"END {label}"
    parts: list[str] = []
    in_block = False
    closed = False
    for line in text.splitlines():
        if begin in line:
            in_block = True
            continue
        if end in line:
            closed = in_block
            break
        if in_block:
            parts.append(line.strip())

    if not in_block:
        raise KeyFormatError(f"missing '-----BEGIN {label}-----' marker")
    if not closed:
        raise KeyFormatError(f"missing '-----END {label}-----' marker")
    body = "".join(parts)
    if not body:
        raise KeyFormatError(f"empty {label} block")
    return PemBlock(label=label, body=body)
