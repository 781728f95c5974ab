"""RSA public-key encryption with PKCS#1 v1.5 padding and Base64 output."""

import base64
import binascii

from cryptography.hazmat.primitives.asymmetric import padding, rsa

from signkit.errors import KeyFormatError


def encrypt_with_public_key(data: bytes | str, public_key: rsa.RSAPublicKey) -> str:
    """Encrypt ``data`` for the holder of the paired private key."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    if not isinstance(public_key, rsa.RSAPublicKey):
        raise KeyFormatError(f"expected an RSA public key, got {type(public_key).__name__}")
    ciphertext = public_key.encrypt(data, padding.PKCS1v15())
    return base64.b64encode(ciphertext).decode("ascii")


def decrypt_with_private_key(ciphertext: str, private_key: rsa.RSAPrivateKey) -> str:
    """Decrypt Base64 ciphertext and return the UTF-8 plaintext.

    Raises KeyFormatError if the ciphertext is not Base64 or does not
    decrypt under ``private_key``.
    """
    if not isinstance(private_key, rsa.RSAPrivateKey):
        raise KeyFormatError(f"expected an RSA private key, got {type(private_key).__name__}")
    try:
        raw = base64.b64decode(ciphertext, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise KeyFormatError(f"ciphertext is not valid Base64: {exc}") from exc
    try:
        return private_key.decrypt(raw, padding.PKCS1v15()).decode("utf-8")
    except ValueError as exc:
        # UnicodeDecodeError is a ValueError; implicit rejection yields junk bytes
        raise KeyFormatError("ciphertext does not decrypt under this key") from exc
