"""Persist key pairs as PEM-framed files and single keys as bare Base64 files."""

import contextlib
import logging
import os

from signkit.crypto.codec import (
    decode_private_key,
    decode_public_key,
    encode_private_key,
    encode_public_key,
    format_pem_block,
    parse_pem_block,
)
from signkit.crypto.types import (
    PRIVATE_KEY_LABEL,
    PUBLIC_KEY_LABEL,
    KeyAlgorithm,
    KeyPair,
    PemBlock,
    PrivateKey,
    PublicKey,
)
from signkit.errors import KeyFormatError

StrPath = str | os.PathLike[str]

_logger = logging.getLogger(__name__)


def _write_text(path: StrPath, text: str) -> None:
    with open(path, "w", encoding="ascii") as f:
        f.write(text)


def _read_text(path: StrPath) -> str:
    try:
        with open(path, encoding="utf-8") as f:
            return f.read()
    except UnicodeDecodeError as exc:
        raise KeyFormatError(f"{os.fspath(path)} is not UTF-8 key text") from exc


def _staging_path(path: StrPath) -> str:
    return f"{os.fspath(path)}.tmp"


def write_key_pair_to_files(
    key_pair: KeyPair,
    public_path: StrPath,
    private_path: StrPath,
    *,
    logger: logging.Logger = _logger,
) -> None:
    """Write the public and private halves as PEM blocks, replacing existing files.

    Both blocks are written to ``.tmp`` siblings first and only moved into
    place once both writes succeed, so a failed export leaves any existing
    pair untouched.
    """
    public_block = PemBlock(
        label=PUBLIC_KEY_LABEL, body=encode_public_key(key_pair.public_key)
    )
    private_block = PemBlock(
        label=PRIVATE_KEY_LABEL, body=encode_private_key(key_pair.private_key)
    )
    staged = [
        (_staging_path(public_path), public_path, format_pem_block(public_block)),
        (_staging_path(private_path), private_path, format_pem_block(private_block)),
    ]
    written: list[str] = []
    try:
        for tmp, _, text in staged:
            written.append(tmp)
            _write_text(tmp, text)
    except OSError:
        for tmp in written:
            with contextlib.suppress(FileNotFoundError):
                os.remove(tmp)
        raise
    for tmp, target, _ in staged:
        os.replace(tmp, target)
    logger.info(
        "Exported %s key pair: public=%s private=%s",
        key_pair.algorithm,
        os.fspath(public_path),
        os.fspath(private_path),
    )


def read_key_pair_from_files(
    public_path: StrPath,
    private_path: StrPath,
    algorithm: KeyAlgorithm | str,
    *,
    logger: logging.Logger = _logger,
) -> KeyPair:
    """Load a key pair written by :func:`write_key_pair_to_files`.

    Raises OSError when a file cannot be read and KeyFormatError when a
    file has no matching BEGIN/END markers or the body does not decode.
    """
    public_block = parse_pem_block(_read_text(public_path), PUBLIC_KEY_LABEL)
    private_block = parse_pem_block(_read_text(private_path), PRIVATE_KEY_LABEL)
    key_pair = KeyPair(
        algorithm=KeyAlgorithm(algorithm),
        public_key=decode_public_key(public_block.body, algorithm),
        private_key=decode_private_key(private_block.body, algorithm),
    )
    logger.debug(
        "Imported %s key pair from %s and %s",
        key_pair.algorithm,
        os.fspath(public_path),
        os.fspath(private_path),
    )
    return key_pair


def write_key_to_file(
    key: PublicKey | PrivateKey,
    path: StrPath,
    *,
    logger: logging.Logger = _logger,
) -> None:
    """Write a single key as unframed Base64 (SPKI or PKCS#8)."""
    if isinstance(key, PrivateKey):
        text = encode_private_key(key)
        kind = "private"
    else:
        text = encode_public_key(key)
        kind = "public"
    _write_text(path, text)
    logger.info("Exported %s key to %s", kind, os.fspath(path))


def read_public_key_from_file(path: StrPath, algorithm: KeyAlgorithm | str) -> PublicKey:
    return decode_public_key(_read_text(path), algorithm)


def read_private_key_from_file(
    path: StrPath, algorithm: KeyAlgorithm | str
) -> PrivateKey:
    return decode_private_key(_read_text(path), algorithm)
