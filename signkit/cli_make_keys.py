"""Command-line entry point that generates a key pair and writes PEM files."""

import argparse
import logging
from pathlib import Path

from signkit.core.settings import KeySettings
from signkit.crypto.key_store import write_key_pair_to_files
from signkit.crypto.signature import generate_key_pair, supported_key_sizes
from signkit.crypto.types import KeyAlgorithm
from signkit.errors import UnsupportedKeySize

logger = logging.getLogger("signkit.cli")


def build_parser(settings: KeySettings) -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="signkit-make-keys",
        description="Generate a DSA or RSA key pair and export it as PEM files.",
    )
    ap.add_argument(
        "--algorithm",
        choices=[a.value for a in KeyAlgorithm],
        default=settings.algorithm.value,
    )
    ap.add_argument(
        "--key-size",
        type=int,
        default=settings.key_size,
        help="Key length in bits (DSA: %s; RSA: %s)"
        % (
            ", ".join(str(s) for s in supported_key_sizes(KeyAlgorithm.DSA)),
            ", ".join(str(s) for s in supported_key_sizes(KeyAlgorithm.RSA)),
        ),
    )
    ap.add_argument("--out-dir", default=".", help="Directory for the PEM files")
    ap.add_argument("--public-name", default=settings.public_key_path)
    ap.add_argument("--private-name", default=settings.private_key_path)
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap


def main(argv: list[str] | None = None) -> int:
    """Generate a key pair and print the paths of both files."""
    args = build_parser(KeySettings()).parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    out_dir = Path(args.out_dir).expanduser().resolve()
    out_dir.mkdir(parents=True, exist_ok=True)

    try:
        key_pair = generate_key_pair(args.algorithm, args.key_size)
    except UnsupportedKeySize as exc:
        logger.error("%s", exc)
        return 2

    public_path = out_dir / args.public_name
    private_path = out_dir / args.private_name
    write_key_pair_to_files(key_pair, public_path, private_path)

    print(str(public_path))
    print(str(private_path))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
