"""Exception types raised by signkit operations."""

from collections.abc import Iterable


class SignKitError(Exception):
    """Base class for all signkit errors."""


class KeyFormatError(SignKitError, ValueError):
    """Key material is not valid Base64, DER, PEM, or the expected family."""


class UnsupportedKeySize(SignKitError, ValueError):
    """Requested key size is outside the algorithm's accepted set."""

    def __init__(self, algorithm: str, key_size: int, accepted: Iterable[int]) -> None:
        self.algorithm = algorithm
        self.key_size = key_size
        self.accepted = tuple(sorted(accepted))
        super().__init__(
            f"{algorithm} does not support {key_size}-bit keys; "
            f"accepted sizes: {', '.join(str(s) for s in self.accepted)}"
        )


class SecurityError(SignKitError):
    """Token could not be trusted: malformed or signature mismatch."""


class InvalidClaimError(SignKitError, ValueError):
    """A registered claim was given a value no verifier would accept."""
