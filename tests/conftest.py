"""Shared test fixtures for signkit."""

import pytest

from signkit.crypto.signature import generate_key_pair
from signkit.crypto.types import KeyAlgorithm, KeyPair

TEST_SECRET = "test-secret-that-is-at-least-32-bytes-long!!"


@pytest.fixture(autouse=True)
def _set_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set environment variables for test settings."""
    monkeypatch.setenv("SIGNKIT_TOKEN_SECRET", TEST_SECRET)


@pytest.fixture(scope="session")
def dsa_pair() -> KeyPair:
    """A 2048-bit DSA pair; parameter generation is slow, so share it."""
    return generate_key_pair(KeyAlgorithm.DSA, 2048)


@pytest.fixture(scope="session")
def rsa_pair() -> KeyPair:
    """A 2048-bit RSA pair shared across tests."""
    return generate_key_pair(KeyAlgorithm.RSA, 2048)


@pytest.fixture(params=["dsa", "rsa"])
def key_pair(request: pytest.FixtureRequest) -> KeyPair:
    """Each supported family in turn."""
    return request.getfixturevalue(f"{request.param}_pair")
