"""
Testing utilities for licensekey - for use in packages that depend on licensekey.

Provides:
1. Fixed secp256k1 test keys so tokens in fixtures are reproducible
2. Stub signature backends for exercising failure paths without real crypto
3. Pytest fixtures wrapping both

Import the fixtures into a conftest.py with::

    from licensekey.testing_utils import fixed_keypair, other_keypair  # noqa: F401
"""

import hashlib
from typing import List, Tuple

import pytest
from ecdsa import SECP256k1, SigningKey

from .crypto import public_key_for

# Never use outside tests: the secret is derivable from this file.
TEST_PRIVATE_KEY = hashlib.sha256(b"licensekey test signing key").digest()
TEST_PUBLIC_KEY = public_key_for(TEST_PRIVATE_KEY)


def generate_test_keypair() -> Tuple[bytes, bytes]:
    """
    Generate a fresh random secp256k1 keypair as raw bytes.

    Returns:
        Tuple of (private_key, uncompressed_public_key).
    """
    sk = SigningKey.generate(curve=SECP256k1)
    return sk.to_string(), sk.verifying_key.to_string("uncompressed")


class RecordingBackend:
    """
    Backend that answers from fixed values and records every call.

    Args:
        signature: Bytes returned by sign().
        valid: Value returned by verify().
    """

    def __init__(self, signature: bytes = b"\x30\x01\x00", valid: bool = True) -> None:
        self.signature = signature
        self.valid = valid
        self.calls: List[Tuple[str, bytes, bytes]] = []

    async def sign(self, private_key: bytes, digest: bytes) -> bytes:
        self.calls.append(("sign", private_key, digest))
        return self.signature

    async def verify(self, public_key: bytes, digest: bytes, signature: bytes) -> bool:
        self.calls.append(("verify", public_key, digest))
        return self.valid


class FailingBackend:
    """Backend whose every operation raises the given exception."""

    def __init__(self, exc: Exception) -> None:
        self.exc = exc

    async def sign(self, private_key: bytes, digest: bytes) -> bytes:
        raise self.exc

    async def verify(self, public_key: bytes, digest: bytes, signature: bytes) -> bool:
        raise self.exc


@pytest.fixture
def fixed_keypair():
    """The fixed (private_key, public_key) pair used across tests."""
    return TEST_PRIVATE_KEY, TEST_PUBLIC_KEY


@pytest.fixture
def other_keypair():
    """A freshly generated keypair unrelated to fixed_keypair."""
    return generate_test_keypair()


@pytest.fixture
def recording_backend():
    """A RecordingBackend that accepts every signature."""
    return RecordingBackend()
