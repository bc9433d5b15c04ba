from __future__ import annotations

import asyncio
import hashlib
from typing import Protocol

from ecdsa import SECP256k1, SigningKey, VerifyingKey
from ecdsa.keys import BadDigestError, BadSignatureError
from ecdsa.curves import Curve
from ecdsa.der import UnexpectedDER
from ecdsa.util import MalformedSignature, sigdecode_der, sigencode_der


def digest(data: bytes) -> bytes:
    """Return the 32-byte SHA-256 digest of data."""
    return hashlib.sha256(data).digest()


class SignatureBackend(Protocol):
    """
    Signing capability consumed by generate() and verify().

    Keys are opaque byte buffers owned by the backend; the token layer only
    checks that they are non-empty.
    """

    async def sign(self, private_key: bytes, digest: bytes) -> bytes:
        ...

    async def verify(self, public_key: bytes, digest: bytes, signature: bytes) -> bool:
        ...


class EcdsaBackend:
    """
    ECDSA backend on top of the pure-Python ``ecdsa`` package.

    Private keys are raw secret exponents (32 bytes for secp256k1). Public keys
    may be raw, compressed or uncompressed point encodings. Signatures are
    DER-encoded and produced deterministically (RFC 6979) over the digest, so
    issuing does not rely on runtime entropy.

    Args:
        curve: Curve to sign on. Defaults to secp256k1.
    """

    def __init__(self, curve: Curve = SECP256k1) -> None:
        self.curve = curve

    def _sign(self, private_key: bytes, digest: bytes) -> bytes:
        sk = SigningKey.from_string(bytes(private_key), curve=self.curve)
        return sk.sign_digest_deterministic(
            digest, hashfunc=hashlib.sha256, sigencode=sigencode_der
        )

    def _verify(self, public_key: bytes, digest: bytes, signature: bytes) -> bool:
        vk = VerifyingKey.from_string(bytes(public_key), curve=self.curve)
        try:
            return vk.verify_digest(signature, digest, sigdecode=sigdecode_der)
        except (BadSignatureError, BadDigestError, UnexpectedDER, MalformedSignature):
            return False

    async def sign(self, private_key: bytes, digest: bytes) -> bytes:
        """
        Sign a digest with a raw private key.

        Raises:
            Various ecdsa exceptions if the key is not a valid secret exponent.
        """
        return await asyncio.to_thread(self._sign, private_key, digest)

    async def verify(self, public_key: bytes, digest: bytes, signature: bytes) -> bool:
        """
        Check a DER signature over a digest.

        Returns:
            True if the signature is valid, False if it is wrong or malformed.

        Raises:
            Various ecdsa exceptions if the public key is not a point on the curve.
        """
        return await asyncio.to_thread(self._verify, public_key, digest, signature)


def public_key_for(private_key: bytes, curve: Curve = SECP256k1) -> bytes:
    """
    Derive the uncompressed public point (65 bytes for secp256k1) for a raw private key.

    Args:
        private_key: Raw secret exponent bytes.
        curve: Curve the key belongs to.

    Returns:
        Uncompressed public key bytes, ``0x04`` prefixed.
    """
    sk = SigningKey.from_string(bytes(private_key), curve=curve)
    return sk.verifying_key.to_string("uncompressed")


DEFAULT_BACKEND = EcdsaBackend()
