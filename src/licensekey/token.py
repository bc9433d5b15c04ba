from __future__ import annotations

import asyncio
import logging
from typing import Any, Coroutine, Dict, Mapping, Optional

from .crypto import DEFAULT_BACKEND, SignatureBackend, digest
from .encoding import decode, encode
from .errors import (
    EmptyInputError,
    InvalidKeyError,
    MalformedTokenError,
    SignatureVerificationError,
    SigningError,
)
from .framing import DEFAULT_FORMAT, TokenFormat, format_signature, frame, parse_signature, unframe

logger = logging.getLogger(__name__)


def _check_key(key: Any, kind: str) -> bytes:
    if key is None:
        raise EmptyInputError(f"{kind} key is required")
    if not isinstance(key, (bytes, bytearray)):
        raise InvalidKeyError(f"{kind} key must be bytes, got {type(key).__name__}")
    if not key:
        raise InvalidKeyError(f"{kind} key must be non-empty")
    return bytes(key)


def _check_token(token: Any) -> None:
    if token is None or token == "":
        raise EmptyInputError("License token is required")
    if not isinstance(token, str):
        raise MalformedTokenError(
            f"License token must be a string, got {type(token).__name__}"
        )


async def _sign(
    backend: SignatureBackend,
    encoded: str,
    msg_digest: bytes,
    private_key: bytes,
    fmt: TokenFormat,
) -> str:
    try:
        sig = await backend.sign(private_key, msg_digest)
    except Exception as e:
        raise SigningError("License signing failed") from e

    if not isinstance(sig, (bytes, bytearray)) or not sig:
        raise SigningError("Signing backend returned no signature bytes")

    return frame(encoded, format_signature(bytes(sig), fmt.line_width), fmt)


def generate(
    data: Optional[Mapping[str, Any]],
    private_key: bytes,
    *,
    backend: Optional[SignatureBackend] = None,
    fmt: TokenFormat = DEFAULT_FORMAT,
) -> Coroutine[Any, Any, str]:
    """
    Create a signed license token from license data.

    Argument and encoding checks run immediately and raise before anything is
    awaited. The returned coroutine performs the signature and resolves to::

        -----BEGIN LICENSE KEY-----
        key: value
        <blank line>
        <uppercase hex signature, wrapped>
        -----END LICENSE KEY-----

    The signature covers the SHA-256 digest of the exact key-value text stored
    in the token.

    Args:
        data: Flat mapping of string keys to str/int/float/bool values.
        private_key: Raw private key bytes understood by the backend.
        backend: Signing backend. Defaults to secp256k1 ECDSA.
        fmt: Token layout.

    Returns:
        Coroutine resolving to the token string.

    Raises:
        EmptyInputError: If data or private_key is missing.
        InvalidKeyError: If private_key is not a non-empty byte buffer.
        EncodingError: If data cannot be encoded unambiguously.
        SigningError: (when awaited) If the backend fails to sign.
    """
    if data is None:
        raise EmptyInputError("License data is required")
    key = _check_key(private_key, "Private")

    encoded = encode(data)
    msg_digest = digest(encoded.encode("utf-8"))

    logger.debug("Issuing license token with %d field(s)", len(data))
    return _sign(backend or DEFAULT_BACKEND, encoded, msg_digest, key, fmt)


async def _verify(
    backend: SignatureBackend,
    payload: Dict[str, str],
    msg_digest: bytes,
    sig: bytes,
    public_key: bytes,
) -> Dict[str, str]:
    try:
        ok = await backend.verify(public_key, msg_digest, sig)
    except Exception as e:
        raise SignatureVerificationError("License verification failed") from e

    if not ok:
        logger.warning("Rejected license token with invalid signature")
        raise SignatureVerificationError("Invalid license signature")

    logger.debug("Verified license token with %d field(s)", len(payload))
    return payload


def verify(
    token: str,
    public_key: bytes,
    *,
    backend: Optional[SignatureBackend] = None,
    fmt: TokenFormat = DEFAULT_FORMAT,
) -> Coroutine[Any, Any, Dict[str, str]]:
    """
    Verify a license token and recover its data.

    The token is fully parsed before the backend is involved: a malformed
    token raises here and never reaches the signature check. The returned
    awaitable performs the check and resolves to the decoded data.

    Values come back as strings, e.g. ``{"seats": 5}`` verifies as
    ``{"seats": "5"}``.

    Args:
        token: Token string as produced by generate().
        public_key: Raw public key bytes understood by the backend.
        backend: Verification backend. Defaults to secp256k1 ECDSA.
        fmt: Token layout.

    Returns:
        Coroutine resolving to the license data.

    Raises:
        EmptyInputError: If token or public_key is missing.
        InvalidKeyError: If public_key is not a non-empty byte buffer.
        MalformedTokenError: If the token is not a string or its layout is wrong.
        DecodingError: If the key-value block cannot be parsed.
        SignatureFormatError: If the signature block is not canonical hex.
        SignatureVerificationError: (when awaited) If the signature does not match.
    """
    _check_token(token)
    key = _check_key(public_key, "Public")

    encoded, formatted_signature = unframe(token, fmt)
    payload = decode(encoded)
    msg_digest = digest(encode(payload).encode("utf-8"))
    sig = parse_signature(formatted_signature, fmt.line_width)

    return _verify(backend or DEFAULT_BACKEND, payload, msg_digest, sig, key)


def decode_token(token: str, fmt: TokenFormat = DEFAULT_FORMAT) -> Dict[str, str]:
    """
    Decode license data from a token without verifying its signature.

    WARNING: This should only be used for debugging or logging purposes.
    Always use verify() for security-critical operations.

    Raises:
        EmptyInputError: If token is missing.
        MalformedTokenError: If the token is not a string or its layout is wrong.
        DecodingError: If the key-value block cannot be parsed.
    """
    _check_token(token)
    encoded, _sig = unframe(token, fmt)
    return decode(encoded)


def issue_token(
    data: Mapping[str, Any],
    private_key: bytes,
    *,
    backend: Optional[SignatureBackend] = None,
    fmt: TokenFormat = DEFAULT_FORMAT,
) -> str:
    """Blocking form of generate() for code that is not running an event loop."""
    return asyncio.run(generate(data, private_key, backend=backend, fmt=fmt))


def verify_token(
    token: str,
    public_key: bytes,
    *,
    backend: Optional[SignatureBackend] = None,
    fmt: TokenFormat = DEFAULT_FORMAT,
) -> Dict[str, str]:
    """Blocking form of verify() for code that is not running an event loop."""
    return asyncio.run(verify(token, public_key, backend=backend, fmt=fmt))
