from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Tuple

from .errors import MalformedTokenError, SignatureFormatError

_UPPER_HEX = re.compile(r"[0-9A-F]*")


@dataclass(frozen=True)
class TokenFormat:
    """
    Immutable description of the token text layout.

    Attributes:
        header: Literal marker opening every token, including its newline.
        footer: Literal marker closing every token, including its leading newline.
        line_width: Number of hex characters per signature line.
    """

    header: str = "-----BEGIN LICENSE KEY-----\n"
    footer: str = "\n-----END LICENSE KEY-----"
    line_width: int = 32


DEFAULT_FORMAT = TokenFormat()


def format_signature(signature: bytes, line_width: int = DEFAULT_FORMAT.line_width) -> str:
    """
    Render signature bytes as uppercase hex wrapped at line_width characters.

    Args:
        signature: Raw signature bytes.
        line_width: Characters per line; the last line may be shorter.

    Returns:
        Wrapped hex text without a trailing newline.
    """
    text = signature.hex().upper()
    return "\n".join(text[i : i + line_width] for i in range(0, len(text), line_width))


def parse_signature(text: str, line_width: int = DEFAULT_FORMAT.line_width) -> bytes:
    """
    Parse a wrapped hex signature block back to raw bytes.

    Only the exact form produced by format_signature() is accepted, so the
    text and byte forms stay interchangeable.

    Args:
        text: Signature block from a token.
        line_width: Expected characters per line.

    Returns:
        Raw signature bytes.

    Raises:
        SignatureFormatError: If the block is empty, not uppercase hex, of odd
                              length, or wrapped differently.
    """
    hex_text = text.replace("\n", "")
    if not hex_text:
        raise SignatureFormatError("Signature block is empty")
    if not _UPPER_HEX.fullmatch(hex_text):
        raise SignatureFormatError("Signature block is not uppercase hex")
    if len(hex_text) % 2:
        raise SignatureFormatError("Signature block has an odd number of hex digits")

    signature = bytes.fromhex(hex_text)
    if format_signature(signature, line_width) != text:
        raise SignatureFormatError(
            f"Signature block is not wrapped at {line_width} characters"
        )
    return signature


def frame(
    encoded_data: str,
    formatted_signature: str,
    fmt: TokenFormat = DEFAULT_FORMAT,
) -> str:
    """Wrap the key-value block and signature block in the token markers."""
    return fmt.header + encoded_data + "\n" + formatted_signature + fmt.footer


def unframe(token: str, fmt: TokenFormat = DEFAULT_FORMAT) -> Tuple[str, str]:
    """
    Split a token into its key-value block and signature block.

    Expected layout::

        <header><key: value lines>\\n<signature lines><footer>

    The key-value block keeps the trailing newline of its last line, so it is
    byte-identical to what encode() produced. It is empty for a token issued
    over an empty mapping.

    Args:
        token: Token text. Surrounding whitespace is ignored.
        fmt: Token layout.

    Returns:
        Tuple of (encoded_data, formatted_signature).

    Raises:
        MalformedTokenError: If the markers are missing or repeated, or the body
                             does not split into exactly two blocks.
    """
    token = token.strip()

    if not token.startswith(fmt.header) or token.count(fmt.header) != 1:
        raise MalformedTokenError("Token must begin with exactly one header")
    if not token.endswith(fmt.footer) or token.count(fmt.footer) != 1:
        raise MalformedTokenError("Token must end with exactly one footer")
    if len(token) < len(fmt.header) + len(fmt.footer):
        raise MalformedTokenError("Token header and footer overlap")

    body = token[len(fmt.header) : len(token) - len(fmt.footer)]

    # A leading newline lets an empty key-value block split like any other.
    parts = ("\n" + body).split("\n\n")
    if len(parts) != 2:
        raise MalformedTokenError(
            f"Token body must contain exactly two blocks, found {len(parts)}"
        )

    data_part, signature_part = parts
    if not signature_part:
        raise MalformedTokenError("Token missing signature block")

    encoded_data = data_part[1:] + "\n" if data_part else ""
    return encoded_data, signature_part
