from __future__ import annotations

from typing import Any, Dict, Mapping, Type

from .errors import DecodingError, EncodingError

SEPARATOR = ": "


def _require_utf8(text: str, error: Type[Exception], what: str) -> None:
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise error(f"{what} is not valid UTF-8 text") from e


def stringify(value: Any) -> str:
    """
    Convert a license value to its literal text form.

    Strings pass through unchanged, booleans become ``true``/``false`` and
    numbers use their Python literal text.

    Args:
        value: A str, bool, int or float.

    Returns:
        Text form of the value.

    Raises:
        EncodingError: If the value is of any other type.
    """
    if isinstance(value, str):
        return value
    # bool is a subclass of int
    if isinstance(value, bool):
        return "true" if value else "false"
    # subclasses may override __repr__
    if isinstance(value, int):
        return int.__repr__(value)
    if isinstance(value, float):
        return float.__repr__(value)
    raise EncodingError(
        f"Unsupported license value type: {type(value).__name__}"
    )


def encode(data: Mapping[str, Any]) -> str:
    """
    Produce the canonical key-value text for a license data mapping.

    Emits one ``key: value`` line per entry, in insertion order, each
    terminated by a newline. An empty mapping encodes to an empty string.
    This text is both stored in the token and hashed for the signature.

    Args:
        data: Flat mapping of string keys to primitive values.

    Returns:
        Canonical key-value text.

    Raises:
        EncodingError: If data is not a mapping, or a key or value would make
                       the text ambiguous to decode or is not valid UTF-8.
    """
    if not isinstance(data, Mapping):
        raise EncodingError("License data must be a mapping")

    lines = []
    for key, value in data.items():
        if not isinstance(key, str):
            raise EncodingError(f"License keys must be strings, got {key!r}")
        if "\n" in key or SEPARATOR in key:
            raise EncodingError(
                f"License key {key!r} contains a newline or {SEPARATOR!r}"
            )
        _require_utf8(key, EncodingError, f"License key {key!r}")
        text = stringify(value)
        if "\n" in text:
            raise EncodingError(f"Value for {key!r} contains a newline")
        _require_utf8(text, EncodingError, f"Value for {key!r}")
        lines.append(f"{key}{SEPARATOR}{text}\n")
    return "".join(lines)


def decode(text: str) -> Dict[str, str]:
    """
    Parse canonical key-value text back into a mapping.

    Lines are split on ``\\n`` only. Empty lines are skipped, and each other
    line is split on the first ``": "``. A repeated key overwrites the
    earlier value.

    Args:
        text: Key-value text as produced by encode().

    Returns:
        Mapping of keys to their string values, in line order.

    Raises:
        DecodingError: If a non-empty line has no ``": "`` separator
                       or the text is not valid UTF-8.
    """
    _require_utf8(text, DecodingError, "Key-value block")

    data: Dict[str, str] = {}
    for lineno, line in enumerate(text.split("\n"), start=1):
        if not line:
            continue
        key, sep, value = line.partition(SEPARATOR)
        if not sep:
            raise DecodingError(f"Line {lineno} has no {SEPARATOR!r} separator")
        data[key] = value
    return data
