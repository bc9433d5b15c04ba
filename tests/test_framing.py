import pytest

from licensekey import (
    DEFAULT_FORMAT,
    MalformedTokenError,
    SignatureFormatError,
    TokenFormat,
    format_signature,
    frame,
    parse_signature,
    unframe,
)

SIG = bytes(range(40))
SIG_TEXT = format_signature(SIG)


def test_format_signature_wraps_uppercase_hex():
    lines = SIG_TEXT.split("\n")
    assert [len(line) for line in lines] == [32, 32, 16]
    assert SIG_TEXT == SIG_TEXT.upper()
    assert "".join(lines) == SIG.hex().upper()


def test_format_signature_exact_multiple_has_no_trailing_newline():
    text = format_signature(b"\xab" * 16)
    assert text == "AB" * 16


def test_parse_signature_inverts_format():
    assert parse_signature(SIG_TEXT) == SIG


@pytest.mark.parametrize(
    "text",
    [
        "",
        SIG_TEXT.lower(),
        SIG_TEXT[:-1],
        SIG_TEXT.replace("0", "G", 1),
        SIG_TEXT.replace("\n", ""),
        SIG_TEXT + "\n",
    ],
)
def test_parse_signature_rejects_non_canonical(text):
    with pytest.raises(SignatureFormatError):
        parse_signature(text)


def test_frame_layout():
    token = frame("product: Acme\n", "ABCD")
    assert token == (
        "-----BEGIN LICENSE KEY-----\n"
        "product: Acme\n"
        "\n"
        "ABCD\n"
        "-----END LICENSE KEY-----"
    )


def test_unframe_inverts_frame():
    encoded = "product: Acme\nseats: 5\n"
    assert unframe(frame(encoded, SIG_TEXT)) == (encoded, SIG_TEXT)


def test_unframe_empty_data_block():
    token = frame("", SIG_TEXT)
    assert token.startswith(DEFAULT_FORMAT.header + "\n")
    assert unframe(token) == ("", SIG_TEXT)


def test_unframe_ignores_surrounding_whitespace():
    token = frame("a: 1\n", "ABCD")
    assert unframe("\n  " + token + "\n") == ("a: 1\n", "ABCD")


def test_custom_format():
    fmt = TokenFormat(header="<<\n", footer="\n>>", line_width=8)
    token = frame("a: 1\n", format_signature(SIG, fmt.line_width), fmt)
    encoded, sig_text = unframe(token, fmt)
    assert encoded == "a: 1\n"
    assert parse_signature(sig_text, fmt.line_width) == SIG


@pytest.mark.parametrize(
    "token",
    [
        "a: 1\n\nABCD\n-----END LICENSE KEY-----",
        "-----BEGIN LICENSE KEY-----\na: 1\n\nABCD",
        "-----BEGIN LICENSE KEY-----\na: 1\nABCD\n-----END LICENSE KEY-----",
        "-----BEGIN LICENSE KEY-----\na: 1\n\nAB\n\nCD\n-----END LICENSE KEY-----",
        "-----BEGIN LICENSE KEY-----\na: 1\n\n\n-----END LICENSE KEY-----",
        "-----BEGIN LICENSE KEY-----\n-----BEGIN LICENSE KEY-----\na: 1\n\nAB\n-----END LICENSE KEY-----",
        "-----BEGIN LICENSE KEY-----\n-----END LICENSE KEY-----",
        "",
    ],
)
def test_unframe_rejects_malformed(token):
    with pytest.raises(MalformedTokenError):
        unframe(token)
