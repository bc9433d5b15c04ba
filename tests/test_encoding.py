import pytest

from licensekey import DecodingError, EncodingError, decode, encode, stringify


def test_encode_preserves_insertion_order():
    data = {"zeta": "1", "alpha": "2", "mid": "3"}
    assert encode(data) == "zeta: 1\nalpha: 2\nmid: 3\n"


def test_encode_empty_mapping():
    assert encode({}) == ""
    assert decode("") == {}


@pytest.mark.parametrize(
    "value, text",
    [
        ("Acme", "Acme"),
        (5, "5"),
        (-12, "-12"),
        (1.5, "1.5"),
        (True, "true"),
        (False, "false"),
        ("", ""),
    ],
)
def test_stringify(value, text):
    assert stringify(value) == text


@pytest.mark.parametrize("value", [None, [1, 2], {"a": 1}, b"raw"])
def test_stringify_rejects_other_types(value):
    with pytest.raises(EncodingError):
        stringify(value)


@pytest.mark.parametrize("key", ["multi\nline", "has: colon-space"])
def test_encode_rejects_ambiguous_key(key):
    with pytest.raises(EncodingError):
        encode({key: "v"})


def test_encode_allows_empty_key():
    assert decode(encode({"": "v"})) == {"": "v"}


def test_encode_rejects_newline_in_value():
    with pytest.raises(EncodingError):
        encode({"note": "line one\nline two"})


def test_encode_rejects_non_string_key_and_non_mapping():
    with pytest.raises(EncodingError):
        encode({1: "one"})
    with pytest.raises(EncodingError):
        encode([("a", "b")])


def test_values_may_contain_separator():
    data = {"url": "http://example.com", "note": "a: b"}
    assert decode(encode(data)) == data


def test_round_trip_stringifies_values():
    data = {"product": "Acme", "seats": 5, "trial": False}
    assert decode(encode(data)) == {"product": "Acme", "seats": "5", "trial": "false"}


def test_encode_is_idempotent():
    data = {"product": "Acme", "seats": 5, "ratio": 0.25}
    once = encode(data)
    assert encode(decode(once)) == once


def test_decode_last_duplicate_wins():
    assert decode("a: 1\nb: 2\na: 3\n") == {"a": "3", "b": "2"}


def test_decode_skips_empty_lines():
    assert decode("a: 1\n\nb: 2") == {"a": "1", "b": "2"}


def test_decode_only_splits_on_newline():
    assert decode("a: 1\x0bb: 2\n") == {"a": "1\x0bb: 2"}


def test_decode_rejects_line_without_separator():
    with pytest.raises(DecodingError):
        decode("product: Acme\nseats 5\n")


@pytest.mark.parametrize(
    "data",
    [{"product": "Ac\ud800me"}, {"pro\udcffduct": "Acme"}],
)
def test_encode_rejects_text_that_is_not_utf8(data):
    with pytest.raises(EncodingError) as exc_info:
        encode(data)
    assert isinstance(exc_info.value.__cause__, UnicodeEncodeError)


def test_decode_rejects_text_that_is_not_utf8():
    with pytest.raises(DecodingError) as exc_info:
        decode("product: Ac\ud800me\n")
    assert isinstance(exc_info.value.__cause__, UnicodeEncodeError)


def test_stringify_ignores_overridden_repr():
    class Ratio(float):
        def __repr__(self):
            return f"Ratio({float(self)})"

    class Seats(int):
        def __repr__(self):
            return "many"

        __str__ = __repr__

    assert stringify(Ratio(1.5)) == "1.5"
    assert stringify(Seats(5)) == "5"
    assert encode({"r": Ratio(1.5), "s": Seats(5)}) == "r: 1.5\ns: 5\n"
