"""Unit tests for digest encodings."""

import pytest

from simplecrypt.core.exceptions import InvalidDigestError, UnsupportedEncodingError
from simplecrypt.security.encoding import (
    check_digest_encoding,
    check_text_encoding,
    decode_digest,
    digest_encodings,
    encode_digest,
)

DATA = b"\x00\xff\x10 simplecrypt \xfb\xef\xfe"


def test_hex_is_lowercase():
    assert encode_digest(b"\xab\xcd", "hex") == "abcd"


def test_base64url_drops_padding():
    text = encode_digest(DATA, "base64url")
    assert "=" not in text
    assert "+" not in text and "/" not in text
    assert decode_digest(text, "base64url") == DATA


def test_latin1_and_binary_agree():
    assert encode_digest(DATA, "latin1") == encode_digest(DATA, "binary")
    assert decode_digest(encode_digest(DATA, "binary"), "binary") == DATA


def test_encoding_names_are_case_insensitive():
    assert check_digest_encoding("HEX") == "hex"


def test_unknown_digest_encoding():
    with pytest.raises(UnsupportedEncodingError, match="ucs2"):
        check_digest_encoding("ucs2")


def test_text_encoding_lookup():
    assert check_text_encoding("utf8") == "utf8"
    with pytest.raises(UnsupportedEncodingError):
        check_text_encoding("no-such-codec")


@pytest.mark.parametrize(
    "text, encoding",
    [("xyz", "hex"), ("abc", "hex"), ("not*base64", "base64"), ("a*b", "base64url"), ("✓", "latin1")],
)
def test_invalid_digest(text, encoding):
    with pytest.raises(InvalidDigestError):
        decode_digest(text, encoding)


def test_digest_encodings_listing():
    assert digest_encodings() == ["base64", "base64url", "binary", "hex", "latin1"]
