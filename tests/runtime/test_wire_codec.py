"""
Text encoding helper tests.
"""

import pytest

from hdkeyring.runtime.codec import (
    decode_base64, decode_base64url, encode_base64, encode_base64url, ensure_0x,
    hex_to_bytes, message_bytes, strip_0x,
)
from hdkeyring.runtime.errors import EncodingError


def test_hex_prefix_helpers():
    assert ensure_0x("ab") == "0xab"
    assert ensure_0x("0xab") == "0xab"
    assert strip_0x("0xab") == "ab"
    assert strip_0x("ab") == "ab"


def test_hex_to_bytes():
    assert hex_to_bytes("0x0102") == b"\x01\x02"
    assert hex_to_bytes("ff") == b"\xff"
    with pytest.raises(EncodingError):
        hex_to_bytes("0xzz")
    with pytest.raises(EncodingError):
        hex_to_bytes("abc")


def test_base64():
    assert encode_base64(b"\x00\x01\x02") == "AAEC"
    assert decode_base64("AAEC") == b"\x00\x01\x02"
    with pytest.raises(EncodingError):
        decode_base64("not base64!")


def test_base64url_is_unpadded():
    assert encode_base64url(b"\xfb\xff") == "-_8"
    assert decode_base64url("-_8") == b"\xfb\xff"


def test_message_bytes():
    assert message_bytes("é") == b"\xc3\xa9"
    assert message_bytes(bytearray(b"ab")) == b"ab"
    assert message_bytes(memoryview(b"ab")) == b"ab"
