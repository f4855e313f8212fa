"""
Keyring Encoding/Decoding

Text encodings used on the wire: base64 for box material, hex for
secp256k1 material and seeds, base64url for JOSE signatures.
"""

from __future__ import annotations
import base64
import binascii
from typing import Union

from .errors import EncodingError

BytesLike = Union[bytes, bytearray, memoryview]


def ensure_0x(value: str) -> str:
    """Prefix a hex string with 0x if it is not already."""
    return value if value.startswith("0x") else "0x" + value


def strip_0x(value: str) -> str:
    """Remove a leading 0x from a hex string."""
    return value[2:] if value.startswith("0x") else value


def hex_to_bytes(value: str) -> bytes:
    """
    Decode a hex string with or without 0x prefix.

    Args:
        value: Hex string

    Returns:
        Decoded bytes

    Raises:
        EncodingError: If the string is not valid hex
    """
    try:
        return bytes.fromhex(strip_0x(value))
    except ValueError as e:
        raise EncodingError(f"Invalid hex string: {e}", cause=e)


def encode_base64(data: BytesLike) -> str:
    """Standard base64 with padding."""
    return base64.b64encode(bytes(data)).decode("ascii")


def decode_base64(text: str) -> bytes:
    """
    Decode standard base64.

    Raises:
        EncodingError: If the text is not valid base64
    """
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise EncodingError(f"Invalid base64 string: {e}", cause=e)


def encode_base64url(data: BytesLike) -> str:
    """Unpadded base64url, as used by JOSE."""
    return base64.urlsafe_b64encode(bytes(data)).rstrip(b"=").decode("ascii")


def decode_base64url(text: str) -> bytes:
    """Decode unpadded base64url."""
    padding = "=" * (-len(text) % 4)
    try:
        return base64.urlsafe_b64decode(text + padding)
    except (binascii.Error, ValueError) as e:
        raise EncodingError(f"Invalid base64url string: {e}", cause=e)


def message_bytes(message: Union[str, BytesLike]) -> bytes:
    """UTF-8 encode strings, pass bytes through."""
    if isinstance(message, str):
        return message.encode("utf-8")
    return bytes(message)


__all__ = [
    "BytesLike",
    "ensure_0x",
    "strip_0x",
    "hex_to_bytes",
    "encode_base64",
    "decode_base64",
    "encode_base64url",
    "decode_base64url",
    "message_bytes",
]
