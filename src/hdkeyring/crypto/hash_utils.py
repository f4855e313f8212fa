"""
Hash utilities for the keyring.
"""

import hashlib
from typing import Union


def sha256(data: Union[str, bytes]) -> bytes:
    """
    SHA-256 digest.

    Strings are hashed as their UTF-8 encoding.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.sha256(data).digest()


def sha256_hex(data: Union[str, bytes]) -> str:
    """SHA-256 digest as lowercase hex."""
    return sha256(data).hex()


__all__ = ["sha256", "sha256_hex"]
