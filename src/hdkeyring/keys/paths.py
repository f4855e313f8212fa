"""
Space name to derivation path encoding.

A space name is hashed with a domain-separation suffix, and the digest bits
are regrouped into 31-bit hardened indices. The depth of the resulting path
depends only on the digest length, never on the length of the name.
"""

from __future__ import annotations
from typing import List

from ..crypto.hash_utils import sha256_hex
from ..crypto.hd import DerivationPath, PathSegment, parse_path

BASE_PATH = "m/51073068'/0'"
ROOT_STORE_PATH = "0'/0'/0'/0'/0'/0'/0'/0'"
SPACE_SUFFIX = ".3box"

HEX_CHUNK = 12
BIT_WIDTH = 47
INDEX_BITS = 31

BASE_SEGMENTS: DerivationPath = parse_path(BASE_PATH)
ROOT_STORE_SEGMENTS: DerivationPath = parse_path(ROOT_STORE_PATH)


def _chunks(text: str, size: int) -> List[str]:
    return [text[i:i + size] for i in range(0, len(text), size)]


def digest_to_path(digest: str) -> DerivationPath:
    """
    Repack a hex digest into hardened indices.

    12-hex-char chunks, each rendered as binary left-padded to 47 bits, all
    concatenated and cut into 31-bit chunks (the last may be shorter), each
    chunk one hardened index.
    """
    bits = "".join(format(int(chunk, 16), f"0{BIT_WIDTH}b") for chunk in _chunks(digest, HEX_CHUNK))
    return tuple(PathSegment(int(chunk, 2), True) for chunk in _chunks(bits, INDEX_BITS))


def encode_space(space: str) -> DerivationPath:
    """
    Map a space name to its hardened path below the base node.

    The path is digest_to_path of sha256(space + ".3box") as hex.

    Args:
        space: Non-empty space name

    Returns:
        Tuple of hardened PathSegments
    """
    if not space:
        raise ValueError("space name must be a non-empty string")
    return digest_to_path(sha256_hex(space + SPACE_SUFFIX))


def space_path(space: str) -> DerivationPath:
    """Full absolute path of a space node."""
    return BASE_SEGMENTS + encode_space(space)


def root_path() -> DerivationPath:
    """Full absolute path of the root store node."""
    return BASE_SEGMENTS + ROOT_STORE_SEGMENTS


__all__ = [
    "BASE_PATH",
    "ROOT_STORE_PATH",
    "SPACE_SUFFIX",
    "digest_to_path",
    "encode_space",
    "space_path",
    "root_path",
]
