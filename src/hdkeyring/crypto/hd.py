"""
Hierarchical deterministic (BIP32) key derivation.

Derivation itself is done by eth-account's BIP32 implementation; this module
adapts it to path segments and immutable key nodes. A node keeps its seed
and path, and its private key is derived from the master on first use.
Only private derivation is needed: every node the keyring builds is reached
from the seed.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from functools import cached_property
from typing import Iterable, NamedTuple, Tuple, Union

from eth_account.hdaccount import key_from_seed

from .secp256k1 import CurveContext, SECP256K1_CONTEXT
from ..runtime.errors import DerivationError, InvalidSeedError, ErrorCode

HARDENED_OFFSET = 0x80000000
MIN_SEED_BYTES = 16
MAX_SEED_BYTES = 64


class PathSegment(NamedTuple):
    """One step of a derivation path."""
    index: int
    hardened: bool = True

    def __str__(self) -> str:
        return f"{self.index}'" if self.hardened else str(self.index)


DerivationPath = Tuple[PathSegment, ...]
PathLike = Union[str, Iterable[PathSegment]]


def parse_path(path: str) -> DerivationPath:
    """
    Parse a textual path such as "m/44'/60'/0'/0" or "0'/1".

    A leading "m" is accepted and ignored. Hardened segments are marked with
    a trailing ', h or H.

    Raises:
        DerivationError: If a segment is not a valid index
    """
    parts = [p for p in path.strip().split("/") if p != ""]
    if parts and parts[0] in ("m", "M"):
        parts = parts[1:]

    segments = []
    for part in parts:
        hardened = part.endswith(("'", "h", "H"))
        digits = part.rstrip("'hH")
        if not digits.isdigit():
            raise DerivationError(f"Invalid path segment: {part!r}", code=ErrorCode.INVALID_PATH,
                                  details={"path": path})
        segments.append(PathSegment(int(digits), hardened))
    return tuple(segments)


def format_path(segments: Iterable[PathSegment], absolute: bool = False) -> str:
    """Render segments back into the textual form."""
    body = "/".join(str(s) for s in segments)
    if absolute:
        return "m/" + body if body else "m"
    return body


def _as_segments(path: PathLike) -> DerivationPath:
    if isinstance(path, str):
        return parse_path(path)
    return tuple(PathSegment(*s) for s in path)


@dataclass(frozen=True)
class KeyNode:
    """
    A node in the derivation tree.

    Identified by the seed and the path that produced it. Immutable;
    children are derived with derive_child / derive_path.
    """

    seed: bytes = field(repr=False)
    path: DerivationPath = ()
    curve: CurveContext = field(default=SECP256K1_CONTEXT, compare=False)

    @classmethod
    def from_seed(cls, seed: bytes, curve: CurveContext = SECP256K1_CONTEXT) -> KeyNode:
        """
        Create the master node from a seed.

        Args:
            seed: 16 to 64 bytes of seed material
            curve: Curve context for public key work

        Raises:
            InvalidSeedError: If the seed length is out of range
        """
        if not MIN_SEED_BYTES <= len(seed) <= MAX_SEED_BYTES:
            raise InvalidSeedError(
                f"Seed must be between {MIN_SEED_BYTES} and {MAX_SEED_BYTES} bytes, got {len(seed)}"
            )
        return cls(bytes(seed), (), curve)

    @cached_property
    def private_key(self) -> bytes:
        """32-byte private scalar."""
        try:
            return bytes(key_from_seed(self.seed, self.path_string()))
        except ValueError as e:
            raise DerivationError(f"Cannot derive {self.path_string()}", cause=e)

    @cached_property
    def public_key(self) -> bytes:
        """Compressed 33-byte public key."""
        return self.curve.public_key(self.private_key, compressed=True)

    @property
    def uncompressed_public_key(self) -> bytes:
        """Uncompressed 65-byte public key."""
        return self.curve.decompress(self.public_key)

    @property
    def depth(self) -> int:
        return len(self.path)

    def private_key_bytes(self) -> bytes:
        return self.private_key

    def public_key_bytes(self, compressed: bool = True) -> bytes:
        return self.public_key if compressed else self.uncompressed_public_key

    def derive_child(self, index: int, hardened: bool = True) -> KeyNode:
        """
        Derive a child node.

        Args:
            index: Child index in [0, 2^31)
            hardened: Use hardened (private-parent) derivation

        Returns:
            Child KeyNode

        Raises:
            DerivationError: If the index is out of range
        """
        if not 0 <= index < HARDENED_OFFSET:
            raise DerivationError(f"Child index out of range: {index}", code=ErrorCode.INVALID_INDEX,
                                  details={"index": index})
        return KeyNode(self.seed, self.path + (PathSegment(index, hardened),), self.curve)

    def derive_path(self, path: PathLike) -> KeyNode:
        """Fold derive_child over a path (string or PathSegment sequence)."""
        node = self
        for segment in _as_segments(path):
            node = node.derive_child(segment.index, segment.hardened)
        return node

    def path_string(self) -> str:
        return format_path(self.path, absolute=True)

    def __str__(self) -> str:
        return f"KeyNode({self.path_string()}, public={self.public_key.hex()[:16]}...)"


__all__ = [
    "HARDENED_OFFSET",
    "PathSegment",
    "DerivationPath",
    "PathLike",
    "parse_path",
    "format_path",
    "KeyNode",
]
