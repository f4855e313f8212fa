"""
Purpose-bound key bundles.

A bundle holds the keys for one identity (the root) or one space, each taken
from a distinct hardened child of the bundle's node.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

from ..crypto.box import BoxKeyPair
from ..crypto.hd import KeyNode

SIGNING_INDEX = 0
MANAGEMENT_INDEX = 1
ASYM_ENCRYPTION_INDEX = 2
SYM_ENCRYPTION_INDEX = 3


@dataclass(frozen=True)
class KeyBundle:
    """
    Keys derived from one KeyNode.

    management_key is only ever set on the root bundle.
    """

    node: KeyNode = field(repr=False)
    signing_key: KeyNode = field(repr=False)
    asym_encryption_key: BoxKeyPair = field(repr=False)
    sym_encryption_key: bytes = field(repr=False)
    management_key: Optional[KeyNode] = field(default=None, repr=False)

    @property
    def has_management_key(self) -> bool:
        return self.management_key is not None

    def __repr__(self) -> str:
        return (f"KeyBundle(path={self.node.path_string()!r}, "
                f"signing={self.signing_key.public_key.hex()[:16]}..., "
                f"management={self.has_management_key})")


def derive_bundle(node: KeyNode, include_management: bool) -> KeyBundle:
    """
    Derive the purpose keys of a node.

    Args:
        node: Root store node or space node
        include_management: True only for the root bundle

    Returns:
        KeyBundle
    """
    management_key = node.derive_child(MANAGEMENT_INDEX, hardened=True) if include_management else None
    asym_secret = node.derive_child(ASYM_ENCRYPTION_INDEX, hardened=True).private_key_bytes()
    return KeyBundle(
        node=node,
        signing_key=node.derive_child(SIGNING_INDEX, hardened=True),
        asym_encryption_key=BoxKeyPair.from_secret_key(asym_secret),
        sym_encryption_key=node.derive_child(SYM_ENCRYPTION_INDEX, hardened=True).private_key_bytes(),
        management_key=management_key,
    )


__all__ = [
    "SIGNING_INDEX",
    "MANAGEMENT_INDEX",
    "ASYM_ENCRYPTION_INDEX",
    "SYM_ENCRYPTION_INDEX",
    "KeyBundle",
    "derive_bundle",
]
