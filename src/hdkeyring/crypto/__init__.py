"""
Cryptographic primitives for the keyring.

Provides the secp256k1 curve context, BIP32 key nodes, hashing and NaCl
box / secret box encryption.
"""

from .secp256k1 import CurveContext, SECP256K1_CONTEXT
from .hd import HARDENED_OFFSET, PathSegment, DerivationPath, KeyNode, parse_path, format_path
from .hash_utils import sha256, sha256_hex
from .box import (
    NONCE_SIZE, BoxKeyPair, nacl_random, random_nonce, load_public_key,
    box_seal, box_open, secretbox_seal, secretbox_open,
)

__all__ = [
    "CurveContext",
    "SECP256K1_CONTEXT",
    "HARDENED_OFFSET",
    "PathSegment",
    "DerivationPath",
    "KeyNode",
    "parse_path",
    "format_path",
    "sha256",
    "sha256_hex",
    "NONCE_SIZE",
    "BoxKeyPair",
    "nacl_random",
    "random_nonce",
    "load_public_key",
    "box_seal",
    "box_open",
    "secretbox_seal",
    "secretbox_open",
]
