"""
hdkeyring - deterministic key management from one master seed.

Derives a tree of purpose-bound keys, partitions it into spaces addressed by
arbitrary names, and exposes box / secret box encryption and ES256K / EIP-191
signing bound to the derived keys.
"""

from .runtime.errors import *
from .crypto import CurveContext, SECP256K1_CONTEXT, KeyNode, PathSegment, nacl_random, random_nonce
from .keys import *
from .signers import JWTSigner, ManagementWallet, verify_jwt_signature

__version__ = "1.0.0"
