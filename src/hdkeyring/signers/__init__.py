"""
Signers bound to derived keys: ES256K JWT signing and ledger-style wallets.
"""

from .jwt import ALGORITHM, JWTSigner, verify_jwt_signature
from .eth import ManagementWallet

__all__ = [
    "ALGORITHM",
    "JWTSigner",
    "verify_jwt_signature",
    "ManagementWallet",
]
