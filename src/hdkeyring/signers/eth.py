"""
Ledger-style wallet over a secp256k1 key.

Wraps eth_account for the checksum address and EIP-191 personal message
signatures (the "\\x19Ethereum Signed Message:\\n" prefix).
Never log the private key.
"""

from __future__ import annotations
from typing import Union

from eth_account import Account
from eth_account.messages import encode_defunct
from eth_account.signers.local import LocalAccount

from ..crypto.secp256k1 import CurveContext, SECP256K1_CONTEXT


class ManagementWallet:
    """Wallet bound to one private key."""

    def __init__(self, private_key: bytes, curve: CurveContext = SECP256K1_CONTEXT):
        """
        Initialize wallet.

        Args:
            private_key: 32-byte secp256k1 private key
        """
        self._account: LocalAccount = Account.from_key(private_key)
        self._public_key = curve.public_key(private_key, compressed=True)

    @property
    def address(self) -> str:
        """EIP-55 checksum address."""
        return self._account.address

    @property
    def public_key(self) -> bytes:
        """Compressed public key."""
        return self._public_key

    def sign_message(self, message: Union[str, bytes]) -> str:
        """
        EIP-191 personal signature.

        Args:
            message: Text (UTF-8) or raw bytes

        Returns:
            0x-prefixed hex of r || s || v, v in {27, 28}
        """
        if isinstance(message, str):
            signable = encode_defunct(text=message)
        else:
            signable = encode_defunct(primitive=bytes(message))
        signed = self._account.sign_message(signable)
        return "0x" + bytes(signed.signature).hex()

    async def sign_message_async(self, message: Union[str, bytes]) -> str:
        return self.sign_message(message)

    def __repr__(self) -> str:
        return f"ManagementWallet({self.address})"


__all__ = ["ManagementWallet"]
