"""
Auth secret derivation.

An auth secret is a hex recovery secret used as an HD seed on its own. The
wallet key and the encryption key sit at fixed paths under the root store,
at the same sub-indices the root bundle uses for signing and symmetric
encryption. Nothing here touches a Keyring seed.
"""

from __future__ import annotations
from typing import Optional, Union

from ..crypto.hd import DerivationPath, KeyNode, PathSegment
from ..runtime.codec import BytesLike, ensure_0x, hex_to_bytes
from ..runtime.errors import EncodingError, InvalidSeedError
from ..signers.eth import ManagementWallet
from .bundle import SIGNING_INDEX, SYM_ENCRYPTION_INDEX
from .envelope import Cleartext, open_symmetric, seal_symmetric
from .options import EncryptedMessage
from .paths import BASE_SEGMENTS, ROOT_STORE_SEGMENTS

AUTH_PATH_WALLET: DerivationPath = BASE_SEGMENTS + ROOT_STORE_SEGMENTS + (PathSegment(SIGNING_INDEX, True),)
AUTH_PATH_ENCRYPTION: DerivationPath = BASE_SEGMENTS + ROOT_STORE_SEGMENTS + (PathSegment(SYM_ENCRYPTION_INDEX, True),)


def _auth_node(auth_secret: Union[str, BytesLike], path: DerivationPath) -> KeyNode:
    if not auth_secret:
        raise InvalidSeedError("No auth secret supplied")
    if isinstance(auth_secret, str):
        try:
            seed = hex_to_bytes(ensure_0x(auth_secret))
        except EncodingError as e:
            raise InvalidSeedError("Auth secret is not a hex string", cause=e)
    else:
        seed = bytes(auth_secret)
    return KeyNode.from_seed(seed).derive_path(path)


def auth_encryption_key(auth_secret: Union[str, BytesLike]) -> bytes:
    """Symmetric key derived from an auth secret."""
    return _auth_node(auth_secret, AUTH_PATH_ENCRYPTION).private_key_bytes()


def encrypt_with_auth_secret(message: Union[str, BytesLike], auth_secret: Union[str, BytesLike],
                             nonce: Optional[bytes] = None) -> EncryptedMessage:
    """Secret-box encrypt with the auth secret's encryption key."""
    return seal_symmetric(message, auth_encryption_key(auth_secret), nonce)


def decrypt_with_auth_secret(ciphertext: str, nonce: str, auth_secret: Union[str, BytesLike],
                             to_bytes: bool = False) -> Optional[Cleartext]:
    """Secret-box decrypt with the auth secret's encryption key; None on failure."""
    return open_symmetric(ciphertext, nonce, auth_encryption_key(auth_secret), to_bytes)


def wallet_for_auth_secret(auth_secret: Union[str, BytesLike]) -> ManagementWallet:
    """Wallet over the auth secret's wallet key."""
    return ManagementWallet(_auth_node(auth_secret, AUTH_PATH_WALLET).private_key_bytes())


__all__ = [
    "AUTH_PATH_WALLET",
    "AUTH_PATH_ENCRYPTION",
    "auth_encryption_key",
    "encrypt_with_auth_secret",
    "decrypt_with_auth_secret",
    "wallet_for_auth_secret",
]
