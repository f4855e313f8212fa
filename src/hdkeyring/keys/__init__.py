"""
Key derivation and keyring for hdkeyring.

Provides the space path encoder, key bundles, the Keyring core and the
seed-independent auth secret derivation.
"""

from .paths import BASE_PATH, ROOT_STORE_PATH, SPACE_SUFFIX, encode_space, space_path, root_path
from .bundle import KeyBundle, derive_bundle
from .options import (
    PublicKeyOptions, AsymEncryptOptions, SymEncryptOptions, DecryptOptions,
    PublicKeys, EncryptedMessage,
)
from .keyring import Keyring, Seed, seed_to_bytes
from .auth_secret import (
    AUTH_PATH_WALLET, AUTH_PATH_ENCRYPTION,
    encrypt_with_auth_secret, decrypt_with_auth_secret, wallet_for_auth_secret,
)

__all__ = [
    "BASE_PATH",
    "ROOT_STORE_PATH",
    "SPACE_SUFFIX",
    "encode_space",
    "space_path",
    "root_path",
    "KeyBundle",
    "derive_bundle",
    "PublicKeyOptions",
    "AsymEncryptOptions",
    "SymEncryptOptions",
    "DecryptOptions",
    "PublicKeys",
    "EncryptedMessage",
    "Keyring",
    "Seed",
    "seed_to_bytes",
    "AUTH_PATH_WALLET",
    "AUTH_PATH_ENCRYPTION",
    "encrypt_with_auth_secret",
    "decrypt_with_auth_secret",
    "wallet_for_auth_secret",
]
