"""
Authenticated encryption for the keyring, built on PyNaCl.

Box is Curve25519/XSalsa20/Poly1305 public-key encryption, secret box is the
symmetric XSalsa20/Poly1305 construction. Opening never raises on
authentication failure: it returns None, because a wrong key, a wrong nonce
and a tampered ciphertext cannot be told apart.
"""

from __future__ import annotations
import logging
from typing import Optional

import nacl.utils
from nacl.exceptions import CryptoError
from nacl.public import Box, PrivateKey, PublicKey
from nacl.secret import SecretBox

from ..runtime.errors import InvalidKeyError, ErrorCode

logger = logging.getLogger(__name__)

NONCE_SIZE = Box.NONCE_SIZE
SYM_KEY_SIZE = SecretBox.KEY_SIZE
BOX_KEY_SIZE = PrivateKey.SIZE


def nacl_random(length: int) -> bytes:
    """Bytes from the operating system CSPRNG via libsodium."""
    return nacl.utils.random(length)


def random_nonce() -> bytes:
    """Fresh 24-byte nonce."""
    return nacl_random(NONCE_SIZE)


class BoxKeyPair:
    """Curve25519 key pair for box encryption."""

    def __init__(self, private_key: PrivateKey):
        self._private_key = private_key

    @classmethod
    def from_secret_key(cls, secret_key: bytes) -> BoxKeyPair:
        """
        Use 32 bytes directly as the Curve25519 secret key.

        Raises:
            InvalidKeyError: If the secret is not 32 bytes
        """
        if len(secret_key) != BOX_KEY_SIZE:
            raise InvalidKeyError(f"Box secret key must be {BOX_KEY_SIZE} bytes, got {len(secret_key)}")
        return cls(PrivateKey(bytes(secret_key)))

    @classmethod
    def generate(cls) -> BoxKeyPair:
        return cls(PrivateKey.generate())

    @property
    def private_key(self) -> PrivateKey:
        return self._private_key

    @property
    def public_key(self) -> PublicKey:
        return self._private_key.public_key

    @property
    def secret_key(self) -> bytes:
        return bytes(self._private_key)

    def public_key_bytes(self) -> bytes:
        return bytes(self._private_key.public_key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoxKeyPair):
            return NotImplemented
        return self._private_key == other._private_key

    def __hash__(self) -> int:
        return hash(self.public_key_bytes())

    def __repr__(self) -> str:
        return f"BoxKeyPair(public={self.public_key_bytes().hex()[:16]}...)"


def load_public_key(public_key: bytes) -> PublicKey:
    """
    Wrap raw Curve25519 public key bytes.

    Raises:
        InvalidKeyError: If the key is not 32 bytes
    """
    if len(public_key) != PublicKey.SIZE:
        raise InvalidKeyError(f"Box public key must be {PublicKey.SIZE} bytes, got {len(public_key)}",
                              code=ErrorCode.INVALID_KEY)
    return PublicKey(bytes(public_key))


def box_seal(message: bytes, nonce: bytes, recipient: PublicKey, sender: PrivateKey) -> bytes:
    """
    Encrypt and authenticate; returns the ciphertext without the nonce.

    Raises:
        InvalidKeyError: If the recipient key is rejected by libsodium
    """
    try:
        box = Box(sender, recipient)
    except CryptoError as e:
        raise InvalidKeyError(f"Recipient public key rejected: {e}", cause=e)
    return box.encrypt(message, nonce).ciphertext


def box_open(ciphertext: bytes, nonce: bytes, sender: PublicKey, recipient: PrivateKey) -> Optional[bytes]:
    """Verify and decrypt; None when authentication fails."""
    try:
        return Box(recipient, sender).decrypt(ciphertext, nonce)
    except CryptoError:
        logger.debug("box authentication failed")
        return None


def secretbox_seal(message: bytes, nonce: bytes, key: bytes) -> bytes:
    """Symmetric encrypt and authenticate; returns the ciphertext without the nonce."""
    return SecretBox(bytes(key)).encrypt(message, nonce).ciphertext


def secretbox_open(ciphertext: bytes, nonce: bytes, key: bytes) -> Optional[bytes]:
    """Symmetric verify and decrypt; None when authentication fails."""
    try:
        return SecretBox(bytes(key)).decrypt(ciphertext, nonce)
    except CryptoError:
        logger.debug("secretbox authentication failed")
        return None


__all__ = [
    "NONCE_SIZE",
    "SYM_KEY_SIZE",
    "BOX_KEY_SIZE",
    "nacl_random",
    "random_nonce",
    "BoxKeyPair",
    "load_public_key",
    "box_seal",
    "box_open",
    "secretbox_seal",
    "secretbox_open",
]
