"""
Wire-level encryption envelopes.

Turns messages into base64 EncryptedMessage envelopes and back. Opening an
envelope returns None whenever the data cannot be authenticated, including
when a field is not valid base64 or the nonce has the wrong length.
"""

from __future__ import annotations
import logging
from typing import Optional, Union

from ..crypto.box import (
    NONCE_SIZE, BoxKeyPair, box_open, box_seal, load_public_key, random_nonce,
    secretbox_open, secretbox_seal,
)
from ..runtime.codec import BytesLike, decode_base64, encode_base64, message_bytes
from ..runtime.errors import EncodingError, ErrorCode, InvalidKeyError
from .options import EncryptedMessage

logger = logging.getLogger(__name__)

Cleartext = Union[str, bytes]


def _render(cleartext: Optional[bytes], to_bytes: bool) -> Optional[Cleartext]:
    if cleartext is None:
        return None
    if to_bytes:
        return cleartext
    try:
        return cleartext.decode("utf-8")
    except UnicodeDecodeError as e:
        raise EncodingError("Decrypted message is not UTF-8 text; request bytes instead", cause=e)


def _nonce_or_random(nonce: Optional[bytes]) -> bytes:
    if nonce is None:
        return random_nonce()
    if len(nonce) != NONCE_SIZE:
        raise InvalidKeyError(f"Nonce must be {NONCE_SIZE} bytes, got {len(nonce)}",
                              code=ErrorCode.INVALID_NONCE, details={"length": len(nonce)})
    return bytes(nonce)


def seal_symmetric(message: Union[str, BytesLike], key: bytes,
                   nonce: Optional[bytes] = None) -> EncryptedMessage:
    """
    Secret-box encrypt a message.

    Args:
        message: Text (UTF-8 encoded) or bytes
        key: 32-byte symmetric key
        nonce: 24-byte nonce; random when omitted

    Returns:
        EncryptedMessage with base64 nonce and ciphertext

    Raises:
        InvalidKeyError: If the nonce is not 24 bytes
    """
    nonce = _nonce_or_random(nonce)
    ciphertext = secretbox_seal(message_bytes(message), nonce, key)
    return EncryptedMessage(nonce=encode_base64(nonce), ciphertext=encode_base64(ciphertext))


def open_symmetric(ciphertext: str, nonce: str, key: bytes, to_bytes: bool = False) -> Optional[Cleartext]:
    """Secret-box decrypt base64 fields; None when authentication fails."""
    try:
        raw_ciphertext = decode_base64(ciphertext)
        raw_nonce = decode_base64(nonce)
    except EncodingError:
        logger.debug("secretbox envelope is not valid base64")
        return None
    return _render(secretbox_open(raw_ciphertext, raw_nonce, key), to_bytes)


def seal_asymmetric(message: Union[str, BytesLike], to_public: str,
                    nonce: Optional[bytes] = None) -> EncryptedMessage:
    """
    Box encrypt a message to a recipient with a fresh ephemeral key pair.

    Args:
        message: Text (UTF-8 encoded) or bytes
        to_public: Base64 Curve25519 public key of the recipient
        nonce: 24-byte nonce; random when omitted

    Returns:
        EncryptedMessage with base64 nonce, ephemeral public key and ciphertext

    Raises:
        InvalidKeyError: If the recipient key is not a valid base64 32-byte key
            or the nonce is not 24 bytes
    """
    try:
        recipient = load_public_key(decode_base64(to_public))
    except EncodingError as e:
        raise InvalidKeyError(f"Recipient public key is not valid base64: {e}", cause=e)

    nonce = _nonce_or_random(nonce)
    ephemeral = BoxKeyPair.generate()
    ciphertext = box_seal(message_bytes(message), nonce, recipient, ephemeral.private_key)
    return EncryptedMessage(
        nonce=encode_base64(nonce),
        ephemeral_from=encode_base64(ephemeral.public_key_bytes()),
        ciphertext=encode_base64(ciphertext),
    )


def open_asymmetric(ciphertext: str, from_public: str, nonce: str, key_pair: BoxKeyPair,
                    to_bytes: bool = False) -> Optional[Cleartext]:
    """Box decrypt base64 fields with our key pair; None when authentication fails."""
    try:
        sender = load_public_key(decode_base64(from_public))
        raw_ciphertext = decode_base64(ciphertext)
        raw_nonce = decode_base64(nonce)
    except (EncodingError, InvalidKeyError):
        logger.debug("box envelope fields are malformed")
        return None
    return _render(box_open(raw_ciphertext, raw_nonce, sender, key_pair.private_key), to_bytes)


__all__ = [
    "Cleartext",
    "seal_symmetric",
    "open_symmetric",
    "seal_asymmetric",
    "open_asymmetric",
]
