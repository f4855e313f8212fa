"""
ES256K signer for JWT / DID claims.

The signer hashes the signing input with SHA-256 and returns the JOSE
signature form: base64url(r || s), 64 bytes before encoding, low-s.
"""

from __future__ import annotations
import logging
from typing import Union

from ..crypto.hash_utils import sha256
from ..crypto.secp256k1 import CurveContext, SECP256K1_CONTEXT
from ..runtime.codec import encode_base64url, decode_base64url, message_bytes
from ..runtime.errors import EncodingError

logger = logging.getLogger(__name__)

ALGORITHM = "ES256K"


class JWTSigner:
    """
    Async signing callable bound to one secp256k1 private key.

    Instances are awaited as ``await signer(data)``.
    """

    algorithm = ALGORITHM

    def __init__(self, private_key: bytes, curve: CurveContext = SECP256K1_CONTEXT):
        """
        Initialize signer.

        Args:
            private_key: 32-byte secp256k1 private key
            curve: Curve context used for signing
        """
        # Fails early on an invalid scalar.
        self._public_key = curve.public_key(private_key, compressed=True)
        self._private_key = private_key
        self._curve = curve

    @property
    def public_key(self) -> bytes:
        """Compressed public key of the signing key."""
        return self._public_key

    def sign(self, data: Union[str, bytes]) -> str:
        """Synchronously sign data; returns base64url(r || s)."""
        digest = sha256(message_bytes(data))
        return encode_base64url(self._curve.sign_digest(self._private_key, digest))

    async def __call__(self, data: Union[str, bytes]) -> str:
        return self.sign(data)

    def __repr__(self) -> str:
        return f"JWTSigner({self.algorithm}, public={self._public_key.hex()[:16]}...)"


def verify_jwt_signature(data: Union[str, bytes], signature: str, public_key: bytes,
                         curve: CurveContext = SECP256K1_CONTEXT) -> bool:
    """
    Verify an ES256K signature produced by JWTSigner.

    Args:
        data: Signed input
        signature: base64url(r || s)
        public_key: Compressed or uncompressed secp256k1 public key

    Returns:
        True if the signature is valid
    """
    try:
        raw = decode_base64url(signature)
    except EncodingError:
        return False
    if len(raw) != 64:
        return False
    return curve.verify_digest(public_key, raw, sha256(message_bytes(data)))


__all__ = ["ALGORITHM", "JWTSigner", "verify_jwt_signature"]
