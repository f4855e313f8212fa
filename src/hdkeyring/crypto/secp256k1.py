"""
SECP256K1 operations for the keyring.

All curve work goes through an explicit, immutable CurveContext value instead
of a module-global elliptic-curve object. The default context wraps the
`ecdsa` library's SECP256k1 curve.
"""

from __future__ import annotations
import hashlib
from dataclasses import dataclass, field

from ecdsa import SigningKey, VerifyingKey, SECP256k1, BadSignatureError, MalformedPointError
from ecdsa.curves import Curve
from ecdsa.util import sigencode_string_canonize, sigdecode_string

from ..runtime.errors import InvalidKeyError, ErrorCode


@dataclass(frozen=True)
class CurveContext:
    """
    Elliptic curve context.

    Owns the curve parameters and every encoding or signing operation the
    keyring needs on them.
    """

    curve: Curve = field(default_factory=lambda: SECP256k1)

    @property
    def order(self) -> int:
        """Group order n."""
        return self.curve.order

    @property
    def name(self) -> str:
        return self.curve.name

    def is_valid_private_key(self, private_key: bytes) -> bool:
        """A private key is valid when 0 < k < n."""
        if len(private_key) != self.curve.baselen:
            return False
        k = int.from_bytes(private_key, "big")
        return 0 < k < self.order

    def signing_key(self, private_key: bytes) -> SigningKey:
        """
        Wrap raw private key bytes.

        Raises:
            InvalidKeyError: If the scalar is outside [1, n)
        """
        if not self.is_valid_private_key(private_key):
            raise InvalidKeyError(f"Private key is not a valid {self.name} scalar")
        return SigningKey.from_string(private_key, curve=self.curve)

    def public_key(self, private_key: bytes, compressed: bool = True) -> bytes:
        """
        Compute the public key for a private key.

        Args:
            private_key: 32-byte scalar
            compressed: 33-byte SEC1 compressed form if True, else 65-byte form

        Returns:
            Encoded public point
        """
        vk = self.signing_key(private_key).get_verifying_key()
        return vk.to_string("compressed" if compressed else "uncompressed")

    def _verifying_key(self, public_key: bytes) -> VerifyingKey:
        try:
            return VerifyingKey.from_string(public_key, curve=self.curve)
        except (MalformedPointError, ValueError) as e:
            raise InvalidKeyError(f"Invalid {self.name} public key: {e}",
                                  code=ErrorCode.INVALID_KEY, cause=e)

    def compress(self, public_key: bytes) -> bytes:
        """Re-encode any public key encoding as 33-byte compressed form."""
        return self._verifying_key(public_key).to_string("compressed")

    def decompress(self, public_key: bytes) -> bytes:
        """Re-encode any public key encoding as 65-byte uncompressed form (0x04 prefix)."""
        return self._verifying_key(public_key).to_string("uncompressed")

    def sign_digest(self, private_key: bytes, digest: bytes) -> bytes:
        """
        Deterministic (RFC 6979) ECDSA signature over a 32-byte digest.

        Returns:
            64-byte r || s with low-s normalization
        """
        sk = self.signing_key(private_key)
        return sk.sign_digest_deterministic(
            digest, hashfunc=hashlib.sha256, sigencode=sigencode_string_canonize
        )

    def verify_digest(self, public_key: bytes, signature: bytes, digest: bytes) -> bool:
        """Verify a 64-byte r || s signature over a digest."""
        vk = self._verifying_key(public_key)
        try:
            return vk.verify_digest(signature, digest, sigdecode=sigdecode_string)
        except (BadSignatureError, AssertionError):
            return False

    def __repr__(self) -> str:
        return f"CurveContext({self.name})"


# Default context shared by keyrings that are not given one.
SECP256K1_CONTEXT = CurveContext()


__all__ = [
    "CurveContext",
    "SECP256K1_CONTEXT",
]
