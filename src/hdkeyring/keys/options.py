"""
Option and result models for keyring operations.

Each operation takes one explicit options model listing exactly the options
it recognizes. Results serialize to the camelCase wire form with to_dict().
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from pydantic import BaseModel, Field, field_validator

from ..crypto.box import NONCE_SIZE


def _check_space(value: Optional[str]) -> Optional[str]:
    if value is not None and value == "":
        raise ValueError("space must be a non-empty string or None for the root bundle")
    return value


class PublicKeyOptions(BaseModel):
    """
    Options for get_public_keys.

    Also accepts the camelCase wire name mgmtPub.
    """
    space: Optional[str] = Field(default=None, description="Space name; None selects the root bundle")
    uncompressed: bool = Field(default=False, description="Return the signing key as an uncompressed point")
    mgmt_pub: bool = Field(default=False, alias="mgmtPub",
                           description="Return the raw management public key instead of its address")

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator("space")
    @classmethod
    def validate_space(cls, v: Optional[str]) -> Optional[str]:
        """Reject the empty string; None selects the root bundle."""
        return _check_space(v)


class AsymEncryptOptions(BaseModel):
    """Options for asym_encrypt. The ephemeral key pair is always fresh."""
    nonce: Optional[bytes] = Field(default=None, description="24-byte nonce; random when omitted")

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator("nonce")
    @classmethod
    def validate_nonce(cls, value: Optional[bytes]) -> Optional[bytes]:
        if value is not None and len(value) != NONCE_SIZE:
            raise ValueError(f"nonce must be {NONCE_SIZE} bytes, got {len(value)}")
        return value


class SymEncryptOptions(AsymEncryptOptions):
    """Options for sym_encrypt."""
    space: Optional[str] = Field(default=None, description="Space whose symmetric key is used")

    @field_validator("space")
    @classmethod
    def validate_space(cls, v: Optional[str]) -> Optional[str]:
        return _check_space(v)


class DecryptOptions(BaseModel):
    """Options for asym_decrypt and sym_decrypt."""
    space: Optional[str] = Field(default=None, description="Space whose key is used")
    to_bytes: bool = Field(default=False, alias="toBuffer",
                           description="Return raw bytes instead of UTF-8 text")

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator("space")
    @classmethod
    def validate_space(cls, v: Optional[str]) -> Optional[str]:
        return _check_space(v)


class PublicKeys(BaseModel):
    """Public key export of one bundle."""
    signing_key: str = Field(alias="signingKey", description="Hex secp256k1 public key")
    management_key: Optional[str] = Field(default=None, alias="managementKey",
                                          description="Address or hex public key; root bundle only")
    asym_encryption_key: str = Field(alias="asymEncryptionKey", description="Base64 Curve25519 public key")

    model_config = {"populate_by_name": True, "frozen": True}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to wire dictionary."""
        return {
            "signingKey": self.signing_key,
            "managementKey": self.management_key,
            "asymEncryptionKey": self.asym_encryption_key,
        }


class EncryptedMessage(BaseModel):
    """Encrypted payload with base64 fields."""
    nonce: str
    ciphertext: str
    ephemeral_from: Optional[str] = Field(default=None, alias="ephemeralFrom",
                                          description="Base64 ephemeral public key; box encryption only")

    model_config = {"populate_by_name": True, "frozen": True}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to wire dictionary."""
        result: Dict[str, Any] = {"nonce": self.nonce, "ciphertext": self.ciphertext}
        if self.ephemeral_from is not None:
            result["ephemeralFrom"] = self.ephemeral_from
        return result


__all__ = [
    "PublicKeyOptions",
    "AsymEncryptOptions",
    "SymEncryptOptions",
    "DecryptOptions",
    "PublicKeys",
    "EncryptedMessage",
]
