"""
Keyring Error Model

This module provides the error handling framework for the keyring core.
Decryption failures are deliberately absent: both decrypt paths return None
instead of raising.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Keyring error codes."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2

    # Seed errors (100-199)
    INVALID_SEED = 100
    INVALID_MNEMONIC = 101

    # Derivation errors (200-299)
    DERIVATION_FAILED = 200
    INVALID_INDEX = 201
    INVALID_PATH = 202

    # Key errors (300-399)
    INVALID_KEY = 300
    INVALID_NONCE = 301

    # Encoding errors (400-499)
    ENCODING_ERROR = 400

    # Misuse (500-599)
    MISUSE = 500
    MANAGEMENT_KEY_UNAVAILABLE = 501


class KeyringError(Exception):
    """
    Base class for all keyring errors.

    Carries a structured code, optional details and the underlying cause.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize a keyring error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result: Dict[str, Any] = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class InvalidSeedError(KeyringError):
    """Construction without a usable seed."""

    def __init__(self, message: str = "Invalid seed", code: ErrorCode = ErrorCode.INVALID_SEED,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class DerivationError(KeyringError):
    """The HD primitive rejected an index or produced an invalid child."""

    def __init__(self, message: str = "Key derivation failed", code: ErrorCode = ErrorCode.DERIVATION_FAILED,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class InvalidKeyError(KeyringError):
    """Malformed key material supplied by a caller."""

    def __init__(self, message: str = "Invalid key", code: ErrorCode = ErrorCode.INVALID_KEY,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class EncodingError(KeyringError):
    """Text encoding or decoding errors."""

    def __init__(self, message: str = "Encoding error", code: ErrorCode = ErrorCode.ENCODING_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class MisuseError(KeyringError):
    """An operation was requested with a combination of arguments that has no meaning."""

    def __init__(self, message: str = "Keyring misuse", code: ErrorCode = ErrorCode.MISUSE,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


__all__ = [
    "ErrorCode",
    "KeyringError",
    "InvalidSeedError",
    "DerivationError",
    "InvalidKeyError",
    "EncodingError",
    "MisuseError",
]
