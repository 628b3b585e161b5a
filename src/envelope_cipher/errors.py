"""
Exception classes for envelope cipher operations.

Every failure mode gets its own subclass so callers can tell a wrong key
(CryptoError) apart from a garbled string (EncodingError).
"""

from __future__ import annotations


class EnvelopeError(Exception):
    """Base exception for all envelope cipher operations."""

    pass


class ConfigurationError(EnvelopeError):
    """Application key is missing, malformed, or the wrong size."""

    pass


class EncodingError(EnvelopeError):
    """Envelope text is not valid base64/JSON or lacks a required field."""

    pass


class ValidationError(EnvelopeError):
    """Decoded nonce or tag does not have the cipher's fixed length."""

    def __init__(self, field: str, expected: int, actual: int) -> None:
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Invalid {field} length. Expected {expected}, got {actual}."
        )


class CryptoError(EnvelopeError):
    """Cryptographic operation failed (encryption, decryption, authentication)."""

    pass


class SerializationError(EnvelopeError):
    """Serialization or deserialization error."""

    pass
