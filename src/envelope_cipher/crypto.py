"""
Cryptographic primitives for the AES-256-GCM envelope.

This module provides:
- SecureKey: Key wrapper with explicit and best-effort zeroization
- SealedData: Nonce, ciphertext and detached authentication tag
- AesGcmCipher: AES-256-GCM encryption/decryption operations
"""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from typing import Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .errors import ConfigurationError, CryptoError, ValidationError

logger = logging.getLogger("envelope_cipher.crypto")

# Cryptographic constants
CIPHER: str = "aes-256-gcm"
AES_256_KEY_SIZE: int = 32  # 256 bits
NONCE_SIZE: int = 12  # 96 bits (standard for AES-GCM)
TAG_SIZE: int = 16  # 128 bits (authentication tag)


class SecureKey:
    """
    Secure key wrapper with memory cleanup.

    Uses bytearray internally so the key can be zeroed in place. Use it as a
    context manager to wipe the key as soon as the operation is done;
    __del__ is only a best-effort fallback since the garbage collector gives
    no timing guarantees.
    """

    __slots__ = ("_bytes",)

    def __init__(self, key_bytes: bytes | bytearray) -> None:
        if not isinstance(key_bytes, (bytes, bytearray)):
            raise ConfigurationError("Key must be bytes or bytearray")
        self._bytes = bytearray(key_bytes)

    @classmethod
    def generate(cls) -> SecureKey:
        """Generate a cryptographically secure random 32-byte key."""
        return cls(secrets.token_bytes(AES_256_KEY_SIZE))

    def as_bytes(self) -> bytes:
        """Return key as immutable bytes."""
        return bytes(self._bytes)

    def wipe(self) -> None:
        """Overwrite the key material with zeros."""
        for i in range(len(self._bytes)):
            self._bytes[i] = 0

    def __len__(self) -> int:
        return len(self._bytes)

    def __repr__(self) -> str:
        """Redacted representation to prevent accidental key disclosure."""
        return "SecureKey([REDACTED])"

    def __enter__(self) -> SecureKey:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.wipe()

    def __del__(self) -> None:
        if hasattr(self, "_bytes"):
            self.wipe()


@dataclass(frozen=True)
class SealedData:
    """
    Output of one AES-GCM encryption.

    The tag is kept apart from the ciphertext because the envelope format
    carries it as its own field.
    """

    nonce: bytes  # 12 bytes
    ciphertext: bytes
    tag: bytes  # 16 bytes


def _check_key(key: SecureKey) -> None:
    if len(key) != AES_256_KEY_SIZE:
        raise ConfigurationError(
            f"Invalid application key length: expected {AES_256_KEY_SIZE} bytes, got {len(key)}"
        )


class AesGcmCipher:
    """
    AES-256-GCM authenticated encryption.

    Provides static methods for encryption and decryption with optional
    Additional Authenticated Data (AAD).
    """

    @staticmethod
    def encrypt(
        key: SecureKey,
        plaintext: bytes,
        aad: Optional[bytes] = None,
    ) -> SealedData:
        """
        Encrypt plaintext with AES-256-GCM under a fresh random nonce.

        Args:
            key: 32-byte encryption key
            plaintext: Data to encrypt
            aad: Optional Additional Authenticated Data

        Returns:
            SealedData with nonce, ciphertext and tag

        Raises:
            ConfigurationError: If the key size is invalid
            CryptoError: If encryption fails
        """
        _check_key(key)

        nonce = generate_random_bytes(NONCE_SIZE)
        aesgcm = AESGCM(key.as_bytes())

        try:
            output = aesgcm.encrypt(nonce, plaintext, aad)
        except Exception as e:
            raise CryptoError("Failed to encrypt data.") from e

        return SealedData(
            nonce=nonce,
            ciphertext=output[:-TAG_SIZE],
            tag=output[-TAG_SIZE:],
        )

    @staticmethod
    def decrypt(
        key: SecureKey,
        sealed: SealedData,
        aad: Optional[bytes] = None,
    ) -> bytes:
        """
        Decrypt and authenticate with AES-256-GCM.

        Lengths are checked before the cipher is invoked so malformed input
        is rejected with a precise error instead of reaching the cipher.

        Args:
            key: 32-byte decryption key
            sealed: SealedData with nonce, ciphertext and tag
            aad: Optional Additional Authenticated Data (must match encryption)

        Returns:
            Decrypted plaintext bytes

        Raises:
            ConfigurationError: If the key size is invalid
            ValidationError: If the nonce or tag size is invalid
            CryptoError: If authentication fails
        """
        _check_key(key)

        if len(sealed.nonce) != NONCE_SIZE:
            raise ValidationError("IV", NONCE_SIZE, len(sealed.nonce))
        if len(sealed.tag) != TAG_SIZE:
            raise ValidationError("tag", TAG_SIZE, len(sealed.tag))

        aesgcm = AESGCM(key.as_bytes())

        try:
            return aesgcm.decrypt(sealed.nonce, sealed.ciphertext + sealed.tag, aad)
        except InvalidTag:
            # Generic error to prevent oracle attacks
            logger.warning("Envelope authentication failed")
            raise CryptoError("Failed to decrypt data.") from None
        except Exception as e:
            raise CryptoError("Failed to decrypt data.") from e


def generate_random_bytes(length: int) -> bytes:
    """
    Generate cryptographically secure random bytes.

    Args:
        length: Number of bytes to generate

    Returns:
        Random bytes of specified length
    """
    return secrets.token_bytes(length)


def random_byte_string(length: int = 16) -> str:
    """Return a random hexadecimal string exactly ``length`` characters long."""
    # Two hex characters per byte; round up and trim for odd lengths.
    return secrets.token_bytes((length + 1) // 2).hex()[:length]
