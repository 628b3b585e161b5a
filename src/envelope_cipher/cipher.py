"""
Envelope cipher service.

This module provides:
- EnvelopeCipher: Encrypt values or strings into envelope text and back

Flow:
- encrypt: serialize (optional) -> resolve key -> AES-256-GCM -> envelope text
- decrypt: parse envelope -> validate lengths -> resolve key -> AES-256-GCM
  -> deserialize (optional)

The service holds no per-call state, so one instance can be shared freely
between threads.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Union

from .config import Settings
from .crypto import AesGcmCipher
from .envelope import Envelope
from .errors import SerializationError
from .keys import KeyResolver
from .serializers import Codec, JsonCodec

logger = logging.getLogger("envelope_cipher.cipher")


class EnvelopeCipher:
    """
    Authenticated encryption of single in-memory values.

    The application key comes from an explicit Settings instance (or a raw
    ``base64:`` key string). It is resolved for every call and wiped as soon
    as the call finishes.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        key: Optional[str] = None,
        codec: Optional[Codec] = None,
        cache_key: bool = False,
    ) -> None:
        """
        Initialize EnvelopeCipher.

        Args:
            settings: Configuration holding the application key
            key: Raw ``base64:`` key string, used instead of settings
            codec: Value codec for the serializing variant (JSON by default)
            cache_key: Keep the decoded key between calls
        """
        if settings is not None and key is not None:
            raise ValueError("Pass either settings or key, not both")
        if settings is None:
            settings = Settings(app_key=key)

        self._resolver = KeyResolver(settings, cache=cache_key)
        self._codec = codec if codec is not None else JsonCodec()

    @classmethod
    def from_env(cls, env_file: Optional[str] = None, **kwargs: Any) -> EnvelopeCipher:
        """Create a cipher keyed from APP_KEY (and an optional .env file)."""
        return cls(Settings.from_env(env_file), **kwargs)

    # =========================================================================
    # Generic variant
    # =========================================================================

    def encrypt_value(
        self,
        value: Any,
        serialize: bool = True,
        *,
        associated_data: Optional[bytes] = None,
    ) -> str:
        """
        Encrypt a value into envelope text.

        Args:
            value: Value to encrypt; must be str or bytes when not serializing
            serialize: Run the value through the codec first
            associated_data: Optional AAD; the same bytes must be supplied to
                decrypt_value. Not stored in the envelope.

        Returns:
            Envelope text

        Raises:
            SerializationError: If the value cannot be turned into bytes
            ConfigurationError: If the application key is unusable
            CryptoError: If encryption fails
        """
        plaintext = self._to_bytes(value, serialize)

        with self._resolver.resolve() as key:
            sealed = AesGcmCipher.encrypt(key, plaintext, associated_data)

        text = Envelope.from_sealed(sealed).to_text()
        logger.debug("Encrypted %d plaintext bytes into %d-char envelope", len(plaintext), len(text))
        return text

    def decrypt_value(
        self,
        ciphertext: Union[str, bytes],
        deserialize: bool = True,
        *,
        associated_data: Optional[bytes] = None,
    ) -> Any:
        """
        Decrypt envelope text.

        Args:
            ciphertext: Envelope text produced by encrypt_value
            deserialize: Run the plaintext through the codec
            associated_data: AAD supplied at encryption time, if any

        Returns:
            The deserialized value, or the plaintext as str

        Raises:
            EncodingError: If the envelope is not valid base64/JSON or lacks
                a field
            ValidationError: If the nonce or tag length is wrong
            ConfigurationError: If the application key is unusable
            CryptoError: If authentication fails (tampering or wrong key)
            SerializationError: If the plaintext cannot be decoded
        """
        sealed = Envelope.from_text(ciphertext).to_sealed()

        with self._resolver.resolve() as key:
            plaintext = AesGcmCipher.decrypt(key, sealed, associated_data)

        if deserialize:
            return self._codec.deserialize(plaintext)

        try:
            return plaintext.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SerializationError("Decrypted data is not valid UTF-8 text.") from e

    # =========================================================================
    # String variant
    # =========================================================================

    def encrypt_string(self, value: str) -> str:
        """Encrypt a string without serializing it."""
        return self.encrypt_value(value, serialize=False)

    def decrypt_string(self, ciphertext: Union[str, bytes]) -> str:
        """Decrypt envelope text into the original string."""
        return self.decrypt_value(ciphertext, deserialize=False)

    encrypt = encrypt_value
    decrypt = decrypt_value

    def _to_bytes(self, value: Any, serialize: bool) -> bytes:
        if serialize:
            return self._codec.serialize(value)
        if isinstance(value, str):
            return value.encode("utf-8")
        if isinstance(value, (bytes, bytearray)):
            return bytes(value)
        raise SerializationError(
            f"Cannot encrypt {type(value).__name__} without serialization; pass str or bytes"
        )
