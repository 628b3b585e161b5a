"""
Application key resolution.

The key is configured as ``base64:<base64 of 32 random bytes>``. Resolution
only checks the format; the length is checked by the cipher at the point of
use so a wrong-size key surfaces as a ConfigurationError there.
"""

from __future__ import annotations

import base64
import binascii
import logging
import threading
from typing import Optional

from .config import Settings
from .crypto import AES_256_KEY_SIZE, SecureKey, generate_random_bytes
from .errors import ConfigurationError

logger = logging.getLogger("envelope_cipher.keys")

KEY_PREFIX = "base64:"


def resolve_key(app_key: Optional[str], env_var: str = "APP_KEY") -> SecureKey:
    """
    Decode a configured application key.

    Args:
        app_key: Raw configuration value
        env_var: Variable name used in error messages

    Returns:
        SecureKey holding the decoded bytes

    Raises:
        ConfigurationError: If the value is unset or empty, lacks the
            ``base64:`` prefix, or the remainder is not valid base64
    """
    if not app_key or not isinstance(app_key, str):
        raise ConfigurationError(
            f"No application key defined; use environment variable {env_var} to define an application key."
        )

    if not app_key.startswith(KEY_PREFIX):
        raise ConfigurationError(
            f"Invalid application key; must be base64-encoded value, prefixed with '{KEY_PREFIX}'"
        )

    try:
        decoded = base64.b64decode(app_key[len(KEY_PREFIX):], validate=True)
    except (binascii.Error, ValueError) as e:
        raise ConfigurationError("Invalid application key; could not be base64-decoded.") from e

    return SecureKey(decoded)


def generate_key() -> str:
    """Generate a new ``base64:``-prefixed 256-bit application key."""
    encoded = base64.b64encode(generate_random_bytes(AES_256_KEY_SIZE)).decode("ascii")
    return KEY_PREFIX + encoded


class KeyResolver:
    """
    Resolve the application key from Settings.

    By default the key is decoded again on every call. With ``cache=True``
    the decoded bytes are kept behind a lock and reused as long as the raw
    configuration value is unchanged. Either way each call returns its own
    SecureKey, which the caller is expected to wipe.
    """

    def __init__(self, settings: Settings, cache: bool = False) -> None:
        self._settings = settings
        self._cache = cache
        self._lock = threading.Lock()
        self._cached_raw: Optional[str] = None
        self._cached_key: Optional[SecureKey] = None

    def resolve(self) -> SecureKey:
        raw = self._settings.app_key
        if not self._cache:
            return resolve_key(raw, self._settings.key_env_var)

        with self._lock:
            if self._cached_key is None or self._cached_raw != raw:
                if self._cached_key is not None:
                    self._cached_key.wipe()
                self._cached_key = resolve_key(raw, self._settings.key_env_var)
                self._cached_raw = raw
                logger.debug("Cached application key from %s", self._settings.key_env_var)
            return SecureKey(self._cached_key.as_bytes())

