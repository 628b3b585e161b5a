"""Module-level shortcuts keyed from the APP_KEY environment variable."""

from __future__ import annotations

from typing import Any, Union

from .cipher import EnvelopeCipher


def encrypt(value: Any, serialize: bool = True) -> str:
    """Encrypt ``value`` with a cipher built from the current environment."""
    return EnvelopeCipher.from_env().encrypt_value(value, serialize)


def decrypt(value: Union[str, bytes], deserialize: bool = True) -> Any:
    """Decrypt envelope text with a cipher built from the current environment."""
    return EnvelopeCipher.from_env().decrypt_value(value, deserialize)
