"""
Pytest configuration and fixtures for envelope cipher tests.
"""

from __future__ import annotations

import base64
import json
from typing import Callable, Dict

import pytest

from envelope_cipher import EnvelopeCipher, Settings, generate_key

ZERO_KEY = "base64:" + base64.b64encode(bytes(32)).decode("ascii")


@pytest.fixture(autouse=True)
def _clear_app_key(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's APP_KEY and .env out of the tests."""
    monkeypatch.delenv("APP_KEY", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def zero_key() -> str:
    """Application key made of 32 zero bytes."""
    return ZERO_KEY


@pytest.fixture
def app_key() -> str:
    """Freshly generated application key."""
    return generate_key()


@pytest.fixture
def cipher(app_key: str) -> EnvelopeCipher:
    """Cipher keyed with a random application key."""
    return EnvelopeCipher(Settings(app_key=app_key))


@pytest.fixture
def env_key(monkeypatch: pytest.MonkeyPatch, zero_key: str) -> str:
    """Export the zero key as APP_KEY."""
    monkeypatch.setenv("APP_KEY", zero_key)
    return zero_key


def open_envelope(text: str) -> Dict[str, str]:
    """Decode envelope text into its JSON fields."""
    return json.loads(base64.b64decode(text))


def seal_envelope(fields: Dict[str, object]) -> str:
    """Encode JSON fields back into envelope text."""
    return base64.b64encode(json.dumps(fields).encode("utf-8")).decode("ascii")


def rewrite_field(text: str, field: str, change: Callable[[bytes], bytes]) -> str:
    """Apply ``change`` to the decoded bytes of one envelope field."""
    fields = open_envelope(text)
    raw = base64.b64decode(fields[field])
    fields[field] = base64.b64encode(change(raw)).decode("ascii")
    return seal_envelope(fields)


def flip_bit(data: bytes, index: int = 0, bit: int = 0) -> bytes:
    buf = bytearray(data)
    buf[index] ^= 1 << bit
    return bytes(buf)
