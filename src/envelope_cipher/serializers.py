"""
Value codecs used by the generic encrypt/decrypt variant.

A codec turns an arbitrary value into bytes before encryption and back after
decryption. The round trip ``deserialize(serialize(v)) == v`` must hold for
every value the codec accepts.
"""

from __future__ import annotations

import json
import pickle
from abc import ABC, abstractmethod
from typing import Any

from .errors import SerializationError


class Codec(ABC):
    """Reversible value <-> bytes mapping."""

    @abstractmethod
    def serialize(self, value: Any) -> bytes:
        """Convert a value to bytes. Raises SerializationError."""

    @abstractmethod
    def deserialize(self, data: bytes) -> Any:
        """Rebuild a value from bytes. Raises SerializationError."""


_JSON_SCALARS = (type(None), bool, int, float, str)


def _check_json_native(value: Any) -> None:
    """Reject anything json.loads would not hand back unchanged."""
    kind = type(value)
    if kind in _JSON_SCALARS:
        if kind is float and value != value:
            raise SerializationError("Cannot serialize NaN: it does not compare equal after a round trip")
        return
    if kind is list:
        for item in value:
            _check_json_native(item)
        return
    if kind is dict:
        for key, item in value.items():
            if type(key) is not str:
                raise SerializationError(
                    f"Cannot serialize dict key of type {type(key).__name__}; JSON keys must be str"
                )
            _check_json_native(item)
        return
    raise SerializationError(f"Cannot serialize {kind.__name__} as JSON without changing its type")


class JsonCodec(Codec):
    """
    Compact UTF-8 JSON.

    Only JSON-native values are accepted: dicts with str keys, lists, str,
    int, float, bool and None (exact types, no subclasses). Anything else,
    tuples included, raises SerializationError instead of coming back as a
    different value.
    """

    def serialize(self, value: Any) -> bytes:
        try:
            _check_json_native(value)
            return json.dumps(value, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
        except RecursionError as e:
            raise SerializationError("Failed to serialize value: nested too deeply") from e
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Failed to serialize value: {e}") from e

    def deserialize(self, data: bytes) -> Any:
        try:
            return json.loads(data.decode("utf-8"))
        except RecursionError as e:
            raise SerializationError("Failed to deserialize value: nested too deeply") from e
        except ValueError as e:
            raise SerializationError(f"Failed to deserialize value: {e}") from e


class PickleCodec(Codec):
    """
    Python pickle, for values JSON cannot represent.

    Only use this with envelopes from trusted producers: the payload is
    authenticated before it is unpickled, so it must have been created by a
    holder of the same key.
    """

    def __init__(self, protocol: int = pickle.HIGHEST_PROTOCOL) -> None:
        self.protocol = protocol

    def serialize(self, value: Any) -> bytes:
        try:
            return pickle.dumps(value, protocol=self.protocol)
        except (pickle.PicklingError, TypeError, AttributeError) as e:
            raise SerializationError(f"Failed to serialize value: {e}") from e

    def deserialize(self, data: bytes) -> Any:
        try:
            return pickle.loads(data)
        except Exception as e:
            raise SerializationError(f"Failed to deserialize value: {e}") from e
