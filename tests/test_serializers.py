"""Tests for value codecs."""

from __future__ import annotations

import datetime

import pytest

from envelope_cipher import JsonCodec, PickleCodec, SerializationError


def test_json_is_compact_utf8():
    assert JsonCodec().serialize({"a": [1, 2], "b": "é/"}) == '{"a":[1,2],"b":"é/"}'.encode("utf-8")


def test_json_roundtrips_native_values():
    codec = JsonCodec()
    value = {"a": [1, 2.5, None, True], "b": {"c": "d"}, "e": float("inf")}
    assert codec.deserialize(codec.serialize(value)) == value


@pytest.mark.parametrize("value", [object(), {1, 2}, b"bytes", datetime.date(2024, 1, 1)])
def test_json_rejects_unsupported_values(value):
    with pytest.raises(SerializationError, match="Cannot serialize"):
        JsonCodec().serialize(value)


@pytest.mark.parametrize("data", [b"{", b"\xff\xfe\xfd", b""])
def test_json_rejects_invalid_payload(data):
    with pytest.raises(SerializationError, match="Failed to deserialize"):
        JsonCodec().deserialize(data)


def test_pickle_roundtrip():
    codec = PickleCodec()
    value = {"date": datetime.date(2024, 1, 1), "set": frozenset({1, 2}), "raw": b"\x00"}
    assert codec.deserialize(codec.serialize(value)) == value


def test_pickle_rejects_unpicklable():
    with pytest.raises(SerializationError):
        PickleCodec().serialize(lambda: None)


def test_pickle_rejects_garbage():
    with pytest.raises(SerializationError):
        PickleCodec().deserialize(b"not a pickle")


class Flag(int):
    pass


@pytest.mark.parametrize(
    "value",
    [
        (1, 2),
        [1, (2, 3)],
        {1: "a", 2: "b"},
        {"outer": {None: 1}},
        {(1, 2): "tuple key"},
        Flag(1),
        [float("nan")],
    ],
)
def test_json_rejects_values_that_would_change(value):
    with pytest.raises(SerializationError, match="Cannot serialize"):
        JsonCodec().serialize(value)


def test_json_rejects_deeply_nested_value():
    value: list = []
    for _ in range(100_000):
        value = [value]
    with pytest.raises(SerializationError, match="nested too deeply"):
        JsonCodec().serialize(value)


def test_json_rejects_deeply_nested_payload():
    with pytest.raises(SerializationError, match="nested too deeply"):
        JsonCodec().deserialize(b"[" * 200_000)
