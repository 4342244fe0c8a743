from datetime import datetime
from enum import Enum

import pytest

from jsonconf.core.codec import decode_value, encode_value, json_kind
from jsonconf.core.errors import SerializationError, TypeMismatch


class Level(str, Enum):
    LOW = "low"
    HIGH = "high"


def test_encode_plain_json() -> None:
    node = {"a": [1, 2.5, "x", None, True]}
    assert encode_value(node) == node
    assert encode_value(node) is not node


def test_encode_rich_types() -> None:
    assert encode_value((1, 2)) == [1, 2]
    assert encode_value(Level.HIGH) == "high"
    assert encode_value(datetime(2024, 1, 2, 3, 4, 5)) == "2024-01-02T03:04:05"


@pytest.mark.parametrize("value", [object(), float("inf"), {"nested": [float("nan")]}])
def test_encode_rejects(value) -> None:
    with pytest.raises(SerializationError):
        encode_value(value)


def test_decode_rich_types() -> None:
    assert decode_value("high", Level) is Level.HIGH
    assert decode_value("2024-01-02T03:04:05", datetime) == datetime(2024, 1, 2, 3, 4, 5)


def test_decode_default_returns_copy() -> None:
    node = {"a": [1]}
    out = decode_value(node)
    assert out == node
    assert out["a"] is not node["a"]


def test_decode_strict() -> None:
    with pytest.raises(TypeMismatch):
        decode_value("100", int)
    with pytest.raises(TypeMismatch):
        decode_value("medium", Level)


def test_decode_unsupported_type() -> None:
    class Opaque:
        pass

    with pytest.raises(TypeMismatch):
        decode_value({}, Opaque)


@pytest.mark.parametrize(
    "node, kind",
    [(None, "null"), (True, "bool"), (1, "number"), (1.5, "number"), ("s", "string"), ([], "array"), ({}, "object")],
)
def test_json_kind(node, kind) -> None:
    assert json_kind(node) == kind


def test_encode_rejects_lone_surrogate() -> None:
    with pytest.raises(SerializationError):
        encode_value({"name": "\ud800"})
