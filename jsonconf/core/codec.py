"""Mapping between Python values and JSON nodes.

Encoding goes through ``pydantic_core.to_jsonable_python`` so dataclasses,
pydantic models, enums, datetimes and the like become plain JSON. Decoding
validates the stored node against the requested type in strict JSON mode:
a stored ``"100"`` is not an ``int``, but a JSON array still fills a
``tuple`` and a JSON object still fills a dataclass.
"""

from __future__ import annotations

import copy
import json
from typing import Any, Dict

from pydantic import TypeAdapter, ValidationError
from pydantic.errors import PydanticSchemaGenerationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from jsonconf.core.errors import SerializationError, TypeMismatch

_ADAPTERS: Dict[Any, TypeAdapter] = {}


def _adapter(type_: Any) -> TypeAdapter:
    try:
        return _ADAPTERS[type_]
    except KeyError:
        pass
    except TypeError:
        # unhashable annotation, build it every time
        return TypeAdapter(type_)
    adapter = TypeAdapter(type_)
    _ADAPTERS[type_] = adapter
    return adapter


def _type_name(type_: Any) -> str:
    return getattr(type_, "__name__", None) or repr(type_)


def encode_value(value: Any) -> Any:
    """Return a detached JSON node for ``value``.

    Raises SerializationError for anything JSON cannot carry, including
    NaN/Infinity and mappings with non-string keys that cannot be coerced.
    """

    try:
        text = json.dumps(to_jsonable_python(value), allow_nan=False, ensure_ascii=False)
        # lone surrogates survive json.dumps but can never be saved
        text.encode("utf-8")
    except (PydanticSerializationError, UnicodeEncodeError, TypeError, ValueError) as exc:
        raise SerializationError(
            f"Cannot encode {type(value).__name__} as JSON: {exc}"
        ) from exc
    return json.loads(text)


def decode_value(node: Any, type_: Any = object) -> Any:
    """Decode the JSON ``node`` into ``type_``.

    ``object`` (the default) and ``Any`` return a copy of the plain node.
    """

    if type_ is object or type_ is Any:
        return copy.deepcopy(node)
    try:
        adapter = _adapter(type_)
    except PydanticSchemaGenerationError as exc:
        raise TypeMismatch(f"Unsupported type {_type_name(type_)}") from exc
    try:
        return adapter.validate_json(json.dumps(node), strict=True)
    except ValidationError as exc:
        raise TypeMismatch(
            f"Stored {json_kind(node)} does not fit {_type_name(type_)}: "
            f"{exc.errors()[0]['msg']}"
        ) from exc


def json_kind(node: Any) -> str:
    """Name the JSON shape of ``node``, for error messages."""

    if node is None:
        return "null"
    if isinstance(node, bool):
        return "bool"
    if isinstance(node, (int, float)):
        return "number"
    if isinstance(node, str):
        return "string"
    if isinstance(node, list):
        return "array"
    if isinstance(node, dict):
        return "object"
    return type(node).__name__
