from __future__ import annotations

from typing import Any, Callable, Dict, Iterator, List, Mapping, Tuple

from jsonconf.core.codec import decode_value, encode_value, json_kind
from jsonconf.core.errors import KeyNotFound, TypeMismatch

JsonObject = Dict[str, Any]


def _check_key(key: str) -> str:
    if not isinstance(key, str):
        raise TypeError(f"Key must be a string, got {type(key).__name__}")
    return key


class ValueStore:
    """Typed read/write access over one JSON object.

    A store is the root object plus a path of keys into it. The root store
    has an empty path; ``get_section`` returns a store with one more key.
    The path is resolved on every call, so a section always sees (and
    writes into) the current root tree:

        {
          "val0": 100,
          "sect0": {"val0": 10, "val1": "foo"}
        }

    ``root.get_section("sect0").write_value("val2", True)`` changes the
    root dict that gets saved.
    """

    def __init__(self, data: JsonObject | None = None, path: Tuple[str, ...] = ()) -> None:
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise TypeMismatch(f"Root must be a JSON object, got {json_kind(data)}")
        self._root = data
        self._path = tuple(path)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={self._path!r})"

    @property
    def path(self) -> Tuple[str, ...]:
        """Keys leading from the root object to this store's object."""
        return self._path

    # -------- internal helpers ---------

    def _node(self) -> JsonObject:
        node = self._root
        for depth, key in enumerate(self._path):
            parent_path = self._path[:depth]
            if key not in node:
                raise KeyNotFound(key, parent_path)
            node = node[key]
            if not isinstance(node, dict):
                raise TypeMismatch(
                    f"Section {'/'.join(self._path[:depth + 1])!r} is a {json_kind(node)}, not an object"
                )
        return node

    def _get(self, key: str) -> Any:
        node = self._node()
        if key not in node:
            raise KeyNotFound(key, self._path)
        return node[key]

    # -------- public API ---------

    def write_value(self, key: str, value: Any) -> None:
        """Insert or overwrite ``key``; existing keys keep their position."""
        _check_key(key)
        node = self._node()
        # encode first so a failure leaves the tree untouched
        node[key] = encode_value(value)

    def read_value(self, key: str, type_: Any = object) -> Any:
        """Return ``key`` decoded as ``type_``.

        Raises KeyNotFound if the key is absent and TypeMismatch if the stored
        JSON does not fit ``type_``.
        """
        _check_key(key)
        return decode_value(self._get(key), type_)

    def get_section(self, key: str) -> ValueStore:
        """Return a live view of the object stored at ``key``.

        Missing sections are not created; write an object first.
        """
        _check_key(key)
        value = self._get(key)
        if not isinstance(value, dict):
            raise TypeMismatch(f"Value at {key!r} is a {json_kind(value)}, not an object")
        return ValueStore(self._root, self._path + (key,))

    def read_or_insert(self, key: str, default: Any, type_: Any = None) -> Any:
        """Read ``key``, or store ``default`` and return it when absent."""
        _check_key(key)
        node = self._node()
        if key in node:
            return decode_value(node[key], type(default) if type_ is None else type_)
        node[key] = encode_value(default)
        return default

    def update_value(self, key: str, func: Callable[[Any], Any], type_: Any = object) -> Any:
        """Replace ``key`` with ``func(current)`` and return the new value."""
        _check_key(key)
        node = self._node()
        if key not in node:
            raise KeyNotFound(key, self._path)
        out = func(decode_value(node[key], type_))
        node[key] = encode_value(out)
        return out

    def delete_value(self, key: str) -> None:
        _check_key(key)
        node = self._node()
        if key not in node:
            raise KeyNotFound(key, self._path)
        del node[key]

    def clone_data(self) -> JsonObject:
        """Deep copy of this store's object, detached from the tree."""
        return decode_value(self._node())

    def copy_from(self, data: Mapping[str, Any]) -> None:
        """Replace this store's content with ``data``.

        The object is cleared and refilled in place so other views of it
        stay valid.
        """
        if not isinstance(data, Mapping):
            raise TypeMismatch(f"Expected a mapping, got {type(data).__name__}")
        encoded = {_check_key(k): encode_value(v) for k, v in data.items()}
        node = self._node()
        node.clear()
        node.update(encoded)

    def keys(self) -> List[str]:
        return list(self._node())

    def __contains__(self, key: object) -> bool:
        return key in self._node()

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._node())
