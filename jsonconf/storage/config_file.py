"""JSON config file bound to a path: load on open, write on ``save``.

File shape is a single JSON object; nested objects are sections:
{
  "val0": 100,
  "sect0": {"val0": 10, "val1": "foo"}
}

No locking: two processes saving the same file race and the last save wins.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Iterator, List, Mapping, Optional

from jsonconf.core.errors import ConfigIOError, ParseError, SerializationError
from jsonconf.core.values import JsonObject, ValueStore
from jsonconf.storage.paths import HomeResolver, config_file_path, home_config_dir

logger = logging.getLogger(__name__)


class ConfigFile:
    """A ValueStore plus the path it is saved to."""

    def __init__(
        self,
        path: Path | str,
        data: JsonObject | None = None,
        *,
        indent: int | None = None,
        encoding: str = "utf-8",
    ) -> None:
        self._path = Path(path)
        self._store = ValueStore(data)
        self._indent = indent
        self._encoding = encoding

    def __repr__(self) -> str:
        return f"ConfigFile({str(self._path)!r})"

    @property
    def path(self) -> Path:
        return self._path

    @property
    def store(self) -> ValueStore:
        """The root ValueStore holding the in-memory tree."""
        return self._store

    # -------- delegated ValueStore API ---------

    def write_value(self, key: str, value: Any) -> None:
        self._store.write_value(key, value)

    def read_value(self, key: str, type_: Any = object) -> Any:
        return self._store.read_value(key, type_)

    def get_section(self, key: str) -> ValueStore:
        return self._store.get_section(key)

    def read_or_insert(self, key: str, default: Any, type_: Any = None) -> Any:
        return self._store.read_or_insert(key, default, type_)

    def update_value(self, key: str, func: Callable[[Any], Any], type_: Any = object) -> Any:
        return self._store.update_value(key, func, type_)

    def delete_value(self, key: str) -> None:
        self._store.delete_value(key)

    def clone_data(self) -> JsonObject:
        return self._store.clone_data()

    def copy_from(self, data: Mapping[str, Any]) -> None:
        self._store.copy_from(data)

    def keys(self) -> List[str]:
        return self._store.keys()

    def __contains__(self, key: object) -> bool:
        return key in self._store

    def __iter__(self) -> Iterator[str]:
        return iter(self._store)

    def __len__(self) -> int:
        return len(self._store)

    # -------- persistence ---------

    def dumps(self) -> str:
        """Serialize the whole tree, keeping insertion order."""
        if self._indent is None:
            return json.dumps(self._store.clone_data(), ensure_ascii=False, separators=(",", ":"))
        return json.dumps(self._store.clone_data(), ensure_ascii=False, indent=self._indent) + "\n"

    def save(self) -> str:
        """Write the tree to ``path``, replacing the file. Returns the text written.

        The bytes go to a fresh temporary file in the same folder which is then
        renamed over ``path``.
        """
        text = self.dumps()
        try:
            payload = text.encode(self._encoding)
        except UnicodeEncodeError as exc:
            raise SerializationError(f"Config cannot be written as {self._encoding}: {exc}") from exc

        tmp: Optional[Path] = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            tmp = Path(tmp_name)
            with os.fdopen(fd, "wb") as f:
                f.write(payload)
            os.replace(tmp, self._path)
            tmp = None
        except OSError as exc:
            raise ConfigIOError(f"Cannot write config file {self._path}: {exc}") from exc
        finally:
            if tmp is not None:
                with contextlib.suppress(OSError):
                    tmp.unlink()
        logger.debug("Saved %d top-level keys to %s", len(self._store), self._path)
        return text


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not standard JSON
    raise ValueError(f"Invalid JSON constant {name}")


def _load(path: Path, encoding: str) -> JsonObject:
    if not path.exists():
        logger.debug("Config file %s does not exist, starting empty", path)
        return {}
    try:
        text = path.read_text(encoding=encoding)
    except OSError as exc:
        raise ConfigIOError(f"Cannot read config file {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise ParseError(f"Not valid {encoding} text: {exc}", path) from exc
    if not text.strip():
        return {}
    try:
        data = json.loads(text, parse_constant=_reject_constant)
    except ValueError as exc:
        raise ParseError(f"Invalid JSON: {exc}", path) from exc
    except RecursionError as exc:
        raise ParseError("JSON is nested too deeply", path) from exc
    if not isinstance(data, dict):
        raise ParseError(f"Root must be a JSON object, got {type(data).__name__}", path)
    logger.debug("Loaded config file %s", path)
    return data


def open_from_path(
    folder: Path | str,
    filename: str,
    *,
    indent: int | None = None,
    encoding: str = "utf-8",
) -> ConfigFile:
    """Open ``folder/filename``, creating ``folder`` if missing.

    A missing file gives an empty config; the file itself is only written
    by ``ConfigFile.save``.
    """
    path = config_file_path(folder, filename)
    try:
        if not path.parent.is_dir():
            logger.debug("Creating config folder %s", path.parent)
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigIOError(f"Cannot create config folder {path.parent}: {exc}") from exc
    return ConfigFile(path, _load(path, encoding), indent=indent, encoding=encoding)


def open_from_home(
    subdir: Path | str,
    filename: str,
    *,
    home: Optional[HomeResolver] = None,
    indent: int | None = None,
    encoding: str = "utf-8",
) -> ConfigFile:
    """Open ``<home>/<subdir>/<filename>``; see ``open_from_path``."""
    return open_from_path(home_config_dir(subdir, home), filename, indent=indent, encoding=encoding)
