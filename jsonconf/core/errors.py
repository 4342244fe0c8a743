"""Error kinds raised by jsonconf.

Each error also derives from the builtin a caller would naturally catch
(KeyError for a missing key, TypeError for a shape mismatch, ...).
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class ConfigError(Exception):
    """Base class for every jsonconf error."""


class ConfigIOError(ConfigError, OSError):
    """Filesystem access failed (permissions, missing component, disk full)."""


class ParseError(ConfigError, ValueError):
    """On-disk content is not valid JSON or its root is not an object."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None

    def __str__(self) -> str:
        msg = self.args[0] if self.args else ""
        if self.path is not None:
            return f"{self.path}: {msg}"
        return msg


def _format_path(path: Sequence[str]) -> str:
    return "/".join(path) if path else "<root>"


class KeyNotFound(ConfigError, KeyError):
    """A read or section lookup targeted an absent key."""

    def __init__(self, key: str, path: Sequence[str] = ()) -> None:
        super().__init__(key)
        self.key = key
        self.path = tuple(path)

    def __str__(self) -> str:
        return f"Key not found: {self.key!r} in {_format_path(self.path)}"


class TypeMismatch(ConfigError, TypeError):
    """The stored JSON shape does not fit the requested type."""


class SerializationError(ConfigError, ValueError):
    """A value cannot be represented as JSON."""
