from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

from jsonconf.core.errors import ConfigIOError

HomeResolver = Callable[[], Path]


def home_config_dir(subdir: Path | str, home: Optional[HomeResolver] = None) -> Path:
    """Return ``<home>/<subdir>``.

    ``home`` defaults to ``Path.home``; tests pass a callable returning a
    temporary directory instead.
    """
    resolver = home or Path.home
    try:
        base = Path(resolver())
    except (RuntimeError, KeyError) as exc:
        raise ConfigIOError(f"No valid home directory could be resolved: {exc}") from exc
    return base / subdir


def config_file_path(folder: Path | str, filename: str) -> Path:
    """Return the absolute path of ``filename`` inside ``folder``."""
    if not filename or filename in (".", "..") or Path(filename).name != filename:
        raise ValueError(f"Invalid config file name: {filename!r}")
    return (Path(folder).expanduser() / filename).absolute()
