#!/usr/bin/env python3
"""Verify setup: paths, jsonconf imports, ConfigFile round trip in a temp home."""
from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
REQUIRED_PATHS = ["jsonconf", "tests", "pyproject.toml"]


def main() -> int:
    # 1) Validate required paths exist
    os.chdir(REPO_ROOT)
    missing = [p for p in REQUIRED_PATHS if not (REPO_ROOT / p).exists()]
    if missing:
        print(f"Missing required paths: {missing}", file=sys.stderr)
        return 1
    print("Required paths OK")

    # 2) Import jsonconf modules
    sys.path.insert(0, str(REPO_ROOT))
    try:
        import jsonconf.core.values  # noqa: F401
        from jsonconf.storage.config_file import open_from_home
    except Exception as e:
        print(f"Import failed: {e}", file=sys.stderr)
        return 1
    print("Core imports OK")

    # 3) open / write / section / save / reopen against a temp home
    with tempfile.TemporaryDirectory() as tmp:
        home = lambda: Path(tmp)  # noqa: E731
        conf = open_from_home(".jsonconf-verify", "c.json", home=home)
        conf.write_value("val0", 100)
        conf.write_value("sect0", {"val0": 10})
        conf.get_section("sect0").write_value("val1", "foo")
        conf.save()
        again = open_from_home(".jsonconf-verify", "c.json", home=home)
        assert again.read_value("val0", int) == 100
        assert again.get_section("sect0").read_value("val1", str) == "foo"
    print("ConfigFile round trip OK")
    return 0


if __name__ == "__main__":
    sys.exit(main())
