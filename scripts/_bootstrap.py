from __future__ import annotations

import sys
from pathlib import Path

_PACKAGE_MARKER = Path("mkpasswd") / "core" / "dictionary.py"


def checkout_root(script_file: str | Path) -> Path:
    """The checkout that holds `script_file` under its scripts/ directory."""
    root = Path(script_file).resolve().parent.parent
    if not (root / _PACKAGE_MARKER).is_file():
        raise RuntimeError(
            f"unable to resolve repository root for {script_file}: "
            f"expected '{_PACKAGE_MARKER.as_posix()}' next to the scripts/ directory"
        )
    return root


def bootstrap_repo_path(script_file: str | Path | None = None) -> Path:
    root = checkout_root(__file__ if script_file is None else script_file)
    entry = str(root)
    if entry not in sys.path:
        sys.path.insert(0, entry)
    return root
