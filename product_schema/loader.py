"""
loader.py - read JSON product schemas and config files.

Public API
----------
load_schema() : function helper to obtain a fresh copy
"""

from __future__ import annotations

import copy
import json
from importlib import resources
from pathlib import Path
from typing import Any

# --------------------------------------------------------------------------- #
# Helpers                                                                     #
# --------------------------------------------------------------------------- #

def _read(path: Path) -> Any:
    """Read & parse a JSON file, raising crisp errors on failure."""
    try:
        with path.open(encoding="utf-8") as fd:
            return json.load(fd)
    except FileNotFoundError as exc:
        raise FileNotFoundError(f"Schema not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc


# --------------------------------------------------------------------------- #
# Public utilities                                                            #
# --------------------------------------------------------------------------- #

def load_schema(path: str | Path) -> dict:
    """Return a fresh ``dict`` parsed from *path*.

    *path* is tried as a file on disk first, then as a resource bundled under
    ``product_schema/schemas`` (basename first, original string second).
    """
    p = Path(path)

    # 1) direct file on disk ------------------------------------------------
    if p.is_file():
        return copy.deepcopy(_read(p))

    # 2) bundled resource (exact string or basename) -----------------------
    pkg = resources.files("product_schema").joinpath("schemas")
    candidates = (p.name, str(path))   # basename first, original second
    for name in candidates:
        try:
            text = pkg.joinpath(name).read_text(encoding="utf-8")
        except (FileNotFoundError, IsADirectoryError):
            continue   # try the next candidate
        try:
            return copy.deepcopy(json.loads(text))
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in bundled schema {name}: {exc}") from exc

    # 3) give up -----------------------------------------------------------
    raise FileNotFoundError(
        f"Schema '{path}' not found on disk or in package data"
    )
