# src/css_var_colorizer/colorize/utils/data_files.py

"""
data_files.py
=============

Does: Read the packaged string tables (utility-class prefixes) from a <data/> dir.
      The dir comes from CSS_VAR_COLORIZER_DATA_DIR / DATA_DIR, else the nearest
      `data/` found walking up from this file.
Returns: tuple[str, ...] in file order, cached per (path, mtime).
Used By: highlight.prefixes, tests.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path

__all__ = [
    "DATA_DIR_ENV_VARS",
    "load_string_table",
    "clear_data_cache",
    "data_dir",
    "DataDirNotFound",
    "DataFileNotFound",
    "DataParseError",
    "DataTypeError",
]

DATA_DIR_ENV_VARS = ("CSS_VAR_COLORIZER_DATA_DIR", "DATA_DIR")


# ── Exceptions ───────────────────────────────────────────────────────────────
class DataDirNotFound(FileNotFoundError):
    """No 'data' directory configured or found walking upwards."""


class DataFileNotFound(FileNotFoundError):
    """The requested table is missing, unreadable or outside the data dir."""


class DataParseError(ValueError):
    """The table file is not valid JSON."""


class DataTypeError(TypeError):
    """The table file is not a flat JSON list of strings."""


# ── Cache ────────────────────────────────────────────────────────────────────
log = logging.getLogger(__name__)
_LOCK = threading.RLock()
_CACHE: dict[tuple[Path, float], tuple[str, ...]] = {}


def clear_data_cache() -> None:
    with _LOCK:
        _CACHE.clear()
    log.debug("data cache cleared")


# ── Data dir discovery ───────────────────────────────────────────────────────
def _candidate_data_dirs(start: Path | None = None) -> list[Path]:
    start = (start or Path(__file__)).resolve()
    return [(p / "data").resolve() for p in [start, *start.parents]]


def data_dir(start: Path | None = None) -> Path:
    """Does: Return the env-configured data dir, else the first `data/` above `start`."""
    for var in DATA_DIR_ENV_VARS:
        value = os.environ.get(var)
        if value:
            return Path(os.path.expanduser(value)).resolve()

    candidates = _candidate_data_dirs(start)
    for cand in candidates:
        if cand.is_dir():
            return cand
    raise DataDirNotFound(
        "No 'data' directory found.\nTried:\n  " + "\n  ".join(str(p) for p in candidates)
    )


# ── Loading ──────────────────────────────────────────────────────────────────
def load_string_table(name: str, *, base_dir: Path | None = None) -> tuple[str, ...]:
    """
    Does: Load <data>/<name>.json as a tuple of strings, keeping file order.

    Raises:
        DataFileNotFound: missing/unreadable file, or a name escaping the data dir.
        DataParseError: invalid JSON.
        DataTypeError: anything but a list of strings.
    """
    root = (base_dir or data_dir()).resolve()
    file_name = name if name.endswith(".json") else f"{name}.json"
    path = (root / file_name).resolve()
    try:
        path.relative_to(root)
    except ValueError as e:
        raise DataFileNotFound(f"Refusing to read outside data dir: {path} (base={root})") from e

    try:
        mtime = path.stat().st_mtime
    except OSError as e:
        raise DataFileNotFound(f"Data file not found: {path}") from e

    key = (path, mtime)
    with _LOCK:
        cached = _CACHE.get(key)
    if cached is not None:
        return cached

    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise DataParseError(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise DataFileNotFound(f"Cannot read {path}: {e}") from e

    if not isinstance(data, list):
        raise DataTypeError(f"{path.name}: expected a list, got {type(data).__name__}")
    bad = [x for x in data if not isinstance(x, str)]
    if bad:
        raise DataTypeError(
            f"{path.name}: entries must be strings (first bad: {bad[0]!r})"
        )

    table = tuple(data)
    with _LOCK:
        _CACHE[key] = table
    log.debug("loaded %s (%d entries)", path.name, len(table))
    return table
