# src/css_var_colorizer/colorize/utils/__init__.py
"""

Does: Provide data-table loading, content hashing and lightweight debug logging for the colorizer.
Returns: Public API via load_string_table/clear_data_cache, hash_definitions and debug/reload_topics.
Used by: Variable store, highlight session, CLI and tests.
"""

from __future__ import annotations

from .data_files import (
    DataDirNotFound,
    DataFileNotFound,
    DataParseError,
    DataTypeError,
    clear_data_cache,
    data_dir,
    load_string_table,
)
from .hashing import hash_definitions
from .log import (
    debug,
    reload_topics,
    topic_enabled,
)

__all__ = [
    # Data tables
    "load_string_table",
    "clear_data_cache",
    "data_dir",
    "DataDirNotFound",
    "DataFileNotFound",
    "DataParseError",
    "DataTypeError",
    # Hashing
    "hash_definitions",
    # Logging helpers
    "debug",
    "reload_topics",
    "topic_enabled",
]
