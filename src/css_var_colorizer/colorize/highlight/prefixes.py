"""
prefixes
========

Does: Load the utility-class prefixes (bg, text, border, ...) that pair with CSS
      variable names to form class tokens like `bg-primary`.
Used By: merge_highlights, DocumentColorSession.
Returns: tuple[str, ...] in file order (cached by load_string_table).
"""

from __future__ import annotations

from css_var_colorizer.colorize.utils.data_files import load_string_table

__all__ = ["PREFIXES_FILE", "get_utility_prefixes"]

PREFIXES_FILE = "utility_class_prefixes"


def get_utility_prefixes() -> tuple[str, ...]:
    """Does: Return the packaged prefix table (or the one under CSS_VAR_COLORIZER_DATA_DIR)."""
    return load_string_table(PREFIXES_FILE)
