"""
reference.py
============

Does: Recognize `var(--name)` / `var(--name, fallback)` at an offset and return the
      referenced variable's color from the VariableStore.
Used By: ColorMatcher (so declarations and buffer lines can resolve var() chains).
Returns: (end_offset, rgb_hex) or None.

Notes:
- The fallback after ',' is consumed but never evaluated: an undefined name is
  simply no match.
"""

from __future__ import annotations

import re
from typing import Optional

from css_var_colorizer.colorize.types import ColorMatch, Scope
from css_var_colorizer.colorize.variables.store import VariableStore

__all__ = ["VAR_REFERENCE_RE", "VarReferenceParser"]

VAR_REFERENCE_RE = re.compile(r"var\s*\(\s*--(?P<name>[A-Za-z0-9-]+)\s*(?:\)|,[^)]*\))")


class VarReferenceParser:
    """Color parser for var() references, bound to one VariableStore."""

    def __init__(self, store: VariableStore) -> None:
        self.store = store

    def __call__(self, text: str, offset: int, scope: Optional[Scope]) -> Optional[ColorMatch]:
        m = VAR_REFERENCE_RE.match(text, offset)
        if m is None or scope is None:
            return None
        rgb_hex = self.store.get(scope, m.group("name"))
        if rgb_hex is None:
            return None
        return m.end(), rgb_hex

    def __repr__(self) -> str:
        return f"VarReferenceParser({self.store!r})"
