"""
parsers.py
==========

Does: Provide the default color parsers (hex, rgb()/rgba(), CSS named colors) and a
      ColorMatcher that chains them behind the var() reference parser.
Used By: VariableStore (declaration values), scan_line (buffer lines), CLI.
Returns: (end_offset, rgb_hex) with rgb_hex as 6 lowercase hex digits, or None.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Optional, Sequence

import webcolors

from css_var_colorizer.colorize.types import ColorMatch, ColorParser, Scope
from css_var_colorizer.colorize.variables.reference import VarReferenceParser
from css_var_colorizer.colorize.variables.store import VariableStore

# Public surface
__all__ = [
    "parse_hex",
    "parse_rgb_function",
    "parse_named_color",
    "ColorMatcher",
]
__docformat__ = "google"

logger = logging.getLogger(__name__)


# =============================================================================
# 1) HEX
# =============================================================================

_HEX_RE = re.compile(r"#(?P<digits>[0-9A-Fa-f]{8}|[0-9A-Fa-f]{6}|[0-9A-Fa-f]{3,4})(?![0-9A-Za-z_-])")


def parse_hex(text: str, offset: int, scope: Optional[Scope] = None) -> Optional[ColorMatch]:
    """Does: Match #rgb, #rgba, #rrggbb or #rrggbbaa at offset (alpha digits are dropped)."""
    m = _HEX_RE.match(text, offset)
    if m is None:
        return None
    digits = m.group("digits")
    if len(digits) == 4:
        digits = digits[:3]
    elif len(digits) == 8:
        digits = digits[:6]
    return m.end(), webcolors.normalize_hex(f"#{digits}")[1:]


# =============================================================================
# 2) rgb() / rgba()
# =============================================================================

_RGB_FUNC_RE = re.compile(
    r"rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,\s*(?:\d*\.)?\d+%?\s*)?\)"
)


def parse_rgb_function(
    text: str, offset: int, scope: Optional[Scope] = None
) -> Optional[ColorMatch]:
    """Does: Match rgb(r, g, b) / rgba(r, g, b, a) with 0–255 integer channels."""
    m = _RGB_FUNC_RE.match(text, offset)
    if m is None:
        return None
    r, g, b = (int(v) for v in m.groups()[:3])
    if not all(0 <= v <= 255 for v in (r, g, b)):
        logger.debug("rgb() channel out of range in %r", m.group(0))
        return None
    return m.end(), webcolors.rgb_to_hex((r, g, b))[1:]


# =============================================================================
# 3) NAMED COLORS (CSS3 via webcolors)
# =============================================================================

_WORD_RE = re.compile(r"[A-Za-z]+(?![0-9A-Za-z_-])")


@lru_cache(maxsize=1024)
def _named_to_hex(name: str) -> Optional[str]:
    try:
        return webcolors.name_to_hex(name)[1:]
    except ValueError:
        return None


def parse_named_color(
    text: str, offset: int, scope: Optional[Scope] = None
) -> Optional[ColorMatch]:
    """Does: Match a whole-word CSS3 color name (e.g. 'darkslateblue') at offset."""
    if offset > 0 and (text[offset - 1].isalnum() or text[offset - 1] in "-_"):
        return None
    m = _WORD_RE.match(text, offset)
    if m is None:
        return None
    rgb_hex = _named_to_hex(m.group(0).lower())
    if rgb_hex is None:
        return None
    return m.end(), rgb_hex


# =============================================================================
# 4) COMPOSITION
# =============================================================================

class ColorMatcher:
    """
    Does: Chain var() lookup, hex, rgb() and (optionally) named colors; the first
    parser that matches wins.

    Args:
        store: VariableStore backing var() lookups; None disables var() support.
        names: Whether CSS named colors are recognized.
        extra: Additional parsers tried after the built-in ones.
    """

    def __init__(
        self,
        store: Optional[VariableStore] = None,
        *,
        names: bool = True,
        extra: Sequence[ColorParser] = (),
    ) -> None:
        parsers: list[ColorParser] = []
        if store is not None:
            parsers.append(VarReferenceParser(store))
        parsers.extend([parse_hex, parse_rgb_function])
        if names:
            parsers.append(parse_named_color)
        parsers.extend(extra)
        self.parsers: tuple[ColorParser, ...] = tuple(parsers)

    def __call__(self, text: str, offset: int, scope: Optional[Scope]) -> Optional[ColorMatch]:
        for parser in self.parsers:
            match = parser(text, offset, scope)
            if match is not None:
                return match
        return None
