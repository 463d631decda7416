"""
scanner.py
==========

Does: Walk buffer lines left to right with a color parser and collect every match
      as a HighlightEntry.
Used By: CLI and anything that needs local (non-protocol) highlights.
Returns: list[HighlightEntry] per line, or a HighlightTable for a line window.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from css_var_colorizer.colorize.types import ColorParser, HighlightEntry, HighlightTable, Scope

__all__ = ["scan_line", "scan_lines"]


def scan_line(line: str, parser: ColorParser, scope: Optional[Scope]) -> list[HighlightEntry]:
    """Does: Try the parser at each offset; on a match record it and resume after it."""
    entries: list[HighlightEntry] = []
    i, n = 0, len(line)
    while i < n:
        match = parser(line, i, scope)
        if match is not None and match[0] > i:
            end, rgb_hex = match
            entries.append(HighlightEntry(rgb_hex, i, end))
            i = end
        else:
            i += 1
    return entries


def scan_lines(
    lines: Iterable[str],
    parser: ColorParser,
    scope: Optional[Scope],
    line_start: int = 0,
) -> HighlightTable:
    """Does: scan_line over a window; only lines with matches get a table entry."""
    table: HighlightTable = {}
    for lnum, line in enumerate(lines, start=line_start):
        entries = scan_line(line, parser, scope)
        if entries:
            table[lnum] = entries
    return table
