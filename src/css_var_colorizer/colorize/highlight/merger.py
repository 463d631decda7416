"""
merger.py
=========

Does: Merge document-color protocol results with utility-class matches derived from
      resolved CSS variables into one per-line HighlightTable.
Used By: DocumentColorSession (on every protocol response).
Returns: MergeResult(table, line_start, line_end).

Notes:
- No deduplication: a protocol entry and a local match on the same span are both kept;
  the sink decides render order.
- Utility-class tokens are found by plain substring search, so `bg-red` also matches
  inside `bg-red-500`.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any, NamedTuple, Optional

from css_var_colorizer.colorize.settings import OVERSCAN_LINES
from css_var_colorizer.colorize.types import WHOLE_BUFFER, HighlightEntry, HighlightTable

__all__ = [
    "MergeResult",
    "protocol_color_to_hex",
    "protocol_entries",
    "variable_targets",
    "find_utility_classes",
    "merge_highlights",
]
__docformat__ = "google"

LineFetcher = Callable[[int, int], Sequence[str]]


class MergeResult(NamedTuple):
    table: HighlightTable
    line_start: int
    line_end: int


# =============================================================================
# 1) PROTOCOL RESULTS
# =============================================================================

def protocol_color_to_hex(color: Mapping[str, Any]) -> str:
    """Does: Premultiply red/green/blue by alpha and format as 6 hex digits (alpha is dropped)."""
    r = float(color.get("red") or 0)
    g = float(color.get("green") or 0)
    b = float(color.get("blue") or 0)
    a = float(color.get("alpha") or 0)
    return "%02x%02x%02x" % tuple(
        max(0, min(255, int(c * a * 255))) for c in (r, g, b)
    )


def protocol_entries(
    results: Iterable[Mapping[str, Any]],
    table: HighlightTable,
    *,
    overscan: int = OVERSCAN_LINES,
) -> tuple[int, int]:
    """
    Does: Append one HighlightEntry per protocol record at its start line.

    Returns:
        The scan window (min start line, max end line + overscan), or (0, WHOLE_BUFFER)
        when there were no records.
    """
    line_start: Optional[int] = None
    line_end: Optional[int] = None
    for result in results:
        start = result["range"]["start"]
        end = result["range"]["end"]
        cur_line = int(start["line"])
        end_line = int(end["line"])
        line_start = cur_line if line_start is None else min(line_start, cur_line)
        line_end = end_line if line_end is None else max(line_end, end_line)

        entry = HighlightEntry(
            protocol_color_to_hex(result.get("color") or {}),
            int(start["character"]),
            int(end["character"]),
        )
        table.setdefault(cur_line, []).append(entry)

    return (
        line_start if line_start is not None else 0,
        line_end + overscan if line_end is not None else WHOLE_BUFFER,
    )


# =============================================================================
# 2) UTILITY CLASSES FROM VARIABLES
# =============================================================================

def variable_targets(name: str) -> list[str]:
    """Does: 'color-primary' → ['color-primary', 'primary']; leading hyphens are stripped."""
    bare = name.lstrip("-")
    if not bare:
        return []
    targets = [bare]
    if bare.startswith("color-") and len(bare) > len("color-"):
        targets.append(bare[len("color-"):])
    return targets


def find_utility_classes(line: str, token: str) -> list[tuple[int, int]]:
    """Does: Return (start, end) spans of every non-overlapping literal occurrence."""
    spans: list[tuple[int, int]] = []
    start = line.find(token)
    while start != -1:
        end = start + len(token)
        spans.append((start, end))
        start = line.find(token, end)
    return spans


def _scan_variables(
    lines: Sequence[str],
    line_start: int,
    variables: Mapping[str, str],
    prefixes: Sequence[str],
    table: HighlightTable,
) -> None:
    for i, line in enumerate(lines):
        lnum = line_start + i
        for name, rgb_hex in variables.items():
            clean_hex = rgb_hex.lstrip("#")
            for target in variable_targets(name):
                for prefix in prefixes:
                    for s, e in find_utility_classes(line, f"{prefix}-{target}"):
                        table.setdefault(lnum, []).append(HighlightEntry(clean_hex, s, e))


# =============================================================================
# 3) MERGE
# =============================================================================

def merge_highlights(
    results: Iterable[Mapping[str, Any]],
    variables: Mapping[str, str],
    prefixes: Sequence[str],
    fetch_lines: LineFetcher,
    *,
    overscan: int = OVERSCAN_LINES,
) -> MergeResult:
    """
    Does: Build the HighlightTable for one protocol response.

    Protocol entries come first, then utility-class matches for every resolved
    variable in the window lines (fetched only when there are variables).

    Args:
        results: Protocol records (range.start/end, color.red/green/blue/alpha).
        variables: Resolved view of the scope (name → hex).
        prefixes: Utility-class prefixes, e.g. ("bg", "text").
        fetch_lines: Callable (line_start, line_end) → lines of the window.
        overscan: Extra lines scanned below the last protocol line.
    """
    table: HighlightTable = {}
    line_start, line_end = protocol_entries(results, table, overscan=overscan)

    if variables:
        lines = fetch_lines(line_start, line_end)
        _scan_variables(lines, line_start, variables, prefixes, table)

    return MergeResult(table, line_start, line_end)
