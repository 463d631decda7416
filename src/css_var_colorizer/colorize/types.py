# src/css_var_colorizer/colorize/types.py
from __future__ import annotations

"""
types.py.

Does: Define the shared value types (scope ids, color matches, highlight entries)
and the structural Protocols for every external collaborator.
Used by: variables, color, highlight subpackages and the CLI.
"""

from collections.abc import Mapping, Sequence
from concurrent.futures import Future
from typing import Any, NamedTuple, Optional, Protocol, Tuple, runtime_checkable

# ── Scalars ───────────────────────────────────────────────────────────────────
Scope = int
# (end_offset, rgb_hex): rgb_hex is 6 lowercase hex digits, no '#'
ColorMatch = Tuple[int, str]

# Parses globally-loaded files; get(GLOBAL_SCOPE, name) only sees Global.
GLOBAL_SCOPE: Scope = 0
# line_end value meaning "to the end of the buffer"
WHOLE_BUFFER = -1


class HighlightEntry(NamedTuple):
    rgb_hex: str
    start_col: int
    end_col: int


HighlightTable = dict[int, list[HighlightEntry]]


# ── Collaborators ─────────────────────────────────────────────────────────────
@runtime_checkable
class ColorParser(Protocol):
    """
    Structural contract for anything that recognizes a color at an offset.

    Returns (end_offset, rgb_hex) when a color starts exactly at `offset`, else None.
    `scope` is passed through so var() references can resolve against a buffer.
    """

    def __call__(self, text: str, offset: int, scope: Optional[Scope]) -> Optional[ColorMatch]: ...


class TextSource(Protocol):
    """Return lines [line_start, line_end) of a scope; line_end == -1 reads to the end."""

    def get_lines(self, scope: Scope, line_start: int, line_end: int) -> Sequence[str]: ...


class HighlightSink(Protocol):
    def apply(
        self,
        scope: Scope,
        namespace: str,
        line_start: int,
        line_end: int,
        table: HighlightTable,
        options: Mapping[str, Any],
        metadata: Mapping[str, Any],
    ) -> None: ...


class DocumentColorClient(Protocol):
    """
    Request/response protocol client (e.g. a language server connection).

    `request` returns a Future resolving to the raw response mapping
    ({"result": [...]} or {"error": ...}).
    """

    def request(self, method: str, params: Mapping[str, Any]) -> Future: ...


__all__ = [
    "Scope",
    "ColorMatch",
    "GLOBAL_SCOPE",
    "WHOLE_BUFFER",
    "HighlightEntry",
    "HighlightTable",
    "ColorParser",
    "TextSource",
    "HighlightSink",
    "DocumentColorClient",
]

__docformat__ = "google"
