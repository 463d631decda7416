# css_var_colorizer/colorize/__init__.py

"""
colorize.
========

Does: Re-export the public surface of the variable engine, the color parsers and
      the highlight merger.
Used by: Editor integrations, the CLI and tests.
"""
from __future__ import annotations

from .color import ColorMatcher, scan_line, scan_lines
from .highlight import DocumentColorSession, MergeResult, merge_highlights
from .types import (
    GLOBAL_SCOPE,
    WHOLE_BUFFER,
    ColorMatch,
    ColorParser,
    DocumentColorClient,
    HighlightEntry,
    HighlightSink,
    HighlightTable,
    Scope,
    TextSource,
)
from .variables import VariableStore, VarReferenceParser, resolve_declarations

__all__ = [
    "VariableStore",
    "VarReferenceParser",
    "resolve_declarations",
    "ColorMatcher",
    "scan_line",
    "scan_lines",
    "DocumentColorSession",
    "MergeResult",
    "merge_highlights",
    "GLOBAL_SCOPE",
    "WHOLE_BUFFER",
    "ColorMatch",
    "ColorParser",
    "DocumentColorClient",
    "HighlightEntry",
    "HighlightSink",
    "HighlightTable",
    "Scope",
    "TextSource",
]
__docformat__ = "google"
