"""
highlight.
=========

Does: Combine protocol-reported color ranges with variable-derived utility-class
      matches and manage per-scope document-color sessions.
Used By: Editor integrations.
"""

from .merger import (
    MergeResult,
    find_utility_classes,
    merge_highlights,
    protocol_color_to_hex,
    protocol_entries,
    variable_targets,
)
from .prefixes import get_utility_prefixes
from .session import PROTOCOL_METADATA, SCROLL_EVENT, DocumentColorSession

__all__ = [
    # merger
    "MergeResult",
    "merge_highlights",
    "protocol_color_to_hex",
    "protocol_entries",
    "variable_targets",
    "find_utility_classes",
    # prefixes
    "get_utility_prefixes",
    # session
    "DocumentColorSession",
    "SCROLL_EVENT",
    "PROTOCOL_METADATA",
]
