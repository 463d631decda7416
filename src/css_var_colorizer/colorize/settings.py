"""
settings.py
===========

Does: Expose env-overridable configuration for the variable engine and the
      document-color session.
Used By: VariableStore, DocumentColorSession, CLI.
"""

from __future__ import annotations

import os

__all__ = [
    "GLOBAL_FILE_PATTERNS",
    "MAX_RESOLUTION_PASSES",
    "OVERSCAN_LINES",
    "NAMESPACE",
    "DOCUMENT_COLOR_METHOD",
    "global_file_patterns",
]

# ── Config (env-overridable) ─────────────────────────────────────────────────
# Extra passes after the direct scan; bounds work on cyclic/deep var() chains.
MAX_RESOLUTION_PASSES = int(os.getenv("CSS_VAR_COLORIZER_MAX_PASSES", "3"))
# Lines added below the last protocol-reported line when scanning for utility classes.
OVERSCAN_LINES = int(os.getenv("CSS_VAR_COLORIZER_OVERSCAN", "2"))
NAMESPACE = os.getenv("CSS_VAR_COLORIZER_NAMESPACE", "css_var_colorizer_document_color")

DOCUMENT_COLOR_METHOD = "textDocument/documentColor"


def global_file_patterns() -> list[str]:
    """Does: Read os.pathsep-separated glob patterns from CSS_VAR_COLORIZER_GLOBAL_FILES."""
    raw = os.getenv("CSS_VAR_COLORIZER_GLOBAL_FILES", "")
    return [p.strip() for p in raw.split(os.pathsep) if p.strip()]


GLOBAL_FILE_PATTERNS = global_file_patterns()
