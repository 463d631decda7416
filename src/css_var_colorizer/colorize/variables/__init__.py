"""
variables.
=========

Does: Group the CSS variable engine: the scoped store, the multi-pass resolver
      and the var() reference parser.
Used By: Color matchers, the document-color session and the CLI.
"""

from .reference import VAR_REFERENCE_RE, VarReferenceParser
from .resolution import (
    DECLARATION_RE,
    PendingEntry,
    ResolutionResult,
    iter_declarations,
    resolve_declarations,
)
from .store import ResolvedView, VariableStore

__all__ = [
    # store
    "VariableStore",
    "ResolvedView",
    # resolution
    "DECLARATION_RE",
    "PendingEntry",
    "ResolutionResult",
    "iter_declarations",
    "resolve_declarations",
    # references
    "VAR_REFERENCE_RE",
    "VarReferenceParser",
]
