"""
store.py
========

Does: Own global and per-scope CSS variable definitions, the cached merged view
      per scope, and their invalidation.
Used By: VarReferenceParser (lookups), DocumentColorSession (resolved views), CLI.
Returns: Hex colors (6 lowercase digits, no '#'), resolved views with content hashes.

Notes:
- Local definitions shadow global ones when read through a scope.
- A partial-range update only adds/overwrites; definitions outside the range stay
  until the next whole-buffer update.
"""

from __future__ import annotations

import glob
import logging
import os
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Optional

from css_var_colorizer.colorize.types import (
    GLOBAL_SCOPE,
    WHOLE_BUFFER,
    ColorParser,
    Scope,
    TextSource,
)
from css_var_colorizer.colorize.utils.hashing import hash_definitions
from css_var_colorizer.colorize.utils.log import debug
from css_var_colorizer.colorize.variables.resolution import (
    ResolutionResult,
    iter_declarations,
    resolve_declarations,
)

__all__ = ["VariableStore", "ResolvedView"]
__docformat__ = "google"

logger = logging.getLogger(__name__)

ResolvedView = tuple[dict[str, str], str]


@dataclass
class _ScopeState:
    definitions: dict[str, str] = field(default_factory=dict)
    cached_view: Optional[ResolvedView] = None


class VariableStore:
    """Maps CSS variable names → hex colors, globally and per scope."""

    def __init__(self) -> None:
        self._global: dict[str, str] = {}
        self._scopes: dict[Scope, _ScopeState] = {}

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def get(self, scope: Optional[Scope], name: str) -> Optional[str]:
        state = self._scopes.get(scope) if scope is not None else None
        if state is not None and name in state.definitions:
            return state.definitions[name]
        return self._global.get(name)

    def get_resolved_view(self, scope: Scope) -> ResolvedView:
        """Does: Return (Global ∪ Local(scope), hash), recomputing when the cache was dropped."""
        state = self._scopes.get(scope)
        if state is not None and state.cached_view is not None:
            return state.cached_view

        merged = dict(self._global)
        if state is not None:
            merged.update(state.definitions)
        view = (merged, hash_definitions(merged))

        if state is not None:
            state.cached_view = view
        return view

    def has_scope(self, scope: Scope) -> bool:
        return scope in self._scopes

    def local_definitions(self, scope: Scope) -> dict[str, str]:
        state = self._scopes.get(scope)
        return dict(state.definitions) if state is not None else {}

    def global_definitions(self) -> dict[str, str]:
        return dict(self._global)

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------
    def load_global(self, patterns: Optional[Iterable[str]], color_parser: ColorParser) -> int:
        """
        Does: Replace the global set with every color declaration found in files
        matching the glob patterns. Empty/None patterns leave it untouched.

        Missing or unreadable files are skipped. The parser runs with GLOBAL_SCOPE, so a
        global declaration can reference one read earlier in the same load.

        Returns:
            Number of global definitions after the load.
        """
        patterns = [p for p in (patterns or []) if p]
        if not patterns:
            return len(self._global)

        self._global = {}
        for pattern in patterns:
            files = sorted(glob.glob(os.path.expanduser(pattern), recursive=True))
            if not files:
                debug(f"global pattern {pattern!r} matched no files", topic="vars")
            for path in files:
                lines = _read_lines(path)
                if lines is None:
                    continue
                for entry in iter_declarations(lines):
                    match = color_parser(entry.value, 0, GLOBAL_SCOPE)
                    if match is not None and match[0] is not None and match[1] is not None:
                        self._global[entry.name] = match[1]

        for state in self._scopes.values():
            state.cached_view = None
        logger.debug("Loaded %d global CSS variable(s) from %s", len(self._global), patterns)
        return len(self._global)

    def update_local(
        self,
        scope: Scope,
        line_start: int,
        line_end: int,
        lines: Optional[Sequence[str]],
        color_parser: ColorParser,
        text_source: Optional[TextSource] = None,
    ) -> ResolutionResult:
        """
        Does: Re-parse a line range of a scope into its local definitions.

        A whole-buffer range (0, WHOLE_BUFFER) clears the local set first; any other
        range only adds or overwrites. The cached view is always dropped.

        Args:
            scope: Scope to update (created on first touch).
            line_start: First line of the range.
            line_end: End of the range (exclusive), WHOLE_BUFFER for the whole buffer.
            lines: Text of the range; fetched from `text_source` when None.
            color_parser: Parser used to resolve declaration values.
            text_source: Fallback source for `lines`.

        Raises:
            ValueError: for GLOBAL_SCOPE, which is reserved for global files, or when
                neither `lines` nor `text_source` is given.
        """
        if scope == GLOBAL_SCOPE:
            raise ValueError(f"scope {GLOBAL_SCOPE} is reserved for global definitions")
        if lines is None:
            if text_source is None:
                raise ValueError("update_local needs either lines or a text_source")
            lines = text_source.get_lines(scope, line_start, line_end)

        state = self._scopes.get(scope)
        if state is None:
            state = self._scopes[scope] = _ScopeState()

        if line_start == 0 and line_end == WHOLE_BUFFER:
            state.definitions = {}
        state.cached_view = None

        return resolve_declarations(lines, color_parser, scope, state.definitions)

    def cleanup(self, scope: Scope) -> None:
        self._scopes.pop(scope, None)

    def __repr__(self) -> str:
        return f"VariableStore(global={len(self._global)}, scopes={sorted(self._scopes)!r})"


def _read_lines(path: str) -> Optional[list[str]]:
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return f.read().splitlines()
    except OSError as e:
        debug(f"skipping unreadable global file {path}: {e}", topic="vars")
        return None
