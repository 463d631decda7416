"""
session.py
==========

Does: Drive document-color highlighting per scope: remember the protocol client,
      send `textDocument/documentColor`, merge the response with variable-derived
      utility classes, cache the table and hand it to the highlight sink.
Used By: Editor integrations (attach on client attach, highlight on text/scroll
         events, detach/cleanup on client detach or buffer close).
Returns: Booleans from highlight() telling whether work was scheduled or re-applied.

Notes:
- Each request is tagged with (scope, generation); a response that is not the newest
  one for a still-attached scope is dropped.
- A failed request or response is logged and leaves the last table on screen.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from concurrent.futures import Future
from dataclasses import dataclass
from functools import partial
from itertools import count
from typing import Any, Optional

from css_var_colorizer.colorize.settings import (
    DOCUMENT_COLOR_METHOD,
    NAMESPACE,
    OVERSCAN_LINES,
)
from css_var_colorizer.colorize.types import (
    DocumentColorClient,
    HighlightSink,
    HighlightTable,
    Scope,
    TextSource,
)
from css_var_colorizer.colorize.highlight.merger import MergeResult, merge_highlights
from css_var_colorizer.colorize.highlight.prefixes import get_utility_prefixes
from css_var_colorizer.colorize.utils.log import debug
from css_var_colorizer.colorize.variables.store import VariableStore

__all__ = ["DocumentColorSession", "SCROLL_EVENT", "PROTOCOL_METADATA"]

logger = logging.getLogger(__name__)

SCROLL_EVENT = "scroll"
PROTOCOL_METADATA: Mapping[str, Any] = {"document_color": True}


@dataclass
class _SessionState:
    client: DocumentColorClient
    params: Mapping[str, Any]
    table: Optional[HighlightTable] = None
    cache_highlighted: bool = False
    generation: int = 0


class DocumentColorSession:
    """Per-scope document-color highlighting backed by one VariableStore."""

    def __init__(
        self,
        store: VariableStore,
        text_source: TextSource,
        sink: HighlightSink,
        *,
        prefixes: Optional[Sequence[str]] = None,
        options: Optional[Mapping[str, Any]] = None,
        namespace: str = NAMESPACE,
        overscan: int = OVERSCAN_LINES,
    ) -> None:
        self.store = store
        self.text_source = text_source
        self.sink = sink
        self.prefixes: tuple[str, ...] = (
            tuple(prefixes) if prefixes is not None else get_utility_prefixes()
        )
        self.options: Mapping[str, Any] = dict(options or {})
        self.namespace = namespace
        self.overscan = overscan
        self._states: dict[Scope, _SessionState] = {}
        self._generations = count(1)

    # ------------------------------------------------------------------
    def is_attached(self, scope: Scope) -> bool:
        return scope in self._states

    def cached_table(self, scope: Scope) -> Optional[HighlightTable]:
        state = self._states.get(scope)
        return state.table if state is not None else None

    def attach(
        self,
        scope: Scope,
        client: DocumentColorClient,
        params: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Does: Bind a protocol client to a scope and request its colors right away."""
        if params is None:
            params = {"textDocument": {"uri": f"scope://{scope}"}}
        self._states[scope] = _SessionState(client=client, params=params)
        logger.debug("scope %s: document-color client attached", scope)
        self._request(scope)

    def highlight(
        self,
        scope: Scope,
        line_start: int = 0,
        line_end: int = -1,
        event: Optional[str] = None,
    ) -> bool:
        """
        Does: Refresh highlights for a scope.

        A scroll event re-applies the cached table once instead of asking the server
        again; anything else sends a new request. Detached scopes are a no-op.
        """
        state = self._states.get(scope)
        if state is None:
            return False

        if state.table is not None and not state.cache_highlighted and event == SCROLL_EVENT:
            self.sink.apply(
                scope,
                self.namespace,
                line_start,
                line_end,
                state.table,
                self.options,
                PROTOCOL_METADATA,
            )
            state.cache_highlighted = True
            return True

        self._request(scope)
        return True

    def detach(self, scope: Scope) -> None:
        if self._states.pop(scope, None) is not None:
            logger.debug("scope %s: document-color client detached", scope)

    def cleanup(self, scope: Scope) -> None:
        """Does: Forget everything about a scope (session state and its variables)."""
        self.detach(scope)
        self.store.cleanup(scope)

    # ------------------------------------------------------------------
    def _request(self, scope: Scope) -> None:
        state = self._states[scope]
        state.generation = generation = next(self._generations)
        try:
            future = state.client.request(DOCUMENT_COLOR_METHOD, state.params)
        except Exception as e:
            logger.warning("document color request failed for scope %s: %s", scope, e)
            return
        future.add_done_callback(partial(self._on_response, scope, generation))

    def _on_response(self, scope: Scope, generation: int, future: Future) -> None:
        state = self._states.get(scope)
        if state is None:
            debug(f"scope {scope}: response after detach ignored", topic="highlight")
            return
        if generation != state.generation:
            debug(f"scope {scope}: stale response #{generation} ignored", topic="highlight")
            return

        if future.cancelled():
            debug(f"scope {scope}: request cancelled", topic="highlight")
            return
        exc = future.exception()
        if exc is not None:
            logger.warning("document color request failed for scope %s: %s", scope, exc)
            return

        response = future.result() or {}
        error = response.get("error")
        if error is not None:
            logger.warning("document color error for scope %s: %s", scope, error)
            return

        merged = self._merge(scope, response.get("result") or [])
        state.table = merged.table
        state.cache_highlighted = False
        self.sink.apply(
            scope,
            self.namespace,
            merged.line_start,
            merged.line_end,
            merged.table,
            self.options,
            PROTOCOL_METADATA,
        )

    def _merge(self, scope: Scope, results: Sequence[Mapping[str, Any]]) -> MergeResult:
        variables, _ = self.store.get_resolved_view(scope)
        merged = merge_highlights(
            results,
            variables,
            self.prefixes,
            partial(self.text_source.get_lines, scope),
            overscan=self.overscan,
        )
        debug(
            f"scope {scope}: {sum(len(v) for v in merged.table.values())} highlight(s) "
            f"in [{merged.line_start}, {merged.line_end})",
            topic="highlight",
        )
        return merged
