"""
resolution.py
=============

Does: Scan CSS custom-property declarations (`--name: value;` / `--name: value}`)
      and resolve their values to colors with a bounded multi-pass loop, so that
      var() chains declared in any order still resolve.
Used By: VariableStore.update_local (local pass) and VariableStore.load_global (scan only).
Returns: Declarations as (name, value) pairs; ResolutionResult summaries.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator, MutableMapping
from typing import NamedTuple, Optional

from css_var_colorizer.colorize.settings import MAX_RESOLUTION_PASSES
from css_var_colorizer.colorize.types import ColorParser, Scope
from css_var_colorizer.colorize.utils.log import debug

__all__ = [
    "DECLARATION_RE",
    "PendingEntry",
    "ResolutionResult",
    "iter_declarations",
    "resolve_declarations",
]
__docformat__ = "google"

logger = logging.getLogger(__name__)

# Value is the shortest run up to ';' or '}', trimmed on both sides.
DECLARATION_RE = re.compile(r"--(?P<name>[A-Za-z0-9-]+)\s*:\s*(?P<value>.*?)\s*[;}]")


class PendingEntry(NamedTuple):
    name: str
    value: str


class ResolutionResult(NamedTuple):
    resolved: int
    dropped: tuple[PendingEntry, ...]
    passes: int


def iter_declarations(lines: Iterable[str]) -> Iterator[PendingEntry]:
    """Does: Yield every (name, raw value) declaration found in the lines, in order."""
    for line in lines:
        for m in DECLARATION_RE.finditer(line):
            yield PendingEntry(m.group("name"), m.group("value"))


def _try_parse(color_parser: ColorParser, value: str, scope: Optional[Scope]) -> Optional[str]:
    match = color_parser(value, 0, scope)
    if match is None:
        return None
    end, rgb_hex = match
    if end is None or rgb_hex is None:
        return None
    return rgb_hex


def resolve_declarations(
    lines: Iterable[str],
    color_parser: ColorParser,
    scope: Scope,
    definitions: MutableMapping[str, str],
    *,
    max_passes: int = MAX_RESOLUTION_PASSES,
) -> ResolutionResult:
    """
    Does: Resolve declarations from `lines` into `definitions` in place.

    Pass 1 stores every value the parser recognizes directly and defers the rest.
    When pass 1 stored anything, up to `max_passes` further passes retry the deferred
    entries (the parser may now resolve their var() against freshly stored names),
    stopping as soon as one pass makes no progress. Entries left after that are
    dropped for this cycle; cycles are not detected, they just run out of passes.

    Args:
        lines: Buffer lines to scan.
        color_parser: Parser invoked as color_parser(value, 0, scope).
        scope: Scope whose definitions are being built.
        definitions: Target mapping (the scope's local set).
        max_passes: Extra passes after the direct scan.

    Returns:
        ResolutionResult with the number of stored values, the dropped entries and
        the number of extra passes run.
    """
    pending: list[PendingEntry] = []
    resolved = 0

    for entry in iter_declarations(lines):
        rgb_hex = _try_parse(color_parser, entry.value, scope)
        if rgb_hex is not None:
            definitions[entry.name] = rgb_hex
            resolved += 1
        else:
            pending.append(entry)

    changed = resolved > 0
    passes = 0
    # Skipped entirely when the direct scan stored nothing.
    while pending and changed and passes < max_passes:
        changed = False
        still_pending: list[PendingEntry] = []
        for entry in pending:
            rgb_hex = _try_parse(color_parser, entry.value, scope)
            if rgb_hex is not None:
                definitions[entry.name] = rgb_hex
                resolved += 1
                changed = True
            else:
                still_pending.append(entry)
        pending = still_pending
        passes += 1

    if pending:
        debug(
            f"scope {scope}: dropped {len(pending)} unresolved declaration(s): "
            + ", ".join(e.name for e in pending),
            topic="vars",
        )
    logger.debug("scope %s: resolved %d declaration(s) in %d extra pass(es)", scope, resolved, passes)
    return ResolutionResult(resolved, tuple(pending), passes)
