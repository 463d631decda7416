# tests/test_variables_resolution.py
"""Tests for the declaration scanner and the bounded multi-pass resolver."""

from __future__ import annotations

import pytest

from css_var_colorizer.colorize.color import ColorMatcher
from css_var_colorizer.colorize.types import WHOLE_BUFFER
from css_var_colorizer.colorize.utils import log as LOG
from css_var_colorizer.colorize.variables import (
    PendingEntry,
    VariableStore,
    iter_declarations,
    resolve_declarations,
)

SCOPE = 7


@pytest.fixture
def store():
    return VariableStore()


@pytest.fixture
def matcher(store):
    return ColorMatcher(store)


def _chain(depth: int) -> list[str]:
    """--v0: var(--v1); ... --v{depth-1}: #00ff00; declared in reference order."""
    lines = [f"--v{i}: var(--v{i + 1});" for i in range(depth - 1)]
    lines.append(f"--v{depth - 1}: #00ff00;")
    return lines


# ---------- declaration grammar ----------
@pytest.mark.parametrize(
    "line,expected",
    [
        ("--primary: #ff0000;", [("primary", "#ff0000")]),
        (":root{--a:#fff}", [("a", "#fff")]),
        ("  --spaced   :   rgb(1, 2, 3)   ;", [("spaced", "rgb(1, 2, 3)")]),
        ("--a: red; --b-2: blue;", [("a", "red"), ("b-2", "blue")]),
        ("color: var(--primary);", []),
        ("--unterminated: #fff", []),
    ],
)
def test_iter_declarations_grammar(line, expected):
    assert [tuple(e) for e in iter_declarations([line])] == expected


# ---------- multi-pass resolution ----------
def test_three_level_chain_resolves_in_one_update(store, matcher):
    lines = ["--a: var(--b);", "--b: var(--c);", "--c: #00ff00;"]
    result = store.update_local(SCOPE, 0, WHOLE_BUFFER, lines, matcher)

    assert store.get(SCOPE, "a") == "00ff00"
    assert store.get(SCOPE, "b") == "00ff00"
    assert result.resolved == 3
    assert result.dropped == ()
    assert result.passes == 2


def test_depth_five_chain_exhausts_pass_budget(store, matcher):
    result = store.update_local(SCOPE, 0, WHOLE_BUFFER, _chain(5), matcher)

    assert store.get(SCOPE, "v4") == "00ff00"
    assert store.get(SCOPE, "v1") == "00ff00"
    assert store.get(SCOPE, "v0") is None
    assert result.passes == 3
    assert result.dropped == (PendingEntry("v0", "var(--v1)"),)


def test_dropped_entry_resolves_on_next_update(store, matcher):
    store.update_local(SCOPE, 0, WHOLE_BUFFER, _chain(5), matcher)
    assert store.get(SCOPE, "v0") is None

    # v1..v4 are known now, so a partial re-parse of the first line resolves v0
    store.update_local(SCOPE, 0, 1, _chain(5)[:1], matcher)
    assert store.get(SCOPE, "v0") == "00ff00"


def test_backward_references_resolve_in_first_pass(store, matcher):
    lines = ["--base: #0000ff;", "--alias: var(--base);"]
    result = store.update_local(SCOPE, 0, WHOLE_BUFFER, lines, matcher)
    assert store.get(SCOPE, "alias") == "0000ff"
    assert result.passes == 0


def test_cycle_is_dropped_silently(store, matcher):
    lines = ["--x: var(--y);", "--y: var(--x);", "--z: #123123;"]
    result = store.update_local(SCOPE, 0, WHOLE_BUFFER, lines, matcher)

    assert store.get(SCOPE, "x") is None
    assert store.get(SCOPE, "y") is None
    assert store.get(SCOPE, "z") == "123123"
    # first retry pass resolves nothing → early exit
    assert result.passes == 1
    assert {e.name for e in result.dropped} == {"x", "y"}


def test_no_retry_when_nothing_resolved_directly(store, matcher):
    lines = ["--a: var(--b);", "--b: 10px;"]
    result = store.update_local(SCOPE, 0, WHOLE_BUFFER, lines, matcher)
    assert result.resolved == 0
    assert result.passes == 0
    assert store.local_definitions(SCOPE) == {}


def test_non_color_values_are_never_stored(store, matcher):
    lines = ["--gap: 4px;", "--font: Arial, sans-serif;", "--ok: teal;"]
    store.update_local(SCOPE, 0, WHOLE_BUFFER, lines, matcher)
    assert store.local_definitions(SCOPE) == {"ok": "008080"}


def test_custom_parser_receives_value_offset_and_scope():
    calls = []

    def parser(text, offset, scope):
        calls.append((text, offset, scope))
        return (len(text), "abcdef") if text == "magic" else None

    definitions = {}
    resolve_declarations(["--m: magic;", "--n: plain;"], parser, 3, definitions)
    assert definitions == {"m": "abcdef"}
    assert calls[:2] == [("magic", 0, 3), ("plain", 0, 3)]


def test_custom_max_passes():
    definitions = {}

    def parser(text, offset, scope):
        if text.startswith("var(--"):
            name = text[len("var(--"):-1]
            return (len(text), definitions[name]) if name in definitions else None
        return (len(text), "00ff00") if text == "#0f0" else None

    lines = ["--a: var(--b);", "--b: var(--c);", "--c: #0f0;"]
    result = resolve_declarations(lines, parser, SCOPE, definitions, max_passes=1)
    assert "a" not in definitions
    assert definitions["b"] == "00ff00"
    assert result.passes == 1


def test_dropped_entries_reported_on_debug_topic(store, matcher, monkeypatch, capsys):
    monkeypatch.setenv("CSS_VAR_COLORIZER_DEBUG_TOPICS", "vars")
    LOG.reload_topics()
    try:
        store.update_local(SCOPE, 0, WHOLE_BUFFER, ["--c: #fff;", "--x: var(--nope);"], matcher)
    finally:
        monkeypatch.delenv("CSS_VAR_COLORIZER_DEBUG_TOPICS")
        LOG.reload_topics()
    assert "dropped 1 unresolved declaration(s): x" in capsys.readouterr().err
