# tests/test_highlight_merger.py
from __future__ import annotations

import pytest

from css_var_colorizer.colorize.highlight import (
    find_utility_classes,
    merge_highlights,
    protocol_color_to_hex,
    protocol_entries,
    variable_targets,
)
from css_var_colorizer.colorize.types import WHOLE_BUFFER, HighlightEntry

"""
Tests for highlight/merger.py:
- protocol_color_to_hex / protocol_entries: alpha premultiplication, scan window
- variable_targets / find_utility_classes: naming conventions, literal search
- merge_highlights: both sources kept side by side, no deduplication
"""


# ── Helpers ───────────────────────────────────────────────────────────────────
def _record(line, start, end, red=0.0, green=0.0, blue=0.0, alpha=1.0, end_line=None):
    return {
        "range": {
            "start": {"line": line, "character": start},
            "end": {"line": line if end_line is None else end_line, "character": end},
        },
        "color": {"red": red, "green": green, "blue": blue, "alpha": alpha},
    }


class _Fetcher:
    def __init__(self, lines):
        self.lines = lines
        self.calls = []

    def __call__(self, line_start, line_end):
        self.calls.append((line_start, line_end))
        if line_end == WHOLE_BUFFER:
            return self.lines[line_start:]
        return self.lines[line_start:line_end]


# ── Protocol colors ───────────────────────────────────────────────────────────
@pytest.mark.parametrize(
    "color,expected",
    [
        ({"red": 1, "green": 0, "blue": 0, "alpha": 1}, "ff0000"),
        ({"red": 1, "green": 0.5, "blue": 0, "alpha": 1}, "ff7f00"),
        ({"red": 1, "green": 1, "blue": 1, "alpha": 0.5}, "7f7f7f"),
        ({"red": 1, "green": 1, "blue": 1}, "000000"),  # missing alpha counts as 0
        ({}, "000000"),
    ],
)
def test_protocol_color_to_hex_premultiplies_alpha(color, expected):
    assert protocol_color_to_hex(color) == expected


def test_protocol_entries_window_and_overscan():
    table = {}
    window = protocol_entries(
        [_record(4, 1, 5, red=1), _record(2, 0, 3, blue=1, end_line=3), _record(9, 2, 8, green=1)],
        table,
    )
    assert window == (2, 11)
    assert table == {
        4: [HighlightEntry("ff0000", 1, 5)],
        2: [HighlightEntry("0000ff", 0, 3)],
        9: [HighlightEntry("00ff00", 2, 8)],
    }


def test_protocol_entries_empty_means_whole_buffer():
    table = {}
    assert protocol_entries([], table) == (0, WHOLE_BUFFER)
    assert table == {}


# ── Utility classes ───────────────────────────────────────────────────────────
@pytest.mark.parametrize(
    "name,targets",
    [
        ("primary", ["primary"]),
        ("--primary", ["primary"]),
        ("color-primary", ["color-primary", "primary"]),
        ("color-", ["color-"]),
        ("---", []),
    ],
)
def test_variable_targets(name, targets):
    assert variable_targets(name) == targets


def test_find_utility_classes_non_overlapping_literal():
    assert find_utility_classes("bg-x bg-x", "bg-x") == [(0, 4), (5, 9)]
    assert find_utility_classes("aaaa", "aa") == [(0, 2), (2, 4)]
    assert find_utility_classes("nothing", "bg-x") == []
    # substring of a longer token still matches
    assert find_utility_classes("bg-primary-dark", "bg-primary") == [(0, 10)]


# ── Merge ─────────────────────────────────────────────────────────────────────
def test_merge_retains_protocol_and_local_entries_on_same_span():
    line = '<div class="bg-primary">'
    start = line.index("bg-primary")
    fetch = _Fetcher([line, ""])

    merged = merge_highlights(
        [_record(0, start, start + 10, red=1)],
        {"primary": "00ff00"},
        ("bg",),
        fetch,
    )

    assert merged.table[0] == [
        HighlightEntry("ff0000", start, start + 10),
        HighlightEntry("00ff00", start, start + 10),
    ]
    assert (merged.line_start, merged.line_end) == (0, 2)
    assert fetch.calls == [(0, 2)]


def test_merge_scans_color_prefix_and_strips_hash():
    lines = ["", "text-brand bg-color-brand", "border-brand"]
    merged = merge_highlights(
        [],
        {"color-brand": "#123456"},
        ("bg", "text", "border"),
        _Fetcher(lines),
    )
    assert merged.line_start == 0 and merged.line_end == WHOLE_BUFFER
    assert merged.table == {
        1: [HighlightEntry("123456", 11, 25), HighlightEntry("123456", 0, 10)],
        2: [HighlightEntry("123456", 0, 12)],
    }


def test_merge_offsets_line_numbers_by_window_start():
    fetch = _Fetcher(["l0", "l1", "l2", "ring-ok", "l4", "l5"])
    merged = merge_highlights(
        [_record(2, 0, 1, red=1)],
        {"ok": "abcdef"},
        ("ring",),
        lambda s, e: fetch.lines[s:e],
    )
    assert (merged.line_start, merged.line_end) == (2, 4)
    assert merged.table[3] == [HighlightEntry("abcdef", 0, 7)]


def test_merge_without_variables_does_not_fetch_lines():
    fetch = _Fetcher(["bg-primary"])
    merged = merge_highlights([_record(0, 0, 3, red=1)], {}, ("bg",), fetch)
    assert fetch.calls == []
    assert merged.table == {0: [HighlightEntry("ff0000", 0, 3)]}


def test_merge_custom_overscan():
    merged = merge_highlights([_record(1, 0, 1)], {}, ("bg",), _Fetcher([]), overscan=5)
    assert merged.line_end == 6
