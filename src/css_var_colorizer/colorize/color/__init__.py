"""
color.
=====

Does: Aggregate the default color parsers and the line scanner.
Used By: VariableStore callers, the document-color session and the CLI.
Returns: Parser callables and scan helpers; no side effects.
"""

from .parsers import (
    ColorMatcher,
    parse_hex,
    parse_named_color,
    parse_rgb_function,
)
from .scanner import scan_line, scan_lines

__all__ = [
    # parsers
    "ColorMatcher",
    "parse_hex",
    "parse_rgb_function",
    "parse_named_color",
    # scanning
    "scan_line",
    "scan_lines",
]
