import argparse
import json
import logging
import sys


def main(argv=None):
    """CLI: resolve a CSS file's custom properties (plus global files) and list color matches."""
    from .colorize.color import ColorMatcher, scan_lines
    from .colorize.settings import global_file_patterns
    from .colorize.types import WHOLE_BUFFER
    from .colorize.variables import VariableStore

    parser = argparse.ArgumentParser(
        prog="css-var-colorizer",
        description="Resolve CSS custom properties to colors and list colored spans per line.",
    )
    parser.add_argument("file", help="CSS/HTML/any text file to analyze")
    parser.add_argument(
        "--global",
        action="append",
        default=[],
        dest="global_patterns",
        metavar="PATTERN",
        help="Glob pattern of files whose variables are shared (repeatable)",
    )
    parser.add_argument(
        "--no-names",
        action="store_false",
        dest="names",
        help="Do not recognize CSS named colors (red, navy, ...)",
    )
    parser.add_argument("--debug", action="store_true", help="Verbose debug logs")

    args = parser.parse_args(argv)
    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    scope = 1
    store = VariableStore()
    matcher = ColorMatcher(store, names=args.names)

    try:
        with open(args.file, "r", encoding="utf-8", errors="replace") as f:
            lines = f.read().splitlines()
    except OSError as e:
        print(f"❌ Error: cannot read {args.file}: {e}", file=sys.stderr)
        return 1

    store.load_global(global_file_patterns() + args.global_patterns, matcher)
    store.update_local(scope, 0, WHOLE_BUFFER, lines, matcher)
    variables, digest = store.get_resolved_view(scope)
    table = scan_lines(lines, matcher, scope)

    result = {
        "variables": variables,
        "hash": digest,
        "highlights": {
            str(lnum): [[e.rgb_hex, e.start_col, e.end_col] for e in entries]
            for lnum, entries in table.items()
        },
    }
    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
