#!/usr/bin/env python3
"""
tagsig CLI - call signatures from ctags tags files.

Usage:
    tagsig call <text>                   Signature for the call being typed
    tagsig hover <line> <column>         Tooltip for the name under a column
    tagsig extract <text>                Name that would be looked up
    tagsig shorten <path>                Shorten a path for display
    tagsig candidates <name>             Table of matching tags
"""
import argparse
import json
import logging
import sys
from pathlib import Path

from . import __version__
from .modules.core.api import (
    SignatureDisplay,
    cycle,
    format_candidates,
    hover_text,
    lookup,
    signature_for_call,
)
from .modules.core.config import SignatureConfig, load_config, tag_files_from_env
from .modules.core.cycle_state import CycleState
from .modules.core.errors import ERR_USAGE, make_error, make_no_index_error, make_not_found_error
from .modules.core.identifier import call_context, extract
from .modules.core.path_utils import parse_path_rule, shorten
from .modules.core.signature_format import SignatureFormatter
from .modules.core.tag_index import TagIndex, discover_tag_files
from .presets import PRESETS, apply_preset


def _compact(payload: dict) -> str:
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


def _machine_output(result: dict | list, args) -> None:
    """Print a lookup result as JSON for an editor plugin.

    --machine prints one line, {"success": true, "result": ...}, that a plugin
    can read per keystroke; --json pretty-prints the bare result.
    """
    if getattr(args, "machine", False):
        print(_compact({"success": True, "result": result}))
    else:
        print(json.dumps(result, indent=2))


def _fail(error: dict, args) -> None:
    """Report a TAGSIG_ERR_* error and exit 1."""
    if getattr(args, "machine", False):
        print(_compact({"success": False, **error}))
    else:
        print(f"Error: {error['message']}", file=sys.stderr)
    sys.exit(1)


def _load_config(args) -> SignatureConfig:
    config = load_config(args.project)
    if getattr(args, "map", None):
        config.path_rules = config.path_rules + [parse_path_rule(m) for m in args.map]
    if getattr(args, "style", None) is not None:
        config.path_style = args.style
    if getattr(args, "tooltip_only", False):
        config.tooltip_only = True
    if getattr(args, "trim", None) is not None:
        config.display_trim = args.trim
    return config


def _open_index(args) -> TagIndex:
    paths = args.tags or tag_files_from_env()
    if not paths:
        paths = [str(p) for p in discover_tag_files(args.project)]
    readable = [p for p in paths if Path(p).is_file()]
    if not readable:
        _fail(make_no_index_error(paths), args)
    return TagIndex(readable, ignore_case=args.ignore_case)


def _print_display(display: SignatureDisplay) -> None:
    if display.inline:
        print(display.inline)
    if display.tooltip:
        print(display.tooltip)


def _cmd_call(args) -> None:
    config = _load_config(args)
    index = _open_index(args)
    state = CycleState()
    display = signature_for_call(
        state, args.text, index, language=args.lang, config=config, previous_line=args.prev_line
    )
    for _ in range(args.next):
        display = cycle(state, "next", config)

    if args.machine or args.json:
        _machine_output(
            {
                "name": extract(call_context(args.text, args.prev_line)),
                "cursor": state.cursor,
                "candidates": state.candidates,
                "inline": display.inline,
                "tooltip": display.tooltip,
            },
            args,
        )
        return
    if not state:
        sys.exit(1)
    if args.all:
        for line in state.candidates:
            print(line)
        return
    _print_display(display)


def _cmd_hover(args) -> None:
    config = _load_config(args)
    index = _open_index(args)
    text = hover_text(args.line, args.column, index, language=args.lang, config=config)
    if args.machine or args.json:
        _machine_output({"tooltip": text}, args)
        return
    if not text:
        sys.exit(1)
    print(text)


def _cmd_extract(args) -> None:
    name = extract(call_context(args.text, args.prev_line))
    if args.machine or args.json:
        _machine_output({"name": name}, args)
        return
    if not name:
        sys.exit(1)
    print(name)


def _cmd_shorten(args) -> None:
    config = _load_config(args)
    result = shorten(args.path, config.path_rules, config.path_style)
    if args.machine or args.json:
        _machine_output({"path": result}, args)
        return
    print(result)


def _cmd_candidates(args) -> None:
    from rich.console import Console
    from rich.table import Table

    config = _load_config(args)
    index = _open_index(args)
    records = lookup(
        args.name, index, language=args.lang, config=config, require_callable=not args.any_kind
    )
    if not records:
        _fail(make_not_found_error("symbol", args.name), args)

    if args.machine or args.json:
        lines = format_candidates(records, args.lang, config)
        _machine_output(
            [dict(r.to_dict(), display=line) for r, line in zip(records, lines)], args
        )
        return

    formatter = SignatureFormatter(args.lang, config.path_rules, config.path_style)
    table = Table(title=f"{args.name} ({len(records)} tags)")
    table.add_column("#", justify="right")
    table.add_column("Kind")
    table.add_column("Language")
    table.add_column("Declaration")
    table.add_column("Location")
    for i, record in enumerate(records, start=1):
        table.add_row(
            str(i),
            record.kind or "-",
            record.language or "-",
            formatter.declaration(record),
            formatter.location(record),
        )
    Console().print(table)


def _add_lookup_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--tags", "-t", action="append", metavar="FILE",
        help="Tags file to search (repeatable; default: ./tags, ./.tags and parents)",
    )
    p.add_argument("--lang", "-l", help="Editor language of the buffer (e.g. c, cpp, python)")
    p.add_argument("--ignore-case", "-i", action="store_true", help="Case-insensitive tag search")
    _add_path_args(p)


def _add_path_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--map", "-m", action="append", metavar="PREFIX=REPL",
        help="Path prefix substitution (repeatable, applied in order)",
    )
    p.add_argument("--style", type=int, choices=range(8), metavar="0-7", help="Path shortening style bitmask")
    p.add_argument("--preset", choices=sorted(PRESETS), help="Named path shortening style")


def main():
    parser = argparse.ArgumentParser(
        prog="tagsig",
        description="Call signatures from ctags tags files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Version: %(prog)s """ + __version__ + """

Examples:
    tagsig call "total = add("               # Signature of add()
    tagsig call "p->draw(" --lang cpp --all  # Every overload
    tagsig hover "x = Foo::bar(1);" 10       # Tooltip for Foo::bar
    tagsig shorten /usr/include/sys/types.h --preset include-parent

Tags files:
    Generate with: ctags -R --fields=+lS --extras=+q .
    Set TAGSIG_TAGS to a list of tags files to skip discovery.

Configuration:
    .tagsig/config.json in --project (languageMap, pathMapping,
    pathMappingStyle, maxTooltipLines, tooltipOnly, displayTrim).
        """,
    )

    # Global flags
    parser.add_argument(
        "-v", "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--project", "-p", default=".",
        help="Project directory holding .tagsig/config.json and tags",
    )
    parser.add_argument(
        "--machine",
        action="store_true",
        help="Machine-readable output (JSON envelope with error codes)",
    )
    parser.add_argument("--json", action="store_true", help="JSON output")
    parser.add_argument("--verbose", action="store_true", help="Log lookups to stderr")

    # Shell completion support
    try:
        import shtab
        shtab.add_argument_to(parser, ["--print-completion", "-s"])
    except ImportError:
        pass  # shtab is optional

    subparsers = parser.add_subparsers(dest="command", required=True)

    call_p = subparsers.add_parser("call", help="Signature for the call being typed")
    call_p.add_argument("text", help="Line text up to and including '('")
    call_p.add_argument("--prev-line", default="", help="Line above, for a '(' alone on its line")
    call_p.add_argument("--all", "-a", action="store_true", help="Print every candidate")
    call_p.add_argument("--next", "-n", type=int, default=0, metavar="N", help="Cycle forward N times")
    call_p.add_argument("--tooltip-only", action="store_true", help="Print as a tooltip")
    call_p.add_argument("--trim", type=int, metavar="WIDTH", help="Cut the line to WIDTH characters")
    _add_lookup_args(call_p)

    hover_p = subparsers.add_parser("hover", help="Tooltip for the name under a column")
    hover_p.add_argument("line", help="Line text")
    hover_p.add_argument("column", type=int, help="0-based column")
    _add_lookup_args(hover_p)

    extract_p = subparsers.add_parser("extract", help="Name that would be looked up")
    extract_p.add_argument("text", help="Line text up to and including '('")
    extract_p.add_argument("--prev-line", default="", help="Line above, for a '(' alone on its line")

    shorten_p = subparsers.add_parser("shorten", help="Shorten a path for display")
    shorten_p.add_argument("path", help="Path to shorten")
    _add_path_args(shorten_p)

    cand_p = subparsers.add_parser("candidates", help="Table of matching tags")
    cand_p.add_argument("name", help="Symbol name")
    cand_p.add_argument("--any-kind", action="store_true", help="Include non-callable tags")
    _add_lookup_args(cand_p)

    args = parser.parse_args()
    apply_preset(args, args.command)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s", stream=sys.stderr)

    handlers = {
        "call": _cmd_call,
        "hover": _cmd_hover,
        "extract": _cmd_extract,
        "shorten": _cmd_shorten,
        "candidates": _cmd_candidates,
    }
    try:
        handlers[args.command](args)
    except ValueError as e:
        _fail(make_error(ERR_USAGE, str(e)), args)


if __name__ == "__main__":
    main()
