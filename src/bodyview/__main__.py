#!/usr/bin/python3

"""
Command line entry point for bodyview.
"""

import argparse
import sys
from typing import List, Optional

from .config import load_settings
from .core.editor import BodyEditor, EditorMode
from .core.message import HttpMessage, MessageKind
from .logging_setup import VALID_LEVELS, configure_logging


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="bodyview - Classify, pretty-print and search HTTP message bodies"
    )
    parser.add_argument(
        "files",
        nargs="+",
        type=str,
        help="Files holding raw message bodies"
    )
    kind = parser.add_mutually_exclusive_group()
    kind.add_argument(
        "--request",
        dest="kind",
        action="store_const",
        const=MessageKind.REQUEST,
        help="Treat bodies as editable request bodies (default)"
    )
    kind.add_argument(
        "--response",
        dest="kind",
        action="store_const",
        const=MessageKind.RESPONSE,
        help="Treat bodies as read-only response bodies"
    )
    parser.add_argument(
        "--search",
        metavar="QUERY",
        help="List case-insensitive matches of QUERY"
    )
    parser.add_argument(
        "--color",
        choices=("light", "dark"),
        help="Syntax-highlight output for a light or dark terminal"
    )
    parser.add_argument(
        "--indent",
        type=int,
        help="JSON indentation width"
    )
    parser.add_argument(
        "--no-unescape",
        action="store_true",
        help="Keep \\uXXXX escapes in response bodies"
    )
    parser.add_argument(
        "--log-level",
        choices=VALID_LEVELS,
        type=str.upper,
        help="Log level for diagnostics on stderr"
    )
    parser.set_defaults(kind=MessageKind.REQUEST)
    return parser.parse_args(argv)


def show_body(editor: BodyEditor, filename: str, args: argparse.Namespace) -> None:
    """Print the formatted body and, if requested, its search matches."""

    print(f"{filename}: {editor.charset}, {editor.content_type.value}", file=sys.stderr)

    text = editor.display.text
    if args.color:
        text = editor.highlighter.render_terminal(text, args.color)

    sys.stdout.write(text if text.endswith('\n') else text + '\n')

    if args.search is None:
        return

    matches = editor.search.set_query(args.search)
    print(editor.search_status())

    for _ in matches:
        span = editor.search_next()
        print(f"  {editor.search_status()}  {span.start}-{span.end}")


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the application."""

    args = parse_args(argv)
    configure_logging(args.log_level)

    settings = load_settings().with_overrides(
        json_indent=args.indent,
        unescape_read_only=False if args.no_unescape else None,
    )
    mode = EditorMode.READ_ONLY if args.kind is MessageKind.RESPONSE else EditorMode.EDITABLE

    for filename in args.files:
        try:
            with open(filename, 'rb') as f:
                data = f.read()
        except OSError as e:
            print(f"Error loading {filename}: {e}", file=sys.stderr)
            return 1

        editor = BodyEditor(mode, settings)
        message = HttpMessage(body=data, kind=args.kind)

        if not editor.is_applicable_for(message):
            print(f"{filename}: empty body", file=sys.stderr)
            continue

        editor.set_message(message)
        show_body(editor, filename, args)

    return 0


if __name__ == "__main__":
    sys.exit(main())
