import argparse
import asyncio
import json
import logging
import os
import sys
from typing import Optional

from textview.errors import DataSourceError
from textview.model import TreeDataSource, tree_from_dict
from textview.page import PageComposer
from textview.serializers import Serializer, serializer_registry
from textview.view import TextView

_LOG_FORMAT = "[%(name)s] %(message)s"


async def render_once(
    serializer: Serializer, source: TreeDataSource, page_title: Optional[str] = None
) -> str:
    """Attach *source* to a view, let the loop run its render, return the text.

    Raises:
        DataSourceError: If the render failed and published nothing.
    """
    view = TextView(serializer, source)
    await asyncio.sleep(0)
    if not view.cache.renders:
        raise DataSourceError(f"{type(serializer).__name__} could not render the source")
    if page_title is None:
        return view.text
    composer = PageComposer(title=page_title)
    composer.add_view(view)
    return composer.render()


def cmd_render(args: argparse.Namespace) -> int:
    """Render a JSON tree file in the format selected with ``--format``.

    The JSON layout is the one accepted by
    :func:`textview.model.tree_from_dict`.
    """
    if not getattr(args, "file", None):
        sys.exit("Error: No file provided. Usage: tview.py render FILE")

    if not os.path.isfile(args.file):
        sys.exit(f"Error: File not found: {args.file}")

    with open(args.file, encoding="utf-8") as fh:
        try:
            data = json.load(fh)
        except json.JSONDecodeError as exc:
            sys.exit(f"Error: Invalid JSON in {args.file}: {exc}")

    options = {
        "column_headers": not args.no_headers,
        "row_headers": args.row_headers,
    }
    if args.separator is not None:
        options["separator"] = args.separator
    if args.max_rows is not None:
        options["max_rows"] = args.max_rows

    serializer = serializer_registry.create(args.format, **options)
    try:
        text = asyncio.run(render_once(serializer, tree_from_dict(data), args.page))
    except DataSourceError as exc:
        sys.exit(f"Error: Cannot render {args.file}: {exc}")
    print(text, end="" if text.endswith("\n") else "\n")
    return 0


def _formats_epilog() -> str:
    lines = ["formats:"]
    for key, summary in serializer_registry.summaries().items():
        lines.append(f"  {key:<12}{summary}")
    return "\n".join(lines)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tview.py",
        description="Render tree-tables as CSV or HTML text.",
        epilog=_formats_epilog(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Global options
    parser.add_argument(
        "--format",
        choices=serializer_registry.keys(),
        default="html-table",
        help="Output format (default: html-table).",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log scheduling and rendering details.",
    )

    subparsers = parser.add_subparsers(dest="command")

    # render subcommand
    render = subparsers.add_parser(
        "render",
        help="Render a JSON tree file.",
    )
    render.add_argument(
        "file",
        metavar="FILE",
        help="JSON file describing headers and rows.",
    )
    render.add_argument(
        "--max-rows",
        type=int,
        default=None,
        help="Row cap of HTML tables (default: 100, 0 for none).",
    )
    render.add_argument(
        "--no-headers",
        action="store_true",
        help="Omit the column header row.",
    )
    render.add_argument(
        "--row-headers",
        action="store_true",
        help="Print row headers in front of each row.",
    )
    render.add_argument(
        "--separator",
        default=None,
        help="Field separator (default depends on the format).",
    )
    render.add_argument(
        "--page",
        nargs="?",
        const="",
        default=None,
        metavar="TITLE",
        help="Wrap the output in a complete HTML page.",
    )
    render.set_defaults(func=cmd_render)

    return parser


def main(argv=None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    parser = build_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=_LOG_FORMAT,
    )

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
