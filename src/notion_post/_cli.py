"""Command-line interface for notion-post."""

from __future__ import annotations

import argparse
import dataclasses
import datetime
import json
import logging
import sys
from pathlib import Path
from typing import Any

from notion_post import (
    DEFAULT_OPTIONS,
    Post,
    PostError,
    __version__,
    create_blocks,
    map_properties,
)


def _read_json(path: Path, parser: argparse.ArgumentParser) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        parser.error(f"cannot read {path}: {exc}")


def _parse_date(value: str) -> datetime.date:
    try:
        return datetime.date.fromisoformat(value)
    except ValueError as exc:
        msg = f"invalid date {value!r}, expected YYYY-MM-DD"
        raise argparse.ArgumentTypeError(msg) from exc


def _cmd_build(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Assemble a post from exported Notion blocks and properties."""
    raw_blocks = _read_json(args.blocks, parser)
    if not isinstance(raw_blocks, list):
        parser.error("blocks input must be a JSON array of Notion blocks")
    raw_properties = _read_json(args.properties, parser)
    if not isinstance(raw_properties, dict):
        parser.error("properties input must be a JSON object")

    overrides: dict[str, Any] = {}
    if args.embed_template is not None:
        overrides["embed_template"] = args.embed_template
    if args.list_indent is not None:
        overrides["list_indent"] = args.list_indent
    options = dataclasses.replace(DEFAULT_OPTIONS, **overrides)

    page_id = args.id or args.blocks.stem
    try:
        blocks = create_blocks(raw_blocks, max_depth=options.max_depth)
        post = Post(
            page_id,
            blocks,
            map_properties(raw_properties),
            date=args.date,
            options=options,
            omit=args.omit,
        )
    except PostError as exc:
        parser.exit(1, f"{parser.prog}: error: {exc}\n")

    if args.output is not None:
        args.output.mkdir(parents=True, exist_ok=True)
        path = post.write_to(args.output)
        sys.stdout.write(f"{path}\n")
    else:
        sys.stdout.write(post.content)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notion-post",
        description="Turn exported Notion pages into Markdown blog posts.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress (repeat for debug output)",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- build ------------------------------------------------------------
    build = subparsers.add_parser(
        "build",
        help="Assemble a post from Notion JSON exports",
        description="Assemble a post from a JSON array of blocks and a JSON object of properties.",
    )
    build.add_argument("blocks", type=Path, help="JSON file with the page's blocks")
    build.add_argument("properties", type=Path, help="JSON file with the page's properties")
    build.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Directory to write the post into (prints to stdout if omitted)",
    )
    build.add_argument("--id", default=None, help="Page ID used in error messages")
    build.add_argument(
        "--date",
        type=_parse_date,
        default=None,
        help="Publication date as YYYY-MM-DD (default: today)",
    )
    build.add_argument(
        "--omit",
        action="append",
        default=[],
        metavar="KEY",
        help="Leave a property out of the frontmatter (repeatable)",
    )
    build.add_argument("--embed-template", default=None, help="Template for embed blocks")
    build.add_argument("--list-indent", type=int, default=None, help="Indent for nested lists")

    return parser


def main(argv: list[str] | None = None) -> None:
    """Entry point for the CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "build":
        _cmd_build(args, parser)
    else:
        parser.print_help()
        sys.exit(2)


if __name__ == "__main__":  # pragma: no cover
    main()
