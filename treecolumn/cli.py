"""Command-line front door for treecolumn.

Renders a directory listing with the filename column (tree indentation, icons,
git status colors) and prints it. Column parameters default from the user's
config file; flags override them.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from dataclasses import replace
from pathlib import Path

from .column import FilenameColumn
from .config import ColumnParams, load_column_params, save_column_params
from .host import GitCommandError, TerminalHost
from .indent import SORT_METHODS
from .render import build_tree_entries, render_listing

logger = logging.getLogger(__name__)


def _nonnegative_int(value: str) -> int:
    """argparse type for non-negative integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Print a directory tree with icons, tree indentation, and git status colors."
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to list. Defaults to current directory.")
    parser.add_argument("--sort", choices=SORT_METHODS, default=None, help="Sibling sort order.")
    parser.add_argument(
        "--trees-first",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="List directories before files.",
    )
    parser.add_argument("--icon-width", type=_nonnegative_int, default=None, help="Cells reserved for the icon.")
    parser.add_argument(
        "--scan-directories",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Decide last siblings by listing parent directories; siblings are then ordered by name and --sort is ignored.",
    )
    parser.add_argument("--depth", type=_nonnegative_int, default=1, help="Expand directories up to this depth.")
    parser.add_argument("--expand-all", action="store_true", help="Expand every directory.")
    parser.add_argument("-a", "--all", action="store_true", help="Show hidden files.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--save-config", action="store_true", help="Persist the effective column parameters.")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, WARNING, ...).")
    return parser


def resolve_params(args: argparse.Namespace, base: ColumnParams) -> ColumnParams:
    """Overlay explicitly given CLI flags onto ``base``."""
    updates: dict[str, object] = {}
    if args.sort is not None:
        updates["sort"] = args.sort
    if args.trees_first is not None:
        updates["sort_trees_first"] = args.trees_first
    if args.icon_width is not None:
        updates["icon_width"] = args.icon_width
    if args.scan_directories is not None:
        updates["scan_directories"] = args.scan_directories
    return replace(base, **updates)


async def render_directory(
    root: Path,
    params: ColumnParams,
    max_depth: int | None,
    show_hidden: bool = False,
    no_color: bool = False,
) -> list[str]:
    """Render ``root`` the way an interactive host would for one refresh."""
    host = TerminalHost(root, show_hidden=show_hidden)
    column = FilenameColumn()
    await column.on_init(host)
    entries = build_tree_entries(root, show_hidden=show_hidden, max_depth=max_depth, params=params)
    return await render_listing(column, host, entries, params, no_color=no_color)


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=str(args.log_level).upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    root = Path(args.path) if args.path is not None else Path.cwd()
    if not root.is_dir():
        raise SystemExit(f"Not a directory: {root}")

    params = resolve_params(args, load_column_params())
    if args.save_config:
        save_column_params(params)

    no_color = args.no_color or not sys.stdout.isatty()
    if params.scan_directories and (params.sort != "none" or params.sort_trees_first):
        logger.warning("directory scan orders siblings by name; ignoring sort=%s", params.sort)

    max_depth = None if args.expand_all else args.depth
    try:
        lines = asyncio.run(render_directory(root, params, max_depth, show_hidden=args.all, no_color=no_color))
    except (OSError, GitCommandError, asyncio.TimeoutError) as exc:
        raise SystemExit(f"Cannot render {root}: {exc}") from exc
    for line in lines:
        sys.stdout.write(line + "\n")


if __name__ == "__main__":
    main()
