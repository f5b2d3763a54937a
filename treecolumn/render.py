"""Filesystem-backed tree rows and terminal rendering of the column.

``build_tree_entries`` plays the host's item model for a local directory;
``render_listing`` drives a ``FilenameColumn`` over those rows the way an
interactive host would and returns printable lines.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from .column import FilenameColumn
from .config import ColumnParams
from .highlight import build_terminal_style, make_formatter, paint_highlights
from .host import TerminalHost
from .indent import scan_order_key, sort_entries, split_parent
from .types import TreeEntry


@dataclass(frozen=True)
class _Child:
    path: Path
    is_dir: bool
    is_link: bool
    size: int | None
    mtime: float | None


def _list_children(directory: Path, show_hidden: bool) -> list[_Child]:
    """Return visible children of ``directory``; unreadable directories are empty."""
    children: list[_Child] = []
    try:
        with os.scandir(directory) as entries:
            for child in entries:
                if not show_hidden and child.name.startswith("."):
                    continue
                try:
                    is_dir = child.is_dir()
                except OSError:
                    is_dir = False
                try:
                    is_link = child.is_symlink()
                except OSError:
                    is_link = False

                size: int | None = None
                mtime: float | None = None
                try:
                    stat = child.stat(follow_symlinks=False)
                    mtime = stat.st_mtime
                    if not is_dir:
                        size = int(stat.st_size)
                except OSError:
                    pass
                children.append(_Child(Path(child.path), is_dir, is_link, size, mtime))
    except OSError:
        return []
    children.sort(key=lambda item: (not item.is_dir, item.path.name.lower()))
    return children


def build_tree_entries(
    root: Path,
    expanded: set[Path] | None = None,
    show_hidden: bool = False,
    max_depth: int | None = 0,
    params: ColumnParams | None = None,
) -> list[TreeEntry]:
    """Build visible rows under ``root`` in display order.

    A directory is expanded when it is in ``expanded`` or its level is below
    ``max_depth`` (``None`` expands everything). Symlinked directories are
    never descended into. Siblings follow the params' sort policy so the rows
    agree with the column's last-sibling computation; in directory-scan mode
    that is ``scan_order_key`` and the sort params are ignored.
    """
    params = params or ColumnParams()
    expanded_paths = {path.resolve() for path in (expanded or set())}
    entries: list[TreeEntry] = []

    def should_expand(child: _Child, level: int) -> bool:
        if not child.is_dir or child.is_link:
            return False
        if max_depth is None or level < max_depth:
            return True
        return child.path.resolve() in expanded_paths

    def walk(directory: Path, level: int) -> None:
        rows: list[tuple[TreeEntry, _Child]] = []
        for child in _list_children(directory, show_hidden):
            path_text = str(child.path)
            entry = TreeEntry(
                path=path_text,
                level=level,
                is_tree=child.is_dir,
                is_expanded=should_expand(child, level),
                is_link=child.is_link,
                word=child.path.name,
                tree_path=path_text,
                size=child.size,
                time=child.mtime,
            )
            rows.append((entry, child))

        by_entry = {id(entry): child for entry, child in rows}
        siblings = [entry for entry, _child in rows]
        if params.scan_directories:
            ordered = sorted(
                siblings,
                key=lambda entry: scan_order_key(entry.word, entry.is_tree and not entry.is_link),
            )
        else:
            ordered = sort_entries(siblings, params.sort, params.sort_trees_first)
        for entry in ordered:
            entries.append(entry)
            if entry.is_expanded:
                walk(by_entry[id(entry)].path, level + 1)

    walk(root.resolve(), 0)
    return entries


def sibling_groups(entries: Sequence[TreeEntry]) -> list[list[TreeEntry]]:
    """Group rows by parent directory, keeping first-seen order."""
    groups: dict[str, list[TreeEntry]] = {}
    for entry in entries:
        parent, _name = split_parent(entry.tree_path or "")
        groups.setdefault(parent, []).append(entry)
    return list(groups.values())


async def render_listing(
    column: FilenameColumn,
    host: TerminalHost,
    entries: Sequence[TreeEntry],
    params: ColumnParams,
    no_color: bool = False,
    true_color: bool = True,
) -> list[str]:
    """Render ``entries`` through ``column`` as terminal lines.

    ``column.on_init`` must already have run so ``host`` holds the highlight
    definitions used for coloring.
    """
    if not params.scan_directories:
        for group in sibling_groups(entries):
            column.last_siblings.recompute_last_siblings(group, params.sort, params.sort_trees_first)
    width = await column.get_length(host, entries, params)

    formatter = None
    if not no_color:
        formatter = make_formatter(build_terminal_style(host.highlights.values()), true_color=true_color)

    lines: list[str] = []
    for entry in entries:
        result = await column.get_text(host, entry, params, 0, width)
        if formatter is None:
            lines.append(result.text.rstrip())
        else:
            lines.append(paint_highlights(result.text, result.highlights, formatter).rstrip())
    return lines


__all__ = ["build_tree_entries", "render_listing", "sibling_groups"]
