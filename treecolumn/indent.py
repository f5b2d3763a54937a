"""Tree-indentation glyphs and last-sibling bookkeeping.

``LastSiblingResolver`` records, per parent directory, which child of the
deepest visible tier sorts last. ``DirectoryScanResolver`` answers the same
question by listing the parent directory through the host instead.
Both turn a path and nesting level into box-drawing indentation.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable

from .host import Host
from .types import DirEntry, TreeEntry

logger = logging.getLogger(__name__)

SORT_METHODS = ("none", "extension", "size", "time", "filename")

BRANCH_GLYPH = "├ "
CORNER_GLYPH = "└ "
PIPE_GLYPH = "│ "
BLANK_GLYPH = "  "


def _filename_key(entry: TreeEntry) -> str:
    return entry.tree_path if entry.tree_path is not None else entry.word


def _extension_key(entry: TreeEntry) -> str:
    return os.path.splitext(os.path.basename(entry.word))[1]


def _size_key(entry: TreeEntry) -> float:
    return entry.size if entry.size is not None else -1


def _time_key(entry: TreeEntry) -> float:
    return entry.time if entry.time is not None else -1


_SORT_KEYS: dict[str, Callable[[TreeEntry], object]] = {
    "extension": _extension_key,
    "size": _size_key,
    "time": _time_key,
    "filename": _filename_key,
}


def sort_entries(entries: Iterable[TreeEntry], sort: str, sort_trees_first: bool = False) -> list[TreeEntry]:
    """Return ``entries`` stably ordered by ``sort``.

    Unknown sort names behave like ``"none"``. With ``sort_trees_first`` all
    directories move ahead of all files, each group keeping its order.
    """
    key = _SORT_KEYS.get(sort.lower())
    ordered = sorted(entries, key=key) if key is not None else list(entries)
    if sort_trees_first:
        ordered = [entry for entry in ordered if entry.is_tree] + [entry for entry in ordered if not entry.is_tree]
    return ordered


def split_parent(path: str) -> tuple[str, str]:
    """Split ``path`` on ``/`` into ``(parent, name)``."""
    parent, _sep, name = path.rpartition("/")
    return parent, name


def _ancestor_steps(path: str, level: int) -> list[tuple[str, str]]:
    """Return ``(parent, name)`` pairs from the entry outward, at most ``level``."""
    segments = path.split("/")
    steps: list[tuple[str, str]] = []
    for _ in range(level):
        if not segments:
            break
        name = segments.pop()
        steps.append(("/".join(segments), name))
    return steps


def compose_indent(steps: list[tuple[str, str]], last_name_for: Callable[[str], str]) -> str:
    """Build the glyph prefix for ancestor ``steps`` (innermost first)."""
    indents: list[str] = []
    for index, (parent, name) in enumerate(steps):
        is_last = last_name_for(parent) == name
        if index == 0:
            indents.insert(0, CORNER_GLYPH if is_last else BRANCH_GLYPH)
        else:
            indents.insert(0, BLANK_GLYPH if is_last else PIPE_GLYPH)
    return "".join(indents)


class LastSiblingResolver:
    """Last-child table rebuilt from the deepest tier of each visible batch."""

    def __init__(self) -> None:
        self._last_names: dict[str, str] = {}

    @property
    def last_names(self) -> dict[str, str]:
        return dict(self._last_names)

    def last_name(self, parent: str) -> str:
        return self._last_names.get(parent, "")

    def recompute_last_siblings(
        self,
        entries: Iterable[TreeEntry],
        sort: str = "none",
        sort_trees_first: bool = False,
    ) -> None:
        """Record the last child of the deepest tier in ``entries``.

        Only one parent is updated per call: the parent of the final entry of
        the sorted deepest tier. Callers rendering several open directories at
        the same depth call this once per sibling group.
        """
        batch = list(entries)
        if not batch:
            return
        deepest = max(entry.level for entry in batch)
        tier = [entry for entry in batch if entry.level == deepest]
        ordered = sort_entries(tier, sort, sort_trees_first)
        winner = ordered[-1]
        parent, name = split_parent(winner.tree_path or "")
        self._last_names[parent] = name

    def indent_for(self, path: str, level: int) -> str:
        return compose_indent(_ancestor_steps(path, level), self.last_name)

    def clear(self) -> None:
        self._last_names = {}


def scan_order_key(name: str, is_dir: bool) -> tuple[bool, str]:
    """Sibling order implied by directory scans: directories, then files, by raw name."""
    return (not is_dir, name)


def _scan_winner(children: Iterable[DirEntry]) -> DirEntry | None:
    """Pick the child drawn last under ``scan_order_key``."""
    return max(children, key=lambda child: scan_order_key(child.name, child.is_dir), default=None)


class DirectoryScanResolver:
    """Last-child table filled lazily from host directory listings."""

    def __init__(self) -> None:
        self._last_names: dict[str, str] = {}

    def last_name(self, parent: str) -> str:
        return self._last_names.get(parent, "")

    async def _ensure_scanned(self, host: Host, parent: str) -> None:
        if parent in self._last_names:
            return
        children = await host.list_directory(parent)
        winner = _scan_winner(children)
        logger.debug("scanned %s: last child %r", parent, winner.name if winner else None)
        if winner is not None:
            self._last_names[parent] = winner.name

    async def indent_for(self, host: Host, path: str, level: int) -> str:
        steps = _ancestor_steps(path, level)
        for parent, _name in steps:
            await self._ensure_scanned(host, parent)
        return compose_indent(steps, self.last_name)

    def clear(self) -> None:
        self._last_names = {}


__all__ = [
    "SORT_METHODS",
    "LastSiblingResolver",
    "DirectoryScanResolver",
    "compose_indent",
    "scan_order_key",
    "sort_entries",
    "split_parent",
]
