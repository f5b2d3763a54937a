"""Row, highlight, and directory-listing datatypes shared across modules.

Host item payloads are loose mappings; ``entry_from_item`` normalizes them
once at the boundary so the rest of the package only sees ``TreeEntry``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class TreeEntry:
    """One visible row of the host's file tree for a single render pass."""

    path: str
    level: int = 0
    is_tree: bool = False
    is_expanded: bool = False
    is_link: bool = False
    word: str = ""
    tree_path: str | None = None
    size: int | None = None
    time: float | None = None

    @property
    def name_source(self) -> str:
        """Path used for the display name, falling back to the raw word."""
        return self.path or self.word


@dataclass(frozen=True)
class DirEntry:
    """One child reported by a host directory listing."""

    name: str
    is_dir: bool = False
    is_file: bool = True
    is_symlink: bool = False


@dataclass(frozen=True)
class ItemHighlight:
    """Highlight span in UTF-8 byte columns, as the host paints them."""

    name: str
    hl_group: str
    col: int
    width: int


@dataclass
class ColumnText:
    text: str
    highlights: list[ItemHighlight] = field(default_factory=list)


@dataclass(frozen=True)
class HighlightDefinition:
    """Named style: either a direct ``#rrggbb`` foreground or a link."""

    name: str
    guifg: str | None = None
    link: str | None = None


def _as_bool(value: object) -> bool:
    return value if isinstance(value, bool) else False


def _as_str(value: object) -> str:
    return value if isinstance(value, str) else ""


def _as_level(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return max(0, value)


def _as_number(value: object) -> int | float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def entry_from_item(item: Mapping[str, object]) -> TreeEntry:
    """Build a ``TreeEntry`` from a host item mapping.

    Recognized keys: ``word``, ``treePath``, ``isTree``, ``__level``,
    ``__expanded``, ``action`` (``path``, ``isLink``, ``isDirectory``) and
    ``status`` (``size``, ``time``). Missing or wrongly typed values fall back
    to empty/false/zero defaults; sizes and times fall back to ``None``.
    """
    action = item.get("action")
    if not isinstance(action, Mapping):
        action = {}
    status = item.get("status")
    if not isinstance(status, Mapping):
        status = {}

    tree_path = item.get("treePath")
    size = _as_number(status.get("size"))
    return TreeEntry(
        path=_as_str(action.get("path")),
        level=_as_level(item.get("__level")),
        is_tree=_as_bool(item.get("isTree")),
        is_expanded=_as_bool(item.get("__expanded")),
        is_link=_as_bool(action.get("isLink")),
        word=_as_str(item.get("word")),
        tree_path=tree_path if isinstance(tree_path, str) else None,
        size=int(size) if size is not None else None,
        time=_as_number(status.get("time")),
    )


__all__ = [
    "TreeEntry",
    "DirEntry",
    "ItemHighlight",
    "ColumnText",
    "HighlightDefinition",
    "entry_from_item",
]
