"""Filename column: indentation, icon, name, and git status per tree row.

The host calls ``on_init`` once, ``get_length`` once per visible batch, and
``get_text`` for every row of that batch. All host interaction is awaited;
failures from the host propagate to the caller unchanged.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence

from .ansi import byte_length
from .config import ColumnParams
from .git_status import GitStatusResolver
from .highlight import highlight_definitions
from .host import Host
from .icons import highlight_name, icon_for
from .indent import DirectoryScanResolver, LastSiblingResolver
from .types import ColumnText, ItemHighlight, TreeEntry

logger = logging.getLogger(__name__)

ICON_HIGHLIGHT = "column-filename-icon"
NAME_HIGHLIGHT = "column-filename-name"
LINK_SEPARATOR = " -> "


def _basename(path: str) -> str:
    stripped = path.rstrip("/")
    return os.path.basename(stripped) if stripped else path


class FilenameColumn:
    """Per-listing column state: last-sibling tables and the git status table."""

    def __init__(self) -> None:
        self.last_siblings = LastSiblingResolver()
        self.directory_scan = DirectoryScanResolver()
        self.git_status = GitStatusResolver()
        self.repo_root: str | None = None

    async def on_init(self, host: Host) -> None:
        for definition in highlight_definitions():
            await host.register_highlight(definition)
        await self.init_git(host)
        await self.refresh_git_status(host)

    async def init_git(self, host: Host) -> None:
        """Resolve the repository root once; ``""`` marks a non-repository."""
        if self.repo_root is not None:
            return
        self.repo_root = (await host.repo_root()).strip()

    async def refresh_git_status(self, host: Host) -> bool:
        """Fetch porcelain text and rebuild the status table if it changed."""
        if not self.repo_root:
            return False
        raw = await host.porcelain_status()
        changed = self.git_status.refresh(raw, self.repo_root)
        if changed:
            logger.debug("git status changed under %s", self.repo_root)
        return changed

    async def display_name(self, host: Host, entry: TreeEntry) -> str:
        name = _basename(entry.name_source) + ("/" if entry.is_tree else "")
        if entry.is_link and entry.path:
            name += LINK_SEPARATOR + await host.real_path(entry.path)
        return name

    async def indent_for(self, host: Host, entry: TreeEntry, params: ColumnParams) -> str:
        if params.scan_directories:
            return await self.directory_scan.indent_for(host, entry.path, entry.level)
        return self.last_siblings.indent_for(entry.path, entry.level)

    async def get_length(self, host: Host, entries: Sequence[TreeEntry], params: ColumnParams) -> int:
        """Return the widest row of the batch in display cells.

        Also records the batch's last siblings and refreshes git status, which
        is a hash comparison when the porcelain text did not change.
        """
        if not params.scan_directories:
            self.last_siblings.recompute_last_siblings(entries, params.sort, params.sort_trees_first)
        await self.refresh_git_status(host)

        widest = 0
        for entry in entries:
            name = await self.display_name(host, entry)
            # indent + icon + spacer + name
            length = entry.level * 2 + params.icon_width + 1 + await host.strwidth(name)
            widest = max(widest, length)
        return widest

    async def get_text(
        self,
        host: Host,
        entry: TreeEntry,
        params: ColumnParams,
        start_col: int,
        end_col: int,
    ) -> ColumnText:
        name = await self.display_name(host, entry)
        indent = await self.indent_for(host, entry, params)
        icon = icon_for(name, entry.is_expanded, entry.is_tree, entry.is_link, params.icon_overrides())

        indent_bytes = byte_length(indent)
        icon_bytes = byte_length(icon.glyph)
        highlights = [
            ItemHighlight(
                name=ICON_HIGHLIGHT,
                hl_group=highlight_name(icon.group),
                col=start_col + indent_bytes,
                width=icon_bytes,
            )
        ]

        status = self.git_status.status_for(entry.path + ("/" if entry.is_tree else ""))
        if status is not None:
            highlights.append(
                ItemHighlight(
                    name=NAME_HIGHLIGHT,
                    hl_group=highlight_name(status.group),
                    col=start_col + indent_bytes + icon_bytes + 1,
                    width=byte_length(name),
                )
            )

        text = f"{indent}{icon.glyph} {name}"
        width = await host.strwidth(text)
        padding = " " * max(0, end_col - start_col - width)
        return ColumnText(text=text + padding, highlights=highlights)


__all__ = ["FilenameColumn", "ICON_HIGHLIGHT", "NAME_HIGHLIGHT"]
