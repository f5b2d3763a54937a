"""Public package surface for treecolumn.

Exports the column, its resolvers, and ``main`` for programmatic CLI use.
Most implementation lives in submodules under ``treecolumn``.
"""

from __future__ import annotations

from .column import FilenameColumn
from .config import ColumnParams, params_from_mapping
from .git_status import GitStatusResolver
from .icons import IconDescriptor, StatusDescriptor, icon_for
from .indent import DirectoryScanResolver, LastSiblingResolver
from .types import ColumnText, ItemHighlight, TreeEntry, entry_from_item


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "ColumnParams",
    "ColumnText",
    "DirectoryScanResolver",
    "FilenameColumn",
    "GitStatusResolver",
    "IconDescriptor",
    "ItemHighlight",
    "LastSiblingResolver",
    "StatusDescriptor",
    "TreeEntry",
    "entry_from_item",
    "icon_for",
    "main",
    "params_from_mapping",
]
