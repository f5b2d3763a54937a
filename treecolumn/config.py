"""Column parameters and persistent JSON config helpers.

Parameters arrive from the host as loose mappings (camelCase keys) or from
the user's config file (snake_case keys). Every field is validated on its own
and falls back to its default when missing or malformed.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from platformdirs import user_config_dir

from .indent import SORT_METHODS

APP_NAME = "treecolumn"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH

DEFAULT_ICON_WIDTH = 3


@dataclass(frozen=True)
class ColumnParams:
    sort: str = "none"
    sort_trees_first: bool = False
    icon_width: int = DEFAULT_ICON_WIDTH
    collapsed_icon: str = ""
    expanded_icon: str = ""
    link_icon: str = ""
    scan_directories: bool = False

    def icon_overrides(self) -> dict[str, str]:
        """Glyph replacements for special icon kinds, empty values omitted."""
        overrides = {
            "directory": self.collapsed_icon,
            "directory_expanded": self.expanded_icon,
            "link": self.link_icon,
        }
        return {kind: glyph for kind, glyph in overrides.items() if glyph}


_KEY_ALIASES = {
    "sort": "sort",
    "sortTreesFirst": "sort_trees_first",
    "sort_trees_first": "sort_trees_first",
    "iconWidth": "icon_width",
    "icon_width": "icon_width",
    "collapsedIcon": "collapsed_icon",
    "collapsed_icon": "collapsed_icon",
    "expandedIcon": "expanded_icon",
    "expanded_icon": "expanded_icon",
    "linkIcon": "link_icon",
    "link_icon": "link_icon",
    "scanDirectories": "scan_directories",
    "scan_directories": "scan_directories",
}


def _coerce_sort(value: object, default: str) -> str:
    if not isinstance(value, str):
        return default
    candidate = value.strip().lower()
    return candidate if candidate in SORT_METHODS else default


def _coerce_nonnegative_int(value: object, default: int) -> int:
    """Booleans and non-integers are invalid and yield ``default``."""
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    return max(0, value)


def _coerce_bool(value: object, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def _coerce_str(value: object, default: str) -> str:
    return value if isinstance(value, str) else default


_COERCERS = {
    "sort": _coerce_sort,
    "sort_trees_first": _coerce_bool,
    "icon_width": _coerce_nonnegative_int,
    "collapsed_icon": _coerce_str,
    "expanded_icon": _coerce_str,
    "link_icon": _coerce_str,
    "scan_directories": _coerce_bool,
}


def params_from_mapping(raw: Mapping[str, object] | None, base: ColumnParams | None = None) -> ColumnParams:
    """Overlay recognized keys of ``raw`` onto ``base`` (defaults when omitted).

    Unknown keys are ignored; invalid values keep the base value.
    """
    params = base or ColumnParams()
    if not raw:
        return params
    updates: dict[str, object] = {}
    for key, value in raw.items():
        field_name = _KEY_ALIASES.get(key)
        if field_name is None:
            continue
        updates[field_name] = _COERCERS[field_name](value, getattr(params, field_name))
    return replace(params, **updates)


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON, ignoring write errors."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def load_column_params() -> ColumnParams:
    """Return column params from the ``column`` object of the config file."""
    section = load_config().get("column")
    return params_from_mapping(section if isinstance(section, dict) else None)


def save_column_params(params: ColumnParams) -> None:
    config = load_config()
    config["column"] = {
        "sort": params.sort,
        "sort_trees_first": params.sort_trees_first,
        "icon_width": params.icon_width,
        "collapsed_icon": params.collapsed_icon,
        "expanded_icon": params.expanded_icon,
        "link_icon": params.link_icon,
        "scan_directories": params.scan_directories,
    }
    save_config(config)


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "ColumnParams",
    "load_column_params",
    "load_config",
    "params_from_mapping",
    "save_column_params",
    "save_config",
]
