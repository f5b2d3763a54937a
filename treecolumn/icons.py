"""Static icon, palette, and git-status tables.

Colors are either a direct style name (``"Normal"``) or a ``!name`` reference
into ``COLORS``; ``resolve_color`` turns references into concrete values.
Glyphs are Nerd Font private-use code points.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from types import MappingProxyType

HIGHLIGHT_PREFIX = "treecolumn_"
DEFAULT_STYLE = "Normal"


@dataclass(frozen=True)
class IconDescriptor:
    glyph: str
    group: str
    color: str


@dataclass(frozen=True)
class StatusDescriptor:
    """Git status display data.

    A lower ``rank`` means higher priority. Status lookup never consults it;
    prefix matches are settled by the raw code instead.
    """

    rank: int
    group: str
    color: str


COLORS = MappingProxyType(
    {
        "default": DEFAULT_STYLE,
        "aqua": "#3AFFDB",
        "beige": "#F5C06F",
        "blue": "#689FB6",
        "brown": "#905532",
        "darkBlue": "#44788E",
        "darkOrange": "#F16529",
        "green": "#8FAA54",
        "lightGreen": "#31B53E",
        "lightPurple": "#834F79",
        "orange": "#D4843E",
        "pink": "#CB6F6F",
        "purple": "#834F79",
        "red": "#AE403F",
        "salmon": "#EE6E73",
        "yellow": "#F09F17",
    }
)

PALETTE = MappingProxyType({name: f"!{name}" for name in COLORS})

DEFAULT_FILE_ICON = IconDescriptor("\ue612", "file", DEFAULT_STYLE)

SPECIAL_ICONS = MappingProxyType(
    {
        "directory_expanded": IconDescriptor("\ue5fe", "special_directory_expanded", PALETTE["green"]),
        "directory_link": IconDescriptor("\uf482", "special_directory_link", PALETTE["green"]),
        "directory": IconDescriptor("\ue5ff", "special_directory", PALETTE["green"]),
        "link": IconDescriptor("\uf0c1", "special_link", PALETTE["green"]),
    }
)

EXTENSION_ICONS = MappingProxyType(
    {
        "html": IconDescriptor("\ue60e", "file_html", PALETTE["darkOrange"]),
        "htm": IconDescriptor("\ue60e", "file_htm", PALETTE["darkOrange"]),
        "sass": IconDescriptor("\ue603", "file_sass", PALETTE["default"]),
        "scss": IconDescriptor("\ue603", "file_scss", PALETTE["pink"]),
        "css": IconDescriptor("\ue614", "file_css", PALETTE["blue"]),
        "md": IconDescriptor("\ue609", "file_md", PALETTE["yellow"]),
        "markdown": IconDescriptor("\ue609", "file_markdown", PALETTE["yellow"]),
        "json": IconDescriptor("\ue60b", "file_json", PALETTE["beige"]),
        "js": IconDescriptor("\ue60c", "file_js", PALETTE["beige"]),
        "rb": IconDescriptor("\ue791", "file_rb", PALETTE["red"]),
        "php": IconDescriptor("\ue608", "file_php", PALETTE["purple"]),
        "py": IconDescriptor("\ue606", "file_py", PALETTE["yellow"]),
        "pyc": IconDescriptor("\ue606", "file_pyc", PALETTE["yellow"]),
        "vim": IconDescriptor("\ue62b", "file_vim", PALETTE["green"]),
        "toml": IconDescriptor("\ue615", "file_toml", PALETTE["default"]),
        "sh": IconDescriptor("\ue795", "file_sh", PALETTE["lightPurple"]),
        "go": IconDescriptor("\ue627", "file_go", PALETTE["aqua"]),
        "ts": IconDescriptor("\ue628", "file_ts", PALETTE["blue"]),
    }
)

GIT_STATUSES = MappingProxyType(
    {
        "M": StatusDescriptor(7, "git_modified", PALETTE["green"]),
        "T": StatusDescriptor(6, "git_type_change", PALETTE["yellow"]),
        "A": StatusDescriptor(5, "git_add", PALETTE["blue"]),
        "D": StatusDescriptor(8, "git_delete", PALETTE["salmon"]),
        "R": StatusDescriptor(4, "git_rename", PALETTE["yellow"]),
        "C": StatusDescriptor(3, "git_copy", PALETTE["blue"]),
        "U": StatusDescriptor(2, "git_copy", PALETTE["green"]),
        "??": StatusDescriptor(1, "git_undefined", PALETTE["yellow"]),
    }
)


def resolve_color(color: str) -> str:
    """Resolve a ``!name`` palette reference; other values pass through."""
    if color.startswith("!"):
        return COLORS.get(color[1:], DEFAULT_STYLE)
    return color


def highlight_name(group: str) -> str:
    return f"{HIGHLIGHT_PREFIX}{group}"


def file_extension(name: str) -> str:
    """Return the text after the last dot of the basename, without the dot."""
    return os.path.splitext(os.path.basename(name.rstrip("/")))[1][1:]


def icon_for(
    name: str,
    expanded: bool = False,
    is_tree: bool = False,
    is_link: bool = False,
    overrides: dict[str, str] | None = None,
) -> IconDescriptor:
    """Return the icon for a row.

    Order: expanded directory, directory (link-aware), link, extension table,
    default file icon. Extension matching is case-sensitive. ``overrides``
    maps special kind tokens to replacement glyphs.
    """
    if expanded:
        kind = "directory_expanded"
    elif is_tree:
        kind = "directory_link" if is_link else "directory"
    elif is_link:
        kind = "link"
    else:
        return EXTENSION_ICONS.get(file_extension(name), DEFAULT_FILE_ICON)

    icon = SPECIAL_ICONS.get(kind, DEFAULT_FILE_ICON)
    glyph = (overrides or {}).get(kind)
    if glyph:
        icon = replace(icon, glyph=glyph)
    return icon


__all__ = [
    "COLORS",
    "PALETTE",
    "DEFAULT_FILE_ICON",
    "SPECIAL_ICONS",
    "EXTENSION_ICONS",
    "GIT_STATUSES",
    "IconDescriptor",
    "StatusDescriptor",
    "file_extension",
    "highlight_name",
    "icon_for",
    "resolve_color",
]
