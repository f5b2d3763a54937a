"""Highlight definitions and their terminal rendering.

``highlight_definitions`` lists every named style the column uses, with
palette references already resolved. ``paint_highlights`` applies byte-offset
highlight spans to a line through a Pygments terminal formatter.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from pygments import format as pygments_format
from pygments.formatters import Terminal256Formatter, TerminalTrueColorFormatter
from pygments.style import Style
from pygments.token import Token

from .ansi import byte_to_char_offset
from .icons import DEFAULT_FILE_ICON, EXTENSION_ICONS, GIT_STATUSES, SPECIAL_ICONS, highlight_name, resolve_color
from .types import HighlightDefinition, ItemHighlight

COLUMN_TOKEN = Token.TreeColumn


def highlight_definitions() -> list[HighlightDefinition]:
    """Return one definition per highlight group, in registration order.

    Resolved colors starting with ``#`` become foreground definitions; anything
    else links to an existing style. Later duplicates of a name are dropped.
    """
    groups: list[tuple[str, str]] = [(DEFAULT_FILE_ICON.group, DEFAULT_FILE_ICON.color)]
    groups.extend((status.group, status.color) for status in GIT_STATUSES.values())
    groups.extend((icon.group, icon.color) for icon in SPECIAL_ICONS.values())
    groups.extend((icon.group, icon.color) for icon in EXTENSION_ICONS.values())

    definitions: list[HighlightDefinition] = []
    seen: set[str] = set()
    for group, color in groups:
        name = highlight_name(group)
        if name in seen:
            continue
        seen.add(name)
        resolved = resolve_color(color)
        if resolved.startswith("#"):
            definitions.append(HighlightDefinition(name, guifg=resolved))
        else:
            definitions.append(HighlightDefinition(name, link=resolved))
    return definitions


def token_for(name: str):
    """Return the Pygments token type standing for highlight ``name``."""
    return getattr(COLUMN_TOKEN, name[:1].upper() + name[1:])


def _foreground_for(name: str, by_name: dict[str, HighlightDefinition]) -> str:
    seen: set[str] = set()
    definition = by_name.get(name)
    while definition is not None and definition.name not in seen:
        seen.add(definition.name)
        if definition.guifg:
            return definition.guifg
        definition = by_name.get(definition.link or "")
    return ""


def build_terminal_style(definitions: Iterable[HighlightDefinition]) -> type[Style]:
    """Build a Pygments ``Style`` mapping each definition to its foreground.

    Links are followed through other definitions; links that end outside the
    set (``Normal`` and friends) render with the terminal's default color.
    """
    by_name = {definition.name: definition for definition in definitions}
    column_styles = {token_for(name): _foreground_for(name, by_name) for name in by_name}

    class TreeColumnStyle(Style):
        styles = column_styles

    return TreeColumnStyle


def make_formatter(style: type[Style], true_color: bool = True):
    if true_color:
        return TerminalTrueColorFormatter(style=style)
    return Terminal256Formatter(style=style)


def highlight_tokens(text: str, highlights: Sequence[ItemHighlight], start_col: int = 0) -> list[tuple[object, str]]:
    """Split ``text`` into ``(token, chunk)`` pairs following ``highlights``.

    Span columns are UTF-8 byte offsets relative to the host line, so
    ``start_col`` is subtracted first. Overlapping spans keep the earlier one.
    """
    spans: list[tuple[int, int, str]] = []
    for item in highlights:
        begin = byte_to_char_offset(text, item.col - start_col)
        end = byte_to_char_offset(text, item.col - start_col + item.width)
        if end > begin:
            spans.append((begin, end, item.hl_group))
    spans.sort(key=lambda span: span[0])

    tokens: list[tuple[object, str]] = []
    cursor = 0
    for begin, end, group in spans:
        if begin < cursor:
            continue
        if begin > cursor:
            tokens.append((Token.Text, text[cursor:begin]))
        tokens.append((token_for(group), text[begin:end]))
        cursor = end
    if cursor < len(text):
        tokens.append((Token.Text, text[cursor:]))
    return tokens


def paint_highlights(
    text: str,
    highlights: Sequence[ItemHighlight],
    formatter,
    start_col: int = 0,
) -> str:
    """Return ``text`` with highlight spans rendered as ANSI escapes."""
    return pygments_format(highlight_tokens(text, highlights, start_col), formatter)


__all__ = [
    "COLUMN_TOKEN",
    "build_terminal_style",
    "highlight_definitions",
    "highlight_tokens",
    "make_formatter",
    "paint_highlights",
    "token_for",
]
