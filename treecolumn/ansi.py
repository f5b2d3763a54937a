"""Display-width and byte-offset measurement for column text.

Hosts paint highlights in UTF-8 byte columns while padding is computed in
terminal cells; these helpers cover both units.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Return the number of terminal cells ``text`` occupies, ignoring SGR codes."""
    col = 0
    for ch in ANSI_ESCAPE_RE.sub("", text):
        col += char_display_width(ch, col)
    return col


def byte_length(text: str) -> int:
    return len(text.encode("utf-8", errors="surrogateescape"))


def byte_to_char_offset(text: str, byte_offset: int) -> int:
    """Convert a UTF-8 byte offset into ``text`` to a character index.

    Offsets inside a multi-byte character round down; offsets past the end
    clamp to ``len(text)``.
    """
    if byte_offset <= 0:
        return 0
    consumed = 0
    for index, ch in enumerate(text):
        consumed += byte_length(ch)
        if consumed > byte_offset:
            return index
    return len(text)


__all__ = [
    "ANSI_ESCAPE_RE",
    "byte_length",
    "byte_to_char_offset",
    "char_display_width",
    "display_width",
]
