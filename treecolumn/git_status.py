"""Git status lookup for tree rows.

Keeps a path -> porcelain-code table built from ``git status --porcelain``
text. The table is rebuilt only when the text's fingerprint changes and is
swapped in whole, never edited in place.
"""

from __future__ import annotations

import hashlib
import logging

from .icons import GIT_STATUSES, StatusDescriptor

logger = logging.getLogger(__name__)

PORCELAIN_STATUS_WIDTH = 3


def porcelain_fingerprint(text: str) -> str:
    """Return the change-detection hash of already-trimmed porcelain text."""
    return hashlib.md5(text.encode("utf-8", errors="surrogateescape")).hexdigest()


def parse_porcelain(text: str, repo_root: str) -> dict[str, str]:
    """Map ``repo_root/<path>`` to the status code of each porcelain line.

    Lines shorter than the status field are kept: whatever prefix exists is the
    code and the (possibly empty) remainder is the path.
    """
    table: dict[str, str] = {}
    for line in text.split("\n"):
        code = line[:PORCELAIN_STATUS_WIDTH].strip()
        name = line[PORCELAIN_STATUS_WIDTH:]
        table[f"{repo_root}/{name}"] = code
    return table


class GitStatusResolver:
    """Fingerprint-invalidated porcelain table with prefix-matched lookups."""

    def __init__(self) -> None:
        self._table: dict[str, str] = {}
        self._fingerprint = ""

    @property
    def fingerprint(self) -> str:
        return self._fingerprint

    @property
    def table(self) -> dict[str, str]:
        return dict(self._table)

    def refresh(self, raw_porcelain: str, repo_root: str) -> bool:
        """Rebuild the table from ``raw_porcelain`` if its content changed.

        Returns ``True`` when the table was replaced, ``False`` when the
        trimmed text hashes to the stored fingerprint.
        """
        text = raw_porcelain.rstrip()
        fingerprint = porcelain_fingerprint(text)
        if fingerprint == self._fingerprint:
            return False

        table = parse_porcelain(text, repo_root)
        self._table, self._fingerprint = table, fingerprint
        logger.debug("git status table rebuilt: %d entries under %s", len(table), repo_root)
        return True

    def status_code_for(self, full_path: str) -> str | None:
        """Return the raw code for ``full_path`` or its nearest changed descendants.

        Exact keys win. Otherwise every key starting with ``full_path`` is a
        candidate and the lexicographically smallest code is returned.
        """
        code = self._table.get(full_path, "")
        if code:
            return code

        best: str | None = None
        for key, candidate in self._table.items():
            if not key.startswith(full_path):
                continue
            if best is None or candidate < best:
                best = candidate
        return best

    def status_for(self, full_path: str) -> StatusDescriptor | None:
        code = self.status_code_for(full_path)
        if code is None:
            return None
        return GIT_STATUSES.get(code)

    def clear(self) -> None:
        self._table, self._fingerprint = {}, ""


__all__ = [
    "PORCELAIN_STATUS_WIDTH",
    "GitStatusResolver",
    "parse_porcelain",
    "porcelain_fingerprint",
]
