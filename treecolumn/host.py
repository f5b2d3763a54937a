"""Host collaborator interface and its terminal implementation.

The column never touches processes or the display directly; it awaits these
calls on whatever host drives it. ``TerminalHost`` backs them with git
subprocesses, the local filesystem and terminal-cell width rules.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import Protocol

from .ansi import display_width
from .types import DirEntry, HighlightDefinition

logger = logging.getLogger(__name__)


class GitCommandError(RuntimeError):
    """A git invocation exited unsuccessfully."""

    def __init__(self, args: list[str], returncode: int, stderr: str = "") -> None:
        self.git_args = list(args)
        self.returncode = returncode
        self.stderr = stderr
        detail = f": {stderr.strip()}" if stderr.strip() else ""
        super().__init__(f"git {' '.join(args)} exited with {returncode}{detail}")


class Host(Protocol):
    async def strwidth(self, text: str) -> int: ...

    async def register_highlight(self, definition: HighlightDefinition) -> None: ...

    async def real_path(self, path: str) -> str: ...

    async def list_directory(self, path: str) -> list[DirEntry]: ...

    async def repo_root(self) -> str: ...

    async def porcelain_status(self) -> str: ...


async def run_git(cwd: Path, args: list[str], timeout_seconds: float) -> tuple[int, str, str]:
    """Run ``git -C cwd *args`` and return ``(returncode, stdout, stderr)``.

    Raises ``FileNotFoundError`` when git is not installed and
    ``asyncio.TimeoutError`` when the process outlives ``timeout_seconds``.
    """
    process = await asyncio.create_subprocess_exec(
        "git",
        "-C",
        str(cwd),
        *args,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout_seconds)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        raise
    return (
        process.returncode if process.returncode is not None else -1,
        stdout.decode("utf-8", errors="replace"),
        stderr.decode("utf-8", errors="replace"),
    )


class TerminalHost:
    """Host backed by the local filesystem, git, and terminal width rules.

    With ``show_hidden`` off, dot entries are left out of directory listings
    the same way the rendered tree leaves them out.
    """

    def __init__(self, cwd: Path, timeout_seconds: float = 2.0, show_hidden: bool = True) -> None:
        self.cwd = cwd.resolve()
        self.timeout_seconds = timeout_seconds
        self.show_hidden = show_hidden
        self.highlights: dict[str, HighlightDefinition] = {}

    async def strwidth(self, text: str) -> int:
        return display_width(text)

    async def register_highlight(self, definition: HighlightDefinition) -> None:
        # First definition wins, like ``hi default``.
        self.highlights.setdefault(definition.name, definition)

    async def real_path(self, path: str) -> str:
        return os.path.realpath(path, strict=True)

    async def list_directory(self, path: str) -> list[DirEntry]:
        children: list[DirEntry] = []
        with os.scandir(path or "/") as entries:
            for child in entries:
                if not self.show_hidden and child.name.startswith("."):
                    continue
                try:
                    is_dir = child.is_dir(follow_symlinks=False)
                    is_file = child.is_file(follow_symlinks=False)
                    is_symlink = child.is_symlink()
                except OSError:
                    is_dir, is_file, is_symlink = False, False, False
                children.append(DirEntry(child.name, is_dir=is_dir, is_file=is_file, is_symlink=is_symlink))
        return children

    async def repo_root(self) -> str:
        """Return the (super)project root, or ``""`` outside a repository."""
        try:
            returncode, stdout, _stderr = await run_git(
                self.cwd,
                ["rev-parse", "--show-superproject-working-tree", "--show-toplevel"],
                self.timeout_seconds,
            )
        except FileNotFoundError:
            logger.debug("git executable not found")
            return ""
        if returncode != 0:
            return ""
        lines = [line.strip() for line in stdout.splitlines() if line.strip()]
        root = lines[0] if lines else ""
        logger.debug("repository root for %s: %r", self.cwd, root)
        return root

    async def porcelain_status(self) -> str:
        args = ["status", "--porcelain", "-u"]
        returncode, stdout, stderr = await run_git(self.cwd, args, self.timeout_seconds)
        if returncode != 0:
            raise GitCommandError(args, returncode, stderr)
        return stdout


__all__ = ["GitCommandError", "Host", "TerminalHost", "run_git"]
