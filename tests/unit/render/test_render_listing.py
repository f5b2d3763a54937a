"""Tests for filesystem-backed rows and terminal listing output."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from treecolumn.column import FilenameColumn
from treecolumn.config import ColumnParams
from treecolumn.host import TerminalHost
from treecolumn.icons import DEFAULT_FILE_ICON, EXTENSION_ICONS, SPECIAL_ICONS
from treecolumn.render import build_tree_entries, render_listing, sibling_groups
from treecolumn.types import TreeEntry


def _make_tree(root: Path) -> None:
    (root / "src").mkdir()
    (root / "src" / "a.py").write_text("a = 1\n", encoding="utf-8")
    (root / "src" / "b.py").write_text("b = 2\n", encoding="utf-8")
    (root / "README.md").write_text("# readme\n", encoding="utf-8")
    (root / ".hidden").write_text("x\n", encoding="utf-8")


class BuildTreeEntriesTests(unittest.TestCase):
    def test_directories_first_with_levels_and_expansion(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root)

            entries = build_tree_entries(root, max_depth=1)

            self.assertEqual(
                [(Path(entry.path).relative_to(root).as_posix(), entry.level) for entry in entries],
                [("src", 0), ("src/a.py", 1), ("src/b.py", 1), ("README.md", 0)],
            )
            self.assertTrue(entries[0].is_tree)
            self.assertTrue(entries[0].is_expanded)
            self.assertEqual(entries[1].size, len("a = 1\n"))
            self.assertEqual(entries[1].tree_path, entries[1].path)

    def test_collapsed_by_default_and_hidden_files_optional(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root)

            collapsed = build_tree_entries(root)
            with_hidden = build_tree_entries(root, show_hidden=True)

            self.assertEqual([entry.word for entry in collapsed], ["src", "README.md"])
            self.assertFalse(collapsed[0].is_expanded)
            self.assertIn(".hidden", [entry.word for entry in with_hidden])

    def test_explicitly_expanded_directories_are_walked(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root)
            entries = build_tree_entries(root, expanded={root / "src"})
            self.assertEqual([entry.word for entry in entries], ["src", "a.py", "b.py", "README.md"])

    def test_params_sort_orders_siblings(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root)
            entries = build_tree_entries(root, params=ColumnParams(sort="filename"))
            self.assertEqual([entry.word for entry in entries], ["README.md", "src"])

    @unittest.skipIf(not hasattr(os, "symlink"), "symlinks are required")
    def test_symlinked_directories_are_not_descended(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root)
            (root / "alias").symlink_to(root / "src", target_is_directory=True)

            entries = build_tree_entries(root, max_depth=None)
            alias = next(entry for entry in entries if entry.word == "alias")

            self.assertTrue(alias.is_tree)
            self.assertTrue(alias.is_link)
            self.assertFalse(alias.is_expanded)
            self.assertEqual(sum(1 for entry in entries if entry.word == "a.py"), 1)


class SiblingGroupsTests(unittest.TestCase):
    def test_groups_by_parent_in_first_seen_order(self) -> None:
        entries = [
            TreeEntry(path="/r/a", tree_path="/r/a"),
            TreeEntry(path="/r/a/x", level=1, tree_path="/r/a/x"),
            TreeEntry(path="/r/b", tree_path="/r/b"),
        ]
        groups = sibling_groups(entries)
        self.assertEqual([[entry.path for entry in group] for group in groups], [["/r/a", "/r/b"], ["/r/a/x"]])


class RenderListingTests(unittest.IsolatedAsyncioTestCase):
    async def test_plain_listing_draws_tree_glyphs(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root)
            host = TerminalHost(root)
            column = FilenameColumn()
            params = ColumnParams()
            with mock.patch.object(TerminalHost, "repo_root", new=mock.AsyncMock(return_value="")):
                await column.on_init(host)
                entries = build_tree_entries(root, max_depth=1, params=params)
                lines = await render_listing(column, host, entries, params, no_color=True)

        py = EXTENSION_ICONS["py"].glyph
        self.assertEqual(
            lines,
            [
                f"{SPECIAL_ICONS['directory_expanded'].glyph} src/",
                f"├ {py} a.py",
                f"└ {py} b.py",
                f"{EXTENSION_ICONS['md'].glyph} README.md",
            ],
        )
        self.assertEqual(len(host.highlights), 30)

    async def test_every_open_directory_gets_its_own_last_sibling(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            for name in ("one", "two"):
                (root / name).mkdir()
                (root / name / "x.txt").write_text("x\n", encoding="utf-8")
                (root / name / "y.txt").write_text("y\n", encoding="utf-8")
            host = TerminalHost(root)
            column = FilenameColumn()
            params = ColumnParams(sort="filename")
            with mock.patch.object(TerminalHost, "repo_root", new=mock.AsyncMock(return_value="")):
                await column.on_init(host)
                entries = build_tree_entries(root, max_depth=1, params=params)
                lines = await render_listing(column, host, entries, params, no_color=True)

        file_glyph = DEFAULT_FILE_ICON.glyph
        self.assertEqual(
            lines[1:3] + lines[4:6],
            [
                f"├ {file_glyph} x.txt",
                f"└ {file_glyph} y.txt",
                f"├ {file_glyph} x.txt",
                f"└ {file_glyph} y.txt",
            ],
        )

    async def test_colored_listing_paints_icons(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root)
            host = TerminalHost(root)
            column = FilenameColumn()
            params = ColumnParams()
            with mock.patch.object(TerminalHost, "repo_root", new=mock.AsyncMock(return_value="")):
                await column.on_init(host)
                entries = build_tree_entries(root, params=params)
                lines = await render_listing(column, host, entries, params)

        # #8FAA54 directory icon, #F09F17 markdown icon.
        self.assertIn("\x1b[38;2;143;170;84m", lines[0])
        self.assertIn("\x1b[38;2;240;159;23m", lines[1])
        self.assertTrue(lines[1].endswith("README.md"))


class ScanModeRenderTests(unittest.IsolatedAsyncioTestCase):
    async def _render(self, root: Path, params: ColumnParams, show_hidden: bool = False) -> list[str]:
        host = TerminalHost(root, show_hidden=show_hidden)
        column = FilenameColumn()
        with mock.patch.object(TerminalHost, "repo_root", new=mock.AsyncMock(return_value="")):
            await column.on_init(host)
            entries = build_tree_entries(root, show_hidden=show_hidden, max_depth=1, params=params)
            return await render_listing(column, host, entries, params, no_color=True)

    async def test_mixed_case_names_put_corner_on_last_row(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "sub").mkdir()
            (root / "sub" / "alpha.txt").write_text("a\n", encoding="utf-8")
            (root / "sub" / "Zeta.txt").write_text("z\n", encoding="utf-8")

            lines = await self._render(root, ColumnParams(scan_directories=True))

        file_glyph = DEFAULT_FILE_ICON.glyph
        self.assertEqual(
            lines,
            [
                f"{SPECIAL_ICONS['directory_expanded'].glyph} sub/",
                f"├ {file_glyph} Zeta.txt",
                f"└ {file_glyph} alpha.txt",
            ],
        )

    async def test_sort_params_do_not_reorder_scanned_siblings(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "sub").mkdir()
            (root / "sub" / "a.txt").write_text("x" * 100, encoding="utf-8")
            (root / "sub" / "b.txt").write_text("x", encoding="utf-8")

            lines = await self._render(root, ColumnParams(sort="size", scan_directories=True))

        file_glyph = DEFAULT_FILE_ICON.glyph
        self.assertEqual(lines[1:], [f"├ {file_glyph} a.txt", f"└ {file_glyph} b.txt"])

    async def test_hidden_entries_do_not_take_the_corner(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "sub").mkdir()
            (root / "sub" / "lib").mkdir()
            (root / "sub" / ".env").write_text("x\n", encoding="utf-8")

            hidden_off = await self._render(root, ColumnParams(scan_directories=True))
            hidden_on = await self._render(root, ColumnParams(scan_directories=True), show_hidden=True)

        directory_glyph = SPECIAL_ICONS["directory"].glyph
        file_glyph = DEFAULT_FILE_ICON.glyph
        self.assertEqual(hidden_off[1:], [f"└ {directory_glyph} lib/"])
        self.assertEqual(hidden_on[1:], [f"├ {directory_glyph} lib/", f"└ {file_glyph} .env"])


if __name__ == "__main__":
    unittest.main()
