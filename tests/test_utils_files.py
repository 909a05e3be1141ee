"""Tests for file utility functions."""

from __future__ import annotations

from pathlib import Path

import pytest

from slicekb.utils.files import iter_markdown_paths, relative_posix, resolve_within


class TestIterMarkdownPaths:
    """Test iter_markdown_paths function."""

    def test_finds_markdown_recursively(self, tmp_path: Path) -> None:
        """Should yield markdown files only, in sorted order."""
        (tmp_path / "b.md").write_text("b")
        (tmp_path / "a.md").write_text("a")
        (tmp_path / "notes.txt").write_text("text")
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "c.MD").write_text("c")

        paths = [relative_posix(path, tmp_path) for path in iter_markdown_paths(tmp_path)]

        assert paths == ["a.md", "b.md", "sub/c.MD"]

    def test_skips_hidden_and_node_modules(self, tmp_path: Path) -> None:
        """Should not descend into hidden directories or node_modules."""
        for folder in (".git", "node_modules"):
            (tmp_path / folder).mkdir()
            (tmp_path / folder / "x.md").write_text("x")

        assert list(iter_markdown_paths(tmp_path)) == []

    def test_missing_root_raises(self, tmp_path: Path) -> None:
        """Should propagate OSError for unreadable roots."""
        with pytest.raises(OSError):
            list(iter_markdown_paths(tmp_path / "missing"))


class TestResolveWithin:
    """Test resolve_within function."""

    def test_inside_root(self, tmp_path: Path) -> None:
        assert resolve_within(tmp_path, "a/b.md") == (tmp_path / "a" / "b.md").resolve()

    def test_escape_rejected(self, tmp_path: Path) -> None:
        """Should refuse paths that leave the root."""
        assert resolve_within(tmp_path / "docs", "../secret.md") is None
        assert resolve_within(tmp_path / "docs", "/etc/passwd") is None
