"""Utility helpers for working with corpus files."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

SKIPPED_DIRS = frozenset({"node_modules"})


def iter_markdown_paths(root: Path) -> Iterator[Path]:
    """Yield markdown files under ``root`` in sorted order.

    Hidden directories and ``node_modules`` are not descended into.
    Raises ``OSError`` if ``root`` cannot be listed.
    """
    for child in sorted(root.iterdir()):
        if child.is_dir():
            if child.name.startswith(".") or child.name in SKIPPED_DIRS:
                continue
            yield from iter_markdown_paths(child)
        elif child.is_file() and child.suffix.lower() == ".md":
            yield child


def relative_posix(path: Path, root: Path) -> str:
    """Return ``path`` relative to ``root`` with forward slashes."""
    return path.relative_to(root).as_posix()


def resolve_within(root: Path, relative: str) -> Path | None:
    """Resolve ``relative`` under ``root``; ``None`` if it escapes the root."""
    base = root.resolve()
    candidate = (base / relative).resolve()
    if candidate != base and base not in candidate.parents:
        return None
    return candidate
