"""Markdown text helpers used while indexing documents."""

from __future__ import annotations

import re
from typing import Iterable, Optional, Tuple

_FRONT_MATTER = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)
_HEADING = re.compile(r"^#\s+(.+)$", re.MULTILINE)
_NUMERIC_PREFIX = re.compile(r"^\d+[-_]")


def split_front_matter(text: str) -> Tuple[Optional[str], str]:
    """Split a document into its raw front matter block and body.

    Returns ``(None, text)`` when the document has no ``---`` fenced header.
    """
    match = _FRONT_MATTER.match(text)
    if not match:
        return None, text
    return match.group(1), text[match.end() :]


def first_heading(body: str) -> Optional[str]:
    match = _HEADING.search(body)
    return match.group(1).strip() if match else None


def first_paragraph(body: str, *, max_chars: int = 200) -> str:
    """Return the first non-heading paragraph, truncated to ``max_chars``."""
    lines: list[str] = []
    for line in body.splitlines():
        stripped = line.strip()
        if not lines:
            if not stripped or stripped.startswith("#"):
                continue
        elif not stripped or stripped.startswith("#"):
            break
        lines.append(stripped)

    paragraph = " ".join(lines)
    if len(paragraph) > max_chars:
        return paragraph[:max_chars] + "..."
    return paragraph


def strip_numeric_prefix(value: str) -> str:
    """Drop ordering prefixes such as ``00-`` from path segments."""
    return _NUMERIC_PREFIX.sub("", value)


def format_name(stem: str) -> str:
    """Turn a file stem like ``02-first_slice`` into ``First Slice``."""
    words = strip_numeric_prefix(stem).replace("-", " ").replace("_", " ").split()
    return " ".join(word[:1].upper() + word[1:] for word in words)


def unique_lower(values: Iterable[str]) -> Tuple[str, ...]:
    """Lowercase, strip and de-duplicate while keeping first-seen order."""
    seen: dict[str, None] = {}
    for value in values:
        cleaned = value.strip().lower()
        if cleaned:
            seen.setdefault(cleaned, None)
    return tuple(seen)
