"""Markdown metadata extraction.

Each corpus file may start with a YAML front matter block::

    ---
    id: gateway
    title: Gateway Pattern
    category: patterns
    tags: [gateway, data-access]
    framework: nestjs
    description: Abstracts data sources behind a domain interface
    ---

Every key is optional. Missing values are derived from the file path and
the markdown body so that documents without a header stay searchable.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Collection, Dict, Iterable, Optional

import yaml

from slicekb.errors import MalformedDocumentError
from slicekb.models import AGNOSTIC, Document
from slicekb.utils.files import relative_posix
from slicekb.utils.text import (
    first_heading,
    first_paragraph,
    format_name,
    split_front_matter,
    strip_numeric_prefix,
    unique_lower,
)

LOGGER = logging.getLogger(__name__)

DEFAULT_CATEGORY = "general"


def parse_front_matter(raw: Optional[str], path: Path) -> Dict[str, Any]:
    """Parse the YAML header block into a mapping."""
    if raw is None:
        return {}
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise MalformedDocumentError(path, f"invalid front matter: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MalformedDocumentError(path, "front matter must be a mapping")
    return data


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _as_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return value.split(",")
    if isinstance(value, (list, tuple, set)):
        return [str(item) for item in value if item is not None]
    return [str(value)]


def category_from_path(relative: str) -> str:
    parts = relative.split("/")
    if len(parts) < 2:
        return DEFAULT_CATEGORY
    return strip_numeric_prefix(parts[0]) or DEFAULT_CATEGORY


def tags_from_path(relative: str) -> list[str]:
    tags = []
    for part in relative.split("/"):
        cleaned = strip_numeric_prefix(part)
        if cleaned.lower().endswith(".md"):
            cleaned = cleaned[:-3]
        if cleaned and cleaned != "README":
            tags.append(cleaned)
    return tags


def _detect_framework(tags: Iterable[str], known_frameworks: Collection[str]) -> str:
    for tag in tags:
        if tag in known_frameworks:
            return tag
    return AGNOSTIC


def parse_document(path: Path, root: Path, *, known_frameworks: Collection[str] = ()) -> Document:
    """Build a :class:`Document` record for a markdown file under ``root``.

    Raises :class:`MalformedDocumentError` when the file cannot be decoded
    or its front matter cannot be parsed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedDocumentError(path, "not valid UTF-8") from exc
    except OSError as exc:
        raise MalformedDocumentError(path, str(exc)) from exc

    relative = relative_posix(path, root)
    raw_header, body = split_front_matter(text)
    header = parse_front_matter(raw_header, path)

    name = _as_text(header.get("title")) or first_heading(body) or format_name(path.stem)
    description = _as_text(header.get("description")) or first_paragraph(body)
    category = _as_text(header.get("category")) or category_from_path(relative)
    tags = unique_lower([*_as_list(header.get("tags")), *tags_from_path(relative)])

    framework = _as_text(header.get("framework"))
    framework = framework.lower() if framework else _detect_framework(tags, known_frameworks)

    slice_name = _as_text(header.get("slice"))
    LOGGER.debug("Parsed %s (category=%s, framework=%s)", relative, category, framework)

    return Document(
        path=relative,
        name=name,
        description=description,
        category=category,
        tags=tags,
        framework=framework,
        slice=slice_name.lower() if slice_name else None,
        doc_id=_as_text(header.get("id")) or path.stem,
    )
