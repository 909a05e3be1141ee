"""Core slicekb data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

AGNOSTIC = "agnostic"


@dataclass(frozen=True, slots=True)
class Document:
    """Index record describing a corpus document.

    Content is never held here; it is read on demand through
    :class:`slicekb.index.storage.DocumentLoader`.
    """

    path: str
    name: str
    description: str = ""
    category: Optional[str] = None
    tags: Tuple[str, ...] = ()
    framework: str = AGNOSTIC
    slice: Optional[str] = None
    doc_id: Optional[str] = None


@dataclass(frozen=True, slots=True)
class SearchQuery:
    """Caller supplied search intent. Every field is optional."""

    text: Optional[str] = None
    category: Optional[str] = None
    framework: Optional[str] = None
    tags: Tuple[str, ...] = ()

    def is_empty(self) -> bool:
        return not (
            (self.text and self.text.strip())
            or (self.category and self.category.strip())
            or (self.framework and self.framework.strip())
            or any(tag.strip() for tag in self.tags)
        )


@dataclass(frozen=True, slots=True)
class SearchResult:
    document: Document
    content: str
    relevance_score: int
    source: str = "local"

    @property
    def path(self) -> str:
        return self.document.path

    @property
    def name(self) -> str:
        return self.document.name


@dataclass(frozen=True, slots=True)
class SearchPage:
    results: Tuple[SearchResult, ...]
    total: int
    limit: Optional[int] = None
    offset: int = 0


@dataclass(frozen=True, slots=True)
class FrameworkInfo:
    id: str
    name: str


@dataclass(frozen=True, slots=True)
class FrameworkArchitecture:
    framework_name: str
    overview: str
    when_to_use: str
    checklist: str


@dataclass(frozen=True, slots=True)
class AvailableDoc:
    name: str
    description: str
    path: str


@dataclass(frozen=True, slots=True)
class SliceArchitecture:
    framework_name: str
    slice_name: str
    tutorial: str
    checklist: str
    available_docs: Tuple[AvailableDoc, ...] = ()


@dataclass(frozen=True, slots=True)
class CompleteSliceKnowledge(SliceArchitecture):
    """Slice architecture plus the full content of every pattern document."""

    documents: Dict[str, str] = field(default_factory=dict)
