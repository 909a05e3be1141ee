"""Deterministic relevance search over the document index."""

from __future__ import annotations

import logging
from typing import List, Optional

from slicekb.errors import DocumentNotFoundError
from slicekb.index.indexer import DocumentIndex, IndexSnapshot
from slicekb.index.storage import DocumentLoader
from slicekb.models import Document, SearchPage, SearchQuery, SearchResult

LOGGER = logging.getLogger(__name__)

NAME_MATCH = 20
DESCRIPTION_MATCH = 15
CATEGORY_MATCH = 10
FRAMEWORK_MATCH = 10
TAG_MATCH = 5


def _clean(value: Optional[str]) -> str:
    return value.strip().lower() if value else ""


def score(document: Document, query: SearchQuery) -> int:
    """Additive relevance score of ``document`` for ``query``."""
    total = 0

    text = _clean(query.text)
    if text:
        if text in document.name.lower():
            total += NAME_MATCH
        elif text in document.description.lower():
            total += DESCRIPTION_MATCH

    category = _clean(query.category)
    if category and category == _clean(document.category):
        total += CATEGORY_MATCH

    if query.tags:
        doc_tags = set(document.tags)
        wanted = {_clean(tag) for tag in query.tags} - {""}
        total += TAG_MATCH * len(wanted & doc_tags)

    framework = _clean(query.framework)
    if framework and framework == _clean(document.framework):
        total += FRAMEWORK_MATCH

    return total


class SearchEngine:
    """Ranks indexed documents and attaches their content."""

    def __init__(self, index: DocumentIndex, loader: DocumentLoader) -> None:
        self.index = index
        self.loader = loader

    def rank(self, query: SearchQuery, snapshot: Optional[IndexSnapshot] = None) -> List[tuple[Document, int]]:
        """Score every document; scan order breaks ties."""
        if query.is_empty():
            return []
        if snapshot is None:
            snapshot = self.index.snapshot
        scored = [(doc, score(doc, query)) for doc in snapshot.documents]
        matches = [item for item in scored if item[1] > 0]
        # sorted() is stable
        return sorted(matches, key=lambda item: item[1], reverse=True)

    def search(self, query: SearchQuery) -> List[SearchResult]:
        return list(self.search_page(query).results)

    def search_page(self, query: SearchQuery, *, limit: Optional[int] = None, offset: int = 0) -> SearchPage:
        snapshot = self.index.snapshot
        ranked = self.rank(query, snapshot)
        end = None if limit is None else offset + limit

        results: List[SearchResult] = []
        missing = 0
        for doc, value in ranked[offset:end]:
            try:
                content = self.loader.load(doc.path, snapshot=snapshot)
            except DocumentNotFoundError as exc:
                LOGGER.warning("Dropping %s from results: %s", doc.path, exc.message)
                missing += 1
                continue
            results.append(SearchResult(document=doc, content=content, relevance_score=value))

        total = len(ranked) - missing
        LOGGER.debug("Query %s matched %d documents, returning %d", query, total, len(results))
        return SearchPage(results=tuple(results), total=total, limit=limit, offset=offset)
