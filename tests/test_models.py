"""Tests for core data models."""

from __future__ import annotations

import dataclasses

import pytest

from slicekb.models import (
    AGNOSTIC,
    CompleteSliceKnowledge,
    Document,
    SearchQuery,
    SearchResult,
    SliceArchitecture,
)


class TestDocument:
    """Test Document dataclass."""

    def test_defaults(self) -> None:
        """Should default to an agnostic, untagged document."""
        doc = Document(path="README.md", name="Readme")

        assert doc.description == ""
        assert doc.category is None
        assert doc.tags == ()
        assert doc.framework == AGNOSTIC
        assert doc.slice is None

    def test_frozen(self) -> None:
        """Should not allow mutation of index records."""
        doc = Document(path="README.md", name="Readme")
        with pytest.raises(dataclasses.FrozenInstanceError):
            doc.name = "Other"  # type: ignore[misc]


class TestSearchQuery:
    """Test SearchQuery.is_empty."""

    def test_no_criteria(self) -> None:
        assert SearchQuery().is_empty()

    def test_whitespace_only(self) -> None:
        """Should treat blank values as absent."""
        assert SearchQuery(text="  ", category="", tags=(" ",)).is_empty()

    @pytest.mark.parametrize(
        "query",
        [
            SearchQuery(text="gateway"),
            SearchQuery(category="patterns"),
            SearchQuery(framework="nestjs"),
            SearchQuery(tags=("order",)),
        ],
    )
    def test_any_criterion(self, query: SearchQuery) -> None:
        assert not query.is_empty()


class TestSearchResult:
    def test_shortcuts(self) -> None:
        doc = Document(path="p/gateway.md", name="Gateway")
        result = SearchResult(document=doc, content="body", relevance_score=20)

        assert result.path == "p/gateway.md"
        assert result.name == "Gateway"
        assert result.source == "local"


class TestCompleteSliceKnowledge:
    def test_extends_slice_architecture(self) -> None:
        """Should carry the slice fields plus document contents."""
        data = CompleteSliceKnowledge(
            framework_name="NestJS",
            slice_name="order",
            tutorial="T",
            checklist="C",
            documents={"Gateway": "body"},
        )

        assert isinstance(data, SliceArchitecture)
        assert data.available_docs == ()
        assert data.documents == {"Gateway": "body"}
