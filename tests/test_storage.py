"""Tests for DocumentLoader."""

from __future__ import annotations

from pathlib import Path

import pytest

from slicekb.errors import DocumentNotFoundError
from slicekb.index.indexer import DocumentIndex
from slicekb.index.storage import DocumentLoader


class TestDocumentLoader:
    """Test on-demand content reads."""

    def test_load_known_document(self, index: DocumentIndex) -> None:
        """Should return the full file text."""
        loader = DocumentLoader(index)
        content = loader.load("03-patterns/gateway.md")

        assert content.startswith("---\n")
        assert "Gateway body." in content

    def test_every_indexed_path_loads(self, index: DocumentIndex) -> None:
        """Should succeed for every path in the index."""
        loader = DocumentLoader(index)
        for doc in index.all():
            assert loader.load(doc.path)

    def test_load_is_idempotent(self, index: DocumentIndex) -> None:
        """Should return the same content on repeated calls."""
        loader = DocumentLoader(index)
        assert loader.load("README.md") == loader.load("README.md")

    def test_unknown_path_raises(self, index: DocumentIndex) -> None:
        """Should reject paths absent from the index."""
        with pytest.raises(DocumentNotFoundError) as excinfo:
            DocumentLoader(index).load("03-patterns/missing.md")
        assert excinfo.value.path == "03-patterns/missing.md"

    def test_path_outside_index_is_rejected(self, corpus: Path, index: DocumentIndex) -> None:
        """Should not read files that exist on disk but were never indexed."""
        (corpus.parent / "outside.md").write_text("secret")
        with pytest.raises(DocumentNotFoundError):
            DocumentLoader(index).load("../outside.md")

    def test_deleted_file_raises(self, corpus: Path, index: DocumentIndex) -> None:
        """Should report unreadable content as not found."""
        (corpus / "README.md").unlink()
        with pytest.raises(DocumentNotFoundError) as excinfo:
            DocumentLoader(index).load("README.md")
        assert "unreadable" in excinfo.value.message
