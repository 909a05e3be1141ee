"""In-memory document catalog."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Collection, Dict, Iterator, List, Optional, Tuple

from slicekb.errors import CorpusUnreadableError, MalformedDocumentError
from slicekb.ingestion.markdown_loader import parse_document
from slicekb.models import AGNOSTIC, Document
from slicekb.utils.files import iter_markdown_paths

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class IndexStats:
    indexed: int = 0
    failed: int = 0
    processed_files: list[Path] = field(default_factory=list)

    def increment(self, status: str, path: Path) -> None:
        if status == "indexed":
            self.indexed += 1
        else:
            self.failed += 1
        self.processed_files.append(path)


@dataclass(frozen=True, slots=True)
class IndexSnapshot:
    """Immutable view of the catalog at one point in time."""

    root: Path
    documents: Tuple[Document, ...] = ()
    by_path: Dict[str, Document] = field(default_factory=dict)

    @classmethod
    def from_documents(cls, root: Path, documents: List[Document]) -> "IndexSnapshot":
        return cls(root=root, documents=tuple(documents), by_path={doc.path: doc for doc in documents})

    def categories(self) -> List[str]:
        """Distinct non-empty categories, sorted."""
        return sorted({doc.category for doc in self.documents if doc.category})

    def frameworks(self) -> List[str]:
        return sorted({doc.framework for doc in self.documents if doc.framework and doc.framework != AGNOSTIC})


class DocumentIndex:
    """Scans a corpus directory and holds document metadata.

    Only metadata is kept in memory. A rebuild assembles a fresh
    :class:`IndexSnapshot` and replaces the current one in a single
    assignment, so readers never observe a partial catalog.
    """

    def __init__(self, *, known_frameworks: Collection[str] = ()) -> None:
        self.known_frameworks = frozenset(known_frameworks)
        self._snapshot: Optional[IndexSnapshot] = None
        self._build_lock = threading.Lock()

    @classmethod
    def from_path(cls, root: Path, *, known_frameworks: Collection[str] = ()) -> "DocumentIndex":
        index = cls(known_frameworks=known_frameworks)
        index.build(root)
        return index

    @property
    def snapshot(self) -> IndexSnapshot:
        snapshot = self._snapshot
        if snapshot is None:
            raise CorpusUnreadableError("<unset>", "index has not been built")
        return snapshot

    @property
    def root(self) -> Path:
        return self.snapshot.root

    def build(self, root: Path) -> IndexStats:
        """Scan ``root`` and swap in a new snapshot."""
        root = Path(root)
        if not root.is_dir():
            raise CorpusUnreadableError(root, "not a directory")

        with self._build_lock:
            try:
                paths = list(iter_markdown_paths(root))
            except OSError as exc:
                raise CorpusUnreadableError(root, str(exc)) from exc

            stats = IndexStats()
            documents: List[Document] = []
            for path in paths:
                try:
                    documents.append(parse_document(path, root, known_frameworks=self.known_frameworks))
                except MalformedDocumentError as exc:
                    LOGGER.warning("Skipping %s: %s", path, exc.message)
                    stats.increment("failed", path)
                    continue
                stats.increment("indexed", path)

            self._snapshot = IndexSnapshot.from_documents(root, documents)

        LOGGER.info("Indexed %d documents from %s (%d skipped)", stats.indexed, root, stats.failed)
        return stats

    def rebuild(self) -> IndexStats:
        return self.build(self.root)

    def all(self) -> Tuple[Document, ...]:
        return self.snapshot.documents

    def get(self, path: str) -> Optional[Document]:
        return self.snapshot.by_path.get(path)

    def by_category(self) -> List[str]:
        return self.snapshot.categories()

    def frameworks(self) -> List[str]:
        return self.snapshot.frameworks()

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and path in self.snapshot.by_path

    def __len__(self) -> int:
        return len(self.all())

    def __iter__(self) -> Iterator[Document]:
        return iter(self.all())
