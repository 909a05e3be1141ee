"""Assembly of multi-document knowledge views."""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Tuple

from slicekb.config import AppConfig
from slicekb.errors import DocumentNotFoundError, FrameworkNotFoundError
from slicekb.index.indexer import IndexSnapshot
from slicekb.index.search import SearchEngine
from slicekb.models import (
    AvailableDoc,
    CompleteSliceKnowledge,
    Document,
    FrameworkArchitecture,
    FrameworkInfo,
    SearchQuery,
    SliceArchitecture,
)
from slicekb.utils.text import strip_numeric_prefix

LOGGER = logging.getLogger(__name__)


def is_framework_level(doc: Document, framework: str) -> bool:
    """True for documents describing the framework as a whole.

    A document with a ``slice`` header is slice-scoped. So is a document
    nested below the framework's own directory, e.g. ``nestjs/auth/checklist.md``.
    """
    if doc.slice is not None:
        return False
    directories = [strip_numeric_prefix(part).lower() for part in doc.path.split("/")[:-1]]
    if framework in directories:
        return directories.index(framework) == len(directories) - 1
    return True


class KnowledgeComposer:
    """Combines framework docs, slice docs and pattern docs into one view.

    Every compose call reads a single :class:`IndexSnapshot`, so a rebuild
    running at the same time never mixes two catalogs in one response.
    """

    def __init__(self, engine: SearchEngine, config: AppConfig | None = None) -> None:
        self.engine = engine
        self.config = config or AppConfig()

    @property
    def index(self):
        return self.engine.index

    @property
    def loader(self):
        return self.engine.loader

    def list_frameworks(self) -> List[FrameworkInfo]:
        return [
            FrameworkInfo(id=framework, name=self.config.framework_display_name(framework))
            for framework in self.index.frameworks()
        ]

    def compose_framework_architecture(self, framework: str) -> FrameworkArchitecture:
        snapshot = self.index.snapshot
        framework = self._require_framework(framework, snapshot)

        def framework_level(doc: Document) -> bool:
            return is_framework_level(doc, framework)

        overview = self._find(snapshot, framework, self.config.overview_category, framework_level)
        when_to_use = self._find(snapshot, framework, self.config.when_to_use_category, framework_level)
        checklist = self._find(snapshot, framework, self.config.checklist_category, framework_level)

        return FrameworkArchitecture(
            framework_name=self.config.framework_display_name(framework),
            overview=self._load_required(snapshot, overview, framework, "overview"),
            when_to_use=self._load_required(snapshot, when_to_use, framework, "when-to-use"),
            checklist=self._load_required(snapshot, checklist, framework, "checklist"),
        )

    def compose_slice_architecture(self, framework: str, slice_name: str) -> SliceArchitecture:
        snapshot = self.index.snapshot
        framework, slice_name, tutorial, checklist, patterns = self._slice_parts(snapshot, framework, slice_name)
        return SliceArchitecture(
            framework_name=self.config.framework_display_name(framework),
            slice_name=slice_name,
            tutorial=tutorial,
            checklist=checklist,
            available_docs=tuple(
                AvailableDoc(name=doc.name, description=doc.description, path=doc.path) for doc in patterns
            ),
        )

    def compose_complete_slice_knowledge(self, framework: str, slice_name: str) -> CompleteSliceKnowledge:
        snapshot = self.index.snapshot
        framework, slice_name, tutorial, checklist, patterns = self._slice_parts(snapshot, framework, slice_name)

        documents: Dict[str, str] = {}
        for doc in patterns:
            if doc.name in documents:
                LOGGER.debug("Duplicate pattern name %r at %s, keeping first", doc.name, doc.path)
                continue
            documents[doc.name] = self.loader.load(doc.path, snapshot=snapshot)

        return CompleteSliceKnowledge(
            framework_name=self.config.framework_display_name(framework),
            slice_name=slice_name,
            tutorial=tutorial,
            checklist=checklist,
            available_docs=tuple(
                AvailableDoc(name=doc.name, description=doc.description, path=doc.path) for doc in patterns
            ),
            documents=documents,
        )

    def _slice_parts(
        self, snapshot: IndexSnapshot, framework: str, slice_name: str
    ) -> Tuple[str, str, str, str, List[Document]]:
        framework = self._require_framework(framework, snapshot)
        slice_name = slice_name.strip().lower()

        def scoped(doc: Document) -> bool:
            return doc.slice == slice_name or slice_name in doc.tags

        tutorial_doc = self._find(snapshot, framework, self.config.tutorial_category, scoped)
        checklist_doc = self._find(snapshot, framework, self.config.checklist_category, scoped)
        tutorial = self._load_required(snapshot, tutorial_doc, framework, f"{slice_name} tutorial")
        checklist = self._load_required(snapshot, checklist_doc, framework, f"{slice_name} checklist")

        excluded = {tutorial_doc.path, checklist_doc.path}  # type: ignore[union-attr]
        ranked = self.engine.rank(SearchQuery(framework=framework, tags=(slice_name,)), snapshot)
        patterns = [
            doc for doc, _ in ranked if doc.framework == framework and scoped(doc) and doc.path not in excluded
        ]
        LOGGER.info("Composed slice %s/%s with %d pattern docs", framework, slice_name, len(patterns))
        return framework, slice_name, tutorial, checklist, patterns

    def _require_framework(self, framework: str, snapshot: IndexSnapshot) -> str:
        framework = framework.strip().lower()
        available = snapshot.frameworks()
        if framework not in available:
            raise FrameworkNotFoundError(framework, available)
        return framework

    def _find(
        self,
        snapshot: IndexSnapshot,
        framework: str,
        category: str,
        predicate: Callable[[Document], bool],
    ) -> Optional[Document]:
        for doc in snapshot.documents:
            if doc.framework == framework and doc.category == category and predicate(doc):
                return doc
        return None

    def _load_required(
        self, snapshot: IndexSnapshot, doc: Optional[Document], framework: str, role: str
    ) -> str:
        if doc is None:
            raise DocumentNotFoundError(role, framework=framework)
        return self.loader.load(doc.path, snapshot=snapshot)
