"""On-demand access to document content."""

from __future__ import annotations

import logging
from typing import Optional

from slicekb.errors import DocumentNotFoundError
from slicekb.index.indexer import DocumentIndex, IndexSnapshot
from slicekb.utils.files import resolve_within

LOGGER = logging.getLogger(__name__)


class DocumentLoader:
    """Reads full document bodies for paths known to the index."""

    def __init__(self, index: DocumentIndex) -> None:
        self.index = index

    def load(self, path: str, *, snapshot: Optional[IndexSnapshot] = None) -> str:
        """Read ``path`` as known to ``snapshot`` (the current one by default).

        Callers that already ranked or selected documents pass the snapshot
        they read from so that a concurrent rebuild cannot invalidate them.
        """
        if snapshot is None:
            snapshot = self.index.snapshot
        if path not in snapshot.by_path:
            raise DocumentNotFoundError(path)

        full_path = resolve_within(snapshot.root, path)
        if full_path is None:
            raise DocumentNotFoundError(path, reason="outside the corpus root")

        try:
            return full_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            LOGGER.error("Unable to read %s: %s", full_path, exc)
            raise DocumentNotFoundError(path, reason="content is unreadable") from exc
