"""Shared fixtures: small on-disk corpora."""

from __future__ import annotations

from pathlib import Path

import pytest

from slicekb.config import AppConfig
from slicekb.index.indexer import DocumentIndex
from slicekb.tools import ToolSurface

KNOWN_FRAMEWORKS = ("nestjs", "nuxt")


def write_doc(root: Path, relative: str, body: str, header: str | None = None) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    text = f"---\n{header.strip()}\n---\n{body}" if header is not None else body
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def pattern_corpus(tmp_path: Path) -> Path:
    """Two pattern documents for the same framework."""
    root = tmp_path / "docs"
    write_doc(
        root,
        "patterns/gateway.md",
        "# Gateway Pattern\n\nAbstracts data sources.\n",
        "title: Gateway Pattern\ncategory: patterns\ntags: [gateway, data-access]\nframework: nestjs",
    )
    write_doc(
        root,
        "patterns/controller.md",
        "# Controller Pattern\n\nHandles HTTP requests.\n",
        "title: Controller Pattern\ncategory: patterns\ntags: [controller]\nframework: nestjs",
    )
    return root


@pytest.fixture
def corpus(tmp_path: Path) -> Path:
    """Corpus with orientation, framework, slice and pattern documents."""
    root = tmp_path / "docs"
    write_doc(
        root,
        "00-quickstart/rules.md",
        "# Slice Creation Rules\n\nAlways use singular slice names.\n",
        "title: Slice Creation Rules\ncategory: quickstart\ntags: [rules]",
    )
    write_doc(
        root,
        "01-nestjs/checklist.md",
        "# NestJS Checklist\n\nBackend checklist body.\n",
        "category: checklist\nframework: nestjs",
    )
    write_doc(
        root,
        "01-nestjs/overview.md",
        "# NestJS Overview\n\nOverview body.\n",
        "category: overview\nframework: nestjs",
    )
    write_doc(
        root,
        "01-nestjs/when-to-use.md",
        "# When To Use NestJS\n\nWhen to use body.\n",
        "category: when-to-use\nframework: nestjs",
    )
    write_doc(
        root,
        "02-slices/order-checklist.md",
        "# Order Checklist\n\nOrder checklist body.\n",
        "category: checklist\nframework: nestjs\nslice: order",
    )
    write_doc(
        root,
        "02-slices/order-tutorial.md",
        "# Order Tutorial\n\nOrder tutorial body.\n",
        "category: tutorial\nframework: nestjs\nslice: order",
    )
    write_doc(
        root,
        "03-patterns/controller.md",
        "# Controller Pattern\n\nController body.\n",
        "title: Controller Pattern\ncategory: patterns\ntags: [controller, order]\n"
        "framework: nestjs\ndescription: Handles HTTP requests",
    )
    write_doc(
        root,
        "03-patterns/gateway.md",
        "# Gateway Pattern\n\nGateway body.\n",
        "title: Gateway Pattern\ncategory: patterns\ntags: [gateway, data-access, order]\n"
        "framework: nestjs\ndescription: Abstracts data access",
    )
    write_doc(
        root,
        "03-patterns/store.md",
        "# Store Pattern\n\nStore body.\n",
        "title: Store Pattern\ncategory: patterns\ntags: [store, order]\n"
        "framework: nuxt\ndescription: Client state",
    )
    write_doc(root, "README.md", "# Knowledge Base\n\nIndex of all documents.\n")
    return root


@pytest.fixture
def index(corpus: Path) -> DocumentIndex:
    return DocumentIndex.from_path(corpus, known_frameworks=KNOWN_FRAMEWORKS)


@pytest.fixture
def config(corpus: Path) -> AppConfig:
    return AppConfig(docs_path=corpus)


@pytest.fixture
def surface(index: DocumentIndex, config: AppConfig) -> ToolSurface:
    return ToolSurface(index, config)
