"""Markdown rendering of knowledge and search responses.

Every response shape renders itself through :meth:`Response.to_text` and
shares the tool and resource payload wrappers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Sequence

from slicekb.models import (
    CompleteSliceKnowledge,
    FrameworkArchitecture,
    FrameworkInfo,
    SearchPage,
    SliceArchitecture,
)

MARKDOWN_MIME_TYPE = "text/markdown"
RULE = "\n\n---\n\n"
NO_RESULTS = "No documents found matching your query."


class Response(ABC):
    @abstractmethod
    def to_text(self) -> str:
        """Render the response as markdown."""

    def to_tool_payload(self) -> Dict[str, Any]:
        return {"content": [{"type": "text", "text": self.to_text()}]}

    def to_resource_payload(self, uri: str) -> Dict[str, Any]:
        return {"contents": [{"uri": uri, "text": self.to_text(), "mimeType": MARKDOWN_MIME_TYPE}]}


class FrameworkListResponse(Response):
    def __init__(self, frameworks: Sequence[FrameworkInfo]) -> None:
        self.frameworks = list(frameworks)

    def to_text(self) -> str:
        content = "# Available Frameworks\n\n"
        content += "The following frameworks are available in the knowledge base:\n\n"
        for framework in self.frameworks:
            content += f"- **{framework.name}** (ID: `{framework.id}`)\n"
        content += "\nUse the framework ID with other tools to get framework-specific documentation."
        return content


class CategoryListResponse(Response):
    def __init__(self, categories: Sequence[str]) -> None:
        self.categories = list(categories)

    def to_text(self) -> str:
        bullets = "\n".join(f"- **{category}**" for category in self.categories)
        return (
            f"## Available Categories\n\n{bullets}\n\n"
            "Use these categories with the `search` tool's `category` parameter."
        )


class SliceArchitectureResponse(Response):
    def __init__(self, data: SliceArchitecture) -> None:
        self.data = data

    def to_text(self) -> str:
        data = self.data
        content = f"# {data.framework_name} Slice Architecture: {data.slice_name}\n\n"
        content += "## Tutorial\n\n" + data.tutorial + RULE
        content += "## Checklist\n\n" + data.checklist + RULE

        if data.available_docs:
            content += "## Additional Patterns & Guides\n\n"
            for doc in data.available_docs:
                content += f"### {doc.name}\n"
                content += f"{doc.description}\n"
                content += f"Path: `{doc.path}`\n\n"

        return content


class CompleteSliceKnowledgeResponse(Response):
    def __init__(self, data: CompleteSliceKnowledge) -> None:
        self.data = data

    def to_text(self) -> str:
        data = self.data
        content = f"# Complete {data.framework_name} Slice Knowledge: {data.slice_name}\n\n"
        content += "## Table of Contents\n\n"
        content += "1. [Tutorial](#tutorial)\n"
        content += "2. [Checklist](#checklist)\n"
        content += "3. [Architectural Patterns](#architectural-patterns)\n\n"
        content += "---\n\n"

        content += "## Tutorial\n\n" + data.tutorial + RULE
        content += "## Checklist\n\n" + data.checklist + RULE

        content += "## Architectural Patterns\n\n"
        for pattern_name, pattern_content in data.documents.items():
            content += f"### {pattern_name}\n\n"
            content += pattern_content + RULE

        return content


class FrameworkArchitectureResponse(Response):
    def __init__(self, data: FrameworkArchitecture) -> None:
        self.data = data

    def to_text(self) -> str:
        data = self.data
        content = f"# {data.framework_name} Architecture Documentation\n\n"
        content += "## Overview\n\n" + data.overview + RULE
        content += "## When to Use\n\n" + data.when_to_use + RULE
        content += "## Checklist\n\n" + data.checklist
        return content


class SearchResultsResponse(Response):
    """Ranked search results with full document content."""

    def __init__(self, page: SearchPage) -> None:
        self.page = page

    def to_text(self) -> str:
        page = self.page
        if not page.results:
            return f"# Search Results\n\n{NO_RESULTS}"

        first = page.offset + 1
        last = page.offset + len(page.results)
        content = (
            f"# Search Results\n\n"
            f"Showing {first}–{last} of {page.total} documents (sorted by relevance):\n\n"
        )
        content += "---\n\n"

        for position, result in enumerate(page.results, start=first):
            doc = result.document
            content += f"## {position}. {doc.name}\n\n"

            if doc.description:
                content += f"*{doc.description}*\n\n"

            meta = []
            if doc.category:
                meta.append(f"- Category: `{doc.category}`")
            if doc.tags:
                meta.append("- Tags: " + ", ".join(f"`{tag}`" for tag in doc.tags))
            if result.relevance_score:
                meta.append(f"- Score: {result.relevance_score}")
            if meta:
                content += "\n".join(meta) + "\n\n"

            content += f"**Path:** `{doc.path}`\n\n"
            content += result.content.rstrip() + RULE

        if last < page.total:
            content += (
                f"> **More results available.** Use `offset: {last}` to see the next page "
                f"({page.total - last} remaining).\n"
            )

        return content


class DocumentResponse(Response):
    """Raw document content, as returned by ``read-doc``."""

    def __init__(self, path: str, content: str) -> None:
        self.path = path
        self.content = content

    def to_text(self) -> str:
        return self.content
