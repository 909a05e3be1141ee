"""Externally callable knowledge tools.

Every tool validates its arguments with a pydantic model before the index
is touched. :meth:`ToolSurface.invoke` raises :class:`KnowledgeError`
subclasses; :meth:`ToolSurface.call` turns them into structured error
payloads for remote callers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from slicekb.config import AppConfig
from slicekb.errors import InvalidQueryError, KnowledgeError
from slicekb.index.indexer import DocumentIndex
from slicekb.index.search import SearchEngine
from slicekb.index.storage import DocumentLoader
from slicekb.knowledge.composer import KnowledgeComposer
from slicekb.knowledge.formatting import (
    CategoryListResponse,
    CompleteSliceKnowledgeResponse,
    DocumentResponse,
    FrameworkArchitectureResponse,
    FrameworkListResponse,
    SearchResultsResponse,
    SliceArchitectureResponse,
)
from slicekb.models import FrameworkArchitecture, SearchQuery

LOGGER = logging.getLogger(__name__)

RESOURCE_SCHEME = "slicekb://"


class ToolArguments(BaseModel):
    model_config = ConfigDict(strict=True, extra="forbid")


class NoArguments(ToolArguments):
    pass


class SearchArguments(ToolArguments):
    text: Optional[str] = Field(None, description="Free text matched against document names and descriptions")
    category: Optional[str] = Field(None, description="Exact category filter (see list-categories)")
    framework: Optional[str] = Field(None, description="Framework identifier, e.g. nestjs or nuxt")
    tags: Optional[List[str]] = Field(None, description="Tags, any of which may match")
    limit: Optional[int] = Field(None, gt=0, description="Maximum number of results")
    offset: int = Field(0, ge=0, description="Number of results to skip")


class ReadDocArguments(ToolArguments):
    path: str = Field(..., min_length=1, description="Document path as shown in search results")
    as_resource: bool = Field(False, description="Return a resource payload with a MIME type")


class FrameworkArguments(ToolArguments):
    framework: str = Field(..., min_length=1, description="Framework identifier")


class SliceArguments(FrameworkArguments):
    slice_name: str = Field(..., min_length=1, description="Singular slice name, e.g. user")


@dataclass(frozen=True)
class Tool:
    name: str
    description: str
    arguments: Type[ToolArguments]
    handler: Callable[[Any], Dict[str, Any]]

    def descriptor(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.arguments.model_json_schema(),
        }


def error_payload(error: KnowledgeError) -> Dict[str, Any]:
    return {
        "isError": True,
        "content": [{"type": "text", "text": f"[{error.code.value}] {error.message}"}],
        "error": error.to_dict(),
    }


def validate_arguments(model: Type[ToolArguments], arguments: Optional[Mapping[str, Any]]) -> ToolArguments:
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, Mapping):
        raise InvalidQueryError("arguments", "expected an object")
    try:
        return model.model_validate(dict(arguments))
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or "arguments"
        raise InvalidQueryError(field, first.get("msg")) from exc


class ToolSurface:
    """Named operations over the index, search engine and composer."""

    def __init__(self, index: DocumentIndex, config: AppConfig | None = None) -> None:
        self.config = config or AppConfig()
        self.index = index
        self.loader = DocumentLoader(index)
        self.engine = SearchEngine(index, self.loader)
        self.composer = KnowledgeComposer(self.engine, self.config)
        self._tools: Dict[str, Tool] = {
            tool.name: tool
            for tool in (
                Tool(
                    "get-started",
                    "Request this first. Returns the essential slice creation rules.",
                    NoArguments,
                    self.get_started,
                ),
                Tool(
                    "list-categories",
                    "List all documentation categories available for the search tool.",
                    NoArguments,
                    self.list_categories,
                ),
                Tool(
                    "search",
                    "Search documentation by text, category, framework or tags. Results are sorted by relevance.",
                    SearchArguments,
                    self.search,
                ),
                Tool(
                    "read-doc",
                    "Read the full content of a document by path.",
                    ReadDocArguments,
                    self.read_doc,
                ),
                Tool(
                    "list-frameworks",
                    "List frameworks that have documentation in the knowledge base.",
                    NoArguments,
                    self.list_frameworks,
                ),
                Tool(
                    "get-framework-architecture",
                    "Overview, when-to-use guidance and checklist for a framework.",
                    FrameworkArguments,
                    self.get_framework_architecture,
                ),
                Tool(
                    "get-slice-architecture",
                    "Tutorial, checklist and related pattern references for a slice.",
                    SliceArguments,
                    self.get_slice_architecture,
                ),
                Tool(
                    "get-complete-slice-knowledge",
                    "Tutorial, checklist and the full content of every related pattern for a slice.",
                    SliceArguments,
                    self.get_complete_slice_knowledge,
                ),
            )
        }

    @classmethod
    def from_config(cls, config: AppConfig, base_dir: Path | None = None) -> "ToolSurface":
        index = DocumentIndex(known_frameworks=config.framework_names)
        index.build(config.resolve_docs_path(base_dir))
        return cls(index, config)

    @property
    def names(self) -> List[str]:
        return list(self._tools)

    def descriptors(self) -> List[Dict[str, Any]]:
        return [tool.descriptor() for tool in self._tools.values()]

    def invoke(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        tool = self._tools.get(name)
        if tool is None:
            raise InvalidQueryError("name", f"unknown tool '{name}'")
        validated = validate_arguments(tool.arguments, arguments)
        LOGGER.info("Tool %s called with %s", name, validated.model_dump(exclude_defaults=True))
        return tool.handler(validated)

    def call(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        try:
            return self.invoke(name, arguments)
        except KnowledgeError as exc:
            LOGGER.error("[%s] %s (tool=%s)", exc.code.value, exc.message, name)
            return error_payload(exc)

    def get_started(self, _: NoArguments) -> Dict[str, Any]:
        content = self.loader.load(self.config.orientation_path)
        data = FrameworkArchitecture(
            framework_name=self.config.orientation_title,
            overview=content,
            when_to_use="",
            checklist="",
        )
        return FrameworkArchitectureResponse(data).to_tool_payload()

    def list_categories(self, _: NoArguments) -> Dict[str, Any]:
        return CategoryListResponse(self.index.by_category()).to_tool_payload()

    def search(self, args: SearchArguments) -> Dict[str, Any]:
        query = SearchQuery(
            text=args.text,
            category=args.category,
            framework=args.framework,
            tags=tuple(args.tags or ()),
        )
        limit = args.limit if args.limit is not None else self.config.default_limit
        page = self.engine.search_page(query, limit=limit, offset=args.offset)
        LOGGER.info("Returned %d of %d document(s)", len(page.results), page.total)
        return SearchResultsResponse(page).to_tool_payload()

    def read_doc(self, args: ReadDocArguments) -> Dict[str, Any]:
        response = DocumentResponse(args.path, self.loader.load(args.path))
        if args.as_resource:
            return response.to_resource_payload(RESOURCE_SCHEME + args.path)
        return response.to_tool_payload()

    def list_frameworks(self, _: NoArguments) -> Dict[str, Any]:
        return FrameworkListResponse(self.composer.list_frameworks()).to_tool_payload()

    def get_framework_architecture(self, args: FrameworkArguments) -> Dict[str, Any]:
        data = self.composer.compose_framework_architecture(args.framework)
        return FrameworkArchitectureResponse(data).to_tool_payload()

    def get_slice_architecture(self, args: SliceArguments) -> Dict[str, Any]:
        data = self.composer.compose_slice_architecture(args.framework, args.slice_name)
        return SliceArchitectureResponse(data).to_tool_payload()

    def get_complete_slice_knowledge(self, args: SliceArguments) -> Dict[str, Any]:
        data = self.composer.compose_complete_slice_knowledge(args.framework, args.slice_name)
        return CompleteSliceKnowledgeResponse(data).to_tool_payload()
