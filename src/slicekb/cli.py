"""Command line interface for slicekb."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.table import Table

from slicekb.config import DOCS_PATH_ENV, AppConfig
from slicekb.errors import KnowledgeError
from slicekb.index.indexer import DocumentIndex
from slicekb.models import SearchQuery
from slicekb.tools import ToolSurface
from slicekb.web.app import app as web_app

console = Console()
app = typer.Typer(help="slicekb - documentation knowledge server for coding agents")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _load_surface(docs: Optional[Path]) -> ToolSurface:
    config = AppConfig(docs_path=docs if docs is not None else AppConfig().docs_path)
    try:
        return ToolSurface.from_config(config, base_dir=Path.cwd())
    except KnowledgeError as exc:
        raise typer.BadParameter(exc.message) from exc


def _print_payload(payload: dict, raw: bool) -> None:
    text = "\n\n".join(item.get("text", "") for item in payload.get("content", []))
    if payload.get("isError"):
        console.print(f"[red]{escape(text)}[/red]")
        raise typer.Exit(code=1)
    if raw:
        console.print(text, markup=False, highlight=False)
    else:
        console.print(Markdown(text))


@app.command()
def index(
    docs: Path = typer.Option(None, "--docs", help="Corpus directory"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Scan the corpus and report what was indexed."""
    _setup_logging(verbose)
    config = AppConfig(docs_path=docs if docs is not None else AppConfig().docs_path)
    root = config.resolve_docs_path(Path.cwd())

    console.print(f"Indexing [bold]{root}[/bold]...")
    document_index = DocumentIndex(known_frameworks=config.framework_names)
    try:
        stats = document_index.build(root)
    except KnowledgeError as exc:
        raise typer.BadParameter(exc.message) from exc

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Path")
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("Framework")
    for doc in document_index.all():
        table.add_row(doc.path, doc.name, doc.category or "", doc.framework)
    console.print(table)
    console.print(f"Indexed: {stats.indexed}, skipped: {stats.failed}")


@app.command()
def search(
    text: Optional[str] = typer.Argument(None, help="Query text"),
    category: Optional[str] = typer.Option(None, help="Category filter"),
    framework: Optional[str] = typer.Option(None, help="Framework filter"),
    tag: Optional[List[str]] = typer.Option(None, "--tag", help="Tag filter, repeatable"),
    limit: Optional[int] = typer.Option(None, help="Number of results to display"),
    docs: Path = typer.Option(None, "--docs", help="Corpus directory"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Rank documents against a query."""
    _setup_logging(verbose)
    surface = _load_surface(docs)
    query = SearchQuery(text=text, category=category, framework=framework, tags=tuple(tag or ()))
    page = surface.engine.search_page(query, limit=limit)
    if not page.results:
        console.print("[yellow]No matches found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Score")
    table.add_column("Document")
    table.add_column("Category")
    table.add_column("Path")
    for result in page.results:
        table.add_row(str(result.relevance_score), result.name, result.document.category or "", result.path)
    console.print(table)


@app.command()
def categories(
    docs: Path = typer.Option(None, "--docs", help="Corpus directory"),
) -> None:
    """List the categories present in the corpus."""
    surface = _load_surface(docs)
    for category in surface.index.by_category():
        console.print(f"- {category}")


@app.command()
def read(
    path: str = typer.Argument(..., help="Document path relative to the corpus"),
    docs: Path = typer.Option(None, "--docs", help="Corpus directory"),
    raw: bool = typer.Option(False, "--raw", help="Print markdown source"),
) -> None:
    """Print a document."""
    surface = _load_surface(docs)
    _print_payload(surface.call("read-doc", {"path": path}), raw)


@app.command()
def tool(
    name: str = typer.Argument(..., help="Tool name, e.g. get-started"),
    framework: Optional[str] = typer.Option(None, help="Framework argument"),
    slice_name: Optional[str] = typer.Option(None, "--slice", help="Slice argument"),
    docs: Path = typer.Option(None, "--docs", help="Corpus directory"),
    raw: bool = typer.Option(False, "--raw", help="Print markdown source"),
) -> None:
    """Invoke a knowledge tool and render its output."""
    surface = _load_surface(docs)
    arguments = {"framework": framework, "slice_name": slice_name}
    _print_payload(surface.call(name, {k: v for k, v in arguments.items() if v is not None}), raw)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8080, help="Server port"),
    docs: Path = typer.Option(None, "--docs", help="Corpus directory"),
) -> None:
    """Start the HTTP tool server."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    config = AppConfig(docs_path=docs if docs is not None else AppConfig().docs_path)
    resolved = config.resolve_docs_path(Path.cwd())
    if not resolved.is_dir():
        console.print("[yellow]Warning: docs directory not found, tools will fail.[/yellow]")

    if docs is not None:
        os.environ[DOCS_PATH_ENV] = str(resolved)

    console.print(f"Starting tool server on http://{host}:{port} (docs: {resolved})")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
