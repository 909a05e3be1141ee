"""Tests for CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import patch

from typer.testing import CliRunner

from slicekb.cli import _setup_logging, app


runner = CliRunner()


class TestSetupLogging:
    """Tests for _setup_logging helper."""

    def test_setup_logging_verbose(self) -> None:
        """Verbose mode sets DEBUG level."""
        with patch("slicekb.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=True)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.DEBUG

    def test_setup_logging_normal(self) -> None:
        """Normal mode sets INFO level."""
        with patch("slicekb.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=False)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.INFO


class TestIndexCommand:
    """Tests for the index command."""

    def test_index_reports_counts(self, corpus: Path) -> None:
        """Prints the number of indexed documents."""
        result = runner.invoke(app, ["index", "--docs", str(corpus)])
        assert result.exit_code == 0
        assert "Indexed: 10, skipped: 0" in result.stdout

    def test_index_missing_directory(self, tmp_path: Path) -> None:
        """Fails with a usage error when the corpus is absent."""
        result = runner.invoke(app, ["index", "--docs", str(tmp_path / "missing")])
        assert result.exit_code != 0


class TestSearchCommand:
    """Tests for the search command."""

    def test_search_with_results(self, corpus: Path) -> None:
        """Displays results in a table."""
        result = runner.invoke(app, ["search", "gateway", "--docs", str(corpus)])
        assert result.exit_code == 0
        assert "gateway.md" in result.stdout
        assert "20" in result.stdout

    def test_search_no_results(self, corpus: Path) -> None:
        """Shows message when no results found."""
        result = runner.invoke(app, ["search", "kubernetes", "--docs", str(corpus)])
        assert result.exit_code == 0
        assert "No matches found" in result.stdout

    def test_search_by_tag(self, corpus: Path) -> None:
        """Accepts repeatable tag filters without text."""
        result = runner.invoke(app, ["search", "--tag", "store", "--docs", str(corpus)])
        assert result.exit_code == 0
        assert "store.md" in result.stdout


class TestCategoriesCommand:
    def test_lists_categories(self, corpus: Path) -> None:
        result = runner.invoke(app, ["categories", "--docs", str(corpus)])
        assert result.exit_code == 0
        assert "- patterns" in result.stdout
        assert "- quickstart" in result.stdout


class TestReadCommand:
    """Tests for the read command."""

    def test_read_raw(self, corpus: Path) -> None:
        result = runner.invoke(app, ["read", "README.md", "--raw", "--docs", str(corpus)])
        assert result.exit_code == 0
        assert "# Knowledge Base" in result.stdout

    def test_read_missing(self, corpus: Path) -> None:
        """Exits non-zero with the error code."""
        result = runner.invoke(app, ["read", "missing.md", "--docs", str(corpus)])
        assert result.exit_code == 1
        assert "DOCUMENT_NOT_FOUND" in result.stdout


class TestToolCommand:
    """Tests for the tool command."""

    def test_get_started(self, corpus: Path) -> None:
        result = runner.invoke(app, ["tool", "get-started", "--raw", "--docs", str(corpus)])
        assert result.exit_code == 0
        assert "Always use singular slice names." in result.stdout

    def test_slice_tool(self, corpus: Path) -> None:
        result = runner.invoke(
            app,
            ["tool", "get-slice-architecture", "--framework", "nestjs", "--slice", "order", "--raw", "--docs", str(corpus)],
        )
        assert result.exit_code == 0
        assert "Order tutorial body." in result.stdout

    def test_unknown_framework(self, corpus: Path) -> None:
        result = runner.invoke(
            app, ["tool", "get-framework-architecture", "--framework", "django", "--docs", str(corpus)]
        )
        assert result.exit_code == 1
        assert "FRAMEWORK_NOT_FOUND" in result.stdout


class TestServeCommand:
    """Tests for the serve command."""

    def test_serve_starts_uvicorn(self, corpus: Path, monkeypatch) -> None:
        """Points the server at the corpus and starts uvicorn."""
        monkeypatch.setenv("DOCS_PATH", str(corpus))
        with patch("uvicorn.run") as mock_run:
            result = runner.invoke(app, ["serve", "--port", "9000", "--docs", str(corpus)])

        assert result.exit_code == 0
        mock_run.assert_called_once()
        assert mock_run.call_args[1]["port"] == 9000
        assert "Starting tool server" in result.stdout
