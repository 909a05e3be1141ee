"""Application configuration defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

DOCS_PATH_ENV = "DOCS_PATH"

DEFAULT_FRAMEWORK_NAMES: Dict[str, str] = {
    "nestjs": "NestJS",
    "nuxt": "Nuxt",
}


def _get_default_docs_path() -> Path:
    """Get the default corpus path from the environment or the working tree."""
    configured = os.environ.get(DOCS_PATH_ENV)
    if configured:
        return Path(configured)

    # Walk up from the working directory looking for a docs/ folder
    current = Path.cwd()
    for candidate in (current, *current.parents):
        docs_dir = candidate / "docs"
        if docs_dir.is_dir():
            return docs_dir

    return Path("docs")


@dataclass(slots=True)
class AppConfig:
    docs_path: Path | None = None
    orientation_path: str = "00-quickstart/rules.md"
    orientation_title: str = "CleanSlice Architecture"
    default_limit: int | None = None
    overview_category: str = "overview"
    when_to_use_category: str = "when-to-use"
    checklist_category: str = "checklist"
    tutorial_category: str = "tutorial"
    framework_names: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_FRAMEWORK_NAMES))

    def __post_init__(self) -> None:
        if self.docs_path is None:
            self.docs_path = _get_default_docs_path()

    def resolve_docs_path(self, base_dir: Path | None = None) -> Path:
        if self.docs_path is None:
            self.docs_path = _get_default_docs_path()
        if Path(self.docs_path).is_absolute() or base_dir is None:
            return Path(self.docs_path)
        return base_dir / self.docs_path

    def framework_display_name(self, framework_id: str) -> str:
        return self.framework_names.get(framework_id, framework_id.replace("-", " ").title())
