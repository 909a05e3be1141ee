"""Error taxonomy shared by the index, composer and tool surface."""

from __future__ import annotations

from enum import Enum
from typing import Any, Sequence


class ErrorCode(str, Enum):
    UNEXPECTED_ERROR = "UNEXPECTED_ERROR"
    CORPUS_UNREADABLE = "CORPUS_UNREADABLE"
    DOCUMENT_NOT_FOUND = "DOCUMENT_NOT_FOUND"
    FRAMEWORK_NOT_FOUND = "FRAMEWORK_NOT_FOUND"
    INVALID_QUERY = "INVALID_QUERY"
    MALFORMED_DOCUMENT = "MALFORMED_DOCUMENT"


class KnowledgeError(Exception):
    """Base class for every error raised by slicekb.

    Each error carries a machine readable ``code`` and an HTTP-like
    ``status_code`` so hosts can render it without inspecting the type.
    """

    code: ErrorCode = ErrorCode.UNEXPECTED_ERROR
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def details(self) -> dict[str, Any]:
        return {}

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "code": self.code.value,
            "statusCode": self.status_code,
            "message": self.message,
        }
        details = self.details()
        if details:
            payload["details"] = details
        return payload


class CorpusUnreadableError(KnowledgeError):
    code = ErrorCode.CORPUS_UNREADABLE
    status_code = 500

    def __init__(self, root: object, reason: str | None = None) -> None:
        self.root = str(root)
        message = f"Corpus root '{self.root}' cannot be read"
        if reason:
            message += f": {reason}"
        super().__init__(message)

    def details(self) -> dict[str, Any]:
        return {"root": self.root}


class DocumentNotFoundError(KnowledgeError):
    code = ErrorCode.DOCUMENT_NOT_FOUND
    status_code = 404

    def __init__(self, path: str, *, framework: str | None = None, reason: str | None = None) -> None:
        self.path = path
        self.framework = framework
        message = f"Document '{path}' not found"
        if framework:
            message += f" for framework '{framework}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)

    def details(self) -> dict[str, Any]:
        details: dict[str, Any] = {"path": self.path}
        if self.framework:
            details["framework"] = self.framework
        return details


class FrameworkNotFoundError(KnowledgeError):
    code = ErrorCode.FRAMEWORK_NOT_FOUND
    status_code = 404

    def __init__(self, framework: str, available: Sequence[str] | None = None) -> None:
        self.framework = framework
        self.available = list(available or [])
        message = f"Framework '{framework}' not found."
        if self.available:
            message += f" Available frameworks: {', '.join(self.available)}"
        super().__init__(message)

    def details(self) -> dict[str, Any]:
        return {"framework": self.framework, "available": self.available}


class InvalidQueryError(KnowledgeError):
    code = ErrorCode.INVALID_QUERY
    status_code = 400

    def __init__(self, field: str, reason: str | None = None) -> None:
        self.field = field
        message = f"Invalid value for '{field}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)

    def details(self) -> dict[str, Any]:
        return {"field": self.field}


class MalformedDocumentError(KnowledgeError):
    """Raised while parsing a single corpus file; the indexer skips it."""

    code = ErrorCode.MALFORMED_DOCUMENT
    status_code = 422

    def __init__(self, path: object, reason: str) -> None:
        self.path = str(path)
        super().__init__(f"Malformed document '{self.path}': {reason}")
