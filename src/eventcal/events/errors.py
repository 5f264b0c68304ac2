"""Error types for event storage operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class EventError(Exception):
    message: str
    code: str = "EVENT_ERROR"
    details: Any | None = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message


class EventValidationError(EventError):
    def __init__(self, message: str, field: str | None = None, value: Any | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR", details={"field": field, "value": value})
        self.field = field
        self.value = value


class EventFileError(EventError):
    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message, code="FILE_ERROR", details={"path": path})
        self.path = path


class EventParseError(EventError):
    def __init__(self, message: str, line_number: int | None = None, line: str | None = None) -> None:
        super().__init__(message, code="PARSE_ERROR", details={"line_number": line_number, "line": line})
        self.line_number = line_number
        self.line = line


class EventNotFoundError(EventError):
    def __init__(self, message: str, event_id: int | None = None) -> None:
        super().__init__(message, code="NOT_FOUND", details={"event_id": event_id})
        self.event_id = event_id


def format_error_for_user(error: Exception) -> str:
    if isinstance(error, EventValidationError):
        return f"Validation Error: {error.message}"
    if isinstance(error, EventParseError):
        if error.line_number is not None:
            return f"Parse Error: {error.message} (line {error.line_number})"
        return f"Parse Error: {error.message}"
    if isinstance(error, EventFileError):
        if error.path:
            return f"File Error: {error.message}: {error.path}"
        return f"File Error: {error.message}"
    if isinstance(error, EventNotFoundError):
        return f"Not Found: {error.message}"
    if isinstance(error, EventError):
        return f"Error: {error.message}"
    return f"Error: {str(error)}"
