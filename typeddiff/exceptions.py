"""Custom exceptions for the typeddiff engine."""

from __future__ import annotations

from typing import Any


class TypedDiffError(Exception):
    """Base exception for typeddiff errors."""
    pass


class TypeConflictError(TypedDiffError):
    """Raised when the same path holds values of incompatible kinds."""
    def __init__(self, before: Any, after: Any, path: str):
        super().__init__(
            f"Type of {_render(before)} and {_render(after)} conflict at path: {path}"
        )
        self.before = before
        self.after = after
        self.path = path


class ValidationError(TypedDiffError):
    """Raised when input validation fails."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class MaxDepthExceededError(TypedDiffError):
    """Raised when an input document nests deeper than allowed."""
    def __init__(self, depth: int, path: str):
        super().__init__(f"Maximum depth ({depth}) exceeded at path: {path}")
        self.depth = depth
        self.path = path


class PayloadSizeError(TypedDiffError):
    """Raised when payload size exceeds limit."""
    def __init__(self, size_mb: float, limit_mb: float):
        super().__init__(f"Payload size ({size_mb:.2f}MB) exceeds limit ({limit_mb}MB)")
        self.size_mb = size_mb
        self.limit_mb = limit_mb


class DocumentLoadError(TypedDiffError):
    """Raised when a document file cannot be read or parsed."""
    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to load document {path}: {reason}")
        self.path = path
        self.reason = reason


def _render(value: Any) -> str:
    # JSON-ish rendering so messages show "zero" vs 0 distinctly
    if isinstance(value, str):
        return f'"{value}"'
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return repr(value)
