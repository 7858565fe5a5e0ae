"""
typeddiff - Structural diff of JSON-like documents

Compares a "before" and "after" document that share a schema and reports
every leaf-level change as a typed record keyed by dotted path. Arrays are
compared by distinct membership and reported as count deltas; missing keys
and nulls are equivalent; incompatible kinds at one path abort the diff.
"""

from .engine import DiffEngine, diff
from .differ import Differ, types_conflict
from .models import (
    EngineConfig,
    DiffItem,
    LeafKind,
    LogLevel,
    ValueKind,
)
from .result import DiffResult, DiffResultBuilder
from .exceptions import (
    TypedDiffError,
    TypeConflictError,
    ValidationError,
    MaxDepthExceededError,
    PayloadSizeError,
    DocumentLoadError,
)
from .loader import load_document, load_pair, parse_document

__version__ = "1.0.0"
__all__ = [
    # Engine
    "DiffEngine",
    "EngineConfig",
    "LogLevel",
    "diff",
    "Differ",
    "types_conflict",
    # Results
    "DiffResult",
    "DiffResultBuilder",
    "DiffItem",
    "LeafKind",
    "ValueKind",
    # Loading
    "load_document",
    "load_pair",
    "parse_document",
    # Errors
    "TypedDiffError",
    "TypeConflictError",
    "ValidationError",
    "MaxDepthExceededError",
    "PayloadSizeError",
    "DocumentLoadError",
]
