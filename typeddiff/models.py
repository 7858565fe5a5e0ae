"""Data models for the typeddiff engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from .exceptions import ValidationError

T = TypeVar("T")


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"

    def to_logging(self) -> int:
        """Map to the stdlib logging level."""
        return {
            LogLevel.DEBUG: logging.DEBUG,
            LogLevel.INFO: logging.INFO,
            LogLevel.WARN: logging.WARNING,
            LogLevel.ERROR: logging.ERROR,
        }[self]


class ValueKind(Enum):
    """Kinds of node in a parsed JSON-like tree."""
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


class LeafKind(Enum):
    """Partitions of a diff result. Array count deltas are stored as INTEGER."""
    STRING = "strings"
    NUMBER = "numbers"
    INTEGER = "integers"
    BOOLEAN = "booleans"


@dataclass(frozen=True)
class DiffItem(Generic[T]):
    """A single change: the before (left) and after (right) value at a path key."""
    key: str
    left: Optional[T] = None
    right: Optional[T] = None

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "left": self.left,
            "right": self.right,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DiffItem":
        if not isinstance(data, dict) or "key" not in data:
            raise ValidationError("Diff item must be an object with a 'key'",
                                  {"value": data})
        return cls(key=data["key"], left=data.get("left"), right=data.get("right"))


@dataclass
class EngineConfig:
    """
    Global configuration for the diff engine.

    log_level is applied to the process-wide "typeddiff" logger when an
    engine is built with it. Leave it as None to keep the host application's
    logging setup.
    """
    max_depth: int = 100
    max_payload_size_mb: float = 50
    ignore_paths: list[str] = field(default_factory=list)
    log_level: Optional[LogLevel] = None

    def __post_init__(self):
        if self.log_level is not None and not isinstance(self.log_level, LogLevel):
            try:
                self.log_level = LogLevel(str(self.log_level).upper())
            except ValueError:
                raise ValidationError(
                    f"Invalid log level: {self.log_level}",
                    {"allowed": [level.value for level in LogLevel]}
                )

    @classmethod
    def from_dict(cls, data: dict) -> "EngineConfig":
        """Build a config from a plain mapping (e.g. a parsed YAML file)."""
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValidationError(
                "Engine config must be an object",
                {"type": type(data).__name__}
            )

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValidationError(
                f"Unknown engine config keys: {', '.join(unknown)}",
                {"unknown": unknown}
            )

        kwargs: dict[str, Any] = dict(data)
        if "ignore_paths" in kwargs:
            paths = kwargs["ignore_paths"] or []
            if not isinstance(paths, list) or not all(isinstance(p, str) for p in paths):
                raise ValidationError("ignore_paths must be a list of strings")
            kwargs["ignore_paths"] = list(paths)

        return cls(**kwargs)

    @classmethod
    def from_file(cls, path: str) -> "EngineConfig":
        """Load a config from a YAML or JSON file."""
        from .loader import load_document
        return cls.from_dict(load_document(path))
