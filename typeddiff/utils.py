"""Utility functions for the typeddiff engine."""

from __future__ import annotations

import dataclasses
import json
import math
from enum import Enum
from typing import Any, Hashable

from .exceptions import MaxDepthExceededError, ValidationError
from .models import ValueKind


def kind_of(value: Any) -> ValueKind:
    """Classify a parsed JSON value."""
    if value is None:
        return ValueKind.NULL
    elif isinstance(value, bool):
        return ValueKind.BOOLEAN
    elif isinstance(value, (int, float)):
        return ValueKind.NUMBER
    elif isinstance(value, str):
        return ValueKind.STRING
    elif isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    elif isinstance(value, dict):
        return ValueKind.OBJECT
    raise ValidationError(
        f"Unsupported value type: {type(value).__name__}",
        {"type": type(value).__name__}
    )


def get_type_name(value: Any) -> str:
    """Get a friendly type name for a value."""
    try:
        return kind_of(value).value
    except ValidationError:
        return type(value).__name__


def numbers_equal(left: float, right: float) -> bool:
    """Compare two numbers as doubles; NaN equals NaN."""
    left, right = float(left), float(right)
    if math.isnan(left) and math.isnan(right):
        return True
    return left == right


def freeze(value: Any) -> Hashable:
    """
    Build a hashable, value-equal representation of a tree value.

    Kinds are tagged so that True and 1 never collide. Objects compare
    regardless of key order.
    """
    kind = kind_of(value)
    if kind == ValueKind.NULL:
        return (kind.value,)
    if kind == ValueKind.NUMBER:
        number = float(value)
        if math.isnan(number):
            return (kind.value, "nan")
        return (kind.value, number)
    if kind == ValueKind.ARRAY:
        return (kind.value, tuple(freeze(item) for item in value))
    if kind == ValueKind.OBJECT:
        return (kind.value, frozenset((k, freeze(v)) for k, v in value.items()))
    return (kind.value, value)


def get_json_size_mb(obj: Any) -> float:
    """Get the approximate size of a JSON object in megabytes."""
    json_str = json.dumps(obj)
    return len(json_str.encode('utf-8')) / (1024 * 1024)


def check_document(data: Any, max_depth: int, path: str = "$", depth: int = 0):
    """
    Check that data is a well-formed tree no deeper than max_depth.

    Raises:
        MaxDepthExceededError: nesting exceeds max_depth
        ValidationError: an object key is not a string, or a value is not
            a JSON kind
    """
    if depth > max_depth:
        raise MaxDepthExceededError(max_depth, path)

    kind = kind_of(data)
    if kind == ValueKind.OBJECT:
        for key, value in data.items():
            if not isinstance(key, str):
                raise ValidationError(
                    f"Object keys must be strings, got {type(key).__name__} at {path}",
                    {"path": path, "key": repr(key)}
                )
            check_document(value, max_depth, f"{path}.{key}", depth + 1)
    elif kind == ValueKind.ARRAY:
        for i, item in enumerate(data):
            check_document(item, max_depth, f"{path}[{i}]", depth + 1)


def to_tree(obj: Any) -> Any:
    """
    Convert a Python object into a JSON-like tree value.

    Handles dataclasses, mappings, enums, objects exposing to_dict(),
    sequences and primitives. Object keys are converted to strings.
    """
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj
    if isinstance(obj, Enum):
        return to_tree(obj.value)
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {
            f.name: to_tree(getattr(obj, f.name))
            for f in dataclasses.fields(obj)
        }
    if isinstance(obj, dict):
        return {str(key): to_tree(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_tree(item) for item in obj]
    if hasattr(obj, "to_dict") and callable(obj.to_dict):
        return to_tree(obj.to_dict())

    raise ValidationError(
        f"Cannot convert {type(obj).__name__} to a JSON value",
        {"type": type(obj).__name__}
    )
