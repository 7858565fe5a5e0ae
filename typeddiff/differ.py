"""Recursive typed diffing of two JSON-like documents."""

from __future__ import annotations

import logging
from typing import Any

from .exceptions import TypeConflictError, ValidationError
from .models import ValueKind
from .result import DiffResult, DiffResultBuilder
from .utils import freeze, get_type_name, kind_of, numbers_equal

logger = logging.getLogger(__name__)


def types_conflict(before: Any, after: Any) -> bool:
    """
    Check whether two values cannot be diffed against each other.

    Null never conflicts. Otherwise objects only match objects, arrays only
    match arrays and primitives must share a sub-kind (boolean, number or
    string). Integral and fractional numbers are both numbers.
    """
    before_kind = kind_of(before)
    after_kind = kind_of(after)

    if before_kind == ValueKind.NULL or after_kind == ValueKind.NULL:
        return False
    return before_kind != after_kind


class Differ:
    """
    Walks two parsed documents and records every leaf-level change.

    Handles:
    - Nested objects (keys joined with '.')
    - Arrays, compared by distinct membership and reported as count deltas
    - Missing keys and explicit nulls, which are treated the same
    - Type conflicts, which abort the whole diff

    Instances hold no state; a single Differ can be shared and reused.
    """

    def diff(self, before: dict, after: dict) -> DiffResult:
        """
        Diff two JSON objects.

        Args:
            before: The original document
            after: The modified document

        Returns:
            DiffResult with one record per changed leaf or array

        Raises:
            TypeConflictError: if a path holds incompatible kinds
        """
        for name, value in (("before", before), ("after", after)):
            if kind_of(value) != ValueKind.OBJECT:
                raise ValidationError(
                    f"{name} must be an object",
                    {"type": get_type_name(value)}
                )

        builder = DiffResultBuilder()
        self._diff_objects(builder, before, after, "")
        return builder.build()

    def _diff_objects(
        self,
        builder: DiffResultBuilder,
        before: dict,
        after: dict,
        prefix: str
    ):
        """Compare two objects key by key."""
        for key, after_value in after.items():
            full_key = prefix + key

            if key not in before:
                self._add_added(builder, full_key, after_value)
                continue

            before_value = before[key]
            if types_conflict(before_value, after_value):
                logger.warning(
                    "Type conflict at %s: %s vs %s",
                    full_key, get_type_name(before_value), get_type_name(after_value)
                )
                raise TypeConflictError(before_value, after_value, full_key)

            before_kind = kind_of(before_value)
            after_kind = kind_of(after_value)

            if before_kind == ValueKind.NULL:
                self._add_added(builder, full_key, after_value)
            elif after_kind == ValueKind.NULL:
                self._add_removed(builder, full_key, before_value)
            elif after_kind == ValueKind.ARRAY:
                self._diff_arrays(builder, before_value, after_value, full_key)
            elif after_kind == ValueKind.OBJECT:
                self._diff_objects(builder, before_value, after_value, full_key + ".")
            else:
                self._diff_scalars(builder, before_value, after_value, full_key)

        # Keys only in before
        for key, before_value in before.items():
            if key not in after:
                self._add_removed(builder, prefix + key, before_value)

    def _diff_arrays(
        self,
        builder: DiffResultBuilder,
        before: list,
        after: list,
        key: str
    ):
        """
        Compare arrays by distinct membership (order and repeats ignored).

        Every after element missing from the before set counts as added, and
        every before element missing from the after set counts as removed.
        """
        before_set = {freeze(item) for item in before}
        after_set = {freeze(item) for item in after}

        added_count = sum(1 for item in after if freeze(item) not in before_set)
        removed_count = sum(1 for item in before if freeze(item) not in after_set)

        if added_count != 0 or removed_count != 0:
            builder.put_integer(key, -removed_count, added_count)

    def _diff_scalars(
        self,
        builder: DiffResultBuilder,
        before: Any,
        after: Any,
        key: str
    ):
        """Compare two primitives of the same kind."""
        kind = kind_of(before)

        if kind == ValueKind.BOOLEAN:
            if before != after:
                builder.put_boolean(key, before, after)
        elif kind == ValueKind.NUMBER:
            if not numbers_equal(before, after):
                builder.put_number(key, before, after)
        else:
            if before != after:
                builder.put_string(key, before, after)

    def _add_added(self, builder: DiffResultBuilder, key: str, value: Any):
        """Record every leaf under a value that appeared."""
        kind = kind_of(value)

        if kind == ValueKind.NULL:
            return
        elif kind == ValueKind.ARRAY:
            if len(value) > 0:
                builder.put_integer(key, 0, len(value))
        elif kind == ValueKind.OBJECT:
            for sub_key, sub_value in value.items():
                self._add_added(builder, key + "." + sub_key, sub_value)
        else:
            self._put_primitive(builder, kind, key, None, value)

    def _add_removed(self, builder: DiffResultBuilder, key: str, value: Any):
        """Record every leaf under a value that disappeared."""
        kind = kind_of(value)

        if kind == ValueKind.NULL:
            return
        elif kind == ValueKind.ARRAY:
            if len(value) > 0:
                builder.put_integer(key, -len(value), 0)
        elif kind == ValueKind.OBJECT:
            for sub_key, sub_value in value.items():
                self._add_removed(builder, key + "." + sub_key, sub_value)
        else:
            self._put_primitive(builder, kind, key, value, None)

    def _put_primitive(
        self,
        builder: DiffResultBuilder,
        kind: ValueKind,
        key: str,
        left: Any,
        right: Any
    ):
        if kind == ValueKind.BOOLEAN:
            builder.put_boolean(key, left, right)
        elif kind == ValueKind.NUMBER:
            builder.put_number(key, left, right)
        else:
            builder.put_string(key, left, right)
