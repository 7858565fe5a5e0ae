"""Diff result store and its incremental builder."""

from __future__ import annotations

import json
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional

from .exceptions import ValidationError
from .models import DiffItem, LeafKind


def fits_partition(kind: LeafKind, value: Any) -> bool:
    """Whether a non-null value may be stored in the given partition."""
    if kind is LeafKind.STRING:
        return isinstance(value, str)
    if kind is LeafKind.BOOLEAN:
        return isinstance(value, bool)
    if isinstance(value, bool):
        return False
    if kind is LeafKind.INTEGER:
        return isinstance(value, int)
    return isinstance(value, (int, float))


class DiffResult:
    """
    Immutable collection of typed changes between two documents.

    Records are partitioned by leaf kind and keyed on dotted path. A path
    key appears in at most one partition. Create one with
    DiffResultBuilder (or DiffResult.builder()).
    """

    def __init__(self, partitions: Mapping[LeafKind, Mapping[str, DiffItem]]):
        self._partitions = MappingProxyType({
            kind: MappingProxyType(dict(partitions.get(kind, {})))
            for kind in LeafKind
        })

    @classmethod
    def builder(cls) -> "DiffResultBuilder":
        return DiffResultBuilder()

    def get_string_diff(self, key: str) -> Optional[DiffItem[str]]:
        """Return the string change at key, or None if there is none."""
        return self._partitions[LeafKind.STRING].get(key)

    def get_number_diff(self, key: str) -> Optional[DiffItem[float]]:
        """Return the number change at key, or None if there is none."""
        return self._partitions[LeafKind.NUMBER].get(key)

    def get_integer_diff(self, key: str) -> Optional[DiffItem[int]]:
        """Return the array count delta at key, or None if there is none."""
        return self._partitions[LeafKind.INTEGER].get(key)

    def get_boolean_diff(self, key: str) -> Optional[DiffItem[bool]]:
        """Return the boolean change at key, or None if there is none."""
        return self._partitions[LeafKind.BOOLEAN].get(key)

    def partition(self, kind: LeafKind) -> Mapping[str, DiffItem]:
        """Read-only view of one partition."""
        return self._partitions[kind]

    def kind_of(self, key: str) -> Optional[LeafKind]:
        """Return the partition holding key, or None if key did not change."""
        for kind in LeafKind:
            if key in self._partitions[kind]:
                return kind
        return None

    def size(self) -> int:
        return sum(len(records) for records in self._partitions.values())

    def __len__(self) -> int:
        return self.size()

    @property
    def is_empty(self) -> bool:
        return self.size() == 0

    def keys(self) -> list[str]:
        return sorted(key for records in self._partitions.values() for key in records)

    def items(self) -> Iterator[tuple[LeafKind, DiffItem]]:
        """Iterate (kind, item) pairs ordered by kind, then key."""
        for kind in LeafKind:
            records = self._partitions[kind]
            for key in sorted(records):
                yield kind, records[key]

    def summary(self) -> dict:
        return {kind.value: len(self._partitions[kind]) for kind in LeafKind}

    def to_dict(self) -> dict:
        return {
            kind.value: {
                key: item.to_dict()
                for key, item in self._partitions[kind].items()
            }
            for kind in LeafKind
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DiffResult":
        """Rebuild a result from the output of to_dict()."""
        if not isinstance(data, dict):
            raise ValidationError(
                "Serialized diff result must be an object",
                {"type": type(data).__name__}
            )

        unknown = sorted(set(data) - {kind.value for kind in LeafKind})
        if unknown:
            raise ValidationError(
                f"Unknown diff result partitions: {', '.join(unknown)}",
                {"unknown": unknown}
            )

        builder = DiffResultBuilder()
        for kind in LeafKind:
            records = data.get(kind.value)
            if records is None:
                continue
            if not isinstance(records, dict):
                raise ValidationError(
                    f"Partition '{kind.value}' must be an object",
                    {"type": type(records).__name__}
                )
            for key, record in records.items():
                item = DiffItem.from_dict(record)
                if item.key != key:
                    raise ValidationError(
                        f"Diff item key '{item.key}' does not match '{key}'",
                        {"partition": kind.value}
                    )
                for side in (item.left, item.right):
                    if side is not None and not fits_partition(kind, side):
                        raise ValidationError(
                            f"Value {side!r} at '{key}' does not belong in '{kind.value}'",
                            {"partition": kind.value, "key": key}
                        )
                builder.put_kind(kind, item.key, item.left, item.right)
        return builder.build()

    def to_json(self, **kwargs: Any) -> str:
        return json.dumps(self.to_dict(), **kwargs)

    @classmethod
    def from_json(cls, text: str) -> "DiffResult":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid diff result JSON: {e}") from e
        return cls.from_dict(data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DiffResult):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        counts = ", ".join(f"{k}={v}" for k, v in self.summary().items())
        return f"DiffResult({counts})"


class DiffResultBuilder:
    """Accumulates change records for one diff run."""

    def __init__(self):
        self._partitions: dict[LeafKind, dict[str, DiffItem]] = {
            kind: {} for kind in LeafKind
        }

    def put(self, key: str, left: Any, right: Any) -> "DiffResultBuilder":
        """
        Add a change, choosing the partition from the value types.

        bool goes to booleans, int/float to numbers and str to strings.
        Use put_integer for array count deltas.
        """
        sample = left if left is not None else right
        if isinstance(sample, bool):
            return self.put_boolean(key, left, right)
        elif isinstance(sample, (int, float)):
            return self.put_number(key, left, right)
        elif isinstance(sample, str):
            return self.put_string(key, left, right)
        raise ValidationError(
            f"Cannot store a diff of type {type(sample).__name__} at '{key}'",
            {"key": key}
        )

    def put_string(self, key: str, left: Optional[str],
                   right: Optional[str]) -> "DiffResultBuilder":
        return self._store(LeafKind.STRING, key, left, right)

    def put_number(self, key: str, left: Optional[float],
                   right: Optional[float]) -> "DiffResultBuilder":
        return self._store(
            LeafKind.NUMBER,
            key,
            None if left is None else float(left),
            None if right is None else float(right),
        )

    def put_integer(self, key: str, left: Optional[int],
                    right: Optional[int]) -> "DiffResultBuilder":
        return self._store(
            LeafKind.INTEGER,
            key,
            None if left is None else int(left),
            None if right is None else int(right),
        )

    def put_boolean(self, key: str, left: Optional[bool],
                    right: Optional[bool]) -> "DiffResultBuilder":
        return self._store(LeafKind.BOOLEAN, key, left, right)

    def put_kind(self, kind: LeafKind, key: str, left: Any,
                 right: Any) -> "DiffResultBuilder":
        """Add a change to an explicit partition."""
        return {
            LeafKind.STRING: self.put_string,
            LeafKind.NUMBER: self.put_number,
            LeafKind.INTEGER: self.put_integer,
            LeafKind.BOOLEAN: self.put_boolean,
        }[kind](key, left, right)

    def _store(self, kind: LeafKind, key: str, left: Any,
               right: Any) -> "DiffResultBuilder":
        self._partitions[kind][key] = DiffItem(key=key, left=left, right=right)
        return self

    def size(self) -> int:
        return sum(len(records) for records in self._partitions.values())

    def build(self) -> DiffResult:
        return DiffResult(self._partitions)
