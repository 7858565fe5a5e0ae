"""Masking stage: removes ignored JSONPath locations before diffing."""

from __future__ import annotations

import logging
from copy import deepcopy
from typing import Any

from jsonpath_ng import parse as jsonpath_parse
from jsonpath_ng.exceptions import JsonPathLexerError, JsonPathParserError
from jsonpath_ng.jsonpath import Fields, Index

from .exceptions import ValidationError

logger = logging.getLogger(__name__)


class Masker:
    """
    Removes every location matched by the configured JSONPath expressions.

    Masked fields are deleted from both documents, so they count as
    absent on both sides and never produce a change.
    """

    def __init__(self, ignore_paths: list[str]):
        self.ignore_paths = list(ignore_paths)
        self._expressions = [self._compile(path) for path in self.ignore_paths]

    @staticmethod
    def _compile(path: str):
        try:
            return jsonpath_parse(path)
        except (JsonPathLexerError, JsonPathParserError) as e:
            raise ValidationError(
                f"Invalid JSONPath expression '{path}': {e}",
                {"path": path}
            ) from e

    def mask(self, before: Any, after: Any) -> tuple[Any, Any, int]:
        """
        Apply masking to both documents.

        Returns:
            Tuple of (masked_before, masked_after, removed_count)
        """
        if not self._expressions:
            return before, after, 0

        before = deepcopy(before)
        after = deepcopy(after)
        removed = self._mask_document(before) + self._mask_document(after)
        return before, after, removed

    def _mask_document(self, data: Any) -> int:
        removed = 0
        for path, expr in zip(self.ignore_paths, self._expressions):
            targets = []
            for match in expr.find(data):
                if match.context is None:
                    # The root itself cannot be removed
                    continue
                targets.append((match.context.value, match.path, str(match.full_path)))

            # Delete list entries from the highest index down
            targets.sort(key=lambda t: _index_of(t[1]), reverse=True)
            for container, step, full_path in targets:
                if self._delete(container, step):
                    logger.debug("Masked %s (matched %s)", full_path, path)
                    removed += 1
        return removed

    @staticmethod
    def _delete(container: Any, step: Any) -> bool:
        if isinstance(step, Fields) and isinstance(container, dict):
            deleted = False
            for name in step.fields:
                if name in container:
                    del container[name]
                    deleted = True
            return deleted
        if isinstance(step, Index) and isinstance(container, list):
            index = _index_of(step)
            if index < 0:
                index += len(container)
            if 0 <= index < len(container):
                del container[index]
                return True
        return False


def _index_of(step: Any) -> int:
    if isinstance(step, Index):
        indices = getattr(step, "indices", None)
        return indices[0] if indices else step.index
    return -1
