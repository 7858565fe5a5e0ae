"""Main diff engine for typeddiff."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any, Optional

from .differ import Differ
from .exceptions import PayloadSizeError, ValidationError
from .loader import load_pair
from .masker import Masker
from .models import EngineConfig
from .result import DiffResult
from .utils import check_document, get_json_size_mb, get_type_name, to_tree

logger = logging.getLogger(__name__)


class DiffEngine:
    """
    Diff engine that orchestrates a 3-stage pipeline:

    1. Validation: Top-level objects, payload size and nesting depth
    2. Masking: Remove ignored JSONPath locations
    3. Typed Diffing: Recursive walk producing a DiffResult

    Errors are raised, never returned: a type conflict anywhere voids the
    whole diff.
    """

    VERSION = "1.0.0"

    def __init__(self, config: Optional[EngineConfig] = None):
        """
        Initialize the engine.

        Args:
            config: Engine configuration (uses defaults if not provided)
        """
        self.config = config or EngineConfig()
        if self.config.log_level is not None:
            logging.getLogger("typeddiff").setLevel(self.config.log_level.to_logging())
        self.masker = Masker(self.config.ignore_paths)
        self.differ = Differ()

    def diff(self, before: Any, after: Any) -> DiffResult:
        """
        Diff two parsed JSON objects.

        Args:
            before: The original document
            after: The modified document

        Returns:
            DiffResult with every leaf-level change

        Raises:
            TypeConflictError: a path holds incompatible kinds
            ValidationError: inputs are not JSON objects
            PayloadSizeError: an input exceeds max_payload_size_mb
            MaxDepthExceededError: an input nests deeper than max_depth
        """
        start_time = time.time()

        self._validate_inputs(before, after)

        before, after, masked = self.masker.mask(before, after)
        logger.debug(
            "Diffing %d before keys against %d after keys (%d masked)",
            len(before), len(after), masked
        )

        result = self.differ.diff(before, after)

        duration_ms = int((time.time() - start_time) * 1000)
        logger.info("Diff finished: %d changes in %dms", result.size(), duration_ms)
        return result

    def diff_objects(self, before: Any, after: Any) -> DiffResult:
        """Diff two Python objects (dataclasses, mappings, ...) via their JSON trees."""
        return self.diff(to_tree(before), to_tree(after))

    def diff_files(self, before_path: str | Path, after_path: str | Path) -> DiffResult:
        """Load two JSON/YAML files and diff them."""
        before, after = load_pair(before_path, after_path)
        return self.diff(before, after)

    def _validate_inputs(self, before: Any, after: Any):
        """Validate input documents."""
        for name, value in (("before", before), ("after", after)):
            if value is None:
                raise ValidationError(f"{name} is required")
            if not isinstance(value, dict):
                raise ValidationError(
                    f"{name} must be an object",
                    {"type": get_type_name(value)}
                )

        for value in (before, after):
            check_document(value, self.config.max_depth)

            size_mb = get_json_size_mb(value)
            if size_mb > self.config.max_payload_size_mb:
                raise PayloadSizeError(size_mb, self.config.max_payload_size_mb)


def diff(before: Any, after: Any, config: Optional[EngineConfig] = None) -> DiffResult:
    """
    Convenience function to diff two JSON objects.

    Args:
        before: The original document
        after: The modified document
        config: Optional engine configuration

    Returns:
        DiffResult with every leaf-level change
    """
    engine = DiffEngine(config)
    return engine.diff(before, after)
