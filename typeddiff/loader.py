"""Loading documents from JSON or YAML files."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from .exceptions import DocumentLoadError

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}

TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class DocumentLoader(yaml.SafeLoader):
    """SafeLoader that keeps unquoted dates and timestamps as strings."""


DocumentLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def load_document(path: str | Path) -> Any:
    """
    Load a JSON or YAML document.

    Files ending in .yaml/.yml go through DocumentLoader; everything else is
    parsed as JSON (PyYAML would read JSON exponents like 1e3 as strings).
    """
    path = Path(path)
    if not path.exists():
        raise DocumentLoadError(str(path), "file not found")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentLoadError(str(path), str(e)) from e

    return parse_document(content, yaml_syntax=path.suffix.lower() in YAML_SUFFIXES,
                          source=str(path))


def parse_document(content: str, yaml_syntax: bool = False, source: str = "<string>") -> Any:
    """Parse document text as JSON, or YAML when yaml_syntax is set."""
    try:
        if yaml_syntax:
            document = yaml.load(content, Loader=DocumentLoader)
        else:
            document = json.loads(content)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise DocumentLoadError(source, str(e)) from e

    logger.debug("Parsed %s", source)
    return document


def load_pair(before_path: str | Path, after_path: str | Path) -> tuple[Any, Any]:
    """Load a before/after pair of documents."""
    return load_document(before_path), load_document(after_path)
