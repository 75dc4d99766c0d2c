"""
Input loading for compositions and capsule definitions.

Reads JSON (``.json``) or YAML (``.yaml``/``.yml``) files into the pydantic
models. The compiler core never touches the filesystem; this module and
the CLI are the only readers.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .errors import make_load_error
from .ir import AppComposition, CapsuleDefinition

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = {".yaml", ".yml"}


# =============================================================================
# Raw documents
# =============================================================================


def read_document(path: Path) -> Any:
    """
    Read a JSON or YAML document.

    Raises:
        CompositionLoadError: If the file is missing or not parseable
    """
    if not path.exists():
        raise make_load_error("File not found", path)

    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in _YAML_SUFFIXES:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise make_load_error(f"Invalid YAML: {e}", path) from e

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise make_load_error(f"Invalid JSON: {e.msg} (line {e.lineno})", path) from e


def _error_key(e: ValidationError) -> str | None:
    errors = e.errors()
    if not errors:
        return None
    return ".".join(str(part) for part in errors[0]["loc"]) or None


# =============================================================================
# Models
# =============================================================================


def load_composition(path: Path) -> AppComposition:
    """
    Load an AppComposition from a JSON or YAML file.

    Args:
        path: Composition file

    Returns:
        Parsed AppComposition

    Raises:
        CompositionLoadError: If the file cannot be read or does not match the model
    """
    data = read_document(path)
    if not isinstance(data, dict):
        raise make_load_error("Composition must be a mapping", path)

    try:
        composition = AppComposition.model_validate(data)
    except ValidationError as e:
        raise make_load_error(
            f"Invalid composition: {e.error_count()} problem(s)\n{e}", path, _error_key(e)
        ) from e

    logger.debug("Loaded composition '%s' from %s", composition.name, path)
    return composition


def load_capsules(path: Path) -> list[CapsuleDefinition]:
    """
    Load capsule definitions from a JSON or YAML file.

    The document is either a list of definitions or a mapping with a
    ``capsules`` list.

    Raises:
        CompositionLoadError: If the file cannot be read or an entry is invalid
    """
    data = read_document(path)
    if isinstance(data, dict):
        data = data.get("capsules")
    if not isinstance(data, list):
        raise make_load_error("Expected a list of capsule definitions", path)

    definitions = []
    for i, entry in enumerate(data):
        try:
            definitions.append(CapsuleDefinition.model_validate(entry))
        except ValidationError as e:
            key = _error_key(e)
            raise make_load_error(
                f"Invalid capsule definition: {e}", path, f"{i}.{key}" if key else str(i)
            ) from e

    logger.debug("Loaded %d capsule definitions from %s", len(definitions), path)
    return definitions
