"""
Error types for CapsuleForge configuration, input loading, and registration.

Problems found while compiling a composition are never raised: they are
recorded as diagnostics on the CompilationResult. These exceptions cover
the boundaries around the compiler (files, config, registration).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


class CapsuleForgeError(Exception):
    """Base exception for all CapsuleForge errors."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(message if context is None else f"{context.format()}: {message}")


class ConfigError(CapsuleForgeError):
    """
    Raised when capsuleforge.toml cannot be read.

    Examples:
    - Malformed TOML
    - Wrong value types (e.g. targets not a list)
    """

    pass


class CompositionLoadError(CapsuleForgeError):
    """
    Raised when a composition or capsule file cannot be loaded.

    Examples:
    - File not found
    - Invalid JSON/YAML
    - Structure that does not match the composition model
    """

    pass


class RegistryError(CapsuleForgeError):
    """
    Raised when invalid capsule definitions are registered.

    Examples:
    - Definition without an id
    - Raw data that does not match the capsule model
    """

    pass


@dataclass
class ErrorContext:
    """
    Location information for an error.

    Attributes:
        file: Path to the file being read
        key: Optional dotted key path inside the document (e.g. "root.children.0")
    """

    file: Path
    key: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "composition.json at root.children.0"
        """
        if self.key:
            return f"{self.file} at {self.key}"
        return str(self.file)


def make_load_error(message: str, file: Path, key: str | None = None) -> CompositionLoadError:
    """
    Helper to create a CompositionLoadError with context.

    Args:
        message: Error description
        file: Source file path
        key: Optional key path inside the document

    Returns:
        CompositionLoadError with context attached
    """
    return CompositionLoadError(message, ErrorContext(file=file, key=key))
