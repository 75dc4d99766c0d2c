"""
Compilation output types.

``errors`` and ``warnings`` on a CompilationResult are None, not an empty
list, when nothing was reported. ``to_dict`` omits them entirely in that
case; downstream consumers rely on key absence.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class GeneratedFile(BaseModel):
    """One generated source file, path relative to the platform project root."""

    model_config = ConfigDict(frozen=True)

    path: str
    content: str
    language: str | None = None


class Diagnostic(BaseModel):
    """
    An error or warning produced during compilation.

    Attribution via ``capsule_id`` is best-effort; ``suggestion`` is only
    set on warnings.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    code: str
    message: str
    capsule_id: str | None = None
    suggestion: str | None = None


class CompilationStats(BaseModel):
    """File totals and wall time (milliseconds) for one platform."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    file_count: int = 0
    total_size: int = 0
    compilation_time: float = 0.0


class CompilationResult(BaseModel):
    """Snapshot of one platform's compile."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    success: bool
    platform: str
    files: list[GeneratedFile] = Field(default_factory=list)
    errors: list[Diagnostic] | None = None
    warnings: list[Diagnostic] | None = None
    stats: CompilationStats = Field(default_factory=CompilationStats)

    def get_file(self, path: str) -> GeneratedFile | None:
        """Get a generated file by path."""
        for file in self.files:
            if file.path == path:
                return file
        return None

    def to_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys, dropping absent diagnostics."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
