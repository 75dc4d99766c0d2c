"""
Composition orchestrator.

Fans one composition out to the registered platform compilers and gathers
the per-platform results into a single platform-keyed map.

Usage:
    orchestrator = create_orchestrator()
    results = await orchestrator.compile_all(composition, ["web", "ios"])
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

from .core.ir import AppComposition, CompilationResult
from .core.registry import CapsuleTemplateRegistry, default_registry
from .stacks import (
    COMPILATION_FAILED,
    COMPILATION_TIMEOUT,
    COMPILER_NOT_FOUND,
    PlatformCompiler,
    create_failure_result,
)

logger = logging.getLogger(__name__)


class CompositionOrchestrator:
    """
    Dispatches compilation across platforms.

    Compilers are registered at startup; registration is not synchronized
    with running compile_all() calls.
    """

    def __init__(self, timeout: float | None = None) -> None:
        """
        Args:
            timeout: Per-platform time limit in seconds (None for no limit)
        """
        self.timeout = timeout
        self._compilers: dict[str, PlatformCompiler] = {}

    def register_compiler(self, compiler: PlatformCompiler) -> None:
        """Register a compiler under its platform key. Last registration wins."""
        existing = self._compilers.get(compiler.platform)
        if existing is not None and existing is not compiler:
            logger.warning(
                "Replacing %s compiler %s with %s",
                compiler.platform,
                existing.__class__.__name__,
                compiler.__class__.__name__,
            )
        self._compilers[compiler.platform] = compiler

    def get_compiler(self, platform: str) -> PlatformCompiler | None:
        return self._compilers.get(platform)

    def get_available_platforms(self) -> list[str]:
        """Registered platform keys, in registration order."""
        return list(self._compilers)

    async def compile_all(
        self,
        composition: AppComposition,
        platforms: list[str] | None = None,
    ) -> dict[str, CompilationResult]:
        """
        Compile a composition for several platforms concurrently.

        Never raises for a single platform's problems: a missing compiler,
        a timeout or an escaped exception becomes that platform's failure
        result and the other platforms are unaffected.

        Args:
            composition: Composition to compile
            platforms: Platforms to build (defaults to composition.targets)

        Returns:
            Dict mapping each requested platform to its result
        """
        requested = list(dict.fromkeys(composition.targets if platforms is None else platforms))
        logger.info("Compiling '%s' for %s", composition.name, ", ".join(requested) or "no platforms")

        results = await asyncio.gather(
            *(self._compile_one(composition, platform) for platform in requested)
        )
        return dict(zip(requested, results, strict=True))

    async def _compile_one(self, composition: AppComposition, platform: str) -> CompilationResult:
        compiler = self._compilers.get(platform)
        if compiler is None:
            logger.warning("No compiler registered for platform '%s'", platform)
            return create_failure_result(
                platform, COMPILER_NOT_FOUND, f"no compiler registered for platform: {platform}"
            )

        try:
            if self.timeout is None:
                return await compiler.compile(composition)
            return await asyncio.wait_for(compiler.compile(composition), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning("%s compilation timed out after %ss", platform, self.timeout)
            return create_failure_result(
                platform,
                COMPILATION_TIMEOUT,
                f"compilation for {platform} exceeded {self.timeout}s",
            )
        except Exception as e:
            logger.exception("%s compiler raised", platform)
            return create_failure_result(platform, COMPILATION_FAILED, str(e) or e.__class__.__name__)


def create_orchestrator(
    registry: CapsuleTemplateRegistry | None = None,
    timeout: float | None = None,
) -> CompositionOrchestrator:
    """
    Create an orchestrator with the built-in web, ios, android and desktop
    compilers sharing one registry.

    Args:
        registry: Capsule registry (defaults to the built-in capsules)
        timeout: Per-platform time limit in seconds

    Returns:
        Configured CompositionOrchestrator
    """
    from .stacks.android import AndroidCompiler
    from .stacks.desktop import DesktopCompiler
    from .stacks.ios import IOSCompiler
    from .stacks.web import WebCompiler

    registry = registry if registry is not None else default_registry()
    orchestrator = CompositionOrchestrator(timeout=timeout)
    for compiler_cls in (WebCompiler, IOSCompiler, AndroidCompiler, DesktopCompiler):
        orchestrator.register_compiler(compiler_cls(registry))
    return orchestrator


@dataclass
class CompilationSummary:
    """Totals across a compile_all() result map."""

    success: bool = True
    platforms: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    file_count: int = 0
    total_size: int = 0
    error_count: int = 0
    warning_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "platforms": self.platforms,
            "failed": self.failed,
            "fileCount": self.file_count,
            "totalSize": self.total_size,
            "errorCount": self.error_count,
            "warningCount": self.warning_count,
        }


def summarize(results: dict[str, CompilationResult]) -> CompilationSummary:
    """Aggregate success flag and totals across platforms."""
    summary = CompilationSummary()
    for platform, result in results.items():
        summary.platforms.append(platform)
        if not result.success:
            summary.success = False
            summary.failed.append(platform)
        summary.file_count += result.stats.file_count
        summary.total_size += result.stats.total_size
        summary.error_count += len(result.errors or [])
        summary.warning_count += len(result.warnings or [])
    return summary
