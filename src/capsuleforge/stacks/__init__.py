"""
Platform compiler system for CapsuleForge.

A platform compiler turns one AppComposition into the generated source
files of one target platform (web, ios, android, desktop).

Each ``compile()`` call runs RESET -> ACCUMULATE -> FINALIZE:

- RESET: a fresh CompileContext holds this call's diagnostics and files
- ACCUMULATE: on a worker thread, the tree is checked, then ``emit()`` writes
  files into the context
- FINALIZE: ``create_result()`` snapshots the context into a CompilationResult

Nothing about an in-flight call is stored on the compiler instance, so one
compiler may serve concurrent calls.
"""

from __future__ import annotations

import asyncio
import logging
import re
import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any, ClassVar

from pydantic import BaseModel, ValidationError

from ..core.ir import (
    AppComposition,
    CapsuleDefinition,
    CapsuleInstance,
    CompilationResult,
    CompilationStats,
    Diagnostic,
    GeneratedFile,
    PlatformTemplate,
)
from ..core.registry import CapsuleTemplateRegistry
from ..core.strings import to_identifier, to_kebab_case, to_pascal_case

logger = logging.getLogger(__name__)

# Diagnostic codes
COMPILER_NOT_FOUND = "COMPILER_NOT_FOUND"
COMPILATION_FAILED = "COMPILATION_FAILED"
COMPILATION_TIMEOUT = "COMPILATION_TIMEOUT"
UNSUPPORTED_CAPSULE = "UNSUPPORTED_CAPSULE"
DUPLICATE_INSTANCE_ID = "DUPLICATE_INSTANCE_ID"
MISSING_REQUIRED_PROP = "MISSING_REQUIRED_PROP"
INVALID_PLATFORM_CONFIG = "INVALID_PLATFORM_CONFIG"
INVALID_PROP_NAME = "INVALID_PROP_NAME"
EMPTY_COMPOSITION = "EMPTY_COMPOSITION"

# Prop names usable as attribute / argument labels on every target
_PROP_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

Visitor = Callable[[CapsuleInstance, int], None]


@dataclass
class Diagnostics:
    """
    Errors and warnings for a single compile call.

    Attributes:
        errors: Problems that make the platform's result unsuccessful
        warnings: Advisory notes, optionally with a suggestion
    """

    errors: list[Diagnostic] = field(default_factory=list)
    warnings: list[Diagnostic] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def add_error(self, code: str, message: str, capsule_id: str | None = None) -> None:
        """Record an error."""
        self.errors.append(Diagnostic(code=code, message=message, capsule_id=capsule_id))

    def add_warning(
        self,
        code: str,
        message: str,
        capsule_id: str | None = None,
        suggestion: str | None = None,
    ) -> None:
        """Record a warning."""
        self.warnings.append(
            Diagnostic(code=code, message=message, capsule_id=capsule_id, suggestion=suggestion)
        )


@dataclass
class CompileContext:
    """
    Call-scoped state threaded through one compile.

    Attributes:
        composition: The composition being compiled (read-only)
        config: This platform's resolved config overlay
        diagnostics: Errors and warnings for this call
        files: Files emitted so far
    """

    composition: AppComposition
    config: Any
    diagnostics: Diagnostics = field(default_factory=Diagnostics)
    files: list[GeneratedFile] = field(default_factory=list)

    def add_file(self, path: str, content: str, language: str | None = None) -> None:
        """Record a generated file."""
        logger.debug("Emitting %s (%d chars)", path, len(content))
        self.files.append(GeneratedFile(path=path, content=content, language=language))


class PlatformCompiler(ABC):
    """
    Abstract base class for platform compilers.

    Subclasses declare ``platform``, ``name`` and ``config_model`` and
    implement ``emit()``; everything target-syntax specific lives in the
    subclass module.

    Example:
        class EchoCompiler(PlatformCompiler):
            platform = "echo"
            name = "Echo"

            def emit(self, ctx: CompileContext) -> None:
                ctx.add_file("app.txt", ctx.composition.name)
    """

    platform: ClassVar[str]
    name: ClassVar[str]
    config_model: ClassVar[type[BaseModel] | None] = None

    def __init__(self, registry: CapsuleTemplateRegistry) -> None:
        self.registry = registry

    async def compile(self, composition: AppComposition) -> CompilationResult:
        """
        Compile a composition for this platform.

        Never raises for data problems: unsupported capsules, bad config and
        unexpected generator failures all become diagnostics.

        Args:
            composition: Composition to compile

        Returns:
            CompilationResult for this platform
        """
        started = time.perf_counter()
        logger.info("Compiling '%s' for %s", composition.name, self.platform)

        diagnostics = Diagnostics()
        ctx = CompileContext(
            composition=composition,
            config=self.resolve_config(composition, diagnostics),
            diagnostics=diagnostics,
        )

        try:
            await asyncio.to_thread(self._accumulate, ctx)
        except Exception as e:
            logger.exception("%s compiler failed on '%s'", self.platform, composition.name)
            diagnostics.add_error(COMPILATION_FAILED, str(e) or e.__class__.__name__)

        elapsed_ms = (time.perf_counter() - started) * 1000
        result = self.create_result(
            not diagnostics.has_errors, ctx.files, diagnostics, compilation_time=elapsed_ms
        )
        logger.info(
            "Compiled '%s' for %s: %d files, %d errors, %d warnings",
            composition.name,
            self.platform,
            len(ctx.files),
            len(diagnostics.errors),
            len(diagnostics.warnings),
        )
        return result

    def _accumulate(self, ctx: CompileContext) -> None:
        """Check then emit; called on a worker thread."""
        self.check_composition(ctx)
        self.emit(ctx)

    @abstractmethod
    def emit(self, ctx: CompileContext) -> None:
        """
        Generate this platform's files into the context.

        Instances whose capsule is unsupported have already been reported
        by check_composition; they produce no output of their own, but their
        children and slots are still rendered.
        """
        pass

    # =========================================================================
    # Lifecycle helpers
    # =========================================================================

    def resolve_config(self, composition: AppComposition, diagnostics: Diagnostics) -> Any:
        """
        Validate this platform's config overlay, falling back to defaults.
        """
        if self.config_model is None:
            return None

        overlay = composition.platform_config.get(self.platform, {})
        try:
            return self.config_model.model_validate(overlay)
        except ValidationError as e:
            diagnostics.add_warning(
                INVALID_PLATFORM_CONFIG,
                f"Invalid {self.platform} config ignored: {e.error_count()} problem(s)",
                suggestion=f"Check platformConfig.{self.platform} against the documented options",
            )
            return self.config_model()

    def check_composition(self, ctx: CompileContext) -> None:
        """
        Walk every instance once, reporting unsupported capsules, duplicate
        ids and missing required props.
        """
        composition = ctx.composition
        diagnostics = ctx.diagnostics

        if composition.root is None and not composition.capsules:
            diagnostics.add_warning(
                EMPTY_COMPOSITION,
                f"Composition '{composition.name}' has no capsules",
                suggestion="Add a root capsule or a capsule list",
            )
            return

        checked: set[str] = set()
        for tree in self._trees(composition):
            seen: set[str] = set()

            def visit(instance: CapsuleInstance, depth: int) -> None:
                if instance.id in seen:
                    diagnostics.add_warning(
                        DUPLICATE_INSTANCE_ID,
                        f"Instance id '{instance.id}' is used more than once",
                        capsule_id=instance.id,
                        suggestion="Give every capsule instance a unique id",
                    )
                elif instance.id in checked:
                    # Flat list entry already checked as part of the root tree
                    return
                seen.add(instance.id)
                self._check_instance(instance, ctx)

            for top in tree:
                self.walk_capsule_tree(top, visit)
            checked |= seen

    def _trees(self, composition: AppComposition) -> Iterator[list[CapsuleInstance]]:
        if composition.root is not None:
            yield [composition.root]
        if composition.capsules:
            yield list(composition.capsules)

    def _check_instance(self, instance: CapsuleInstance, ctx: CompileContext) -> None:
        definition = self.get_capsule(instance.capsule_id)
        if definition is None:
            if self.registry.lookup(instance.capsule_id) is None:
                message = f"Unknown capsule '{instance.capsule_id}'"
            else:
                message = f"Capsule '{instance.capsule_id}' is not supported on {self.platform}"
            ctx.diagnostics.add_error(UNSUPPORTED_CAPSULE, message, capsule_id=instance.id)
            return

        for prop in definition.required_props:
            if prop.type == "action":
                continue
            if instance.props.get(prop.name) is None:
                ctx.diagnostics.add_warning(
                    MISSING_REQUIRED_PROP,
                    f"Required prop '{prop.name}' is not set on '{instance.id}'",
                    capsule_id=instance.id,
                    suggestion=f"Set '{prop.name}' on {definition.name}",
                )

        for key in instance.props:
            if not _PROP_NAME.fullmatch(key):
                ctx.diagnostics.add_warning(
                    INVALID_PROP_NAME,
                    f"Prop '{key}' on '{instance.id}' is not a valid name and was dropped",
                    capsule_id=instance.id,
                )

    def create_result(
        self,
        success: bool,
        files: list[GeneratedFile],
        diagnostics: Diagnostics | None = None,
        compilation_time: float = 0.0,
    ) -> CompilationResult:
        """
        Build a CompilationResult.

        Empty diagnostic lists become None.
        """
        errors = list(diagnostics.errors) if diagnostics and diagnostics.errors else None
        warnings = list(diagnostics.warnings) if diagnostics and diagnostics.warnings else None
        return CompilationResult(
            success=success,
            platform=self.platform,
            files=list(files),
            errors=errors,
            warnings=warnings,
            stats=CompilationStats(
                file_count=len(files),
                total_size=sum(len(f.content) for f in files),
                compilation_time=compilation_time,
            ),
        )

    # =========================================================================
    # Registry queries scoped to this platform
    # =========================================================================

    def get_capsule(self, capsule_id: str) -> CapsuleDefinition | None:
        """Definition for a capsule, only if it supports this platform."""
        if not self.supports_capsule(capsule_id):
            return None
        return self.registry.lookup(capsule_id)

    def supports_capsule(self, capsule_id: str) -> bool:
        return self.registry.supports(capsule_id, self.platform)

    def get_template(self, capsule_id: str) -> PlatformTemplate | None:
        return self.registry.template(capsule_id, self.platform)

    # =========================================================================
    # Tree helpers
    # =========================================================================

    def walk_capsule_tree(self, instance: CapsuleInstance, visitor: Visitor, depth: int = 0) -> None:
        """
        Depth-first, pre-order walk.

        Visits the instance, then its children, then each slot's instances
        in slot order. Depth is 0 at the starting instance.
        """
        visitor(instance, depth)
        for child in instance.children:
            self.walk_capsule_tree(child, visitor, depth + 1)
        for slot_children in instance.slots.values():
            for child in slot_children:
                self.walk_capsule_tree(child, visitor, depth + 1)

    def collect_used_capsules(self, composition: AppComposition) -> list[str]:
        """
        Distinct capsule ids referenced by the composition, first-seen order.

        Covers the flat capsule list and every instance of the root tree.
        """
        used: dict[str, None] = {}

        def visit(instance: CapsuleInstance, depth: int) -> None:
            used.setdefault(instance.capsule_id, None)

        for tree in self._trees(composition):
            for top in tree:
                self.walk_capsule_tree(top, visit)
        return list(used)

    def collect_dependencies(self, composition: AppComposition) -> list[str]:
        """Distinct template dependencies of the used, supported capsules."""
        deps: dict[str, None] = {}
        for capsule_id in self.collect_used_capsules(composition):
            template = self.get_template(capsule_id)
            if template is None:
                continue
            for dep in template.dependencies:
                deps.setdefault(dep, None)
        return list(deps)

    def used_definitions(self, composition: AppComposition) -> list[CapsuleDefinition]:
        """Supported definitions actually used by the composition."""
        definitions = []
        for capsule_id in self.collect_used_capsules(composition):
            definition = self.get_capsule(capsule_id)
            if definition is not None:
                definitions.append(definition)
        return definitions

    # =========================================================================
    # Naming
    # =========================================================================

    @staticmethod
    def component_name(definition: CapsuleDefinition) -> str:
        """Component/type name for a capsule: "Data Table" -> "DataTable"."""
        name = to_pascal_case(definition.name) or to_pascal_case(definition.id)
        return to_identifier(name) or "Capsule"

    @staticmethod
    def app_slug(composition: AppComposition) -> str:
        """Package-style app name: "My App" -> "my-app"."""
        return to_kebab_case(composition.name) or "app"

    @staticmethod
    def app_type_name(composition: AppComposition) -> str:
        """Type-style app name: "My App" -> "MyApp"."""
        return to_identifier(to_pascal_case(composition.name)) or "App"

    @staticmethod
    def valid_props(instance: CapsuleInstance) -> list[tuple[str, Any]]:
        """Props with usable names and non-null values, in given order."""
        return [
            (key, value)
            for key, value in instance.props.items()
            if value is not None and _PROP_NAME.fullmatch(key)
        ]


def create_failure_result(platform: str, code: str, message: str) -> CompilationResult:
    """
    Failure result with no files, zero stats and a single error.

    Used where no compiler output exists at all (missing compiler, timeout).
    """
    return CompilationResult(
        success=False,
        platform=platform,
        files=[],
        errors=[Diagnostic(code=code, message=message)],
        stats=CompilationStats(),
    )


__all__ = [
    "PlatformCompiler",
    "CompileContext",
    "Diagnostics",
    "create_failure_result",
    # Codes
    "COMPILER_NOT_FOUND",
    "COMPILATION_FAILED",
    "COMPILATION_TIMEOUT",
    "UNSUPPORTED_CAPSULE",
    "DUPLICATE_INSTANCE_ID",
    "MISSING_REQUIRED_PROP",
    "INVALID_PLATFORM_CONFIG",
    "INVALID_PROP_NAME",
    "EMPTY_COMPOSITION",
]
