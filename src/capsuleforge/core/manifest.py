import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import ConfigError, ErrorContext

logger = logging.getLogger(__name__)

MANIFEST_NAME = "capsuleforge.toml"

KNOWN_PLATFORMS = ("web", "ios", "android", "desktop")


# =============================================================================
# Sections
# =============================================================================


@dataclass
class CompilerConfig:
    """Compiler settings: which platforms to build and where output goes."""

    targets: list[str] = field(default_factory=lambda: ["web"])
    timeout_seconds: float | None = None  # per-platform limit, None for no limit
    output_dir: str = "build"


@dataclass
class CapsulesConfig:
    """Extra capsule definition files registered after the built-ins."""

    paths: list[str] = field(default_factory=list)
    include_builtin: bool = True


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class ProjectManifest:
    """Parsed capsuleforge.toml."""

    name: str = "app"
    version: str = "0.1.0"
    composition: str = "composition.json"  # path relative to the manifest
    theme: str | None = None  # theme preset name overriding the composition's theme
    compiler: CompilerConfig = field(default_factory=CompilerConfig)
    capsules: CapsulesConfig = field(default_factory=CapsulesConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    root: Path = field(default_factory=Path.cwd)

    def resolve(self, relative: str) -> Path:
        """Resolve a manifest-relative path."""
        return (self.root / relative).resolve()


# =============================================================================
# Loading
# =============================================================================


def _expect(value: Any, kind: type | tuple[type, ...], path: Path, key: str) -> Any:
    if not isinstance(value, kind):
        expected = kind.__name__ if isinstance(kind, type) else " or ".join(k.__name__ for k in kind)
        raise ConfigError(
            f"Expected {expected}, got {type(value).__name__}",
            ErrorContext(file=path, key=key),
        )
    return value


def _string_list(value: Any, path: Path, key: str) -> list[str]:
    _expect(value, list, path, key)
    for i, item in enumerate(value):
        _expect(item, str, path, f"{key}.{i}")
    return list(value)


def load_manifest(path: Path) -> ProjectManifest:
    """
    Load capsuleforge.toml.

    A missing file yields the defaults.

    Args:
        path: Path to the manifest file

    Returns:
        ProjectManifest

    Raises:
        ConfigError: If the file is not valid TOML or a value has the wrong type
    """
    if not path.exists():
        logger.debug("No manifest at %s, using defaults", path)
        return ProjectManifest(root=path.parent.resolve())

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML: {e}", ErrorContext(file=path)) from e

    project = _expect(data.get("project", {}), dict, path, "project")
    compiler_data = _expect(data.get("compiler", {}), dict, path, "compiler")
    capsules_data = _expect(data.get("capsules", {}), dict, path, "capsules")
    logging_data = _expect(data.get("logging", {}), dict, path, "logging")

    targets = _string_list(compiler_data.get("targets", ["web"]), path, "compiler.targets")
    for i, target in enumerate(targets):
        if target not in KNOWN_PLATFORMS:
            logger.warning("Unknown target '%s' in %s (compiler.targets.%d)", target, path, i)

    timeout = compiler_data.get("timeout_seconds")
    if timeout is not None:
        _expect(timeout, (int, float), path, "compiler.timeout_seconds")
        if isinstance(timeout, bool) or timeout <= 0:
            raise ConfigError(
                "timeout_seconds must be a positive number",
                ErrorContext(file=path, key="compiler.timeout_seconds"),
            )

    compiler = CompilerConfig(
        targets=targets,
        timeout_seconds=float(timeout) if timeout is not None else None,
        output_dir=_expect(compiler_data.get("output_dir", "build"), str, path, "compiler.output_dir"),
    )

    capsules = CapsulesConfig(
        paths=_string_list(capsules_data.get("paths", []), path, "capsules.paths"),
        include_builtin=_expect(
            capsules_data.get("include_builtin", True), bool, path, "capsules.include_builtin"
        ),
    )

    level = _expect(logging_data.get("level", "WARNING"), str, path, "logging.level").upper()

    theme = project.get("theme")
    if theme is not None:
        _expect(theme, str, path, "project.theme")

    return ProjectManifest(
        name=_expect(project.get("name", "app"), str, path, "project.name"),
        version=_expect(project.get("version", "0.1.0"), str, path, "project.version"),
        composition=_expect(
            project.get("composition", "composition.json"), str, path, "project.composition"
        ),
        theme=theme,
        compiler=compiler,
        capsules=capsules,
        logging=LoggingConfig(level=level),
        root=path.parent.resolve(),
    )
