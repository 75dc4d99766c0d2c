"""
CapsuleForge CLI.

Commands:
- compile: compile a composition for one or more platforms and write the files
- platforms: list the available platform compilers
- capsules: list registered capsules and the platforms each supports
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .core.errors import CapsuleForgeError
from .core.ir import AppComposition, CompilationResult
from .core.loader import load_capsules, load_composition
from .core.manifest import MANIFEST_NAME, ProjectManifest, load_manifest
from .core.registry import CapsuleTemplateRegistry, default_registry
from .orchestrator import create_orchestrator, summarize
from .themes import get_theme_preset, list_theme_presets

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="CapsuleForge - compile capsule compositions to web, iOS, Android and desktop",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"capsuleforge {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version",
    ),
) -> None:
    """CapsuleForge CLI main callback for global options."""
    pass


# =============================================================================
# Helpers
# =============================================================================


def configure_logging(level: str, verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_registry(manifest: ProjectManifest, extra: list[Path] | None = None) -> CapsuleTemplateRegistry:
    """Built-in capsules (unless disabled) plus manifest and command-line capsule files."""
    registry = default_registry() if manifest.capsules.include_builtin else CapsuleTemplateRegistry()
    paths = [manifest.resolve(p) for p in manifest.capsules.paths] + list(extra or [])
    for path in paths:
        registry.register(load_capsules(path))
    return registry


def write_result(output_dir: Path, result: CompilationResult) -> int:
    """
    Write one platform's files under ``<output_dir>/<platform>/``.

    Returns:
        Number of files written

    Raises:
        CapsuleForgeError: If a generated path escapes the platform directory
    """
    platform_dir = (output_dir / result.platform).resolve()
    for generated in result.files:
        target = (platform_dir / generated.path).resolve()
        if not target.is_relative_to(platform_dir):
            raise CapsuleForgeError(
                f"Refusing to write {generated.path!r}: outside {platform_dir}"
            )
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(generated.content, encoding="utf-8")
    return len(result.files)


def _results_table(results: dict[str, CompilationResult]) -> Table:
    table = Table(title="Compilation Results")
    table.add_column("Platform", style="cyan")
    table.add_column("Status")
    table.add_column("Files", justify="right")
    table.add_column("Size", justify="right")
    table.add_column("Errors", justify="right")
    table.add_column("Warnings", justify="right")
    table.add_column("Time (ms)", justify="right")

    for platform, result in results.items():
        status = "[green]ok[/green]" if result.success else "[red]failed[/red]"
        table.add_row(
            platform,
            status,
            str(result.stats.file_count),
            str(result.stats.total_size),
            str(len(result.errors or [])),
            str(len(result.warnings or [])),
            f"{result.stats.compilation_time:.1f}",
        )
    return table


def _print_diagnostics(results: dict[str, CompilationResult]) -> None:
    for platform, result in results.items():
        for error in result.errors or []:
            where = f" [{error.capsule_id}]" if error.capsule_id else ""
            console.print(f"  [red]✗[/red] {platform}{where} {error.code}: {error.message}")
        for warning in result.warnings or []:
            where = f" [{warning.capsule_id}]" if warning.capsule_id else ""
            console.print(f"  [yellow]![/yellow] {platform}{where} {warning.code}: {warning.message}")
            if warning.suggestion:
                console.print(f"      [dim]{warning.suggestion}[/dim]")


# =============================================================================
# Commands
# =============================================================================


@app.command(name="compile")
def compile_command(
    composition_file: Annotated[
        Path | None,
        typer.Argument(help="Composition file (JSON or YAML); defaults to the manifest's"),
    ] = None,
    project_dir: Annotated[
        Path,
        typer.Option("--project", "-p", help="Directory containing capsuleforge.toml", file_okay=False),
    ] = Path("."),
    platforms: Annotated[
        list[str] | None,
        typer.Option("--platform", "-t", help="Target platform (repeatable)"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output directory"),
    ] = None,
    theme: Annotated[
        str | None,
        typer.Option("--theme", help="Theme preset overriding the composition's theme"),
    ] = None,
    timeout: Annotated[
        float | None,
        typer.Option("--timeout", help="Per-platform time limit in seconds"),
    ] = None,
    capsule_files: Annotated[
        list[Path] | None,
        typer.Option("--capsules", "-c", help="Extra capsule definition file (repeatable)"),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-n", help="Compile without writing files"),
    ] = False,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print results as JSON"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-V", help="Enable debug logging"),
    ] = False,
) -> None:
    """
    Compile a composition for one or more platforms.

    Example:
        capsuleforge compile app.json -t web -t ios -o build
    """
    try:
        manifest = load_manifest(project_dir / MANIFEST_NAME)
        configure_logging(manifest.logging.level, verbose)

        composition_path = composition_file or manifest.resolve(manifest.composition)
        composition: AppComposition = load_composition(composition_path)

        theme_name = theme or manifest.theme
        if theme_name:
            preset = get_theme_preset(theme_name)
            if preset is None:
                console.print(
                    f"[red]Unknown theme '{theme_name}'.[/red] "
                    f"Available: {', '.join(list_theme_presets())}"
                )
                raise typer.Exit(1)
            composition = composition.model_copy(update={"theme": preset})

        targets = platforms or composition.targets or manifest.compiler.targets
        registry = build_registry(manifest, capsule_files)
        orchestrator = create_orchestrator(
            registry, timeout=timeout if timeout is not None else manifest.compiler.timeout_seconds
        )
        results = asyncio.run(orchestrator.compile_all(composition, targets))

        output_dir = output or manifest.resolve(manifest.compiler.output_dir)
        if not dry_run:
            for result in results.values():
                if result.files:
                    write_result(output_dir, result)
    except CapsuleForgeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    summary = summarize(results)
    if as_json:
        payload = {
            "summary": summary.to_dict(),
            "results": {p: r.to_dict() for p, r in results.items()},
        }
        typer.echo(json.dumps(payload, indent=2))
    else:
        console.print(f"\n[bold]{composition.name}[/bold] v{composition.version}\n")
        console.print(_results_table(results))
        _print_diagnostics(results)
        if dry_run:
            console.print("\n[dim]Dry run: no files written[/dim]")
        else:
            console.print(f"\nOutput: [cyan]{output_dir}[/cyan]")

    if not summary.success:
        raise typer.Exit(1)


@app.command(name="platforms")
def platforms_command() -> None:
    """List available platform compilers."""
    orchestrator = create_orchestrator(CapsuleTemplateRegistry())

    table = Table(title="Platforms")
    table.add_column("Platform", style="cyan")
    table.add_column("Compiler")
    for platform in orchestrator.get_available_platforms():
        compiler = orchestrator.get_compiler(platform)
        table.add_row(platform, compiler.name if compiler else "")
    console.print(table)


@app.command(name="capsules")
def capsules_command(
    project_dir: Annotated[
        Path,
        typer.Option("--project", "-p", help="Directory containing capsuleforge.toml", file_okay=False),
    ] = Path("."),
    capsule_files: Annotated[
        list[Path] | None,
        typer.Option("--capsules", "-c", help="Extra capsule definition file (repeatable)"),
    ] = None,
) -> None:
    """List registered capsules and their platform support."""
    try:
        manifest = load_manifest(project_dir / MANIFEST_NAME)
        registry = build_registry(manifest, capsule_files)
    except CapsuleForgeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    platforms = create_orchestrator(registry).get_available_platforms()

    table = Table(title=f"Capsules ({len(registry)})")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Category")
    for platform in platforms:
        table.add_column(platform, justify="center")

    for definition in registry:
        marks = ["✓" if registry.supports(definition.id, p) else "-" for p in platforms]
        table.add_row(definition.id, definition.name, definition.category, *marks)
    console.print(table)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
