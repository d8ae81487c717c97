"""vueprune CLI - Dead file, export and route detection for Vue/JS projects."""

import logging
import os
import time
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn
from rich.table import Table

from vueprune import __version__
from vueprune.analysis.graph import build_graph
from vueprune.analysis.reachability import find_dead_code
from vueprune.analysis.resolver import ImportResolver
from vueprune.analysis.routes import analyze_routes
from vueprune.config import (
    build_default_config,
    get_analysis_excludes,
    get_analysis_includes,
    get_custom_entries,
    load_config,
    routes_enabled,
    save_config,
)
from vueprune.detection.entrypoints import resolve_custom_entries
from vueprune.detection.project import load_project_config
from vueprune.errors import ConfigError, VuePruneError
from vueprune.models.graph import DependencyGraph, SourceFile
from vueprune.models.project import ProjectConfig
from vueprune.models.results import AnalysisMetadata, AnalysisResults, AnalysisSummary
from vueprune.output.json_writer import load_results, write_results
from vueprune.output.tree import build_results_tree, build_summary_tree, display_tree
from vueprune.paths import ensure_vueprune_dir, get_config_path, get_results_path
from vueprune.scanner import find_source_files, read_source_file

app = typer.Typer(
    name="vueprune",
    help="Detect unused files, exports and routes in Vue/JavaScript projects",
    no_args_is_help=False,
    rich_markup_mode="rich",
)
console = Console()


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=debug)],
        force=True,
    )


def version_callback(value: bool) -> None:
    if value:
        console.print(f"vueprune version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Detect unused files, exports and routes in Vue/JavaScript projects."""
    if ctx.invoked_subcommand is None:
        # Default to analyze command
        ctx.invoke(
            analyze,
            path=Path("."),
            config=None,
            output=None,
            entry=None,
            routes=True,
            verbose=False,
            debug=False,
            include_ignored=False,
        )


@app.command()
def init(
    path: Path = typer.Argument(
        Path("."),
        help="Path to the project root",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite an existing config file",
    ),
) -> None:
    """Write a default .vueprune/config.json."""
    path = path.resolve()
    if not path.is_dir():
        console.print(f"[red]Project directory not found:[/] {path}")
        raise typer.Exit(1)

    config_path = get_config_path(path)
    if config_path.exists() and not force:
        console.print(f"[yellow]Config file already exists:[/] {config_path}")
        console.print("Use [bold]--force[/] to overwrite it.")
        raise typer.Exit(1)

    ensure_vueprune_dir(path)
    save_config(build_default_config(), config_path)
    console.print(f"[green]Config saved to:[/] {config_path}")


@app.command()
def analyze(
    path: Path = typer.Argument(
        Path("."),
        help="Path to the Vue/JS project to analyze",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file (default: .vueprune/config.json)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Path for results JSON output (default: .vueprune/results.json)",
    ),
    entry: Optional[list[str]] = typer.Option(
        None,
        "--entry",
        "-e",
        help="Extra entry file, relative to the project root (repeatable or comma-separated)",
    ),
    routes: bool = typer.Option(
        True,
        "--routes/--no-routes",
        help="Enable/disable unused route detection",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show full tree in CLI (default: summary only)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Show debug logging and graph details",
    ),
    include_ignored: bool = typer.Option(
        False,
        "--include-ignored",
        help="Include files normally excluded by defaults and .gitignore",
    ),
) -> None:
    """Run dead file, dead export and unused route analysis."""
    _setup_logging(debug)
    path = path.resolve()

    try:
        if not path.is_dir():
            raise ConfigError(f"Project directory not found: {path}")

        config_data = _load_config_for(path, config)

        entries = list(get_custom_entries(config_data))
        for value in entry or []:
            entries.extend(part.strip() for part in value.split(",") if part.strip())

        if output is None:
            ensure_vueprune_dir(path)
            output = get_results_path(path)

        console.print(Panel.fit("[bold blue]vueprune - Dead Code Detection[/]"))
        results, graph, project_config = _run_analysis(
            path,
            config_data,
            entries,
            routes and routes_enabled(config_data),
            include_ignored,
        )
        write_results(results, output)
    except VuePruneError as e:
        console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(1)

    console.print(f"\n[green]Results saved to:[/] {output}")

    data = results.to_dict()
    if results.is_clean:
        console.print("[green]No dead code found.[/]")
    elif verbose:
        display_tree(build_results_tree(data, path.name))
    else:
        _display_summary(results)

    if debug:
        _display_debug(results, graph, project_config)


@app.command()
def show(
    results_path: Optional[Path] = typer.Argument(
        None,
        help="Path to results file (default: .vueprune/results.json)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show full tree view",
    ),
) -> None:
    """Display results from a previous analysis run."""
    # Default to .vueprune/results.json in current directory
    if results_path is None:
        results_path = get_results_path(Path.cwd())

    if not results_path.exists():
        console.print(f"[red]Results file not found:[/] {results_path}")
        console.print("Run [bold]vueprune analyze[/] first.")
        raise typer.Exit(1)

    try:
        data = load_results(results_path)
    except VuePruneError as e:
        console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(1)

    if verbose:
        project_name = data.get("metadata", {}).get("project", ".")
        display_tree(build_results_tree(data, project_name))
    else:
        display_tree(build_summary_tree(data))


def _load_config_for(path: Path, config_path: Optional[Path]) -> dict:
    """Load the project config; a missing default config means built-in defaults."""
    if config_path is not None:
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")
        return load_config(config_path)

    default_path = get_config_path(path)
    if default_path.exists():
        return load_config(default_path)
    return {}


def _run_analysis(
    path: Path,
    config: dict,
    entries: list[str],
    analyze_route_usage: bool = True,
    include_ignored: bool = False,
) -> tuple[AnalysisResults, DependencyGraph, ProjectConfig]:
    """Run the full analysis pipeline."""
    start_time = time.time()

    project_config = load_project_config(path, config)
    custom_entries = resolve_custom_entries(path, entries)

    console.print(f"[dim]Project type: {project_config.project_type}[/]")
    if custom_entries:
        names = ", ".join(os.path.relpath(p, path) for p in custom_entries)
        console.print(f"[dim]Extra entry files: {names}[/]")

    files = find_source_files(
        path,
        get_analysis_includes(config),
        get_analysis_excludes(config),
        include_ignored,
    )
    console.print(f"[dim]Found {len(files)} source files to analyze[/]\n")

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
    ) as progress:
        read_task = progress.add_task("Reading source files...", total=len(files))
        corpus: list[SourceFile] = []
        for file_path in files:
            corpus.append(read_source_file(file_path, path))
            progress.update(read_task, advance=1)

        graph_task = progress.add_task("Building dependency graph...", total=None)
        graph = build_graph(corpus, custom_entries, project_config.alias_prefixes)
        progress.update(graph_task, completed=1, total=1)

        reach_task = progress.add_task("Tracing reachability...", total=None)
        report = find_dead_code(graph, ImportResolver(project_config))
        progress.update(reach_task, completed=1, total=1)

        route_analysis = None
        if analyze_route_usage:
            route_task = progress.add_task("Analyzing route usage...", total=None)
            route_analysis = analyze_routes(corpus, custom_entries)
            progress.update(route_task, completed=1, total=1)

    duration_ms = int((time.time() - start_time) * 1000)

    summary = AnalysisSummary(
        dead_files=len(report.dead_files),
        dead_exports=len(report.dead_exports),
        used_files=report.used_file_count,
        total_files=report.total_file_count,
        total_routes=len(route_analysis.route_definitions) if route_analysis else 0,
        unused_routes=len(route_analysis.unused_routes) if route_analysis else 0,
    )

    results = AnalysisResults(
        version="1.0",
        metadata=AnalysisMetadata(
            project=path.name,
            analyzed_at=datetime.now(),
            vueprune_version=__version__,
            files_analyzed=len(corpus),
            entry_files=len(graph.entries()),
            analysis_duration_ms=duration_ms,
            project_type=project_config.project_type,
        ),
        summary=summary,
        report=report,
        routes=route_analysis,
        dependency_graph=graph.to_dict(),
    )
    return results, graph, project_config


def _display_summary(results: AnalysisResults) -> None:
    """Display analysis summary."""
    if not results.summary:
        return

    summary = results.summary

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Key", style="cyan")
    table.add_column("Value")

    table.add_row("Files analyzed", str(summary.total_files))
    table.add_row("Reachable files", str(summary.used_files))
    table.add_row("", "")
    table.add_row("[red]Unused files[/]", str(summary.dead_files))
    table.add_row("[yellow]Unused exports[/]", str(summary.dead_exports))
    if results.routes is not None:
        table.add_row(
            "[magenta]Unused routes[/]",
            f"{summary.unused_routes} of {summary.total_routes}",
        )

    console.print(Panel(table, title="[bold]Dead Code Summary[/]", border_style="blue"))
    console.print("[dim]Run with --verbose to see every item.[/]")


def _count_import_attempts(graph: DependencyGraph, relative_path: str) -> int:
    """Count import specifiers that look like they were meant for a file."""
    stem = Path(relative_path).stem
    count = 0
    for node in graph:
        for edge in node.imports:
            if relative_path in edge.raw_specifier or stem in edge.raw_specifier:
                count += 1
    return count


def _display_debug(
    results: AnalysisResults,
    graph: DependencyGraph,
    project_config: ProjectConfig,
) -> None:
    """Display graph statistics and resolution settings."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Key", style="cyan")
    table.add_column("Value")

    table.add_row("Graph nodes", str(len(graph)))
    table.add_row("Entry files", str(len(graph.entries())))
    table.add_row("Import edges", str(sum(len(node.imports) for node in graph)))
    table.add_row("Project type", project_config.project_type)
    table.add_row("", "")

    if project_config.alias_map:
        table.add_row("Aliases", "")
        for prefix, directory in project_config.alias_map.items():
            table.add_row(f"  {prefix}", os.path.relpath(directory, project_config.root))
    else:
        table.add_row("Aliases", "none")
    table.add_row("Extensions", ", ".join(project_config.extensions))

    if results.report.dead_files:
        table.add_row("", "")
        table.add_row("Unused file details", "")
        for index, dead in enumerate(results.report.dead_files, 1):
            attempts = _count_import_attempts(graph, dead.relative_path)
            note = f"[yellow]{attempts} possible import attempt(s)[/]" if attempts else ""
            table.add_row(f"  {index}. {dead.relative_path}", note)

    console.print(Panel(table, title="[bold]Debug[/]", border_style="dim"))


if __name__ == "__main__":
    app()
