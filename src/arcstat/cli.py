"""CLI interface for arcstat."""

import logging
from typing import Optional

import typer

from arcstat import __version__
from arcstat.analyzer import analyze_archive
from arcstat.categories import get_all_categories, load_registry, resolve_registry
from arcstat.config import ArchiveConfig, expand_path
from arcstat.display import (
    console,
    show_categories,
    show_error,
    show_report,
    show_scanning_progress,
)
from arcstat.errors import ConfigError

app = typer.Typer(
    name="arcstat",
    help="Count games and sizes per system in an emulation archive",
    add_completion=False,
)


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"arcstat version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-V",
        count=True,
        help="Increase verbosity (-V info, -VV debug).",
    ),
) -> None:
    """arcstat - game counts and sizes per system."""
    _setup_logging(verbose)
    # If no command specified, scan everything under $VG_ARCHIVE
    if ctx.invoked_subcommand is None:
        ctx.invoke(
            scan,
            archive_root=None,
            systems=None,
            registry=None,
            sequential=False,
            median=False,
            as_json=False,
        )


@app.command()
def scan(
    archive_root: Optional[str] = typer.Option(
        None,
        "--archive-root",
        "--archive-path",
        "-r",
        help="The root of your game archive (default: $VG_ARCHIVE)",
    ),
    systems: Optional[str] = typer.Option(
        None,
        "--systems",
        "-s",
        help="Comma-separated system labels to analyze exclusively",
    ),
    registry: Optional[str] = typer.Option(
        None,
        "--registry",
        help="JSON file describing the archive's systems",
    ),
    sequential: bool = typer.Option(
        False, "--sequential", help="Scan one system at a time"
    ),
    median: bool = typer.Option(False, "--median", help="Also show the median file size"),
    as_json: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Scan the archive and show games and size per system."""
    try:
        config = ArchiveConfig.from_sources(archive_root, systems, registry)

        with show_scanning_progress() as progress:
            task = progress.add_task("Scanning systems...", total=None)

            def update_progress(label: str, current: int, total: int):
                progress.update(task, completed=current, total=total, description=f"Scanned {label}")

            report = analyze_archive(
                config,
                progress_callback=update_progress,
                sequential=sequential,
                track_sizes=median,
            )
    except ConfigError as e:
        show_error(str(e))
        raise typer.Exit(1)

    if as_json:
        typer.echo(report.model_dump_json(indent=2))
    else:
        show_report(report, show_median=median)


@app.command(name="list")
def list_categories(
    archive_root: Optional[str] = typer.Option(
        None,
        "--archive-root",
        "--archive-path",
        "-r",
        help="Archive root to look for an arcstat.json registry in",
    ),
    registry: Optional[str] = typer.Option(
        None,
        "--registry",
        help="JSON file describing the archive's systems",
    ),
) -> None:
    """List known systems."""
    try:
        if registry:
            categories = load_registry(expand_path(registry))
        elif archive_root:
            categories = resolve_registry(expand_path(archive_root))
        else:
            categories = get_all_categories()
    except ConfigError as e:
        show_error(str(e))
        raise typer.Exit(1)

    show_categories(categories)


if __name__ == "__main__":
    app()
