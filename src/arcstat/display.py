"""Rich terminal display for arcstat."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table
from rich.text import Text

from arcstat.models import Category, Report

console = Console()
err_console = Console(stderr=True)


def format_size(size_bytes: Optional[int]) -> str:
    """Format bytes as megabytes or gigabytes with two decimals (decimal units)."""
    if size_bytes is None:
        return "-"
    if size_bytes >= 1000**3:
        return f"{size_bytes / (1000**3):.2f} GB"
    return f"{size_bytes / (1000**2):.2f} MB"


def styled_label(category: Category) -> Text:
    """Category label in its display color."""
    return Text(category.label, style=category.color or "")


def show_report(report: Report, show_median: bool = False) -> None:
    """Display per-system totals followed by the grand total."""
    table = Table(show_header=True, header_style="bold underline", box=None, pad_edge=False)
    table.add_column("System")
    table.add_column("Games", justify="right")
    table.add_column("Size", justify="right")
    if show_median:
        table.add_column("Median", justify="right")

    for row in report.rows:
        cells = [
            styled_label(row.category),
            str(row.result.item_count),
            format_size(row.result.total_bytes),
        ]
        if show_median:
            cells.append(format_size(row.result.median_bytes))
        table.add_row(*cells, style="dim" if row.result.error else None)

    table.add_section()
    total_cells = [
        "Total",
        str(report.total.item_count),
        format_size(report.total.total_bytes),
    ]
    if show_median:
        total_cells.append(format_size(report.total.median_bytes))
    table.add_row(*total_cells, style="bold")

    console.print(table)

    for row in report.failed_rows:
        err_console.print(
            f"[yellow]Warning:[/yellow] {row.category.label} not scanned: {escape(row.result.error)}"
        )


def show_categories(categories: list[Category]) -> None:
    """List known systems and their directories."""
    console.print("[bold]Known Systems[/bold]\n")

    table = Table(show_header=True, header_style="bold")
    table.add_column("System")
    table.add_column("Directory")
    table.add_column("Games are")

    for category in categories:
        table.add_row(
            styled_label(category),
            category.relative_path,
            "directories" if category.items_are_directories else "files",
        )

    console.print(table)


def show_error(message: str) -> None:
    """Print an error to stderr."""
    err_console.print(f"[red]Error:[/red] {escape(message)}")


def show_scanning_progress() -> Progress:
    """Create progress bar for scanning."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        TimeElapsedColumn(),
        console=err_console,
        transient=True,
        disable=not err_console.is_terminal,
    )
