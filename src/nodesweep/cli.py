"""CLI interface for nodesweep."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from nodesweep import __version__
from nodesweep.cleaner import DeletionError, delete_directories
from nodesweep.config import load_settings
from nodesweep.display import (
    confirm_deletion,
    console,
    deletion_status,
    show_deletion_progress,
    show_deletion_summary,
    show_directory_table,
    show_scan_summary,
    show_sizing_progress,
)
from nodesweep.log import setup_logging
from nodesweep.models import StatsSnapshot, format_size
from nodesweep.recursive_scanner import scan_node_modules
from nodesweep.scanner import measure_directories
from nodesweep.stats import DeletionStats

app = typer.Typer(
    name="nodesweep",
    help="Efficiently delete node_modules directories",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"nodesweep version {__version__}")
        raise typer.Exit()


def parse_exclude(values: list[str] | None) -> list[str]:
    """Flatten repeated and comma-separated --exclude values."""
    paths = []
    for value in values or []:
        paths.extend(part.strip() for part in value.split(",") if part.strip())
    return paths


@app.command()
def main(
    directory: Path = typer.Argument(
        Path("."),
        exists=True,
        file_okay=False,
        dir_okay=True,
        help="Directory to start scanning from (default: current)",
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Simulate deletion without actually deleting"),
    verbose: bool = typer.Option(False, "--verbose", help="Log each processed path"),
    depth: Optional[int] = typer.Option(None, "--depth", min=0, help="Maximum recursion depth"),
    exclude: Optional[list[str]] = typer.Option(
        None,
        "--exclude",
        help="Paths to exclude (comma-separated); nothing below an excluded path is searched",
    ),
    workers: Optional[int] = typer.Option(None, "--workers", min=1, help="Number of parallel workers"),
    version: bool = typer.Option(
        None,
        "--version",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Find node_modules directories, report their size and delete them."""
    setup_logging(verbose, console=console)

    settings = load_settings()
    max_depth = depth if depth is not None else settings.max_depth
    excluded = parse_exclude(exclude) + settings.exclude
    max_workers = workers or settings.workers

    # Scan phase
    with console.status(f"[bold blue]Scanning {escape(str(directory))} for node_modules...[/bold blue]"):
        report = scan_node_modules(directory, max_depth=max_depth, exclude=excluded)

    if report.is_empty:
        console.print("[green]No node_modules directories found.[/green]")
        raise typer.Exit(0)

    with show_sizing_progress() as progress:
        task = progress.add_task("Calculating sizes...", total=report.found)
        measured = measure_directories(
            report.directories,
            max_workers=max_workers,
            progress_callback=lambda path, size: progress.advance(task),
        )

    total_size = sum(d.size_bytes for d in measured)
    console.print()
    show_scan_summary(report, total_size)
    if verbose:
        show_directory_table(measured)

    if dry_run:
        console.print("[yellow]Dry run: No deletions performed.[/yellow]")
        raise typer.Exit(0)

    if not confirm_deletion():
        console.print("[yellow]Deletion cancelled.[/yellow]")
        raise typer.Exit(0)

    # Deletion phase
    stats = DeletionStats(total=report.found)

    try:
        with show_deletion_progress() as progress:
            task = progress.add_task("Deleting...", total=report.found, freed=format_size(0))

            def update_progress(path: Path, snapshot: StatsSnapshot) -> None:
                progress.update(
                    task,
                    advance=1,
                    description=deletion_status(snapshot),
                    freed=format_size(snapshot.bytes_freed),
                )

            summary = delete_directories(
                report.directories,
                stats,
                max_workers=max_workers,
                progress_callback=update_progress,
            )
    except DeletionError as e:
        console.print(f"[red]Error: failed to delete {escape(str(e.path))}: {escape(str(e.cause))}[/red]")
        raise typer.Exit(1)

    show_deletion_summary(summary)


if __name__ == "__main__":
    app()
