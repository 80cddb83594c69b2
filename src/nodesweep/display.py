"""Rich terminal display for nodesweep."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

from nodesweep.models import DeletionSummary, NodeModulesDir, ScanReport, StatsSnapshot, format_size

console = Console()

CONFIRM_WORD = "yes"


def show_scan_summary(report: ScanReport, total_size: int) -> None:
    """Display scan results."""
    size_str = format_size(total_size)
    lines = [
        f"[bold]Folders found:[/bold] {report.found}",
        f"[bold]Total size:[/bold] {size_str}",
        f"[bold]Estimated savings:[/bold] [green]{size_str}[/green]",
    ]
    if report.excluded:
        lines.append(f"[dim]Excluded: {len(report.excluded)}[/dim]")
    if report.skipped:
        lines.append(f"[yellow]Unreadable entries skipped: {len(report.skipped)}[/yellow]")

    console.print(
        Panel(
            "\n".join(lines),
            title=f"Scan complete in {report.elapsed_seconds:.2f}s",
            border_style="blue",
        )
    )


def show_directory_table(directories: list[NodeModulesDir]) -> None:
    """Display discovered directories, largest first."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Size", justify="right", style="green")
    table.add_column("Path")

    for item in sorted(directories, key=lambda d: d.size_bytes, reverse=True):
        table.add_row(item.size_human, escape(str(item.path)))

    console.print(table)


def show_sizing_progress() -> Progress:
    """Create progress bar for size calculation."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console,
    )


def show_deletion_progress() -> Progress:
    """Create progress bar for deletion; tasks need a ``freed`` field."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        TextColumn("Freed: [green]{task.fields[freed]}[/green]"),
        console=console,
    )


def deletion_status(snapshot: StatsSnapshot) -> str:
    """Progress description for a deletion snapshot."""
    if snapshot.eta_seconds is None:
        return "Deleting..."
    return f"Deleting... ETA: {snapshot.eta_seconds:.2f}s"


def show_deletion_summary(summary: DeletionSummary) -> None:
    """Display deletion results."""
    console.print()
    console.print(f"[bold green]Deletion complete in {summary.elapsed_seconds:.2f}s[/bold green]")

    table = Table(show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Folders deleted", str(summary.processed))
    table.add_row("Space freed", f"[bold green]{summary.size_human}[/bold green]")

    console.print(table)


def confirm_deletion(message: str = "Proceed with deletion? (yes/no): ") -> bool:
    """
    Ask the operator to type "yes".

    Only the trimmed, case-insensitive answer "yes" confirms; anything
    else, including end of input, declines.
    """
    try:
        answer = console.input(message)
    except EOFError:
        return False
    return answer.strip().lower() == CONFIRM_WORD
