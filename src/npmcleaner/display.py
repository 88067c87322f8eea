"""Rich terminal display for npmcleaner."""

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from npmcleaner.config import on_windows
from npmcleaner.models import Folder, ResultSet, ScanConfig, TraceAction, TraceEntry

console = Console()
err_console = Console(stderr=True)


def configure_logging(debug: bool = False) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def trace_style(action: TraceAction) -> str:
    """Get color for a trace action."""
    styles = {
        TraceAction.PRUNE: "dim",
        TraceAction.SKIP: "yellow",
        TraceAction.ACCEPT: "green",
        TraceAction.STOP: "cyan",
    }
    return styles.get(action, "white")


def show_config(config: ScanConfig) -> None:
    """Display the settings a scan will run with."""
    table = Table(title="Config", show_header=False)
    table.add_column("Setting", style="bold", no_wrap=True)
    table.add_column("Value")

    table.add_row("On Windows", str(on_windows()))
    table.add_row("Start Path", Text(str(config.root_path)))
    table.add_row("Delete", str(config.delete_enabled))
    table.add_row("Older than (days)", str(config.min_age_days))
    table.add_row("MB Threshold", str(config.min_size_mb))
    table.add_row("Folders limit", str(config.max_results))
    table.add_row("Exclude platform paths", str(config.exclude_platform_paths))
    if config.debug:
        table.add_row("Debug", str(config.debug))

    console.print(table)
    console.print()


def show_results(results: ResultSet) -> None:
    """Display found folders, largest first, and their total size."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Path", overflow="fold")
    table.add_column("Modified Days Ago", justify="right", no_wrap=True)
    table.add_column("Size MB", justify="right", no_wrap=True)

    for folder in results.folders:
        table.add_row(Text(folder.path), str(folder.mod_days_ago), f"{folder.size_mb}MB")

    console.print(table)
    console.print(f"[bold]Total Size: {results.total_size_mb}MB[/bold]")
    if results.stopped_early:
        console.print(
            f"[dim]Stopped after finding {results.limit} folders; "
            "raise --limit to search further[/dim]"
        )


def show_no_results() -> None:
    console.print("[yellow]No results found[/yellow]")


def show_delete_hint() -> None:
    console.print("[dim]Run with [bold]--delete[/bold] to delete these folders[/dim]")


def show_deleting(folder: Folder) -> None:
    console.print(f"Deleting {escape(folder.path)}...", end="", soft_wrap=True)


def show_deleted(folder: Folder) -> None:
    console.print("[green]OK[/green]")


def show_trace(trace: list[TraceEntry]) -> None:
    """Display every decision the scan made."""
    table = Table(title="Debug", show_header=True, header_style="bold")
    table.add_column("Action")
    table.add_column("Path", overflow="fold")
    table.add_column("Reason")

    for entry in trace:
        style = trace_style(entry.action)
        table.add_row(
            f"[{style}]{entry.action.value}[/{style}]",
            Text(entry.path),
            Text(entry.reason),
        )

    console.print(table)
    console.print()


def show_error(message: str) -> None:
    err_console.print(f"[red]error: {escape(message)}[/red]", soft_wrap=True)
