"""CLI interface for npmcleaner."""

import logging
from typing import Optional

import typer

from npmcleaner import __version__
from npmcleaner.cleaner import delete_folders
from npmcleaner.config import (
    DEFAULT_DAYS_AGO,
    DEFAULT_LIMIT,
    DEFAULT_MB_THRESHOLD,
    MARKER_NAME,
    default_exclude_platform_paths,
    default_start_dir,
)
from npmcleaner.display import (
    configure_logging,
    console,
    show_config,
    show_delete_hint,
    show_deleted,
    show_deleting,
    show_error,
    show_no_results,
    show_results,
    show_trace,
)
from npmcleaner.errors import DeletionError, ScanError
from npmcleaner.models import ScanConfig
from npmcleaner.scanner import run_scan

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="npmcleaner",
    help="Find large, stale node_modules folders and optionally delete them",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"npmcleaner version {__version__}")
        raise typer.Exit()


@app.command()
def main(
    delete: bool = typer.Option(False, "--delete", help="Delete the folders that are found"),
    from_dir: Optional[str] = typer.Option(
        None,
        "--from",
        help="Directory to start scanning from [default: home directory]",
        show_default=False,
    ),
    mbthresh: int = typer.Option(
        DEFAULT_MB_THRESHOLD, "--mbthresh", min=0, help="Only report folders of at least this many MB"
    ),
    older: int = typer.Option(
        DEFAULT_DAYS_AGO, "--older", min=0, help="Only report projects untouched for this many days"
    ),
    limit: int = typer.Option(
        DEFAULT_LIMIT, "--limit", min=1, help="Stop after finding this many folders"
    ),
    exclude_platform: Optional[bool] = typer.Option(
        None,
        "--exclude-platform/--no-exclude-platform",
        help="Skip hidden and OS-owned folders [default: on for Windows]",
        show_default=False,
    ),
    debug: bool = typer.Option(False, "--debug", help="Show every scan decision"),
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Find node_modules folders in stale projects, largest first."""
    configure_logging(debug)

    config = ScanConfig(
        root_path=from_dir if from_dir is not None else default_start_dir(),
        min_age_days=older,
        min_size_mb=mbthresh,
        max_results=limit,
        delete_enabled=delete,
        exclude_platform_paths=(
            exclude_platform if exclude_platform is not None else default_exclude_platform_paths()
        ),
        marker_name=MARKER_NAME,
        debug=debug,
    )
    show_config(config)

    try:
        with console.status(f"Scanning {config.root_path} for {config.marker_name}..."):
            outcome = run_scan(config)
    except ScanError as e:
        logger.debug("Scan of %s failed", config.root_path, exc_info=True)
        show_error(str(e))
        raise typer.Exit(1)

    if config.debug:
        show_trace(outcome.trace)

    results = outcome.results
    if not results.folders:
        show_no_results()
        return

    show_results(results)

    if not config.delete_enabled:
        console.print()
        show_delete_hint()
        return

    console.print()
    try:
        delete_folders(
            results.folders,
            marker_name=config.marker_name,
            on_start=show_deleting,
            on_done=show_deleted,
        )
    except DeletionError as e:
        # Finish the pending "Deleting ..." line before reporting
        console.print()
        show_error(f"{e}, exiting")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
