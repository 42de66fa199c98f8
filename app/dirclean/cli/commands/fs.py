"""Directory finding and cleanup commands.

Provides commands to list the directories a cleaner targets beneath its
location, and to delete them.
"""

import json
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from dirclean.cli.types import OutputFormat, get_service, require_cleaner
from dirclean.core.errors import ErrorKind
from dirclean.core.service import CleanerService, OperationResult
from dirclean.filesystem.matcher import DirectoryMatcher
from dirclean.filesystem.models import RemovalReport
from dirclean.filesystem.remover import directory_size
from dirclean.models.cleaner import Cleaner
from dirclean.utils.formatting import (
    console,
    format_size,
    print_error,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Find and remove cleaner target directories.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def find(
    cleaner_id: Annotated[int, typer.Argument(help="Cleaner ID.")],
    sizes: Annotated[
        bool,
        typer.Option("--sizes", "-s", help="Compute the size of each match."),
    ] = False,
    workers: Annotated[
        int,
        typer.Option("--workers", "-w", min=1, help="Threads used for scanning."),
    ] = 1,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """List the directories a cleaner would remove."""
    service = _service(workers)
    cleaner = require_cleaner(service, cleaner_id)

    scan = service.find_directories(cleaner).unwrap()
    size_map = {path: directory_size(path) for path in scan.matches} if sizes else {}

    if output_format == OutputFormat.JSON:
        data = [{"path": path, "size_bytes": size_map.get(path)} for path in scan.matches]
        console.print_json(json.dumps(data))
        return

    if not scan.matches:
        print_success(f"Nothing to clean under {escape(cleaner.location)}.")
        return

    _print_matches(cleaner, scan.matches, size_map)
    summary = f"Found {len(scan.matches)} matching directory(ies)"
    if sizes:
        total = sum(size or 0 for size in size_map.values())
        summary += f" ({format_size(total)} total)"
    console.print(f"\n[dim]{summary}[/dim]")


@app.command()
def clean(
    cleaner_id: Annotated[int, typer.Argument(help="Cleaner ID.")],
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be deleted."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
    workers: Annotated[
        int,
        typer.Option("--workers", "-w", min=1, help="Threads used for scanning."),
    ] = 1,
) -> None:
    """Delete every directory the cleaner targets beneath its location."""
    service = _service(workers)
    cleaner = require_cleaner(service, cleaner_id)

    scan = service.find_directories(cleaner).unwrap()
    if not scan.matches:
        print_info(f"Nothing to clean under {escape(cleaner.location)}.")
        return

    _print_matches(cleaner, scan.matches, {}, dry_run=dry_run)

    # Confirm unless --yes or --dry-run
    if not dry_run and not yes:
        confirmed = typer.confirm(
            f"\nProceed with deleting {len(scan.matches)} directory(ies)?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    result = _remove_interruptible(service, cleaner, scan.matches, dry_run)

    if result.value is not None:
        _print_report(result.value)

    if result.error is not None:
        print_error(f"Cleanup of cleaner {cleaner.id} failed: {result.error}")
        raise typer.Exit(code=1)

    if result.kind == ErrorKind.PARTIAL_FAILURE:
        print_warning(str(result.warning))
        raise typer.Exit(code=1)


# === Private helper functions ===


def _service(workers: int) -> CleanerService:
    """Create a service, using a parallel matcher when requested."""
    service = get_service()
    if workers == 1:
        return service
    return CleanerService(
        service.repository,
        matcher=DirectoryMatcher(workers=workers),
        events=service.events,
    )


def _remove_interruptible(
    service: CleanerService,
    cleaner: Cleaner,
    paths: tuple[str, ...],
    dry_run: bool,
) -> OperationResult[RemovalReport]:
    """Run the removal in a worker thread so Ctrl+C cancels it cooperatively."""
    cancel = threading.Event()
    with ThreadPoolExecutor(max_workers=1) as executor:
        future = executor.submit(
            service.remove_directories,
            cleaner,
            dry_run=dry_run,
            cancel=cancel,
            paths=paths,
        )
        try:
            return future.result()
        except KeyboardInterrupt:
            cancel.set()
            print_warning("Interrupted, finishing the current deletion...")
            return future.result()


def _print_matches(
    cleaner: Cleaner,
    paths: tuple[str, ...],
    size_map: dict[str, int | None],
    dry_run: bool = False,
) -> None:
    """Display matched directories."""
    title = f"Matches for {escape(cleaner.name)}"
    if dry_run:
        title += " (dry-run)"
    table = Table(title=title, show_lines=False, border_style="border")
    table.add_column("Path", style="bold")
    if size_map:
        table.add_column("Size", justify="right", width=10)

    for path in paths:
        if size_map:
            size = size_map.get(path)
            table.add_row(escape(path), format_size(size) if size is not None else "-")
        else:
            table.add_row(escape(path))

    console.print(table)


def _print_report(report: RemovalReport) -> None:
    """Display deletion results."""
    table = Table(title="Deletion Results", show_lines=False, border_style="border")
    table.add_column("Path", style="bold")
    table.add_column("Status", width=10)
    table.add_column("Details", style="dim")

    status = "[info]dry-run[/]" if report.dry_run else "[success]deleted[/]"
    for path in report.removed:
        table.add_row(escape(path), status, "Would delete" if report.dry_run else "")
    for path in report.missing:
        table.add_row(escape(path), "[muted]gone[/]", "Already removed")
    for failure in report.failures:
        table.add_row(escape(failure.path), "[error]failed[/]", escape(failure.error))

    console.print(table)

    if report.cancelled:
        print_warning(
            f"Cancelled: {report.completed} of {len(report.matched)} deletion(s) completed."
        )
    elif report.dry_run:
        print_info(f"Dry-run: {len(report.removed)} directory(ies) would be deleted.")
    elif report.failures:
        print_warning(f"{len(report.removed)} deleted, {len(report.failures)} failed")
    else:
        print_success(f"All {len(report.removed) + len(report.missing)} directory(ies) removed.")
