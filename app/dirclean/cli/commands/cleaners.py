"""Cleaner profile management commands.

Provides commands to list, inspect, create, edit, and remove the
cleaner profiles stored in the configuration file.
"""

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from dirclean.cli.types import (
    OutputFormat,
    cleaner_to_dict,
    get_service,
    require_cleaner,
    require_ok,
)
from dirclean.models.cleaner import Cleaner
from dirclean.utils.formatting import (
    console,
    create_cleaner_table,
    format_cleaner_row,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Manage cleaner profiles.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command("list")
def list_cleaners(
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
    """List all configured cleaners."""
    service = get_service()
    cleaners = require_ok(service.load_cleaners(), "load cleaners")

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps([cleaner_to_dict(c) for c in cleaners]))
        return

    if not cleaners:
        print_info("No cleaners configured. Add one with 'dirclean cleaners add'.")
        return

    table = create_cleaner_table()
    for cleaner in cleaners:
        table.add_row(*format_cleaner_row(cleaner))
    console.print(table)
    console.print(f"\n[dim]{len(cleaners)} cleaner(s)[/dim]")


@app.command()
def show(
    cleaner_id: Annotated[int, typer.Argument(help="Cleaner ID.")],
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
    """Show a single cleaner."""
    cleaner = require_cleaner(get_service(), cleaner_id)

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(cleaner_to_dict(cleaner)))
        return

    table = Table(title=f"Cleaner {cleaner.id}", show_header=False, border_style="border")
    table.add_column("Field", style="bold_header")
    table.add_column("Value")
    table.add_row("Name", f"[cleaner_name]{escape(cleaner.name)}[/]")
    table.add_row("Description", escape(cleaner.description or "-"))
    table.add_row("Location", escape(cleaner.location))
    table.add_row("Directories", escape("\n".join(cleaner.directories) or "-"))
    console.print(table)


@app.command()
def add(
    name: Annotated[str, typer.Argument(help="Display name of the cleaner.")],
    location: Annotated[
        Path,
        typer.Option("--location", "-l", help="Root directory to search beneath."),
    ],
    directories: Annotated[
        list[str],
        typer.Option("--dir", "-d", help="Directory name to remove (repeatable)."),
    ],
    description: Annotated[
        str | None,
        typer.Option("--description", help="Optional description."),
    ] = None,
    cleaner_id: Annotated[
        int,
        typer.Option("--id", help="Explicit ID (default: next free ID)."),
    ] = 0,
) -> None:
    """Create a new cleaner."""
    root = _absolute(location)
    if not root.is_dir():
        print_warning(f"Location does not exist yet: {root}")

    service = get_service()
    cleaner = require_ok(
        service.create_cleaner(
            {
                "id": cleaner_id,
                "name": name,
                "description": description,
                "location": str(root),
                "directories": directories,
            }
        ),
        "create cleaner",
    )
    print_success(f"Created cleaner {cleaner.id}: {escape(cleaner.name)}")


@app.command()
def edit(
    cleaner_id: Annotated[int, typer.Argument(help="Cleaner ID.")],
    name: Annotated[
        str | None,
        typer.Option("--name", "-n", help="New display name."),
    ] = None,
    location: Annotated[
        Path | None,
        typer.Option("--location", "-l", help="New root directory."),
    ] = None,
    directories: Annotated[
        list[str] | None,
        typer.Option("--dir", "-d", help="Replace directory names (repeatable)."),
    ] = None,
    description: Annotated[
        str | None,
        typer.Option("--description", help="New description."),
    ] = None,
) -> None:
    """Change fields of an existing cleaner."""
    service = get_service()
    current = require_cleaner(service, cleaner_id)

    changes: dict[str, object] = {}
    if name is not None:
        changes["name"] = name
    if location is not None:
        changes["location"] = str(_absolute(location))
    if directories:
        changes["directories"] = directories
    if description is not None:
        changes["description"] = description or None

    if not changes:
        print_info("Nothing to change.")
        return

    updated = require_ok(
        service.update_cleaner({**current.model_dump(), **changes}),
        f"update cleaner {cleaner_id}",
    )
    print_success(f"Updated cleaner {updated.id}: {escape(updated.name)}")


@app.command()
def remove(
    cleaner_id: Annotated[int, typer.Argument(help="Cleaner ID.")],
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Delete a cleaner profile (matched directories are not touched)."""
    service = get_service()
    cleaner: Cleaner = require_cleaner(service, cleaner_id)

    if not yes:
        confirmed = typer.confirm(
            f"Delete cleaner {cleaner.id} ({cleaner.name})?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    require_ok(service.delete_cleaner(cleaner_id), f"delete cleaner {cleaner_id}")
    print_success(f"Deleted cleaner {cleaner_id}.")


def _absolute(path: Path) -> Path:
    """Expand ~ and make a path absolute without resolving symlinks."""
    return path.expanduser().absolute()
