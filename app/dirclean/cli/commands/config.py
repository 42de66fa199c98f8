"""Configuration file commands.

Provides commands to locate, inspect, and reset the configuration file
that stores all cleaner profiles.
"""

from typing import Annotated

import typer

from dirclean.cli.types import get_service, require_ok
from dirclean.utils.formatting import console, print_info, print_success

app = typer.Typer(
    help="Inspect and reset the cleaner configuration file.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def path() -> None:
    """Print the location of the configuration file."""
    store = get_service().repository.store
    console.print(str(store.path), soft_wrap=True)
    if not store.exists():
        print_info("The file does not exist yet; it is created on first use.")


@app.command()
def init() -> None:
    """Create an empty configuration file if none exists."""
    service = get_service()
    existed = service.repository.store.exists()
    cleaners = require_ok(service.load_cleaners(), "create configuration")
    if existed:
        print_info(f"Configuration already exists with {len(cleaners)} cleaner(s).")
    else:
        print_success(f"Created {service.repository.store.path}")


@app.command()
def reset(
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Delete the configuration file and every cleaner in it."""
    service = get_service()
    store = service.repository.store
    if not store.exists():
        print_info("No configuration file to reset.")
        return

    if not yes:
        confirmed = typer.confirm(
            f"Delete {store.path} and all configured cleaners?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    require_ok(service.reset_configuration(), "reset configuration")
    print_success("Configuration deleted.")
