"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from dirclean import __version__
from dirclean.cli.commands import cleaners, config, fs
from dirclean.utils.formatting import err_console

# Create main Typer app
app = typer.Typer(
    name="dirclean",
    help="Find and purge build and cache directories by name.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"dirclean version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool, quiet: bool) -> None:
    """Route dirclean log records to stderr through Rich.

    User-facing messages are printed by the commands themselves, so only
    errors are logged by default. --verbose shows everything down to
    DEBUG; --quiet hides all log output.
    """
    package_logger = logging.getLogger("dirclean")
    handler = next(
        (h for h in package_logger.handlers if isinstance(h, RichHandler)),
        None,
    )
    if handler is None:
        handler = RichHandler(console=err_console, show_path=False)
        package_logger.addHandler(handler)

    if verbose:
        package_logger.setLevel(logging.DEBUG)
        handler.setLevel(logging.DEBUG)
    elif quiet:
        handler.setLevel(logging.CRITICAL + 1)
    else:
        handler.setLevel(logging.ERROR)


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """dirclean - Find and purge build and cache directories by name.

    Define cleaner profiles that pair a root directory with directory
    names such as node_modules or bin, then remove every match at once.
    """
    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    configure_logging(verbose, quiet)


# Register commands
app.add_typer(cleaners.app, name="cleaners")
app.add_typer(fs.app, name="fs")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
