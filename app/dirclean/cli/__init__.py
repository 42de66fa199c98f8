"""CLI package for dirclean.

This package contains the Typer application and all subcommands.
"""

from dirclean.cli.main import app

__all__ = ["app"]
