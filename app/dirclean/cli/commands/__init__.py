"""CLI commands for dirclean.

This package contains all subcommand implementations.
"""

from dirclean.cli.commands import cleaners, config, fs

__all__ = ["cleaners", "config", "fs"]
