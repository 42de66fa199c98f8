"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

from enum import Enum
from typing import TypeVar

import typer

from dirclean.core.errors import ErrorKind
from dirclean.core.service import CleanerService, OperationResult
from dirclean.models.cleaner import Cleaner
from dirclean.utils.formatting import print_error, print_info

T = TypeVar("T")


class OutputFormat(str, Enum):
    """Output format options for listing commands."""

    TABLE = "table"
    JSON = "json"


def get_service() -> CleanerService:
    """Create the service backed by the standard configuration file."""
    return CleanerService()


def require_ok(result: OperationResult[T], action: str) -> T:
    """Return the result value or print the error and exit.

    Args:
        result: Result of a service operation.
        action: Short description of what was attempted (e.g., "load cleaners").

    Returns:
        The successful value.

    Raises:
        typer.Exit: If the operation failed.
    """
    if result.error is None:
        return result.value  # type: ignore[return-value]

    error = result.error
    print_error(f"Failed to {action}: {error}")
    if error.kind == ErrorKind.NOT_FOUND:
        print_info("Run 'dirclean cleaners list' to see configured cleaners.")
    elif error.kind == ErrorKind.CONFIGURATION:
        print_info("Run 'dirclean config path' to locate the configuration file.")
    raise typer.Exit(code=1)


def require_cleaner(service: CleanerService, cleaner_id: int) -> Cleaner:
    """Load a cleaner by id or exit with an error message."""
    return require_ok(service.get_cleaner(cleaner_id), f"load cleaner {cleaner_id}")


def cleaner_to_dict(cleaner: Cleaner) -> dict[str, object]:
    """Serialize a cleaner for JSON output."""
    return cleaner.model_dump(mode="json")
