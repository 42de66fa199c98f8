"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dirclean.core.theme import get_theme
from dirclean.models.cleaner import Cleaner


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def create_cleaner_table(title: str = "Cleaners") -> Table:
    """Create a pre-configured table for displaying cleaner profiles.

    Args:
        title: Table title.

    Returns:
        Rich Table configured for cleaner display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],  # Zebra striping for readability
    )
    table.add_column("ID", justify="right", width=4)
    table.add_column("Name", no_wrap=True)
    table.add_column("Location", style="muted")
    table.add_column("Directories", style="target")
    table.add_column("Description", style="text", overflow="ellipsis")
    return table


def format_cleaner_row(cleaner: Cleaner) -> tuple[str, str, str, str, str]:
    """Format a cleaner as a table row with proper styling.

    Args:
        cleaner: The cleaner to format.

    Returns:
        Tuple of (id, name, location, directories, description) with Rich markup.
    """
    directories = ", ".join(cleaner.directories) or "-"
    return (
        str(cleaner.id),
        f"[cleaner_name]{escape(cleaner.name)}[/]",
        escape(cleaner.location),
        escape(directories),
        escape(cleaner.description or "-"),
    )


def format_size(size_bytes: int | None) -> str:
    """Format byte count as human-readable string."""
    if size_bytes is None or size_bytes == 0:
        return "0 B"
    size = float(size_bytes)
    for unit in ("B", "KB", "MB", "GB"):
        if abs(size) < 1024:
            return f"{size:.1f} {unit}" if unit != "B" else f"{int(size)} B"
        size /= 1024
    return f"{size:.1f} TB"


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
