"""Filesystem domain models for directory matching and removal.

This module defines the result structures produced by the directory
matcher and the directory remover.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Outcome of a directory scan.

    Attributes:
        root: Root directory the scan started from.
        matches: Matched directory paths, sorted.
        cancelled: Whether the scan stopped early on a cancellation request.
    """

    root: str
    matches: tuple[str, ...]
    cancelled: bool = False

    def __len__(self) -> int:
        return len(self.matches)

    def __iter__(self) -> Iterator[str]:
        return iter(self.matches)


class FailureSeverity(str, Enum):
    """How a failed deletion is reported.

    Attributes:
        WARNING: Permission or I/O failure, surfaced but not raised.
        FATAL: Unexpected failure, raised after all deletions were attempted.
    """

    WARNING = "warning"
    FATAL = "fatal"


@dataclass(frozen=True, slots=True)
class RemovalFailure:
    """A matched directory that could not be deleted.

    Attributes:
        path: Directory that failed.
        error: Human-readable error message.
        severity: Whether the failure is a warning or fatal.
    """

    path: str
    error: str
    severity: FailureSeverity = FailureSeverity.WARNING


@dataclass(frozen=True, slots=True)
class RemovalReport:
    """Outcome of removing every matched directory beneath a root.

    A report with no matches is falsy, so ``if not report`` reads as
    "nothing was removed".

    Attributes:
        root: Root directory of the operation.
        matched: Every directory the scan matched.
        removed: Directories deleted (or that would be, on a dry-run).
        missing: Directories that vanished before deletion was attempted.
        failures: Directories that could not be deleted.
        dry_run: Whether deletions were only simulated.
        cancelled: Whether the operation stopped on a cancellation request.
    """

    root: str
    matched: tuple[str, ...] = ()
    removed: tuple[str, ...] = ()
    missing: tuple[str, ...] = ()
    failures: tuple[RemovalFailure, ...] = ()
    dry_run: bool = False
    cancelled: bool = False

    def __bool__(self) -> bool:
        return self.performed

    @property
    def performed(self) -> bool:
        """True if at least one directory matched and removal was attempted."""
        return bool(self.matched)

    @property
    def warnings(self) -> tuple[RemovalFailure, ...]:
        """Failures reported as non-fatal warnings."""
        return tuple(f for f in self.failures if f.severity == FailureSeverity.WARNING)

    @property
    def fatal(self) -> tuple[RemovalFailure, ...]:
        """Failures that were raised to the caller."""
        return tuple(f for f in self.failures if f.severity == FailureSeverity.FATAL)

    @property
    def partial(self) -> bool:
        """True if some matched directories could not be deleted."""
        return bool(self.failures)

    @property
    def completed(self) -> int:
        """Number of deletions that completed."""
        return len(self.removed)
