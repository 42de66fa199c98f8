"""Consumer-facing cleaner operations.

CleanerService is the single entry point for display layers. It wraps
the repository and the directory remover and turns every dirclean
failure into an OperationResult carrying a tagged error, so callers
handle each outcome explicitly instead of catching exceptions.
"""

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Generic, TypeVar

from dirclean.core.errors import (
    CleanerError,
    ConfigurationError,
    ErrorKind,
    PartialFailureWarning,
    RemovalError,
)
from dirclean.core.events import CleanerEvent, CleanerEventType, EventBus
from dirclean.core.repository import CleanerInput, CleanerRepository
from dirclean.filesystem.matcher import DirectoryMatcher
from dirclean.filesystem.models import RemovalReport, ScanResult
from dirclean.filesystem.remover import DirectoryRemover
from dirclean.models.cleaner import Cleaner

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class OperationResult(Generic[T]):
    """Result of a consumer-facing operation.

    Exactly one of a successful value or an error describes the outcome.
    A successful removal may additionally carry a partial-failure warning.

    Attributes:
        value: Operation result (None for void operations or on failure,
            except removals, which keep their report on failure).
        error: Failure description, None on success.
        warning: Non-fatal problem attached to a successful result.
    """

    value: T | None = None
    error: CleanerError | None = None
    warning: CleanerError | None = None

    @property
    def ok(self) -> bool:
        """Check if the operation succeeded."""
        return self.error is None

    @property
    def failed(self) -> bool:
        """Check if the operation failed."""
        return self.error is not None

    @property
    def kind(self) -> ErrorKind | None:
        """Kind of the error, or of the warning on success."""
        if self.error is not None:
            return self.error.kind
        if self.warning is not None:
            return self.warning.kind
        return None

    def unwrap(self) -> T:
        """Return the value, raising the error if the operation failed."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


def success(value: T | None = None, warning: CleanerError | None = None) -> OperationResult[T]:
    """Build a successful result."""
    return OperationResult(value=value, warning=warning)


def failure(error: CleanerError, value: T | None = None) -> OperationResult[T]:
    """Build a failed result."""
    return OperationResult(value=value, error=error)


class CleanerService:
    """Cleaner CRUD plus directory find/remove for a cleaner profile.

    Args:
        repository: Cleaner repository. Default: repository over the
            standard configuration file.
        matcher: Directory matcher used for scans and removals.
        events: Event bus receiving change notifications.
    """

    def __init__(
        self,
        repository: CleanerRepository | None = None,
        *,
        matcher: DirectoryMatcher | None = None,
        events: EventBus | None = None,
    ) -> None:
        self._repository = repository if repository is not None else CleanerRepository()
        self._matcher = matcher if matcher is not None else DirectoryMatcher()
        self._events = events if events is not None else EventBus()

    @property
    def repository(self) -> CleanerRepository:
        return self._repository

    @property
    def events(self) -> EventBus:
        return self._events

    # === Cleaner profiles ===

    def load_cleaners(self, refresh: bool = False) -> OperationResult[list[Cleaner]]:
        """Load all cleaners, reloading from disk if ``refresh`` is set."""
        try:
            cleaners = self._repository.list(refresh=refresh)
        except CleanerError as e:
            return failure(e)
        self._events.publish(CleanerEvent.now(CleanerEventType.LOADED))
        return success(cleaners)

    def get_cleaner(self, cleaner_id: int) -> OperationResult[Cleaner]:
        """Look up a single cleaner."""
        try:
            return success(self._repository.get_by_id(cleaner_id))
        except CleanerError as e:
            return failure(e)

    def create_cleaner(self, cleaner: CleanerInput) -> OperationResult[Cleaner]:
        """Store a new cleaner, assigning an id when none is given."""
        try:
            created = self._repository.create(cleaner)
        except CleanerError as e:
            logger.warning("Create failed: %s", e)
            return failure(e)
        self._events.publish(CleanerEvent.now(CleanerEventType.CREATED, created.id, created))
        return success(created)

    def update_cleaner(self, cleaner: CleanerInput) -> OperationResult[Cleaner]:
        """Overwrite an existing cleaner's fields."""
        try:
            updated = self._repository.update(cleaner)
        except CleanerError as e:
            logger.warning("Update failed: %s", e)
            return failure(e)
        self._events.publish(CleanerEvent.now(CleanerEventType.UPDATED, updated.id, updated))
        return success(updated)

    def delete_cleaner(self, cleaner_id: int) -> OperationResult[None]:
        """Remove a cleaner profile (its directories are left alone)."""
        try:
            self._repository.delete(cleaner_id)
        except CleanerError as e:
            logger.warning("Delete failed: %s", e)
            return failure(e)
        self._events.publish(CleanerEvent.now(CleanerEventType.DELETED, cleaner_id))
        return success()

    def reset_configuration(self) -> OperationResult[None]:
        """Delete the configuration file and every stored cleaner."""
        try:
            self._repository.reset()
        except OSError as e:
            return failure(
                ConfigurationError(
                    "Failed to delete configuration",
                    operation="reset",
                    target=str(self._repository.store.path),
                    cause=e,
                )
            )
        self._events.publish(CleanerEvent.now(CleanerEventType.LOADED))
        return success()

    # === Directories ===

    def find_directories(
        self,
        cleaner: Cleaner,
        cancel: threading.Event | None = None,
    ) -> OperationResult[ScanResult]:
        """Find every directory the cleaner targets beneath its location.

        Finding nothing is a successful, empty result.
        """
        self._check_location(cleaner)
        return success(self._matcher.find(cleaner.directories, cleaner.location, cancel))

    def remove_directories(
        self,
        cleaner: Cleaner,
        *,
        dry_run: bool = False,
        cancel: threading.Event | None = None,
        paths: tuple[str, ...] | None = None,
    ) -> OperationResult[RemovalReport]:
        """Delete every directory the cleaner targets beneath its location.

        Args:
            cleaner: Cleaner whose location and directories are used.
            dry_run: Report what would be deleted without deleting.
            cancel: Optional cancellation event.
            paths: Previously found matches to delete instead of rescanning.

        Returns:
            Result holding the RemovalReport. A report with no matches is
            falsy. Directories that failed with permission or I/O errors
            are attached as a PARTIAL_FAILURE warning; unexpected failures
            produce a REMOVAL error that still carries the report.
        """
        self._check_location(cleaner)
        remover = DirectoryRemover(self._matcher, dry_run=dry_run)
        try:
            if paths is None:
                report = remover.remove_matching(cleaner.directories, cleaner.location, cancel)
            else:
                report = remover.remove_paths(paths, cleaner.location, cancel)
        except RemovalError as e:
            e.target = e.target if e.target is not None else cleaner.id
            self._publish_cleaned(cleaner, e.report)
            return failure(e, value=e.report if isinstance(e.report, RemovalReport) else None)

        self._publish_cleaned(cleaner, report)

        warning = None
        if report.warnings:
            failed = tuple(f.path for f in report.warnings)
            warning = PartialFailureWarning(
                f"{len(failed)} of {len(report.matched)} directory(ies) could not be deleted",
                failed=failed,
                operation="remove",
                target=cleaner.id,
            )
        return success(report, warning=warning)

    def _publish_cleaned(self, cleaner: Cleaner, report: object) -> None:
        if isinstance(report, RemovalReport) and report.removed and not report.dry_run:
            self._events.publish(CleanerEvent.now(CleanerEventType.CLEANED, cleaner.id, cleaner))

    @staticmethod
    def _check_location(cleaner: Cleaner) -> None:
        if not Path(cleaner.location).is_dir():
            logger.warning(
                "Location of cleaner %d does not exist or is not a directory: %s",
                cleaner.id,
                cleaner.location,
            )
