"""Error taxonomy for dirclean.

Every failure raised by the store, the repository, or the directory
remover is a CleanerError carrying a machine-readable kind together with
the operation, the affected target (cleaner id or path), and the
underlying cause. The service layer converts these into tagged results.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Classification of a dirclean failure.

    Attributes:
        NOT_FOUND: Referenced cleaner id is absent from the collection.
        CONFLICT: A cleaner with the given id already exists.
        CONFIGURATION: Backing store is unreadable or unwritable.
        VALIDATION: A cleaner is missing a required field.
        PARTIAL_FAILURE: Some matched directories could not be deleted.
        REMOVAL: Unexpected failure while deleting a matched directory.
    """

    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    CONFIGURATION = "configuration"
    VALIDATION = "validation"
    PARTIAL_FAILURE = "partial_failure"
    REMOVAL = "removal"


class CleanerError(Exception):
    """Base exception for dirclean errors.

    Attributes:
        kind: Error classification.
        operation: Name of the operation that failed (e.g., "create").
        target: Cleaner id or filesystem path the operation referenced.
        cause: Underlying exception, if any.
    """

    kind: ErrorKind = ErrorKind.CONFIGURATION

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        target: int | str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.target = target
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message


class NotFoundError(CleanerError):
    """Raised when no cleaner has the requested id."""

    kind = ErrorKind.NOT_FOUND


class ConflictError(CleanerError):
    """Raised when creating a cleaner whose id is already taken."""

    kind = ErrorKind.CONFLICT


class ConfigurationError(CleanerError):
    """Raised when the configuration file cannot be read, parsed, or written."""

    kind = ErrorKind.CONFIGURATION


class ValidationError(CleanerError):
    """Raised when a cleaner lacks a required field."""

    kind = ErrorKind.VALIDATION


class RemovalError(CleanerError):
    """Raised when one or more matched directories failed unexpectedly.

    The report of everything that was attempted is attached so callers
    can still render which deletions succeeded.
    """

    kind = ErrorKind.REMOVAL

    def __init__(
        self,
        message: str,
        *,
        report: object | None = None,
        operation: str | None = None,
        target: int | str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message, operation=operation, target=target, cause=cause)
        self.report = report


class PartialFailureWarning(CleanerError):
    """Some matched directories could not be deleted.

    Never raised. Attached to an otherwise successful removal result so
    callers can tell which targets failed.

    Attributes:
        failed: Paths that could not be deleted.
    """

    kind = ErrorKind.PARTIAL_FAILURE

    def __init__(
        self,
        message: str,
        *,
        failed: tuple[str, ...] = (),
        operation: str | None = None,
        target: int | str | None = None,
    ) -> None:
        super().__init__(message, operation=operation, target=target)
        self.failed = failed
