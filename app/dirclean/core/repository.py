"""Cleaner repository.

This module provides the CleanerRepository class, which owns the
in-memory configuration state and implements create/read/update/delete
of individual cleaner profiles on top of the ConfigurationStore.

Every mutation runs as one transaction under a lock: reload the
document from disk, apply the change to a copy, save the copy, and only
then commit it as the owned state. A failed save therefore leaves the
owned state exactly as it was on disk.
"""

import logging
import threading
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

import pydantic

from dirclean.core.errors import (
    CleanerError,
    ConfigurationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from dirclean.core.store import ConfigurationStore
from dirclean.models.cleaner import Cleaner, Configuration

logger = logging.getLogger(__name__)

CleanerInput = Cleaner | Mapping[str, Any]


class CleanerRepository:
    """CRUD access to cleaner profiles with identity and existence rules.

    Attributes:
        store: Backing configuration store.
    """

    def __init__(self, store: ConfigurationStore | None = None) -> None:
        """Initialize CleanerRepository.

        Args:
            store: Optional configuration store. Default: store at the
                   standard data directory location.
        """
        self._store = store if store is not None else ConfigurationStore()
        self._state: Configuration | None = None
        self._lock = threading.RLock()

    @property
    def store(self) -> ConfigurationStore:
        """Backing configuration store."""
        return self._store

    def list(self, refresh: bool = False) -> list[Cleaner]:
        """Return all cleaners in storage order.

        The configuration is loaded on first use and reused afterwards
        unless a refresh is requested.

        Args:
            refresh: If True, reload the configuration from disk.

        Returns:
            Copies of the stored cleaners.

        Raises:
            ConfigurationError: If the configuration cannot be loaded.
        """
        with self._lock:
            if self._state is None or refresh:
                self._state = self._store.load()
            return [cleaner.model_copy(deep=True) for cleaner in self._state.cleaners]

    def get_by_id(self, cleaner_id: int) -> Cleaner:
        """Return the cleaner with the given id.

        Raises:
            NotFoundError: If no cleaner has this id.
            ConfigurationError: If the configuration cannot be loaded.
        """
        with self._lock:
            if self._state is None:
                self._state = self._store.load()
            cleaner = self._state.find(cleaner_id)
            if cleaner is None:
                raise NotFoundError(
                    f"Cleaner with ID {cleaner_id} not found",
                    operation="get",
                    target=cleaner_id,
                )
            return cleaner.model_copy(deep=True)

    def create(self, cleaner: CleanerInput) -> Cleaner:
        """Add a new cleaner and persist the configuration.

        A zero or negative id is replaced by max(existing ids) + 1, or 1
        when the collection is empty.

        Args:
            cleaner: Cleaner to add, as a model or a mapping of fields.

        Returns:
            The stored cleaner with its final id.

        Raises:
            ValidationError: If a required field is missing or invalid.
            ConflictError: If a positive id is already in use.
            ConfigurationError: If the configuration cannot be loaded or saved.
        """
        candidate = self._validate(cleaner, "create")

        with self._transaction("create", candidate.id) as working:
            if candidate.id > 0 and working.find(candidate.id) is not None:
                raise ConflictError(
                    f"Cleaner with ID {candidate.id} already exists",
                    operation="create",
                    target=candidate.id,
                )
            if candidate.id <= 0:
                candidate.id = working.next_id()
            working.cleaners.append(candidate)

        logger.info("Created cleaner %d (%s)", candidate.id, candidate.name)
        return candidate.model_copy(deep=True)

    def update(self, cleaner: CleanerInput) -> Cleaner:
        """Overwrite name, description, location, and directories of a cleaner.

        The id identifies the record and is never changed.

        Args:
            cleaner: Cleaner carrying the id and the new field values.

        Returns:
            The updated cleaner.

        Raises:
            ValidationError: If a required field is missing or invalid.
            NotFoundError: If no cleaner has this id.
            ConfigurationError: If the configuration cannot be loaded or saved.
        """
        candidate = self._validate(cleaner, "update")

        with self._transaction("update", candidate.id) as working:
            existing = working.find(candidate.id)
            if existing is None:
                raise NotFoundError(
                    f"Cleaner with ID {candidate.id} not found",
                    operation="update",
                    target=candidate.id,
                )
            existing.name = candidate.name
            existing.description = candidate.description
            existing.location = candidate.location
            existing.directories = list(candidate.directories)
            updated = existing.model_copy(deep=True)

        logger.info("Updated cleaner %d (%s)", updated.id, updated.name)
        return updated

    def delete(self, cleaner_id: int) -> None:
        """Remove a cleaner and persist the configuration.

        Raises:
            NotFoundError: If no cleaner has this id.
            ConfigurationError: If the configuration cannot be loaded or saved.
        """
        with self._transaction("delete", cleaner_id) as working:
            existing = working.find(cleaner_id)
            if existing is None:
                raise NotFoundError(
                    f"Cleaner with ID {cleaner_id} not found",
                    operation="delete",
                    target=cleaner_id,
                )
            working.cleaners.remove(existing)

        logger.info("Deleted cleaner %d", cleaner_id)

    def reset(self) -> None:
        """Delete the configuration file and drop the owned state.

        Raises:
            OSError: If the configuration file cannot be removed.
        """
        with self._lock:
            self._store.delete()
            self._state = None

    @contextmanager
    def _transaction(self, operation: str, target: int) -> Iterator[Configuration]:
        """Run a read-modify-persist cycle on a copy of the configuration.

        Yields a deep copy of the freshly reloaded configuration. When the
        body completes, the copy is saved and becomes the owned state. If
        the body raises or the save fails, the owned state keeps the
        reloaded document.
        """
        with self._lock:
            try:
                self._state = self._store.load()
            except ConfigurationError as e:
                raise _wrap(operation, target, e) from e

            working = self._state.model_copy(deep=True)
            yield working

            try:
                self._store.save(working)
            except ConfigurationError as e:
                raise _wrap(operation, target, e) from e
            self._state = working

    @staticmethod
    def _validate(cleaner: CleanerInput, operation: str) -> Cleaner:
        """Return a validated, detached copy of the given cleaner."""
        data = cleaner.model_dump() if isinstance(cleaner, Cleaner) else dict(cleaner)
        try:
            return Cleaner.model_validate(data)
        except pydantic.ValidationError as e:
            fields = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
            raw_id = {str(key).lower(): value for key, value in data.items()}.get("id")
            raise ValidationError(
                f"Invalid cleaner: {', '.join(fields) or 'unknown field'}",
                operation=operation,
                target=raw_id if isinstance(raw_id, int) else None,
                cause=e,
            ) from e


def _wrap(operation: str, target: int, error: CleanerError) -> ConfigurationError:
    """Wrap a store failure with the repository operation that triggered it."""
    return ConfigurationError(
        f"Failed to {operation} cleaner",
        operation=operation,
        target=target,
        cause=error,
    )
