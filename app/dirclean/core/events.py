"""Cleaner change events.

The service layer publishes an event after every successful change so
observers (display layers, caches) can react without the repository
knowing about them.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum

from dirclean.models.cleaner import Cleaner

logger = logging.getLogger(__name__)


class CleanerEventType(str, Enum):
    """Kind of state change.

    Attributes:
        LOADED: The cleaner list was (re)loaded from disk.
        CREATED: A cleaner was added.
        UPDATED: A cleaner was changed.
        DELETED: A cleaner was removed.
        CLEANED: Matched directories of a cleaner were deleted.
    """

    LOADED = "loaded"
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    CLEANED = "cleaned"


@dataclass(frozen=True, slots=True)
class CleanerEvent:
    """A published state change.

    Attributes:
        event_type: What happened.
        cleaner_id: Affected cleaner, None for collection-wide events.
        cleaner: Snapshot of the affected cleaner, if any.
        timestamp: When the event was published (ISO 8601, UTC).
    """

    event_type: CleanerEventType
    cleaner_id: int | None = None
    cleaner: Cleaner | None = None
    timestamp: str = ""

    @classmethod
    def now(
        cls,
        event_type: CleanerEventType,
        cleaner_id: int | None = None,
        cleaner: Cleaner | None = None,
    ) -> "CleanerEvent":
        """Create an event stamped with the current time."""
        return cls(
            event_type=event_type,
            cleaner_id=cleaner_id,
            cleaner=cleaner,
            timestamp=datetime.now(UTC).isoformat(),
        )


Handler = Callable[[CleanerEvent], None]


class EventBus:
    """Synchronous publish/subscribe channel for cleaner events.

    Handlers run in the publishing thread, in subscription order. A
    handler that raises is logged and does not affect other handlers
    or the publisher.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._subscribers: list[tuple[Handler, frozenset[CleanerEventType] | None]] = []

    def subscribe(
        self,
        handler: Handler,
        event_types: set[CleanerEventType] | None = None,
    ) -> Callable[[], None]:
        """Register a handler.

        Args:
            handler: Callable receiving each matching event.
            event_types: Only deliver these event types. None means all.

        Returns:
            A callable that removes this subscription.
        """
        entry = (handler, frozenset(event_types) if event_types is not None else None)
        with self._lock:
            self._subscribers.append(entry)

        def unsubscribe() -> None:
            with self._lock:
                if entry in self._subscribers:
                    self._subscribers.remove(entry)

        return unsubscribe

    def publish(self, event: CleanerEvent) -> None:
        """Deliver an event to every matching subscriber."""
        with self._lock:
            subscribers = list(self._subscribers)

        for handler, event_types in subscribers:
            if event_types is not None and event.event_type not in event_types:
                continue
            try:
                handler(event)
            except Exception:
                logger.exception("Event handler failed for %s", event.event_type.value)

    @property
    def subscriber_count(self) -> int:
        """Number of active subscriptions."""
        with self._lock:
            return len(self._subscribers)
