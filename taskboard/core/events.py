"""In-process publish/subscribe for task change events.

Mutations publish an event only after the store has applied them. Delivery
is best-effort: a failing subscriber is logged and never propagates back
into the mutation that published the event.
"""

import logging
from collections.abc import Callable
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

from taskboard.core.timestamps import to_iso, utc_now


logger = logging.getLogger(__name__)


class TaskEventType(StrEnum):
    """Event names as seen by WebSocket clients."""

    CREATED = "task:created"
    UPDATED = "task:updated"
    DELETED = "task:deleted"
    BULK_DELETED = "tasks:bulk-deleted"
    BULK_UPDATED = "tasks:bulk-updated"


class TaskEvent(BaseModel):
    """A task change notification."""

    type: TaskEventType
    data: dict[str, Any] = Field(default_factory=dict, description="Wire-format payload")
    occurred_at: str = Field(default_factory=lambda: to_iso(utc_now()))

    def to_message(self) -> dict[str, Any]:
        """Message sent to WebSocket clients."""
        return {"event": str(self.type), "data": self.data}


EventHandler = Callable[[TaskEvent], None]


class EventBus:
    """Synchronous fan-out of task events to registered handlers."""

    def __init__(self) -> None:
        self._handlers: list[EventHandler] = []

    @property
    def handler_count(self) -> int:
        """Number of registered handlers."""
        return len(self._handlers)

    def subscribe(self, handler: EventHandler) -> None:
        """Register a handler; registering the same handler twice is a no-op."""
        if handler not in self._handlers:
            self._handlers.append(handler)

    def unsubscribe(self, handler: EventHandler) -> None:
        """Remove a handler if registered."""
        if handler in self._handlers:
            self._handlers.remove(handler)

    def publish(self, event: TaskEvent) -> None:
        """Deliver ``event`` to every handler.

        Handlers should be quick (e.g. enqueue for later delivery). Exceptions
        are logged and swallowed so the publishing mutation is never affected.
        """
        if not self._handlers:
            logger.debug("No subscribers for %s", event.type)
            return

        for handler in list(self._handlers):
            try:
                handler(event)
            except Exception:
                logger.exception("Event handler failed for %s", event.type)
