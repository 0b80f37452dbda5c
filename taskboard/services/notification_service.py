"""Notification service broadcasting task events to WebSocket clients.

The manager subscribes to the event bus and only enqueues events there; a
separate asyncio task (started by the application lifespan) drains the
queue and sends each event to every connected client. A client that
cannot be reached is dropped without affecting the others.
"""

import asyncio
import logging

from fastapi import WebSocket

from taskboard.core.events import TaskEvent


logger = logging.getLogger(__name__)


class ConnectionManager:
    """Tracks WebSocket clients and fans task events out to them."""

    def __init__(self, *, queue_maxsize: int = 1000) -> None:
        """Initialize with an empty client set and a bounded event queue.

        Args:
            queue_maxsize: Events buffered before new ones are dropped
        """
        self._connections: set[WebSocket] = set()
        self._queue: asyncio.Queue[TaskEvent] = asyncio.Queue(maxsize=queue_maxsize)

    @property
    def connection_count(self) -> int:
        """Number of connected clients."""
        return len(self._connections)

    @property
    def pending_events(self) -> int:
        """Number of events waiting for delivery."""
        return self._queue.qsize()

    async def connect(self, websocket: WebSocket) -> None:
        """Register and accept a client connection."""
        # Registered before accept so events published right after the handshake reach it.
        self._connections.add(websocket)
        try:
            await websocket.accept()
        except Exception:
            self.disconnect(websocket)
            raise
        logger.info("Client connected (%d total)", self.connection_count)

    def disconnect(self, websocket: WebSocket) -> None:
        """Forget a client connection."""
        if websocket in self._connections:
            self._connections.discard(websocket)
            logger.info("Client disconnected (%d remaining)", self.connection_count)

    def enqueue(self, event: TaskEvent) -> None:
        """Event bus handler: queue ``event`` for delivery without blocking."""
        try:
            self._queue.put_nowait(event)
        except asyncio.QueueFull:
            logger.warning("Notification queue full, dropping %s", event.type)

    async def broadcast(self, event: TaskEvent) -> int:
        """Send ``event`` to every connected client.

        Returns:
            Number of clients the event was delivered to
        """
        message = event.to_message()
        delivered = 0
        for websocket in list(self._connections):
            try:
                await websocket.send_json(message)
                delivered += 1
            except Exception as e:
                logger.warning("Failed to deliver %s to client: %s", event.type, e)
                self.disconnect(websocket)

        logger.debug("Broadcast %s to %d clients", event.type, delivered)
        return delivered

    async def run(self) -> None:
        """Deliver queued events until cancelled."""
        logger.info("Notification broadcaster started")
        try:
            while True:
                event = await self._queue.get()
                try:
                    await self.broadcast(event)
                finally:
                    self._queue.task_done()
        finally:
            logger.info("Notification broadcaster stopped")
