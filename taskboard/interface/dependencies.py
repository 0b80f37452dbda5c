"""FastAPI dependencies resolving the objects owned by the application."""

from fastapi import Request, WebSocket

from taskboard.core.events import EventBus
from taskboard.core.task_store import TaskStore
from taskboard.services.notification_service import ConnectionManager


def get_task_store(request: Request) -> TaskStore:
    """Task store created by the application factory."""
    return request.app.state.task_store


def get_event_bus(request: Request) -> EventBus:
    """Event bus created by the application factory."""
    return request.app.state.event_bus


def get_connection_manager(websocket: WebSocket) -> ConnectionManager:
    """WebSocket connection manager created by the application factory."""
    return websocket.app.state.connection_manager
