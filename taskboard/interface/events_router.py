"""WebSocket endpoint streaming task change events."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from taskboard.interface.dependencies import get_connection_manager
from taskboard.services.notification_service import ConnectionManager


logger = logging.getLogger(__name__)

router = APIRouter(tags=["events"])


@router.websocket("/ws")
async def task_events(
    websocket: WebSocket,
    manager: Annotated[ConnectionManager, Depends(get_connection_manager)],
) -> None:
    """Push task events to the client until it disconnects.

    Messages have the shape ``{"event": "task:created", "data": {...}}``.
    Anything the client sends is ignored.
    """
    await manager.connect(websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.debug("WebSocket closed by client")
    finally:
        manager.disconnect(websocket)
