"""taskboard - task management API with real-time notifications."""

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taskboard import __version__
from taskboard.core.config import Settings, settings
from taskboard.core.errors import register_exception_handlers
from taskboard.core.events import EventBus
from taskboard.core.logging import configure_logfire, instrument_fastapi
from taskboard.core.task_store import TaskStore
from taskboard.core.timestamps import to_iso, utc_now
from taskboard.interface.events_router import router as events_router
from taskboard.interface.task_router import router as task_router
from taskboard.services.notification_service import ConnectionManager


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan context manager."""
    # Startup
    # Configure logging first so startup logs are captured
    configure_logfire(app.state.settings)

    manager: ConnectionManager = app.state.connection_manager
    broadcaster = asyncio.create_task(manager.run())
    logger.info("startup_complete", extra={"tasks": len(app.state.task_store)})
    yield
    # Shutdown
    broadcaster.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await broadcaster
    logger.info("shutdown_complete")


def create_app(*, app_settings: Settings | None = None, store: TaskStore | None = None) -> FastAPI:
    """Build the application and the objects it owns.

    Args:
        app_settings: Settings to use (defaults to the environment-loaded settings)
        store: Pre-built task store; a new one is created (and optionally seeded) when omitted

    Returns:
        Configured FastAPI application
    """
    app_settings = app_settings or settings

    if store is None:
        store = TaskStore()
        if app_settings.seed_sample_tasks:
            store.seed_sample_tasks()

    event_bus = EventBus()
    manager = ConnectionManager(queue_maxsize=app_settings.notification_queue_maxsize)
    event_bus.subscribe(manager.enqueue)

    app = FastAPI(
        title="taskboard",
        description="Task management API with real-time notifications",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.task_store = store
    app.state.event_bus = event_bus
    app.state.connection_manager = manager

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.allowed_origins,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )
    register_exception_handlers(app, is_production=app_settings.is_production)

    # Instrument FastAPI with Logfire
    instrument_fastapi(app)

    @app.get("/health")
    async def health_check() -> JSONResponse:
        """Health check endpoint."""
        return JSONResponse(
            content={"success": True, "message": "API is running", "timestamp": to_iso(utc_now())},
            status_code=200,
        )

    # Register routers
    app.include_router(task_router)
    app.include_router(events_router)

    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    uvicorn.run("taskboard.main:app", host=settings.host, port=settings.port)
