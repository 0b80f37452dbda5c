"""Pytest configuration and shared fixtures."""

from collections.abc import Iterator
from datetime import UTC, datetime, timedelta

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from taskboard.core.config import Settings
from taskboard.core.events import EventBus, TaskEvent
from taskboard.core.task_store import TaskStore
from taskboard.main import create_app


class FakeClock:
    """Controllable clock for deterministic timestamps."""

    def __init__(self, start: datetime | None = None, *, step: timedelta | None = None) -> None:
        self.current = start or datetime(2025, 1, 15, 12, 0, 0, tzinfo=UTC)
        self.step = step

    def __call__(self) -> datetime:
        now = self.current
        if self.step:
            self.current += self.step
        return now

    def advance(self, **delta: float) -> datetime:
        """Move the clock forward by a timedelta (e.g. ``advance(seconds=1)``)."""
        self.current += timedelta(**delta)
        return self.current


@pytest.fixture
def clock() -> FakeClock:
    """A clock frozen at 2025-01-15T12:00:00Z until advanced."""
    return FakeClock()


@pytest.fixture
def task_store(clock: FakeClock) -> TaskStore:
    """Provides a fresh empty TaskStore driven by the fake clock."""
    return TaskStore(now=clock)


@pytest.fixture
def event_bus() -> EventBus:
    """Provides a fresh EventBus."""
    return EventBus()


@pytest.fixture
def published_events(event_bus: EventBus) -> list[TaskEvent]:
    """Events published on ``event_bus`` during the test."""
    events: list[TaskEvent] = []
    event_bus.subscribe(events.append)
    return events


@pytest.fixture
def test_settings() -> Settings:
    """Settings for tests: no seed data, development error messages."""
    return Settings(seed_sample_tasks=False, environment="test", logfire_token=None)


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    """Application backed by its own empty store.

    The store clock ticks one second per timestamp so creation order is unambiguous.
    """
    return create_app(app_settings=test_settings, store=TaskStore(now=FakeClock(step=timedelta(seconds=1))))


@pytest.fixture
def api_store(app: FastAPI) -> TaskStore:
    """The store owned by ``app``."""
    return app.state.task_store


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """Test client running the app lifespan (broadcaster included)."""
    with TestClient(app) as test_client:
        yield test_client
