"""In-memory task store with CRUD and bulk operations.

Tasks live in a dict keyed by id, giving O(1) lookups. Every record handed
out is a deep copy, and incoming data is copied before it is stored, so
callers can never mutate stored state.

Lookups on unknown ids return ``None`` (or ``False`` for deletes) instead of
raising; the HTTP layer decides how to report them.
"""

import logging
import threading
import uuid
from collections.abc import Callable, Iterable, Mapping
from datetime import datetime, timedelta
from typing import Any

from taskboard.core.timestamps import to_iso, utc_now
from taskboard.domain.task import MUTABLE_FIELDS, Task, TaskPriority, TaskStatus
from taskboard.models.service_models import BulkDeleteResult, BulkUpdateResult


logger = logging.getLogger(__name__)


class TaskStore:
    """Volatile, single-process task storage.

    All operations hold a re-entrant lock across their read-modify-write
    sequence so the store stays consistent when used from worker threads.
    """

    def __init__(self, *, now: Callable[[], datetime] = utc_now) -> None:
        """Initialize an empty store.

        Args:
            now: Clock returning an aware datetime, used for timestamps
        """
        self._tasks: dict[str, Task] = {}
        self._lock = threading.RLock()
        self._now = now

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        with self._lock:
            return task_id in self._tasks

    def _timestamp(self) -> str:
        return to_iso(self._now())

    def create(self, data: Mapping[str, Any]) -> Task:
        """Create a task with a fresh id, defaults and timestamps.

        No validation happens here. Empty optional values fall back to their defaults.

        Args:
            data: Field bag keyed by store field name (title, description, status, ...)

        Returns:
            Copy of the created task
        """
        with self._lock:
            now = self._timestamp()
            task = Task(
                id=str(uuid.uuid4()),
                title=data.get("title") or "",
                description=data.get("description") or "",
                status=data.get("status") or TaskStatus.TODO,
                priority=data.get("priority") or TaskPriority.MEDIUM,
                due_date=data.get("due_date") or None,
                tags=list(data.get("tags") or []),
                created_at=now,
                updated_at=now,
            )
            self._tasks[task.id] = task
            logger.debug("Stored task %s", task.id)
            return task.model_copy(deep=True)

    def find_by_id(self, task_id: str) -> Task | None:
        """Return a copy of the task, or None if it does not exist."""
        with self._lock:
            task = self._tasks.get(task_id)
            return task.model_copy(deep=True) if task else None

    def all(self) -> list[Task]:
        """Return copies of every live task in insertion order."""
        with self._lock:
            return [task.model_copy(deep=True) for task in self._tasks.values()]

    def update(self, task_id: str, patch: Mapping[str, Any]) -> Task | None:
        """Overwrite the mutable fields present in ``patch``.

        Keys outside the mutable field set are ignored. ``updated_at`` is
        re-stamped even when no value changes.

        Returns:
            Copy of the updated task, or None if the task does not exist
        """
        with self._lock:
            current = self._tasks.get(task_id)
            if current is None:
                return None

            changes = {field: patch[field] for field in MUTABLE_FIELDS if field in patch}
            if "tags" in changes:
                changes["tags"] = list(changes["tags"])

            updated = Task.model_validate(
                {**current.model_dump(), **changes, "updated_at": self._timestamp()},
            )
            self._tasks[task_id] = updated
            return updated.model_copy(deep=True)

    def delete(self, task_id: str) -> bool:
        """Delete a task. Returns True if deleted, False if not found."""
        with self._lock:
            return self._tasks.pop(task_id, None) is not None

    def clear(self) -> None:
        """Remove all tasks. Useful for testing."""
        with self._lock:
            self._tasks.clear()

    def bulk_delete(self, ids: Iterable[str]) -> BulkDeleteResult:
        """Delete each id independently, in input order.

        Not transactional: ids that exist are removed even when others are unknown.
        A repeated id is deleted once and reported as not found afterwards.
        """
        result = BulkDeleteResult()
        with self._lock:
            for task_id in ids:
                if self._tasks.pop(task_id, None) is not None:
                    result.deleted.append(task_id)
                else:
                    result.not_found.append(task_id)
        result.deleted_count = len(result.deleted)
        return result

    def bulk_update_status(self, ids: Iterable[str], status: TaskStatus) -> BulkUpdateResult:
        """Set ``status`` on each existing id, re-stamping ``updated_at`` per task.

        A repeated id is updated and counted once per occurrence.
        """
        result = BulkUpdateResult()
        with self._lock:
            for task_id in ids:
                updated = self.update(task_id, {"status": status})
                if updated is None:
                    result.not_found.append(task_id)
                else:
                    result.updated.append(updated)
        result.updated_count = len(result.updated)
        return result

    def seed_sample_tasks(self) -> list[Task]:
        """Populate the store with demonstration tasks."""
        now = self._now()
        samples = [
            {
                "title": "Set up project structure",
                "description": "Initialize the repository layout for the API and frontend",
                "status": TaskStatus.COMPLETED,
                "priority": TaskPriority.HIGH,
                "tags": ["setup", "infrastructure"],
                "due_date": to_iso(now - timedelta(days=1)),
            },
            {
                "title": "Implement REST API",
                "description": "Build all CRUD endpoints with proper validation",
                "status": TaskStatus.IN_PROGRESS,
                "priority": TaskPriority.HIGH,
                "tags": ["backend", "api"],
                "due_date": to_iso(now + timedelta(days=1)),
            },
            {
                "title": "Design dashboard UI",
                "description": "Create mockups for the task management dashboard",
                "status": TaskStatus.TODO,
                "priority": TaskPriority.MEDIUM,
                "tags": ["frontend", "design"],
                "due_date": to_iso(now + timedelta(days=2)),
            },
            {
                "title": "Write unit tests",
                "description": "Add comprehensive test coverage for critical paths",
                "status": TaskStatus.TODO,
                "priority": TaskPriority.LOW,
                "tags": ["testing"],
                "due_date": None,
            },
        ]
        created = [self.create(sample) for sample in samples]
        logger.info("Seeded %d sample tasks", len(created))
        return created
