"""Task service for CRUD, bulk operations, statistics and export.

Every function takes the store (and, for mutations, the event bus)
explicitly. Events are published only after the store has applied a
mutation; unknown ids return None/False and publish nothing.
"""

import logging
from collections.abc import Sequence
from typing import Any

from taskboard.core.config import Constants
from taskboard.core.events import EventBus, TaskEvent, TaskEventType
from taskboard.core.logging import log_with_context, span
from taskboard.core.task_store import TaskStore
from taskboard.domain.query import TaskQuery
from taskboard.domain.task import Task, TaskStatus
from taskboard.models.service_models import BulkDeleteResult, BulkUpdateResult, TaskExport, TaskPage, TaskStats
from taskboard.services import analytics_service, export_service, query_service


logger = logging.getLogger(__name__)


def list_tasks(*, store: TaskStore, query: TaskQuery) -> TaskPage:
    """List tasks matching ``query``.

    Args:
        store: Task store
        query: Filter, sort and page specification

    Returns:
        One page of tasks with pagination metadata
    """
    with span("task_service.list_tasks"):
        return query_service.query_tasks(store.all(), query)


def get_task(*, store: TaskStore, task_id: str) -> Task | None:
    """Get a task by ID, or None if it does not exist."""
    return store.find_by_id(task_id)


def create_task(*, store: TaskStore, events: EventBus, data: dict[str, Any]) -> Task:
    """Create a task and announce it.

    Args:
        store: Task store
        events: Event bus notified after the task is stored
        data: Field bag keyed by store field name

    Returns:
        Created task
    """
    with span("task_service.create_task"):
        task = store.create(data)
        logger.info("Created task: %s (%s)", task.id, task.title)
        events.publish(TaskEvent(type=TaskEventType.CREATED, data=task.to_wire()))
        return task


def update_task(*, store: TaskStore, events: EventBus, task_id: str, patch: dict[str, Any]) -> Task | None:
    """Apply a partial update and announce it.

    Returns:
        Updated task, or None if the task does not exist
    """
    with span("task_service.update_task"):
        task = store.update(task_id, patch)
        if task is None:
            logger.info("Update skipped, task not found: %s", task_id)
            return None

        logger.info("Updated task: %s (fields: %s)", task_id, ", ".join(sorted(patch)) or "none")
        events.publish(TaskEvent(type=TaskEventType.UPDATED, data=task.to_wire()))
        return task


def delete_task(*, store: TaskStore, events: EventBus, task_id: str) -> bool:
    """Delete a task and announce it. Returns False if it did not exist."""
    with span("task_service.delete_task"):
        deleted = store.delete(task_id)
        if not deleted:
            logger.info("Delete skipped, task not found: %s", task_id)
            return False

        logger.info("Deleted task: %s", task_id)
        events.publish(TaskEvent(type=TaskEventType.DELETED, data={"id": task_id}))
        return True


def bulk_delete_tasks(*, store: TaskStore, events: EventBus, ids: Sequence[str]) -> BulkDeleteResult:
    """Delete several tasks, reporting which ids were unknown."""
    with span("task_service.bulk_delete_tasks"):
        result = store.bulk_delete(ids)
        log_with_context(
            logger,
            "info",
            "Bulk deleted tasks",
            deleted_count=result.deleted_count,
            not_found_count=len(result.not_found),
        )
        events.publish(TaskEvent(type=TaskEventType.BULK_DELETED, data={"ids": list(result.deleted)}))
        return result


def bulk_update_status(
    *,
    store: TaskStore,
    events: EventBus,
    ids: Sequence[str],
    status: TaskStatus,
) -> BulkUpdateResult:
    """Set the status of several tasks, reporting which ids were unknown."""
    with span("task_service.bulk_update_status"):
        result = store.bulk_update_status(ids, status)
        logger.info(
            "Bulk updated %d tasks to %s (%d not found)",
            result.updated_count,
            status,
            len(result.not_found),
        )
        events.publish(
            TaskEvent(
                type=TaskEventType.BULK_UPDATED,
                data={"tasks": [task.to_wire() for task in result.updated]},
            )
        )
        return result


def get_stats(*, store: TaskStore) -> TaskStats:
    """Compute statistics over all live tasks."""
    return analytics_service.compute_stats(store.all())


def collect_export_tasks(*, store: TaskStore) -> list[Task]:
    """All tasks for export, newest first, capped at the export limit."""
    page = query_service.query_tasks(store.all(), TaskQuery(limit=Constants.EXPORT_MAX_TASKS))
    return page.tasks


def export_tasks_json(*, store: TaskStore) -> TaskExport:
    """Export all tasks as a JSON payload."""
    with span("task_service.export_tasks_json"):
        tasks = collect_export_tasks(store=store)
        logger.info("Exporting %d tasks as JSON", len(tasks))
        return export_service.export_json(tasks)


def export_tasks_csv(*, store: TaskStore) -> str:
    """Export all tasks as CSV text."""
    with span("task_service.export_tasks_csv"):
        tasks = collect_export_tasks(store=store)
        logger.info("Exporting %d tasks as CSV", len(tasks))
        return export_service.export_csv(tasks)
