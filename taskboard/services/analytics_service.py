"""Analytics service for task statistics.

Key Concepts:
- Counts: every status and priority is present in the result, zero when unused.
- Overdue: a task with a due date in the past that is not completed. "Now" is
  taken once per call so every task is judged against the same instant.
"""

import logging
from collections.abc import Iterable
from datetime import datetime

from taskboard.core.logging import span
from taskboard.core.timestamps import try_parse_timestamp, utc_now
from taskboard.domain.task import Task, TaskPriority, TaskStatus
from taskboard.models.service_models import PriorityCounts, StatusCounts, TaskStats


logger = logging.getLogger(__name__)


def is_overdue(task: Task, now: datetime) -> bool:
    """Whether ``task`` has passed its due date without being completed."""
    if task.status == TaskStatus.COMPLETED:
        return False
    due = try_parse_timestamp(task.due_date)
    return due is not None and due < now


def compute_stats(tasks: Iterable[Task], *, now: datetime | None = None) -> TaskStats:
    """Aggregate counts by status, by priority and overdue in a single pass.

    Args:
        tasks: All live tasks
        now: Reference instant for overdue checks (defaults to current UTC time)

    Returns:
        TaskStats with zero-initialised counters
    """
    with span("analytics_service.compute_stats"):
        now = now or utc_now()
        by_status: dict[str, int] = dict.fromkeys(TaskStatus, 0)
        by_priority: dict[str, int] = dict.fromkeys(TaskPriority, 0)
        total = 0
        overdue = 0

        for task in tasks:
            total += 1
            by_status[task.status] += 1
            by_priority[task.priority] += 1
            if is_overdue(task, now):
                overdue += 1

        logger.debug("Computed stats over %d tasks (%d overdue)", total, overdue)

        return TaskStats(
            total=total,
            by_status=StatusCounts(**{str(status): count for status, count in by_status.items()}),
            by_priority=PriorityCounts(**{str(priority): count for priority, count in by_priority.items()}),
            overdue=overdue,
        )
