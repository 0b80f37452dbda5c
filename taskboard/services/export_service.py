"""Export service rendering tasks as JSON or CSV."""

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime

from taskboard.core.config import Constants
from taskboard.core.timestamps import to_iso, utc_now
from taskboard.domain.task import Task
from taskboard.models.service_models import TaskExport


logger = logging.getLogger(__name__)

CSV_HEADERS: tuple[str, ...] = (
    "id",
    "title",
    "description",
    "status",
    "priority",
    "dueDate",
    "tags",
    "createdAt",
    "updatedAt",
)


def quote_csv(value: str) -> str:
    """Wrap a value in double quotes, doubling embedded quotes."""
    return '"' + value.replace('"', '""') + '"'


def task_to_csv_row(task: Task) -> str:
    """Render one task as a CSV line (columns follow CSV_HEADERS)."""
    row = [
        task.id,
        quote_csv(task.title or ""),
        quote_csv(task.description or ""),
        task.status.value,
        task.priority.value,
        task.due_date or "",
        quote_csv(Constants.EXPORT_TAG_SEPARATOR.join(task.tags)),
        task.created_at,
        task.updated_at,
    ]
    return ",".join(row)


def export_csv(tasks: Iterable[Task]) -> str:
    """Render tasks as CSV text with a header line.

    Free-text columns (title, description, tags) are always quoted. Tags are
    joined with ``;`` so they never collide with the column delimiter.
    """
    lines = [",".join(CSV_HEADERS)]
    lines.extend(task_to_csv_row(task) for task in tasks)
    logger.debug("Rendered %d tasks as CSV", len(lines) - 1)
    return "\n".join(lines)


def export_json(tasks: Sequence[Task], *, exported_at: datetime | None = None) -> TaskExport:
    """Build the JSON export payload."""
    return TaskExport(
        exported_at=to_iso(exported_at or utc_now()),
        count=len(tasks),
        tasks=list(tasks),
    )
