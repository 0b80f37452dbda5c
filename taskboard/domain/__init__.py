"""Domain models and DTOs."""

from taskboard.domain.create_models import TaskCreate
from taskboard.domain.query import ExportFormat, SortField, SortOrder, TaskQuery
from taskboard.domain.task import Task, TaskPriority, TaskStatus
from taskboard.domain.update_models import BulkDeleteRequest, BulkStatusUpdate, TaskUpdate


__all__ = [
    "BulkDeleteRequest",
    "BulkStatusUpdate",
    "ExportFormat",
    "SortField",
    "SortOrder",
    "Task",
    "TaskCreate",
    "TaskPriority",
    "TaskQuery",
    "TaskStatus",
    "TaskUpdate",
]
