"""Pydantic models for service layer return types.

These models give the store, query engine and aggregators typed results.
They serialize with camelCase keys so the HTTP layer can return them as-is.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from taskboard.domain.task import Task


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        """Serialize with camelCase keys and JSON-compatible values."""
        return self.model_dump(by_alias=True, mode="json")


class Pagination(CamelModel):
    """Pagination metadata for a task listing."""

    page: int
    limit: int
    total_count: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool


class TaskPage(CamelModel):
    """One page of a filtered, sorted task listing."""

    tasks: list[Task]
    pagination: Pagination


class BulkDeleteResult(CamelModel):
    """Outcome of a bulk delete, partitioned into deleted and unknown ids."""

    deleted: list[str] = Field(default_factory=list)
    not_found: list[str] = Field(default_factory=list)
    deleted_count: int = 0


class BulkUpdateResult(CamelModel):
    """Outcome of a bulk status update."""

    updated: list[Task] = Field(default_factory=list)
    not_found: list[str] = Field(default_factory=list)
    updated_count: int = 0


class StatusCounts(BaseModel):
    """Task count per status (keys match the status values)."""

    todo: int = 0
    in_progress: int = 0
    completed: int = 0


class PriorityCounts(BaseModel):
    """Task count per priority."""

    low: int = 0
    medium: int = 0
    high: int = 0


class TaskStats(CamelModel):
    """Aggregate statistics over all live tasks."""

    total: int
    by_status: StatusCounts
    by_priority: PriorityCounts
    overdue: int


class TaskExport(CamelModel):
    """JSON export payload."""

    exported_at: str
    count: int
    tasks: list[Task]
