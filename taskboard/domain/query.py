"""Query models for listing tasks (filter, sort, paginate)."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from taskboard.core.config import Constants
from taskboard.domain.task import TaskPriority, TaskStatus


class SortField(StrEnum):
    """Task fields a listing may be sorted by."""

    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"
    DUE_DATE = "dueDate"
    TITLE = "title"
    PRIORITY = "priority"
    STATUS = "status"


class SortOrder(StrEnum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


class TaskQuery(BaseModel):
    """Filter, sort and page specification for the query engine.

    All filters are optional and combined with AND; tag matching is OR within itself.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    tags: str | list[str] | None = Field(default=None, description="Comma-separated string or list of tags")
    due_date_from: str | None = Field(default=None, description="Inclusive lower bound for dueDate")
    due_date_to: str | None = Field(default=None, description="Inclusive upper bound for dueDate")
    search: str | None = Field(default=None, description="Case-insensitive text in title or description")
    sort_by: SortField = SortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC
    page: int = Field(default=Constants.DEFAULT_PAGE, ge=1)
    limit: int = Field(default=Constants.DEFAULT_PAGE_LIMIT, ge=1)


class ExportFormat(StrEnum):
    """Formats supported by the export endpoint."""

    JSON = "json"
    CSV = "csv"
