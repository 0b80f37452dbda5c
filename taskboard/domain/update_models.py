"""Update models for task API operations."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from taskboard.core.config import Constants
from taskboard.domain.create_models import validate_description, validate_due_date, validate_tags, validate_title
from taskboard.domain.task import TaskPriority, TaskStatus


class TaskUpdate(BaseModel):
    """Partial update payload; only fields sent by the client are applied."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str | None = None
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: str | None = None
    tags: list[str] | None = None

    @field_validator("title", "description", "status", "priority", "tags", mode="before")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        """Only dueDate may be cleared with null."""
        if v is None:
            msg = "Field cannot be null"
            raise ValueError(msg)
        return v

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str) -> str:
        """Validate the title if provided."""
        return validate_title(v)

    @field_validator("description")
    @classmethod
    def check_description(cls, v: str) -> str:
        """Validate the description if provided."""
        return validate_description(v)

    @field_validator("due_date")
    @classmethod
    def check_due_date(cls, v: str | None) -> str | None:
        """Validate the due date if provided."""
        return validate_due_date(v)

    @field_validator("tags")
    @classmethod
    def check_tags(cls, v: list[str]) -> list[str]:
        """Validate tags if provided."""
        return validate_tags(v)

    def to_patch(self) -> dict[str, Any]:
        """Fields explicitly sent by the client, keyed by store field name."""
        return self.model_dump(exclude_unset=True)


class BulkDeleteRequest(BaseModel):
    """Request body for deleting several tasks."""

    ids: list[UUID] = Field(..., min_length=1, max_length=Constants.BULK_MAX_IDS)


class BulkStatusUpdate(BaseModel):
    """Request body for setting the status of several tasks."""

    ids: list[UUID] = Field(..., min_length=1, max_length=Constants.BULK_MAX_IDS)
    status: TaskStatus
