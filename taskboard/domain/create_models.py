"""Pydantic models for creating tasks through the API."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from taskboard.core.config import Constants
from taskboard.core.timestamps import parse_timestamp
from taskboard.domain.task import TaskPriority, TaskStatus


def validate_title(v: str) -> str:
    """Trim the title and check it is non-empty and within the length limit."""
    v = v.strip()
    if not v:
        msg = "Title is required"
        raise ValueError(msg)
    if len(v) > Constants.TITLE_MAX_LENGTH:
        msg = f"Title must be {Constants.TITLE_MAX_LENGTH} characters or less"
        raise ValueError(msg)
    return v


def validate_description(v: str) -> str:
    """Trim the description and check its length."""
    v = v.strip()
    if len(v) > Constants.DESCRIPTION_MAX_LENGTH:
        msg = f"Description must be {Constants.DESCRIPTION_MAX_LENGTH} characters or less"
        raise ValueError(msg)
    return v


def validate_due_date(v: str | None) -> str | None:
    """Accept null, empty (stored as null) or an ISO-8601 timestamp."""
    if v is None or v == "":
        return None
    try:
        parse_timestamp(v)
    except ValueError as e:
        msg = "Invalid date format. Use ISO 8601 format."
        raise ValueError(msg) from e
    return v


def validate_tags(v: list[str]) -> list[str]:
    """Check the number of tags."""
    if len(v) > Constants.MAX_TAGS:
        msg = f"Maximum {Constants.MAX_TAGS} tags allowed"
        raise ValueError(msg)
    return v


class TaskCreate(BaseModel):
    """Request body for creating a task."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str = Field(..., description="Task title")
    description: str | None = Field(default=None, description="Detailed task description")
    status: TaskStatus | None = Field(default=None, description="Initial status (defaults to todo)")
    priority: TaskPriority | None = Field(default=None, description="Priority (defaults to medium)")
    due_date: str | None = Field(default=None, description="Due date (ISO format)")
    tags: list[str] | None = Field(default=None, description="Free-form labels")

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str) -> str:
        """Validate the title."""
        return validate_title(v)

    @field_validator("description")
    @classmethod
    def check_description(cls, v: str | None) -> str | None:
        """Validate the description if provided."""
        return None if v is None else validate_description(v)

    @field_validator("due_date")
    @classmethod
    def check_due_date(cls, v: str | None) -> str | None:
        """Validate the due date if provided."""
        return validate_due_date(v)

    @field_validator("tags")
    @classmethod
    def check_tags(cls, v: list[str] | None) -> list[str] | None:
        """Validate tags if provided."""
        return None if v is None else validate_tags(v)
