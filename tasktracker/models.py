"""Pydantic models for the task tracker.

Records are persisted with camelCase keys (``dueDate``, ``createdAt`` ...)
while Python code uses the snake_case field names.
"""

from datetime import date, datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from tasktracker.constants import MotivationTier, Priority
from tasktracker.validator import (
    describe_error,
    validate_date,
    validate_description,
    validate_priority,
    validate_tag,
)

# Fields an update may explicitly reset to "absent".
_CLEARABLE_FIELDS = frozenset({"due_date", "tag", "completed_at"})


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Task(_CamelModel):
    """A single to-do record as stored in the collection."""

    model_config = ConfigDict(extra="allow")

    id: int = Field(..., description="Unique identifier, ordered by creation")
    description: str = Field(..., description="What needs to be done")
    completed: bool = Field(default=False, description="Whether the task is done")
    priority: Priority = Field(default=Priority.MEDIUM, description="high, medium or low")
    due_date: date | None = Field(default=None, description="Optional due date")
    tag: str | None = Field(default=None, description="Optional lowercase label")
    created_at: datetime | None = Field(default=None, description="When the task was created")
    updated_at: datetime | None = Field(default=None, description="When the task last changed")
    completed_at: datetime | None = Field(default=None, description="When the task was completed")

    @field_validator("priority", mode="before")
    @classmethod
    def _default_priority(cls, value: Any) -> Any:
        return value or Priority.MEDIUM

    def to_record(self) -> dict[str, Any]:
        """Serialize for JSON storage, omitting absent fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TaskCreate(BaseModel):
    """Validated input for creating a task."""

    description: Annotated[str, BeforeValidator(validate_description)]
    priority: Annotated[Priority, BeforeValidator(validate_priority)] = Priority.MEDIUM
    due_date: Annotated[date | None, BeforeValidator(validate_date)] = None
    tag: Annotated[str | None, BeforeValidator(validate_tag)] = None

    @classmethod
    def parse(cls, **fields: Any) -> "TaskCreate":
        """Build from raw input, raising the tracker's ``ValidationError``."""
        try:
            return cls(**fields)
        except PydanticValidationError as exc:
            raise describe_error(exc) from exc


class TaskUpdate(BaseModel):
    """Partial changes to apply to an existing task."""

    description: str | None = None
    priority: Priority | None = None
    due_date: date | None = None
    tag: str | None = None
    completed: bool | None = None
    completed_at: datetime | None = None

    @field_validator("description", mode="before")
    @classmethod
    def _check_description(cls, value: Any) -> Any:
        return None if value is None else validate_description(value)

    @field_validator("priority", mode="before")
    @classmethod
    def _check_priority(cls, value: Any) -> Any:
        return None if value is None else validate_priority(value)

    @field_validator("due_date", mode="before")
    @classmethod
    def _check_due_date(cls, value: Any) -> Any:
        return validate_date(value)

    @field_validator("tag", mode="before")
    @classmethod
    def _check_tag(cls, value: Any) -> Any:
        return validate_tag(value)

    @classmethod
    def parse(cls, **fields: Any) -> "TaskUpdate":
        """Build from raw input, raising the tracker's ``ValidationError``."""
        try:
            return cls(**fields)
        except PydanticValidationError as exc:
            raise describe_error(exc) from exc

    def changes(self) -> dict[str, Any]:
        """Return the explicitly set fields that should be merged onto a task."""
        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None or key in _CLEARABLE_FIELDS
        }


class UpdateResult(BaseModel):
    """A task before and after a mutation."""

    old: Task
    updated: Task


class ClearResult(BaseModel):
    """Outcome of clearing completed tasks."""

    cleared: int
    remaining: int


class ImportResult(BaseModel):
    """Outcome of merging imported tasks into the collection."""

    imported: int
    total: int


class Stats(_CamelModel):
    """Completion statistics for the whole collection."""

    total: int = Field(..., description="Number of tasks")
    completed: int = Field(..., description="Number of completed tasks")
    pending: int = Field(..., description="Number of pending tasks")
    percentage: int = Field(..., description="Completed share, rounded half up")
    tier: MotivationTier = Field(..., description="Progress tier for the percentage")
    motivational_message: str = Field(..., description="Message for the tier")
