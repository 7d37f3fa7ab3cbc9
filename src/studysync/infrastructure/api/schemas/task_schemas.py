"""Pydantic schemas for task operations."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from studysync.domain.entities import TaskStatus
from studysync.infrastructure.api.schemas.group_schemas import UserSummary


class TaskCreate(BaseModel):
    """Schema for creating a task."""

    title: str = Field(..., min_length=3, max_length=255, description="Task title")
    description: str | None = Field(None, description="Task description")
    due_date: datetime | None = Field(None, description="Due date (ISO 8601)")
    assigned_to: str | None = Field(None, description="ID of the member to assign")
    status: TaskStatus = Field(TaskStatus.PENDING, description="Task status")

    model_config = ConfigDict(str_strip_whitespace=True)


class TaskUpdate(BaseModel):
    """Schema for updating a task.

    Only fields sent in the request body are applied; ``assigned_to: null``
    clears the assignee.
    """

    title: str | None = Field(None, max_length=255, description="Task title")
    description: str | None = Field(None, description="Task description")
    due_date: datetime | None = Field(None, description="Due date (ISO 8601)")
    assigned_to: str | None = Field(None, description="ID of the member to assign")
    status: TaskStatus | None = Field(None, description="Task status")

    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str | None) -> str | None:
        if value and len(value) < 3:
            raise ValueError("Task title must be at least 3 characters")
        return value


class TaskResponse(BaseModel):
    """Schema for task response."""

    id: str = Field(..., description="Task ID")
    title: str
    description: str | None = None
    due_date: datetime | None = None
    status: TaskStatus
    group_id: str = Field(..., description="Owning group ID")
    created_by: UserSummary = Field(
        ..., validation_alias=AliasChoices("created_by", "creator")
    )
    assigned_to: UserSummary | None = Field(
        None, validation_alias=AliasChoices("assigned_to", "assignee")
    )
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)
