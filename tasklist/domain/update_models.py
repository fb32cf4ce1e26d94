"""Update models for task list intents."""

from pydantic import BaseModel, Field, field_validator

from tasklist.domain.task import FilterOption, TaskPriority, TaskStatus


class TaskTextUpdate(BaseModel):
    """Update payload for a task description."""

    task: str

    @field_validator("task")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject blank descriptions."""
        if not v.strip():
            msg = "Task description must not be blank"
            raise ValueError(msg)
        return v.strip()


class TaskStatusUpdate(BaseModel):
    """Update payload for task status."""

    status: TaskStatus


class TaskPriorityUpdate(BaseModel):
    """Update payload for task priority (null unsets it)."""

    priority: TaskPriority | None = None


class FilterUpdate(BaseModel):
    """Update payload for the filter selection."""

    filter: FilterOption = FilterOption.NONE


class ReorderRequest(BaseModel):
    """Drag-and-drop result against the displayed list."""

    source_index: int = Field(..., ge=0)
    destination_index: int | None = Field(default=None, ge=0)


class AuthUpdate(BaseModel):
    """Auth provider payload."""

    is_authenticated: bool
    city: str | None = None
