"""Pydantic models for creating tasks through the HTTP surface."""

from pydantic import BaseModel, Field, field_validator


class TaskCreate(BaseModel):
    """Payload for adding a task."""

    task: str = Field(..., description="Task description")

    @field_validator("task")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject blank descriptions."""
        if not v.strip():
            msg = "Task description must not be blank"
            raise ValueError(msg)
        return v.strip()
