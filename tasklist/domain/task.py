"""Task domain models and enums."""

from datetime import UTC, datetime
from enum import StrEnum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


class TaskStatus(StrEnum):
    """Task lifecycle status."""

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"


class TaskPriority(StrEnum):
    """Priority levels a user can assign to a task."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class FilterOption(StrEnum):
    """Selector deciding how the task collection is projected for display."""

    NONE = ""
    LATEST_FIRST = "latest-first"
    OLDEST_FIRST = "oldest-first"
    HIGH_LOW = "high-low"
    LOW_HIGH = "low-high"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"


def _new_task_id() -> str:
    return uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Task(BaseModel):
    """Task data transfer object.

    `status` is the only stored completion field; `is_done` is derived from it
    and serialized as `isDone` so snapshots keep their camelCase shape.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str = Field(default_factory=_new_task_id, description="Unique task ID, immutable after creation")
    task: str = Field(..., description="Free-text task description")
    status: TaskStatus = Field(default=TaskStatus.TODO, description="Current lifecycle status")
    priority: TaskPriority | None = Field(default=None, description="Priority level, unset by default")
    created_at: datetime = Field(default_factory=_utcnow, description="Creation timestamp")

    @computed_field(alias="isDone")  # type: ignore[prop-decorator]
    @property
    def is_done(self) -> bool:
        """Whether the task is completed."""
        return self.status == TaskStatus.DONE


class SnapshotEntry(BaseModel):
    """One entry of a stored task snapshot; only the description is trusted on reload."""

    model_config = ConfigDict(extra="ignore")

    task: str
