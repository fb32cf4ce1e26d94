"""Domain models and DTOs."""

from tasklist.domain.auth import AuthState
from tasklist.domain.create_models import TaskCreate
from tasklist.domain.notice import Notice, NoticeLevel
from tasklist.domain.task import FilterOption, SnapshotEntry, Task, TaskPriority, TaskStatus
from tasklist.domain.update_models import (
    AuthUpdate,
    FilterUpdate,
    ReorderRequest,
    TaskPriorityUpdate,
    TaskStatusUpdate,
    TaskTextUpdate,
)
from tasklist.domain.weather import WeatherReport, WeatherState


__all__ = [
    "AuthState",
    "AuthUpdate",
    "FilterOption",
    "FilterUpdate",
    "Notice",
    "NoticeLevel",
    "ReorderRequest",
    "SnapshotEntry",
    "Task",
    "TaskCreate",
    "TaskPriority",
    "TaskPriorityUpdate",
    "TaskStatus",
    "TaskStatusUpdate",
    "TaskTextUpdate",
    "WeatherReport",
    "WeatherState",
]
