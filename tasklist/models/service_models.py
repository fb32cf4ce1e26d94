"""Pydantic models for service layer return types.

These models describe what the task list view hands to its renderer.
"""

from pydantic import BaseModel, Field

from tasklist.domain.notice import Notice
from tasklist.domain.task import FilterOption, Task
from tasklist.domain.weather import WeatherReport


class WeatherPanel(BaseModel):
    """Weather block shown next to outdoor tasks."""

    weather: WeatherReport | None = None
    error: str | None = Field(default=None, description="Fixed user-facing message, never the raw upstream error")


class TaskListSnapshot(BaseModel):
    """Everything needed to render the task list."""

    tasks: list[Task]
    filter: FilterOption
    editing_id: str | None = None
    is_authenticated: bool = False
    show_bulk_actions: bool = False
    reorder_enabled: bool = True
    outdoor_task_detected: bool = False
    weather: WeatherPanel | None = None
    notices: list[Notice] = Field(default_factory=list)
