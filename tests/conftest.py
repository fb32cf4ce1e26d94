"""Pytest configuration and shared fixtures."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import pytest

from tasklist.domain.task import Task, TaskPriority, TaskStatus


BASE_TIME = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)


@pytest.fixture
def task_factory() -> Callable[..., Task]:
    """Factory for tasks with deterministic creation times.

    Usage:
        task = task_factory("walk the dog", priority=TaskPriority.HIGH, minutes=5)
    """

    def _create_task(
        text: str,
        *,
        status: TaskStatus = TaskStatus.TODO,
        priority: TaskPriority | None = None,
        minutes: int = 0,
    ) -> Task:
        return Task(
            task=text,
            status=status,
            priority=priority,
            created_at=BASE_TIME + timedelta(minutes=minutes),
        )

    return _create_task


@pytest.fixture
def sample_openweather_payload() -> dict:
    """Returns a trimmed OpenWeatherMap `/weather` response body."""
    return {
        "name": "London",
        "weather": [{"main": "Rain", "description": "light rain", "icon": "10d"}],
        "main": {"temp": 12.5, "feels_like": 11.2, "humidity": 81},
        "wind": {"speed": 4.1},
    }
