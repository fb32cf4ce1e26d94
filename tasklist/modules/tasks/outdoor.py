"""Heuristic detection of tasks that happen outdoors."""

from collections.abc import Iterable

from tasklist.domain.task import Task


# Plain substring match, so "go" also matches "good"
OUTDOOR_KEYWORDS: tuple[str, ...] = (
    "swim",
    "walk",
    "run",
    "office",
    "school",
    "college",
    "shopping",
    "market",
    "meet",
    "go",
    "drive",
    "gym",
    "attend",
)


def is_outdoor_task(task: Task) -> bool:
    """Return True if the task description contains an outdoor keyword."""
    text = task.task.lower()
    return any(keyword in text for keyword in OUTDOOR_KEYWORDS)


def has_outdoor_task(tasks: Iterable[Task]) -> bool:
    """Return True if at least one task is outdoor."""
    return any(is_outdoor_task(task) for task in tasks)


def should_fetch_weather(tasks: Iterable[Task], city: str | None) -> bool:
    """Weather is only worth fetching when an outdoor task exists and the city is known."""
    return bool(city) and has_outdoor_task(tasks)
