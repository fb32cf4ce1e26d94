"""Filtering and sorting projection of the task collection."""

from collections.abc import Iterable

from tasklist.domain.task import FilterOption, Task, TaskPriority, TaskStatus


PRIORITY_RANK: dict[TaskPriority, int] = {
    TaskPriority.HIGH: 1,
    TaskPriority.MEDIUM: 2,
    TaskPriority.LOW: 3,
}
UNSET_PRIORITY_RANK = 4

_PRIORITY_FILTERS: dict[FilterOption, TaskPriority] = {
    FilterOption.HIGH: TaskPriority.HIGH,
    FilterOption.MEDIUM: TaskPriority.MEDIUM,
    FilterOption.LOW: TaskPriority.LOW,
}

_STATUS_FILTERS: dict[FilterOption, TaskStatus] = {
    FilterOption.TODO: TaskStatus.TODO,
    FilterOption.IN_PROGRESS: TaskStatus.IN_PROGRESS,
    FilterOption.DONE: TaskStatus.DONE,
}


def priority_rank(task: Task) -> int:
    """Rank used by the priority sorts; unset priority ranks last."""
    if task.priority is None:
        return UNSET_PRIORITY_RANK
    return PRIORITY_RANK[task.priority]


def is_identity(filter_option: FilterOption | str) -> bool:
    """Whether the projection keeps the canonical collection order and membership."""
    return FilterOption(filter_option) == FilterOption.NONE


def apply_filter(tasks: Iterable[Task], filter_option: FilterOption | str) -> list[Task]:
    """Project the collection for display.

    Sorts are stable, so tasks that compare equal keep their canonical order.
    The input is never mutated.

    Args:
        tasks: Canonical task collection
        filter_option: Selector value

    Returns:
        New list with the projected tasks
    """
    option = FilterOption(filter_option)
    items = list(tasks)

    if option == FilterOption.LATEST_FIRST:
        return sorted(items, key=lambda task: task.created_at, reverse=True)
    if option == FilterOption.OLDEST_FIRST:
        return sorted(items, key=lambda task: task.created_at)
    if option == FilterOption.HIGH_LOW:
        return sorted(items, key=priority_rank)
    if option == FilterOption.LOW_HIGH:
        return sorted(items, key=priority_rank, reverse=True)
    if option in _PRIORITY_FILTERS:
        return [task for task in items if task.priority == _PRIORITY_FILTERS[option]]
    if option in _STATUS_FILTERS:
        return [task for task in items if task.status == _STATUS_FILTERS[option]]
    return items
