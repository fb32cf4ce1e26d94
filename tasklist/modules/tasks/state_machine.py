"""Pure state transition functions for the task collection.

Every function takes the current collection and returns a new tuple; inputs
are never mutated. Tasks are frozen models, so updates go through
`model_copy`.
"""

from collections.abc import Sequence
from typing import Any

from tasklist.core.errors import TaskNotFoundError
from tasklist.domain.task import Task, TaskPriority, TaskStatus


TaskCollection = tuple[Task, ...]


def _index_of(tasks: Sequence[Task], task_id: str) -> int:
    for index, task in enumerate(tasks):
        if task.id == task_id:
            return index
    raise TaskNotFoundError(task_id)


def _replace(tasks: Sequence[Task], *, task_id: str, update: dict[str, Any]) -> TaskCollection:
    index = _index_of(tasks, task_id)
    updated = tasks[index].model_copy(update=update)
    return (*tasks[:index], updated, *tasks[index + 1 :])


def add_task(tasks: Sequence[Task], *, text: str) -> tuple[TaskCollection, Task]:
    """Append a new task with default status and unset priority."""
    if not text.strip():
        msg = "Task description must not be blank"
        raise ValueError(msg)
    task = Task(task=text.strip())
    return (*tasks, task), task


def remove_task(tasks: Sequence[Task], *, task_id: str) -> TaskCollection:
    """Remove a task by id."""
    index = _index_of(tasks, task_id)
    return (*tasks[:index], *tasks[index + 1 :])


def clear_tasks(tasks: Sequence[Task]) -> TaskCollection:  # noqa: ARG001
    """Remove every task."""
    return ()


def update_text(tasks: Sequence[Task], *, task_id: str, text: str) -> TaskCollection:
    """Replace a task's description."""
    if not text.strip():
        msg = "Task description must not be blank"
        raise ValueError(msg)
    return _replace(tasks, task_id=task_id, update={"task": text.strip()})


def set_status(tasks: Sequence[Task], *, task_id: str, status: TaskStatus) -> TaskCollection:
    """Set a task's status; completion follows from it."""
    return _replace(tasks, task_id=task_id, update={"status": TaskStatus(status)})


def set_priority(tasks: Sequence[Task], *, task_id: str, priority: TaskPriority | None) -> TaskCollection:
    """Set or unset a task's priority."""
    value = TaskPriority(priority) if priority is not None else None
    return _replace(tasks, task_id=task_id, update={"priority": value})


def toggle_done(tasks: Sequence[Task], *, task_id: str) -> TaskCollection:
    """Toggle completion: a done task goes back to todo, anything else becomes done."""
    task = tasks[_index_of(tasks, task_id)]
    status = TaskStatus.TODO if task.is_done else TaskStatus.DONE
    return _replace(tasks, task_id=task_id, update={"status": status})


def mark_all_done(tasks: Sequence[Task]) -> TaskCollection:
    """Mark every task as done."""
    return tuple(task.model_copy(update={"status": TaskStatus.DONE}) for task in tasks)


def reorder(tasks: Sequence[Task], *, ordered: Sequence[Task]) -> TaskCollection:
    """Replace the collection order with `ordered`.

    Raises:
        ValueError: If `ordered` is not a permutation of the current task ids
    """
    current_ids = [task.id for task in tasks]
    ordered_ids = [task.id for task in ordered]
    if len(set(ordered_ids)) != len(ordered_ids) or sorted(current_ids) != sorted(ordered_ids):
        msg = "Reordered tasks must contain exactly the current tasks"
        raise ValueError(msg)
    by_id = {task.id: task for task in tasks}
    return tuple(by_id[task_id] for task_id in ordered_ids)


def move(tasks: Sequence[Task], *, source_index: int, destination_index: int) -> list[Task]:
    """Remove the item at `source_index` and insert it at `destination_index`.

    Raises:
        IndexError: If either index is outside the list
    """
    size = len(tasks)
    if not 0 <= source_index < size:
        msg = f"Source index {source_index} out of range for {size} tasks"
        raise IndexError(msg)
    if not 0 <= destination_index < size:
        msg = f"Destination index {destination_index} out of range for {size} tasks"
        raise IndexError(msg)
    reordered = list(tasks)
    moved = reordered.pop(source_index)
    reordered.insert(destination_index, moved)
    return reordered
