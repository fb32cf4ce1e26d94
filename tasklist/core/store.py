"""Unidirectional state container for the task list.

The store is the single source of truth for the task collection, the filter
selection, the auth slice and the weather slice. State objects are frozen;
every mutation builds a new `AppState`, commits it and notifies subscribers
with the previous and the new state. Slices a mutation does not touch keep
their identity, so subscribers can detect changes with `is`.
"""

import logging
from collections.abc import Callable, Sequence

from pydantic import BaseModel, ConfigDict

from tasklist.core.errors import TaskNotFoundError
from tasklist.domain.auth import AuthState
from tasklist.domain.task import FilterOption, Task, TaskPriority, TaskStatus
from tasklist.domain.weather import WeatherReport, WeatherState
from tasklist.modules.tasks import state_machine


logger = logging.getLogger(__name__)


class TodoState(BaseModel):
    """Task slice of the application state."""

    model_config = ConfigDict(frozen=True)

    todos: tuple[Task, ...] = ()
    filter_option: FilterOption = FilterOption.NONE
    editing_id: str | None = None


class AppState(BaseModel):
    """Whole application state."""

    model_config = ConfigDict(frozen=True)

    todo: TodoState = TodoState()
    auth: AuthState = AuthState()
    weather: WeatherState = WeatherState()


Listener = Callable[[str, AppState, AppState], None]


class Store:
    """Holds `AppState` and applies one mutation at a time."""

    def __init__(self, initial: AppState | None = None) -> None:
        self._state = initial or AppState()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def todos(self) -> tuple[Task, ...]:
        return self._state.todo.todos

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called as `listener(action, previous, current)`.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, action: str, state: AppState) -> None:
        previous = self._state
        self._state = state
        logger.debug("store_commit", extra={"action": action, "task_count": len(state.todo.todos)})
        for listener in list(self._listeners):
            listener(action, previous, state)

    def _commit_todos(self, action: str, todos: tuple[Task, ...], **changes: object) -> None:
        todo = self._state.todo.model_copy(update={"todos": todos, **changes})
        self._commit(action, self._state.model_copy(update={"todo": todo}))

    # ---- task mutations ----

    def add(self, text: str) -> Task:
        """Append a new task and return it."""
        todos, task = state_machine.add_task(self.todos, text=text)
        self._commit_todos("add", todos)
        return task

    def delete(self, task_id: str) -> None:
        todos = state_machine.remove_task(self.todos, task_id=task_id)
        editing_id = None if self._state.todo.editing_id == task_id else self._state.todo.editing_id
        self._commit_todos("delete", todos, editing_id=editing_id)

    def delete_all(self) -> None:
        self._commit_todos("delete_all", state_machine.clear_tasks(self.todos), editing_id=None)

    def edit(self, task_id: str) -> Task:
        """Mark a task as being edited; the input collaborator commits the new text."""
        task = next((t for t in self.todos if t.id == task_id), None)
        if task is None:
            raise TaskNotFoundError(task_id)
        todo = self._state.todo.model_copy(update={"editing_id": task_id})
        self._commit("edit", self._state.model_copy(update={"todo": todo}))
        return task

    def update_text(self, task_id: str, text: str) -> None:
        todos = state_machine.update_text(self.todos, task_id=task_id, text=text)
        editing_id = None if self._state.todo.editing_id == task_id else self._state.todo.editing_id
        self._commit_todos("update_text", todos, editing_id=editing_id)

    def set_status(self, task_id: str, status: TaskStatus) -> None:
        self._commit_todos("set_status", state_machine.set_status(self.todos, task_id=task_id, status=status))

    def set_priority(self, task_id: str, priority: TaskPriority | None) -> None:
        self._commit_todos(
            "set_priority", state_machine.set_priority(self.todos, task_id=task_id, priority=priority)
        )

    def mark_done(self, task_id: str) -> None:
        """Toggle completion of a single task."""
        self._commit_todos("mark_done", state_machine.toggle_done(self.todos, task_id=task_id))

    def mark_all_done(self) -> None:
        self._commit_todos("mark_all_done", state_machine.mark_all_done(self.todos))

    def reorder(self, tasks: Sequence[Task]) -> None:
        """Replace the canonical order with `tasks` (a permutation of the collection)."""
        self._commit_todos("reorder", state_machine.reorder(self.todos, ordered=tasks))

    def set_filter(self, filter_option: FilterOption | str) -> None:
        todo = self._state.todo.model_copy(update={"filter_option": FilterOption(filter_option)})
        self._commit("set_filter", self._state.model_copy(update={"todo": todo}))

    # ---- auth slice ----

    def set_auth(self, *, is_authenticated: bool, city: str | None) -> None:
        auth = AuthState(is_authenticated=is_authenticated, city=city)
        if auth == self._state.auth:
            return
        self._commit("set_auth", self._state.model_copy(update={"auth": auth}))

    # ---- weather slice ----

    def weather_requested(self) -> None:
        weather = self._state.weather.model_copy(update={"loading": True})
        self._commit("weather_requested", self._state.model_copy(update={"weather": weather}))

    def weather_loaded(self, report: WeatherReport) -> None:
        weather = WeatherState(data=report, error=None, loading=False)
        self._commit("weather_loaded", self._state.model_copy(update={"weather": weather}))

    def weather_failed(self, message: str) -> None:
        weather = self._state.weather.model_copy(update={"error": message, "loading": False})
        self._commit("weather_failed", self._state.model_copy(update={"weather": weather}))

    def clear_weather_error(self) -> None:
        if self._state.weather.error is None and not self._state.weather.loading:
            return
        weather = self._state.weather.model_copy(update={"error": None, "loading": False})
        self._commit("clear_weather_error", self._state.model_copy(update={"weather": weather}))
