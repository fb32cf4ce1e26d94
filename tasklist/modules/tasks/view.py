"""Task list view: user intents, derived display state and side effects.

The view never caches the projection; `visible_tasks` is recomputed from the
store on every read. After each intent the view runs its effects:

- persistence: mirror the collection and auth flag when either changed
- weather: when the collection or the city changed, fetch weather if an
  outdoor task exists and a city is known, otherwise clear the weather error
"""

import asyncio
import logging
from typing import Protocol

from tasklist.core.config import constants
from tasklist.core.errors import TaskNotFoundError
from tasklist.core.local_storage import KeyValueStorage
from tasklist.core.logging import log_with_context, span
from tasklist.core.store import AppState, Store
from tasklist.domain.task import FilterOption, Task, TaskPriority, TaskStatus
from tasklist.domain.update_models import ReorderRequest
from tasklist.domain.weather import WeatherReport
from tasklist.models.service_models import TaskListSnapshot, WeatherPanel
from tasklist.modules.tasks import state_machine
from tasklist.modules.tasks.outdoor import should_fetch_weather
from tasklist.modules.tasks.persistence import rehydrate, save_snapshot
from tasklist.modules.tasks.projection import apply_filter, is_identity
from tasklist.services.confirmation_service import Confirmer
from tasklist.services.notification_service import NotificationService


logger = logging.getLogger(__name__)


DELETE_PROMPT = "Do you really want to delete this task?"
DELETE_ALL_PROMPT = "Are you sure you want to delete all tasks? This cannot be undone."
MARK_ALL_DONE_PROMPT = "Are you sure you want to mark all tasks as done?"


class WeatherRequester(Protocol):
    """The part of the weather service the view depends on."""

    @property
    def enabled(self) -> bool: ...

    async def request(self, city: str) -> WeatherReport | None: ...

    def clear(self) -> None: ...


class TaskListView:
    """Orchestrates the task list on top of the store."""

    def __init__(
        self,
        *,
        store: Store,
        weather_service: WeatherRequester,
        storage: KeyValueStorage,
        confirmer: Confirmer,
        notifier: NotificationService | None = None,
    ) -> None:
        self._store = store
        self._weather = weather_service
        self._storage = storage
        self._confirmer = confirmer
        self._notifier = notifier or NotificationService()

        self.outdoor_task_detected = False
        self._weather_task: asyncio.Task[WeatherReport | None] | None = None

        # Dependencies seen by the last effects run; None forces the first run.
        self._seen_todos: tuple[Task, ...] | None = None
        self._seen_is_authenticated: bool | None = None
        self._seen_city: str | None = None
        self._effects_started = False

        self._revision = 0
        self._effects_revision = -1
        self._unsubscribe = store.subscribe(self._on_store_change)

    def _on_store_change(self, _action: str, _previous: AppState, _current: AppState) -> None:
        self._revision += 1

    @property
    def store(self) -> Store:
        return self._store

    @property
    def notifier(self) -> NotificationService:
        return self._notifier

    # ---- lifecycle ----

    async def start(self) -> int:
        """Rehydrate from local storage if empty, then run the initial effects.

        Returns:
            Number of tasks restored from storage
        """
        restored = await rehydrate(store=self._store, storage=self._storage)
        await self.run_effects()
        return restored

    async def close(self) -> None:
        """Stop listening to the store and cancel a pending weather request."""
        self._unsubscribe()
        if self._weather_task is not None and not self._weather_task.done():
            self._weather_task.cancel()
            try:
                await self._weather_task
            except asyncio.CancelledError:
                logger.debug("Cancelled pending weather request")

    async def wait_for_weather(self) -> WeatherReport | None:
        """Wait for the most recent weather request, if any."""
        if self._weather_task is None:
            return None
        return await self._weather_task

    # ---- derived state ----

    @property
    def visible_tasks(self) -> list[Task]:
        """The filtered/sorted projection of the collection."""
        todo = self._store.state.todo
        return apply_filter(todo.todos, todo.filter_option)

    @property
    def reorder_enabled(self) -> bool:
        return is_identity(self._store.state.todo.filter_option)

    @property
    def weather_panel(self) -> WeatherPanel | None:
        """Weather block, shown only for outdoor tasks once a response or error arrived."""
        if not self.outdoor_task_detected:
            return None
        weather = self._store.state.weather
        if weather.data is None and weather.error is None:
            return None
        return WeatherPanel(
            weather=weather.data,
            error=constants.INVALID_CITY_MESSAGE if weather.error else None,
        )

    def snapshot(self, *, drain_notices: bool = True) -> TaskListSnapshot:
        """Render model for the current state."""
        state = self._store.state
        notices = self._notifier.drain() if drain_notices else self._notifier.notices
        return TaskListSnapshot(
            tasks=self.visible_tasks,
            filter=state.todo.filter_option,
            editing_id=state.todo.editing_id,
            is_authenticated=state.auth.is_authenticated,
            show_bulk_actions=state.auth.is_authenticated,
            reorder_enabled=self.reorder_enabled,
            outdoor_task_detected=self.outdoor_task_detected,
            weather=self.weather_panel,
            notices=notices,
        )

    # ---- effects ----

    async def run_effects(self) -> None:
        """Run the persistence and weather effects whose inputs changed."""
        if self._effects_started and self._effects_revision == self._revision:
            return
        self._effects_revision = self._revision

        state = self._store.state
        todos = state.todo.todos
        first_run = not self._effects_started
        todos_changed = first_run or todos is not self._seen_todos
        auth_changed = first_run or state.auth.is_authenticated != self._seen_is_authenticated
        city_changed = first_run or state.auth.city != self._seen_city

        self._effects_started = True
        self._seen_todos = todos
        self._seen_is_authenticated = state.auth.is_authenticated
        self._seen_city = state.auth.city

        if todos_changed or auth_changed:
            await save_snapshot(store=self._store, storage=self._storage)

        if todos_changed or city_changed:
            self._refresh_weather(todos, state.auth.city)

    def _refresh_weather(self, todos: tuple[Task, ...], city: str | None) -> None:
        # A request that has not started yet would otherwise take the newest generation.
        if self._weather_task is not None and not self._weather_task.done():
            self._weather_task.cancel()

        self.outdoor_task_detected = bool(city) and should_fetch_weather(todos, city)
        if self.outdoor_task_detected and self._weather.enabled:
            self._weather_task = asyncio.create_task(self._weather.request(city))
            self._weather_task.add_done_callback(self._log_weather_failure)
            return

        if self.outdoor_task_detected:
            logger.warning("Skipping weather for %s: no weather API key configured", city)
        self._weather.clear()

    @staticmethod
    def _log_weather_failure(task: "asyncio.Task[WeatherReport | None]") -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Weather request crashed: %s", exc, exc_info=exc)

    # ---- intents ----

    def _require_task(self, task_id: str) -> Task:
        for task in self._store.todos:
            if task.id == task_id:
                return task
        raise TaskNotFoundError(task_id)

    async def handle_add(self, text: str) -> Task:
        """Add a task from the input field.

        Raises:
            ValueError: If the text is blank
        """
        task = self._store.add(text)
        logger.info("Added task %s", task.id)
        await self.run_effects()
        return task

    async def handle_delete(self, task_id: str, *, confirmer: Confirmer | None = None) -> bool:
        """Delete one task after confirmation.

        Returns:
            True if the task was deleted, False if the user declined
        """
        with span("task_list_view.handle_delete"):
            self._require_task(task_id)
            if not await (confirmer or self._confirmer).confirm(DELETE_PROMPT):
                return False
            self._store.delete(task_id)
            self._notifier.success("Task deleted successfully!")
            logger.info("Deleted task %s", task_id)
            await self.run_effects()
            return True

    async def handle_delete_all(self, *, confirmer: Confirmer | None = None) -> bool:
        """Delete every task after confirmation; an empty list only yields a notice."""
        with span("task_list_view.handle_delete_all"):
            if not self._store.todos:
                self._notifier.info("No tasks to delete!")
                return False
            if not await (confirmer or self._confirmer).confirm(DELETE_ALL_PROMPT):
                return False
            count = len(self._store.todos)
            self._store.delete_all()
            self._notifier.success("All tasks deleted successfully!")
            logger.info("Deleted all %d tasks", count)
            await self.run_effects()
            return True

    async def handle_mark_as_done(self, task_id: str) -> None:
        """Toggle completion of one task."""
        self._store.mark_done(task_id)
        await self.run_effects()

    async def handle_mark_all_as_done(self, *, confirmer: Confirmer | None = None) -> bool:
        """Mark every task done after confirmation; an empty list only yields a notice."""
        with span("task_list_view.handle_mark_all_as_done"):
            if not self._store.todos:
                self._notifier.info("No tasks to mark as done!")
                return False
            if not await (confirmer or self._confirmer).confirm(MARK_ALL_DONE_PROMPT):
                return False
            self._store.mark_all_done()
            self._notifier.success("All tasks marked as done!")
            logger.info("Marked all %d tasks as done", len(self._store.todos))
            await self.run_effects()
            return True

    async def handle_edit(self, task_id: str) -> Task:
        """Start editing a task; the input field commits the text via `handle_update_text`."""
        task = self._store.edit(task_id)
        self._notifier.success("Task edited successfully!")
        await self.run_effects()
        return task

    async def handle_update_text(self, task_id: str, text: str) -> None:
        self._store.update_text(task_id, text)
        await self.run_effects()

    async def handle_priority_change(self, task_id: str, priority: TaskPriority | None) -> None:
        self._store.set_priority(task_id, priority)
        await self.run_effects()

    async def handle_status_change(self, task_id: str, status: TaskStatus) -> None:
        self._store.set_status(task_id, status)
        await self.run_effects()

    async def handle_filter_change(self, filter_option: FilterOption | str) -> None:
        self._store.set_filter(filter_option)
        await self.run_effects()

    async def handle_auth_change(self, *, is_authenticated: bool, city: str | None) -> None:
        """Apply an update from the auth provider."""
        self._store.set_auth(is_authenticated=is_authenticated, city=city)
        await self.run_effects()

    async def handle_drag_end(self, result: ReorderRequest) -> bool:
        """Apply a drag-and-drop result against the displayed list.

        Reordering is only allowed while no filter is active, because the
        displayed indices only match the canonical collection then.

        Returns:
            True if the collection order was committed

        Raises:
            IndexError: If an index is outside the displayed list
        """
        if result.destination_index is None:
            return False

        if not self.reorder_enabled:
            self._notifier.info("Clear the filter to reorder tasks!")
            log_with_context(
                logger,
                "info",
                "reorder_ignored",
                filter_option=self._store.state.todo.filter_option.value,
                source_index=result.source_index,
            )
            return False

        reordered = state_machine.move(
            self.visible_tasks,
            source_index=result.source_index,
            destination_index=result.destination_index,
        )
        self._store.reorder(reordered)
        await self.run_effects()
        return True
