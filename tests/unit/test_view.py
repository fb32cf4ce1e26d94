"""Tests for the task list view: intents, notices, confirmations and effects."""

import json

import httpx
import pytest

from tasklist.core.errors import TaskNotFoundError
from tasklist.domain.notice import NoticeLevel
from tasklist.domain.task import FilterOption, TaskPriority, TaskStatus
from tasklist.domain.update_models import ReorderRequest
from tasklist.modules.tasks.view import DELETE_ALL_PROMPT, DELETE_PROMPT, MARK_ALL_DONE_PROMPT, TaskListView
from tasklist.services import weather_service
from tasklist.services.confirmation_service import StaticConfirmer
from tasklist.services.weather_service import WeatherService


def _messages(notifier):
    return [(notice.level, notice.message) for notice in notifier.notices]


@pytest.mark.unit
class TestBulkActions:
    @pytest.mark.asyncio
    async def test_delete_all_on_empty_list_only_informs(self, view, store, notifier, confirmer):
        commits = []
        store.subscribe(lambda *args: commits.append(args))

        result = await view.handle_delete_all()

        assert result is False
        assert confirmer.prompts == []
        assert commits == []
        assert _messages(notifier) == [(NoticeLevel.INFO, "No tasks to delete!")]

    @pytest.mark.asyncio
    async def test_mark_all_done_on_empty_list_only_informs(self, view, notifier, confirmer):
        result = await view.handle_mark_all_as_done()

        assert result is False
        assert confirmer.prompts == []
        assert _messages(notifier) == [(NoticeLevel.INFO, "No tasks to mark as done!")]

    @pytest.mark.asyncio
    async def test_delete_all_confirmed(self, view, store, notifier, confirmer):
        await view.handle_add("a")
        await view.handle_add("b")

        result = await view.handle_delete_all()

        assert result is True
        assert store.todos == ()
        assert confirmer.prompts == [DELETE_ALL_PROMPT]
        assert _messages(notifier)[-1] == (NoticeLevel.SUCCESS, "All tasks deleted successfully!")

    @pytest.mark.asyncio
    async def test_delete_all_declined(self, view, store, notifier):
        await view.handle_add("a")

        result = await view.handle_delete_all(confirmer=StaticConfirmer(answer=False))

        assert result is False
        assert len(store.todos) == 1
        assert notifier.notices == []

    @pytest.mark.asyncio
    async def test_mark_all_done_confirmed(self, view, store, notifier, confirmer):
        await view.handle_add("a")
        await view.handle_add("b")

        assert await view.handle_mark_all_as_done() is True

        assert all(task.status == TaskStatus.DONE for task in store.todos)
        assert confirmer.prompts == [MARK_ALL_DONE_PROMPT]
        assert _messages(notifier)[-1] == (NoticeLevel.SUCCESS, "All tasks marked as done!")


@pytest.mark.unit
class TestSingleTaskIntents:
    @pytest.mark.asyncio
    async def test_delete_declined_leaves_collection(self, view, store, notifier):
        task = await view.handle_add("pay rent")
        declining = StaticConfirmer(answer=False)

        result = await view.handle_delete(task.id, confirmer=declining)

        assert result is False
        assert declining.prompts == [DELETE_PROMPT]
        assert [t.id for t in store.todos] == [task.id]
        assert notifier.notices == []

    @pytest.mark.asyncio
    async def test_delete_confirmed(self, view, store, notifier):
        task = await view.handle_add("pay rent")

        assert await view.handle_delete(task.id) is True

        assert store.todos == ()
        assert _messages(notifier) == [(NoticeLevel.SUCCESS, "Task deleted successfully!")]

    @pytest.mark.asyncio
    async def test_delete_unknown_task_does_not_prompt(self, view, confirmer):
        with pytest.raises(TaskNotFoundError):
            await view.handle_delete("missing")

        assert confirmer.prompts == []

    @pytest.mark.asyncio
    async def test_edit_then_update_text(self, view, store, notifier):
        task = await view.handle_add("draft")

        await view.handle_edit(task.id)
        assert store.state.todo.editing_id == task.id
        assert _messages(notifier) == [(NoticeLevel.SUCCESS, "Task edited successfully!")]

        await view.handle_update_text(task.id, "final")
        assert store.todos[0].task == "final"
        assert store.state.todo.editing_id is None

    @pytest.mark.asyncio
    async def test_status_priority_and_toggle(self, view, store):
        task = await view.handle_add("fix bike")

        await view.handle_priority_change(task.id, TaskPriority.HIGH)
        await view.handle_status_change(task.id, TaskStatus.IN_PROGRESS)
        assert store.todos[0].priority == TaskPriority.HIGH
        assert store.todos[0].status == TaskStatus.IN_PROGRESS

        await view.handle_mark_as_done(task.id)
        assert store.todos[0].is_done is True

    @pytest.mark.asyncio
    async def test_add_blank_is_rejected(self, view, store):
        with pytest.raises(ValueError):
            await view.handle_add("  ")

        assert store.todos == ()


@pytest.mark.unit
class TestDragReorder:
    @pytest.mark.asyncio
    async def test_move_index_two_to_zero(self, view, store):
        for text in ("a", "b", "c", "d", "e"):
            await view.handle_add(text)

        result = await view.handle_drag_end(ReorderRequest(source_index=2, destination_index=0))

        assert result is True
        assert [task.task for task in store.todos] == ["c", "a", "b", "d", "e"]

    @pytest.mark.asyncio
    async def test_drop_outside_list_is_noop(self, view, store):
        for text in ("a", "b"):
            await view.handle_add(text)

        result = await view.handle_drag_end(ReorderRequest(source_index=0, destination_index=None))

        assert result is False
        assert [task.task for task in store.todos] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_disabled_while_filter_active(self, view, store, notifier):
        for text in ("a", "b", "c"):
            await view.handle_add(text)
        await view.handle_filter_change(FilterOption.LATEST_FIRST)
        before = store.todos

        result = await view.handle_drag_end(ReorderRequest(source_index=2, destination_index=0))

        assert result is False
        assert store.todos is before
        assert view.reorder_enabled is False
        assert _messages(notifier) == [(NoticeLevel.INFO, "Clear the filter to reorder tasks!")]

    @pytest.mark.asyncio
    async def test_out_of_range_index(self, view):
        await view.handle_add("a")

        with pytest.raises(IndexError):
            await view.handle_drag_end(ReorderRequest(source_index=0, destination_index=3))


@pytest.mark.unit
class TestDerivedState:
    @pytest.mark.asyncio
    async def test_visible_tasks_follow_filter(self, view):
        low = await view.handle_add("buy milk")
        high = await view.handle_add("pay rent")
        await view.handle_priority_change(low.id, TaskPriority.LOW)
        await view.handle_priority_change(high.id, TaskPriority.HIGH)

        await view.handle_filter_change("high-low")

        assert [task.id for task in view.visible_tasks] == [high.id, low.id]

    @pytest.mark.asyncio
    async def test_snapshot_drains_notices(self, view, notifier):
        await view.handle_delete_all()

        snapshot = view.snapshot()

        assert [notice.message for notice in snapshot.notices] == ["No tasks to delete!"]
        assert notifier.notices == []
        assert view.snapshot().notices == []

    @pytest.mark.asyncio
    async def test_bulk_actions_follow_auth(self, view):
        assert view.snapshot().show_bulk_actions is False

        await view.handle_auth_change(is_authenticated=True, city=None)

        assert view.snapshot().show_bulk_actions is True


@pytest.mark.unit
class TestPersistenceEffect:
    @pytest.mark.asyncio
    async def test_every_change_is_mirrored(self, view, storage):
        task = await view.handle_add("go swimming")
        await view.handle_status_change(task.id, TaskStatus.DONE)

        stored = json.loads(storage.items["todos"])
        assert stored[0]["task"] == "go swimming"
        assert stored[0]["status"] == "done"
        assert stored[0]["isDone"] is True
        assert storage.items["isAuthenticated"] == "false"

    @pytest.mark.asyncio
    async def test_filter_change_does_not_write(self, view, storage):
        await view.handle_add("a")
        writes = len(storage.writes)

        await view.handle_filter_change("done")

        assert len(storage.writes) == writes

    @pytest.mark.asyncio
    async def test_write_failure_keeps_state(self, view, store, storage):
        storage.fail_writes = True

        await view.handle_add("a")

        assert len(store.todos) == 1

    @pytest.mark.asyncio
    async def test_start_rehydrates(self, store, storage, weather, confirmer):
        storage.items["todos"] = json.dumps([{"task": "walk"}, {"task": "read"}])
        view = TaskListView(store=store, weather_service=weather, storage=storage, confirmer=confirmer)

        restored = await view.start()

        assert restored == 2
        assert [task.task for task in store.todos] == ["walk", "read"]


@pytest.mark.unit
class TestWeatherEffect:
    @pytest.mark.asyncio
    async def test_outdoor_task_triggers_single_request(self, view, store, weather):
        store.set_auth(is_authenticated=True, city="London")
        store.add("go swimming")
        store.add("read a book")

        await view.start()
        await view.wait_for_weather()

        assert weather.requested == ["London"]
        assert view.outdoor_task_detected is True
        panel = view.weather_panel
        assert panel is not None
        assert panel.weather == weather.report
        assert panel.error is None

    @pytest.mark.asyncio
    async def test_removing_outdoor_task_clears_weather(self, view, store, weather):
        store.set_auth(is_authenticated=True, city="London")
        swim = store.add("go swimming")
        store.add("read a book")
        await view.start()
        await view.wait_for_weather()

        await view.handle_delete(swim.id)

        assert weather.requested == ["London"]
        assert weather.clear_calls == 1
        assert view.outdoor_task_detected is False
        assert view.weather_panel is None

    @pytest.mark.asyncio
    async def test_no_city_no_request(self, view, weather):
        await view.handle_add("go swimming")

        assert weather.requested == []
        assert view.outdoor_task_detected is False

    @pytest.mark.asyncio
    async def test_city_change_refetches(self, view, store, weather):
        await view.handle_add("go swimming")

        await view.handle_auth_change(is_authenticated=True, city="Paris")
        await view.wait_for_weather()

        assert weather.requested == ["Paris"]

    @pytest.mark.asyncio
    async def test_filter_change_does_not_refetch(self, view, store, weather):
        store.set_auth(is_authenticated=True, city="London")
        store.add("go swimming")
        await view.start()
        await view.wait_for_weather()

        await view.handle_filter_change("done")

        assert weather.requested == ["London"]

    @pytest.mark.asyncio
    async def test_upstream_error_shows_fixed_message(self, store, storage, confirmer):
        transport = httpx.MockTransport(lambda request: httpx.Response(404, json={"message": "city not found"}))
        service = WeatherService(store=store, api_key="test-key", transport=transport)
        view = TaskListView(store=store, weather_service=service, storage=storage, confirmer=confirmer)
        store.set_auth(is_authenticated=True, city="Atlantis")
        store.add("go swimming")

        await view.start()
        await view.wait_for_weather()

        panel = view.weather_panel
        assert panel is not None
        assert panel.weather is None
        assert panel.error == "Invalid city name!"

    @pytest.mark.asyncio
    async def test_removing_outdoor_task_clears_upstream_error(self, store, storage, confirmer):
        transport = httpx.MockTransport(lambda request: httpx.Response(404, json={"message": "city not found"}))
        service = WeatherService(store=store, api_key="test-key", transport=transport)
        view = TaskListView(store=store, weather_service=service, storage=storage, confirmer=confirmer)
        store.set_auth(is_authenticated=True, city="Atlantis")
        swim = store.add("go swimming")
        store.add("read a book")
        await view.start()
        await view.wait_for_weather()
        assert store.state.weather.error is not None

        await view.handle_delete(swim.id)

        assert store.state.weather.error is None
        assert view.outdoor_task_detected is False
        assert view.weather_panel is None

    @pytest.mark.asyncio
    async def test_missing_api_key_skips_request_and_hides_panel(self, monkeypatch, store, storage, confirmer):
        monkeypatch.setattr(weather_service.settings, "weather_api_key", None)
        sent = []

        def handler(request):
            sent.append(request)
            return httpx.Response(200, json={})

        service = WeatherService(store=store, transport=httpx.MockTransport(handler))
        view = TaskListView(store=store, weather_service=service, storage=storage, confirmer=confirmer)
        store.set_auth(is_authenticated=True, city="London")
        store.add("go for a walk")

        await view.start()

        assert await view.wait_for_weather() is None
        assert sent == []
        assert store.state.weather.error is None
        assert view.weather_panel is None
