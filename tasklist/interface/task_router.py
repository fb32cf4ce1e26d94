"""HTTP surface for the task list view."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from tasklist.core.config import constants
from tasklist.core.errors import TaskNotFoundError, classify_error_with_response
from tasklist.domain.create_models import TaskCreate
from tasklist.domain.task import Task
from tasklist.domain.update_models import (
    AuthUpdate,
    FilterUpdate,
    ReorderRequest,
    TaskPriorityUpdate,
    TaskStatusUpdate,
    TaskTextUpdate,
)
from tasklist.models.service_models import TaskListSnapshot
from tasklist.modules.tasks.view import TaskListView
from tasklist.services.confirmation_service import StaticConfirmer


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])


def get_view(request: Request) -> TaskListView:
    """Return the view created by the application lifespan."""
    return request.app.state.task_list_view


async def require_authenticated(view: TaskListView = Depends(get_view)) -> None:
    """Bulk actions are only offered to authenticated users."""
    if not view.store.state.auth.is_authenticated:
        logger.warning("bulk_action_unauthenticated")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Sign in to use bulk actions",
        )


def _to_http_error(exc: Exception) -> HTTPException:
    response = classify_error_with_response(exc)
    if isinstance(exc, TaskNotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, ValueError | IndexError):
        status_code = constants.HTTP_UNPROCESSABLE_ENTITY
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return HTTPException(status_code=status_code, detail=response.model_dump(mode="json"))


@router.get("")
async def get_tasks(view: TaskListView = Depends(get_view)) -> TaskListSnapshot:
    """Render the current task list.

    Reads leave pending notices in place; they are consumed by the response
    of the next intent.
    """
    return view.snapshot(drain_notices=False)


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_task(payload: TaskCreate, view: TaskListView = Depends(get_view)) -> Task:
    """Add a task."""
    try:
        return await view.handle_add(payload.task)
    except ValueError as e:
        raise _to_http_error(e) from e


@router.put("/filter")
async def set_filter(payload: FilterUpdate, view: TaskListView = Depends(get_view)) -> TaskListSnapshot:
    await view.handle_filter_change(payload.filter)
    return view.snapshot()


@router.put("/auth")
async def set_auth(payload: AuthUpdate, view: TaskListView = Depends(get_view)) -> TaskListSnapshot:
    """Hook for the auth provider: sign-in state and the user's city."""
    await view.handle_auth_change(is_authenticated=payload.is_authenticated, city=payload.city)
    return view.snapshot()


@router.post("/reorder")
async def reorder_tasks(payload: ReorderRequest, view: TaskListView = Depends(get_view)) -> TaskListSnapshot:
    """Apply a drag-and-drop result against the displayed order."""
    try:
        await view.handle_drag_end(payload)
    except IndexError as e:
        raise _to_http_error(e) from e
    return view.snapshot()


@router.delete("", dependencies=[Depends(require_authenticated)])
async def delete_all_tasks(
    confirm: bool = Query(default=False),
    view: TaskListView = Depends(get_view),
) -> TaskListSnapshot:
    await view.handle_delete_all(confirmer=StaticConfirmer(answer=confirm))
    return view.snapshot()


@router.post("/done", dependencies=[Depends(require_authenticated)])
async def mark_all_tasks_done(
    confirm: bool = Query(default=False),
    view: TaskListView = Depends(get_view),
) -> TaskListSnapshot:
    await view.handle_mark_all_as_done(confirmer=StaticConfirmer(answer=confirm))
    return view.snapshot()


@router.delete("/{task_id}")
async def delete_task(
    task_id: str,
    confirm: bool = Query(default=False),
    view: TaskListView = Depends(get_view),
) -> TaskListSnapshot:
    """Delete a task; without `confirm=true` the prompt counts as declined."""
    try:
        await view.handle_delete(task_id, confirmer=StaticConfirmer(answer=confirm))
    except TaskNotFoundError as e:
        raise _to_http_error(e) from e
    return view.snapshot()


@router.post("/{task_id}/toggle")
async def toggle_task(task_id: str, view: TaskListView = Depends(get_view)) -> TaskListSnapshot:
    try:
        await view.handle_mark_as_done(task_id)
    except TaskNotFoundError as e:
        raise _to_http_error(e) from e
    return view.snapshot()


@router.post("/{task_id}/edit")
async def edit_task(task_id: str, view: TaskListView = Depends(get_view)) -> TaskListSnapshot:
    """Enter edit mode for a task."""
    try:
        await view.handle_edit(task_id)
    except TaskNotFoundError as e:
        raise _to_http_error(e) from e
    return view.snapshot()


@router.put("/{task_id}/text")
async def update_task_text(
    task_id: str,
    payload: TaskTextUpdate,
    view: TaskListView = Depends(get_view),
) -> TaskListSnapshot:
    try:
        await view.handle_update_text(task_id, payload.task)
    except (TaskNotFoundError, ValueError) as e:
        raise _to_http_error(e) from e
    return view.snapshot()


@router.put("/{task_id}/status")
async def update_task_status(
    task_id: str,
    payload: TaskStatusUpdate,
    view: TaskListView = Depends(get_view),
) -> TaskListSnapshot:
    try:
        await view.handle_status_change(task_id, payload.status)
    except TaskNotFoundError as e:
        raise _to_http_error(e) from e
    return view.snapshot()


@router.put("/{task_id}/priority")
async def update_task_priority(
    task_id: str,
    payload: TaskPriorityUpdate,
    view: TaskListView = Depends(get_view),
) -> TaskListSnapshot:
    try:
        await view.handle_priority_change(task_id, payload.priority)
    except TaskNotFoundError as e:
        raise _to_http_error(e) from e
    return view.snapshot()
