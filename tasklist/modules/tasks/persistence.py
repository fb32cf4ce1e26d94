"""Best-effort mirror of the task collection into local storage."""

import json
import logging
from collections.abc import Sequence

from pydantic import TypeAdapter, ValidationError

from tasklist.core.config import constants
from tasklist.core.local_storage import KeyValueStorage
from tasklist.core.logging import span
from tasklist.core.store import Store
from tasklist.domain.task import SnapshotEntry, Task


logger = logging.getLogger(__name__)

_snapshot_adapter = TypeAdapter(list[SnapshotEntry])


def serialize_tasks(tasks: Sequence[Task]) -> str:
    """Serialize the full collection as one JSON array with camelCase keys."""
    return json.dumps([task.model_dump(mode="json", by_alias=True) for task in tasks])


def parse_snapshot(raw: str) -> list[SnapshotEntry]:
    """Parse a stored snapshot.

    Raises:
        ValueError: If the snapshot is not a JSON array of task objects
    """
    try:
        return _snapshot_adapter.validate_json(raw)
    except ValidationError as e:
        msg = f"Malformed task snapshot: {e.error_count()} invalid entries"
        raise ValueError(msg) from e


async def rehydrate(*, store: Store, storage: KeyValueStorage) -> int:
    """Repopulate an empty store from the stored snapshot.

    Each stored entry is re-added as a fresh task, so ids, timestamps, status
    and priority are regenerated rather than restored.

    Args:
        store: Application store
        storage: Local storage holding the snapshot

    Returns:
        Number of tasks added (0 when the store was not empty or nothing usable was stored)
    """
    with span("persistence.rehydrate"):
        if store.todos:
            return 0

        try:
            raw = await storage.get_item(constants.STORAGE_KEY_TODOS)
        except Exception as e:
            logger.warning("Failed to read task snapshot: %s", e)
            return 0

        if not raw:
            return 0

        try:
            entries = parse_snapshot(raw)
        except ValueError as e:
            logger.warning("Ignoring unreadable task snapshot: %s", e)
            return 0

        added = 0
        for entry in entries:
            if not entry.task.strip():
                continue
            store.add(entry.task)
            added += 1

        logger.info("Rehydrated %d tasks from local storage", added)
        return added


async def load_auth_flag(*, storage: KeyValueStorage) -> bool:
    """Read the mirrored authentication flag, defaulting to False."""
    try:
        raw = await storage.get_item(constants.STORAGE_KEY_AUTH)
        return bool(json.loads(raw)) if raw else False
    except Exception as e:
        logger.warning("Failed to read auth flag: %s", e)
        return False


async def save_snapshot(*, store: Store, storage: KeyValueStorage) -> bool:
    """Write the full collection and the auth flag.

    Failures are logged and swallowed.

    Returns:
        True if both items were written
    """
    with span("persistence.save_snapshot"):
        state = store.state
        try:
            await storage.set_item(constants.STORAGE_KEY_TODOS, serialize_tasks(state.todo.todos))
            await storage.set_item(constants.STORAGE_KEY_AUTH, json.dumps(state.auth.is_authenticated))
        except Exception as e:
            logger.warning("Failed to mirror tasks to local storage: %s", e)
            return False

        logger.debug("Mirrored %d tasks to local storage", len(state.todo.todos))
        return True
