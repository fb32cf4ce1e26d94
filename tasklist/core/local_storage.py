"""Durable key/value storage backed by a local SQLite file.

Mirrors the browser `localStorage` contract: string keys, string values,
whole-value writes.
"""

import asyncio
import logging
from pathlib import Path
from typing import Protocol

import aiosqlite

from tasklist.core.config import settings
from tasklist.core.errors import StorageError


logger = logging.getLogger(__name__)


_SCHEMA = """CREATE TABLE IF NOT EXISTS local_storage (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated TEXT NOT NULL DEFAULT (datetime('now'))
)"""


class KeyValueStorage(Protocol):
    """Interface shared by the SQLite storage and test doubles."""

    async def get_item(self, key: str) -> str | None:
        """Return the stored value or None when the key is absent."""
        ...

    async def set_item(self, key: str, value: str) -> None:
        """Store `value` under `key`, replacing any previous value."""
        ...


def get_storage_path(storage_path: str | None = None) -> Path:
    """Get the resolved SQLite file path."""
    path_str = storage_path or settings.storage_path
    return Path(path_str).resolve()


class LocalStorage:
    """SQLite-backed key/value store with a single shared connection."""

    def __init__(self, *, path: str | Path | None = None) -> None:
        self._path = get_storage_path(str(path) if path else None)
        self._conn: aiosqlite.Connection | None = None
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    async def open(self) -> None:
        """Open the connection and create the table if missing."""
        if self._conn is not None:
            return
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = await aiosqlite.connect(str(self._path))
            await self._conn.execute("PRAGMA journal_mode = WAL")
            await self._conn.execute(_SCHEMA)
            await self._conn.commit()
        except Exception as e:
            logger.error("local_storage_open_failed", extra={"path": str(self._path), "error": str(e)})
            msg = f"Failed to open local storage at {self._path}: {e}"
            raise StorageError(msg) from e
        logger.info("Local storage ready", extra={"path": str(self._path)})

    async def close(self) -> None:
        """Close the connection if open."""
        if self._conn is None:
            return
        try:
            await self._conn.close()
        except Exception as e:
            logger.warning("Error closing local storage", extra={"error": str(e)})
        finally:
            self._conn = None

    async def _connection(self) -> aiosqlite.Connection:
        if self._conn is None:
            await self.open()
        assert self._conn is not None  # for type checker (open() raises otherwise)
        return self._conn

    async def get_item(self, key: str) -> str | None:
        """Return the value stored under `key`, or None."""
        try:
            conn = await self._connection()
            cursor = await conn.execute("SELECT value FROM local_storage WHERE key = ?", (key,))
            row = await cursor.fetchone()
        except StorageError:
            raise
        except Exception as e:
            logger.error("get_item_failed", extra={"key": key, "error": str(e)})
            msg = f"Failed to read {key} from local storage: {e}"
            raise StorageError(msg) from e
        return None if row is None else str(row[0])

    async def set_item(self, key: str, value: str) -> None:
        """Store `value` under `key`."""
        try:
            conn = await self._connection()
            async with self._lock:
                await conn.execute(
                    "INSERT INTO local_storage (key, value, updated) VALUES (?, ?, datetime('now')) "
                    "ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated = excluded.updated",
                    (key, value),
                )
                await conn.commit()
        except StorageError:
            raise
        except Exception as e:
            logger.error("set_item_failed", extra={"key": key, "error": str(e)})
            msg = f"Failed to write {key} to local storage: {e}"
            raise StorageError(msg) from e
        logger.debug("Stored item", extra={"key": key, "size": len(value)})

    async def remove_item(self, key: str) -> None:
        """Delete `key` if present."""
        try:
            conn = await self._connection()
            async with self._lock:
                await conn.execute("DELETE FROM local_storage WHERE key = ?", (key,))
                await conn.commit()
        except StorageError:
            raise
        except Exception as e:
            logger.error("remove_item_failed", extra={"key": key, "error": str(e)})
            msg = f"Failed to remove {key} from local storage: {e}"
            raise StorageError(msg) from e
