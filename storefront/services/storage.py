"""
Persistent Store Adapter

Async key-value storage over the device store. Values are strings;
JSON helpers sit on top for the stores that keep structured data.
"""

import asyncio
import json
import logging
import os
import sqlite3
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, Optional

import aiosqlite

from ..core.config import Settings
from ..core.errors import StorageError

logger = logging.getLogger(__name__)


class KeyValueStorage(ABC):
    """Abstract base for device key-value stores"""

    @abstractmethod
    async def get_item(self, key: str) -> Optional[str]:
        """Return the stored string for key, or None"""
        ...

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    async def remove_item(self, key: str) -> None:
        ...

    async def close(self) -> None:
        pass

    async def get_json(self, key: str) -> Any:
        """Decode a stored JSON value. Raises ValueError on malformed text."""
        raw = await self.get_item(key)
        if raw is None:
            return None
        return json.loads(raw)

    async def set_json(self, key: str, value: Any) -> None:
        await self.set_item(key, json.dumps(value))


class MemoryStorage(KeyValueStorage):
    """In-process storage, lost on exit"""

    def __init__(self):
        self.items: dict[str, str] = {}

    async def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    async def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class SQLiteStorage(KeyValueStorage):
    """
    Device storage backed by a single sqlite table.

    The table is created on first use. Every sqlite failure is raised
    as StorageError so callers only handle one storage exception.
    """

    def __init__(self, path: str):
        self.path = path
        self._initialized = False
        self._init_lock = asyncio.Lock()

    async def _init_db(self, conn: aiosqlite.Connection) -> None:
        await conn.execute(
            """
            CREATE TABLE IF NOT EXISTS kv (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            );
            """
        )
        await conn.commit()
        logger.info(f"Initialized device storage at {self.path}")

    @asynccontextmanager
    async def connect(self):
        """Yield an aiosqlite connection, creating the table on first use"""
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        try:
            conn = await aiosqlite.connect(self.path)
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open device storage: {e}") from e

        try:
            if not self._initialized:
                async with self._init_lock:
                    if not self._initialized:
                        await self._init_db(conn)
                        self._initialized = True
            yield conn
        except sqlite3.Error as e:
            raise StorageError(f"Device storage failure: {e}") from e
        finally:
            await conn.close()

    async def get_item(self, key: str) -> Optional[str]:
        async with self.connect() as conn:
            cur = await conn.execute("SELECT value FROM kv WHERE key = ?;", (key,))
            row = await cur.fetchone()
            await cur.close()
        return row[0] if row else None

    async def set_item(self, key: str, value: str) -> None:
        async with self.connect() as conn:
            await conn.execute(
                "INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?);",
                (key, value),
            )
            await conn.commit()

    async def remove_item(self, key: str) -> None:
        async with self.connect() as conn:
            await conn.execute("DELETE FROM kv WHERE key = ?;", (key,))
            await conn.commit()


def create_storage(settings: Settings) -> KeyValueStorage:
    """Build the storage backend selected in settings"""
    if settings.uses_sqlite:
        return SQLiteStorage(settings.storage_path)
    logger.warning("Using in-memory storage - cart and wishlist will not survive restarts")
    return MemoryStorage()
