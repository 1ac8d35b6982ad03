import json
import os
from typing import Protocol

import aiofiles

from study_tracker.config import Settings
from study_tracker.database import get_async_conn, init_db


class KeyValueStore(Protocol):
    """Async string store keyed by name. Both operations may raise."""

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    def __init__(self, data: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(data or {})

    async def get(self, key: str) -> str | None:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.data[key] = value


class SqliteStore:
    """Key-value rows in the ``kv`` table, one connection per call."""

    def __init__(self, db_path: str) -> None:
        self.db_path = db_path

    async def init(self) -> None:
        await init_db(self.db_path)

    async def get(self, key: str) -> str | None:
        conn = await get_async_conn(self.db_path)
        try:
            row = await conn.execute("SELECT value FROM kv WHERE key = ?", (key,))
            found = await row.fetchone()
            return found["value"] if found else None
        finally:
            await conn.close()

    async def set(self, key: str, value: str) -> None:
        conn = await get_async_conn(self.db_path)
        try:
            await conn.execute(
                "INSERT INTO kv (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value, "
                "updated_at = CURRENT_TIMESTAMP",
                (key, value),
            )
            await conn.commit()
        finally:
            await conn.close()


class JsonFileStore:
    """All keys in a single JSON object file.

    Writes land in ``<path>.tmp`` first and are moved over the target, so a
    crash mid-write leaves the previous file intact.
    """

    def __init__(self, path: str) -> None:
        self.path = path

    async def _read_all(self) -> dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
            text = await f.read()
        return json.loads(text) if text.strip() else {}

    async def get(self, key: str) -> str | None:
        return (await self._read_all()).get(key)

    async def set(self, key: str, value: str) -> None:
        data = await self._read_all()
        data[key] = value
        tmp_path = f"{self.path}.tmp"
        async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
            await f.write(json.dumps(data, indent=2))
        os.replace(tmp_path, self.path)


def build_store(settings: Settings) -> KeyValueStore:
    """Return the backend named by ``settings.store_backend``."""
    backend = settings.store_backend.lower()
    if backend == "sqlite":
        return SqliteStore(settings.db_path)
    if backend == "json":
        return JsonFileStore(settings.json_path)
    if backend == "memory":
        return MemoryStore()
    raise ValueError(f"Unknown store backend '{settings.store_backend}'")
