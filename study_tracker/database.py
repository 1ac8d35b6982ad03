import aiosqlite

from study_tracker.config import settings

CREATE_KV = """
CREATE TABLE IF NOT EXISTS kv (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
)
"""

_DDL = [CREATE_KV]


async def init_db(db_path: str | None = None) -> None:
    """Create the kv table if missing. Run by ``SqliteStore.init`` before first use."""
    async with aiosqlite.connect(db_path or settings.db_path) as db:
        for stmt in _DDL:
            await db.execute(stmt)
        await db.commit()


async def get_async_conn(db_path: str | None = None) -> aiosqlite.Connection:
    conn = await aiosqlite.connect(db_path or settings.db_path)
    await conn.execute("PRAGMA busy_timeout = 5000")
    conn.row_factory = aiosqlite.Row
    return conn
