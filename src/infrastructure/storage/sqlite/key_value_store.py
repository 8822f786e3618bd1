"""SQLite-backed key/value slots (used for persisted carts)."""

from src.core.interfaces.key_value_store import IKeyValueStore
from src.infrastructure.storage.sqlite.connection import get_connection
from src.infrastructure.storage.sqlite.records import to_iso, utcnow


class SQLiteKeyValueStore(IKeyValueStore):
    """One row per slot in ``kv_slots``."""

    async def get(self, key: str) -> str | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT value FROM kv_slots WHERE key = ?", (key,))
            row = await cursor.fetchone()
            return row["value"] if row else None

    async def set(self, key: str, value: str) -> None:
        async with get_connection() as conn:
            await conn.execute(
                """
                INSERT INTO kv_slots (key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value, to_iso(utcnow())),
            )
            await conn.commit()

    async def delete(self, key: str) -> None:
        async with get_connection() as conn:
            await conn.execute("DELETE FROM kv_slots WHERE key = ?", (key,))
            await conn.commit()
