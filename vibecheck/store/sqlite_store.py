"""SQLite-based state store."""

import time
from pathlib import Path

import aiosqlite

from vibecheck.exceptions import StoreError
from vibecheck.store.base import StateStore


class SQLiteStore(StateStore):
    """SQLite-based durable state using aiosqlite."""

    def __init__(self, db_path: str = ".vibecheck_state.db"):
        """
        Initialize SQLite store.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = Path(db_path)
        self._db: aiosqlite.Connection | None = None

    async def _ensure_db(self) -> aiosqlite.Connection:
        """Ensure database connection and schema exist."""
        if self._db is None:
            try:
                self._db = await aiosqlite.connect(self.db_path)
                await self._db.execute("""
                    CREATE TABLE IF NOT EXISTS state (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL,
                        updated_at REAL NOT NULL
                    )
                """)
                await self._db.commit()
            except aiosqlite.Error as e:
                raise StoreError(f"Cannot open state database {self.db_path}: {e}") from e
        return self._db

    async def get(self, key: str) -> str | None:
        db = await self._ensure_db()
        async with db.execute("SELECT value FROM state WHERE key = ?", (key,)) as cursor:
            row = await cursor.fetchone()
        return row[0] if row else None

    async def set(self, key: str, value: str) -> None:
        db = await self._ensure_db()
        await db.execute(
            "INSERT OR REPLACE INTO state (key, value, updated_at) VALUES (?, ?, ?)",
            (key, value, time.time()),
        )
        await db.commit()

    async def delete(self, key: str) -> None:
        db = await self._ensure_db()
        await db.execute("DELETE FROM state WHERE key = ?", (key,))
        await db.commit()

    async def clear(self) -> None:
        db = await self._ensure_db()
        await db.execute("DELETE FROM state")
        await db.commit()

    async def close(self) -> None:
        """Close database connection."""
        if self._db is not None:
            await self._db.close()
            self._db = None
