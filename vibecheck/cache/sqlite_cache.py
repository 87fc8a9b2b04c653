"""SQLite-based cache implementation."""

import time
from pathlib import Path

import aiosqlite
from pydantic import ValidationError

from vibecheck.cache.base import CacheProvider
from vibecheck.exceptions import CacheError
from vibecheck.models.result import ProfileResult


class SQLiteCache(CacheProvider):
    """SQLite-based local cache using aiosqlite."""

    def __init__(self, db_path: str = ".vibecheck_cache.db", default_ttl: int = 300):
        """
        Initialize SQLite cache.

        Args:
            db_path: Path to SQLite database file
            default_ttl: Default TTL in seconds (5 minutes)
        """
        self.db_path = Path(db_path)
        self.default_ttl = default_ttl
        self._db: aiosqlite.Connection | None = None

    async def _ensure_db(self) -> aiosqlite.Connection:
        """Ensure database connection and schema exist."""
        if self._db is None:
            try:
                self._db = await aiosqlite.connect(self.db_path)
                await self._db.execute("""
                    CREATE TABLE IF NOT EXISTS profile_cache (
                        fid INTEGER PRIMARY KEY,
                        result_json TEXT NOT NULL,
                        created_at REAL NOT NULL,
                        expires_at REAL NOT NULL
                    )
                """)
                await self._db.execute(
                    "CREATE INDEX IF NOT EXISTS idx_profile_expires ON profile_cache(expires_at)"
                )
                await self._db.commit()
            except aiosqlite.Error as e:
                raise CacheError(f"Cannot open cache database {self.db_path}: {e}") from e
        return self._db

    async def get(self, fid: int) -> ProfileResult | None:
        """Retrieve cached result, None if miss or expired."""
        db = await self._ensure_db()
        now = time.time()

        async with db.execute(
            "SELECT result_json, created_at FROM profile_cache WHERE fid = ? AND expires_at > ?",
            (fid, now),
        ) as cursor:
            row = await cursor.fetchone()

        if row is None:
            return None

        result_json, created_at = row
        try:
            result = ProfileResult.model_validate_json(result_json)
        except ValidationError:
            await self.invalidate(fid)
            return None

        return result.model_copy(
            update={"cached": True, "cache_age_seconds": now - created_at}
        )

    async def set(
        self, fid: int, result: ProfileResult, ttl_seconds: int | None = None
    ) -> None:
        """Store result in cache."""
        db = await self._ensure_db()
        now = time.time()
        ttl = ttl_seconds if ttl_seconds is not None else self.default_ttl

        await db.execute(
            """
            INSERT OR REPLACE INTO profile_cache (fid, result_json, created_at, expires_at)
            VALUES (?, ?, ?, ?)
            """,
            (fid, result.model_dump_json(), now, now + ttl),
        )
        await db.commit()

    async def invalidate(self, fid: int) -> None:
        """Remove specific entry."""
        db = await self._ensure_db()
        await db.execute("DELETE FROM profile_cache WHERE fid = ?", (fid,))
        await db.commit()

    async def clear(self) -> None:
        """Clear all cached entries."""
        db = await self._ensure_db()
        await db.execute("DELETE FROM profile_cache")
        await db.commit()

    async def cleanup_expired(self) -> int:
        """
        Remove expired entries from cache.

        Returns:
            Number of entries removed
        """
        db = await self._ensure_db()
        cursor = await db.execute(
            "DELETE FROM profile_cache WHERE expires_at <= ?", (time.time(),)
        )
        await db.commit()
        return cursor.rowcount

    async def close(self) -> None:
        """Close database connection."""
        if self._db is not None:
            await self._db.close()
            self._db = None
