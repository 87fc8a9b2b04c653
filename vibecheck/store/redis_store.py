"""Redis state store."""

from typing import Optional

import redis.asyncio as redis

from vibecheck.store.base import StateStore


class RedisStore(StateStore):
    """
    Redis-based state store. Keys never expire.

    Example:
        store = RedisStore("redis://localhost:6379/0")
        async with store:
            await store.set("streak:3", state_json)
    """

    def __init__(self, redis_url: str = "redis://localhost:6379/0"):
        self.redis_url = redis_url
        self._client: Optional[redis.Redis] = None
        self._key_prefix = "vibecheck:state:"

    async def _ensure_client(self) -> "redis.Redis":
        """Get or create Redis client."""
        if self._client is None:
            self._client = redis.from_url(self.redis_url, decode_responses=True)
        return self._client

    def _make_key(self, key: str) -> str:
        return f"{self._key_prefix}{key}"

    async def get(self, key: str) -> str | None:
        client = await self._ensure_client()
        return await client.get(self._make_key(key))

    async def set(self, key: str, value: str) -> None:
        client = await self._ensure_client()
        await client.set(self._make_key(key), value)

    async def delete(self, key: str) -> None:
        client = await self._ensure_client()
        await client.delete(self._make_key(key))

    async def clear(self) -> None:
        client = await self._ensure_client()
        cursor = 0
        while True:
            cursor, keys = await client.scan(cursor, match=f"{self._key_prefix}*")
            if keys:
                await client.delete(*keys)
            if cursor == 0:
                break

    async def close(self) -> None:
        """Close Redis connection."""
        if self._client:
            await self._client.aclose()
            self._client = None
