"""Redis cache implementation."""

import time
from typing import Optional

import redis.asyncio as redis
from pydantic import ValidationError

from vibecheck.cache.base import CacheProvider
from vibecheck.models.result import ProfileResult


class RedisCache(CacheProvider):
    """
    Redis-based cache provider.

    Example:
        cache = RedisCache("redis://localhost:6379/0")
        async with cache:
            await cache.set(3, result)
            cached = await cache.get(3)
    """

    def __init__(self, redis_url: str = "redis://localhost:6379/0", default_ttl: int = 300):
        """
        Initialize Redis cache.

        Args:
            redis_url: Redis connection URL
            default_ttl: Default TTL in seconds
        """
        self.redis_url = redis_url
        self.default_ttl = default_ttl
        self._client: Optional[redis.Redis] = None
        self._key_prefix = "vibecheck:profile:"

    async def _ensure_client(self) -> "redis.Redis":
        """Get or create Redis client."""
        if self._client is None:
            self._client = redis.from_url(self.redis_url)
        return self._client

    def _make_key(self, fid: int) -> str:
        return f"{self._key_prefix}{fid}"

    async def get(self, fid: int) -> ProfileResult | None:
        """Retrieve cached result for a user id."""
        client = await self._ensure_client()
        key = self._make_key(fid)

        pipe = client.pipeline()
        pipe.get(key)
        pipe.get(f"{key}:ts")
        data, timestamp = await pipe.execute()

        if data is None:
            return None

        try:
            result = ProfileResult.model_validate_json(data)
        except ValidationError:
            # Invalid cached data, remove it
            await self.invalidate(fid)
            return None

        update = {"cached": True}
        if timestamp:
            update["cache_age_seconds"] = time.time() - float(timestamp)
        return result.model_copy(update=update)

    async def set(
        self,
        fid: int,
        result: ProfileResult,
        ttl_seconds: int | None = None,
    ) -> None:
        """Cache result for a user id."""
        client = await self._ensure_client()
        key = self._make_key(fid)
        ttl = ttl_seconds if ttl_seconds is not None else self.default_ttl

        pipe = client.pipeline()
        pipe.setex(key, ttl, result.model_dump_json())
        pipe.setex(f"{key}:ts", ttl, str(time.time()))
        await pipe.execute()

    async def invalidate(self, fid: int) -> None:
        """Remove cached result for a user id."""
        client = await self._ensure_client()
        key = self._make_key(fid)
        await client.delete(key, f"{key}:ts")

    async def clear(self) -> None:
        """Clear all cached profiles."""
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

    async def ping(self) -> bool:
        """Check if Redis is available."""
        try:
            client = await self._ensure_client()
            return await client.ping()
        except redis.RedisError:
            return False
