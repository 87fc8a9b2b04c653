"""Cache implementations."""

from vibecheck.cache.base import CacheProvider
from vibecheck.cache.sqlite_cache import SQLiteCache
from vibecheck.cache.redis_cache import RedisCache

__all__ = ["CacheProvider", "SQLiteCache", "RedisCache"]
