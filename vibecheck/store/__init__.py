"""Persisted key-value state implementations."""

from vibecheck.store.base import StateStore
from vibecheck.store.memory_store import MemoryStore
from vibecheck.store.sqlite_store import SQLiteStore
from vibecheck.store.redis_store import RedisStore

__all__ = ["StateStore", "MemoryStore", "SQLiteStore", "RedisStore"]
