"""Abstract cache interface."""

from abc import ABC, abstractmethod

from vibecheck.models.result import ProfileResult


class CacheProvider(ABC):
    """Abstract base class for profile cache implementations."""

    @abstractmethod
    async def get(self, fid: int) -> ProfileResult | None:
        """
        Retrieve cached result for a user id.

        Args:
            fid: Farcaster user id

        Returns:
            Cached ProfileResult or None if miss/expired
        """
        ...

    @abstractmethod
    async def set(self, fid: int, result: ProfileResult, ttl_seconds: int | None = None) -> None:
        """
        Store result in cache.

        Args:
            fid: Farcaster user id
            result: ProfileResult to cache
            ttl_seconds: Optional TTL override
        """
        ...

    @abstractmethod
    async def invalidate(self, fid: int) -> None:
        """Remove specific entry from cache."""
        ...

    @abstractmethod
    async def clear(self) -> None:
        """Clear all cached entries."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Cleanup connections and resources."""
        ...

    async def __aenter__(self) -> "CacheProvider":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit - cleanup."""
        await self.close()
