"""Abstract key-value store for persisted per-user state."""

from abc import ABC, abstractmethod


class StateStore(ABC):
    """Abstract base class for durable key-value state."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """
        Read a stored value.

        Args:
            key: State key, e.g. "streak:3"

        Returns:
            Stored string or None if absent
        """
        ...

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """
        Write a value, replacing any previous one.

        Args:
            key: State key
            value: Serialized state
        """
        ...

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove a key if present."""
        ...

    @abstractmethod
    async def clear(self) -> None:
        """Remove all stored state."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Cleanup connections and resources."""
        ...

    async def __aenter__(self) -> "StateStore":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit - cleanup."""
        await self.close()
