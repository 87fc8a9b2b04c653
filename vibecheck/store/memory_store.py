"""In-process state store."""

from vibecheck.store.base import StateStore


class MemoryStore(StateStore):
    """Dict-backed store. State lives only as long as the process."""

    def __init__(self):
        self._data: dict[str, str] = {}

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    async def clear(self) -> None:
        self._data.clear()

    async def close(self) -> None:
        pass
