"""Score history for day-over-day growth statistics."""

from vibecheck.logging import get_logger
from vibecheck.store.base import StateStore


class ScoreHistory:
    """Remembers the last accepted score per user to report a delta."""

    KEY_TEMPLATE = "score:{fid}"

    def __init__(self, store: StateStore):
        self.store = store
        self._log = get_logger("growth")

    def _key(self, fid: int) -> str:
        return self.KEY_TEMPLATE.format(fid=fid)

    async def previous(self, fid: int) -> float | None:
        raw = await self.store.get(self._key(fid))
        if raw is None:
            return None
        try:
            return float(raw)
        except ValueError:
            self._log.warning("score_history_corrupt", fid=fid, value=raw)
            return None

    async def record(self, fid: int, score: float) -> float | None:
        """
        Store a newly accepted score and return the change since the last one.

        Args:
            fid: User id
            score: Normalized score in [0, 1]

        Returns:
            score - previous score, or None when there is no positive previous score
        """
        previous = await self.previous(fid)
        delta = score - previous if previous is not None and previous > 0 else None

        if 0 < score <= 1:
            await self.store.set(self._key(fid), repr(score))

        return delta
