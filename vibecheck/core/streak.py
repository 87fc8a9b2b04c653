"""Daily check-in streak tracking.

Days are calendar dates in a single configured timezone (UTC by default),
so a user's streak does not depend on where their device happens to be.
"""

from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from pydantic import ValidationError

from vibecheck.exceptions import ConfigError
from vibecheck.logging import get_logger
from vibecheck.models.streak import StreakState
from vibecheck.store.base import StateStore


def peek_streak(state: StreakState | None) -> int:
    """Streak count for display. Never 0; an unset streak shows as 1."""
    if state is None or state.count <= 0:
        return 1
    return state.count


def advance_streak(state: StreakState | None, today: date) -> StreakState:
    """
    Apply a check-in on `today` and return the new state.

    Examples:
        (5, 2024-01-10) on 2024-01-11 -> (6, 2024-01-11)
        (5, 2024-01-10) on 2024-01-10 -> (5, 2024-01-10)
        (5, 2024-01-10) on 2024-01-20 -> (1, 2024-01-20)
    """
    state = state or StreakState()
    last = state.last_check_in

    if last is None:
        count = 1
    elif last == today:
        count = max(state.count, 1)
    elif last == today - timedelta(days=1):
        count = state.count + 1
    else:
        # Gap of two or more days, or a last check-in dated after today
        count = 1

    return StreakState(count=count, last_check_in=today)


def today_in(tz_name: str) -> date:
    """Current calendar date in the named IANA timezone."""
    return datetime.now(ZoneInfo(tz_name)).date()


class StreakTracker:
    """
    Per-user streak counter backed by a StateStore.

    Example:
        async with MemoryStore() as store:
            tracker = StreakTracker(store)
            state = await tracker.check_in(3)
            print(state.count)
    """

    KEY_TEMPLATE = "streak:{fid}"

    def __init__(self, store: StateStore, timezone: str = "UTC"):
        """
        Initialize tracker.

        Args:
            store: Key-value store for persisted state
            timezone: IANA timezone whose calendar day defines a check-in day

        Raises:
            ConfigError: If the timezone is unknown
        """
        try:
            ZoneInfo(timezone)
        except (KeyError, ValueError) as e:
            raise ConfigError(f"Unknown streak timezone: {timezone}") from e

        self.store = store
        self.timezone = timezone
        self._log = get_logger("streak")

    def _key(self, fid: int) -> str:
        return self.KEY_TEMPLATE.format(fid=fid)

    async def load(self, fid: int) -> StreakState:
        """Read the stored state, empty state if none or unreadable."""
        raw = await self.store.get(self._key(fid))
        if raw is None:
            return StreakState()
        try:
            return StreakState.model_validate_json(raw)
        except ValidationError:
            self._log.warning("streak_state_corrupt", fid=fid)
            return StreakState()

    async def peek(self, fid: int) -> int:
        """Read-only display count."""
        return peek_streak(await self.load(fid))

    async def check_in(self, fid: int, today: date | None = None) -> StreakState:
        """
        Record a check-in and persist the resulting state.

        Args:
            fid: User id
            today: Check-in day, defaults to the current day in the tracker's timezone

        Returns:
            The new StreakState
        """
        today = today or today_in(self.timezone)
        previous = await self.load(fid)
        state = advance_streak(previous, today)
        await self.store.set(self._key(fid), state.model_dump_json())

        self._log.info(
            "check_in",
            fid=fid,
            previous_count=previous.count,
            count=state.count,
            day=today.isoformat(),
        )
        return state
