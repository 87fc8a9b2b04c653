"""Service orchestrator - coordinates fetching, normalization, caching and streaks."""

from datetime import date, datetime

import httpx

from vibecheck.cache.base import CacheProvider
from vibecheck.cache.redis_cache import RedisCache
from vibecheck.cache.sqlite_cache import SQLiteCache
from vibecheck.config import CacheBackend, StateBackend, VibeCheckConfig
from vibecheck.core.fetcher import fetch_user_record
from vibecheck.core.growth import ScoreHistory
from vibecheck.core.normalizer import ScoreNormalizer
from vibecheck.core.share import format_share_text
from vibecheck.core.streak import StreakTracker
from vibecheck.logging import configure_logging, get_logger
from vibecheck.models.normalization import RejectionReason
from vibecheck.models.result import ProfileResult
from vibecheck.models.streak import StreakState
from vibecheck.store.base import StateStore
from vibecheck.store.memory_store import MemoryStore
from vibecheck.store.redis_store import RedisStore
from vibecheck.store.sqlite_store import SQLiteStore


class VibeCheck:
    """
    High-level interface: profile lookups with caching, plus daily check-ins.

    Example:
        async with VibeCheck() as vc:
            result = await vc.get_profile(3)
            if result.success:
                print(result.profile.tier)
            state = await vc.check_in(3)
    """

    def __init__(self, config: VibeCheckConfig | None = None, store: StateStore | None = None):
        """
        Initialize service with optional configuration.

        Args:
            config: VibeCheckConfig instance, uses defaults if None
            store: State store to use instead of the configured backend
        """
        self.config = config or VibeCheckConfig()
        self.normalizer = ScoreNormalizer(self.config.high_score_threshold)
        self.tracker: StreakTracker | None = None
        self.history: ScoreHistory | None = None
        self._cache: CacheProvider | None = None
        self._store = store
        self._owns_store = store is None
        self._http: httpx.AsyncClient | None = None
        self._log = get_logger("vibecheck")

    def _build_cache(self) -> CacheProvider | None:
        if self.config.cache_backend == CacheBackend.SQLITE:
            return SQLiteCache(self.config.sqlite_path, self.config.cache_ttl_seconds)
        if self.config.cache_backend == CacheBackend.REDIS:
            return RedisCache(self.config.redis_url, self.config.cache_ttl_seconds)
        return None

    def _build_store(self) -> StateStore:
        if self.config.state_backend == StateBackend.SQLITE:
            return SQLiteStore(self.config.state_path)
        if self.config.state_backend == StateBackend.REDIS:
            return RedisStore(self.config.redis_url)
        return MemoryStore()

    async def __aenter__(self) -> "VibeCheck":
        """Async context manager entry - initialize resources."""
        configure_logging(self.config)

        self._cache = self._build_cache()
        if self._store is None:
            self._store = self._build_store()

        self.tracker = StreakTracker(self._store, self.config.streak_timezone)
        self.history = ScoreHistory(self._store)
        self._http = httpx.AsyncClient(timeout=self.config.request_timeout_s)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit - cleanup resources."""
        if self._http:
            await self._http.aclose()
            self._http = None
        if self._cache:
            await self._cache.close()
        if self._store and self._owns_store:
            await self._store.close()

    async def get_profile(self, fid: int, force_refresh: bool = False) -> ProfileResult:
        """
        Look up a user's normalized profile.

        Args:
            fid: Farcaster user id
            force_refresh: Skip cache and fetch fresh data

        Returns:
            ProfileResult; success=False with a rejection when data is unavailable
        """
        self._log.info("profile_lookup_start", fid=fid, force_refresh=force_refresh)
        streak = await self.tracker.peek(fid)

        if self._cache and not force_refresh:
            cached = await self._cache.get(fid)
            if cached:
                self._log.info("cache_hit", fid=fid, age_seconds=cached.cache_age_seconds)
                return cached.model_copy(update={"streak": streak})

        start = datetime.now()
        fetch_result = await fetch_user_record(fid, self.config, self._http)
        if not fetch_result.success:
            self._log.error("fetch_failed", fid=fid, error=fetch_result.error)

        normalized = self.normalizer.normalize(fetch_result.record)
        rejection = normalized.rejection
        detail = fetch_result.error or normalized.detail

        if normalized.ok and normalized.profile.fid != fid:
            rejection = RejectionReason.MISSING_IDENTITY
            detail = f"upstream returned fid {normalized.profile.fid} for {fid}"
            self._log.warning("profile_rejected", fid=fid, reason=rejection.value, detail=detail)

        duration_ms = (datetime.now() - start).total_seconds() * 1000

        if rejection is not None:
            return ProfileResult(
                success=False,
                fid=fid,
                rejection=rejection,
                streak=streak,
                error_message=detail,
                fetched_at=datetime.now(),
                duration_ms=duration_ms,
            )

        profile = normalized.profile
        score_delta = await self.history.record(fid, profile.score)
        result = ProfileResult(
            success=True,
            fid=fid,
            profile=profile,
            streak=streak,
            score_delta=score_delta,
            fetched_at=datetime.now(),
            duration_ms=duration_ms,
        )

        self._log.info(
            "profile_loaded",
            fid=fid,
            score=profile.score,
            tier=profile.tier.value,
            source=fetch_result.source,
            duration_ms=duration_ms,
        )

        if self._cache:
            await self._cache.set(fid, result)

        return result

    async def get_many(self, fids: list[int], force_refresh: bool = False) -> list[ProfileResult]:
        """Look up several users sequentially, results in input order."""
        return [await self.get_profile(fid, force_refresh) for fid in fids]

    async def check_in(self, fid: int, today: date | None = None) -> StreakState:
        """Record today's check-in for a user."""
        return await self.tracker.check_in(fid, today)

    async def peek_streak(self, fid: int) -> int:
        """Current streak count for display, without checking in."""
        return await self.tracker.peek(fid)

    async def share_text(self, fid: int) -> str | None:
        """
        Share message for a user's current score and streak.

        Returns:
            Formatted text, or None when no profile data is available
        """
        result = await self.get_profile(fid)
        if not result.success or result.profile is None:
            return None
        return format_share_text(result.profile, result.streak, self.config.app_url)

    async def invalidate_cache(self, fid: int) -> None:
        """Remove a specific user from cache."""
        if self._cache:
            await self._cache.invalidate(fid)

    async def clear_cache(self) -> None:
        """Clear all cached profiles."""
        if self._cache:
            await self._cache.clear()
