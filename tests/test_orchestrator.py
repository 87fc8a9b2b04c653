"""Unit tests for the VibeCheck orchestrator - mocked fetcher, no internet."""

from datetime import date, timedelta
from unittest.mock import AsyncMock, patch

import pytest

from vibecheck.config import CacheBackend, StateBackend, VibeCheckConfig
from vibecheck.core.fetcher import FetchResult
from vibecheck.core.orchestrator import VibeCheck
from vibecheck.models.normalization import RejectionReason
from vibecheck.models.profile import Tier
from vibecheck.store.memory_store import MemoryStore


def ok_fetch(score=0.87, fid=3, trusted=True) -> FetchResult:
    record = {"fid": fid, "username": "dwr.eth", "display_name": "Dan Romero",
              "follower_count": 1200, "score": score}
    if trusted:
        record["source"] = "trusted"
    return FetchResult(record=record, success=True, source="neynar")


def failed_fetch() -> FetchResult:
    return FetchResult(record=None, success=False, error="neynar: boom; hub: boom")


@pytest.fixture
def config() -> VibeCheckConfig:
    return VibeCheckConfig(cache_backend=CacheBackend.NONE, state_backend=StateBackend.MEMORY)


@pytest.fixture
def cached_config(tmp_path) -> VibeCheckConfig:
    return VibeCheckConfig(
        cache_backend=CacheBackend.SQLITE,
        sqlite_path=str(tmp_path / "cache.db"),
        cache_ttl_seconds=60,
        state_backend=StateBackend.MEMORY,
    )


class TestVibeCheckInit:
    """Service construction and context management."""

    def test_default_config(self):
        vc = VibeCheck()
        assert vc.config is not None
        assert vc.normalizer.high_score_threshold == 0.95

    @pytest.mark.asyncio
    async def test_context_manager_initializes_cache(self, cached_config):
        async with VibeCheck(cached_config) as vc:
            assert vc._cache is not None
            assert vc.tracker is not None

    @pytest.mark.asyncio
    async def test_no_cache_when_disabled(self, config):
        async with VibeCheck(config) as vc:
            assert vc._cache is None

    @pytest.mark.asyncio
    async def test_injected_store_used(self, config):
        store = MemoryStore()
        async with VibeCheck(config, store=store) as vc:
            await vc.check_in(3, date(2024, 1, 10))
        assert await store.get("streak:3") is not None


class TestGetProfile:
    """Profile lookups with a mocked fetcher."""

    @pytest.mark.asyncio
    async def test_success(self, config):
        with patch("vibecheck.core.orchestrator.fetch_user_record", new_callable=AsyncMock) as mock_fetch:
            mock_fetch.return_value = ok_fetch()

            async with VibeCheck(config) as vc:
                result = await vc.get_profile(3)

        assert result.success is True
        assert result.profile.score == 0.87
        assert result.profile.tier == Tier.MASTER
        assert result.profile.follower_count == 1200
        assert result.streak == 1
        assert result.rejection is None
        mock_fetch.assert_called_once()

    @pytest.mark.asyncio
    async def test_fetch_failure_is_data_unavailable(self, config):
        with patch("vibecheck.core.orchestrator.fetch_user_record", new_callable=AsyncMock) as mock_fetch:
            mock_fetch.return_value = failed_fetch()

            async with VibeCheck(config) as vc:
                result = await vc.get_profile(3)

        assert result.success is False
        assert result.profile is None
        assert result.rejection == RejectionReason.MISSING_SCORE
        assert "boom" in result.error_message

    @pytest.mark.asyncio
    async def test_hub_record_without_score_rejected(self, config):
        hub = FetchResult(record={"fid": 3, "username": "dwr.eth"}, success=True, source="hub")
        with patch("vibecheck.core.orchestrator.fetch_user_record", new_callable=AsyncMock) as mock_fetch:
            mock_fetch.return_value = hub

            async with VibeCheck(config) as vc:
                result = await vc.get_profile(3)

        assert result.rejection == RejectionReason.MISSING_SCORE
        assert result.profile is None

    @pytest.mark.asyncio
    async def test_implausible_score_rejected(self, config):
        with patch("vibecheck.core.orchestrator.fetch_user_record", new_callable=AsyncMock) as mock_fetch:
            mock_fetch.return_value = ok_fetch(score=0.99, trusted=False)

            async with VibeCheck(config) as vc:
                result = await vc.get_profile(3)

        assert result.rejection == RejectionReason.IMPLAUSIBLE_HIGH_SCORE

    @pytest.mark.asyncio
    async def test_mismatched_fid_rejected(self, config):
        with patch("vibecheck.core.orchestrator.fetch_user_record", new_callable=AsyncMock) as mock_fetch:
            mock_fetch.return_value = ok_fetch(fid=4)

            async with VibeCheck(config) as vc:
                result = await vc.get_profile(3)

        assert result.rejection == RejectionReason.MISSING_IDENTITY

    @pytest.mark.asyncio
    async def test_get_many_keeps_order(self, config):
        with patch("vibecheck.core.orchestrator.fetch_user_record", new_callable=AsyncMock) as mock_fetch:
            mock_fetch.side_effect = [ok_fetch(fid=3), failed_fetch()]

            async with VibeCheck(config) as vc:
                results = await vc.get_many([3, 4])

        assert [r.fid for r in results] == [3, 4]
        assert [r.success for r in results] == [True, False]


class TestGrowth:
    """Score delta against the previously accepted score."""

    @pytest.mark.asyncio
    async def test_delta_between_lookups(self, config):
        with patch("vibecheck.core.orchestrator.fetch_user_record", new_callable=AsyncMock) as mock_fetch:
            mock_fetch.side_effect = [ok_fetch(score=0.80), ok_fetch(score=0.85)]

            async with VibeCheck(config) as vc:
                first = await vc.get_profile(3)
                second = await vc.get_profile(3)

        assert first.score_delta is None
        assert second.score_delta == pytest.approx(0.05)

    @pytest.mark.asyncio
    async def test_rejection_leaves_history_untouched(self, config):
        with patch("vibecheck.core.orchestrator.fetch_user_record", new_callable=AsyncMock) as mock_fetch:
            mock_fetch.side_effect = [ok_fetch(score=0.80), failed_fetch(), ok_fetch(score=0.70)]

            async with VibeCheck(config) as vc:
                await vc.get_profile(3)
                await vc.get_profile(3)
                third = await vc.get_profile(3)

        assert third.score_delta == pytest.approx(-0.10)


class TestCaching:
    """Freshness window behaviour."""

    @pytest.mark.asyncio
    async def test_cache_hit_skips_fetch(self, cached_config):
        with patch("vibecheck.core.orchestrator.fetch_user_record", new_callable=AsyncMock) as mock_fetch:
            mock_fetch.return_value = ok_fetch()

            async with VibeCheck(cached_config) as vc:
                await vc.get_profile(3)
                second = await vc.get_profile(3)

        assert mock_fetch.call_count == 1
        assert second.cached is True
        assert second.profile.score == 0.87

    @pytest.mark.asyncio
    async def test_force_refresh_skips_cache(self, cached_config):
        with patch("vibecheck.core.orchestrator.fetch_user_record", new_callable=AsyncMock) as mock_fetch:
            mock_fetch.return_value = ok_fetch()

            async with VibeCheck(cached_config) as vc:
                await vc.get_profile(3)
                await vc.get_profile(3, force_refresh=True)

        assert mock_fetch.call_count == 2

    @pytest.mark.asyncio
    async def test_rejections_not_cached(self, cached_config):
        with patch("vibecheck.core.orchestrator.fetch_user_record", new_callable=AsyncMock) as mock_fetch:
            mock_fetch.side_effect = [failed_fetch(), ok_fetch()]

            async with VibeCheck(cached_config) as vc:
                first = await vc.get_profile(3)
                second = await vc.get_profile(3)

        assert first.success is False
        assert second.success is True
        assert second.cached is False

    @pytest.mark.asyncio
    async def test_cache_hit_reflects_new_streak(self, cached_config):
        with patch("vibecheck.core.orchestrator.fetch_user_record", new_callable=AsyncMock) as mock_fetch:
            mock_fetch.return_value = ok_fetch()

            async with VibeCheck(cached_config) as vc:
                await vc.check_in(3, date.today() - timedelta(days=1))
                await vc.get_profile(3)
                await vc.check_in(3, date.today())
                second = await vc.get_profile(3)

        assert second.cached is True
        assert second.streak == 2

    @pytest.mark.asyncio
    async def test_invalidate_cache(self, cached_config):
        with patch("vibecheck.core.orchestrator.fetch_user_record", new_callable=AsyncMock) as mock_fetch:
            mock_fetch.return_value = ok_fetch()

            async with VibeCheck(cached_config) as vc:
                await vc.get_profile(3)
                await vc.invalidate_cache(3)
                await vc.get_profile(3)

        assert mock_fetch.call_count == 2


class TestCheckInAndShare:
    """Streak and share entry points."""

    @pytest.mark.asyncio
    async def test_check_in_then_peek(self, config):
        async with VibeCheck(config) as vc:
            await vc.check_in(3, date(2024, 1, 10))
            state = await vc.check_in(3, date(2024, 1, 11))
            assert state.count == 2
            assert await vc.peek_streak(3) == 2

    @pytest.mark.asyncio
    async def test_share_text(self, config):
        with patch("vibecheck.core.orchestrator.fetch_user_record", new_callable=AsyncMock) as mock_fetch:
            mock_fetch.return_value = ok_fetch()

            async with VibeCheck(config) as vc:
                text = await vc.share_text(3)

        assert "87.0%" in text
        assert "MASTER" in text
        assert "1 day" in text
        assert config.app_url in text

    @pytest.mark.asyncio
    async def test_share_text_unavailable(self, config):
        with patch("vibecheck.core.orchestrator.fetch_user_record", new_callable=AsyncMock) as mock_fetch:
            mock_fetch.return_value = failed_fetch()

            async with VibeCheck(config) as vc:
                assert await vc.share_text(3) is None
