"""Unit tests for share text formatting."""

from datetime import datetime, timezone

import pytest

from vibecheck.core.share import format_days, format_percent, format_share_text
from vibecheck.models.profile import NormalizedProfile, Tier


@pytest.fixture
def profile() -> NormalizedProfile:
    return NormalizedProfile(
        fid=3,
        username="dwr.eth",
        display_name="Dan Romero",
        score=0.87,
        tier=Tier.MASTER,
        follower_count=1200,
        account_age_days=900,
        normalized_at=datetime(2024, 1, 11, tzinfo=timezone.utc),
    )


class TestFormatting:
    """Percent and day formatting."""

    @pytest.mark.parametrize("score,expected", [
        (0.87, "87.0%"),
        (0.1234, "12.3%"),
        (0.0, "0.0%"),
        (1.0, "100.0%"),
    ])
    def test_format_percent(self, score, expected):
        assert format_percent(score) == expected

    @pytest.mark.parametrize("days,expected", [(0, "0 days"), (1, "1 day"), (6, "6 days")])
    def test_format_days(self, days, expected):
        assert format_days(days) == expected


class TestShareText:
    """Share message layout."""

    def test_full_message(self, profile):
        text = format_share_text(profile, streak=6, app_url="https://example.app")
        assert text.splitlines() == [
            "My neynar score is 87.0% 🔥",
            "Tier: MASTER",
            "Check-in streak: 6 days",
            "",
            "Check your neynar score and see where you rank! 👇",
            "https://example.app",
        ]

    def test_streak_optional(self, profile):
        text = format_share_text(profile)
        assert "streak" not in text
        assert text.endswith("https://vibecheck-olive.vercel.app")
