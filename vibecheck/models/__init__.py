"""Pydantic models for vibecheck."""

from vibecheck.models.profile import NormalizedProfile, Tier, tier_rank
from vibecheck.models.normalization import NormalizationResult, RejectionReason
from vibecheck.models.streak import StreakState
from vibecheck.models.result import ProfileResult

__all__ = [
    "NormalizedProfile",
    "Tier",
    "tier_rank",
    "NormalizationResult",
    "RejectionReason",
    "StreakState",
    "ProfileResult",
]
