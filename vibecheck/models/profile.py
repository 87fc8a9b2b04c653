"""Normalized profile data model."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class Tier(str, Enum):
    """Reputation tier labels, declared from lowest to highest."""
    NEWCOMER = "NEWCOMER"
    NOVICE = "NOVICE"
    RISING = "RISING"
    ACTIVE = "ACTIVE"
    SKILLED = "SKILLED"
    STRONG = "STRONG"
    EXPERT = "EXPERT"
    ELITE = "ELITE"
    MASTER = "MASTER"
    LEGENDARY = "LEGENDARY"


def tier_rank(tier: Tier) -> int:
    """Return the 0-based rank of a tier (NEWCOMER is 0)."""
    return list(Tier).index(tier)


class NormalizedProfile(BaseModel):
    """Validated reputation profile derived from an upstream record."""

    fid: int = Field(ge=1)
    username: str
    display_name: str
    score: float = Field(ge=0.0, le=1.0)
    tier: Tier
    follower_count: int = Field(default=0, ge=0)
    account_age_days: int = Field(default=0, ge=0)
    account_age_estimated: bool = False
    score_trusted: bool = False
    normalized_at: datetime
