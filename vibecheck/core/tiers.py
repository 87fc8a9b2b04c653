"""Score to tier mapping."""

from vibecheck.models.profile import Tier

# Evaluated top-down; lower bound inclusive.
TIER_THRESHOLDS: tuple[tuple[float, Tier], ...] = (
    (0.90, Tier.LEGENDARY),
    (0.80, Tier.MASTER),
    (0.70, Tier.ELITE),
    (0.60, Tier.EXPERT),
    (0.50, Tier.STRONG),
    (0.40, Tier.SKILLED),
    (0.30, Tier.ACTIVE),
    (0.20, Tier.RISING),
    (0.10, Tier.NOVICE),
)


def assign_tier(score: float) -> Tier:
    """
    Map a normalized 0-1 score to its tier.

    Examples:
        0.87 -> Tier.MASTER
        0.80 -> Tier.MASTER
        0.05 -> Tier.NEWCOMER

    Raises:
        ValueError: If score is outside [0, 1]
    """
    if not 0.0 <= score <= 1.0:
        raise ValueError(f"score must be within [0, 1], got {score!r}")

    for threshold, tier in TIER_THRESHOLDS:
        if score >= threshold:
            return tier
    return Tier.NEWCOMER
