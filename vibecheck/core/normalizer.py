"""Normalization of untrusted upstream profile records.

A raw record either becomes a NormalizedProfile or is rejected with a
RejectionReason. A rejected record never yields a score.
"""

import math
from datetime import datetime, timezone

from vibecheck.core.age import account_age_days, as_utc, estimate_account_age_days, parse_created_at
from vibecheck.core.fields import (
    CREATED_AT_PATHS,
    DISPLAY_NAME_PATHS,
    FOLLOWER_PATHS,
    IDENTITY_PATHS,
    SCORE_PATHS,
    USERNAME_PATHS,
    first_present,
    is_trusted_score,
)
from vibecheck.core.tiers import assign_tier
from vibecheck.logging import get_logger
from vibecheck.models.normalization import NormalizationResult, RejectionReason
from vibecheck.models.profile import NormalizedProfile

DEFAULT_HIGH_SCORE_THRESHOLD = 0.95

_log = get_logger("normalizer")


def _reject(reason: RejectionReason, detail: str, **context) -> NormalizationResult:
    _log.warning("profile_rejected", reason=reason.value, detail=detail, **context)
    return NormalizationResult(rejection=reason, detail=detail)


def _describe(value) -> str:
    # Huge ints are not printed in full
    if isinstance(value, int) and value.bit_length() > 64:
        return f"{'-' if value < 0 else ''}<int of {value.bit_length()} bits>"
    return repr(value)


def parse_fid(value) -> int | None:
    """
    Coerce a user id to a positive int.

    Examples:
        3 -> 3
        "3" -> 3
        True -> None
        0 -> None
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 1 else None
    if isinstance(value, str) and value.strip().isdecimal():
        try:
            fid = int(value.strip())
        except ValueError:
            return None
        return fid if fid >= 1 else None
    return None


def parse_follower_count(value) -> int:
    """
    Coerce a follower count to a non-negative int, defaulting to 0.

    Examples:
        1234 -> 1234
        "1234" -> 1234
        12.0 -> 12
        -5 -> 0
        "lots" -> 0
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(0, value)
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return max(0, int(value))
        return 0
    if isinstance(value, str) and value.strip().isdecimal():
        try:
            return int(value.strip())
        except ValueError:
            return 0
    return 0


def _text(value) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def normalize_profile(
    record: dict | None,
    now: datetime | None = None,
    high_score_threshold: float = DEFAULT_HIGH_SCORE_THRESHOLD,
) -> NormalizationResult:
    """
    Turn a raw upstream record into a validated profile or a rejection.

    Args:
        record: Raw record from the fetch collaborator, None if the fetch failed
        now: Reference time for account age, defaults to current UTC time.
            A naive value is taken as UTC
        high_score_threshold: Scores above this need a trusted source

    Returns:
        NormalizationResult holding either a profile or a rejection reason
    """
    if record is None:
        return _reject(RejectionReason.MISSING_SCORE, "no upstream record")

    now = as_utc(now) if now is not None else datetime.now(timezone.utc)

    raw_fid, _ = first_present(record, IDENTITY_PATHS)
    fid = parse_fid(raw_fid)
    if fid is None:
        return _reject(RejectionReason.MISSING_IDENTITY, f"unusable user id {_describe(raw_fid)}")

    raw_followers, _ = first_present(record, FOLLOWER_PATHS)
    follower_count = parse_follower_count(raw_followers)

    raw_score, score_path = first_present(record, SCORE_PATHS)
    if raw_score is None:
        return _reject(RejectionReason.MISSING_SCORE, "no score field present", fid=fid)

    if isinstance(raw_score, bool) or not isinstance(raw_score, (int, float)):
        return _reject(
            RejectionReason.INVALID_SCORE_TYPE,
            f"score is {type(raw_score).__name__}, expected a number",
            fid=fid,
        )
    if isinstance(raw_score, float) and not math.isfinite(raw_score):
        return _reject(RejectionReason.INVALID_SCORE_TYPE, f"score is {raw_score!r}", fid=fid)

    if raw_score < 0 or raw_score > 100:
        return _reject(
            RejectionReason.SCORE_OUT_OF_RANGE,
            f"score {_describe(raw_score)} outside 0-100",
            fid=fid,
        )

    score = float(raw_score)
    if score > 1:
        # Percentage scale
        score = score / 100
    score = min(1.0, max(0.0, score))

    trusted = is_trusted_score(record, score_path)
    if score > high_score_threshold and not trusted:
        return _reject(
            RejectionReason.IMPLAUSIBLE_HIGH_SCORE,
            f"score {score:.4f} above {high_score_threshold} from untrusted field {score_path}",
            fid=fid,
        )

    raw_created, _ = first_present(record, CREATED_AT_PATHS)
    created = parse_created_at(raw_created)
    if created is not None:
        age_days = account_age_days(created, now)
        age_estimated = False
    else:
        age_days = estimate_account_age_days(fid, now)
        age_estimated = True

    username = _text(first_present(record, USERNAME_PATHS)[0]) or f"fid-{fid}"
    display_name = _text(first_present(record, DISPLAY_NAME_PATHS)[0]) or username

    profile = NormalizedProfile(
        fid=fid,
        username=username,
        display_name=display_name,
        score=score,
        tier=assign_tier(score),
        follower_count=follower_count,
        account_age_days=age_days,
        account_age_estimated=age_estimated,
        score_trusted=trusted,
        normalized_at=now,
    )
    return NormalizationResult(profile=profile)


class ScoreNormalizer:
    """
    Configured normalizer.

    Example:
        normalizer = ScoreNormalizer(high_score_threshold=0.95)
        result = normalizer.normalize({"fid": 3, "score": 87, "source": "trusted"})
        result.profile.tier  # Tier.MASTER
    """

    def __init__(self, high_score_threshold: float = DEFAULT_HIGH_SCORE_THRESHOLD):
        self.high_score_threshold = high_score_threshold

    def normalize(self, record: dict | None, now: datetime | None = None) -> NormalizationResult:
        return normalize_profile(record, now=now, high_score_threshold=self.high_score_threshold)
