"""Account age derivation from creation timestamps or user ids."""

from datetime import datetime, timezone

# Epoch values above this are milliseconds rather than seconds.
MILLISECOND_THRESHOLD = 1e12

ESTIMATE_ANCHOR = datetime(2021, 1, 1, tzinfo=timezone.utc)

# (exclusive upper fid bound, max age in days); lower ids registered earlier.
ESTIMATE_BUCKETS = (
    (1_000, 1460),
    (10_000, 1095),
    (100_000, 730),
    (500_000, 365),
    (1_000_000, 180),
)
ESTIMATE_FLOOR_DAYS = 90


def as_utc(moment: datetime) -> datetime:
    """Treat a naive datetime as UTC; aware values pass through unchanged."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def parse_created_at(value) -> datetime | None:
    """
    Parse a creation timestamp into an aware UTC datetime.

    Examples:
        1700000000 -> 2023-11-14 22:13:20+00:00
        1700000000000 -> 2023-11-14 22:13:20+00:00
        "2023-11-14T22:13:20.000Z" -> 2023-11-14 22:13:20+00:00
        "not a date" -> None
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        if value <= 0:
            return None
        seconds = value / 1000 if value > MILLISECOND_THRESHOLD else value
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed

    return None


def account_age_days(created: datetime, now: datetime) -> int:
    """Whole days between created and now, never negative."""
    return max(0, (as_utc(now) - as_utc(created)).days)


def estimate_account_age_days(fid: int, now: datetime) -> int:
    """
    Estimate account age from the user id when no timestamp is usable.

    The estimate is the time elapsed since a fixed anchor, capped by the
    bucket the id falls in.
    """
    elapsed = max(0, (as_utc(now) - ESTIMATE_ANCHOR).days)
    cap = ESTIMATE_FLOOR_DAYS
    for upper, bucket_cap in ESTIMATE_BUCKETS:
        if fid < upper:
            cap = bucket_cap
            break
    return min(elapsed, cap)
