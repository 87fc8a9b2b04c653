"""Ordered field accessors for loosely shaped upstream records.

Each logical value can live under several keys depending on the payload
version. The tables below list them in priority order; the first path that
resolves to a non-None value wins.
"""

from typing import Any

IDENTITY_PATHS = ("fid", "user_id", "userId")
USERNAME_PATHS = ("username", "display_name", "displayName")
DISPLAY_NAME_PATHS = ("display_name", "displayName", "username")
FOLLOWER_PATHS = (
    "follower_count",
    "followers_count",
    "followerCount",
    "totalFollowers",
    "followers",
)
CREATED_AT_PATHS = ("created_at", "createdAt", "registered_at", "registeredAt", "timestamp")

# Index 0 is the authoritative location for the reputation score.
TRUSTED_SCORE_PATH = "experimental.neynar_user_score"
SCORE_PATHS = (
    TRUSTED_SCORE_PATH,
    "score",
    "neynar_score",
    "neynarScore",
    "neynarUserScore",
)

PROVENANCE_KEY = "source"
TRUSTED_PROVENANCE = "trusted"


def resolve_path(record: dict, path: str) -> Any:
    """
    Walk a dotted path through nested dicts.

    Examples:
        resolve_path({"a": {"b": 1}}, "a.b") -> 1
        resolve_path({"a": 1}, "a.b") -> None
    """
    value: Any = record
    for part in path.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
        if value is None:
            return None
    return value


def first_present(record: dict, paths: tuple[str, ...]) -> tuple[Any, str | None]:
    """
    Return the first non-None value among paths and the path it came from.

    Returns:
        (value, path) or (None, None) if no path resolves
    """
    for path in paths:
        value = resolve_path(record, path)
        if value is not None:
            return value, path
    return None, None


def is_trusted_score(record: dict, path: str | None) -> bool:
    """Whether a score read from path counts as coming from the trusted source."""
    if path == TRUSTED_SCORE_PATH:
        return True
    return record.get(PROVENANCE_KEY) == TRUSTED_PROVENANCE
