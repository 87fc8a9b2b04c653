"""Profile lookup result wrapper model."""

from datetime import datetime

from pydantic import BaseModel

from vibecheck.models.normalization import RejectionReason
from vibecheck.models.profile import NormalizedProfile


class ProfileResult(BaseModel):
    """Wrapper for a complete profile lookup as handed to presentation."""

    success: bool
    fid: int
    profile: NormalizedProfile | None = None
    rejection: RejectionReason | None = None
    streak: int = 1
    score_delta: float | None = None
    cached: bool = False
    cache_age_seconds: float | None = None
    error_message: str | None = None
    fetched_at: datetime
    duration_ms: float = 0.0
