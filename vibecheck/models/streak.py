"""Persisted check-in streak state."""

from datetime import date

from pydantic import BaseModel, Field


class StreakState(BaseModel):
    """Consecutive-day check-in counter for one user."""

    count: int = Field(default=0, ge=0)
    last_check_in: date | None = None
