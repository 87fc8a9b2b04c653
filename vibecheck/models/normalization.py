"""Outcome of normalizing one raw profile record."""

from enum import Enum

from pydantic import BaseModel, model_validator

from vibecheck.models.profile import NormalizedProfile


class RejectionReason(str, Enum):
    """Why a raw record could not be turned into a profile."""
    MISSING_SCORE = "missing_score"
    INVALID_SCORE_TYPE = "invalid_score_type"
    SCORE_OUT_OF_RANGE = "score_out_of_range"
    IMPLAUSIBLE_HIGH_SCORE = "implausible_high_score"
    MISSING_IDENTITY = "missing_identity"


class NormalizationResult(BaseModel):
    """Either a profile or a rejection reason, never both."""

    profile: NormalizedProfile | None = None
    rejection: RejectionReason | None = None
    detail: str | None = None

    @model_validator(mode="after")
    def _exactly_one_outcome(self) -> "NormalizationResult":
        if (self.profile is None) == (self.rejection is None):
            raise ValueError("exactly one of profile or rejection must be set")
        return self

    @property
    def ok(self) -> bool:
        return self.profile is not None
