"""FastAPI web server for vibecheck."""

from contextlib import asynccontextmanager
from datetime import date, datetime
from typing import Optional

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

from vibecheck import VibeCheck, VibeCheckConfig, __version__
from vibecheck.core.exporter import to_dict


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str


class CheckInResponse(BaseModel):
    """Streak state after a check-in."""

    fid: int
    streak: int
    last_check_in: date


class ShareResponse(BaseModel):
    """Pre-formatted share message."""

    fid: int
    text: str


class ConfigResponse(BaseModel):
    """Current service configuration with descriptions."""

    cache_backend: str = Field(
        ...,
        description="Storage backend for cached profiles. "
        "Options: 'sqlite' (local file), 'redis' (remote server), 'none' (disabled).",
        json_schema_extra={"example": "sqlite", "enum": ["sqlite", "redis", "none"]},
    )
    cache_ttl_seconds: int = Field(
        ...,
        description="Freshness window for cached profiles in seconds.",
        json_schema_extra={"example": 300},
    )
    state_backend: str = Field(
        ...,
        description="Where streaks and score history are persisted. "
        "Options: 'sqlite', 'redis', 'memory'.",
        json_schema_extra={"example": "sqlite", "enum": ["sqlite", "redis", "memory"]},
    )
    streak_timezone: str = Field(
        ...,
        description="IANA timezone whose calendar day counts as one check-in day.",
        json_schema_extra={"example": "UTC"},
    )
    high_score_threshold: float = Field(
        ...,
        description="Scores above this are rejected unless they come from the trusted source field.",
        json_schema_extra={"example": 0.95},
    )
    neynar_configured: bool = Field(
        ...,
        description="Whether a Neynar API key is set. Without it only the public hub is queried, "
        "which carries no score.",
    )
    retry_enabled: bool = Field(
        ...,
        description="Retry upstream requests on timeouts, network errors and 5xx responses.",
    )
    max_retries: int = Field(..., description="Maximum number of retry attempts.")
    log_level: str = Field(
        ...,
        description="Logging verbosity level.",
        json_schema_extra={"example": "INFO", "enum": ["DEBUG", "INFO", "WARNING", "ERROR"]},
    )


# Global service instance
_service: Optional[VibeCheck] = None


def _get_service() -> VibeCheck:
    if _service is None:
        raise HTTPException(status_code=503, detail="Service not started")
    return _service


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage service lifecycle."""
    global _service
    _service = VibeCheck(VibeCheckConfig())
    await _service.__aenter__()
    yield
    await _service.__aexit__(None, None, None)
    _service = None


app = FastAPI(
    title="vibecheck API",
    description="Farcaster reputation score, tiers and daily check-in streaks",
    version=__version__,
    lifespan=lifespan,
)


@app.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check():
    """Check API health status."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        timestamp=datetime.now().isoformat(),
    )


@app.get("/api/user-stats/{fid}", tags=["Profile"])
async def user_stats(
    fid: int,
    force_refresh: bool = Query(False, description="Skip cache"),
):
    """
    Normalized score, tier and streak for a user.

    Responds 503 with the rejection reason when no trustworthy data is available.
    """
    result = await _get_service().get_profile(fid, force_refresh=force_refresh)

    if not result.success:
        raise HTTPException(
            status_code=503,
            detail={
                "message": "Data unavailable",
                "reason": result.rejection.value if result.rejection else None,
                "error": result.error_message,
            },
        )

    return to_dict(result)


@app.post("/api/checkin/{fid}", response_model=CheckInResponse, tags=["Streak"])
async def check_in(fid: int):
    """Record today's check-in and return the new streak."""
    state = await _get_service().check_in(fid)
    return CheckInResponse(fid=fid, streak=state.count, last_check_in=state.last_check_in)


@app.get("/api/share/{fid}", response_model=ShareResponse, tags=["Profile"])
async def share(fid: int):
    """Pre-formatted share message for a user's score and streak."""
    text = await _get_service().share_text(fid)
    if text is None:
        raise HTTPException(status_code=503, detail="Data unavailable, nothing to share")
    return ShareResponse(fid=fid, text=text)


@app.get("/api/config", response_model=ConfigResponse, tags=["System"])
async def get_default_config():
    """
    Get default service configuration.

    **Configuration can be set via environment variables** with the `VIBECHECK_` prefix:
    - `VIBECHECK_NEYNAR_API_KEY=...`
    - `VIBECHECK_CACHE_BACKEND=redis`
    - `VIBECHECK_STREAK_TIMEZONE=Europe/Berlin`
    """
    config = VibeCheckConfig()
    return ConfigResponse(
        cache_backend=config.cache_backend.value,
        cache_ttl_seconds=config.cache_ttl_seconds,
        state_backend=config.state_backend.value,
        streak_timezone=config.streak_timezone,
        high_score_threshold=config.high_score_threshold,
        neynar_configured=config.neynar_api_key is not None,
        retry_enabled=config.retry_enabled,
        max_retries=config.max_retries,
        log_level=config.log_level,
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
