"""Configuration management using Pydantic Settings."""

from enum import Enum

from pydantic_settings import BaseSettings


class CacheBackend(str, Enum):
    """Profile cache backend type."""
    SQLITE = "sqlite"
    REDIS = "redis"
    NONE = "none"


class StateBackend(str, Enum):
    """Backend for persisted per-user state (streaks, score history)."""
    SQLITE = "sqlite"
    REDIS = "redis"
    MEMORY = "memory"


class LogFormat(str, Enum):
    """Log output format."""
    JSON = "json"
    CONSOLE = "console"


class VibeCheckConfig(BaseSettings):
    """Configuration for the vibecheck service."""

    # Upstream settings
    neynar_api_key: str | None = None
    neynar_base_url: str = "https://api.neynar.com"
    hub_base_url: str = "https://hub-api.neynar.com"
    request_timeout_s: float = 10.0

    # Retry settings
    retry_enabled: bool = True
    max_retries: int = 3
    retry_backoff_base: float = 2.0

    # Normalization
    high_score_threshold: float = 0.95

    # Streaks
    streak_timezone: str = "UTC"

    # Cache settings
    cache_backend: CacheBackend = CacheBackend.SQLITE
    cache_ttl_seconds: int = 300
    sqlite_path: str = ".vibecheck_cache.db"
    redis_url: str = "redis://localhost:6379/0"

    # Persisted state
    state_backend: StateBackend = StateBackend.SQLITE
    state_path: str = ".vibecheck_state.db"

    # Sharing
    app_url: str = "https://vibecheck-olive.vercel.app"

    # Logging
    log_level: str = "INFO"
    log_format: LogFormat = LogFormat.CONSOLE

    model_config = {
        "env_prefix": "VIBECHECK_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }
