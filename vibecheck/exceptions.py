"""Custom exception hierarchy for vibecheck."""


class VibeCheckError(Exception):
    """Base exception for all vibecheck errors."""


class FetchError(VibeCheckError):
    """Failed to fetch an upstream profile record."""


class UpstreamAuthError(FetchError):
    """Upstream rejected our credentials."""


class CacheError(VibeCheckError):
    """Cache operation failed."""


class StoreError(VibeCheckError):
    """Persisted state could not be read or written."""


class ConfigError(VibeCheckError):
    """Invalid configuration."""
