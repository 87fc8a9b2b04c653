"""Unit tests for configuration management."""

from vibecheck.config import VibeCheckConfig, CacheBackend, StateBackend, LogFormat


class TestVibeCheckConfigDefaults:
    """Test default configuration values."""

    def test_default_cache_backend(self):
        config = VibeCheckConfig()
        assert config.cache_backend == CacheBackend.SQLITE
        assert config.cache_ttl_seconds == 300

    def test_default_state_backend(self):
        config = VibeCheckConfig()
        assert config.state_backend == StateBackend.SQLITE

    def test_default_normalization(self):
        config = VibeCheckConfig()
        assert config.high_score_threshold == 0.95

    def test_default_streak_timezone(self):
        config = VibeCheckConfig()
        assert config.streak_timezone == "UTC"

    def test_default_log_format(self):
        config = VibeCheckConfig()
        assert config.log_format == LogFormat.CONSOLE

    def test_default_retry_settings(self):
        config = VibeCheckConfig()
        assert config.retry_enabled is True
        assert config.max_retries == 3


class TestVibeCheckConfigEnvVars:
    """Test configuration from environment variables."""

    def test_api_key_from_env(self, monkeypatch):
        monkeypatch.setenv("VIBECHECK_NEYNAR_API_KEY", "secret")
        config = VibeCheckConfig()
        assert config.neynar_api_key == "secret"

    def test_cache_backend_from_env(self, monkeypatch):
        monkeypatch.setenv("VIBECHECK_CACHE_BACKEND", "redis")
        config = VibeCheckConfig()
        assert config.cache_backend == CacheBackend.REDIS

    def test_state_backend_from_env(self, monkeypatch):
        monkeypatch.setenv("VIBECHECK_STATE_BACKEND", "memory")
        config = VibeCheckConfig()
        assert config.state_backend == StateBackend.MEMORY

    def test_timezone_from_env(self, monkeypatch):
        monkeypatch.setenv("VIBECHECK_STREAK_TIMEZONE", "Europe/Berlin")
        config = VibeCheckConfig()
        assert config.streak_timezone == "Europe/Berlin"

    def test_threshold_from_env(self, monkeypatch):
        monkeypatch.setenv("VIBECHECK_HIGH_SCORE_THRESHOLD", "0.9")
        config = VibeCheckConfig()
        assert config.high_score_threshold == 0.9


class TestEnums:
    """Test enum values."""

    def test_cache_backends(self):
        assert CacheBackend.SQLITE.value == "sqlite"
        assert CacheBackend.REDIS.value == "redis"
        assert CacheBackend.NONE.value == "none"

    def test_state_backends(self):
        assert StateBackend.SQLITE.value == "sqlite"
        assert StateBackend.REDIS.value == "redis"
        assert StateBackend.MEMORY.value == "memory"
