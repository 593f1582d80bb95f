"""Tests for settings and logging configuration."""

import os
import sys

import pytest
from loguru import logger
from pydantic import ValidationError

from quill_commons.config.logging_config import configure_logging
from quill_commons.config.settings import DEFAULT_LOG_FORMAT, QuillSettings, get_settings


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep QUILL_ variables from the host out of the tests."""
    for name in list(os.environ):
        if name.upper().startswith("QUILL_"):
            monkeypatch.delenv(name)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestQuillSettings:
    """Test settings defaults and validation."""

    def test_defaults(self):
        """Test the defaults describe an enabled in-memory cache."""
        settings = QuillSettings(_env_file=None)

        assert settings.cache_enabled is True
        assert settings.cache_backend == "memory"
        assert settings.is_redis_backend is False
        assert settings.cache_key_prefix == "quill:"
        assert settings.cache_negative_ttl_seconds == 30
        assert settings.cache_invalidation_granularity == "fine"
        assert settings.cache_invalidation_batch_size == 500
        assert settings.cache_ttl_overrides == {}
        assert settings.redis_scan_count == 500
        assert settings.log_level == "INFO"
        assert settings.log_format == DEFAULT_LOG_FORMAT

    def test_environment_prefix(self, monkeypatch):
        """Test QUILL_ environment variables are read."""
        monkeypatch.setenv("QUILL_CACHE_BACKEND", "redis")
        monkeypatch.setenv("QUILL_REDIS_URL", "redis://cache:6379/1")
        monkeypatch.setenv("QUILL_CACHE_TTL_OVERRIDES", '{"trending": 15}')
        monkeypatch.setenv("quill_cache_enabled", "false")

        settings = QuillSettings(_env_file=None)

        assert settings.is_redis_backend is True
        assert settings.redis_url == "redis://cache:6379/1"
        assert settings.cache_ttl_overrides == {"trending": 15}
        assert settings.cache_enabled is False

    def test_redis_backend_requires_url(self):
        """Test the redis backend cannot be selected without a URL."""
        with pytest.raises(ValidationError):
            QuillSettings(_env_file=None, cache_backend="redis")

    def test_unknown_backend(self):
        """Test only memory and redis backends exist."""
        with pytest.raises(ValidationError):
            QuillSettings(_env_file=None, cache_backend="memcached")

    def test_log_level_normalized(self):
        """Test log levels are case-insensitive and checked."""
        assert QuillSettings(_env_file=None, log_level="debug").log_level == "DEBUG"

        with pytest.raises(ValidationError):
            QuillSettings(_env_file=None, log_level="verbose")

    @pytest.mark.parametrize("field,value", [
        ("cache_ttl_overrides", {"tags": 0}),
        ("cache_negative_ttl_seconds", -1),
        ("cache_invalidation_batch_size", 0),
        ("cache_invalidation_granularity", "medium"),
        ("redis_pool_size", 0),
        ("redis_scan_count", 0),
    ])
    def test_invalid_values(self, field, value):
        """Test out-of-range values are rejected."""
        with pytest.raises(ValidationError):
            QuillSettings(_env_file=None, **{field: value})

    def test_negative_caching_can_be_disabled(self):
        """Test a zero negative TTL is accepted."""
        assert QuillSettings(_env_file=None, cache_negative_ttl_seconds=0).cache_negative_ttl_seconds == 0

    def test_get_settings_cached(self, monkeypatch):
        """Test get_settings returns one instance until the cache is cleared."""
        monkeypatch.setenv("QUILL_CACHE_KEY_PREFIX", "first:")
        first = get_settings()
        monkeypatch.setenv("QUILL_CACHE_KEY_PREFIX", "second:")

        assert get_settings() is first
        get_settings.cache_clear()
        assert get_settings().cache_key_prefix == "second:"


class TestConfigureLogging:
    """Test loguru sink installation."""

    @pytest.fixture(autouse=True)
    def restore_logger(self):
        yield
        logger.remove()
        logger.add(sys.stderr)

    def test_stderr_only(self):
        """Test one sink is installed without a log file."""
        sink_ids = configure_logging(QuillSettings(_env_file=None, log_level="warning"))

        assert len(sink_ids) == 1

    def test_file_sink(self, tmp_path):
        """Test a log file adds a second sink that receives records."""
        log_file = tmp_path / "quill.log"
        settings = QuillSettings(_env_file=None, log_file=str(log_file), log_format="{level}|{message}")

        sink_ids = configure_logging(settings)
        logger.info("Cache platform ready")
        logger.complete()
        logger.remove()

        assert len(sink_ids) == 2
        assert "INFO|Cache platform ready" in log_file.read_text()
