# tests/unit/config/test_settings.py — v1
"""Tests for config/settings.py — typed Settings and validation rules."""

from __future__ import annotations

import pytest

from docmapper.config.settings import ConfigurationError, Settings, load_settings


class TestSettingsDefaults:
    def test_default_cache(self):
        s = Settings(_env_file=None)
        assert s.cache_backend == "memory"
        assert s.cache_max_entries == 10_000
        assert s.cache_ttl_seconds == 300

    def test_default_store(self):
        s = Settings(_env_file=None)
        assert s.store_backend == "memory"
        assert s.query_default_limit == 1000

    def test_default_logging(self):
        s = Settings(_env_file=None)
        assert s.log_level == "INFO"
        assert s.log_format == "json"
        assert s.log_file is None


class TestSettingsValidation:
    def test_redis_requires_url(self):
        with pytest.raises(ConfigurationError, match="CACHE_REDIS_URL"):
            Settings(_env_file=None, cache_backend="redis")

    def test_redis_with_url(self):
        s = Settings(_env_file=None, cache_backend="redis", cache_redis_url="redis://localhost")
        assert s.cache_backend == "redis"

    def test_negative_ttl(self):
        with pytest.raises(ValueError):
            Settings(_env_file=None, cache_ttl_seconds=-1)

    def test_zero_entries(self):
        with pytest.raises(ValueError):
            Settings(_env_file=None, cache_max_entries=0)

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            Settings(_env_file=None, cache_backend="memcached")


class TestSettingsSources:
    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("CACHE_TTL_SECONDS", "42")
        assert Settings(_env_file=None).cache_ttl_seconds == 42

    def test_env_file(self, tmp_path):
        env = tmp_path / ".env"
        env.write_text("LOG_FORMAT=text\nQUERY_DEFAULT_LIMIT=50\n", encoding="utf-8")
        s = Settings(_env_file=str(env))
        assert s.log_format == "text"
        assert s.query_default_limit == 50

    def test_load_settings_overrides(self):
        s = load_settings(_env_file=None, log_level="DEBUG")
        assert s.log_level == "DEBUG"
