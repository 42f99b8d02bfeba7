# tests/unit/cache/test_cache_factory.py — v1
"""Tests for cache/cache_factory.py."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from docmapper.cache.cache_factory import create_cache
from docmapper.cache.memory_cache import MemoryEntityCache
from docmapper.config.settings import ConfigurationError, Settings


class TestCreateCache:
    def test_default_memory(self):
        assert isinstance(create_cache(), MemoryEntityCache)

    def test_memory_from_settings(self):
        s = Settings(_env_file=None, cache_max_entries=3, cache_ttl_seconds=5)
        cache = create_cache(s)
        assert isinstance(cache, MemoryEntityCache)
        assert cache._max_entries == 3
        assert cache._ttl == 5

    def test_redis_backend(self):
        s = Settings(_env_file=None, cache_backend="redis", cache_redis_url="redis://cache:6379/0")
        with patch("docmapper.cache.redis_cache.RedisEntityCache.__init__", return_value=None) as init:
            create_cache(s)
        init.assert_called_once_with(redis_url="redis://cache:6379/0", ttl_seconds=300)

    def test_redis_missing_url(self):
        with pytest.raises(ConfigurationError, match="CACHE_REDIS_URL"):
            Settings(_env_file=None, cache_backend="redis", cache_redis_url="")

    def test_unsupported_backend(self):
        """Settings validation rejects invalid backends before factory is reached."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, cache_backend="nonexistent")
