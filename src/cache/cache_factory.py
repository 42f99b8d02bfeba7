# src/cache/cache_factory.py — v1
"""Factory for entity cache instantiation."""

from __future__ import annotations

from docmapper.cache.base_entity_cache import BaseEntityCache
from docmapper.config.settings import Settings


def create_cache(settings: Settings | None = None) -> BaseEntityCache:
    """Instantiate the configured cache backend.

    Backend names and the Redis URL are validated by Settings, so every
    settings instance maps onto one of the two tiers.

    Args:
        settings: Library settings. Defaults to an in-memory cache.

    Returns:
        Configured BaseEntityCache implementation.
    """
    if settings is None:
        from docmapper.cache.memory_cache import MemoryEntityCache
        return MemoryEntityCache()

    if settings.cache_backend == "redis":
        from docmapper.cache.redis_cache import RedisEntityCache
        return RedisEntityCache(
            redis_url=settings.cache_redis_url,
            ttl_seconds=settings.cache_ttl_seconds,
        )

    from docmapper.cache.memory_cache import MemoryEntityCache
    return MemoryEntityCache(
        max_entries=settings.cache_max_entries,
        ttl_seconds=settings.cache_ttl_seconds,
    )
