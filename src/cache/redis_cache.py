# src/cache/redis_cache.py — v1
"""Redis-based entity cache (CACHE_BACKEND=redis).

Requires 'redis' package: pip install redis.
Suitable for sharing the default cache tier between processes.
"""

from __future__ import annotations

import logging

from docmapper.cache.base_entity_cache import BaseEntityCache
from docmapper.core.models import StoredDocument

logger = logging.getLogger(__name__)

_KEY_PREFIX = "docmapper:entity:"


class RedisEntityCache(BaseEntityCache):
    """Redis-backed entity cache storing documents as JSON."""

    def __init__(self, redis_url: str, ttl_seconds: int = 0) -> None:
        try:
            import redis
        except ImportError as e:
            raise ImportError(
                "redis package required: pip install redis"
            ) from e

        self._client = redis.Redis.from_url(redis_url, decode_responses=True)
        self._ttl = ttl_seconds

    @property
    def provider_name(self) -> str:
        return "redis"

    def get(self, key: str) -> StoredDocument | None:
        data = self._client.get(f"{_KEY_PREFIX}{key}")
        if data is None:
            return None
        try:
            return StoredDocument.model_validate_json(data)
        except ValueError as e:
            logger.warning("Failed to deserialize cache entry %s: %s", key, e)
            return None

    def put(self, key: str, document: StoredDocument) -> None:
        self._client.set(
            f"{_KEY_PREFIX}{key}",
            document.model_dump_json(),
            ex=self._ttl or None,
        )

    def invalidate(self, key: str) -> None:
        self._client.delete(f"{_KEY_PREFIX}{key}")

    def clear(self) -> None:
        keys = list(self._client.scan_iter(match=f"{_KEY_PREFIX}*"))
        if keys:
            self._client.delete(*keys)
        logger.info("Cleared %d cached entities", len(keys))
