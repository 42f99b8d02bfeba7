# src/cache/memory_cache.py — v1
"""In-process LRU cache with optional TTL (CACHE_BACKEND=memory).

Serves as the process-wide default tier and as the local, per-call-scope
cache a caller creates for one request or batch.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict

from docmapper.cache.base_entity_cache import BaseEntityCache
from docmapper.core.models import StoredDocument

logger = logging.getLogger(__name__)


class MemoryEntityCache(BaseEntityCache):
    """Bounded in-memory cache; the least recently used entry is evicted first."""

    def __init__(self, max_entries: int = 10_000, ttl_seconds: float = 0) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be > 0")
        self._max_entries = max_entries
        self._ttl = ttl_seconds
        self._entries: OrderedDict[str, tuple[float, StoredDocument]] = OrderedDict()
        self._lock = threading.Lock()

    @property
    def provider_name(self) -> str:
        return "memory"

    def get(self, key: str) -> StoredDocument | None:
        with self._lock:
            item = self._entries.get(key)
            if item is None:
                return None
            stored_at, document = item
            if self._ttl and time.monotonic() - stored_at > self._ttl:
                del self._entries[key]
                logger.debug("Cache entry %s expired", key)
                return None
            self._entries.move_to_end(key)
            return document.model_copy(deep=True)

    def put(self, key: str, document: StoredDocument) -> None:
        with self._lock:
            self._entries[key] = (time.monotonic(), document.model_copy(deep=True))
            self._entries.move_to_end(key)
            while len(self._entries) > self._max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Evicted cache entry %s", evicted)

    def invalidate(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
