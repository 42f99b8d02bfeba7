# src/cache/base_entity_cache.py — v1
"""Abstract entity cache interface.

Caches hold StoredDocument snapshots keyed by the entity's unique id
(``<type>-<id>``). A value read from a cache may be stale; callers learn
about it through FetchResult.from_cache.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from docmapper.core.models import StoredDocument


class BaseEntityCache(ABC):
    """Unified interface for entity cache backends."""

    @abstractmethod
    def get(self, key: str) -> StoredDocument | None:
        """Retrieve a cached document, or None on a miss or expiry."""

    @abstractmethod
    def put(self, key: str, document: StoredDocument) -> None:
        """Store a document snapshot."""

    @abstractmethod
    def invalidate(self, key: str) -> None:
        """Drop a single entry."""

    @abstractmethod
    def clear(self) -> None:
        """Drop every entry."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Backend identifier (memory, redis)."""
