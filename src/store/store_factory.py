# src/store/store_factory.py — v1
"""Factory for document store instantiation."""

from __future__ import annotations

from docmapper.cache.cache_factory import create_cache
from docmapper.config.settings import Settings
from docmapper.store.base_store import BaseDocumentStore
from docmapper.store.memory_store import MemoryDocumentStore


def create_store(settings: Settings | None = None) -> BaseDocumentStore:
    """Instantiate the configured store with its default cache tier.

    Args:
        settings: Library settings. Defaults to an in-memory store with an
            in-memory cache.
    """
    if settings is None:
        return MemoryDocumentStore(default_cache=create_cache())
    return MemoryDocumentStore(
        default_cache=create_cache(settings), default_limit=settings.query_default_limit
    )
