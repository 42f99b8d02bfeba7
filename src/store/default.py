# src/store/default.py — v1
"""Process-wide default store.

Installed once at application startup and consulted only when a
reference or entity method is called without an explicit store.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from docmapper.core.errors import StoreNotConfiguredError

if TYPE_CHECKING:
    from docmapper.store.base_store import BaseDocumentStore

logger = logging.getLogger(__name__)

_default_store: BaseDocumentStore | None = None


def set_default_store(store: BaseDocumentStore | None) -> None:
    """Install (or with None, remove) the default store."""
    global _default_store
    _default_store = store
    if store is not None:
        logger.info("Default document store set to %s", store.provider_name)


def get_default_store() -> BaseDocumentStore:
    """Return the default store, raise if none is installed."""
    if _default_store is None:
        raise StoreNotConfiguredError(
            "No document store given and no default store installed; "
            "call set_default_store() at startup"
        )
    return _default_store


def resolve_store(store: BaseDocumentStore | None) -> BaseDocumentStore:
    """Return ``store`` itself, or the default store when it is None."""
    return store if store is not None else get_default_store()
