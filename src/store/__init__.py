"""Document store facade, selection builder and default store."""

from docmapper.store.base_store import BaseDocumentStore
from docmapper.store.default import get_default_store, resolve_store, set_default_store
from docmapper.store.memory_store import MemoryDocumentStore
from docmapper.store.query import Query
from docmapper.store.store_factory import create_store

__all__ = [
    "BaseDocumentStore",
    "MemoryDocumentStore",
    "Query",
    "create_store",
    "get_default_store",
    "resolve_store",
    "set_default_store",
]
