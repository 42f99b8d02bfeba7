# src/store/base_store.py — v1
"""Abstract document store facade.

The base class implements the entity lifecycle once (load, cache-aware
fetch, save, delete, select); backends only provide the document level
primitives ``_load``, ``_write``, ``_remove`` and ``_search``.
"""

from __future__ import annotations

import logging
import uuid
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, TypeVar

from docmapper.cache.base_entity_cache import BaseEntityCache
from docmapper.cache.memory_cache import MemoryEntityCache
from docmapper.core.errors import OptimisticLockError
from docmapper.core.models import FetchResult, StoredDocument
from docmapper.logging.context import entity_context
from docmapper.store.query import Query

if TYPE_CHECKING:
    from docmapper.entity.entity import Entity

logger = logging.getLogger(__name__)

E = TypeVar("E", bound="Entity")


class BaseDocumentStore(ABC):
    """Unified interface for document store backends.

    Args:
        default_cache: Global cache tier used by ``fetch`` when the caller
            passes no cache. Created once with the store and only emptied
            by explicit invalidation.
        default_limit: Result limit applied to selections without one.
    """

    def __init__(
        self,
        default_cache: BaseEntityCache | None = None,
        default_limit: int = 1000,
    ) -> None:
        self._default_cache = default_cache if default_cache is not None else MemoryEntityCache()
        self._default_limit = default_limit

    # --- Backend primitives ---

    @abstractmethod
    def _load(self, type_name: str, entity_id: str) -> StoredDocument | None:
        """Read a document by id, bypassing every cache."""

    @abstractmethod
    def _write(self, document: StoredDocument, expected_version: int | None) -> StoredDocument:
        """Persist a document and return it with its new version.

        Raises:
            OptimisticLockError: If ``expected_version`` is given and differs
                from the stored version.
        """

    @abstractmethod
    def _remove(self, type_name: str, entity_id: str) -> bool:
        """Delete a document. Returns False if it did not exist."""

    @abstractmethod
    def _search(
        self,
        type_name: str,
        query: dict[str, Any] | None,
        filter: dict[str, Any] | None,  # noqa: A002
        limit: int | None,
    ) -> list[StoredDocument]:
        """Return documents matching the query or filter (neither means all)."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Backend identifier."""

    def _generate_id(self) -> str:
        return uuid.uuid4().hex

    # --- Caches ---

    @property
    def default_cache(self) -> BaseEntityCache:
        return self._default_cache

    def invalidate(self, entity: Entity) -> None:
        """Drop the cached copy of ``entity`` from the default cache."""
        self._default_cache.invalidate(entity.unique_id)

    def clear_cache(self) -> None:
        self._default_cache.clear()

    # --- Reading ---

    def create_entity(self, entity_class: type[E], document: StoredDocument) -> E:
        """Build an entity from a stored document, with source tracing enabled."""
        entity = entity_class()
        entity.id = document.id
        entity.version = document.version
        entity.init_source_tracing()
        for prop in entity_class.descriptor().properties:
            prop.read_from_source(entity, document.source.get(prop.name))
        return entity

    def find(self, entity_class: type[E], entity_id: str | None) -> E | None:
        """Load an entity by id. Always reads the store, never a cache."""
        if not entity_id:
            return None
        document = self._load(entity_class.descriptor().type_name, entity_id)
        if document is None:
            return None
        return self.create_entity(entity_class, document)

    def fetch(
        self,
        entity_class: type[E],
        entity_id: str | None,
        cache: BaseEntityCache | None = None,
    ) -> FetchResult:
        """Load an entity, preferring a cached copy.

        Args:
            entity_class: Type of the entity.
            entity_id: Id to look up.
            cache: Local cache scope; the default cache is used when None.

        Returns:
            FetchResult whose ``from_cache`` tells whether the entity may be stale.
        """
        if not entity_id:
            return FetchResult(None, False)
        cache = cache if cache is not None else self._default_cache
        type_name = entity_class.descriptor().type_name
        key = f"{type_name}-{entity_id}"

        document = cache.get(key)
        if document is not None:
            return FetchResult(self.create_entity(entity_class, document), True)

        document = self._load(type_name, entity_id)
        if document is None:
            return FetchResult(None, False)
        cache.put(key, document)
        return FetchResult(self.create_entity(entity_class, document), False)

    def select(self, entity_class: type[E]) -> Query[E]:
        return Query(self, entity_class, limit=self._default_limit)

    def search(
        self,
        entity_class: type[E],
        query: dict[str, Any] | None = None,
        filter: dict[str, Any] | None = None,  # noqa: A002
        limit: int | None = None,
    ) -> list[E]:
        """Execute a query or a filter, never both."""
        if query is not None and filter is not None:
            raise ValueError("A selection takes either a query or a filter, not both")
        type_name = entity_class.descriptor().type_name
        documents = self._search(type_name, query, filter, limit)
        return [self.create_entity(entity_class, doc) for doc in documents]

    def count(
        self,
        entity_class: type[E],
        query: dict[str, Any] | None = None,
        filter: dict[str, Any] | None = None,  # noqa: A002
    ) -> int:
        if query is not None and filter is not None:
            raise ValueError("A selection takes either a query or a filter, not both")
        return len(self._search(entity_class.descriptor().type_name, query, filter, None))

    # --- Writing ---

    def update(self, entity: E) -> E:
        """Save ``entity`` without a version check (last writer wins)."""
        return self._save(entity, check_version=False)

    def try_update(self, entity: E) -> bool:
        """Save ``entity`` only if the stored version is still the loaded one.

        Returns:
            False if another writer updated the document in the meantime.

        Raises:
            ValidationError: If the entity fails its consistency checks.
        """
        try:
            self._save(entity, check_version=True)
        except OptimisticLockError as exc:
            logger.info("Optimistic lock failed for %s: %s", entity.unique_id, exc)
            return False
        return True

    def _save(self, entity: E, check_version: bool) -> E:
        descriptor = entity.descriptor()
        with entity_context(descriptor.type_name, entity.id, "save"):
            entity.before_save()
            entity.before_save_checks(self)

            source = {p.name: p.write_to_source(entity) for p in descriptor.properties}
            document = StoredDocument(
                id=entity.id or self._generate_id(),
                type_name=descriptor.type_name,
                version=entity.version,
                source=source,
            )
            expected = entity.version if check_version and not entity.is_new() else None
            saved = self._write(document, expected)

            entity.id = saved.id
            entity.version = saved.version
            entity.init_source_tracing()
            for name, value in source.items():
                entity.set_source(name, value)
            self._default_cache.invalidate(saved.unique_id)
            logger.debug("Saved %s (version %d)", saved.unique_id, saved.version)

            entity.after_save(self)
        return entity

    def delete(self, entity: Entity) -> None:
        """Delete ``entity`` after its referential checks, then cascade.

        Raises:
            ReferentialIntegrityError: If a relation blocks the delete.
        """
        if entity.is_new():
            logger.debug("Ignoring delete of unsaved %s", entity.descriptor().type_name)
            return
        with entity_context(entity.descriptor().type_name, entity.id, "delete"):
            entity.perform_delete_checks(self)
            entity.deleted = True
            if not self._remove(entity.descriptor().type_name, entity.id):
                logger.warning("%s was already gone when deleting it", entity.unique_id)
            self._default_cache.invalidate(entity.unique_id)
            entity.cascade_delete(self)
            logger.debug("Deleted %s", entity.unique_id)
