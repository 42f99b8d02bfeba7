# src/entity/entity_ref.py — v1
"""Lazy reference to a single entity.

Only the id is stored; the referenced entity is loaded on demand and
kept on the reference. A value obtained through a cache is flagged as
possibly stale so that ``get_value`` knows to reload it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

from docmapper.store.default import resolve_store

if TYPE_CHECKING:
    from docmapper.cache.base_entity_cache import BaseEntityCache
    from docmapper.entity.entity import Entity
    from docmapper.store.base_store import BaseDocumentStore

E = TypeVar("E", bound="Entity")


class EntityRef(Generic[E]):
    """Field type referencing another entity by id."""

    def __init__(self, ref_type: type[E]) -> None:
        self._ref_type = ref_type
        self._id: str | None = None
        self._value: E | None = None
        self._value_from_cache = False

    def __repr__(self) -> str:
        return f"EntityRef({self._ref_type.__name__}, {self._id!r})"

    @property
    def ref_type(self) -> type[E]:
        return self._ref_type

    @property
    def id(self) -> str | None:
        """Id of the referenced entity; available without any lookup."""
        return self._id

    @property
    def value_from_cache(self) -> bool:
        return self._value_from_cache

    def is_value_loaded(self) -> bool:
        """True if the value was loaded or set, or if nothing is referenced."""
        return self._value is not None or self._id is None

    def get_value(self, store: BaseDocumentStore | None = None) -> E | None:
        """Return the referenced entity, reloading it if missing or possibly stale."""
        if not self.is_value_loaded() or self._value_from_cache:
            self._value = resolve_store(store).find(self._ref_type, self._id)
            self._value_from_cache = False
        return self._value

    def get_cached_value(
        self,
        cache: BaseEntityCache | None = None,
        store: BaseDocumentStore | None = None,
    ) -> E | None:
        """Return the referenced entity, permitting a cached (possibly stale) copy.

        Args:
            cache: Local cache scope; the store's default cache when None.
            store: Store to use; the default store when None.
        """
        if self.is_value_loaded():
            return self._value

        result = resolve_store(store).fetch(self._ref_type, self._id, cache)
        self._value = result.entity
        self._value_from_cache = result.from_cache
        return self._value

    def set_value(self, value: E | None) -> None:
        """Reference ``value``; keeps it so that ``get_value`` needs no lookup."""
        self._value = value
        self._value_from_cache = False
        self._id = None if value is None else value.id

    def set_id(self, ref_id: str | None) -> None:
        """Reference the entity with the given id; the next access resolves it.

        If the entity is at hand, prefer ``set_value``, which spares the lookup.
        """
        self._id = ref_id
        self._value = None
        self._value_from_cache = False

    def is_filled(self) -> bool:
        """True if an entity is referenced (not to be confused with is_value_loaded)."""
        return self._id is not None and self._id.strip() != ""

    def contains_id(self, ref_id: str | None) -> bool:
        return self._id == ref_id
