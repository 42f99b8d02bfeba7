# src/entity/entity_ref_list.py — v1
"""Lazy reference to an ordered list of entities.

Only the ids are stored. Resolved values follow the order of the ids;
ids whose entity no longer exists are skipped in the resolved view but
remain in ``ids``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

from docmapper.store.default import resolve_store

if TYPE_CHECKING:
    from docmapper.cache.base_entity_cache import BaseEntityCache
    from docmapper.entity.entity import Entity
    from docmapper.store.base_store import BaseDocumentStore

E = TypeVar("E", bound="Entity")


class EntityRefList(Generic[E]):
    """Field type referencing a list of other entities by id."""

    def __init__(self, ref_type: type[E]) -> None:
        self._ref_type = ref_type
        self._ids: list[str] = []
        self._values: list[E] | None = None
        self._value_from_cache = False

    def __repr__(self) -> str:
        return f"EntityRefList({self._ref_type.__name__}, {self._ids!r})"

    def __len__(self) -> int:
        return len(self._ids)

    @property
    def ref_type(self) -> type[E]:
        return self._ref_type

    @property
    def ids(self) -> list[str]:
        """Referenced ids in persisted order (a copy); available without any lookup."""
        return list(self._ids)

    @property
    def value_from_cache(self) -> bool:
        return self._value_from_cache

    def is_value_loaded(self) -> bool:
        return self._values is not None or not self._ids

    def get_values(self, store: BaseDocumentStore | None = None) -> list[E]:
        """Return the referenced entities, reloading them if missing or possibly stale."""
        if not self.is_value_loaded() or self._value_from_cache:
            store = resolve_store(store)
            result: list[E] = []
            for ref_id in self._ids:
                entity = store.find(self._ref_type, ref_id)
                if entity is not None:
                    result.append(entity)
            self._values = result
            self._value_from_cache = False
        return self._values if self._values is not None else []

    def get_cached_value(
        self,
        cache: BaseEntityCache | None = None,
        store: BaseDocumentStore | None = None,
    ) -> list[E]:
        """Return the referenced entities, permitting cached (possibly stale) copies.

        The whole list counts as possibly stale as soon as one entity came
        from a cache.

        Args:
            cache: Local cache scope; the store's default cache when None.
            store: Store to use; the default store when None.
        """
        if self.is_value_loaded():
            return self._values if self._values is not None else []

        store = resolve_store(store)
        result: list[E] = []
        from_cache = False
        for ref_id in self._ids:
            fetched = store.fetch(self._ref_type, ref_id, cache)
            if fetched.entity is not None:
                result.append(fetched.entity)
                from_cache = from_cache or fetched.from_cache
        self._values = result
        self._value_from_cache = from_cache
        return self._values

    def add_value(self, value: E | None) -> None:
        """Append ``value``, keeping the resolved view in sync without a reload."""
        if value is None:
            return
        if not self._ids:
            self._values = []
        self._ids.append(value.id)
        if self._values is not None:
            self._values.append(value)

    def contains(self, value: E | None) -> bool:
        if value is None:
            return False
        return value.id in self._ids

    def contains_id(self, ref_id: str | None) -> bool:
        if not ref_id:
            return False
        return ref_id in self._ids

    def set_ids(self, ids: list[str | None] | None) -> None:
        """Replace the referenced ids; blank ids are dropped, order and duplicates kept."""
        self._ids = [i for i in ids or [] if i is not None and i.strip()]
        self._values = None
        self._value_from_cache = False
