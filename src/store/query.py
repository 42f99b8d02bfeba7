# src/store/query.py — v1
"""Selection builder over one entity type.

Conditions are collected into a single And constraint which is turned
into exactly one artifact: a scoring query or a non-scoring filter.
``eq``/``not_eq`` add filters; ``where`` accepts any constraint.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from docmapper.constraints.and_constraint import And
from docmapper.constraints.base_constraint import Constraint
from docmapper.constraints.field_constraints import FieldEqual, FieldNotEqual

if TYPE_CHECKING:
    from docmapper.entity.entity import Entity
    from docmapper.store.base_store import BaseDocumentStore

logger = logging.getLogger(__name__)

E = TypeVar("E", bound="Entity")


class Query(Generic[E]):
    """Builder for a selection of entities of one type."""

    def __init__(
        self, store: BaseDocumentStore, entity_class: type[E], limit: int | None = None
    ) -> None:
        self._store = store
        self._entity_class = entity_class
        self._constraints: list[Constraint] = []
        self._limit = limit

    def eq(self, field: str, value: Any) -> Query[E]:
        """Require ``field == value`` (filter)."""
        self._constraints.append(FieldEqual(field, value).as_filter())
        return self

    def not_eq(self, field: str, value: Any) -> Query[E]:
        """Require ``field != value`` (filter)."""
        self._constraints.append(FieldNotEqual(field, value).as_filter())
        return self

    def where(self, *constraints: Constraint) -> Query[E]:
        """Add arbitrary constraints; they must all be of the same kind."""
        self._constraints.extend(constraints)
        return self

    def limit(self, limit: int | None) -> Query[E]:
        self._limit = limit
        return self

    def to_artifacts(self) -> tuple[dict[str, Any] | None, dict[str, Any] | None]:
        """Return ``(query, filter)``; at most one of them is not None.

        Raises:
            ConstraintMixingError: If query-kind and filter-kind constraints are mixed.
        """
        if not self._constraints:
            return None, None
        root = And.on(*self._constraints)
        query = root.create_query()
        if query is not None:
            return query, None
        return None, root.create_filter()

    def query_list(self) -> list[E]:
        """Execute and return all matching entities (up to the limit)."""
        query, flt = self.to_artifacts()
        return self._store.search(self._entity_class, query=query, filter=flt, limit=self._limit)

    def first(self) -> E | None:
        query, flt = self.to_artifacts()
        result = self._store.search(self._entity_class, query=query, filter=flt, limit=1)
        return result[0] if result else None

    def exists(self) -> bool:
        return self.first() is not None

    def count(self) -> int:
        query, flt = self.to_artifacts()
        return self._store.count(self._entity_class, query=query, filter=flt)

    def to_string(self, skip_values: bool = False) -> str:
        type_name = self._entity_class.descriptor().type_name
        if not self._constraints:
            return f"SELECT {type_name}"
        return f"SELECT {type_name} WHERE {And.on(*self._constraints).to_string(skip_values)}"

    def __str__(self) -> str:
        return self.to_string(False)
