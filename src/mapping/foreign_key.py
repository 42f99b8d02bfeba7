# src/mapping/foreign_key.py — v1
"""Foreign key relations derived from EntityRefProperty declarations.

A ForeignKey is attached to the descriptor of the *referenced* type. When
an entity of that type is saved or deleted, each of its foreign keys
looks up the entities pointing at it and applies the declared cascade.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from docmapper.core.errors import ReferentialIntegrityError
from docmapper.mapping.markers import Cascade
from docmapper.mapping.properties import EntityRefProperty, Property

if TYPE_CHECKING:
    from docmapper.entity.entity import Entity
    from docmapper.mapping.descriptor import EntityDescriptor
    from docmapper.store.base_store import BaseDocumentStore

logger = logging.getLogger(__name__)


class ForeignKey:
    """Relation from ``local`` entities (holding the reference) to the referenced type."""

    def __init__(self, local: EntityDescriptor, prop: EntityRefProperty) -> None:
        self.local = local
        self.prop = prop

    @property
    def field_name(self) -> str:
        return self.prop.name

    @property
    def cascade(self) -> Cascade:
        return self.prop.cascade

    def __repr__(self) -> str:
        return f"ForeignKey({self.local.type_name}.{self.field_name}, {self.cascade.value})"

    def _referencing(self, entity: Entity, store: BaseDocumentStore) -> list[Entity]:
        """Every entity pointing at ``entity``, regardless of the store's default limit."""
        return (
            store.select(self.local.entity_class)
            .eq(self.field_name, entity.id)
            .limit(None)
            .query_list()
        )

    def _mirrored_fields(self) -> list[Property]:
        return [
            p
            for p in self.local.properties
            if p.ref_field is not None and p.ref_field.local_ref == self.field_name
        ]

    def check_delete(
        self, entity: Entity, store: BaseDocumentStore, seen: set[str] | None = None
    ) -> None:
        """Raise ReferentialIntegrityError if the delete must be blocked.

        Entities which would be removed by a CASCADE relation are checked
        as well, so a blocking relation anywhere in the chain is found
        before anything is removed. ``seen`` holds the unique ids already
        checked during this delete.
        """
        if self.cascade == Cascade.REJECT:
            if store.select(self.local.entity_class).eq(self.field_name, entity.id).exists():
                raise ReferentialIntegrityError(
                    f"{entity.unique_id} cannot be deleted: it is still referenced "
                    f"by {self.local.type_name}.{self.field_name}",
                    referencing_type=self.local.type_name,
                    field=self.field_name,
                )
        elif self.cascade == Cascade.CASCADE:
            for other in self._referencing(entity, store):
                other.perform_delete_checks(store, seen)

    def on_delete(self, entity: Entity, store: BaseDocumentStore) -> None:
        """Propagate the removal of ``entity`` to the entities referencing it."""
        if self.cascade == Cascade.CASCADE:
            for other in self._referencing(entity, store):
                logger.debug("Cascading delete of %s to %s", entity.unique_id, other.unique_id)
                store.delete(other)
        elif self.cascade == Cascade.SET_NULL:
            for other in self._referencing(entity, store):
                self.prop.get_value(other).set_id(None)
                store.update(other)

    def on_save(self, entity: Entity, store: BaseDocumentStore) -> None:
        """Refresh derived fields of referencing entities which mirror ``entity``."""
        mirrored = self._mirrored_fields()
        if not mirrored:
            return
        remote = entity.descriptor()
        for other in self._referencing(entity, store):
            changed = False
            for prop in mirrored:
                value = remote.get_property_or_raise(prop.ref_field.remote_field).get_value(entity)
                if prop.get_value(other) != value:
                    prop.set_value(other, value)
                    changed = True
            if changed:
                self.prop.get_value(other).set_value(entity)
                store.update(other)
