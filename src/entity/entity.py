# src/entity/entity.py — v1
"""Base class of all persisted entity types.

Subclasses declare their fields as a ``properties`` list and are
registered with a SchemaRegistry:

    @register
    class Customer(Entity):
        properties = [
            StringProperty("name", nullable=False, unique=True),
            EntityRefProperty("company", Company, cascade=Cascade.REJECT),
        ]

Identity: ``id`` is None until the entity was saved. Equality and
hashing use the id of persisted entities; unsaved entities are only
equal to themselves.

Save flow (driven by the store): ``before_save`` (internal hooks, then
``on_save``) -> ``before_save_checks`` (derived reference fields,
mandatory and unique checks) -> write -> ``after_save`` (foreign keys).
Delete flow: ``perform_delete_checks`` -> remove -> ``cascade_delete``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar

from docmapper.core.errors import UnknownEntityTypeError, ValidationError
from docmapper.core.models import ID_FIELD, FieldChange
from docmapper.mapping.registry import DESCRIPTOR_ATTR
from docmapper.store.default import resolve_store

if TYPE_CHECKING:
    from docmapper.mapping.descriptor import EntityDescriptor
    from docmapper.mapping.properties import Property
    from docmapper.store.base_store import BaseDocumentStore

logger = logging.getLogger(__name__)


class Entity:
    """A document stored in the document store."""

    properties: ClassVar[list[Property]] = []

    def __init__(self) -> None:
        self.id: str | None = None
        self.version: int = 0
        self.deleted: bool = False
        self.source: dict[str, Any] | None = None
        for prop in self.descriptor().properties:
            try:
                prop.init(self)
            except Exception:
                logger.warning(
                    "Cannot initialize %s of %s", prop.name, type(self).__name__, exc_info=True
                )

    @classmethod
    def descriptor(cls) -> EntityDescriptor:
        """Return the descriptor built when this class was registered."""
        descriptor = cls.__dict__.get(DESCRIPTOR_ATTR)
        if descriptor is None:
            raise UnknownEntityTypeError(f"{cls.__name__} is not a registered entity type")
        return descriptor

    # --- Identity ---

    def is_new(self) -> bool:
        """True if the entity was never saved."""
        return self.id is None

    def exists(self) -> bool:
        """True if the entity is neither new nor marked as deleted."""
        return not self.is_new() and not self.deleted

    def is_deleted(self) -> bool:
        return self.deleted

    @property
    def unique_id(self) -> str:
        """Globally unique id ``<type>-<id>``; not unique while the entity is new."""
        return f"{self.descriptor().type_name}-{self.id}"

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if other is None or self.is_new():
            return False
        if not isinstance(other, Entity):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        if self.is_new():
            return object.__hash__(self)
        return hash(self.id)

    def __str__(self) -> str:
        fields = ", ".join(
            f"{p.name}: '{p.write_to_source(self)}'" for p in self.descriptor().properties
        )
        return f"{self.id} (Version: {self.version}) {{{fields}}}"

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.id}>"

    # --- Save hooks ---

    def before_save(self) -> None:
        """Run every save hook. Not meant to be overridden; override ``on_save``.

        Framework hooks registered on the descriptors of this class and its
        bases run first (base classes first), then ``on_save``.
        """
        for klass in reversed(type(self).__mro__):
            descriptor = klass.__dict__.get(DESCRIPTOR_ATTR)
            if descriptor is None:
                continue
            for hook in descriptor.internal_save_hooks:
                hook(self)
        self.on_save()

    def on_save(self) -> None:
        """Application save handler, invoked right before the consistency checks."""

    def before_save_checks(self, store: BaseDocumentStore | None = None) -> None:
        """Fill derived reference fields and validate every property.

        All properties are checked, so that every offending field is
        annotated, but only the first failure is raised.

        Raises:
            ValidationError: If a mandatory field is empty or a unique field
                collides with another entity.
        """
        descriptor = self.descriptor()
        first_error: tuple[str, Any, str] | None = None
        field_errors: dict[str, str | None] = {}

        for prop in descriptor.properties:
            if prop.ref_field is not None:
                self._fill_ref_field(prop, store)

            value = prop.write_to_source(self)
            if not prop.nullable and prop.is_empty(value):
                field_errors[prop.name] = None
                if first_error is None:
                    first_error = (prop.name, None, f"{prop.label} must be filled")

            if prop.unique and not prop.is_empty(value):
                if self._has_duplicate(prop, value, store):
                    field_errors[prop.name] = str(value)
                    if first_error is None:
                        first_error = (
                            prop.name,
                            value,
                            f"{prop.label} must be unique, '{value}' is already in use",
                        )

        if first_error is not None:
            field, value, message = first_error
            raise ValidationError(message, field=field, value=value, field_errors=field_errors)

    def _fill_ref_field(self, prop: Property, store: BaseDocumentStore | None) -> None:
        """Copy the mirrored remote field; failures leave the field as it is."""
        try:
            ref = self.descriptor().get_property_or_raise(prop.ref_field.local_ref).get_value(self)
            remote = ref.get_value(store)
            if remote is not None:
                remote_prop = remote.descriptor().get_property_or_raise(prop.ref_field.remote_field)
                prop.set_value(self, remote_prop.get_value(remote))
        except Exception:
            logger.exception(
                "Error updating reference field %s of %s", prop.name, type(self).__name__
            )

    def _has_duplicate(self, prop: Property, value: Any, store: BaseDocumentStore | None) -> bool:
        query = resolve_store(store).select(type(self)).eq(prop.name, value)
        if not self.is_new():
            query.not_eq(ID_FIELD, self.id)
        if prop.unique_within:
            scope = self.descriptor().get_property_or_raise(prop.unique_within)
            query.eq(prop.unique_within, scope.write_to_source(self))
        return query.exists()

    def after_save(self, store: BaseDocumentStore | None = None) -> None:
        """Invoked once the entity was saved; notifies every foreign key."""
        store = resolve_store(store)
        for fk in self.descriptor().remote_foreign_keys:
            fk.on_save(self, store)

    # --- Delete hooks ---

    def perform_delete_checks(
        self, store: BaseDocumentStore | None = None, seen: set[str] | None = None
    ) -> None:
        """Ask every foreign key whether the delete may proceed.

        Follows CASCADE relations, so entities which would be deleted along
        with this one are checked too. ``seen`` guards against reference
        cycles.

        Raises:
            ReferentialIntegrityError: If a relation blocks the delete.
        """
        store = resolve_store(store)
        seen = set() if seen is None else seen
        if self.unique_id in seen:
            return
        seen.add(self.unique_id)
        for fk in self.descriptor().remote_foreign_keys:
            fk.check_delete(self, store, seen)

    def cascade_delete(self, store: BaseDocumentStore | None = None) -> None:
        """Propagate the delete to referencing entities."""
        store = resolve_store(store)
        for fk in self.descriptor().remote_foreign_keys:
            fk.on_delete(self, store)

    # --- Change tracking ---

    def init_source_tracing(self) -> None:
        """Start recording persisted values; done by the store when loading."""
        self.source = {}

    def set_source(self, name: str, value: Any) -> None:
        """Record the persisted value of a field (ignored unless tracing)."""
        if self.source is not None:
            self.source[name] = value

    def is_changed(self, field: str, value: Any) -> bool:
        """True if ``value`` differs from the value loaded from the store.

        Entities which were never loaded report no changes.
        """
        return self.source is not None and value != self.source.get(field)

    # --- Form input ---

    def load(self, request: Mapping[str, Any], *properties_to_read: str) -> dict[str, FieldChange]:
        """Apply the given properties from a submitted form.

        Args:
            request: Submitted values keyed by property name.
            *properties_to_read: Names of the properties which may be changed.

        Returns:
            Changed properties (sorted by name) with old and new stored value.
        """
        allowed = set(properties_to_read)
        changes: dict[str, FieldChange] = {}
        for prop in self.descriptor().properties:
            if prop.name not in allowed:
                continue
            old_value = prop.write_to_source(self)
            prop.read_from_request(self, request)
            new_value = prop.write_to_source(self)
            if new_value != old_value:
                changes[prop.name] = FieldChange(old=old_value, new=new_value)
        return dict(sorted(changes.items()))
