# src/mapping/registry.py — v1
"""Schema registry — explicit registration of entity types.

Each entity class declares a ``properties`` list. Registration collects
those lists along the class hierarchy, validates the declarative markers
and wires foreign keys between registered types. The resulting
EntityDescriptor is stored on the class and never recomputed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, TypeVar

from docmapper.core.errors import DocMapperError, UnknownEntityTypeError
from docmapper.mapping.descriptor import EntityDescriptor, SaveHook
from docmapper.mapping.foreign_key import ForeignKey
from docmapper.mapping.markers import Cascade
from docmapper.mapping.properties import EntityRefProperty, Property

if TYPE_CHECKING:
    from docmapper.entity.entity import Entity

logger = logging.getLogger(__name__)

E = TypeVar("E", bound="Entity")

# Entity attributes which are not properties.
RESERVED_NAMES = frozenset({"id", "version", "deleted", "source", "properties", "type_name"})

DESCRIPTOR_ATTR = "_descriptor"


class RegistryError(DocMapperError):
    """Raised when an entity type declaration is invalid."""


class SchemaRegistry:
    """Registry of all known entity types."""

    def __init__(self) -> None:
        self._by_type: dict[str, EntityDescriptor] = {}
        self._pending: list[tuple[type, ForeignKey]] = []

    @property
    def descriptors(self) -> dict[str, EntityDescriptor]:
        """Return mapping of type_name -> descriptor."""
        return dict(self._by_type)

    @property
    def type_names(self) -> list[str]:
        return sorted(self._by_type)

    def register(self, entity_class: type[E], type_name: str | None = None) -> type[E]:
        """Build and attach the descriptor of ``entity_class``.

        Returns the class, so this can be used as a decorator.

        Raises:
            RegistryError: On duplicate registration or invalid markers.
        """
        name = type_name or entity_class.__dict__.get("type_name") or entity_class.__name__.lower()
        if name in self._by_type:
            raise RegistryError(f"Entity type '{name}' is already registered")
        if DESCRIPTOR_ATTR in entity_class.__dict__:
            raise RegistryError(f"{entity_class.__name__} is already registered")

        properties = _collect_properties(entity_class)
        descriptor = EntityDescriptor(entity_class, name, properties)
        _validate(descriptor)

        setattr(entity_class, DESCRIPTOR_ATTR, descriptor)
        self._by_type[name] = descriptor

        for prop in properties:
            if isinstance(prop, EntityRefProperty):
                self._pending.append((prop.ref_type, ForeignKey(descriptor, prop)))
        self._link_foreign_keys()

        logger.debug("Registered entity type %s (%d properties)", name, len(properties))
        return entity_class

    def _link_foreign_keys(self) -> None:
        """Attach every pending foreign key whose target type is now registered."""
        remaining: list[tuple[type, ForeignKey]] = []
        for target, fk in self._pending:
            target_descriptor = target.__dict__.get(DESCRIPTOR_ATTR)
            if target_descriptor is None:
                remaining.append((target, fk))
                continue
            target_descriptor.remote_foreign_keys.append(fk)
            for prop in fk.local.properties:
                ref = prop.ref_field
                if ref is not None and ref.local_ref == fk.field_name:
                    if target_descriptor.get_property(ref.remote_field) is None:
                        raise RegistryError(
                            f"{fk.local.type_name}.{prop.name} mirrors unknown field "
                            f"{target_descriptor.type_name}.{ref.remote_field}"
                        )
        self._pending = remaining

    def is_registered(self, entity_class: type) -> bool:
        return DESCRIPTOR_ATTR in entity_class.__dict__

    def get_descriptor(self, entity_class: type) -> EntityDescriptor:
        """Get the descriptor of a registered class, raise if unknown."""
        descriptor = entity_class.__dict__.get(DESCRIPTOR_ATTR)
        if descriptor is None or self._by_type.get(descriptor.type_name) is not descriptor:
            raise UnknownEntityTypeError(f"{entity_class.__name__} is not registered")
        return descriptor

    def get_descriptor_by_type(self, type_name: str) -> EntityDescriptor:
        descriptor = self._by_type.get(type_name)
        if descriptor is None:
            raise UnknownEntityTypeError(f"Entity type '{type_name}' is not registered")
        return descriptor

    def add_internal_save_hook(self, entity_class: type, hook: SaveHook) -> None:
        """Register a framework-level save hook for ``entity_class`` and its subclasses."""
        self.get_descriptor(entity_class).add_internal_save_hook(hook)

    def unresolved_references(self) -> list[str]:
        """Return references pointing at types which were never registered."""
        return [f"{fk.local.type_name}.{fk.field_name} -> {target.__name__}" for target, fk in self._pending]


def _collect_properties(entity_class: type) -> list[Property]:
    """Gather ``properties`` declared on the class and its bases, base first."""
    properties: list[Property] = []
    seen: set[str] = set()
    for klass in reversed(entity_class.__mro__):
        for prop in klass.__dict__.get("properties", ()):
            if prop.name in RESERVED_NAMES:
                raise RegistryError(f"{entity_class.__name__}: '{prop.name}' is a reserved name")
            if prop.name in seen:
                raise RegistryError(f"{entity_class.__name__}: duplicate property '{prop.name}'")
            seen.add(prop.name)
            properties.append(prop)
    return properties


def _validate(descriptor: EntityDescriptor) -> None:
    for prop in descriptor.properties:
        if (
            isinstance(prop, EntityRefProperty)
            and prop.cascade == Cascade.SET_NULL
            and not prop.nullable
        ):
            raise RegistryError(
                f"{descriptor.type_name}.{prop.name}: SET_NULL requires a nullable reference"
            )
        if prop.unique_within and descriptor.get_property(prop.unique_within) is None:
            raise RegistryError(
                f"{descriptor.type_name}.{prop.name}: unique_within names unknown "
                f"property '{prop.unique_within}'"
            )
        if prop.ref_field is not None:
            local = descriptor.get_property(prop.ref_field.local_ref)
            if not isinstance(local, EntityRefProperty):
                raise RegistryError(
                    f"{descriptor.type_name}.{prop.name}: '{prop.ref_field.local_ref}' "
                    "is not an entity reference"
                )


# Process-wide default registry.
schema = SchemaRegistry()


def register(
    entity_class: type[E] | None = None, *, type_name: str | None = None
) -> type[E] | Callable[[type[E]], type[E]]:
    """Register with the default registry; usable as ``@register`` or ``@register(type_name=...)``."""
    if entity_class is None:
        return lambda cls: schema.register(cls, type_name)
    return schema.register(entity_class, type_name)
