# src/mapping/descriptor.py — v1
"""Per-type metadata resolved once when an entity class is registered."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from docmapper.mapping.properties import Property

if TYPE_CHECKING:
    from docmapper.entity.entity import Entity
    from docmapper.mapping.foreign_key import ForeignKey

SaveHook = Callable[["Entity"], None]


class EntityDescriptor:
    """Declared properties, foreign keys and save hooks of one entity type."""

    def __init__(
        self,
        entity_class: type[Entity],
        type_name: str,
        properties: list[Property],
    ) -> None:
        self.entity_class = entity_class
        self.type_name = type_name
        self._properties = list(properties)
        self._by_name = {p.name: p for p in self._properties}
        self.remote_foreign_keys: list[ForeignKey] = []
        self.internal_save_hooks: list[SaveHook] = []

    def __repr__(self) -> str:
        return f"EntityDescriptor({self.type_name!r}, {len(self._properties)} properties)"

    @property
    def properties(self) -> list[Property]:
        return list(self._properties)

    def get_property(self, name: str) -> Property | None:
        return self._by_name.get(name)

    def get_property_or_raise(self, name: str) -> Property:
        prop = self._by_name.get(name)
        if prop is None:
            raise KeyError(f"{self.type_name} has no property {name!r}")
        return prop

    def add_internal_save_hook(self, hook: SaveHook) -> None:
        """Register a framework-level hook run before every save, in registration order."""
        self.internal_save_hooks.append(hook)
