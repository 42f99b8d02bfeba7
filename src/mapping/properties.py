# src/mapping/properties.py — v1
"""Property descriptors: the explicit per-type field list of an entity.

Each entity class declares its fields as a list of Property instances.
A property knows how to default-initialize its field, how to render it
into the stored document, how to read it back and how to take it from a
submitted form. Values live in the entity's ``__dict__`` under the
property name, so they are plain attributes for application code.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from docmapper.core.errors import ValidationError
from docmapper.mapping.markers import Cascade, RefField

if TYPE_CHECKING:
    from docmapper.entity.entity import Entity


class Property:
    """Plain value field."""

    def __init__(
        self,
        name: str,
        *,
        default: Any = None,
        nullable: bool = True,
        unique: bool = False,
        unique_within: str | None = None,
        ref_field: RefField | None = None,
        label: str | None = None,
    ) -> None:
        if unique_within and not unique:
            raise ValueError(f"{name}: unique_within requires unique=True")
        self.name = name
        self.default = default
        self.nullable = nullable
        self.unique = unique
        self.unique_within = unique_within
        self.ref_field = ref_field
        self.label = label or name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"

    # --- Field access ---

    def init(self, entity: Entity) -> None:
        """Populate the field with its default value."""
        self.set_value(entity, copy.deepcopy(self.default))

    def get_value(self, entity: Entity) -> Any:
        return entity.__dict__.get(self.name)

    def set_value(self, entity: Entity, value: Any) -> None:
        entity.__dict__[self.name] = value

    # --- Stored representation ---

    def write_to_source(self, entity: Entity) -> Any:
        """Return the value as it is written into the stored document."""
        return self.get_value(entity)

    def read_from_source(self, entity: Entity, value: Any) -> None:
        """Apply a stored value and record it in the entity's source snapshot."""
        self.set_value(entity, copy.deepcopy(value))
        entity.set_source(self.name, value)

    # --- Form input ---

    def read_from_request(self, entity: Entity, request: Mapping[str, Any]) -> None:
        """Apply the submitted value, if the request carries one."""
        if self.name in request:
            self.set_value(entity, self.parse_request_value(request[self.name]))

    def parse_request_value(self, raw: Any) -> Any:
        return raw

    def is_empty(self, value: Any) -> bool:
        if value is None:
            return True
        if isinstance(value, str):
            return value == ""
        if isinstance(value, (list, tuple, dict, set)):
            return len(value) == 0
        return False


class StringProperty(Property):
    """Text field; blank form input is stored as None."""

    def parse_request_value(self, raw: Any) -> str | None:
        if raw is None:
            return None
        text = str(raw).strip()
        return text or None


class IntProperty(Property):
    """Integer field."""

    def parse_request_value(self, raw: Any) -> int | None:
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            return None
        try:
            return int(raw)
        except (TypeError, ValueError) as exc:
            raise ValidationError(
                f"{self.label} must be a number",
                field=self.name,
                value=raw,
                field_errors={self.name: str(raw)},
            ) from exc


class EntityRefProperty(Property):
    """Reference to a single other entity, stored as its id."""

    def __init__(
        self,
        name: str,
        ref_type: type[Entity],
        *,
        cascade: Cascade = Cascade.IGNORE,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, **kwargs)
        self.ref_type = ref_type
        self.cascade = cascade

    def init(self, entity: Entity) -> None:
        from docmapper.entity.entity_ref import EntityRef

        self.set_value(entity, EntityRef(self.ref_type))

    def write_to_source(self, entity: Entity) -> str | None:
        ref = self.get_value(entity)
        return None if ref is None else ref.id

    def read_from_source(self, entity: Entity, value: Any) -> None:
        self.get_value(entity).set_id(value or None)
        entity.set_source(self.name, value)

    def read_from_request(self, entity: Entity, request: Mapping[str, Any]) -> None:
        if self.name in request:
            raw = request[self.name]
            ref_id = "" if raw is None else str(raw).strip()
            self.get_value(entity).set_id(ref_id or None)


class EntityRefListProperty(Property):
    """Ordered list of references, stored as a list of ids."""

    def __init__(self, name: str, ref_type: type[Entity], **kwargs: Any) -> None:
        super().__init__(name, **kwargs)
        self.ref_type = ref_type

    def init(self, entity: Entity) -> None:
        from docmapper.entity.entity_ref_list import EntityRefList

        self.set_value(entity, EntityRefList(self.ref_type))

    def write_to_source(self, entity: Entity) -> list[str]:
        refs = self.get_value(entity)
        return [] if refs is None else refs.ids

    def read_from_source(self, entity: Entity, value: Any) -> None:
        self.get_value(entity).set_ids(list(value or []))
        entity.set_source(self.name, list(value or []))

    def read_from_request(self, entity: Entity, request: Mapping[str, Any]) -> None:
        if self.name not in request:
            return
        raw = request[self.name]
        if isinstance(raw, str):
            raw = raw.split(",")
        self.get_value(entity).set_ids([str(i).strip() for i in raw or []])
