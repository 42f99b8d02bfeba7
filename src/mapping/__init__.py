"""Entity type metadata: properties, foreign keys and the schema registry."""

from docmapper.mapping.descriptor import EntityDescriptor
from docmapper.mapping.foreign_key import ForeignKey
from docmapper.mapping.markers import Cascade, RefField
from docmapper.mapping.properties import (
    EntityRefListProperty,
    EntityRefProperty,
    IntProperty,
    Property,
    StringProperty,
)
from docmapper.mapping.registry import RegistryError, SchemaRegistry, register, schema

__all__ = [
    "Cascade",
    "EntityDescriptor",
    "EntityRefListProperty",
    "EntityRefProperty",
    "ForeignKey",
    "IntProperty",
    "Property",
    "RefField",
    "RegistryError",
    "SchemaRegistry",
    "StringProperty",
    "register",
    "schema",
]
