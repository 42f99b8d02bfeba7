"""docmapper — entity mapping and query construction for document stores."""

from docmapper.constraints import And, Constraint, FieldEqual, FieldNotEqual
from docmapper.core.errors import (
    ConstraintMixingError,
    DocMapperError,
    OptimisticLockError,
    ReferentialIntegrityError,
    StoreNotConfiguredError,
    UnknownEntityTypeError,
    ValidationError,
)
from docmapper.entity import Entity, EntityRef, EntityRefList
from docmapper.mapping import (
    Cascade,
    EntityRefListProperty,
    EntityRefProperty,
    IntProperty,
    Property,
    RefField,
    SchemaRegistry,
    StringProperty,
    register,
    schema,
)
from docmapper.store import (
    BaseDocumentStore,
    MemoryDocumentStore,
    create_store,
    get_default_store,
    set_default_store,
)
from docmapper.version import __version__

__all__ = [
    "And",
    "BaseDocumentStore",
    "Cascade",
    "Constraint",
    "ConstraintMixingError",
    "DocMapperError",
    "Entity",
    "EntityRef",
    "EntityRefList",
    "EntityRefListProperty",
    "EntityRefProperty",
    "FieldEqual",
    "FieldNotEqual",
    "IntProperty",
    "MemoryDocumentStore",
    "OptimisticLockError",
    "Property",
    "RefField",
    "ReferentialIntegrityError",
    "SchemaRegistry",
    "StoreNotConfiguredError",
    "StringProperty",
    "UnknownEntityTypeError",
    "ValidationError",
    "__version__",
    "create_store",
    "get_default_store",
    "register",
    "schema",
    "set_default_store",
]
