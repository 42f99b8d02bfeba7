# src/core/errors.py — v1
"""Exception hierarchy of the mapping layer.

User-facing errors (validation, referential integrity) abort a save or
delete and carry enough context to annotate a form. Programmer errors
such as mixing queries and filters in one conjunction derive from
ValueError and are never meant to be caught.
"""

from __future__ import annotations


class DocMapperError(Exception):
    """Base class for all errors raised by docmapper."""


class ValidationError(DocMapperError):
    """An entity failed its consistency checks and was not saved.

    Attributes:
        field: Name of the first property that failed.
        value: Offending value of that property (None for empty fields).
        field_errors: Every property annotated during the check, mapped to
            its offending value.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: object = None,
        field_errors: dict[str, str | None] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.value = value
        self.field_errors = dict(field_errors or {})


class ReferentialIntegrityError(DocMapperError):
    """A delete was blocked because other entities still reference the target."""

    def __init__(self, message: str, referencing_type: str, field: str) -> None:
        super().__init__(message)
        self.referencing_type = referencing_type
        self.field = field


class OptimisticLockError(DocMapperError):
    """The stored version differs from the one the entity was loaded with."""


class UnknownEntityTypeError(DocMapperError):
    """An entity class was used without being registered in a schema."""


class StoreNotConfiguredError(DocMapperError):
    """No document store was passed and no default store is installed."""


class ConstraintMixingError(ValueError):
    """Query-kind and filter-kind constraints were combined in one conjunction."""
