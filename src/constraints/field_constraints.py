# src/constraints/field_constraints.py — v1
"""Field (in)equality predicates.

These are the predicates the mapping layer itself needs (uniqueness
checks, foreign key lookups). Each is query-kind unless ``as_filter()``
was called.
"""

from __future__ import annotations

from typing import Any

from docmapper.constraints.base_constraint import LeafConstraint


class FieldEqual(LeafConstraint):
    """Field must equal the given value; a None value means the field is missing."""

    def __init__(self, field: str, value: Any) -> None:
        super().__init__()
        self._field = field
        self._value = value

    def create_clause(self) -> dict[str, Any]:
        if self._value is None:
            return {"bool": {"must_not": [{"exists": {"field": self._field}}]}}
        return {"term": {self._field: self._value}}

    def to_string(self, skip_values: bool = False) -> str:
        return f"{self._field} = {'?' if skip_values else self._value}"


class FieldNotEqual(LeafConstraint):
    """Field must not equal the given value; a None value means the field is present."""

    def __init__(self, field: str, value: Any) -> None:
        super().__init__()
        self._field = field
        self._value = value

    def create_clause(self) -> dict[str, Any]:
        if self._value is None:
            return {"exists": {"field": self._field}}
        return {"bool": {"must_not": [{"term": {self._field: self._value}}]}}

    def to_string(self, skip_values: bool = False) -> str:
        return f"{self._field} != {'?' if skip_values else self._value}"
