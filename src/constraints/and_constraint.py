# src/constraints/and_constraint.py — v1
"""Conjunction of constraints: every child must be fulfilled."""

from __future__ import annotations

from typing import Any

from docmapper.constraints.base_constraint import Constraint
from docmapper.core.errors import ConstraintMixingError


class And(Constraint):
    """Set of constraints of which every one must be fulfilled.

    Children keep their own kind: a conjunction of queries is a scoring
    bool query, a conjunction of filters is a bool filter. Mixing both
    kinds in one conjunction raises ConstraintMixingError instead of
    coercing one kind into the other.

    Use the ``on`` factory method.
    """

    def __init__(self, *constraints: Constraint) -> None:
        self._constraints: tuple[Constraint, ...] = tuple(constraints)

    @classmethod
    def on(cls, *constraints: Constraint) -> And:
        """Create a constraint where every one of the given constraints must be fulfilled."""
        return cls(*constraints)

    @property
    def constraints(self) -> tuple[Constraint, ...]:
        return self._constraints

    def create_query(self) -> dict[str, Any] | None:
        clauses: list[dict[str, Any]] = []
        filters_found = False
        for constraint in self._constraints:
            query = constraint.create_query()
            if query is not None:
                clauses.append(query)
            if constraint.create_filter() is not None:
                filters_found = True

        if not clauses:
            return None
        if filters_found:
            raise ConstraintMixingError(
                f"You must not mix filters and queries in an AND constraint! {self}"
            )
        return {"bool": {"must": clauses}}

    def create_filter(self) -> dict[str, Any] | None:
        clauses: list[dict[str, Any]] = []
        queries_found = False
        for constraint in self._constraints:
            flt = constraint.create_filter()
            if flt is not None:
                clauses.append(flt)
            if constraint.create_query() is not None:
                queries_found = True

        if not clauses:
            return None
        if queries_found:
            raise ConstraintMixingError(
                f"You must not mix filters and queries in an AND constraint! {self}"
            )
        return {"bool": {"must": clauses}}

    def to_string(self, skip_values: bool = False) -> str:
        inner = ") AND (".join(c.to_string(skip_values) for c in self._constraints)
        return f"({inner})"
