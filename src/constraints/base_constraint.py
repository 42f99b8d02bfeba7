# src/constraints/base_constraint.py — v1
"""Abstract constraint interface.

A constraint resolves to at most one of two artifacts, both expressed in
the Elasticsearch query DSL:

- a query clause, which takes part in relevance scoring,
- a filter clause, which only narrows the selection.

A leaf decides on its own which kind it produces; compound constraints
must keep that decision intact.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class Constraint(ABC):
    """Node of a constraint tree."""

    @abstractmethod
    def create_query(self) -> dict[str, Any] | None:
        """Return the scoring query clause, or None."""

    @abstractmethod
    def create_filter(self) -> dict[str, Any] | None:
        """Return the non-scoring filter clause, or None."""

    @abstractmethod
    def to_string(self, skip_values: bool = False) -> str:
        """Render the constraint; literal values become '?' when skip_values is set."""

    def __str__(self) -> str:
        return self.to_string(False)


class LeafConstraint(Constraint):
    """Elementary predicate which is either query-kind or filter-kind."""

    def __init__(self) -> None:
        self._is_filter = False

    def as_filter(self) -> LeafConstraint:
        """Turn this predicate into a non-scoring filter."""
        self._is_filter = True
        return self

    @property
    def is_filter(self) -> bool:
        return self._is_filter

    @abstractmethod
    def create_clause(self) -> dict[str, Any]:
        """Build the DSL clause shared by the query and filter form."""

    def create_query(self) -> dict[str, Any] | None:
        if self._is_filter:
            return None
        return self.create_clause()

    def create_filter(self) -> dict[str, Any] | None:
        if not self._is_filter:
            return None
        return self.create_clause()
