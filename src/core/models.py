# src/core/models.py — v1
"""Core value types: StoredDocument, FieldChange, FetchResult."""

from __future__ import annotations

from typing import Any, NamedTuple

from pydantic import BaseModel, Field

# Name under which constraints address the document identifier.
ID_FIELD = "_id"


class StoredDocument(BaseModel):
    """Persisted form of an entity, as held by stores and caches."""

    id: str
    type_name: str
    version: int = 0
    source: dict[str, Any] = Field(default_factory=dict)

    @property
    def unique_id(self) -> str:
        return f"{self.type_name}-{self.id}"


class FieldChange(BaseModel):
    """Old and new external representation of a property after a form load."""

    old: Any = None
    new: Any = None


class FetchResult(NamedTuple):
    """Outcome of a cache-aware lookup.

    ``from_cache`` is True when the entity was built from a cached copy
    which may not reflect the latest persisted state.
    """

    entity: Any
    from_cache: bool
