# src/logging/context.py — v1
"""Contextual logging support — attach entity type, entity id and operation to log records."""

from __future__ import annotations

import contextvars
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
# Context variables for structured logging, set around each store operation.
_entity_type: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "entity_type", default=None
)
_entity_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "entity_id", default=None
)
_operation: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "operation", default=None
)


@dataclass
class LogContext:
    """Snapshot of the store operation a log record was emitted in."""

    entity_type: str | None = None
    entity_id: str | None = None
    operation: str | None = None

    @property
    def subject(self) -> str | None:
        """Entity the operation runs on, as ``<type>-<id>`` (or just the type while unsaved)."""
        if self.entity_type is None:
            return None
        if self.entity_id is None:
            return self.entity_type
        return f"{self.entity_type}-{self.entity_id}"


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        entity_type=_entity_type.get(),
        entity_id=_entity_id.get(),
        operation=_operation.get(),
    )


@contextmanager
def entity_context(
    entity_type: str, entity_id: str | None, operation: str
) -> Iterator[None]:
    """Bind entity and operation context for the duration of a block.

    Nested store calls (cascades) rebind the context and restore the
    outer one when they finish.
    """
    tokens = (
        _entity_type.set(entity_type),
        _entity_id.set(entity_id),
        _operation.set(operation),
    )
    try:
        yield
    finally:
        _operation.reset(tokens[2])
        _entity_id.reset(tokens[1])
        _entity_type.reset(tokens[0])
