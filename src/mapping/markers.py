# src/mapping/markers.py — v1
"""Declarative markers attached to property descriptors."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Cascade(str, Enum):
    """What happens to referencing entities when the referenced one is deleted."""

    IGNORE = "ignore"  # keep the dangling id
    REJECT = "reject"  # block the delete while references exist
    CASCADE = "cascade"  # delete the referencing entities as well
    SET_NULL = "set_null"  # clear the reference and re-save


@dataclass(frozen=True)
class RefField:
    """Marks a property as a copy of a field of a referenced entity.

    Attributes:
        local_ref: Name of the EntityRefProperty on the same entity.
        remote_field: Name of the property on the referenced entity to mirror.
    """

    local_ref: str
    remote_field: str
