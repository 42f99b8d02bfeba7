"""Entity base class and lazy entity references."""

from docmapper.entity.entity import Entity
from docmapper.entity.entity_ref import EntityRef
from docmapper.entity.entity_ref_list import EntityRefList

__all__ = ["Entity", "EntityRef", "EntityRefList"]
