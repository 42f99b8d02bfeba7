"""Boolean constraint algebra producing query or filter clauses."""

from docmapper.constraints.and_constraint import And
from docmapper.constraints.base_constraint import Constraint, LeafConstraint
from docmapper.constraints.field_constraints import FieldEqual, FieldNotEqual

__all__ = ["And", "Constraint", "FieldEqual", "FieldNotEqual", "LeafConstraint"]
