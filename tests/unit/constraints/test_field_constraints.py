# tests/unit/constraints/test_field_constraints.py — v1
"""Tests for constraints/field_constraints.py — FieldEqual, FieldNotEqual."""

from __future__ import annotations

import pytest

from docmapper.constraints.base_constraint import Constraint
from docmapper.constraints.field_constraints import FieldEqual, FieldNotEqual


class TestConstraintBase:
    def test_cannot_instantiate(self):
        with pytest.raises(TypeError):
            Constraint()  # type: ignore[abstract]


class TestFieldEqual:
    def test_query_by_default(self):
        constraint = FieldEqual("name", "a")
        assert constraint.create_query() == {"term": {"name": "a"}}
        assert constraint.create_filter() is None
        assert constraint.is_filter is False

    def test_as_filter(self):
        constraint = FieldEqual("name", "a").as_filter()
        assert constraint.create_query() is None
        assert constraint.create_filter() == {"term": {"name": "a"}}

    def test_none_means_missing(self):
        assert FieldEqual("name", None).create_query() == {
            "bool": {"must_not": [{"exists": {"field": "name"}}]}
        }

    def test_to_string(self):
        assert str(FieldEqual("name", "a")) == "name = a"
        assert FieldEqual("name", "a").to_string(skip_values=True) == "name = ?"


class TestFieldNotEqual:
    def test_must_not_term(self):
        assert FieldNotEqual("_id", "x").as_filter().create_filter() == {
            "bool": {"must_not": [{"term": {"_id": "x"}}]}
        }

    def test_none_means_present(self):
        assert FieldNotEqual("name", None).create_query() == {"exists": {"field": "name"}}

    def test_to_string(self):
        assert FieldNotEqual("a", 1).to_string(True) == "a != ?"
