# tests/unit/constraints/test_and_constraint.py — v1
"""Tests for constraints/and_constraint.py — query/filter conjunctions."""

from __future__ import annotations

import pytest

from docmapper.constraints.and_constraint import And
from docmapper.constraints.field_constraints import FieldEqual, FieldNotEqual
from docmapper.core.errors import ConstraintMixingError


def _query(field: str = "name", value: str = "a") -> FieldEqual:
    return FieldEqual(field, value)


def _filter(field: str = "city", value: str = "b") -> FieldEqual:
    return FieldEqual(field, value).as_filter()


class TestAndQueries:
    def test_queries_combine_into_bool_must(self):
        q1, q2 = _query("name", "a"), _query("city", "b")
        result = And.on(q1, q2).create_query()
        assert result == {
            "bool": {"must": [{"term": {"name": "a"}}, {"term": {"city": "b"}}]}
        }

    def test_filter_of_pure_queries_is_empty(self):
        assert And.on(_query(), _query("city")).create_filter() is None


class TestAndFilters:
    def test_filters_combine_into_bool_must(self):
        result = And.on(_filter("a", 1), _filter("b", 2)).create_filter()
        assert result == {"bool": {"must": [{"term": {"a": 1}}, {"term": {"b": 2}}]}}

    def test_query_of_pure_filters_is_empty(self):
        assert And.on(_filter(), _filter("x")).create_query() is None


class TestAndMixing:
    def test_mixed_create_query_raises(self):
        with pytest.raises(ConstraintMixingError, match="must not mix"):
            And.on(_query(), _filter()).create_query()

    def test_mixed_create_filter_raises(self):
        with pytest.raises(ConstraintMixingError, match="must not mix"):
            And.on(_query(), _filter()).create_filter()

    def test_mixing_error_is_value_error(self):
        with pytest.raises(ValueError):
            And.on(_filter(), _query()).create_filter()

    def test_nested_and_keeps_kind(self):
        inner = And.on(_filter("a", 1), _filter("b", 2))
        outer = And.on(inner, _filter("c", 3))
        assert outer.create_query() is None
        assert outer.create_filter()["bool"]["must"][0] == inner.create_filter()

    def test_nested_mixing_detected(self):
        with pytest.raises(ConstraintMixingError):
            And.on(And.on(_query()), _filter()).create_query()


class TestAndEmpty:
    def test_no_children(self):
        empty = And.on()
        assert empty.create_query() is None
        assert empty.create_filter() is None

    def test_empty_child_contributes_nothing(self):
        result = And.on(And.on(), _query()).create_query()
        assert result == {"bool": {"must": [{"term": {"name": "a"}}]}}

    def test_children_not_mutated(self):
        q1 = _query()
        conjunction = And.on(q1)
        first = conjunction.create_query()
        second = conjunction.create_query()
        assert first == second
        assert first is not second
        assert q1.create_query() == {"term": {"name": "a"}}


class TestAndToString:
    def test_renders_children(self):
        text = str(And.on(FieldEqual("name", "a"), FieldNotEqual("city", "b")))
        assert text == "(name = a) AND (city != b)"

    def test_skip_values(self):
        text = And.on(FieldEqual("name", "secret"), FieldEqual("city", "x")).to_string(True)
        assert text == "(name = ?) AND (city = ?)"
        assert "secret" not in text

    def test_skip_values_recurses(self):
        text = And.on(And.on(FieldEqual("a", 1)), FieldEqual("b", 2)).to_string(True)
        assert text == "((a = ?)) AND (b = ?)"
