# tests/conftest.py — v1
"""Shared test fixtures for all unit and integration tests.

Provides a fresh schema registry with a small sample domain and an
in-memory store installed as default store. No external services.
"""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from docmapper.entity.entity import Entity
from docmapper.mapping.markers import Cascade, RefField
from docmapper.mapping.properties import (
    EntityRefListProperty,
    EntityRefProperty,
    IntProperty,
    StringProperty,
)
from docmapper.mapping.registry import SchemaRegistry
from docmapper.store.default import set_default_store
from docmapper.store.memory_store import MemoryDocumentStore


# === FIXTURES: Sample domain ===


@pytest.fixture
def registry() -> SchemaRegistry:
    return SchemaRegistry()


@pytest.fixture
def model(registry: SchemaRegistry) -> SimpleNamespace:
    """Company <- Employee (reject), Note (set null), Contract (cascade); Project -> [Employee]."""

    class Company(Entity):
        properties = [
            StringProperty("name", nullable=False, unique=True),
            StringProperty("city"),
        ]

    class Employee(Entity):
        properties = [
            StringProperty("name", nullable=False),
            StringProperty("email", unique=True, unique_within="company"),
            EntityRefProperty("company", Company, cascade=Cascade.REJECT),
            StringProperty("company_name", ref_field=RefField("company", "name")),
            IntProperty("age"),
        ]

    class Note(Entity):
        properties = [
            StringProperty("text"),
            EntityRefProperty("company", Company, cascade=Cascade.SET_NULL),
        ]

    class Contract(Entity):
        properties = [
            StringProperty("title"),
            EntityRefProperty("company", Company, cascade=Cascade.CASCADE),
        ]

    class Project(Entity):
        properties = [
            StringProperty("title"),
            EntityRefListProperty("members", Employee),
        ]

    for cls in (Company, Employee, Note, Contract, Project):
        registry.register(cls)

    return SimpleNamespace(
        Company=Company,
        Employee=Employee,
        Note=Note,
        Contract=Contract,
        Project=Project,
    )


@pytest.fixture
def store() -> MemoryDocumentStore:
    """Fresh in-memory store, installed as default store for the test."""
    memory_store = MemoryDocumentStore()
    set_default_store(memory_store)
    yield memory_store
    set_default_store(None)


@pytest.fixture
def make_company(model, store):
    """Factory saving a company with the given name."""

    def _make(name: str, city: str | None = None):
        company = model.Company()
        company.name = name
        company.city = city
        return store.update(company)

    return _make


@pytest.fixture
def make_employee(model, store):
    """Factory saving an employee, optionally attached to a company."""

    def _make(name: str, company=None, email: str | None = None):
        employee = model.Employee()
        employee.name = name
        employee.email = email
        if company is not None:
            employee.company.set_value(company)
        return store.update(employee)

    return _make
