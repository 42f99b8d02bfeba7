# tests/unit/entity/test_entity_ref_list.py — v1
"""Tests for entity/entity_ref_list.py — lazy list reference."""

from __future__ import annotations

from docmapper.cache.memory_cache import MemoryEntityCache
from docmapper.entity.entity_ref_list import EntityRefList


class TestEntityRefListState:
    def test_empty_list_is_loaded(self, model):
        refs = EntityRefList(model.Company)
        assert refs.ids == []
        assert refs.is_value_loaded()

    def test_set_ids_keeps_order_and_duplicates(self, model):
        refs = EntityRefList(model.Company)
        refs.set_ids(["a", "b", "a"])
        assert refs.ids == ["a", "b", "a"]
        assert refs.contains_id("a")
        assert not refs.is_value_loaded()

    def test_set_ids_drops_blank(self, model):
        refs = EntityRefList(model.Company)
        refs.set_ids(["a", "", None, " ", "b"])
        assert refs.ids == ["a", "b"]

    def test_set_ids_clears_values(self, make_company, model):
        refs = EntityRefList(model.Company)
        refs.add_value(make_company("ACME"))
        assert refs.is_value_loaded()
        refs.set_ids(["x"])
        assert not refs.is_value_loaded()
        assert not refs.value_from_cache

    def test_ids_is_a_copy(self, model):
        refs = EntityRefList(model.Company)
        refs.set_ids(["a"])
        refs.ids.append("b")
        assert refs.ids == ["a"]

    def test_contains(self, make_company, model):
        acme = make_company("ACME")
        refs = EntityRefList(model.Company)
        refs.set_ids([acme.id])
        assert refs.contains(acme)
        assert not refs.contains(None)
        assert not refs.contains_id("")
        assert not refs.contains_id(None)


class TestAddValue:
    def test_add_to_empty_materializes(self, make_company, store, model):
        acme = make_company("ACME")
        refs = EntityRefList(model.Company)
        refs.add_value(acme)
        loads = store.load_count
        assert refs.ids == [acme.id]
        assert refs.get_values() == [acme]
        assert store.load_count == loads

    def test_add_to_materialized_appends(self, make_company, model):
        acme, globex = make_company("ACME"), make_company("Globex")
        refs = EntityRefList(model.Company)
        refs.add_value(acme)
        refs.add_value(globex)
        assert refs.ids == [acme.id, globex.id]
        assert refs.get_values() == [acme, globex]

    def test_add_to_unresolved_keeps_values_unloaded(self, make_company, model):
        acme = make_company("ACME")
        refs = EntityRefList(model.Company)
        refs.set_ids(["x"])
        refs.add_value(acme)
        assert refs.ids == ["x", acme.id]
        assert not refs.is_value_loaded()

    def test_add_none_is_noop(self, model):
        refs = EntityRefList(model.Company)
        refs.add_value(None)
        assert refs.ids == []


class TestResolution:
    def test_get_values_in_id_order(self, make_company, store, model):
        acme, globex = make_company("ACME"), make_company("Globex")
        refs = EntityRefList(model.Company)
        refs.set_ids([globex.id, acme.id, globex.id])
        values = refs.get_values()
        assert [c.name for c in values] == ["Globex", "ACME", "Globex"]

    def test_missing_targets_skipped(self, make_company, store, model):
        acme = make_company("ACME")
        refs = EntityRefList(model.Company)
        refs.set_ids(["gone", acme.id])
        assert refs.get_values() == [acme]
        assert refs.ids == ["gone", acme.id]

    def test_cached_any_hit_marks_stale(self, make_company, store, model):
        acme, globex = make_company("ACME"), make_company("Globex")
        store.fetch(model.Company, acme.id)

        refs = EntityRefList(model.Company)
        refs.set_ids([globex.id, acme.id])
        assert refs.get_cached_value() == [globex, acme]
        assert refs.value_from_cache

    def test_cached_all_misses_is_fresh(self, make_company, store, model):
        acme = make_company("ACME")
        refs = EntityRefList(model.Company)
        refs.set_ids([acme.id])
        refs.get_cached_value()
        assert not refs.value_from_cache

    def test_get_values_refreshes_stale(self, make_company, store, model):
        acme = make_company("ACME")
        store.fetch(model.Company, acme.id)
        refs = EntityRefList(model.Company)
        refs.set_ids([acme.id])
        refs.get_cached_value()

        loads = store.load_count
        refs.get_values()
        assert store.load_count == loads + 1
        assert not refs.value_from_cache

    def test_local_cache(self, make_company, store, model):
        acme = make_company("ACME")
        local = MemoryEntityCache()
        refs = EntityRefList(model.Company)
        refs.set_ids([acme.id])
        refs.get_cached_value(local)
        assert acme.unique_id in local

        second = EntityRefList(model.Company)
        second.set_ids([acme.id])
        second.get_cached_value(local)
        assert second.value_from_cache

    def test_loaded_list_returns_without_lookup(self, make_company, store, model):
        refs = EntityRefList(model.Company)
        refs.add_value(make_company("ACME"))
        loads = store.load_count
        refs.get_cached_value()
        assert store.load_count == loads
