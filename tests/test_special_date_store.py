"""Tests for SpecialDateStore - in-memory custom dates, no HA fixtures needed."""

from __future__ import annotations

import pytest

from custom_components.lifedates import const
from custom_components.lifedates.models import EntityValidationError
from custom_components.lifedates.special_date_store import SpecialDateStore


def flat_input(**overrides) -> dict:
    return {
        const.DATA_NAME: "First Flat",
        const.DATA_SPECIAL_DATE_DATE: "2012-09-01",
        **overrides,
    }


class TestSpecialDateStore:
    """CRUD on the custom date collection."""

    def test_add_and_get(self) -> None:
        store = SpecialDateStore()
        data = store.add(flat_input())

        date_id = data[const.DATA_INTERNAL_ID]
        assert date_id in store
        assert len(store) == 1
        assert store.get(date_id) == data

    def test_add_invalid_leaves_store_unchanged(self) -> None:
        store = SpecialDateStore()
        with pytest.raises(EntityValidationError):
            store.add(flat_input(**{const.DATA_NAME: ""}))
        assert len(store) == 0

    def test_update(self) -> None:
        store = SpecialDateStore()
        date_id = store.add(flat_input())[const.DATA_INTERNAL_ID]

        updated = store.update(date_id, {const.DATA_SPECIAL_DATE_NOTES: "Tiny kitchen"})

        assert updated[const.DATA_SPECIAL_DATE_NOTES] == "Tiny kitchen"
        assert store.get(date_id)[const.DATA_SPECIAL_DATE_NOTES] == "Tiny kitchen"

    def test_update_unknown_raises_key_error(self) -> None:
        with pytest.raises(KeyError):
            SpecialDateStore().update("missing", {const.DATA_NAME: "X"})

    def test_remove(self) -> None:
        store = SpecialDateStore()
        date_id = store.add(flat_input())[const.DATA_INTERNAL_ID]

        assert store.remove(date_id) is not None
        assert store.remove(date_id) is None
        assert date_id not in store

    def test_records(self) -> None:
        store = SpecialDateStore()
        store.add(flat_input())
        store.add(flat_input(**{const.DATA_NAME: "Camino"}))

        records = store.records()

        assert {rec.name for rec in records} == {"First Flat", "Camino"}
        assert all(rec.provenance == const.PROVENANCE_CUSTOM for rec in records)
        assert len(store.list()) == 2

    def test_storage_round_trip_is_a_copy(self) -> None:
        store = SpecialDateStore()
        store.add(flat_input())
        persisted = store.to_storage()

        restored = SpecialDateStore.from_storage(persisted)
        persisted.clear()

        assert len(restored) == 1
        assert len(store) == 1

    def test_from_empty_storage(self) -> None:
        assert len(SpecialDateStore.from_storage(None)) == 0
