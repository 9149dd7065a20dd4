from __future__ import annotations

import pytest
from pydantic import ValidationError

from recordgrid.domain.errors import DuplicateIdError, NotFoundError
from recordgrid.domain.models import Record, sample_records
from recordgrid.engine.store import RecordStore


def _person(record_id: str, name: str = "Test Person", age: int = 30) -> Record:
    return Record(id=record_id, name=name, email=f"{record_id}@example.com", age=age, role="Tester")


@pytest.fixture
def store() -> RecordStore:
    return RecordStore(sample_records())


def test_add_appends_in_insertion_order(store: RecordStore):
    store.add(_person("6"))
    assert store.ids() == ["1", "2", "3", "4", "5", "6"]


def test_add_duplicate_id_fails_and_keeps_store(store: RecordStore):
    before = store.list_records()
    with pytest.raises(DuplicateIdError):
        store.add(_person("3"))
    assert store.list_records() == before


def test_deleted_id_is_never_reused(store: RecordStore):
    store.delete("2")
    with pytest.raises(DuplicateIdError):
        store.add(_person("2"))
    assert "2" not in store


def test_update_merges_fields_and_ignores_id(store: RecordStore):
    updated = store.update("1", {"id": "999", "role": "Staff Engineer", "team": "Platform"})

    assert updated.id == "1"
    assert updated.role == "Staff Engineer"
    assert updated.name == "John Doe"
    assert updated.department == "Engineering"
    assert updated.get("team") == "Platform"
    assert "999" not in store
    # position is unchanged
    assert store.ids()[0] == "1"


def test_update_unknown_id_raises_not_found(store: RecordStore):
    with pytest.raises(NotFoundError):
        store.update("nope", {"name": "Ghost"})
    # NotFoundError is also a KeyError
    with pytest.raises(KeyError):
        store.update("nope", {"name": "Ghost"})


def test_update_with_bad_type_leaves_record_unchanged(store: RecordStore):
    before = store.get("1")
    with pytest.raises(ValidationError):
        store.update("1", {"age": "not a number"})
    assert store.get("1") == before


def test_delete_unknown_id_raises_not_found(store: RecordStore):
    with pytest.raises(NotFoundError):
        store.delete("42")
    assert len(store) == 5


def test_delete_many_is_all_or_nothing(store: RecordStore):
    with pytest.raises(NotFoundError):
        store.delete_many(["1", "missing", "2"])
    assert store.ids() == ["1", "2", "3", "4", "5"]

    removed = store.delete_many(["4", "1", "4"])
    assert [r.id for r in removed] == ["4", "1"]
    assert store.ids() == ["2", "3", "5"]


def test_replace_all_installs_batch_in_order(store: RecordStore):
    store.replace_all([_person("b"), _person("a")])

    assert store.ids() == ["b", "a"]
    # replaced ids are retired
    with pytest.raises(DuplicateIdError):
        store.add(_person("1"))


def test_replace_all_rejects_duplicate_ids_without_changes(store: RecordStore):
    with pytest.raises(DuplicateIdError):
        store.replace_all([_person("x"), _person("x")])
    assert store.ids() == ["1", "2", "3", "4", "5"]


def test_ids_stay_unique_across_mixed_commands(store: RecordStore):
    store.add(_person("6"))
    store.update("6", {"name": "Six"})
    store.delete("3")
    store.add(_person("7"))
    for record_id in ("6", "7", "1"):
        with pytest.raises(DuplicateIdError):
            store.add(_person(record_id))

    ids = store.ids()
    assert len(ids) == len(set(ids))
