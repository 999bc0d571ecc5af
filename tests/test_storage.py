"""Tests for habitflow/storage.py: load/save and corrupt-data recovery."""

import json

from habitflow.models import Habit
from habitflow.storage import STORAGE_KEY, HabitStorage, habits_from_document
from habitflow.store import HabitStore


def test_load_all(workspace):
    habits = HabitStorage(workspace).load_all()
    assert [h.id for h in habits] == ["water", "read", "stretch"]
    assert habits[0].done_history == ["2024-06-08", "2024-06-09"]
    assert habits[1].emoji == "📚"


def test_load_all_uses_env_root(workspace):
    habits = HabitStorage().load_all()
    assert len(habits) == 3


def test_save_load_round_trip(workspace):
    storage = HabitStorage(workspace)
    store = HabitStore(storage.load_all(), clock=lambda: "2024-06-10")
    store.toggle_done("stretch", "2024-06-10")
    store.delete("read")
    created = store.create("Journal", "📝", "Mindset")
    storage.save_all(store.habits)

    reloaded = HabitStorage(workspace).load_all()
    assert [h.id for h in reloaded] == ["water", "stretch", created.id]
    assert reloaded[1].done_history == ["2024-06-10"]
    assert reloaded[2].created_at == "2024-06-10"


def test_save_all_writes_storage_key(workspace):
    storage = HabitStorage(workspace)
    storage.save_all([Habit(id="a", name="Walk")])
    data = json.loads(storage.path.read_text(encoding="utf-8"))
    assert list(data) == [STORAGE_KEY]
    assert data[STORAGE_KEY][0]["name"] == "Walk"
    # No temp files left behind
    assert [p.name for p in storage.path.parent.glob(".tmp_*")] == []


def test_load_missing_file(tmp_path):
    assert HabitStorage(tmp_path / "nowhere").load_all() == []


def test_load_blank_file(workspace):
    (workspace / "habitflow" / "habits.json").write_text("   \n", encoding="utf-8")
    assert HabitStorage(workspace).load_all() == []


def test_load_corrupt_json(workspace):
    (workspace / "habitflow" / "habits.json").write_text("{not json", encoding="utf-8")
    assert HabitStorage(workspace).load_all() == []


def test_load_wrong_shape(workspace):
    path = workspace / "habitflow" / "habits.json"
    path.write_text(json.dumps([{"id": "a", "name": "Walk"}]), encoding="utf-8")
    assert HabitStorage(workspace).load_all() == []
    path.write_text(json.dumps({STORAGE_KEY: "oops"}), encoding="utf-8")
    assert HabitStorage(workspace).load_all() == []


def test_load_drops_unusable_records():
    doc = {
        STORAGE_KEY: [
            {"id": "ok", "name": "Walk"},
            {"id": "short", "name": " a "},
            {"id": "missing"},
            {"id": "null", "name": None},
            "not a record",
            {"id": "edge", "name": "ab"},
        ]
    }
    habits = habits_from_document(doc)
    assert [h.id for h in habits] == ["ok", "edge"]


def test_habits_from_document_none():
    assert habits_from_document(None) == []


def test_load_reassigns_missing_and_duplicate_ids():
    doc = {
        STORAGE_KEY: [
            {"name": "Walk"},
            {"name": "Read"},
            {"id": "x", "name": "Swim"},
            {"id": "x", "name": "Run"},
        ]
    }
    habits = habits_from_document(doc)
    ids = [h.id for h in habits]
    assert [h.name for h in habits] == ["Walk", "Read", "Swim", "Run"]
    assert all(ids)
    assert len(set(ids)) == 4
    assert ids[2] == "x"

    store = HabitStore(habits, clock=lambda: "2024-06-10")
    store.delete(ids[0])
    assert [h.name for h in store] == ["Read", "Swim", "Run"]
    store.delete("x")
    assert [h.name for h in store] == ["Read", "Run"]
