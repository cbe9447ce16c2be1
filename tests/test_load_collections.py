from __future__ import annotations

from datetime import datetime
from pathlib import Path

from zenclass_queries.db import MemoryStore
from zenclass_queries.ingest.load_collections import load_all, load_collection, prepare_record


def test_prepare_record_adds_timestamps_without_touching_fields() -> None:
    raw = {"_id": 1, "company": "Zoho", "drive_date": "2020-10-15", "students_attended": [1, 2]}
    out = prepare_record(raw)
    assert out["drive_date_ts"] == datetime(2020, 10, 15)
    assert {k: out[k] for k in raw} == raw
    assert "drive_date_ts" not in raw


def test_prepare_record_bad_date_gives_null_timestamp() -> None:
    out = prepare_record({"_id": 1, "date": "sometime in october"})
    assert out["date"] == "sometime in october"
    assert out["date_ts"] is None


def test_prepare_record_without_date_field_adds_nothing() -> None:
    assert prepare_record({"_id": 1, "name": "Aarav"}) == {"_id": 1, "name": "Aarav"}


def test_one_bad_record_does_not_abort_the_load(store: MemoryStore) -> None:
    docs = [
        {"_id": 1, "date": "2020-10-01"},
        {"_id": 2, "date": "not a date"},
        {"_id": 3, "date": "2020-10-03"},
    ]
    assert load_collection(store, "topics", docs) == 3
    stamps = {d["_id"]: d["date_ts"] for d in store.find("topics")}
    assert stamps == {1: datetime(2020, 10, 1), 2: None, 3: datetime(2020, 10, 3)}


def test_empty_seed_loads_zero(store: MemoryStore) -> None:
    load_collection(store, "mentors", [{"_id": 1, "mentor_name": "Old"}])
    assert load_collection(store, "mentors", []) == 0
    assert store.find("mentors") == []


def test_reload_replaces_instead_of_appending(store: MemoryStore, sample_dir: Path) -> None:
    first = load_all(store, sample_dir)
    snapshot = {name: store.find(name) for name in first}
    second = load_all(store, sample_dir)
    assert first == second
    assert {name: store.find(name) for name in second} == snapshot
    assert store.count("users") == 20
