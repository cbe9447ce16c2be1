from __future__ import annotations

from bson import ObjectId

from zenclass_queries.config import Settings
from zenclass_queries.db import MemoryStore, open_store
from zenclass_queries.query.predicates import Eq


def test_memory_store_assigns_object_ids(store: MemoryStore) -> None:
    store.replace_all("users", [{"name": "Aarav"}])
    [doc] = store.find("users")
    assert isinstance(doc["_id"], ObjectId)


def test_memory_store_isolates_stored_documents(store: MemoryStore) -> None:
    docs = [{"_id": 1, "mentees": [1, 2]}]
    store.replace_all("mentors", docs)
    docs[0]["mentees"].append(3)
    store.find("mentors")[0]["mentees"].append(4)
    assert store.find("mentors") == [{"_id": 1, "mentees": [1, 2]}]


def test_memory_store_distinct_flattens_arrays(store: MemoryStore) -> None:
    store.replace_all("drives", [
        {"_id": 1, "students_attended": [1, 2], "open": True},
        {"_id": 2, "students_attended": [2, 3], "open": False},
        {"_id": 3},
    ])
    assert store.distinct("drives", "students_attended") == [1, 2, 3]
    assert store.distinct("drives", "students_attended", Eq("open", False)) == [2, 3]


def test_unknown_collection_is_empty(store: MemoryStore) -> None:
    assert store.find("nothing") == []
    assert store.count("nothing") == 0


def test_open_store_memory_backend(tmp_path) -> None:
    settings = Settings(mongo_uri="mongodb://unused", mongo_db="x", seed_dir=tmp_path, store="memory")
    with open_store(settings) as store:
        assert isinstance(store, MemoryStore)


def test_memory_store_filters_array_fields_by_element(store: MemoryStore) -> None:
    store.replace_all("company_drives", [
        {"_id": 1, "students_attended": [1, 2]},
        {"_id": 2, "students_attended": [3]},
    ])
    assert [d["_id"] for d in store.find("company_drives", Eq("students_attended", 2))] == [1]
