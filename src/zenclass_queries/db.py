"""MongoDB helpers and the document store handle.

Centralizes creation of Mongo clients and defines the four store operations
the query layer depends on: replace-all, find, distinct and count. Two stores
implement them: `MongoStore` (a live database) and `MemoryStore` (in-process
lists, used for offline runs and tests).
"""

from __future__ import annotations

import copy
import logging
from contextlib import contextmanager
from typing import Any, Iterator, Protocol

import certifi
from bson import ObjectId
from pymongo import MongoClient
from pymongo.database import Database

from zenclass_queries.config import SRV_PREFIX, Settings, display_uri

log = logging.getLogger(__name__)


class DocumentStore(Protocol):
    """Collection-scoped operations used by the loader and the questions."""

    def replace_all(self, name: str, docs: list[dict[str, Any]]) -> int: ...

    def find(self, name: str, predicate: Any | None = None) -> list[dict[str, Any]]: ...

    def distinct(self, name: str, field: str, predicate: Any | None = None) -> list[Any]: ...

    def count(self, name: str) -> int: ...


def get_client(uri: str) -> MongoClient:
    """Return a configured PyMongo MongoClient for the provided URI.

    TLS with the certifi CA bundle is enabled for Atlas (`mongodb+srv://`)
    targets only; local servers are reached in plain text.

    Args:
        uri: MongoDB connection URI.

    Returns:
        Configured MongoClient instance.
    """
    options: dict[str, Any] = {
        "serverSelectionTimeoutMS": 30000,
        "socketTimeoutMS": 30000,
        "connectTimeoutMS": 30000,
    }
    if uri.startswith(SRV_PREFIX):
        options.update(tls=True, tlsCAFile=certifi.where())
    return MongoClient(uri, **options)


def get_db(
    client: MongoClient[dict[str, Any]],
    db_name: str,
) -> Database[dict[str, Any]]:
    """Return the named Database instance from a MongoClient."""
    return client[db_name]


class MongoStore:
    """`DocumentStore` backed by a PyMongo database.

    Predicates are rendered with `to_filter()` so filtering happens server-side.
    Store faults surface as `pymongo.errors.PyMongoError`.
    """

    def __init__(self, db: Database[dict[str, Any]]) -> None:
        self._db = db

    def replace_all(self, name: str, docs: list[dict[str, Any]]) -> int:
        collection = self._db[name]
        collection.drop()
        if not docs:
            return 0
        # insert_many adds `_id` in place; keep the caller's documents untouched
        result = collection.insert_many([dict(d) for d in docs])
        return len(result.inserted_ids)

    def find(self, name: str, predicate: Any | None = None) -> list[dict[str, Any]]:
        query = predicate.to_filter() if predicate is not None else {}
        return list(self._db[name].find(query))

    def distinct(self, name: str, field: str, predicate: Any | None = None) -> list[Any]:
        query = predicate.to_filter() if predicate is not None else {}
        return list(self._db[name].distinct(field, query))

    def count(self, name: str) -> int:
        return self._db[name].count_documents({})


class MemoryStore:
    """`DocumentStore` holding collections as in-process lists.

    Documents are deep-copied on the way in and out so callers can never
    mutate stored state. Documents without `_id` get an `ObjectId`, like a
    MongoDB insert.
    """

    def __init__(self) -> None:
        self._collections: dict[str, list[dict[str, Any]]] = {}

    def replace_all(self, name: str, docs: list[dict[str, Any]]) -> int:
        stored = []
        for d in docs:
            doc = copy.deepcopy(dict(d))
            doc.setdefault("_id", ObjectId())
            stored.append(doc)
        self._collections[name] = stored
        return len(stored)

    def find(self, name: str, predicate: Any | None = None) -> list[dict[str, Any]]:
        docs = self._collections.get(name, [])
        return [copy.deepcopy(d) for d in docs if predicate is None or predicate.matches(d)]

    def distinct(self, name: str, field: str, predicate: Any | None = None) -> list[Any]:
        values: list[Any] = []
        for doc in self.find(name, predicate):
            if field not in doc:
                continue
            raw = doc[field]
            for v in raw if isinstance(raw, list) else [raw]:
                if v not in values:
                    values.append(v)
        return values

    def count(self, name: str) -> int:
        return len(self._collections.get(name, []))


@contextmanager
def open_store(settings: Settings) -> Iterator[DocumentStore]:
    """Yield the configured store and release its connection on exit.

    The MongoDB server is pinged before yielding so an unreachable target
    fails before any work starts.
    """
    if settings.store == "memory":
        log.info("Using in-memory document store")
        yield MemoryStore()
        return

    client = get_client(settings.mongo_uri)
    try:
        client.admin.command("ping")
        log.info("Connected to MongoDB at %s", display_uri(settings.mongo_uri))
        yield MongoStore(get_db(client, settings.mongo_db))
    finally:
        client.close()
        log.info("MongoDB connection closed.")

