"""Collection loading.

Every collection is replaced wholesale (drop, then insert), so rerunning a
load with the same seeds yields the same collections rather than duplicates.
Each document gains a normalized timestamp for every raw date field it
carries; no original field is renamed or dropped.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Mapping

from zenclass_queries.clean.normalize import normalized_field, to_timestamp
from zenclass_queries.db import DocumentStore
from zenclass_queries.ingest.seed import SEED_COLLECTIONS, read_seed

log = logging.getLogger(__name__)

DATE_FIELDS: tuple[str, ...] = ("date", "drive_date")


def prepare_record(doc: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of `doc` with `<field>_ts` set for each raw date field present.

    A present-but-unparseable date yields `<field>_ts = None`; a document
    without the raw field gets no derived field at all.
    """
    out = dict(doc)
    for field in DATE_FIELDS:
        if field in out:
            out[normalized_field(field)] = to_timestamp(out[field])
    return out


def load_collection(
    store: DocumentStore,
    name: str,
    docs: Iterable[Mapping[str, Any]],
) -> int:
    """Replace collection `name` with the prepared `docs`.

    Args:
        store: Target document store.
        name: Collection name.
        docs: Raw seed records.

    Returns:
        Number of documents inserted (0 for an empty seed set).
    """
    prepared = [prepare_record(d) for d in docs]
    inserted = store.replace_all(name, prepared)

    unparsed = sum(
        1
        for d in prepared
        for f in DATE_FIELDS
        if d.get(f) and d.get(normalized_field(f)) is None
    )
    if unparsed:
        log.warning("%s: %d date value(s) could not be parsed", name, unparsed)

    log.info("Inserted %d into %s", inserted, name)
    return inserted


def load_all(
    store: DocumentStore,
    seed_dir: Path,
    names: Iterable[str] = SEED_COLLECTIONS,
) -> dict[str, int]:
    """Load every seed collection in order and return inserted counts by name."""
    counts: dict[str, int] = {}
    for name in names:
        counts[name] = load_collection(store, name, read_seed(seed_dir, name))
    log.info("Load completed: %d collections, %d documents", len(counts), sum(counts.values()))
    return counts
