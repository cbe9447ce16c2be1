"""Two-stage filter-then-intersect.

Stage 1 collects the distinct keys of collection A that satisfy P. Stage 2
collects the distinct foreign keys of collection B whose records both
reference a stage-1 key and satisfy Q. B records are never joined with A's
attributes; only membership is tested.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from zenclass_queries.db import DocumentStore
from zenclass_queries.query.predicates import All, IsIn

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeySelection:
    """Distinct values of `field` over the records of `collection` matching `predicate`."""
    collection: str
    field: str
    predicate: Any | None = None


@dataclass(frozen=True)
class IntersectResult:
    first_keys: list[Any]
    matched_keys: list[Any]


def filter_then_intersect(
    store: DocumentStore,
    first: KeySelection,
    second: KeySelection,
) -> IntersectResult:
    """Run `first`, then `second` restricted to keys produced by `first`.

    Args:
        store: Store to query.
        first: Selection producing the candidate key set.
        second: Selection whose `field` must be a member of that set.

    Returns:
        Both key lists; `matched_keys` is a subset of `first_keys`.
    """
    first_keys = store.distinct(first.collection, first.field, first.predicate)
    if not first_keys:
        log.info("No %s keys matched in %s; skipping %s", first.field, first.collection, second.collection)
        return IntersectResult(first_keys=[], matched_keys=[])

    restricted = All(IsIn(second.field, first_keys), second.predicate)
    matched = store.distinct(second.collection, second.field, restricted)
    return IntersectResult(first_keys=list(first_keys), matched_keys=list(matched))
