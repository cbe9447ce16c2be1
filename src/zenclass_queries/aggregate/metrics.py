"""Aggregation functions.

Results keep discovery order (the order in which groups or records are
first seen); nothing here sorts.
"""
from __future__ import annotations

import operator
from numbers import Number
from collections.abc import Hashable
from typing import Any, Callable, Iterable, Mapping

GLOBAL = None


def _numeric(value: Any) -> float | int:
    # null, missing, booleans and non-numbers contribute 0, as with MongoDB $sum
    if isinstance(value, bool) or not isinstance(value, Number):
        return 0
    return value  # type: ignore[return-value]


def group_sum(
    records: Iterable[Mapping[str, Any]],
    value_field: str,
    key_field: str | None = None,
) -> dict[Hashable, float | int]:
    """Sum `value_field` per value of `key_field`.

    Args:
        records: Input records.
        value_field: Numeric field to sum.
        key_field: Grouping field; None puts every record in one group keyed `GLOBAL`.

    Returns:
        Mapping of group key to sum, in discovery order. Empty input gives `{}`.
    """
    sums: dict[Hashable, float | int] = {}
    for rec in records:
        key = GLOBAL if key_field is None else rec.get(key_field)
        sums[key] = sums.get(key, 0) + _numeric(rec.get(value_field))
    return sums


def total_of(records: Iterable[Mapping[str, Any]], value_field: str) -> float | int:
    """Sum `value_field` over all records; 0 for an empty collection."""
    return group_sum(records, value_field).get(GLOBAL, 0)


def size_of(record: Mapping[str, Any], field: str) -> int:
    """Length of the array in `field`; missing, null or non-array values count as 0."""
    value = record.get(field)
    if isinstance(value, (list, tuple)):
        return len(value)
    return 0


def with_metric(
    records: Iterable[Mapping[str, Any]],
    name: str,
    metric: Callable[[Mapping[str, Any]], Any],
) -> list[dict[str, Any]]:
    """Return copies of `records` with `name` set to `metric(record)`."""
    out = []
    for rec in records:
        enriched = dict(rec)
        enriched[name] = metric(rec)
        out.append(enriched)
    return out


def exceeding(
    records: Iterable[Mapping[str, Any]],
    field: str,
    threshold: float | int,
    op: Callable[[Any, Any], bool] = operator.gt,
) -> list[dict[str, Any]]:
    """Keep records where `op(record[field], threshold)` holds (default: strictly greater)."""
    return [dict(r) for r in records if r.get(field) is not None and op(r[field], threshold)]
