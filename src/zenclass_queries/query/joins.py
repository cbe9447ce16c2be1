"""Join resolution across collections.

Joins attach matching target records to each source record under a new
field, on a copy of the source record. Neither side is mutated. Unmatched
references are dropped silently; a parent record is never dropped.
"""
from __future__ import annotations

from collections import defaultdict
from collections.abc import Hashable
from typing import Any, Iterable, Mapping, Sequence


def project(record: Mapping[str, Any], fields: Sequence[str] | None) -> dict[str, Any]:
    """Return only `fields` of `record` (all fields when `fields` is None)."""
    if fields is None:
        return dict(record)
    return {f: record[f] for f in fields if f in record}


def _keys(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def index_by(records: Iterable[Mapping[str, Any]], field: str) -> dict[Hashable, list[Mapping[str, Any]]]:
    """Group `records` by the value of `field`.

    Array-valued fields index the record under each element, as MongoDB does
    for equality matches. Unhashable values are skipped.
    """
    index: dict[Hashable, list[Mapping[str, Any]]] = defaultdict(list)
    for rec in records:
        for key in _keys(rec.get(field)):
            if isinstance(key, Hashable):
                index[key].append(rec)
    return index


def join_many(
    records: Iterable[Mapping[str, Any]],
    targets: Iterable[Mapping[str, Any]],
    local_field: str,
    foreign_field: str,
    as_field: str,
    fields: Sequence[str] | None = None,
) -> list[dict[str, Any]]:
    """Attach every target whose `foreign_field` matches `local_field`.

    `local_field` may hold a single id or a list of ids. Matches come out in
    the order of the ids, then in target order; a target matched twice is
    attached once.

    Args:
        records: Source records.
        targets: Records of the referenced collection.
        local_field: Reference field on the source.
        foreign_field: Key field on the target (usually `_id`).
        as_field: Name of the derived list field.
        fields: Target fields to keep; None keeps all.

    Returns:
        New source records, each with `as_field` set to a (possibly empty) list.
    """
    index = index_by(targets, foreign_field)
    out: list[dict[str, Any]] = []

    for rec in records:
        matched: list[dict[str, Any]] = []
        seen: set[int] = set()
        for key in _keys(rec.get(local_field)):
            if not isinstance(key, Hashable):
                continue
            for target in index.get(key, []):
                if id(target) in seen:
                    continue
                seen.add(id(target))
                matched.append(project(target, fields))
        enriched = dict(rec)
        enriched[as_field] = matched
        out.append(enriched)

    return out


def join_one(
    records: Iterable[Mapping[str, Any]],
    targets: Iterable[Mapping[str, Any]],
    local_field: str,
    foreign_field: str,
    as_field: str,
    fields: Sequence[str] | None = None,
) -> list[dict[str, Any]]:
    """Attach the single target referenced by `local_field`, or None when absent."""
    out = []
    for rec in join_many(records, targets, local_field, foreign_field, as_field, fields):
        matches = rec[as_field]
        rec[as_field] = matches[0] if matches else None
        out.append(rec)
    return out
