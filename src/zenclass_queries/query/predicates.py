"""Record predicates and date windows.

Each predicate can be evaluated in-process against a document (`matches`)
and rendered as a MongoDB filter document (`to_filter`), so the same
condition runs unchanged against `MemoryStore` and `MongoStore`.

Windows come in two flavours and are not interchangeable:
- calendar months are half-open, `[start, end)`
- explicit date-to-date ranges are closed, `[start, end]`
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, Mapping


@dataclass(frozen=True)
class DateWindow:
    """A time interval over naive UTC datetimes.

    Attributes:
        start: Inclusive lower bound.
        end: Upper bound; inclusive only when `closed` is true.
        closed: Whether `end` belongs to the window.
    """
    start: datetime
    end: datetime
    closed: bool = False

    def contains(self, value: datetime) -> bool:
        if value < self.start:
            return False
        return value <= self.end if self.closed else value < self.end

    def to_filter(self) -> dict[str, datetime]:
        upper = "$lte" if self.closed else "$lt"
        return {"$gte": self.start, upper: self.end}


def month_window(year: int, month: int) -> DateWindow:
    """Return the half-open window covering one calendar month."""
    start = datetime(year, month, 1)
    end = datetime(year + 1, 1, 1) if month == 12 else datetime(year, month + 1, 1)
    return DateWindow(start, end, closed=False)


def closed_window(start: datetime, end: datetime) -> DateWindow:
    """Return a window including both `start` and `end`."""
    if end < start:
        raise ValueError(f"window end {end} precedes start {start}")
    return DateWindow(start, end, closed=True)


# --------------------------------------------------
# Predicates
# --------------------------------------------------
def _same(actual: Any, expected: Any) -> bool:
    # booleans only equal booleans, as in MongoDB
    if isinstance(actual, bool) or isinstance(expected, bool):
        return type(actual) is type(expected) and actual == expected
    return actual == expected


def _candidates(doc: Mapping[str, Any], field: str) -> list[Any]:
    """Values a MongoDB query compares against: the field itself, plus each element of an array field."""
    if field not in doc:
        return []
    actual = doc[field]
    if isinstance(actual, list):
        return [actual, *actual]
    return [actual]


@dataclass(frozen=True)
class Eq:
    """`field == value`, or an array `field` containing `value`."""
    field: str
    value: Any

    def matches(self, doc: Mapping[str, Any]) -> bool:
        return any(_same(c, self.value) for c in _candidates(doc, self.field))

    def to_filter(self) -> dict[str, Any]:
        return {self.field: self.value}


@dataclass(frozen=True)
class Within:
    """A datetime in `field` falls inside `window`; missing or null never matches."""
    field: str
    window: DateWindow

    def matches(self, doc: Mapping[str, Any]) -> bool:
        return any(
            isinstance(c, datetime) and self.window.contains(c)
            for c in _candidates(doc, self.field)
        )

    def to_filter(self) -> dict[str, Any]:
        return {self.field: self.window.to_filter()}


@dataclass(frozen=True)
class IsIn:
    """`field` holds one of `values`, or is an array sharing an element with them."""
    field: str
    values: tuple[Any, ...]

    def __init__(self, field: str, values: Iterable[Any]) -> None:
        object.__setattr__(self, "field", field)
        object.__setattr__(self, "values", tuple(values))

    def matches(self, doc: Mapping[str, Any]) -> bool:
        return any(_same(c, v) for c in _candidates(doc, self.field) for v in self.values)

    def to_filter(self) -> dict[str, Any]:
        return {self.field: {"$in": list(self.values)}}


@dataclass(frozen=True)
class All:
    """Conjunction of predicates. An empty conjunction matches everything."""
    parts: tuple[Any, ...]

    def __init__(self, *parts: Any) -> None:
        object.__setattr__(self, "parts", tuple(p for p in parts if p is not None))

    def matches(self, doc: Mapping[str, Any]) -> bool:
        return all(p.matches(doc) for p in self.parts)

    def to_filter(self) -> dict[str, Any]:
        filters = [p.to_filter() for p in self.parts]
        merged: dict[str, Any] = {}
        for f in filters:
            if merged.keys() & f.keys():
                return {"$and": filters}
            merged.update(f)
        return merged


def filter_records(records: Iterable[Mapping[str, Any]], predicate: Any | None) -> list[dict[str, Any]]:
    """Return the records satisfying `predicate`, preserving their order."""
    if predicate is None:
        return [dict(r) for r in records]
    return [dict(r) for r in records if predicate.matches(r)]
