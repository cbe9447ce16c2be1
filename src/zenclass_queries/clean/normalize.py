"""Temporal normalization.

`to_timestamp` converts the heterogeneous date representations found in seed
documents into naive UTC `datetime` values (the form PyMongo stores and
returns), or `None` when no date can be derived. Malformed values never
raise, so one bad record cannot abort a load.

Accepted strings are ISO 8601 only (`2020-10-15`, `2020-10-15T09:30:00Z`,
`2020-10-15 09:30:00+05:30`, ...). Locale-dependent forms such as
`15/10/2020` are rejected rather than guessed.
"""
from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any

import pandas as pd

log = logging.getLogger(__name__)

TS_SUFFIX = "_ts"


def normalized_field(field: str) -> str:
    """Return the name of the derived timestamp field for `field`."""
    return f"{field}{TS_SUFFIX}"


def to_timestamp(value: Any) -> datetime | None:
    """Return `value` as a naive UTC datetime, or None.

    Args:
        value: Missing/falsy value, native `datetime`/`date`, or a string.

    Returns:
        - None for falsy input, unsupported types and unparseable strings
        - datetimes unchanged (aware ones re-expressed as naive UTC)
        - dates as midnight of that day
        - ISO 8601 strings parsed, offsets applied, naive values taken as UTC
    """
    if not value:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    if not isinstance(value, str):
        log.debug("Unsupported date value type %s", type(value).__name__)
        return None

    text = value.strip()
    if not text:
        return None

    ts = pd.to_datetime(text, format="ISO8601", errors="coerce", utc=True)
    if pd.isna(ts):
        return _from_isoformat(text)
    try:
        return ts.tz_convert(None).to_pydatetime()
    except (ValueError, OverflowError):
        # representable by pandas but not by datetime (year < 1 after the offset)
        log.debug("Date out of datetime range %r", value)
        return None


def _from_isoformat(text: str) -> datetime | None:
    # pandas coerces ISO dates outside its nanosecond range (1677-2262) to NaT
    try:
        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    except (ValueError, OverflowError):
        log.debug("Unparseable date %r", text)
        return None
    return parsed
