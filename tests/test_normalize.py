from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from zenclass_queries.clean.normalize import normalized_field, to_timestamp


@pytest.mark.parametrize("value", [None, "", 0, False, [], "   "])
def test_absent_or_falsy_values_have_no_timestamp(value: object) -> None:
    assert to_timestamp(value) is None


@pytest.mark.parametrize("value", ["not a date", "2020-13-45", "31/10/2020", "Oct 5th"])
def test_unparseable_strings_have_no_timestamp(value: str) -> None:
    assert to_timestamp(value) is None


def test_unparseable_string_is_never_the_epoch() -> None:
    assert to_timestamp("garbage") != datetime(1970, 1, 1)


def test_iso_date_string_is_midnight_utc() -> None:
    assert to_timestamp("2020-10-15") == datetime(2020, 10, 15)


def test_offset_is_applied_and_dropped() -> None:
    assert to_timestamp("2020-10-15T05:30:00+05:30") == datetime(2020, 10, 15)
    assert to_timestamp("2020-10-31T23:59:59Z") == datetime(2020, 10, 31, 23, 59, 59)


def test_naive_datetime_passes_through_unchanged() -> None:
    value = datetime(2020, 10, 20, 8, 15)
    assert to_timestamp(value) is value


def test_aware_datetime_keeps_its_instant() -> None:
    ist = timezone(timedelta(hours=5, minutes=30))
    assert to_timestamp(datetime(2020, 10, 15, 5, 30, tzinfo=ist)) == datetime(2020, 10, 15)


def test_plain_date_becomes_midnight() -> None:
    assert to_timestamp(date(2020, 10, 1)) == datetime(2020, 10, 1)


def test_unsupported_type_has_no_timestamp() -> None:
    assert to_timestamp(1602720000) is None


def test_normalized_field_name() -> None:
    assert normalized_field("drive_date") == "drive_date_ts"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("2300-01-01", datetime(2300, 1, 1)),
        ("1600-01-01T12:00:00Z", datetime(1600, 1, 1, 12)),
        ("2999-12-31T23:30:00-01:00", datetime(3000, 1, 1, 0, 30)),
    ],
)
def test_iso_dates_beyond_pandas_nanosecond_range(value: str, expected: datetime) -> None:
    assert to_timestamp(value) == expected


def test_offset_that_overflows_utc_has_no_timestamp() -> None:
    assert to_timestamp("0001-01-01T00:00:00+05:00") is None
