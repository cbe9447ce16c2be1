from __future__ import annotations

import operator

from zenclass_queries.aggregate.metrics import (
    GLOBAL,
    exceeding,
    group_sum,
    size_of,
    total_of,
    with_metric,
)

KATAS = [
    {"user_id": 1, "problems_solved": 5},
    {"user_id": 2, "problems_solved": 4},
    {"user_id": 1, "problems_solved": 3},
    {"user_id": 3},
    {"user_id": 2, "problems_solved": None},
]


def test_group_sum_per_key_in_discovery_order() -> None:
    assert list(group_sum(KATAS, "problems_solved", "user_id").items()) == [(1, 8), (2, 4), (3, 0)]


def test_global_total_equals_sum_of_groups() -> None:
    per_user = group_sum(KATAS, "problems_solved", "user_id")
    assert total_of(KATAS, "problems_solved") == sum(per_user.values()) == 12
    assert group_sum(KATAS, "problems_solved") == {GLOBAL: 12}


def test_total_of_empty_collection_is_zero() -> None:
    assert group_sum([], "problems_solved") == {}
    assert total_of([], "problems_solved") == 0


def test_non_numeric_values_contribute_nothing() -> None:
    records = [{"n": True}, {"n": "7"}, {"n": 2.5}]
    assert total_of(records, "n") == 2.5


def test_size_of_missing_or_null_array_is_zero() -> None:
    assert size_of({}, "mentees") == 0
    assert size_of({"mentees": None}, "mentees") == 0
    assert size_of({"mentees": "abc"}, "mentees") == 0
    assert size_of({"mentees": [1, 2, 3]}, "mentees") == 3


def test_threshold_is_strictly_greater_by_default() -> None:
    mentors = with_metric(
        [
            {"mentor_name": "A", "mentees": list(range(16))},
            {"mentor_name": "B", "mentees": list(range(15))},
            {"mentor_name": "C"},
        ],
        "mentee_count",
        lambda m: size_of(m, "mentees"),
    )
    assert [m["mentor_name"] for m in exceeding(mentors, "mentee_count", 15)] == ["A"]
    assert [m["mentor_name"] for m in exceeding(mentors, "mentee_count", 15, operator.ge)] == ["A", "B"]
