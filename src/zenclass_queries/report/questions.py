"""The six analytical questions.

Each question reads the normalized collections through the query and
aggregation primitives and returns pydantic rows. `run_report` asks them in
a fixed order and prints one block per question. No question feeds
another, and an empty answer is a valid answer.
"""
from __future__ import annotations

import logging
import sys
from datetime import datetime
from typing import TextIO

from zenclass_queries.aggregate.metrics import exceeding, group_sum, size_of, total_of, with_metric
from zenclass_queries.db import DocumentStore
from zenclass_queries.models import (
    AbsenceSummary,
    DriveRow,
    DriveWithStudents,
    MentorLoad,
    SolvedPerUser,
    SolvedSummary,
    StudentRef,
    TaskRow,
    TopicRow,
    TopicWithTasks,
)
from zenclass_queries.query.compose import KeySelection, filter_then_intersect
from zenclass_queries.query.joins import join_many, join_one, project
from zenclass_queries.query.predicates import All, DateWindow, Eq, Within, closed_window, month_window
from zenclass_queries.report.render import render_table

log = logging.getLogger(__name__)

OCTOBER_2020 = month_window(2020, 10)
LATE_OCTOBER_2020 = closed_window(datetime(2020, 10, 15), datetime(2020, 10, 31, 23, 59, 59))
MENTEE_THRESHOLD = 15

TOPIC_FIELDS = ("_id", "topic", "date")
TASK_FIELDS = ("_id", "task_name", "date", "user_id", "submitted")
STUDENT_FIELDS = ("_id", "name", "email")


# --------------------------------------------------
# 1) Topics and tasks in October 2020
# --------------------------------------------------
def topics_in_window(store: DocumentStore, window: DateWindow = OCTOBER_2020) -> list[TopicRow]:
    docs = store.find("topics", Within("date_ts", window))
    return [TopicRow.model_validate(project(d, TOPIC_FIELDS)) for d in docs]


def tasks_in_window(store: DocumentStore, window: DateWindow = OCTOBER_2020) -> list[TaskRow]:
    docs = store.find("tasks", Within("date_ts", window))
    return [TaskRow.model_validate(project(d, TASK_FIELDS)) for d in docs]


def topics_with_tasks(store: DocumentStore, window: DateWindow = OCTOBER_2020) -> list[TopicWithTasks]:
    """Topics dated in `window`, each with all tasks referencing it by `topic_id`.

    Only the topics are window-filtered; a topic's tasks are attached whatever
    their own date.
    """
    topics = store.find("topics", Within("date_ts", window))
    joined = join_many(topics, store.find("tasks"), "_id", "topic_id", "tasks", TASK_FIELDS)
    return [
        TopicWithTasks.model_validate({**project(t, TOPIC_FIELDS), "tasks": t["tasks"]})
        for t in joined
    ]


# --------------------------------------------------
# 2) + 3) Company drives, 15-31 October 2020
# --------------------------------------------------
def drives_in_window(store: DocumentStore, window: DateWindow = LATE_OCTOBER_2020) -> list[DriveRow]:
    docs = store.find("company_drives", Within("drive_date_ts", window))
    return [DriveRow.model_validate(project(d, ("company", "drive_date"))) for d in docs]


def drives_with_students(
    store: DocumentStore,
    window: DateWindow = LATE_OCTOBER_2020,
) -> list[DriveWithStudents]:
    """Drives in `window` with attendee users resolved from `students_attended`."""
    drives = store.find("company_drives", Within("drive_date_ts", window))
    joined = join_many(drives, store.find("users"), "students_attended", "_id", "students", STUDENT_FIELDS)
    return [
        DriveWithStudents.model_validate(
            {**project(d, ("company", "drive_date")), "students": d["students"]}
        )
        for d in joined
    ]


# --------------------------------------------------
# 4) Codekata problems solved
# --------------------------------------------------
def problems_solved(store: DocumentStore) -> SolvedSummary:
    """Per-user codekata totals (with user names) and the overall total.

    Users are listed in order of first appearance in `codekata`. A record
    whose `user_id` matches no user still counts, with `user=None`.
    """
    katas = store.find("codekata")
    per_user = [
        {"user_id": user_id, "problems_solved": solved}
        for user_id, solved in group_sum(katas, "problems_solved", "user_id").items()
    ]
    joined = join_one(per_user, store.find("users"), "user_id", "_id", "user", ("name",))

    rows = [
        SolvedPerUser(
            user_id=r["user_id"],
            user=(r["user"] or {}).get("name"),
            problems_solved=r["problems_solved"],
        )
        for r in joined
    ]
    return SolvedSummary(per_user=rows, total=total_of(katas, "problems_solved"))


# --------------------------------------------------
# 5) Mentors with many mentees
# --------------------------------------------------
def mentors_over(store: DocumentStore, threshold: int = MENTEE_THRESHOLD) -> list[MentorLoad]:
    mentors = with_metric(store.find("mentors"), "mentee_count", lambda m: size_of(m, "mentees"))
    return [
        MentorLoad(mentor=m.get("mentor_name"), mentee_count=m["mentee_count"])
        for m in exceeding(mentors, "mentee_count", threshold)
    ]


# --------------------------------------------------
# 6) Absent and task not submitted
# --------------------------------------------------
def absent_and_unsubmitted(
    store: DocumentStore,
    window: DateWindow = LATE_OCTOBER_2020,
) -> AbsenceSummary:
    """Count users absent in `window` who also have an unsubmitted task in `window`."""
    result = filter_then_intersect(
        store,
        KeySelection("attendance", "user_id", All(Eq("status", "absent"), Within("date_ts", window))),
        KeySelection("tasks", "user_id", All(Eq("submitted", False), Within("date_ts", window))),
    )
    return AbsenceSummary(
        absent_users=len(result.first_keys),
        absent_and_unsubmitted=len(result.matched_keys),
    )


# --------------------------------------------------
# Report
# --------------------------------------------------
def _label(student: StudentRef) -> str:
    """Name of an attendee as printed; falls back to the id when unnamed."""
    return str(student.name if student.name is not None else student.id)


def run_report(store: DocumentStore, out: TextIO | None = None) -> None:
    """Ask the six questions in order and print their answers to `out` (stdout by default)."""
    out = out or sys.stdout

    def emit(text: str = "") -> None:
        print(text, file=out)

    emit("\n1) Topics in October 2020:")
    emit(render_table(topics_in_window(store), ("_id", "topic", "date")))
    emit("\nTasks in October 2020:")
    emit(render_table(tasks_in_window(store), ("_id", "task_name", "date", "user_id")))
    emit("\nTopics with their tasks (October topics):")
    for t in topics_with_tasks(store):
        emit(f"- {t.topic} ({t.date}) -> {len(t.tasks)} tasks")

    emit("\n2) Company drives between 2020-10-15 and 2020-10-31:")
    emit(render_table(drives_in_window(store), ("company", "drive_date")))

    emit("\n3) Company drives with students (resolved names):")
    for d in drives_with_students(store):
        names = ", ".join(_label(s) for s in d.students)
        emit(f"- {d.company} ({d.drive_date}): {names}")

    emit("\n4) Problems solved per user and total:")
    solved = problems_solved(store)
    emit(render_table(solved.per_user, ("user", "problems_solved")))
    emit(f"Total problems solved: {solved.total}")

    emit(f"\n5) Mentors with mentee count > {MENTEE_THRESHOLD}:")
    mentors = mentors_over(store)
    if not mentors:
        emit(f"No mentors with more than {MENTEE_THRESHOLD} mentees found.")
    else:
        emit(render_table(mentors, ("mentor", "mentee_count")))

    emit("\n6) Count of users absent and who did not submit tasks in the date range:")
    absence = absent_and_unsubmitted(store)
    emit(f"Absent users in range: {absence.absent_users}")
    emit(f"Absent users who also did not submit tasks: {absence.absent_and_unsubmitted}")

    log.info("Report completed.")
