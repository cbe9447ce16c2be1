"""Pydantic models for the rows each question reports.

Seed documents themselves are open-ended mappings and are not validated;
these models only pin down which fields of a result are shown (unknown
fields are rejected). Values copied from seeds keep whatever type they had;
only derived numbers (counts, sums) are typed.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# seed fields are shown as stored; a record of an unexpected type must not
# abort the report, so passthrough fields are left untyped
RawDate = Any
RawField = Any


class _Row(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class TopicRow(_Row):
    """A topic taught in the reporting window."""
    id: Any = Field(alias="_id")
    topic: RawField = None
    date: RawDate = None


class TaskRow(_Row):
    """A task dated in the reporting window."""
    id: Any = Field(alias="_id")
    task_name: RawField = None
    date: RawDate = None
    user_id: Any = None
    submitted: RawField = None


class TopicWithTasks(TopicRow):
    """A topic with every task that references it."""
    tasks: list[TaskRow] = Field(default_factory=list)


class DriveRow(_Row):
    company: RawField = None
    drive_date: RawDate = None


class StudentRef(_Row):
    """Attendee of a company drive."""
    id: Any = Field(alias="_id")
    name: RawField = None
    email: RawField = None


class DriveWithStudents(DriveRow):
    students: list[StudentRef] = Field(default_factory=list)


class SolvedPerUser(_Row):
    """Codekata problems solved by one user.

    Attributes:
        user_id: Referenced user id.
        user: User name, or None when the id matches no user.
        problems_solved: Sum over the user's codekata records.
    """
    user_id: Any = None
    user: RawField = None
    problems_solved: int | float = 0


class SolvedSummary(_Row):
    per_user: list[SolvedPerUser] = Field(default_factory=list)
    total: int | float = 0


class MentorLoad(_Row):
    mentor: RawField = None
    mentee_count: int = Field(..., ge=0)


class AbsenceSummary(_Row):
    """Users absent in the window, and those of them with an unsubmitted task."""
    absent_users: int = Field(..., ge=0)
    absent_and_unsubmitted: int = Field(..., ge=0)
