# src/academic_planner/core/models.py

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

DEFAULT_SUBJECT_COLOR = "#6366f1"

# Status strings written by older exports of the planner.
_LEGACY_STATUS = {
    "pendente": "pending",
    "concluído": "completed",
    "concluido": "completed",
}


class TaskStatus(StrEnum):
    """
    Stored task status.

    Overdue is not a stored status: it is derived at read time, see
    core.task_order.derive_status.
    """

    PENDING = "pending"
    COMPLETED = "completed"

    @classmethod
    def from_db(cls, raw: str | None) -> TaskStatus:
        if not raw:
            return cls.PENDING
        key = str(raw).strip().lower()
        key = _LEGACY_STATUS.get(key, key)
        try:
            return cls(key)
        except ValueError:
            return cls.PENDING


@dataclass(frozen=True, slots=True)
class Subject:
    id: str
    name: str
    color: str = DEFAULT_SUBJECT_COLOR
    # Total scheduled hours for the term; None means attendance is not tracked.
    course_load: float | None = None
    absences: int = 0


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    subject_id: str
    title: str
    due_date: datetime
    status: TaskStatus = TaskStatus.PENDING


def new_id() -> str:
    return uuid.uuid4().hex


def new_subject(
    name: str,
    *,
    color: str | None = None,
    course_load: float | None = None,
    absences: int = 0,
) -> Subject:
    if not name or not name.strip():
        raise ValueError("name is required")
    if course_load is not None and course_load < 0:
        raise ValueError("course_load must be non-negative")
    return Subject(
        id=new_id(),
        name=name.strip(),
        color=(color or "").strip() or DEFAULT_SUBJECT_COLOR,
        course_load=course_load,
        absences=max(0, int(absences)),
    )


def new_task(
    subject_id: str,
    title: str,
    due_date: datetime,
    *,
    status: TaskStatus = TaskStatus.PENDING,
) -> Task:
    if not title or not title.strip():
        raise ValueError("title is required")
    return Task(
        id=new_id(),
        subject_id=subject_id,
        title=title.strip(),
        due_date=due_date,
        status=status,
    )
