# src/academic_planner/storage/codec.py

"""
Subject/Task <-> plain dict.

Field names follow the planner's original storage format
(camelCase keys, ISO-8601 due dates) so existing exports keep loading.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from ..core.attendance import normalize_absences, normalize_course_load
from ..core.models import DEFAULT_SUBJECT_COLOR, Subject, Task, TaskStatus

logger = logging.getLogger(__name__)


def parse_due_date(raw: Any) -> datetime | None:
    if isinstance(raw, datetime):
        return raw
    if not isinstance(raw, str) or not raw.strip():
        return None
    try:
        return datetime.fromisoformat(raw.strip())
    except ValueError:
        return None


def _course_load_field(raw: Any) -> float | None:
    # An explicit 0 survives the round trip; attendance still treats it as untracked.
    if raw == 0 and not isinstance(raw, bool):
        return 0.0
    return normalize_course_load(raw)


def subject_to_dict(subject: Subject) -> dict[str, Any]:
    d: dict[str, Any] = {
        "id": subject.id,
        "name": subject.name,
        "color": subject.color,
        "absences": subject.absences,
    }
    if subject.course_load is not None:
        d["courseLoad"] = subject.course_load
    return d


def subject_from_dict(d: dict[str, Any]) -> Subject | None:
    sid = d.get("id")
    name = d.get("name")
    if not isinstance(sid, str) or not sid or not isinstance(name, str) or not name.strip():
        return None

    color = d.get("color")
    return Subject(
        id=sid,
        name=name,
        color=color if isinstance(color, str) and color else DEFAULT_SUBJECT_COLOR,
        course_load=_course_load_field(d.get("courseLoad")),
        absences=normalize_absences(d.get("absences")),
    )


def task_to_dict(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "subjectId": task.subject_id,
        "title": task.title,
        "dueDate": task.due_date.isoformat(),
        "status": task.status.value,
    }


def task_from_dict(d: dict[str, Any]) -> Task | None:
    tid = d.get("id")
    title = d.get("title")
    if not isinstance(tid, str) or not tid or not isinstance(title, str) or not title.strip():
        return None

    due = parse_due_date(d.get("dueDate"))
    if due is None:
        return None

    subject_id = d.get("subjectId")
    return Task(
        id=tid,
        subject_id=subject_id if isinstance(subject_id, str) else "",
        title=title,
        due_date=due,
        status=TaskStatus.from_db(d.get("status")),
    )


def decode_subjects(records: Iterable[Any]) -> list[Subject]:
    out: list[Subject] = []
    for r in records:
        s = subject_from_dict(r) if isinstance(r, dict) else None
        if s is None:
            logger.warning("Skipping malformed subject record: %r", r)
            continue
        out.append(s)
    return out


def decode_tasks(records: Iterable[Any]) -> list[Task]:
    out: list[Task] = []
    for r in records:
        t = task_from_dict(r) if isinstance(r, dict) else None
        if t is None:
            logger.warning("Skipping malformed task record: %r", r)
            continue
        out.append(t)
    return out
