# src/academic_planner/core/task_order.py

from __future__ import annotations

"""
Task status derivation and ordering.

A task stores one status field (pending/completed). What the user sees is the
derived status:
- completed stays completed, whatever the due date
- pending with an elapsed due date reads as overdue
- otherwise pending

Overdue is computed on every read and never written back.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import StrEnum

from .models import Subject, Task, TaskStatus

NO_SUBJECT_LABEL = "no subject"
NEUTRAL_COLOR = "#94a3b8"


class DerivedStatus(StrEnum):
    PENDING = "pending"
    COMPLETED = "completed"
    OVERDUE = "overdue"


@dataclass(frozen=True, slots=True)
class TaskView:
    task: Task
    status: DerivedStatus
    subject_label: str
    subject_color: str


def as_aware(dt: datetime) -> datetime:
    # Naive values are taken as local time; UTC at the edges of the datetime range.
    if dt.tzinfo is not None:
        return dt
    try:
        return dt.astimezone()
    except (ValueError, OverflowError):
        return dt.replace(tzinfo=timezone.utc)


def derive_status(task: Task, now: datetime) -> DerivedStatus:
    if task.status == TaskStatus.COMPLETED:
        return DerivedStatus.COMPLETED
    if as_aware(task.due_date) < as_aware(now):
        return DerivedStatus.OVERDUE
    return DerivedStatus.PENDING


def toggle_status(task: Task) -> Task:
    """Flip the stored status between pending and completed."""
    flipped = TaskStatus.COMPLETED if task.status == TaskStatus.PENDING else TaskStatus.PENDING
    return replace(task, status=flipped)


def sort_tasks(tasks: Iterable[Task]) -> list[Task]:
    """Earliest due date first; equal due dates keep their input order."""
    return sorted(tasks, key=lambda t: as_aware(t.due_date))


def resolve_subject(task: Task, subjects_by_id: Mapping[str, Subject]) -> tuple[str, str]:
    subject = subjects_by_id.get(task.subject_id)
    if subject is None:
        return NO_SUBJECT_LABEL, NEUTRAL_COLOR
    return subject.name or NO_SUBJECT_LABEL, subject.color or NEUTRAL_COLOR


def build_task_views(
    tasks: Iterable[Task],
    subjects: Iterable[Subject],
    now: datetime,
) -> list[TaskView]:
    by_id = {s.id: s for s in subjects}
    views: list[TaskView] = []
    for task in sort_tasks(tasks):
        label, color = resolve_subject(task, by_id)
        views.append(
            TaskView(
                task=task,
                status=derive_status(task, now),
                subject_label=label,
                subject_color=color,
            )
        )
    return views
