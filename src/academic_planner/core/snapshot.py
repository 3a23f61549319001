# src/academic_planner/core/snapshot.py

"""
Snapshot commands.

Each command takes the current Snapshot, applies exactly one change and
returns a new Snapshot. Commands addressing an unknown id return the snapshot
unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from .models import Subject, Task
from .task_order import toggle_status


@dataclass(frozen=True, slots=True)
class Snapshot:
    subjects: tuple[Subject, ...] = ()
    tasks: tuple[Task, ...] = ()

    def subject(self, subject_id: str) -> Subject | None:
        for s in self.subjects:
            if s.id == subject_id:
                return s
        return None

    def task(self, task_id: str) -> Task | None:
        for t in self.tasks:
            if t.id == task_id:
                return t
        return None

    def tasks_for_subject(self, subject_id: str) -> list[Task]:
        return [t for t in self.tasks if t.subject_id == subject_id]


def save_subject(snapshot: Snapshot, subject: Subject) -> Snapshot:
    """Replace the subject with the same id in place, or append it."""
    if snapshot.subject(subject.id) is None:
        return replace(snapshot, subjects=snapshot.subjects + (subject,))
    subjects = tuple(subject if s.id == subject.id else s for s in snapshot.subjects)
    return replace(snapshot, subjects=subjects)


def delete_subject(snapshot: Snapshot, subject_id: str) -> Snapshot:
    """Remove the subject and every task that belongs to it."""
    return Snapshot(
        subjects=tuple(s for s in snapshot.subjects if s.id != subject_id),
        tasks=tuple(t for t in snapshot.tasks if t.subject_id != subject_id),
    )


def save_task(snapshot: Snapshot, task: Task) -> Snapshot:
    if snapshot.task(task.id) is None:
        return replace(snapshot, tasks=snapshot.tasks + (task,))
    tasks = tuple(task if t.id == task.id else t for t in snapshot.tasks)
    return replace(snapshot, tasks=tasks)


def delete_task(snapshot: Snapshot, task_id: str) -> Snapshot:
    return replace(snapshot, tasks=tuple(t for t in snapshot.tasks if t.id != task_id))


def toggle_task_status(snapshot: Snapshot, task_id: str) -> Snapshot:
    tasks = tuple(toggle_status(t) if t.id == task_id else t for t in snapshot.tasks)
    return replace(snapshot, tasks=tasks)


def add_absence(snapshot: Snapshot, subject_id: str) -> Snapshot:
    subjects = tuple(
        replace(s, absences=max(0, s.absences or 0) + 1) if s.id == subject_id else s
        for s in snapshot.subjects
    )
    return replace(snapshot, subjects=subjects)


def remove_absence(snapshot: Snapshot, subject_id: str) -> Snapshot:
    """Decrement absences; a subject already at zero is left alone."""
    subjects = tuple(
        replace(s, absences=s.absences - 1) if s.id == subject_id and (s.absences or 0) > 0 else s
        for s in snapshot.subjects
    )
    return replace(snapshot, subjects=subjects)
