# src/academic_planner/planner/api.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..core import snapshot as cmd
from ..core.attendance import AttendanceStatus, attendance_report
from ..core.models import Subject, Task
from ..core.ports import SUBJECTS_KEY, TASKS_KEY
from ..core.snapshot import Snapshot
from ..core.state import AppState
from ..core.task_order import TaskView, build_task_views
from ..storage.codec import decode_subjects, decode_tasks, subject_to_dict, task_to_dict

logger = logging.getLogger(__name__)


def load_snapshot(state: AppState) -> Snapshot:
    return Snapshot(
        subjects=tuple(decode_subjects(state.store.load(SUBJECTS_KEY))),
        tasks=tuple(decode_tasks(state.store.load(TASKS_KEY))),
    )


def save_snapshot(state: AppState, snapshot: Snapshot, *, previous: Snapshot | None = None) -> None:
    """Write the snapshot back. Collections equal to `previous` are not rewritten."""
    if previous is None or snapshot.subjects != previous.subjects:
        state.store.save(SUBJECTS_KEY, [subject_to_dict(s) for s in snapshot.subjects])
    if previous is None or snapshot.tasks != previous.tasks:
        state.store.save(TASKS_KEY, [task_to_dict(t) for t in snapshot.tasks])


def _apply(state: AppState, name: str, change: Callable[[Snapshot], Snapshot]) -> Snapshot:
    before = load_snapshot(state)
    after = change(before)
    if after == before:
        logger.debug("Command %s changed nothing.", name)
        return before
    save_snapshot(state, after, previous=before)
    logger.info(
        "Command %s applied (subjects=%d tasks=%d)",
        name,
        len(after.subjects),
        len(after.tasks),
    )
    return after


# ---- commands ----


def save_subject(state: AppState, subject: Subject) -> Snapshot:
    return _apply(state, "save_subject", lambda s: cmd.save_subject(s, subject))


def delete_subject(state: AppState, subject_id: str) -> Snapshot:
    return _apply(state, "delete_subject", lambda s: cmd.delete_subject(s, subject_id))


def save_task(state: AppState, task: Task) -> Snapshot:
    return _apply(state, "save_task", lambda s: cmd.save_task(s, task))


def delete_task(state: AppState, task_id: str) -> Snapshot:
    return _apply(state, "delete_task", lambda s: cmd.delete_task(s, task_id))


def toggle_task_status(state: AppState, task_id: str) -> Snapshot:
    return _apply(state, "toggle_task_status", lambda s: cmd.toggle_task_status(s, task_id))


def add_absence(state: AppState, subject_id: str) -> Snapshot:
    return _apply(state, "add_absence", lambda s: cmd.add_absence(s, subject_id))


def remove_absence(state: AppState, subject_id: str) -> Snapshot:
    return _apply(state, "remove_absence", lambda s: cmd.remove_absence(s, subject_id))


# ---- read side ----


def get_attendance(state: AppState) -> list[tuple[Subject, AttendanceStatus]]:
    return attendance_report(load_snapshot(state).subjects)


def get_task_views(state: AppState, now: datetime | None = None) -> list[TaskView]:
    snap = load_snapshot(state)
    if now is None:
        now = datetime.now().astimezone()
    return build_task_views(snap.tasks, snap.subjects, now)
