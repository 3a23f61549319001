# src/academic_planner/cli/render.py

from __future__ import annotations

from ..core.attendance import AttendanceStatus, RiskLevel
from ..core.models import Subject
from ..core.task_order import DerivedStatus, TaskView

RISK_LABELS = {
    RiskLevel.SAFE: "Safe",
    RiskLevel.WARNING: "Warning",
    RiskLevel.DANGER: "Danger",
}

STATUS_LABELS = {
    DerivedStatus.PENDING: "Pending",
    DerivedStatus.COMPLETED: "Completed",
    DerivedStatus.OVERDUE: "Overdue",
}

BAR_WIDTH = 20


def progress_bar(percent: float, width: int = BAR_WIDTH) -> str:
    filled = int(round(max(0.0, min(percent, 100.0)) / 100 * width))
    return "[" + "#" * filled + "." * (width - filled) + "]"


def format_course_load(subject: Subject) -> str:
    if subject.course_load is None:
        return "-"
    return f"{subject.course_load:g}h"


def format_subject_line(index: int, subject: Subject) -> str:
    return (
        f"{index}. {subject.name} ({subject.color}) "
        f"load={format_course_load(subject)} absences={subject.absences} "
        f"[{subject.id[:8]}]"
    )


def format_attendance(subject: Subject, status: AttendanceStatus) -> str:
    risk = RISK_LABELS[status.risk_level]
    return (
        f"{subject.name}: {status.absences} absences - {risk}\n"
        f"  {progress_bar(status.progress)} {status.percentage:.1f}%\n"
        f"  limit: {status.max_allowed_absence_sessions} absences "
        f"({status.remaining_sessions} left)"
    )


def format_task_line(index: int, view: TaskView, date_format: str) -> str:
    task = view.task
    mark = "x" if view.status == DerivedStatus.COMPLETED else " "
    due = task.due_date.strftime(date_format)
    return (
        f"{index}. [{mark}] {task.title} - {view.subject_label} - {due} "
        f"- {STATUS_LABELS[view.status]} [{task.id[:8]}]"
    )
