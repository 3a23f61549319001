# src/academic_planner/core/attendance.py

from __future__ import annotations

"""
Attendance risk.

Converts a subject's course load (hours) and absence count (missed sessions)
into the share of the term already missed, the absence allowance and a risk
level. One absence is one 50-minute session; a student may miss at most 25%
of the scheduled minutes.

Everything here is pure. Bad numbers never raise: an unusable course load
means "not tracked" (None), an unusable absence count means 0.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from .models import Subject

MINUTES_PER_HOUR = 60
SESSION_MINUTES = 50
MAX_ABSENCE_SHARE = 0.25

DANGER_PERCENT = 25.0
WARNING_PERCENT = 20.0


class RiskLevel(StrEnum):
    SAFE = "safe"
    WARNING = "warning"
    DANGER = "danger"


@dataclass(frozen=True, slots=True)
class AttendanceStatus:
    absences: int
    total_minutes: float
    absence_minutes: int
    # Raw value, not rounded; display rounding is up to the caller.
    percentage: float
    max_allowed_absence_sessions: int
    risk_level: RiskLevel

    @property
    def remaining_sessions(self) -> int:
        return max(0, self.max_allowed_absence_sessions - self.absences)

    @property
    def progress(self) -> float:
        """Percentage capped at 100, for progress bars."""
        return min(self.percentage, 100.0)


def normalize_course_load(raw: Any) -> float | None:
    """Return a usable course load in hours, or None when attendance is not tracked."""
    if raw is None or isinstance(raw, bool):
        return None
    try:
        hours = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(hours) or hours <= 0:
        return None
    return hours


def normalize_absences(raw: Any) -> int:
    if raw is None or isinstance(raw, bool):
        return 0
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(value) or value <= 0:
        return 0
    return int(value)


def classify_risk(percentage: float) -> RiskLevel:
    if percentage >= DANGER_PERCENT:
        return RiskLevel.DANGER
    if percentage >= WARNING_PERCENT:
        return RiskLevel.WARNING
    return RiskLevel.SAFE


def compute_attendance_status(course_load_hours: Any, absence_count: Any = 0) -> AttendanceStatus | None:
    """
    Compute the attendance status of one subject.

    Returns None when the course load is missing, zero, negative or not a number:
    such subjects are left out of attendance reporting altogether.
    """
    hours = normalize_course_load(course_load_hours)
    if hours is None:
        return None

    absences = normalize_absences(absence_count)

    total_minutes = hours * MINUTES_PER_HOUR
    absence_minutes = absences * SESSION_MINUTES
    percentage = (absence_minutes / total_minutes) * 100 if total_minutes > 0 else 0.0

    max_minutes = total_minutes * MAX_ABSENCE_SHARE
    max_sessions = math.floor(max_minutes / SESSION_MINUTES)

    return AttendanceStatus(
        absences=absences,
        total_minutes=total_minutes,
        absence_minutes=absence_minutes,
        percentage=percentage,
        max_allowed_absence_sessions=int(max_sessions),
        risk_level=classify_risk(percentage),
    )


def subjects_with_course_load(subjects: Iterable[Subject]) -> list[Subject]:
    return [s for s in subjects if normalize_course_load(s.course_load) is not None]


def attendance_report(subjects: Iterable[Subject]) -> list[tuple[Subject, AttendanceStatus]]:
    """(subject, status) for every subject with a usable course load, in input order."""
    out: list[tuple[Subject, AttendanceStatus]] = []
    for subject in subjects:
        status = compute_attendance_status(subject.course_load, subject.absences)
        if status is not None:
            out.append((subject, status))
    return out
