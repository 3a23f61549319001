# tests/test_attendance.py

from __future__ import annotations

import math

import pytest

from academic_planner.core.attendance import (
    RiskLevel,
    attendance_report,
    compute_attendance_status,
    subjects_with_course_load,
)
from academic_planner.core.models import Subject


def test_sixty_hours_five_absences_is_safe() -> None:
    st = compute_attendance_status(60, 5)
    assert st is not None
    assert st.total_minutes == 3600
    assert st.absence_minutes == 250
    assert st.percentage == pytest.approx(250 / 3600 * 100)
    assert round(st.percentage, 2) == 6.94
    assert st.risk_level == RiskLevel.SAFE
    assert st.max_allowed_absence_sessions == 18
    assert st.remaining_sessions == 13


def test_sixty_hours_eighteen_absences_is_danger() -> None:
    st = compute_attendance_status(60, 18)
    assert st is not None
    assert st.absence_minutes == 900
    assert st.percentage == 25.0
    assert st.risk_level == RiskLevel.DANGER
    assert st.remaining_sessions == 0


def test_thresholds_are_inclusive() -> None:
    # 50 hours = 3000 minutes; 12 absences = 600 minutes = exactly 20%.
    warning = compute_attendance_status(50, 12)
    assert warning is not None
    assert warning.percentage == 20.0
    assert warning.risk_level == RiskLevel.WARNING

    # 15 absences = 750 minutes = exactly 25%.
    danger = compute_attendance_status(50, 15)
    assert danger is not None
    assert danger.percentage == 25.0
    assert danger.risk_level == RiskLevel.DANGER

    below = compute_attendance_status(50, 11)
    assert below is not None
    assert below.risk_level == RiskLevel.SAFE


@pytest.mark.parametrize("hours", [1, 3.5, 40, 60, 72, 80, 333])
def test_max_sessions_rounds_down(hours: float) -> None:
    st = compute_attendance_status(hours, 0)
    assert st is not None
    assert st.max_allowed_absence_sessions == math.floor(hours * 60 * 0.25 / 50)


def test_percentage_formula_and_monotonic() -> None:
    hours = 45
    previous = -1.0
    for absences in range(0, 40):
        st = compute_attendance_status(hours, absences)
        assert st is not None
        assert st.percentage == pytest.approx(absences * 50 / (hours * 60) * 100)
        assert st.percentage >= previous
        previous = st.percentage


@pytest.mark.parametrize("bad", [None, 0, -10, "abc", float("nan"), float("inf"), True])
def test_unusable_course_load_is_not_applicable(bad) -> None:
    assert compute_attendance_status(bad, 3) is None


@pytest.mark.parametrize("bad", [None, -4, "x", float("nan")])
def test_unusable_absences_count_as_zero(bad) -> None:
    st = compute_attendance_status(60, bad)
    assert st is not None
    assert st.absences == 0
    assert st.percentage == 0.0
    assert st.risk_level == RiskLevel.SAFE


def test_progress_is_capped() -> None:
    st = compute_attendance_status(10, 100)
    assert st is not None
    assert st.percentage > 100
    assert st.progress == 100.0


def test_report_skips_untracked_subjects_and_keeps_order() -> None:
    subjects = [
        Subject(id="a", name="Calculus", course_load=60, absences=5),
        Subject(id="b", name="Art", course_load=None),
        Subject(id="c", name="Physics", course_load=0, absences=2),
        Subject(id="d", name="History", course_load=30, absences=9),
    ]

    assert [s.id for s in subjects_with_course_load(subjects)] == ["a", "d"]

    report = attendance_report(subjects)
    assert [s.id for s, _ in report] == ["a", "d"]
    assert report[1][1].risk_level == RiskLevel.DANGER
