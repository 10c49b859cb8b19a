# ABOUTME: Maps a target grade to weekly study-hour and attendance floors.
# ABOUTME: Computes non-regressing targets and the clamped plan duration.

from __future__ import annotations

import math
from typing import Dict, Tuple

GRADE_TARGETS: Dict[str, Tuple[float, float]] = {
    "A": (12.0, 95.0),
    "B": (9.0, 85.0),
    "C": (6.0, 75.0),
    "PASS": (5.0, 70.0),
}
DEFAULT_TARGET: Tuple[float, float] = (8.0, 80.0)

MIN_PLAN_WEEKS = 4
MAX_PLAN_WEEKS = 12
HOURS_STEP_PER_WEEK = 0.5
ATTENDANCE_STEP_PER_WEEK = 2.0


def normalize_grade(grade: str) -> str:
    return (grade or "").strip().upper()


def grade_floors(grade: str) -> Tuple[float, float]:
    """Unrecognized grades fall back to the default row."""
    return GRADE_TARGETS.get(normalize_grade(grade), DEFAULT_TARGET)


def compute_targets(current_hours: float, current_attendance: float, grade: str) -> Tuple[float, float]:
    hours_floor, attendance_floor = grade_floors(grade)
    return max(current_hours, hours_floor), max(current_attendance, attendance_floor)


def plan_duration_weeks(hours_gap: float, attendance_gap: float) -> int:
    total = hours_gap / HOURS_STEP_PER_WEEK + attendance_gap / ATTENDANCE_STEP_PER_WEEK
    if not math.isfinite(total):
        return MAX_PLAN_WEEKS
    weeks = math.ceil(total)
    return max(MIN_PLAN_WEEKS, min(MAX_PLAN_WEEKS, weeks))
