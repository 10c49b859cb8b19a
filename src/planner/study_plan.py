# ABOUTME: Builds a personalised study plan from current habits and a target grade.
# ABOUTME: Combines grade targets, a synthesized schedule, advice, and an outcome narrative.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from .schedule import DaySchedule, build_weekly_schedule
from .targets import compute_targets, normalize_grade, plan_duration_weeks

LARGE_HOURS_GAP = 4.0
LARGE_ATTENDANCE_GAP = 10.0

UNIVERSAL_TIPS: Tuple[str, ...] = (
    "Review class notes within 24 hours of each lecture",
    "Practice with past exam papers regularly",
    "Join a study group for difficult subjects",
)

SUCCESS_TIPS: Tuple[str, ...] = (
    "🎯 Study at least 5 hours weekly for better results",
    "📚 Maintain 80%+ attendance for higher pass rates",
    "⏰ Consistent daily study beats last-minute cramming",
    "📝 Practice with past papers regularly",
    "🔄 Review class notes within 24 hours",
    "👥 Join study groups for difficult subjects",
    "💤 Get 7-8 hours sleep for optimal memory retention",
)

EXPECTED_OUTCOMES = {
    "A": (
        "Sustaining {hours:.1f} study hours a week and {attendance:.0f}% attendance for {weeks} weeks "
        "puts you in range of an A: expect strong exam performance and deep command of the material."
    ),
    "B": (
        "Sustaining {hours:.1f} study hours a week and {attendance:.0f}% attendance for {weeks} weeks "
        "should secure a solid B with a comfortable pass margin."
    ),
    "C": (
        "Sustaining {hours:.1f} study hours a week and {attendance:.0f}% attendance for {weeks} weeks "
        "should lift you to a C and a reliable pass."
    ),
    "PASS": (
        "Sustaining {hours:.1f} study hours a week and {attendance:.0f}% attendance for {weeks} weeks "
        "should be enough to pass the course."
    ),
}
DEFAULT_OUTCOME = (
    "Sustaining {hours:.1f} study hours a week and {attendance:.0f}% attendance for {weeks} weeks "
    "should noticeably improve your results."
)


@dataclass(frozen=True)
class StudyPlanRequest:
    student_name: str
    current_hours: float
    current_attendance: float
    target_grade: str
    available_days: Tuple[str, ...] = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday")
    preferred_times: Tuple[str, ...] = ()
    subjects: Tuple[str, ...] = ()


@dataclass(frozen=True)
class StudyPlan:
    student_name: str
    target_grade: str
    current_hours: float
    current_attendance: float
    recommended_hours: float
    target_attendance: float
    plan_duration_weeks: int
    weekly_schedule: List[DaySchedule] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    expected_outcome: str = ""

    @property
    def hours_gap(self) -> float:
        return self.recommended_hours - self.current_hours

    @property
    def attendance_gap(self) -> float:
        return self.target_attendance - self.current_attendance


def build_recommendations(
    grade: str,
    current_hours: float,
    current_attendance: float,
    target_hours: float,
    target_attendance: float,
) -> List[str]:
    hours_gap = target_hours - current_hours
    attendance_gap = target_attendance - current_attendance

    recs: List[str] = []
    if hours_gap > 0:
        recs.append(
            f"Increase weekly study time from {current_hours:.1f} to {target_hours:.1f} hours "
            f"(+{hours_gap:.1f} hours per week)"
        )
    if attendance_gap > 0:
        recs.append(f"Raise class attendance from {current_attendance:.0f}% to {target_attendance:.0f}%")
    if hours_gap >= LARGE_HOURS_GAP:
        recs.append("Build up gradually: add about 30 minutes of study each week instead of all at once")
    if attendance_gap >= LARGE_ATTENDANCE_GAP:
        recs.append("Attendance is your biggest lever: plan commitments around lecture times")
    if hours_gap <= 0 and attendance_gap <= 0:
        recs.append(f"You already meet the targets for grade {grade}; focus on keeping your routine consistent")

    recs.append("Keep a fixed daily study routine rather than cramming before exams")
    recs.extend(UNIVERSAL_TIPS)
    return recs


def expected_outcome(grade: str, hours: float, attendance: float, weeks: int) -> str:
    template = EXPECTED_OUTCOMES.get(normalize_grade(grade), DEFAULT_OUTCOME)
    return template.format(hours=hours, attendance=attendance, weeks=weeks)


def success_tips() -> List[str]:
    return list(SUCCESS_TIPS)


def generate_study_plan(request: StudyPlanRequest, rng: Optional[np.random.Generator] = None) -> StudyPlan:
    """
    Generate a plan that never asks the student to regress.

    Only the weekly schedule consumes randomness; targets, duration,
    recommendations, and the outcome narrative are deterministic.
    """

    target_hours, target_attendance = compute_targets(
        request.current_hours, request.current_attendance, request.target_grade
    )
    hours_gap = target_hours - request.current_hours
    attendance_gap = target_attendance - request.current_attendance
    weeks = plan_duration_weeks(hours_gap, attendance_gap)

    schedule = build_weekly_schedule(
        target_hours,
        request.available_days,
        request.preferred_times,
        subjects=request.subjects,
        rng=rng,
    )

    return StudyPlan(
        student_name=request.student_name,
        target_grade=request.target_grade,
        current_hours=request.current_hours,
        current_attendance=request.current_attendance,
        recommended_hours=target_hours,
        target_attendance=target_attendance,
        plan_duration_weeks=weeks,
        weekly_schedule=schedule,
        recommendations=build_recommendations(
            request.target_grade,
            request.current_hours,
            request.current_attendance,
            target_hours,
            target_attendance,
        ),
        expected_outcome=expected_outcome(request.target_grade, target_hours, target_attendance, weeks),
    )
