# ABOUTME: Exposes the study plan generator entrypoints.
# ABOUTME: Groups grade targets, schedule synthesis, and plan assembly.

from .targets import compute_targets, plan_duration_weeks, GRADE_TARGETS
from .schedule import build_weekly_schedule, DaySchedule, StudyBlock
from .study_plan import StudyPlan, StudyPlanRequest, generate_study_plan, success_tips

__all__ = [
    "compute_targets",
    "plan_duration_weeks",
    "GRADE_TARGETS",
    "build_weekly_schedule",
    "DaySchedule",
    "StudyBlock",
    "StudyPlan",
    "StudyPlanRequest",
    "generate_study_plan",
    "success_tips",
]
