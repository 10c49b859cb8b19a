# ABOUTME: Defines canonical data structures shared by every engine component.
# ABOUTME: Centralizes student metric, prediction, observation, and tier definitions.

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class StudentMetric:
    """Weekly study hours plus attendance percentage for one student."""

    hours: float
    attendance: float


@dataclass(frozen=True)
class NamedStudentMetric:
    """Student metric row as it arrives in a batch."""

    name: str
    hours: float
    attendance: float

    @property
    def metric(self) -> StudentMetric:
        return StudentMetric(hours=self.hours, attendance=self.attendance)


@dataclass(frozen=True)
class PredictionResult:
    """Pass/fail call with the confidence of the chosen class."""

    passed: bool
    confidence: float
    base_score: float = 0.0
    noise: float = 0.0

    @property
    def label(self) -> str:
        return "Pass" if self.passed else "Fail"


@dataclass(frozen=True)
class WeeklyObservation:
    """One week of study hours and attendance for a student."""

    week: int
    hours: float
    attendance: float


class TrendClassification(str, Enum):
    IMPROVING = "Improving"
    DECLINING = "Declining"
    STABLE = "Stable"


class PerformanceTier(str, Enum):
    """Attendance bands used by the class performance breakdown."""

    EXCELLENT = "Excellent (90-100%)"
    GOOD = "Good (75-89%)"
    AVERAGE = "Average (60-74%)"
    NEEDS_IMPROVEMENT = "Needs Improvement (<60%)"

    @classmethod
    def for_attendance(cls, attendance: float) -> "PerformanceTier":
        if attendance >= 90.0:
            return cls.EXCELLENT
        if attendance >= 75.0:
            return cls.GOOD
        if attendance >= 60.0:
            return cls.AVERAGE
        return cls.NEEDS_IMPROVEMENT
