# ABOUTME: Declares badge and achievement rule conditions as a closed set of variants.
# ABOUTME: Evaluates each variant against a profile with one match arm per condition.

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .profile import StudentProfile, StudySession


# Achievement conditions (progress ratio).
@dataclass(frozen=True)
class TotalStudyHours:
    target: float


@dataclass(frozen=True)
class StudyStreak:
    target: int


@dataclass(frozen=True)
class PerfectAttendance:
    days: int


@dataclass(frozen=True)
class PointsEarned:
    target: int


@dataclass(frozen=True)
class SessionsCompleted:
    target: int


@dataclass(frozen=True)
class SubjectMastery:
    subject: str
    sessions: int


# Badge conditions (boolean).
@dataclass(frozen=True)
class FirstStudySession:
    pass


@dataclass(frozen=True)
class WeeklyChampion:
    points: int = 500


@dataclass(frozen=True)
class MarathonStudier:
    hours: float = 5.0


@dataclass(frozen=True)
class PerfectWeek:
    streak: int = 7


@dataclass(frozen=True)
class SubjectExpert:
    min_subjects: int = 3


@dataclass(frozen=True)
class EarlyBird:
    sessions: int = 10
    before_hour: int = 12


@dataclass(frozen=True)
class NightOwl:
    sessions: int = 10
    from_hour: int = 18


AchievementCondition = Union[
    TotalStudyHours, StudyStreak, PerfectAttendance, PointsEarned, SessionsCompleted, SubjectMastery
]
BadgeCondition = Union[
    FirstStudySession, WeeklyChampion, MarathonStudier, PerfectWeek, SubjectExpert, EarlyBird, NightOwl
]


def _ratio(value: float, target: float) -> float:
    if target <= 0:
        return 1.0
    return min(1.0, value / target)


def achievement_progress(condition: AchievementCondition, profile: StudentProfile) -> float:
    """Progress in [0, 1] of `profile` toward the condition."""
    match condition:
        case TotalStudyHours(target=target):
            return _ratio(profile.total_study_hours, target)
        case StudyStreak(target=target):
            return _ratio(profile.current_streak, target)
        case PerfectAttendance(days=days):
            attended_days = {s.date.date() for s in profile.sessions if s.attended}
            return _ratio(len(attended_days), days)
        case PointsEarned(target=target):
            return _ratio(profile.total_points, target)
        case SessionsCompleted(target=target):
            return _ratio(len(profile.sessions), target)
        case SubjectMastery(subject=subject, sessions=sessions):
            covered = sum(1 for s in profile.sessions if subject in s.subjects)
            return _ratio(covered, sessions)
    raise ValueError(f"Unsupported achievement condition {condition!r}.")


def badge_earned(condition: BadgeCondition, profile: StudentProfile, session: StudySession) -> bool:
    """Whether `profile`, which already includes `session`, satisfies the condition."""
    match condition:
        case FirstStudySession():
            return len(profile.sessions) == 1
        case WeeklyChampion(points=points):
            return profile.total_points > points
        case MarathonStudier(hours=hours):
            return session.duration_hours >= hours
        case PerfectWeek(streak=streak):
            return profile.current_streak >= streak and session.attended
        case SubjectExpert(min_subjects=min_subjects):
            return len(session.subjects) >= min_subjects
        case EarlyBird(sessions=sessions, before_hour=before_hour):
            return sum(1 for s in profile.sessions if s.date.hour < before_hour) >= sessions
        case NightOwl(sessions=sessions, from_hour=from_hour):
            return sum(1 for s in profile.sessions if s.date.hour >= from_hour) >= sessions
    raise ValueError(f"Unsupported badge condition {condition!r}.")
