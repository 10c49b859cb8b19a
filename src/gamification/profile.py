# ABOUTME: Defines the student profile and the badge, achievement, and session records.
# ABOUTME: Profiles are frozen values; the engine returns a new profile per session.

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple


class Rarity(str, Enum):
    COMMON = "Common"
    RARE = "Rare"
    EPIC = "Epic"
    LEGENDARY = "Legendary"


@dataclass(frozen=True)
class Badge:
    name: str
    description: str
    icon: str
    rarity: Rarity
    earned_at: datetime


@dataclass(frozen=True)
class Achievement:
    name: str
    description: str
    points: int
    progress: float
    completed: bool
    completed_at: Optional[datetime] = None


@dataclass(frozen=True)
class StudySession:
    date: datetime
    duration_hours: float
    subjects: Tuple[str, ...]
    points_earned: int
    focus_score: float
    attended: bool = False


@dataclass(frozen=True)
class StudySessionRequest:
    """A session as reported by the student; `focus_score` is in [0, 1]."""

    student_name: str
    duration_hours: float
    subjects: Tuple[str, ...] = ()
    focus_score: float = 0.0
    attended_today: bool = False
    timestamp: Optional[datetime] = None


@dataclass(frozen=True)
class StudentProfile:
    name: str
    total_points: int = 0
    level: int = 1
    current_streak: int = 0
    longest_streak: int = 0
    badges: Tuple[Badge, ...] = ()
    achievements: Tuple[Achievement, ...] = ()
    sessions: Tuple[StudySession, ...] = ()
    last_activity: Optional[datetime] = None

    @property
    def badge_names(self) -> frozenset:
        return frozenset(b.name for b in self.badges)

    @property
    def achievement_names(self) -> frozenset:
        return frozenset(a.name for a in self.achievements)

    @property
    def total_study_hours(self) -> float:
        return sum(s.duration_hours for s in self.sessions)


def new_profile(name: str) -> StudentProfile:
    """Profile for a student who has not recorded a session yet."""
    return StudentProfile(name=name)


def _parse_ts(value) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def profile_to_dict(profile: StudentProfile) -> Dict[str, Any]:
    """Plain mapping of a profile, timestamps as ISO strings, for YAML/JSON transport."""
    return {
        "name": profile.name,
        "total_points": profile.total_points,
        "level": profile.level,
        "current_streak": profile.current_streak,
        "longest_streak": profile.longest_streak,
        "last_activity": profile.last_activity.isoformat() if profile.last_activity else None,
        "badges": [
            {
                "name": b.name,
                "description": b.description,
                "icon": b.icon,
                "rarity": b.rarity.value,
                "earned_at": b.earned_at.isoformat(),
            }
            for b in profile.badges
        ],
        "achievements": [
            {
                "name": a.name,
                "description": a.description,
                "points": a.points,
                "progress": a.progress,
                "completed": a.completed,
                "completed_at": a.completed_at.isoformat() if a.completed_at else None,
            }
            for a in profile.achievements
        ],
        "sessions": [
            {
                "date": s.date.isoformat(),
                "duration_hours": s.duration_hours,
                "subjects": list(s.subjects),
                "points_earned": s.points_earned,
                "focus_score": s.focus_score,
                "attended": s.attended,
            }
            for s in profile.sessions
        ],
    }


def profile_from_dict(data: Mapping[str, Any]) -> StudentProfile:
    return StudentProfile(
        name=str(data["name"]),
        total_points=int(data.get("total_points", 0)),
        level=int(data.get("level", 1)),
        current_streak=int(data.get("current_streak", 0)),
        longest_streak=int(data.get("longest_streak", 0)),
        badges=tuple(
            Badge(
                name=b["name"],
                description=b.get("description", ""),
                icon=b.get("icon", ""),
                rarity=Rarity(b.get("rarity", Rarity.COMMON.value)),
                earned_at=_parse_ts(b["earned_at"]),
            )
            for b in data.get("badges", []) or []
        ),
        achievements=tuple(
            Achievement(
                name=a["name"],
                description=a.get("description", ""),
                points=int(a.get("points", 0)),
                progress=float(a.get("progress", 1.0)),
                completed=bool(a.get("completed", True)),
                completed_at=_parse_ts(a.get("completed_at")),
            )
            for a in data.get("achievements", []) or []
        ),
        sessions=tuple(
            StudySession(
                date=_parse_ts(s["date"]),
                duration_hours=float(s["duration_hours"]),
                subjects=tuple(s.get("subjects", []) or []),
                points_earned=int(s.get("points_earned", 0)),
                focus_score=float(s.get("focus_score", 0.0)),
                attended=bool(s.get("attended", False)),
            )
            for s in data.get("sessions", []) or []
        ),
        last_activity=_parse_ts(data.get("last_activity")),
    )
