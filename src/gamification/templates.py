# ABOUTME: Holds the immutable badge and achievement rule templates used by the engine.
# ABOUTME: Builds the default catalogue and loads alternative catalogues from YAML.

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Tuple, Type

import yaml

from .conditions import (
    AchievementCondition,
    BadgeCondition,
    EarlyBird,
    FirstStudySession,
    MarathonStudier,
    NightOwl,
    PerfectAttendance,
    PerfectWeek,
    PointsEarned,
    SessionsCompleted,
    StudyStreak,
    SubjectExpert,
    SubjectMastery,
    TotalStudyHours,
    WeeklyChampion,
)
from .profile import Rarity

ACHIEVEMENT_KINDS: Dict[str, Type] = {
    "total_study_hours": TotalStudyHours,
    "study_streak": StudyStreak,
    "perfect_attendance": PerfectAttendance,
    "points_earned": PointsEarned,
    "sessions_completed": SessionsCompleted,
    "subject_mastery": SubjectMastery,
}
BADGE_KINDS: Dict[str, Type] = {
    "first_study_session": FirstStudySession,
    "weekly_champion": WeeklyChampion,
    "marathon_studier": MarathonStudier,
    "perfect_week": PerfectWeek,
    "subject_expert": SubjectExpert,
    "early_bird": EarlyBird,
    "night_owl": NightOwl,
}


@dataclass(frozen=True)
class AchievementTemplate:
    key: str
    name: str
    description: str
    points: int
    condition: AchievementCondition


@dataclass(frozen=True)
class BadgeTemplate:
    key: str
    name: str
    description: str
    icon: str
    rarity: Rarity
    condition: BadgeCondition


@dataclass(frozen=True)
class TemplateRegistry:
    achievements: Tuple[AchievementTemplate, ...]
    badges: Tuple[BadgeTemplate, ...]


DEFAULT_ACHIEVEMENTS: Tuple[AchievementTemplate, ...] = (
    AchievementTemplate("first_steps", "First Steps", "Complete your first study session", 50, SessionsCompleted(1)),
    AchievementTemplate("dedicated_learner", "Dedicated Learner", "Reach 50 total study hours", 200, TotalStudyHours(50.0)),
    AchievementTemplate("study_streak_7", "Weekly Warrior", "Maintain a 7-day study streak", 150, StudyStreak(7)),
    AchievementTemplate("perfect_month", "Perfect Month", "Perfect attendance for 30 days", 500, PerfectAttendance(30)),
    AchievementTemplate("point_master", "Point Master", "Earn 1000 total points", 300, PointsEarned(1000)),
    AchievementTemplate(
        "math_mastery", "Math Mastery", "Study Mathematics in 20 sessions", 250, SubjectMastery("Mathematics", 20)
    ),
)

DEFAULT_BADGES: Tuple[BadgeTemplate, ...] = (
    BadgeTemplate(
        "first_session", "First Session", "Completed your first study session", "🎯", Rarity.COMMON, FirstStudySession()
    ),
    BadgeTemplate(
        "weekly_champion", "Weekly Champion", "Top performer for the week", "🏆", Rarity.RARE, WeeklyChampion(500)
    ),
    BadgeTemplate(
        "marathon_studier", "Marathon Studier", "Study for 5+ hours in one session", "🏃", Rarity.EPIC, MarathonStudier(5.0)
    ),
    BadgeTemplate(
        "perfect_week", "Perfect Week", "Perfect attendance and study goals for a week", "⭐", Rarity.RARE, PerfectWeek(7)
    ),
    BadgeTemplate(
        "subject_expert", "Subject Explorer", "Cover 3+ subjects in one session", "📚", Rarity.COMMON, SubjectExpert(3)
    ),
    BadgeTemplate(
        "early_bird", "Early Bird", "Complete 10 morning study sessions", "🌅", Rarity.COMMON, EarlyBird(10, 12)
    ),
    BadgeTemplate(
        "night_owl", "Night Owl", "Complete 10 evening study sessions", "🌙", Rarity.COMMON, NightOwl(10, 18)
    ),
)


def default_registry() -> TemplateRegistry:
    return TemplateRegistry(achievements=DEFAULT_ACHIEVEMENTS, badges=DEFAULT_BADGES)


def _build_condition(condition: Mapping[str, Any], kinds: Mapping[str, Type], owner: str):
    params = dict(condition or {})
    kind = params.pop("kind", None)
    if kind not in kinds:
        raise ValueError(f"Template '{owner}' has unsupported condition kind '{kind}'. Expected one of: {', '.join(kinds)}.")
    cls = kinds[kind]
    allowed = {f.name for f in fields(cls)}
    unknown = set(params) - allowed
    if unknown:
        raise ValueError(f"Template '{owner}' condition '{kind}' got unexpected parameters: {sorted(unknown)}.")
    return cls(**params)


def _condition_to_dict(condition: Any, kinds: Mapping[str, Type]) -> Dict[str, Any]:
    for kind, cls in kinds.items():
        if isinstance(condition, cls):
            return {"kind": kind, **asdict(condition)}
    raise ValueError(f"Unsupported condition {condition!r}.")


def registry_from_dict(cfg: Mapping[str, Any]) -> TemplateRegistry:
    achievements = []
    for entry in cfg.get("achievements", []) or []:
        key = entry["key"]
        achievements.append(
            AchievementTemplate(
                key=key,
                name=entry.get("name", key),
                description=entry.get("description", ""),
                points=int(entry.get("points", 0)),
                condition=_build_condition(entry.get("condition"), ACHIEVEMENT_KINDS, key),
            )
        )

    badges = []
    for entry in cfg.get("badges", []) or []:
        key = entry["key"]
        badges.append(
            BadgeTemplate(
                key=key,
                name=entry.get("name", key),
                description=entry.get("description", ""),
                icon=entry.get("icon", ""),
                rarity=Rarity(entry.get("rarity", Rarity.COMMON.value)),
                condition=_build_condition(entry.get("condition"), BADGE_KINDS, key),
            )
        )

    _check_unique_names([a.name for a in achievements], "achievement")
    _check_unique_names([b.name for b in badges], "badge")
    return TemplateRegistry(achievements=tuple(achievements), badges=tuple(badges))


def _check_unique_names(names, label: str) -> None:
    seen = set()
    for name in names:
        if name in seen:
            raise ValueError(f"Duplicate {label} template name '{name}'.")
        seen.add(name)


def registry_to_dict(registry: TemplateRegistry) -> Dict[str, Any]:
    return {
        "achievements": [
            {
                "key": t.key,
                "name": t.name,
                "description": t.description,
                "points": t.points,
                "condition": _condition_to_dict(t.condition, ACHIEVEMENT_KINDS),
            }
            for t in registry.achievements
        ],
        "badges": [
            {
                "key": t.key,
                "name": t.name,
                "description": t.description,
                "icon": t.icon,
                "rarity": t.rarity.value,
                "condition": _condition_to_dict(t.condition, BADGE_KINDS),
            }
            for t in registry.badges
        ],
    }


def load_registry(path: Path) -> TemplateRegistry:
    """Load a template catalogue from YAML; raises ValueError on malformed entries."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Template file not found: {path}")
    with open(path, encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}
    try:
        return registry_from_dict(cfg)
    except KeyError as exc:
        raise ValueError(f"Template entry in {path} is missing required field {exc}.") from exc
