# ABOUTME: Computes session points, levels, streaks, and newly earned badges and achievements.
# ABOUTME: Exposes record_session as a pure (profile, session) -> next profile transition.

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from .conditions import achievement_progress, badge_earned
from .profile import (
    Achievement,
    Badge,
    StudentProfile,
    StudySession,
    StudySessionRequest,
    new_profile,
)
from .templates import TemplateRegistry, default_registry


class PointRules:
    PER_HOUR = 10
    FOCUS_MULTIPLIER = 20
    PER_SUBJECT = 5
    ATTENDANCE_BONUS = 25
    LONG_SESSION_BONUS = 15
    LONG_SESSION_HOURS = 2.0
    POINTS_PER_LEVEL_UNIT = 100


@dataclass(frozen=True)
class SessionOutcome:
    points_earned: int
    bonus_points: int
    new_badges: List[Badge]
    new_achievements: List[Achievement]
    level_up: bool
    updated_profile: StudentProfile


class GamificationEngine:
    """
    Rule evaluator for points, levels, streaks, badges, and achievements.

    Templates are fixed at construction. No method mutates its inputs: callers
    persist `SessionOutcome.updated_profile` themselves.
    """

    def __init__(self, registry: Optional[TemplateRegistry] = None):
        self.registry = registry if registry is not None else default_registry()

    def calculate_points(self, session: StudySessionRequest) -> int:
        points = math.floor(session.duration_hours * PointRules.PER_HOUR)
        points += math.floor(session.focus_score * PointRules.FOCUS_MULTIPLIER)
        points += len(session.subjects) * PointRules.PER_SUBJECT
        if session.attended_today:
            points += PointRules.ATTENDANCE_BONUS
        if session.duration_hours > PointRules.LONG_SESSION_HOURS:
            points += PointRules.LONG_SESSION_BONUS
        return max(0, int(points))

    def calculate_level(self, total_points: int) -> int:
        return int(math.sqrt(max(0, total_points) / PointRules.POINTS_PER_LEVEL_UNIT)) + 1

    def next_streak(self, profile: StudentProfile, now: datetime) -> int:
        """Same-day or backdated sessions keep the current streak."""
        if profile.last_activity is None:
            return 1

        today = now.date()
        last_day = profile.last_activity.date()
        if today <= last_day:
            return profile.current_streak
        if today == last_day + timedelta(days=1):
            return profile.current_streak + 1
        return 1

    def evaluate_achievements(self, profile: StudentProfile, now: datetime) -> List[Achievement]:
        owned = profile.achievement_names
        earned: List[Achievement] = []
        for template in self.registry.achievements:
            if template.name in owned:
                continue
            if achievement_progress(template.condition, profile) >= 1.0:
                earned.append(
                    Achievement(
                        name=template.name,
                        description=template.description,
                        points=template.points,
                        progress=1.0,
                        completed=True,
                        completed_at=now,
                    )
                )
        return earned

    def evaluate_badges(self, profile: StudentProfile, session: StudySession, now: datetime) -> List[Badge]:
        owned = profile.badge_names
        earned: List[Badge] = []
        for template in self.registry.badges:
            if template.name in owned:
                continue
            if badge_earned(template.condition, profile, session):
                earned.append(
                    Badge(
                        name=template.name,
                        description=template.description,
                        icon=template.icon,
                        rarity=template.rarity,
                        earned_at=now,
                    )
                )
        return earned

    def achievement_progress_report(self, profile: StudentProfile) -> List[Achievement]:
        """Progress toward every achievement; owned ones are reported as completed."""
        report: List[Achievement] = []
        owned = {a.name: a for a in profile.achievements}
        for template in self.registry.achievements:
            if template.name in owned:
                report.append(owned[template.name])
                continue
            progress = achievement_progress(template.condition, profile)
            report.append(
                Achievement(
                    name=template.name,
                    description=template.description,
                    points=template.points,
                    progress=round(progress, 4),
                    completed=False,
                )
            )
        return report

    def record_session(
        self,
        profile: Optional[StudentProfile],
        session: StudySessionRequest,
        now: Optional[datetime] = None,
    ) -> SessionOutcome:
        """
        Compute the profile that results from recording `session`.

        Steps: streak transition, append the session and its points, evaluate
        templates against that interim profile, then merge rewards (achievement
        points included) and recompute the level.
        """

        if now is None:
            now = session.timestamp or datetime.now(timezone.utc)
        if profile is None:
            profile = new_profile(session.student_name)

        points = self.calculate_points(session)
        streak = self.next_streak(profile, now)
        recorded = StudySession(
            date=now,
            duration_hours=session.duration_hours,
            subjects=tuple(session.subjects),
            points_earned=points,
            focus_score=session.focus_score,
            attended=session.attended_today,
        )

        interim = replace(
            profile,
            total_points=profile.total_points + points,
            current_streak=streak,
            longest_streak=max(profile.longest_streak, streak),
            sessions=profile.sessions + (recorded,),
            last_activity=now if profile.last_activity is None else max(profile.last_activity, now),
        )

        new_achievements = self.evaluate_achievements(interim, now)
        new_badges = self.evaluate_badges(interim, recorded, now)
        bonus = sum(a.points for a in new_achievements)

        total_points = interim.total_points + bonus
        level = self.calculate_level(total_points)
        updated = replace(
            interim,
            total_points=total_points,
            level=level,
            badges=interim.badges + tuple(new_badges),
            achievements=interim.achievements + tuple(new_achievements),
        )

        return SessionOutcome(
            points_earned=points,
            bonus_points=bonus,
            new_badges=new_badges,
            new_achievements=new_achievements,
            level_up=level > profile.level,
            updated_profile=updated,
        )
