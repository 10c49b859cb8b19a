# ABOUTME: Exposes the gamification engine, templates, and profile types.
# ABOUTME: Groups point/level/streak rules, rule templates, and leaderboards.

from .profile import (
    Achievement,
    Badge,
    Rarity,
    StudentProfile,
    StudySession,
    StudySessionRequest,
    new_profile,
    profile_from_dict,
    profile_to_dict,
)
from .templates import TemplateRegistry, default_registry, load_registry
from .engine import GamificationEngine, SessionOutcome
from .leaderboard import LeaderboardEntry, build_leaderboard, leaderboard_position

__all__ = [
    "Achievement",
    "Badge",
    "Rarity",
    "StudentProfile",
    "StudySession",
    "StudySessionRequest",
    "new_profile",
    "profile_from_dict",
    "profile_to_dict",
    "TemplateRegistry",
    "default_registry",
    "load_registry",
    "GamificationEngine",
    "SessionOutcome",
    "LeaderboardEntry",
    "build_leaderboard",
    "leaderboard_position",
]
