# ABOUTME: Ranks student profiles by total points for leaderboard views.
# ABOUTME: Ties break alphabetically so ranks are stable for a given snapshot.

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from .profile import StudentProfile


@dataclass(frozen=True)
class LeaderboardEntry:
    rank: int
    student_name: str
    total_points: int
    level: int
    badge_count: int


def build_leaderboard(profiles: Iterable[StudentProfile], limit: Optional[int] = None) -> List[LeaderboardEntry]:
    ordered = sorted(profiles, key=lambda p: (-p.total_points, p.name))
    if limit is not None:
        ordered = ordered[:limit]
    return [
        LeaderboardEntry(
            rank=index + 1,
            student_name=p.name,
            total_points=p.total_points,
            level=p.level,
            badge_count=len(p.badges),
        )
        for index, p in enumerate(ordered)
    ]


def leaderboard_position(entries: Iterable[LeaderboardEntry], student_name: str) -> Optional[int]:
    for entry in entries:
        if entry.student_name == student_name:
            return entry.rank
    return None
