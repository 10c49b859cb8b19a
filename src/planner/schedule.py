# ABOUTME: Synthesizes a weekly study schedule by greedily filling each available day.
# ABOUTME: Draws block lengths, subjects, and activities from an injected generator.

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from src.common.config import make_rng

SUBJECT_CATALOG: Tuple[str, ...] = (
    "Mathematics",
    "Programming",
    "Physics",
    "Chemistry",
    "English",
    "Data Structures",
)
ACTIVITY_CATALOG: Tuple[str, ...] = (
    "Review lecture notes",
    "Practice problems",
    "Past exam papers",
    "Read textbook chapter",
    "Flashcard revision",
    "Group study session",
)
DEFAULT_TIME_SLOTS: Tuple[str, ...] = (
    "Morning (08:00-10:00)",
    "Afternoon (14:00-16:00)",
    "Evening (19:00-21:00)",
)

MIN_BLOCK_HOURS = 1.5
MAX_BLOCK_HOURS = 2.5
EXACT_REMAINDER_BELOW = 2.0
MIN_REMAINING_HOURS = 0.5


@dataclass(frozen=True)
class StudyBlock:
    time_slot: str
    subject: str
    activity: str
    duration_hours: float


@dataclass(frozen=True)
class DaySchedule:
    day: str
    blocks: Tuple[StudyBlock, ...]

    @property
    def total_hours(self) -> float:
        return round(sum(block.duration_hours for block in self.blocks), 2)


def _fill_day(
    day: str,
    hours: float,
    time_slots: Sequence[str],
    subjects: Sequence[str],
    rng: np.random.Generator,
) -> DaySchedule:
    blocks: List[StudyBlock] = []
    remaining = hours
    while remaining >= MIN_REMAINING_HOURS:
        if remaining < EXACT_REMAINDER_BELOW:
            duration = remaining
        else:
            duration = min(remaining, float(rng.uniform(MIN_BLOCK_HOURS, MAX_BLOCK_HOURS)))
        duration = round(duration, 2)

        blocks.append(
            StudyBlock(
                time_slot=time_slots[len(blocks) % len(time_slots)],
                subject=subjects[int(rng.integers(len(subjects)))],
                activity=ACTIVITY_CATALOG[int(rng.integers(len(ACTIVITY_CATALOG)))],
                duration_hours=duration,
            )
        )
        remaining = round(remaining - duration, 6)
    return DaySchedule(day=day, blocks=tuple(blocks))


def build_weekly_schedule(
    target_hours: float,
    available_days: Sequence[str],
    preferred_times: Sequence[str] = (),
    subjects: Optional[Sequence[str]] = None,
    rng: Optional[np.random.Generator] = None,
) -> List[DaySchedule]:
    """
    Spread `target_hours` evenly over the available days.

    Each day is filled greedily with 1.5-2.5h blocks; once less than 2h remain
    the exact remainder becomes the last block, and anything under 0.5h is
    dropped. Non-finite or non-positive targets give empty days. No balancing
    of subjects across days is attempted.
    """

    if not available_days or not math.isfinite(target_hours) or target_hours <= 0:
        return [DaySchedule(day=day, blocks=()) for day in available_days]

    if rng is None:
        rng = make_rng()
    time_slots = [slot for slot in preferred_times if slot] or list(DEFAULT_TIME_SLOTS)
    subject_pool = [s for s in (subjects or ()) if s] or list(SUBJECT_CATALOG)

    per_day = target_hours / len(available_days)
    return [_fill_day(day, per_day, time_slots, subject_pool, rng) for day in available_days]
