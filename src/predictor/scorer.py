# ABOUTME: Scores a student's pass/fail outcome from study hours and attendance.
# ABOUTME: Sums banded contributions and adds a bounded, injectable noise term.

from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np

from src.common.config import make_rng
from src.common.schemas import PredictionResult, StudentMetric

NOISE_BOUND = 0.1
PASS_THRESHOLD = 0.5

# (minimum value, contribution), checked top to bottom.
HOURS_BANDS: Sequence[Tuple[float, float]] = ((8.0, 0.60), (6.0, 0.50), (4.0, 0.30))
ATTENDANCE_BANDS: Sequence[Tuple[float, float]] = ((90.0, 0.40), (80.0, 0.35), (70.0, 0.25))
FLOOR_CONTRIBUTION = 0.10


def _banded(value: float, bands: Sequence[Tuple[float, float]]) -> float:
    for minimum, contribution in bands:
        if value >= minimum:
            return contribution
    return FLOOR_CONTRIBUTION


def hours_contribution(hours: float) -> float:
    return _banded(hours, HOURS_BANDS)


def attendance_contribution(attendance: float) -> float:
    return _banded(attendance, ATTENDANCE_BANDS)


def base_score(metric: StudentMetric) -> float:
    """Deterministic part of the score, before noise and clamping."""
    return hours_contribution(metric.hours) + attendance_contribution(metric.attendance)


def score(metric: StudentMetric, rng: Optional[np.random.Generator] = None) -> PredictionResult:
    """
    Predict pass/fail for a single metric.

    Inputs are not validated: out-of-range hours or attendance simply fall into
    whichever band applies. One uniform draw in [-NOISE_BOUND, NOISE_BOUND] is
    taken from `rng`; when no generator is supplied a fresh one is created for
    this call only.
    """

    if rng is None:
        rng = make_rng()

    base = base_score(metric)
    noise = float(rng.uniform(-NOISE_BOUND, NOISE_BOUND))
    value = min(1.0, max(0.0, base + noise))

    passed = value >= PASS_THRESHOLD
    confidence = value if passed else 1.0 - value
    return PredictionResult(passed=passed, confidence=confidence, base_score=base, noise=noise)
