# ABOUTME: Applies the outcome scorer to a batch of named student metrics.
# ABOUTME: Aggregates pass statistics, per-record advice, and attendance tier breakdowns.

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence

import numpy as np
import pandas as pd

from src.common.config import make_rng
from src.common.schemas import NamedStudentMetric, PerformanceTier, PredictionResult

from .scorer import score

HIGH_CONFIDENCE = 0.8
LOW_HOURS = 5.0
LOW_ATTENDANCE = 70.0


class Recommendation(str, Enum):
    MAINTAIN = "Excellent! Maintain current study habits"
    IMPROVE_SLIGHTLY = "Good progress. Consider slight improvements in study hours or attendance"
    INCREASE_HOURS = "Increase study hours to at least 5 per week"
    IMPROVE_ATTENDANCE = "Improve class attendance to at least 70%"
    SEEK_SUPPORT = "Seek academic support and tutoring"


@dataclass(frozen=True)
class BatchPrediction:
    name: str
    hours: float
    attendance: float
    passed: bool
    confidence: float
    recommendation: Recommendation

    @property
    def label(self) -> str:
        return "Pass" if self.passed else "Fail"


@dataclass(frozen=True)
class BatchSummary:
    total: int
    pass_count: int
    fail_count: int
    pass_rate: float
    avg_confidence: float
    avg_hours: float
    avg_attendance: float


@dataclass(frozen=True)
class TierBreakdown:
    tier: PerformanceTier
    count: int
    pass_rate: float


@dataclass(frozen=True)
class BatchResult:
    predictions: List[BatchPrediction]
    summary: BatchSummary

    def to_frame(self) -> pd.DataFrame:
        """One row per prediction, in input order."""
        rows = [
            {
                "name": p.name,
                "hours": p.hours,
                "attendance": p.attendance,
                "prediction": p.label,
                "confidence": p.confidence,
                "recommendation": p.recommendation.value,
            }
            for p in self.predictions
        ]
        return pd.DataFrame(
            rows,
            columns=["name", "hours", "attendance", "prediction", "confidence", "recommendation"],
        )


def recommend(result: PredictionResult, hours: float, attendance: float) -> Recommendation:
    if result.passed:
        if result.confidence > HIGH_CONFIDENCE:
            return Recommendation.MAINTAIN
        return Recommendation.IMPROVE_SLIGHTLY
    if hours < LOW_HOURS:
        return Recommendation.INCREASE_HOURS
    if attendance < LOW_ATTENDANCE:
        return Recommendation.IMPROVE_ATTENDANCE
    return Recommendation.SEEK_SUPPORT


def summarize(predictions: Sequence[BatchPrediction]) -> BatchSummary:
    total = len(predictions)
    if total == 0:
        return BatchSummary(0, 0, 0, 0.0, 0.0, 0.0, 0.0)

    pass_count = sum(1 for p in predictions if p.passed)
    return BatchSummary(
        total=total,
        pass_count=pass_count,
        fail_count=total - pass_count,
        pass_rate=pass_count / total,
        avg_confidence=sum(p.confidence for p in predictions) / total,
        avg_hours=sum(p.hours for p in predictions) / total,
        avg_attendance=sum(p.attendance for p in predictions) / total,
    )


def batch_score(
    metrics: Iterable[NamedStudentMetric],
    rng: Optional[np.random.Generator] = None,
) -> BatchResult:
    """
    Score every metric in order and aggregate the batch.

    A single generator is created for the call (unless one is given) and
    consumed in input order, so a seeded batch always yields the same output.
    """
    if rng is None:
        rng = make_rng()

    predictions: List[BatchPrediction] = []
    for row in metrics:
        result = score(row.metric, rng=rng)
        predictions.append(
            BatchPrediction(
                name=row.name,
                hours=row.hours,
                attendance=row.attendance,
                passed=result.passed,
                confidence=result.confidence,
                recommendation=recommend(result, row.hours, row.attendance),
            )
        )

    return BatchResult(predictions=predictions, summary=summarize(predictions))


def performance_breakdown(predictions: Sequence[BatchPrediction]) -> List[TierBreakdown]:
    """Count and pass rate per attendance tier; every tier is always present."""
    breakdown: List[TierBreakdown] = []
    for tier in PerformanceTier:
        members = [p for p in predictions if PerformanceTier.for_attendance(p.attendance) is tier]
        count = len(members)
        pass_rate = (sum(1 for p in members if p.passed) / count) if count else 0.0
        breakdown.append(TierBreakdown(tier=tier, count=count, pass_rate=pass_rate))
    return breakdown
