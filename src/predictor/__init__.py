# ABOUTME: Exposes the outcome scorer and batch evaluator entrypoints.
# ABOUTME: Groups banded scoring, batch aggregation, and tier breakdowns.

from .scorer import score, base_score
from .batch import batch_score, performance_breakdown, Recommendation

__all__ = [
    "score",
    "base_score",
    "batch_score",
    "performance_breakdown",
    "Recommendation",
]
