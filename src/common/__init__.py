# ABOUTME: Makes the shared common package importable across engines.
# ABOUTME: Re-exports schema types and config helpers for convenience.

from .schemas import (
    NamedStudentMetric,
    PerformanceTier,
    PredictionResult,
    StudentMetric,
    TrendClassification,
    WeeklyObservation,
)
from .config import load_config, make_rng

__all__ = [
    "NamedStudentMetric",
    "PerformanceTier",
    "PredictionResult",
    "StudentMetric",
    "TrendClassification",
    "WeeklyObservation",
    "load_config",
    "make_rng",
]
