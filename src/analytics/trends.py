# ABOUTME: Classifies per-student and per-class trends from weekly observation history.
# ABOUTME: Produces week records, improvement scores, weekly summaries, and risk lists.

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Sequence, Tuple

import pandas as pd

from src.common.schemas import TrendClassification, WeeklyObservation

WEEKLY_HORIZON = 4
TOP_N = 3

PASS_HOURS = 5.0
PASS_ATTENDANCE = 75.0

HOURS_DELTA = 1.0
ATTENDANCE_DELTA = 5.0
CONFIDENCE_DELTA = 0.1


@dataclass(frozen=True)
class WeekData:
    week: int
    study_hours: float
    attendance: float
    predicted_pass: bool
    confidence: float


@dataclass(frozen=True)
class StudentTrendReport:
    student_name: str
    weekly_data: List[WeekData]
    overall_trend: TrendClassification
    improvement_score: float


@dataclass(frozen=True)
class WeekSummary:
    week: int
    avg_study_hours: float
    avg_attendance: float
    pass_rate: float
    total_predictions: int


@dataclass(frozen=True)
class ClassTrendReport:
    total_students: int
    weekly_summary: List[WeekSummary]
    top_performers: List[str]
    at_risk_students: List[str]
    average_improvement: float


def week_passes(hours: float, attendance: float) -> bool:
    return hours >= PASS_HOURS and attendance >= PASS_ATTENDANCE


def week_confidence(hours: float, attendance: float) -> float:
    return min(1.0, hours * 0.1 + attendance * 0.01)


def _to_week_data(obs: WeeklyObservation) -> WeekData:
    return WeekData(
        week=obs.week,
        study_hours=obs.hours,
        attendance=obs.attendance,
        predicted_pass=week_passes(obs.hours, obs.attendance),
        confidence=week_confidence(obs.hours, obs.attendance),
    )


def classify_trend(weekly_data: Sequence[WeekData]) -> TrendClassification:
    """
    Compare the first and last week.

    Raw deltas decide when both metrics moved clearly in the same direction;
    otherwise the derived confidence has to move by more than 0.1.
    """

    if len(weekly_data) < 2:
        return TrendClassification.STABLE

    first, last = weekly_data[0], weekly_data[-1]
    hours_delta = last.study_hours - first.study_hours
    attendance_delta = last.attendance - first.attendance

    if hours_delta > HOURS_DELTA and attendance_delta > ATTENDANCE_DELTA:
        return TrendClassification.IMPROVING
    if hours_delta < -HOURS_DELTA and attendance_delta < -ATTENDANCE_DELTA:
        return TrendClassification.DECLINING

    if last.confidence > first.confidence + CONFIDENCE_DELTA:
        return TrendClassification.IMPROVING
    if last.confidence < first.confidence - CONFIDENCE_DELTA:
        return TrendClassification.DECLINING
    return TrendClassification.STABLE


def improvement_score(weekly_data: Sequence[WeekData]) -> float:
    if len(weekly_data) < 2:
        return 0.0

    first, last = weekly_data[0], weekly_data[-1]
    raw = (last.study_hours - first.study_hours) * 0.6 + (last.attendance - first.attendance) * 0.4
    return max(0.0, min(10.0, raw))


def student_trend(student_name: str, history: Sequence[WeeklyObservation]) -> StudentTrendReport:
    ordered = sorted(history, key=lambda obs: obs.week)
    weekly_data = [_to_week_data(obs) for obs in ordered]
    return StudentTrendReport(
        student_name=student_name,
        weekly_data=weekly_data,
        overall_trend=classify_trend(weekly_data),
        improvement_score=improvement_score(weekly_data),
    )


def _observation_frame(histories: Mapping[str, Sequence[WeeklyObservation]]) -> pd.DataFrame:
    """Flatten histories into one row per observation inside the weekly horizon."""
    rows = []
    for name, history in histories.items():
        for obs in history:
            if not 1 <= obs.week <= WEEKLY_HORIZON:
                continue
            rows.append(
                {
                    "student": name,
                    "week": int(obs.week),
                    "hours": float(obs.hours),
                    "attendance": float(obs.attendance),
                    "passed": week_passes(obs.hours, obs.attendance),
                }
            )
    return pd.DataFrame(rows, columns=["student", "week", "hours", "attendance", "passed"])


def _weekly_summaries(frame: pd.DataFrame) -> List[WeekSummary]:
    if frame.empty:
        return [WeekSummary(week, 0.0, 0.0, 0.0, 0) for week in range(1, WEEKLY_HORIZON + 1)]

    grouped = (
        frame.groupby("week")
        .agg(
            avg_study_hours=("hours", "mean"),
            avg_attendance=("attendance", "mean"),
            pass_rate=("passed", "mean"),
            total_predictions=("student", "count"),
        )
        .reindex(range(1, WEEKLY_HORIZON + 1))
    )

    summaries: List[WeekSummary] = []
    for week, row in grouped.iterrows():
        observed = int(row["total_predictions"]) if pd.notna(row["total_predictions"]) else 0
        summaries.append(
            WeekSummary(
                week=int(week),
                avg_study_hours=float(row["avg_study_hours"]) if observed else 0.0,
                avg_attendance=float(row["avg_attendance"]) if observed else 0.0,
                pass_rate=float(row["pass_rate"]) if observed else 0.0,
                total_predictions=observed,
            )
        )
    return summaries


def _ranked_students(frame: pd.DataFrame, names: Sequence[str]) -> List[Tuple[str, float]]:
    """Cumulative weighted score per observed student, best first; ties keep input order."""
    if frame.empty:
        return []

    frame = frame.assign(weighted=frame["hours"] * 0.5 + frame["attendance"] * 0.5)
    totals: Dict[str, float] = frame.groupby("student", sort=False)["weighted"].sum().to_dict()
    ordered = [(name, float(totals[name])) for name in names if name in totals]
    return sorted(ordered, key=lambda pair: pair[1], reverse=True)


def average_improvement(summaries: Sequence[WeekSummary]) -> float:
    if len(summaries) < 2:
        return 0.0

    first, last = summaries[0], summaries[-1]
    hours_improvement = last.avg_study_hours - first.avg_study_hours
    attendance_improvement = last.avg_attendance - first.avg_attendance
    return (hours_improvement + attendance_improvement) / 2.0


def class_trend(histories: Mapping[str, Sequence[WeeklyObservation]]) -> ClassTrendReport:
    """
    Aggregate a class over the fixed four-week horizon.

    Students with shorter histories contribute to fewer weeks. With fewer than
    six students the top performer and at-risk lists can overlap.
    """

    frame = _observation_frame(histories)
    summaries = _weekly_summaries(frame)
    ranked = _ranked_students(frame, list(histories.keys()))

    top_performers = [name for name, _ in ranked[:TOP_N]]
    at_risk = [name for name, _ in reversed(ranked)][:TOP_N]

    return ClassTrendReport(
        total_students=len(histories),
        weekly_summary=summaries,
        top_performers=top_performers,
        at_risk_students=at_risk,
        average_improvement=average_improvement(summaries),
    )
