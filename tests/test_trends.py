# ABOUTME: Tests student trend classification and class-level weekly aggregation.
# ABOUTME: Uses the five-student mock class with known four-week histories.

import pytest

from src.analytics.trends import (
    class_trend,
    classify_trend,
    student_trend,
    week_confidence,
    week_passes,
)
from src.common.schemas import TrendClassification, WeeklyObservation


def _history(*pairs):
    return [WeeklyObservation(week=i + 1, hours=h, attendance=a) for i, (h, a) in enumerate(pairs)]


MOCK_CLASS = {
    "Denis Lemayian": _history((4.5, 70), (5.0, 75), (5.5, 80), (6.0, 85)),
    "Saitoti Smith": _history((6.0, 85), (6.5, 88), (7.0, 90), (7.5, 92)),
    "Kukutia Johnson": _history((3.0, 60), (3.5, 65), (4.0, 70), (4.5, 72)),
    "Kirionki Williams": _history((5.5, 78), (5.0, 75), (4.5, 72), (4.0, 68)),
    "David Lemoita": _history((7.0, 88), (7.5, 90), (8.0, 92), (8.5, 94)),
}


def test_week_rules():
    assert week_passes(5.0, 75.0)
    assert not week_passes(4.9, 90.0)
    assert not week_passes(8.0, 74.9)
    assert week_confidence(2.0, 40.0) == pytest.approx(0.6)
    assert week_confidence(4.5, 70.0) == 1.0


def test_steady_improver_is_improving():
    report = student_trend("Denis Lemayian", MOCK_CLASS["Denis Lemayian"])
    assert report.overall_trend is TrendClassification.IMPROVING
    assert report.improvement_score == pytest.approx(6.9)
    assert [w.week for w in report.weekly_data] == [1, 2, 3, 4]
    assert not report.weekly_data[0].predicted_pass
    assert report.weekly_data[-1].predicted_pass


def test_steady_decliner_is_declining_with_zero_improvement():
    report = student_trend("Kirionki Williams", MOCK_CLASS["Kirionki Williams"])
    assert report.overall_trend is TrendClassification.DECLINING
    assert report.improvement_score == 0.0


def test_short_history_is_stable():
    assert student_trend("Solo", _history((6.0, 80))).overall_trend is TrendClassification.STABLE
    empty = student_trend("Nobody", [])
    assert empty.overall_trend is TrendClassification.STABLE
    assert empty.improvement_score == 0.0
    assert empty.weekly_data == []


def test_confidence_change_decides_when_raw_deltas_are_small():
    report = student_trend("Low", _history((2.0, 40.0), (3.0, 50.0)))
    assert report.overall_trend is TrendClassification.IMPROVING

    flat = student_trend("Flat", _history((6.0, 80.0), (6.5, 82.0)))
    assert flat.overall_trend is TrendClassification.STABLE


def test_improvement_score_is_capped():
    report = student_trend("Rocket", _history((1.0, 40.0), (12.0, 95.0)))
    assert report.improvement_score == 10.0


def test_observations_are_ordered_by_week():
    shuffled = [
        WeeklyObservation(week=3, hours=6.0, attendance=85.0),
        WeeklyObservation(week=1, hours=4.0, attendance=70.0),
    ]
    report = student_trend("Shuffled", shuffled)
    assert [w.week for w in report.weekly_data] == [1, 3]
    assert classify_trend(report.weekly_data) is TrendClassification.IMPROVING


def test_class_trend_summaries_cover_four_weeks():
    report = class_trend(MOCK_CLASS)
    assert report.total_students == 5
    assert [s.week for s in report.weekly_summary] == [1, 2, 3, 4]

    first = report.weekly_summary[0]
    assert first.avg_study_hours == pytest.approx(5.2)
    assert first.avg_attendance == pytest.approx(76.2)
    assert first.pass_rate == pytest.approx(0.6)
    assert first.total_predictions == 5
    assert report.average_improvement == pytest.approx(3.45)


def test_class_rankings_allow_overlap_for_small_classes():
    report = class_trend(MOCK_CLASS)
    assert report.top_performers == ["David Lemoita", "Saitoti Smith", "Denis Lemayian"]
    assert report.at_risk_students == ["Kukutia Johnson", "Kirionki Williams", "Denis Lemayian"]
    assert len(report.top_performers) <= 3
    assert len(report.at_risk_students) <= 3


def test_shorter_histories_contribute_to_fewer_weeks():
    histories = {
        "Full": _history((6.0, 80), (6.0, 80), (6.0, 80), (6.0, 80)),
        "Partial": _history((4.0, 70), (4.0, 70)),
    }
    report = class_trend(histories)
    counts = [s.total_predictions for s in report.weekly_summary]
    assert counts == [2, 2, 1, 1]
    assert report.weekly_summary[2].avg_study_hours == pytest.approx(6.0)


def test_empty_class_yields_zeroed_report():
    report = class_trend({})
    assert report.total_students == 0
    assert len(report.weekly_summary) == 4
    assert all(s.total_predictions == 0 and s.pass_rate == 0.0 for s in report.weekly_summary)
    assert report.top_performers == []
    assert report.at_risk_students == []
    assert report.average_improvement == 0.0


def test_larger_class_rankings_do_not_overlap():
    histories = {
        f"S{i}": _history((11.0 - i, 100.0 - 5 * i), (11.0 - i, 100.0 - 5 * i))
        for i in range(1, 8)
    }
    report = class_trend(histories)

    assert report.top_performers == ["S1", "S2", "S3"]
    assert report.at_risk_students == ["S7", "S6", "S5"]
    assert not set(report.top_performers) & set(report.at_risk_students)
