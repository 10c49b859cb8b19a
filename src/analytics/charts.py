# ABOUTME: Formats trend reports as chart-ready JSON series for dashboards.
# ABOUTME: Mirrors the data/metadata envelope used by the visualization exporters.

from typing import Dict

from .trends import ClassTrendReport, StudentTrendReport, WEEKLY_HORIZON


def export_student_chart(report: StudentTrendReport) -> Dict:
    """
    Format a student trend as one point per week.

    Returns:
        Dict with `data` rows and `metadata` describing the series.
    """
    data = []
    for week in report.weekly_data:
        data.append({
            'week': int(week.week),
            'study_hours': float(week.study_hours),
            'attendance': float(week.attendance),
            'confidence': round(float(week.confidence), 4),
            'predicted_pass': bool(week.predicted_pass),
        })

    return {
        'data': data,
        'metadata': {
            'student_name': report.student_name,
            'overall_trend': report.overall_trend.value,
            'improvement_score': round(report.improvement_score, 2),
            'total_weeks': len(data),
            'series': ['study_hours', 'attendance', 'confidence'],
        }
    }


def export_class_chart(report: ClassTrendReport) -> Dict:
    """Format class weekly summaries plus the ranked student lists."""
    data = []
    for summary in report.weekly_summary:
        data.append({
            'week': int(summary.week),
            'avg_study_hours': round(float(summary.avg_study_hours), 2),
            'avg_attendance': round(float(summary.avg_attendance), 2),
            'pass_rate_pct': round(float(summary.pass_rate) * 100, 1),
            'total_predictions': int(summary.total_predictions),
        })

    return {
        'data': data,
        'metadata': {
            'total_students': report.total_students,
            'horizon_weeks': WEEKLY_HORIZON,
            'top_performers': list(report.top_performers),
            'at_risk_students': list(report.at_risk_students),
            'average_improvement': round(report.average_improvement, 2),
        }
    }
