# ABOUTME: Exposes the trend analyzer and chart exporters.
# ABOUTME: Groups per-student trends, class summaries, and dashboard series.

from .trends import student_trend, class_trend, StudentTrendReport, ClassTrendReport
from .charts import export_student_chart, export_class_chart

__all__ = [
    "student_trend",
    "class_trend",
    "StudentTrendReport",
    "ClassTrendReport",
    "export_student_chart",
    "export_class_chart",
]
