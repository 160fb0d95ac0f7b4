"""
Report Generation Module

Turns an AnalysisResult into a display-ready report (dict or plain text).
"""
from .analysis_report import AnalysisReportGenerator, AnalysisReport, ReportRow, score_band
from .labels import label_for

__all__ = [
    "AnalysisReportGenerator",
    "AnalysisReport",
    "ReportRow",
    "score_band",
    "label_for",
]
