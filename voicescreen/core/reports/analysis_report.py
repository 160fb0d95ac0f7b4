"""
Analysis Report Generator

Renders an AnalysisResult into the structure the client displays:
- Detection headline and message
- Overall score with colour band
- Risk tier and confidence
- Biomarker breakdown (weight, value, band, description)
- Speech-pattern indicators
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List

from voicescreen.core.analysis.base import AnalysisResult
from voicescreen.utils import ReportGenerationError, get_logger
from .labels import (
    DETECTION_HEADLINES,
    DISCLAIMER,
    INDICATOR_LABELS,
    RISK_LABELS,
    label_for,
)

logger = get_logger(__name__)

# Display bands for any 0-100 value
GOOD_FROM = 85
FAIR_FROM = 70

BAND_COLORS = {
    "good": "#22C55E",   # Green
    "fair": "#EAB308",   # Yellow
    "poor": "#EF4444",   # Red
}


def score_band(value: int) -> str:
    if value >= GOOD_FROM:
        return "good"
    if value >= FAIR_FROM:
        return "fair"
    return "poor"


@dataclass
class ReportRow:
    """One bar in the biomarker or indicator panel."""
    key: str
    label: str
    value: int
    band: str
    weight_percent: float = 0.0
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        row = {
            "key": self.key,
            "label": self.label,
            "value": self.value,
            "band": self.band,
            "color": BAND_COLORS[self.band],
        }
        if self.weight_percent:
            row["weight_percent"] = self.weight_percent
        if self.description:
            row["description"] = self.description
        return row


@dataclass
class AnalysisReport:
    """Data container for a rendered report."""
    analysis_id: str
    generated_at: datetime
    headline: str
    message: str
    score: int
    score_band: str
    risk: str
    risk_label: str
    confidence: int
    detected: bool
    biomarkers: List[ReportRow] = field(default_factory=list)
    indicators: List[ReportRow] = field(default_factory=list)
    disclaimer: str = DISCLAIMER

    def to_dict(self) -> Dict[str, Any]:
        return {
            "analysis_id": self.analysis_id,
            "generated_at": self.generated_at.isoformat(),
            "headline": self.headline,
            "message": self.message,
            "score": self.score,
            "score_band": self.score_band,
            "score_color": BAND_COLORS[self.score_band],
            "risk": self.risk,
            "risk_label": self.risk_label,
            "confidence": self.confidence,
            "detected": self.detected,
            "biomarkers": [r.to_dict() for r in self.biomarkers],
            "indicators": [r.to_dict() for r in self.indicators],
            "disclaimer": self.disclaimer,
        }

    def to_text(self) -> str:
        lines = [
            self.headline,
            self.message,
            "",
            f"Overall score: {self.score}/100 ({self.score_band})",
            f"Risk level: {self.risk_label}",
            f"Analysis confidence: {self.confidence}%",
            "",
            "Voice biomarkers:",
        ]
        for row in self.biomarkers:
            lines.append(
                f"  {row.label:<26} {row.value:>3}%  weight {row.weight_percent:g}%  "
                f"- {row.description}"
            )
        lines.append("")
        lines.append("Speech pattern analysis:")
        for row in self.indicators:
            lines.append(f"  {row.label:<26} {row.value:>3}%")
        lines.append("")
        lines.append(self.disclaimer)
        return "\n".join(lines)


class AnalysisReportGenerator:
    """Builds AnalysisReports; stateless apart from a render counter."""

    FORMATS = ("json", "text")

    def __init__(self):
        self._report_count = 0

    def generate(self, result: AnalysisResult) -> AnalysisReport:
        headline, message = DETECTION_HEADLINES[result.detected]

        biomarker_rows = [
            ReportRow(
                key=b.name.value,
                label=label_for(b.name.value),
                value=b.value,
                band=score_band(b.value),
                weight_percent=round(b.weight * 100, 1),
                description=label_for(b.description),
            )
            for b in result.biomarkers
        ]

        indicator_rows = [
            ReportRow(
                key=name,
                label=INDICATOR_LABELS.get(name, label_for(name)),
                value=value,
                band=score_band(value),
            )
            for name, value in result.indicators.to_dict().items()
        ]

        self._report_count += 1
        logger.debug(f"Report generated for analysis {result.analysis_id}")

        return AnalysisReport(
            analysis_id=result.analysis_id,
            generated_at=datetime.now(timezone.utc),
            headline=headline,
            message=message,
            score=result.score,
            score_band=score_band(result.score),
            risk=result.risk.value,
            risk_label=RISK_LABELS[result.risk],
            confidence=result.confidence,
            detected=result.detected,
            biomarkers=biomarker_rows,
            indicators=indicator_rows,
        )

    def render(self, result: AnalysisResult, fmt: str = "json") -> Any:
        """Render as a JSON-ready dict or as plain text."""
        if fmt not in self.FORMATS:
            raise ReportGenerationError(
                f"Unsupported report format: {fmt}. Valid: {list(self.FORMATS)}",
                report_format=fmt,
            )
        report = self.generate(result)
        return report.to_dict() if fmt == "json" else report.to_text()
