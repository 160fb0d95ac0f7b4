"""
Analysis Layer - Base Types

The immutable result of one analysis and the state snapshot an
orchestrator publishes to its readers.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from voicescreen.core.scoring.base import Biomarker, IndicatorSet, RiskLevel


@dataclass(frozen=True)
class AnalysisResult:
    """
    Everything one analysis produces.

    Created once per invocation and never modified; the next invocation's
    result replaces it wholesale.
    """
    score: int                          # weighted composite, 0-100
    risk: RiskLevel
    confidence: int                     # 80-98
    indicators: IndicatorSet
    biomarkers: Tuple[Biomarker, ...]
    detected: bool
    analysis_id: str = ""
    created_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "analysis_id": self.analysis_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "score": self.score,
            "risk": self.risk.value,
            "confidence": self.confidence,
            "detected": self.detected,
            "indicators": self.indicators.to_dict(),
            "biomarkers": [b.to_dict() for b in self.biomarkers],
        }


@dataclass(frozen=True)
class AnalysisState:
    """
    Snapshot of an orchestrator, replaced as a whole on every transition.

    ``result`` keeps the last completed analysis even while a newer one is
    processing; readers that must never see both use ``visible_result``.
    """
    processing: bool = False
    result: Optional[AnalysisResult] = None
    analysis_id: Optional[str] = None
    completed_at: Optional[datetime] = None

    @property
    def visible_result(self) -> Optional[AnalysisResult]:
        return None if self.processing else self.result
