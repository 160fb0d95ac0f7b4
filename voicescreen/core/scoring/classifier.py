"""
Risk Classifier

Maps the composite score to a risk tier and the detection flag, and draws
the (score-independent) confidence value.

The detection threshold sits inside the Moderate band on purpose: a
Moderate result between 70 and 77 is flagged, one between 78 and 84 is not.
"""
from __future__ import annotations

from typing import Optional

from .base import RiskLevel
from .generators import UniformSource, resolve_rng, round_half_up

HIGH_RISK_BELOW = 70
LOW_RISK_FROM = 85
DETECTION_BELOW = 78

CONFIDENCE_CENTER = 85
CONFIDENCE_JITTER = 10          # full width, i.e. ±5
CONFIDENCE_MIN = 80
CONFIDENCE_MAX = 98


def classify_risk(score: int) -> RiskLevel:
    if score < HIGH_RISK_BELOW:
        return RiskLevel.HIGH
    if score < LOW_RISK_FROM:
        return RiskLevel.MODERATE
    return RiskLevel.LOW


def is_detected(score: int) -> bool:
    return score < DETECTION_BELOW


def generate_confidence(rng: Optional[UniformSource] = None) -> int:
    """Confidence centred on 85 with ±5 uniform jitter, clamped to [80, 98]."""
    u = float(resolve_rng(rng).random())
    raw = CONFIDENCE_CENTER + (u * CONFIDENCE_JITTER - CONFIDENCE_JITTER / 2)
    return min(CONFIDENCE_MAX, max(CONFIDENCE_MIN, round_half_up(raw)))
