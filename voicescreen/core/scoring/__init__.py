"""
Scoring Engine

Synthetic voice-biomarker scoring: generators → catalog → aggregator →
classifier, with indicators derived from the composite score.

Usage:
    from voicescreen.core.scoring import build_catalog, calculate_weighted_score, classify_risk

    catalog = build_catalog()
    score = calculate_weighted_score(catalog)
    risk = classify_risk(score)
"""
from .base import Biomarker, BiomarkerKind, IndicatorSet, RiskLevel
from .generators import correlated_random, weighted_random, round_half_up
from .catalog import BIOMARKER_SPECS, BiomarkerSpec, build_catalog, catalog_with_values, total_weight
from .aggregator import calculate_weighted_score
from .classifier import classify_risk, is_detected, generate_confidence
from .indicators import INDICATOR_SPREADS, synthesize_indicators

__all__ = [
    "Biomarker",
    "BiomarkerKind",
    "IndicatorSet",
    "RiskLevel",
    "weighted_random",
    "correlated_random",
    "round_half_up",
    "BIOMARKER_SPECS",
    "BiomarkerSpec",
    "build_catalog",
    "catalog_with_values",
    "total_weight",
    "calculate_weighted_score",
    "classify_risk",
    "is_detected",
    "generate_confidence",
    "INDICATOR_SPREADS",
    "synthesize_indicators",
]
