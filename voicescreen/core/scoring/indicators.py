"""
Indicator Synthesizer

Display indicators perturbed around the composite score, so the detailed
speech-pattern panel never contradicts the headline number.
"""
from __future__ import annotations

from typing import Dict, Optional

from voicescreen.utils import get_logger
from .base import IndicatorSet
from .generators import UniformSource, correlated_random, resolve_rng

logger = get_logger(__name__)

# Maximum deviation of each indicator from the composite score
INDICATOR_SPREADS: Dict[str, int] = {
    "speech_clarity":     8,
    "word_recall":        15,
    "sentence_structure": 12,
    "pause_patterns":     8,
    "prosody":            10,
    "articulation_rate":  7,
    "voice_quality":      9,
    "semantic_coherence": 14,
}


def synthesize_indicators(score: int, rng: Optional[UniformSource] = None) -> IndicatorSet:
    source = resolve_rng(rng)
    values = {
        name: correlated_random(score, spread, source)
        for name, spread in INDICATOR_SPREADS.items()
    }
    logger.debug(f"Indicators around score {score}: {values}")
    return IndicatorSet(**values)
