"""
Scoring Engine - Base Types

Data contracts produced by the scoring engine. All of them are frozen:
a new analysis replaces them, nothing mutates them.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict


class BiomarkerKind(str, Enum):
    """The closed set of synthetic voice biomarkers, in catalog order."""
    PHONEME_ARTICULATION    = "phoneme_articulation"
    PAUSE_FREQUENCY         = "pause_frequency"
    LEXICAL_DIVERSITY       = "lexical_diversity"
    SPEECH_RATE_CONSISTENCY = "speech_rate_consistency"
    SEMANTIC_COHERENCE      = "semantic_coherence"
    PROSODIC_VARIATION      = "prosodic_variation"
    VOICE_TREMOR            = "voice_tremor"
    WORD_FINDING_DELAY      = "word_finding_delay"

    @property
    def description_key(self) -> str:
        return f"{self.value}_desc"


class RiskLevel(str, Enum):
    """
    Risk tier derived from the composite score.

    HIGH      – score below 70
    MODERATE  – 70 up to (not including) 85
    LOW       – 85 and above
    """
    HIGH     = "High"
    MODERATE = "Moderate"
    LOW      = "Low"


@dataclass(frozen=True)
class Biomarker:
    """One named, weighted sub-score of the composite."""
    name: BiomarkerKind
    value: int              # 0-100
    weight: float           # fixed per kind; all weights sum to 1.0
    description: str        # label key, resolved by the report layer

    def to_dict(self) -> Dict:
        return {
            "name": self.name.value,
            "value": self.value,
            "weight": self.weight,
            "description": self.description,
        }


@dataclass(frozen=True)
class IndicatorSet:
    """Display indicators, each correlated with the composite score."""
    speech_clarity: int
    word_recall: int
    sentence_structure: int
    pause_patterns: int
    prosody: int
    articulation_rate: int
    voice_quality: int
    semantic_coherence: int

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)
