"""
Display labels for report keys (English).

Keys are the identifiers the scoring engine emits: biomarker kinds, their
``*_desc`` description keys, indicator field names and risk tiers.
"""
from typing import Dict

from voicescreen.core.scoring.base import RiskLevel

BIOMARKER_LABELS: Dict[str, str] = {
    "phoneme_articulation": "Phoneme Articulation",
    "pause_frequency": "Pause Frequency",
    "lexical_diversity": "Lexical Diversity",
    "speech_rate_consistency": "Speech Rate Consistency",
    "semantic_coherence": "Semantic Coherence",
    "prosodic_variation": "Prosodic Variation",
    "voice_tremor": "Voice Tremor",
    "word_finding_delay": "Word-Finding Delay",
}

BIOMARKER_DESCRIPTIONS: Dict[str, str] = {
    "phoneme_articulation_desc": "Precision of individual speech sounds",
    "pause_frequency_desc": "How often and how long speech is interrupted",
    "lexical_diversity_desc": "Variety of vocabulary used",
    "speech_rate_consistency_desc": "Steadiness of speaking tempo",
    "semantic_coherence_desc": "Logical flow of ideas between sentences",
    "prosodic_variation_desc": "Natural rise and fall of pitch and stress",
    "voice_tremor_desc": "Stability of the voice (higher is steadier)",
    "word_finding_delay_desc": "Hesitation before retrieving words (higher is quicker)",
}

INDICATOR_LABELS: Dict[str, str] = {
    "speech_clarity": "Speech Clarity",
    "word_recall": "Word Recall",
    "sentence_structure": "Sentence Structure",
    "pause_patterns": "Pause Patterns",
    "prosody": "Prosody",
    "articulation_rate": "Articulation Rate",
    "voice_quality": "Voice Quality",
    "semantic_coherence": "Semantic Coherence",
}

RISK_LABELS: Dict[RiskLevel, str] = {
    RiskLevel.LOW: "Low Risk",
    RiskLevel.MODERATE: "Moderate Risk - Follow-up Suggested",
    RiskLevel.HIGH: "High Risk - Consult a Specialist",
}

DETECTION_HEADLINES = {
    True: (
        "Cognitive Decline Markers Detected",
        "The voice sample shows patterns associated with early cognitive decline. "
        "Please discuss these results with a healthcare professional.",
    ),
    False: (
        "No Cognitive Decline Markers Detected",
        "The voice sample does not show significant patterns associated with "
        "cognitive decline.",
    ),
}

DISCLAIMER = (
    "Demonstration only. Scores are simulated and are not a medical diagnosis."
)


def label_for(key: str) -> str:
    """Resolve any report key; unknown keys fall back to a title-cased key."""
    for table in (BIOMARKER_LABELS, BIOMARKER_DESCRIPTIONS, INDICATOR_LABELS):
        if key in table:
            return table[key]
    return key.replace("_", " ").title()
