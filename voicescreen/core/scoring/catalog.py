"""
Biomarker Catalog

The fixed, ordered list of voice biomarkers with their weights and the
bounds their synthetic values are drawn from. Changing a weight or a bound
here is a configuration change of the whole system.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from voicescreen.utils import PreconditionError, get_logger
from .base import Biomarker, BiomarkerKind
from .generators import SCORE_MAX, SCORE_MIN, UniformSource, resolve_rng, weighted_random

logger = get_logger(__name__)


@dataclass(frozen=True)
class BiomarkerSpec:
    """Static definition of one catalog entry."""
    kind: BiomarkerKind
    weight: float
    low: int
    high: int


# ── Catalog: kind → weight, value bounds ─────────────────────────────────────
BIOMARKER_SPECS: Tuple[BiomarkerSpec, ...] = (
    BiomarkerSpec(BiomarkerKind.PHONEME_ARTICULATION,    0.15, 65, 95),
    BiomarkerSpec(BiomarkerKind.PAUSE_FREQUENCY,         0.12, 60, 90),
    BiomarkerSpec(BiomarkerKind.LEXICAL_DIVERSITY,       0.13, 70, 95),
    BiomarkerSpec(BiomarkerKind.SPEECH_RATE_CONSISTENCY, 0.10, 65, 90),
    BiomarkerSpec(BiomarkerKind.SEMANTIC_COHERENCE,      0.18, 60, 95),
    BiomarkerSpec(BiomarkerKind.PROSODIC_VARIATION,      0.12, 70, 90),
    BiomarkerSpec(BiomarkerKind.VOICE_TREMOR,            0.10, 75, 95),
    BiomarkerSpec(BiomarkerKind.WORD_FINDING_DELAY,      0.10, 60, 90),
)


def total_weight() -> float:
    return math.fsum(spec.weight for spec in BIOMARKER_SPECS)


def build_catalog(rng: Optional[UniformSource] = None) -> Tuple[Biomarker, ...]:
    """
    Populate every biomarker with a high-skewed value from its bounds.

    Args:
        rng: Uniform source shared by all draws (defaults to the module RNG).

    Returns:
        The 8 biomarkers in catalog order.
    """
    source = resolve_rng(rng)
    catalog = tuple(
        Biomarker(
            name=spec.kind,
            value=weighted_random(spec.low, spec.high, source),
            weight=spec.weight,
            description=spec.kind.description_key,
        )
        for spec in BIOMARKER_SPECS
    )
    logger.debug(
        "Catalog built: " + ", ".join(f"{b.name.value}={b.value}" for b in catalog)
    )
    return catalog


def catalog_with_values(values: Sequence[int]) -> Tuple[Biomarker, ...]:
    """
    Build the catalog with caller-chosen values instead of random draws.

    Used for deterministic scenarios; the weights and order stay fixed.
    """
    if len(values) != len(BIOMARKER_SPECS):
        raise PreconditionError(
            f"Expected {len(BIOMARKER_SPECS)} biomarker values, got {len(values)}",
            operation="catalog_with_values",
        )
    for spec, value in zip(BIOMARKER_SPECS, values):
        if not SCORE_MIN <= value <= SCORE_MAX:
            raise PreconditionError(
                f"Biomarker value out of range: {spec.kind.value}={value}",
                operation="catalog_with_values",
                details={"biomarker": spec.kind.value, "value": value},
            )

    return tuple(
        Biomarker(
            name=spec.kind,
            value=int(value),
            weight=spec.weight,
            description=spec.kind.description_key,
        )
        for spec, value in zip(BIOMARKER_SPECS, values)
    )
