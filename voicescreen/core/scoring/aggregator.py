"""
Score Aggregator

Weighted composite of the biomarker catalog.
"""
from __future__ import annotations

import math
from typing import Sequence

from voicescreen.utils import PreconditionError
from .base import Biomarker
from .generators import round_half_up


def calculate_weighted_score(biomarkers: Sequence[Biomarker]) -> int:
    """
    Composite score: ``round(sum(value * weight) / sum(weight))``.

    With the fixed catalog the weights sum to 1.0, so this is the rounded
    weighted sum. A weighted mean of values in [0, 100] stays in [0, 100].

    Raises:
        PreconditionError: empty catalog or non-positive total weight.
    """
    if not biomarkers:
        raise PreconditionError(
            "Cannot aggregate an empty biomarker catalog",
            operation="calculate_weighted_score",
        )

    total_weight = math.fsum(b.weight for b in biomarkers)
    if total_weight <= 0:
        raise PreconditionError(
            "Biomarker weights must sum to a positive value",
            operation="calculate_weighted_score",
            details={"total_weight": total_weight},
        )

    weighted_sum = math.fsum(b.value * b.weight for b in biomarkers)
    return round_half_up(weighted_sum / total_weight)
