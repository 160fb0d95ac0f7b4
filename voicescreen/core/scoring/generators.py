"""
Random Value Generators

Bounded pseudo-random integers used to populate the synthetic biomarker
catalog and the display indicators. The uniform source is injectable so
callers (and tests) control reproducibility.
"""
from __future__ import annotations

import math
from typing import Optional, Protocol

import numpy as np

from voicescreen.utils import PreconditionError

# Exponent < 1 skews u**k toward 1, i.e. toward the top of the range.
SKEW_EXPONENT = 0.7

SCORE_MIN = 0
SCORE_MAX = 100

_default_rng = np.random.default_rng()


class UniformSource(Protocol):
    """Anything exposing ``random() -> float`` in [0, 1)."""

    def random(self) -> float: ...


def resolve_rng(rng: Optional[UniformSource] = None) -> UniformSource:
    return rng if rng is not None else _default_rng


def round_half_up(value: float) -> int:
    """Round to nearest integer with .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def weighted_random(
    min_value: float,
    max_value: float,
    rng: Optional[UniformSource] = None,
) -> int:
    """
    Random integer in [min_value, max_value], biased toward max_value.

    Computes ``round(min + u**0.7 * (max - min))`` with ``u`` uniform in [0, 1).

    Raises:
        PreconditionError: bounds are not finite or ``min_value >= max_value``.
    """
    if not (math.isfinite(min_value) and math.isfinite(max_value)):
        raise PreconditionError(
            "weighted_random bounds must be finite",
            operation="weighted_random",
            details={"min": min_value, "max": max_value},
        )
    if min_value >= max_value:
        raise PreconditionError(
            "weighted_random requires min < max",
            operation="weighted_random",
            details={"min": min_value, "max": max_value},
        )

    u = float(resolve_rng(rng).random())
    return round_half_up(min_value + (u ** SKEW_EXPONENT) * (max_value - min_value))


def correlated_random(
    base: float,
    spread: float,
    rng: Optional[UniformSource] = None,
) -> int:
    """
    Random integer within ``spread`` of ``base``, clamped to [0, 100].

    Raises:
        PreconditionError: ``base`` outside [0, 100], negative ``spread``,
            or either value not finite.
    """
    if not (math.isfinite(base) and math.isfinite(spread)):
        raise PreconditionError(
            "correlated_random arguments must be finite",
            operation="correlated_random",
            details={"base": base, "spread": spread},
        )
    if not SCORE_MIN <= base <= SCORE_MAX:
        raise PreconditionError(
            f"correlated_random base must lie in [{SCORE_MIN}, {SCORE_MAX}]",
            operation="correlated_random",
            details={"base": base},
        )
    if spread < 0:
        raise PreconditionError(
            "correlated_random spread must be non-negative",
            operation="correlated_random",
            details={"spread": spread},
        )

    lo = max(SCORE_MIN, base - spread)
    hi = min(SCORE_MAX, base + spread)
    u = float(resolve_rng(rng).random())
    return round_half_up(lo + u * (hi - lo))
