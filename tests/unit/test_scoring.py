"""
Unit Tests for the Scoring Engine

Tests for generators, biomarker catalog, aggregator, classifier and
indicator synthesis.
"""
import math
from dataclasses import FrozenInstanceError
import pytest
import numpy as np

from voicescreen.core.scoring import (
    BIOMARKER_SPECS,
    INDICATOR_SPREADS,
    Biomarker,
    BiomarkerKind,
    IndicatorSet,
    RiskLevel,
    build_catalog,
    calculate_weighted_score,
    catalog_with_values,
    classify_risk,
    correlated_random,
    generate_confidence,
    is_detected,
    round_half_up,
    synthesize_indicators,
    total_weight,
    weighted_random,
)
from voicescreen.utils import PreconditionError


class TestRounding:
    """Half values round up, matching the display arithmetic."""

    @pytest.mark.parametrize("value,expected", [
        (0.5, 1), (1.5, 2), (2.5, 3), (84.49, 84), (84.5, 85), (0.0, 0),
    ])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected


class TestWeightedRandom:
    """Tests for the high-skewed bounded generator."""

    def test_within_bounds(self, rng):
        for lo, hi in [(60, 90), (65, 95), (0, 1), (0, 100)]:
            for _ in range(500):
                value = weighted_random(lo, hi, rng)
                assert isinstance(value, int)
                assert lo <= value <= hi

    def test_skews_toward_high_end(self, rng):
        samples = [weighted_random(60, 90, rng) for _ in range(5000)]
        assert np.mean(samples) > (60 + 90) / 2

    def test_formula_with_fixed_draw(self, fixed_uniform):
        # 0.5 ** 0.7 = 0.6156... -> 60 + 18.47 = 78.47 -> 78
        assert weighted_random(60, 90, fixed_uniform([0.5])) == 78

    def test_zero_draw_gives_minimum(self, fixed_uniform):
        assert weighted_random(70, 95, fixed_uniform([0.0])) == 70

    @pytest.mark.parametrize("lo,hi", [(90, 60), (50, 50)])
    def test_rejects_inverted_bounds(self, lo, hi):
        with pytest.raises(PreconditionError) as exc_info:
            weighted_random(lo, hi)
        assert exc_info.value.code == "PRECONDITION_VIOLATION"

    @pytest.mark.parametrize("lo,hi", [(float("nan"), 90), (0, float("inf"))])
    def test_rejects_non_finite_bounds(self, lo, hi):
        with pytest.raises(PreconditionError):
            weighted_random(lo, hi)


class TestCorrelatedRandom:
    """Tests for values correlated with a reference score."""

    @pytest.mark.parametrize("base", [0, 5, 50, 77, 95, 100])
    @pytest.mark.parametrize("spread", [0, 7, 15])
    def test_within_spread_and_bounds(self, rng, base, spread):
        for _ in range(200):
            value = correlated_random(base, spread, rng)
            assert 0 <= value <= 100
            assert abs(value - base) <= spread

    def test_clamped_at_top(self, fixed_uniform):
        # hi is clamped to 100, so a draw near 1 still stays in range
        assert correlated_random(98, 10, fixed_uniform([0.999])) == 100

    def test_clamped_at_bottom(self, fixed_uniform):
        assert correlated_random(3, 10, fixed_uniform([0.0])) == 0

    def test_zero_spread_returns_base(self, fixed_uniform):
        assert correlated_random(64, 0, fixed_uniform([0.73])) == 64

    def test_rejects_negative_spread(self):
        with pytest.raises(PreconditionError):
            correlated_random(50, -1)

    @pytest.mark.parametrize("base", [-1, 101, float("nan")])
    def test_rejects_bad_base(self, base):
        with pytest.raises(PreconditionError):
            correlated_random(base, 5)


class TestBiomarkerCatalog:
    """Tests for the fixed biomarker catalog."""

    def test_weights_sum_to_one(self):
        assert math.isclose(total_weight(), 1.0, abs_tol=1e-9)

    def test_fixed_order_and_weights(self, rng):
        catalog = build_catalog(rng)
        assert [b.name for b in catalog] == list(BiomarkerKind)
        assert [b.weight for b in catalog] == [0.15, 0.12, 0.13, 0.10, 0.18, 0.12, 0.10, 0.10]

    def test_values_within_spec_bounds(self, rng):
        for _ in range(100):
            for spec, biomarker in zip(BIOMARKER_SPECS, build_catalog(rng)):
                assert spec.low <= biomarker.value <= spec.high
                assert 60 <= biomarker.value <= 95

    def test_description_keys(self, rng):
        catalog = build_catalog(rng)
        assert catalog[0].description == "phoneme_articulation_desc"
        assert all(b.description == f"{b.name.value}_desc" for b in catalog)

    def test_biomarkers_are_immutable(self, rng):
        biomarker = build_catalog(rng)[0]
        with pytest.raises(FrozenInstanceError):
            biomarker.value = 10  # type: ignore[misc]

    def test_catalog_with_values(self):
        catalog = catalog_with_values([80] * 8)
        assert len(catalog) == 8
        assert all(b.value == 80 for b in catalog)

    def test_catalog_with_values_wrong_length(self):
        with pytest.raises(PreconditionError):
            catalog_with_values([80] * 7)

    def test_catalog_with_values_out_of_range(self):
        with pytest.raises(PreconditionError):
            catalog_with_values([80] * 7 + [101])


class TestAggregator:
    """Tests for the weighted composite score."""

    @pytest.mark.parametrize("value", [0, 60, 77, 80, 90, 100])
    def test_uniform_values_give_same_score(self, value):
        assert calculate_weighted_score(catalog_with_values([value] * 8)) == value

    def test_equals_rounded_weighted_sum(self, rng):
        for _ in range(200):
            catalog = build_catalog(rng)
            weighted_sum = sum(b.value * b.weight for b in catalog)
            score = calculate_weighted_score(catalog)
            assert abs(score - weighted_sum) <= 0.5 + 1e-9
            assert 0 <= score <= 100

    def test_known_catalog(self):
        # 14.25 + 10.8 + 12.35 + 9 + 17.1 + 10.8 + 9.5 + 9 = 92.8
        catalog = catalog_with_values([95, 90, 95, 90, 95, 90, 95, 90])
        assert calculate_weighted_score(catalog) == 93

    def test_mixed_values(self):
        catalog = catalog_with_values([100, 0, 0, 0, 0, 0, 0, 0])
        assert calculate_weighted_score(catalog) == 15

    def test_empty_catalog_is_precondition_violation(self):
        with pytest.raises(PreconditionError):
            calculate_weighted_score([])

    def test_zero_total_weight_is_precondition_violation(self):
        zero = [Biomarker(BiomarkerKind.VOICE_TREMOR, 80, 0.0, "voice_tremor_desc")]
        with pytest.raises(PreconditionError):
            calculate_weighted_score(zero)


class TestClassifier:
    """Tests for risk tiers, detection flag and confidence."""

    def test_risk_partition(self):
        for score in range(0, 101):
            risk = classify_risk(score)
            if score < 70:
                assert risk == RiskLevel.HIGH
            elif score < 85:
                assert risk == RiskLevel.MODERATE
            else:
                assert risk == RiskLevel.LOW

    @pytest.mark.parametrize("score,expected", [
        (69, RiskLevel.HIGH), (70, RiskLevel.MODERATE),
        (84, RiskLevel.MODERATE), (85, RiskLevel.LOW),
    ])
    def test_risk_boundaries(self, score, expected):
        assert classify_risk(score) == expected

    def test_detection_threshold(self):
        for score in range(0, 101):
            assert is_detected(score) is (score < 78)

    def test_moderate_band_splits_on_detection(self):
        assert classify_risk(77) == classify_risk(78) == RiskLevel.MODERATE
        assert is_detected(77) is True
        assert is_detected(78) is False

    def test_confidence_range(self, rng):
        for _ in range(1000):
            assert 80 <= generate_confidence(rng) <= 98

    @pytest.mark.parametrize("u,expected", [(0.0, 80), (0.5, 85), (0.999, 90)])
    def test_confidence_formula(self, fixed_uniform, u, expected):
        assert generate_confidence(fixed_uniform([u])) == expected


class TestIndicators:
    """Tests for the indicator synthesizer."""

    def test_spreads(self):
        assert INDICATOR_SPREADS == {
            "speech_clarity": 8,
            "word_recall": 15,
            "sentence_structure": 12,
            "pause_patterns": 8,
            "prosody": 10,
            "articulation_rate": 7,
            "voice_quality": 9,
            "semantic_coherence": 14,
        }

    @pytest.mark.parametrize("score", [0, 42, 60, 77, 80, 99, 100])
    def test_within_spread_of_score(self, rng, score):
        for _ in range(100):
            indicators = synthesize_indicators(score, rng)
            assert isinstance(indicators, IndicatorSet)
            for name, value in indicators.to_dict().items():
                assert 0 <= value <= 100
                assert abs(value - score) <= INDICATOR_SPREADS[name]

    def test_midpoint_draw_returns_score(self, fixed_uniform):
        indicators = synthesize_indicators(50, fixed_uniform([0.5]))
        assert set(indicators.to_dict().values()) == {50}
