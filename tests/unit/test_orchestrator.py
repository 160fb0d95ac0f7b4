"""
Unit Tests for the Analysis Orchestrator

End-to-end scenarios over fixed catalogs, plus the processing-flag and
supersede behaviour of the asynchronous contract.
"""
import asyncio
import pytest
from dataclasses import FrozenInstanceError

from voicescreen.core.analysis import (
    AnalysisOrchestrator,
    AnalysisResult,
    AnalysisState,
    SIMULATED_LATENCY_SECONDS,
    compose_result,
)
import voicescreen.core.analysis.orchestrator as orchestrator_module
from voicescreen.core.scoring import INDICATOR_SPREADS, RiskLevel, catalog_with_values
from voicescreen.utils import PreconditionError


def assert_valid_result(result: AnalysisResult) -> None:
    assert 0 <= result.score <= 100
    assert 80 <= result.confidence <= 98
    assert len(result.biomarkers) == 8
    assert result.detected is (result.score < 78)
    for name, value in result.indicators.to_dict().items():
        assert 0 <= value <= 100
        assert abs(value - result.score) <= INDICATOR_SPREADS[name]


class TestComposeResult:
    """Scenarios with every biomarker fixed to one value."""

    @pytest.mark.parametrize("value,risk,detected", [
        (80, RiskLevel.MODERATE, False),
        (60, RiskLevel.HIGH, True),
        (90, RiskLevel.LOW, False),
        (77, RiskLevel.MODERATE, True),
    ])
    def test_fixed_catalog_scenarios(self, rng, value, risk, detected):
        result = compose_result(catalog_with_values([value] * 8), rng)

        assert result.score == value
        assert result.risk == risk
        assert result.detected is detected
        assert_valid_result(result)

    def test_result_is_immutable(self, rng):
        result = compose_result(catalog_with_values([80] * 8), rng)
        with pytest.raises(FrozenInstanceError):
            result.score = 10  # type: ignore[misc]

    def test_to_dict_shape(self, rng):
        result = compose_result(catalog_with_values([80] * 8), rng, analysis_id="abc")
        data = result.to_dict()

        assert data["analysis_id"] == "abc"
        assert data["risk"] == "Moderate"
        assert len(data["biomarkers"]) == 8
        assert data["biomarkers"][0]["name"] == "phoneme_articulation"
        assert set(data["indicators"]) == set(INDICATOR_SPREADS)

    def test_empty_catalog_fails_fast(self, rng):
        with pytest.raises(PreconditionError):
            compose_result([], rng)


class TestAnalysisState:

    def test_visible_result_hidden_while_processing(self, rng):
        result = compose_result(catalog_with_values([80] * 8), rng)
        assert AnalysisState(processing=True, result=result).visible_result is None
        assert AnalysisState(processing=False, result=result).visible_result is result


@pytest.mark.asyncio
class TestAnalysisOrchestrator:
    """Tests for the start/await contract."""

    async def test_default_latency(self):
        assert SIMULATED_LATENCY_SECONDS == 2.0

    async def test_run_analysis_returns_valid_result(self, rng):
        orchestrator = AnalysisOrchestrator(latency_seconds=0, rng=rng)
        result = await orchestrator.run_analysis("recorded-audio-data")

        assert_valid_result(result)
        assert orchestrator.state.result is result
        assert orchestrator.processing is False
        assert orchestrator.run_count == 1

    @pytest.mark.parametrize("handle", ["recorded-audio-data", b"RIFF....", object(), 0])
    async def test_any_non_empty_handle_accepted(self, rng, handle):
        orchestrator = AnalysisOrchestrator(latency_seconds=0, rng=rng)
        result = await orchestrator.run_analysis(handle)
        assert_valid_result(result)

    @pytest.mark.parametrize("handle", [None, "", b""])
    async def test_missing_handle_rejected(self, handle):
        orchestrator = AnalysisOrchestrator(latency_seconds=0)
        with pytest.raises(PreconditionError):
            await orchestrator.run_analysis(handle)
        with pytest.raises(PreconditionError):
            orchestrator.start(handle)
        assert orchestrator.processing is False

    async def test_negative_latency_rejected(self):
        with pytest.raises(PreconditionError):
            AnalysisOrchestrator(latency_seconds=-1)

    async def test_processing_flag_and_result_exclusive(self, rng):
        orchestrator = AnalysisOrchestrator(latency_seconds=0.05, rng=rng)
        orchestrator.start("recorded-audio-data")

        state = orchestrator.state
        assert state.processing is True
        assert state.analysis_id is not None
        assert state.visible_result is None

        result = await orchestrator.wait()

        state = orchestrator.state
        assert state.processing is False
        assert state.visible_result is result
        assert state.analysis_id == result.analysis_id
        assert state.completed_at == result.created_at

    async def test_sequential_runs_are_independent(self, rng):
        orchestrator = AnalysisOrchestrator(latency_seconds=0, rng=rng)
        first = await orchestrator.run_analysis("a")
        second = await orchestrator.run_analysis("b")

        assert_valid_result(first)
        assert_valid_result(second)
        assert first.analysis_id != second.analysis_id
        assert orchestrator.state.result is second
        # the first result is untouched by the second run
        assert first.to_dict() != second.to_dict()

    async def test_new_invocation_supersedes(self, rng):
        orchestrator = AnalysisOrchestrator(latency_seconds=0.05, rng=rng)
        first_task = orchestrator.start("first")
        second_task = orchestrator.start("second")

        result = await orchestrator.wait()

        # no cancellation: both complete, the later one is the published result
        assert first_task.done() and not first_task.cancelled()
        assert result is second_task.result()
        assert orchestrator.state.result is result
        assert orchestrator.processing is False
        assert orchestrator.run_count == 2

    async def test_still_processing_while_newer_in_flight(self, rng):
        orchestrator = AnalysisOrchestrator(latency_seconds=0.05, rng=rng)
        first_task = orchestrator.start("first")
        await asyncio.sleep(0.02)
        orchestrator.start("second")

        first = await first_task
        # the first result is stored but hidden behind the newer run
        assert orchestrator.state.result is first
        assert orchestrator.processing is True
        assert orchestrator.state.visible_result is None

        latest = await orchestrator.wait()
        assert latest is not first
        assert orchestrator.state.visible_result is latest

    async def test_wait_without_start(self):
        orchestrator = AnalysisOrchestrator(latency_seconds=0)
        assert await orchestrator.wait() is None
        assert orchestrator.has_started is False

    async def test_superseded_failure_is_collected(self, rng, monkeypatch):
        real_build = orchestrator_module.build_catalog
        calls = []

        def flaky_build(source):
            calls.append(source)
            if len(calls) == 1:
                raise RuntimeError("catalog unavailable")
            return real_build(source)

        monkeypatch.setattr(orchestrator_module, "build_catalog", flaky_build)
        orchestrator = AnalysisOrchestrator(latency_seconds=0.01, rng=rng)
        first_task = orchestrator.start("first")
        await asyncio.sleep(0.005)
        second_task = orchestrator.start("second")

        # the earlier failure does not leak out of wait()
        result = await orchestrator.wait()

        assert result is second_task.result()
        assert isinstance(first_task.exception(), RuntimeError)
        assert orchestrator.pending_tasks == 0
        assert orchestrator.processing is False
        assert orchestrator.run_count == 1

    async def test_latest_failure_raised_by_wait(self, rng, monkeypatch):
        def broken_build(source):
            raise RuntimeError("catalog unavailable")

        monkeypatch.setattr(orchestrator_module, "build_catalog", broken_build)
        orchestrator = AnalysisOrchestrator(latency_seconds=0, rng=rng)
        orchestrator.start("only")

        with pytest.raises(RuntimeError):
            await orchestrator.wait()
        assert orchestrator.pending_tasks == 0
        assert orchestrator.processing is False
        assert orchestrator.state.result is None
