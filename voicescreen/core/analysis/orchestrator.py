"""
Analysis Orchestrator

Composes the scoring engine into one AnalysisResult behind a simulated
processing delay.

Usage:
    orchestrator = AnalysisOrchestrator()
    orchestrator.start(upload)              # returns the asyncio.Task
    result = await orchestrator.wait()

Sequencing per invocation:
    catalog → aggregator → classifier (risk, detected, confidence)
    → indicators → AnalysisResult

There is no cancellation. A second invocation started while the first is
sleeping does not stop it; each one publishes its result when it finishes
and the last one to finish wins.
"""
from __future__ import annotations

import asyncio
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Optional, Sequence, Set

from voicescreen.core.scoring import (
    Biomarker,
    build_catalog,
    calculate_weighted_score,
    classify_risk,
    generate_confidence,
    is_detected,
    synthesize_indicators,
)
from voicescreen.core.scoring.generators import UniformSource, resolve_rng
from voicescreen.utils import PreconditionError, get_logger
from .base import AnalysisResult, AnalysisState

logger = get_logger(__name__)

SIMULATED_LATENCY_SECONDS = 2.0


def compose_result(
    biomarkers: Sequence[Biomarker],
    rng: Optional[UniformSource] = None,
    analysis_id: str = "",
) -> AnalysisResult:
    """
    Turn a populated catalog into a full AnalysisResult.

    Pure apart from the random draws for confidence and indicators.
    """
    source = resolve_rng(rng)

    score = calculate_weighted_score(biomarkers)
    risk = classify_risk(score)
    detected = is_detected(score)
    confidence = generate_confidence(source)
    indicators = synthesize_indicators(score, source)

    return AnalysisResult(
        score=score,
        risk=risk,
        confidence=confidence,
        indicators=indicators,
        biomarkers=tuple(biomarkers),
        detected=detected,
        analysis_id=analysis_id,
        created_at=datetime.now(timezone.utc),
    )


def validate_audio_handle(audio_handle: Any) -> None:
    """The handle is opaque; only a missing or empty one is refused."""
    if audio_handle is None:
        raise PreconditionError("Audio handle is required", operation="run_analysis")
    if isinstance(audio_handle, (str, bytes, bytearray)) and len(audio_handle) == 0:
        raise PreconditionError("Audio handle is empty", operation="run_analysis")


class AnalysisOrchestrator:
    """
    Owns the processing flag and the latest result for one client session.

    Single writer: only this object replaces ``state``. Readers get an
    immutable AnalysisState snapshot.
    """

    def __init__(
        self,
        latency_seconds: float = SIMULATED_LATENCY_SECONDS,
        rng: Optional[UniformSource] = None,
    ):
        if latency_seconds < 0:
            raise PreconditionError(
                "Simulated latency must be non-negative",
                operation="AnalysisOrchestrator",
                details={"latency_seconds": latency_seconds},
            )
        self._latency = latency_seconds
        self._rng = resolve_rng(rng)
        self._state = AnalysisState()
        self._in_flight = 0
        self._task: Optional[asyncio.Task] = None
        self._tasks: Set[asyncio.Task] = set()
        self._run_count = 0

    @property
    def state(self) -> AnalysisState:
        return self._state

    @property
    def processing(self) -> bool:
        return self._state.processing

    @property
    def run_count(self) -> int:
        """Number of analyses completed by this orchestrator."""
        return self._run_count

    @property
    def has_started(self) -> bool:
        return self._task is not None or self._state.result is not None

    # ------------------------------------------------------------------
    # Invocation
    # ------------------------------------------------------------------

    async def run_analysis(self, audio_handle: Any) -> AnalysisResult:
        """
        Produce one AnalysisResult after the simulated latency.

        Args:
            audio_handle: Opaque token (file, bytes, sentinel string). Never read.

        Returns:
            The published result.
        """
        validate_audio_handle(audio_handle)
        analysis_id = self._begin()
        return await self._execute(analysis_id)

    def start(self, audio_handle: Any) -> asyncio.Task:
        """
        Schedule an analysis on the running loop and return its task.

        The handle is validated and the processing flag raised before this
        returns, so callers see ``processing`` and the new ``analysis_id``
        immediately.
        """
        validate_audio_handle(audio_handle)
        if self._tasks:
            logger.info(
                f"New analysis supersedes {len(self._tasks)} still in flight"
            )
        analysis_id = self._begin()
        task = asyncio.get_running_loop().create_task(self._execute(analysis_id))
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        self._task = task
        return task

    @property
    def pending_tasks(self) -> int:
        """Started analyses that have not finished yet, superseded ones included."""
        return len(self._tasks)

    async def wait(self) -> Optional[AnalysisResult]:
        """
        Let every started analysis finish and return the latest result.

        Superseded runs are drained too. Only a failure of the most recently
        started run is raised here.
        """
        while True:
            pending = [task for task in self._tasks if not task.done()]
            if not pending:
                break
            await asyncio.wait(pending)

        latest = self._task
        if latest is not None and not latest.cancelled() and latest.exception() is not None:
            raise latest.exception()
        return self._state.result

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        # Marks the exception as retrieved; _execute has already logged it.
        if not task.cancelled():
            task.exception()

    # ------------------------------------------------------------------
    # State transitions
    # ------------------------------------------------------------------

    def _begin(self) -> str:
        analysis_id = uuid.uuid4().hex
        self._in_flight += 1
        self._state = AnalysisState(
            processing=True,
            result=self._state.result,
            analysis_id=analysis_id,
            completed_at=self._state.completed_at,
        )
        logger.info(f"Analysis {analysis_id} started (in flight: {self._in_flight})")
        return analysis_id

    async def _execute(self, analysis_id: str) -> AnalysisResult:
        try:
            await asyncio.sleep(self._latency)
            biomarkers = build_catalog(self._rng)
            result = compose_result(biomarkers, self._rng, analysis_id=analysis_id)
        except BaseException:
            self._in_flight -= 1
            self._state = replace(self._state, processing=self._in_flight > 0)
            logger.error(f"Analysis {analysis_id} did not complete", exc_info=True)
            raise
        self._in_flight -= 1

        # Flag and result change together in one assignment.
        still_running = self._in_flight > 0
        self._state = AnalysisState(
            processing=still_running,
            result=result,
            analysis_id=self._state.analysis_id if still_running else analysis_id,
            completed_at=result.created_at,
        )
        self._run_count += 1

        logger.info(
            f"Analysis {analysis_id} complete: score={result.score} "
            f"risk={result.risk.value} detected={result.detected} "
            f"confidence={result.confidence}"
        )
        return result
