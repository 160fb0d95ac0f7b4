"""
Analysis Layer

Simulated asynchronous analysis on top of the scoring engine.
"""
from .base import AnalysisResult, AnalysisState
from .orchestrator import (
    AnalysisOrchestrator,
    SIMULATED_LATENCY_SECONDS,
    compose_result,
    validate_audio_handle,
)

__all__ = [
    "AnalysisResult",
    "AnalysisState",
    "AnalysisOrchestrator",
    "SIMULATED_LATENCY_SECONDS",
    "compose_result",
    "validate_audio_handle",
]
