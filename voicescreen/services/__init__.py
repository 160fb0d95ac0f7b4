"""
Service layer between the HTTP API and the analysis engine.
"""
from .analysis import (
    AnalysisService,
    AnalysisSession,
    AudioUpload,
    FEEDBACK_THANK_YOU,
    RECORDED_AUDIO_SENTINEL,
    RECORDING_DURATIONS,
)

__all__ = [
    "AnalysisService",
    "AnalysisSession",
    "AudioUpload",
    "FEEDBACK_THANK_YOU",
    "RECORDED_AUDIO_SENTINEL",
    "RECORDING_DURATIONS",
]
