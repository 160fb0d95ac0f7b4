"""
Utilities Package - Logging and Exception Handling
"""
from .logging import get_logger, setup_logging
from .exceptions import (
    VoiceScreeningError,
    PreconditionError,
    InvalidAudioError,
    SessionNotFoundError,
    AnalysisNotReadyError,
    ReportGenerationError,
    SessionLimitError,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "VoiceScreeningError",
    "PreconditionError",
    "InvalidAudioError",
    "SessionNotFoundError",
    "AnalysisNotReadyError",
    "ReportGenerationError",
    "SessionLimitError",
]
