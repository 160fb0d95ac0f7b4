"""
API schema models.
"""
from .analysis import (
    AnalysisResultResponse,
    AnalysisStartedResponse,
    BiomarkerResponse,
    BiomarkerSpecResponse,
    CatalogResponse,
    ErrorResponse,
    FeedbackRequest,
    FeedbackResponse,
    HealthResponse,
    RecordingRequest,
    SessionStatusResponse,
)

__all__ = [
    "AnalysisResultResponse",
    "AnalysisStartedResponse",
    "BiomarkerResponse",
    "BiomarkerSpecResponse",
    "CatalogResponse",
    "ErrorResponse",
    "FeedbackRequest",
    "FeedbackResponse",
    "HealthResponse",
    "RecordingRequest",
    "SessionStatusResponse",
]
