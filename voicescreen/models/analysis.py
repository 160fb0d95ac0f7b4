"""
API request/response models (pydantic).
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from voicescreen.services.analysis import DEFAULT_RECORDING_DURATION, RECORDING_DURATIONS


class HealthResponse(BaseModel):
    status: str
    version: str
    timestamp: str
    uptime_seconds: float
    active_sessions: int


class BiomarkerSpecResponse(BaseModel):
    name: str
    label: str
    weight: float
    min_value: int
    max_value: int


class CatalogResponse(BaseModel):
    biomarkers: List[BiomarkerSpecResponse]
    total_weight: float
    indicator_spreads: Dict[str, int]


class RecordingRequest(BaseModel):
    """Finish a recording of the chosen length (no audio is transmitted)."""
    duration_seconds: int = Field(
        default=DEFAULT_RECORDING_DURATION,
        description=f"Recording length, one of {list(RECORDING_DURATIONS)}",
    )

    @field_validator("duration_seconds")
    @classmethod
    def _known_duration(cls, value: int) -> int:
        if value not in RECORDING_DURATIONS:
            raise ValueError(f"duration_seconds must be one of {list(RECORDING_DURATIONS)}")
        return value


class AnalysisStartedResponse(BaseModel):
    session_id: str
    analysis_id: Optional[str] = None
    processing: bool = True
    source: str
    filename: Optional[str] = None
    recording_duration: Optional[int] = None


class BiomarkerResponse(BaseModel):
    name: str
    value: int
    weight: float
    description: str


class AnalysisResultResponse(BaseModel):
    analysis_id: str
    created_at: Optional[str] = None
    score: int = Field(..., ge=0, le=100)
    risk: str
    confidence: int = Field(..., ge=80, le=98)
    detected: bool
    indicators: Dict[str, int]
    biomarkers: List[BiomarkerResponse]


class SessionStatusResponse(BaseModel):
    session_id: str
    processing: bool
    analysis_id: Optional[str] = None
    source: Optional[str] = None
    filename: Optional[str] = None
    result: Optional[AnalysisResultResponse] = None


class FeedbackRequest(BaseModel):
    comment: str = Field(..., min_length=1, max_length=5000)
    session_id: Optional[str] = None

    @field_validator("comment")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("comment must not be blank")
        return value


class FeedbackResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
    message: str
    details: Dict[str, Any] = {}
