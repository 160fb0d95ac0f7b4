"""
Custom Exception Hierarchy

Every error raised by the engine or the service layer carries a stable
code, a details dict and the HTTP status the API should answer with.
"""
from typing import Optional, Dict, Any


class VoiceScreeningError(Exception):
    """Base exception for all voice screening errors."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details
        }


class PreconditionError(VoiceScreeningError):
    """A caller broke the contract of a scoring function (empty catalog, bad bounds)."""

    status_code = 500

    def __init__(
        self,
        message: str,
        operation: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="PRECONDITION_VIOLATION",
            details={"operation": operation, **(details or {})}
        )
        self.operation = operation


class InvalidAudioError(VoiceScreeningError):
    """Upload rejected before analysis (wrong media type, empty or oversized)."""

    status_code = 415

    def __init__(
        self,
        message: str,
        content_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="INVALID_AUDIO",
            details={"content_type": content_type, **(details or {})}
        )
        self.content_type = content_type


class SessionNotFoundError(VoiceScreeningError):
    """No analysis session exists under the given id."""

    status_code = 404

    def __init__(self, session_id: str):
        super().__init__(
            message=f"Session {session_id} not found",
            code="SESSION_NOT_FOUND",
            details={"session_id": session_id}
        )
        self.session_id = session_id


class AnalysisNotReadyError(VoiceScreeningError):
    """A result was requested but no analysis has completed for the session."""

    status_code = 409

    def __init__(
        self,
        message: str,
        session_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="ANALYSIS_NOT_READY",
            details={"session_id": session_id, **(details or {})}
        )
        self.session_id = session_id


class ReportGenerationError(VoiceScreeningError):
    """Errors during report rendering."""

    def __init__(
        self,
        message: str,
        report_format: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="REPORT_ERROR",
            details={"report_format": report_format, **(details or {})}
        )
        self.report_format = report_format


class SessionLimitError(VoiceScreeningError):
    """Every session slot is held by an analysis that is still processing."""

    status_code = 503

    def __init__(self, max_sessions: int):
        super().__init__(
            message="Too many sessions are processing, try again shortly",
            code="SESSION_LIMIT",
            details={"max_sessions": max_sessions}
        )
        self.max_sessions = max_sessions
