"""
Analysis Service

Session bookkeeping between the HTTP layer and the orchestrator:
- one AnalysisOrchestrator per client session
- upload validation (media type, size) before any analysis starts
- the recording sentinel
- feedback comments

In-memory only; a session's result disappears when the session ends.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Deque, Dict, List, Optional

from voicescreen.core.analysis import (
    AnalysisOrchestrator,
    AnalysisResult,
    AnalysisState,
    SIMULATED_LATENCY_SECONDS,
)
from voicescreen.core.scoring.generators import UniformSource
from voicescreen.utils import (
    AnalysisNotReadyError,
    InvalidAudioError,
    SessionLimitError,
    SessionNotFoundError,
    get_logger,
)

logger = get_logger(__name__)

RECORDED_AUDIO_SENTINEL = "recorded-audio-data"
RECORDING_DURATIONS = (15, 30, 60, 90)
DEFAULT_RECORDING_DURATION = 30

FEEDBACK_THANK_YOU = "Thank you for your feedback!"


@dataclass
class AudioUpload:
    """What the service keeps of an uploaded file; the bytes are not read."""
    filename: str
    content_type: Optional[str]
    size_bytes: int
    handle: Any = None


@dataclass
class AnalysisSession:
    session_id: str
    orchestrator: AnalysisOrchestrator
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    filename: Optional[str] = None
    source: Optional[str] = None             # "upload" | "recording"
    recording_duration: Optional[int] = None


@dataclass
class FeedbackEntry:
    comment: str
    session_id: Optional[str]
    received_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class AnalysisService:
    """
    Routes client actions to per-session orchestrators.

    Args:
        latency_seconds: Simulated processing delay handed to every orchestrator.
        rng: Optional shared uniform source (tests pass a seeded generator).
        max_upload_bytes: Largest accepted upload.
        max_feedback_entries: Oldest comments are dropped beyond this count.
        max_sessions: Session cap. At the cap the oldest idle session is
            evicted to make room for a new one.
    """

    def __init__(
        self,
        latency_seconds: float = SIMULATED_LATENCY_SECONDS,
        rng: Optional[UniformSource] = None,
        max_upload_bytes: int = 25 * 1024 * 1024,
        max_feedback_entries: int = 500,
        max_sessions: int = 1000,
    ):
        self._latency = latency_seconds
        self._rng = rng
        self._max_upload_bytes = max_upload_bytes
        self._max_sessions = max_sessions
        self._sessions: Dict[str, AnalysisSession] = {}
        # Ended sessions whose analyses were still running; drained by wait_all.
        self._retired: List[AnalysisOrchestrator] = []
        self._feedback: Deque[FeedbackEntry] = deque(maxlen=max_feedback_entries)

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    @property
    def session_count(self) -> int:
        return len(self._sessions)

    def _get_or_create(self, session_id: str) -> AnalysisSession:
        session = self._sessions.get(session_id)
        if session is None:
            if len(self._sessions) >= self._max_sessions:
                self._evict_idle()
            session = AnalysisSession(
                session_id=session_id,
                orchestrator=AnalysisOrchestrator(self._latency, self._rng),
            )
            self._sessions[session_id] = session
            logger.debug(f"Session {session_id} created")
        return session

    def _evict_idle(self) -> None:
        # Dicts keep insertion order, so the first idle hit is the oldest.
        for session_id, session in self._sessions.items():
            if session.orchestrator.pending_tasks == 0:
                del self._sessions[session_id]
                logger.info(f"Session {session_id} evicted (limit {self._max_sessions})")
                return
        logger.warning(f"All {self._max_sessions} sessions are processing")
        raise SessionLimitError(self._max_sessions)

    def get_session(self, session_id: str) -> AnalysisSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def end_session(self, session_id: str) -> None:
        session = self._sessions.pop(session_id, None)
        if session is None:
            raise SessionNotFoundError(session_id)
        if session.orchestrator.pending_tasks:
            self._retired.append(session.orchestrator)
        logger.info(
            f"Session {session_id} ended after {session.orchestrator.run_count} analysis run(s)"
        )

    def get_state(self, session_id: str) -> AnalysisState:
        return self.get_session(session_id).orchestrator.state

    async def wait_all(self) -> int:
        """
        Let every in-flight analysis finish, ended sessions included.

        Returns:
            How many orchestrators were waited on.
        """
        orchestrators = [s.orchestrator for s in self._sessions.values()] + self._retired
        self._retired = []
        for orchestrator in orchestrators:
            try:
                await orchestrator.wait()
            except Exception as e:
                logger.warning(f"Analysis failed while draining: {e}")
        return len(orchestrators)

    # ------------------------------------------------------------------
    # Starting analyses
    # ------------------------------------------------------------------

    def validate_upload(self, upload: AudioUpload) -> None:
        """Reject anything that is not a non-empty audio file within the size limit."""
        content_type = upload.content_type or ""
        if not content_type.startswith("audio/"):
            logger.warning(
                f"Rejected upload {upload.filename!r}: content type {content_type or 'missing'}"
            )
            raise InvalidAudioError(
                "Please upload a valid audio file",
                content_type=upload.content_type,
                details={"filename": upload.filename},
            )
        if upload.size_bytes <= 0:
            logger.warning(f"Rejected upload {upload.filename!r}: empty file")
            raise InvalidAudioError(
                "Uploaded audio file is empty",
                content_type=upload.content_type,
                details={"filename": upload.filename},
            )
        if upload.size_bytes > self._max_upload_bytes:
            logger.warning(
                f"Rejected upload {upload.filename!r}: {upload.size_bytes} bytes "
                f"exceeds {self._max_upload_bytes}"
            )
            raise InvalidAudioError(
                "Uploaded audio file is too large",
                content_type=upload.content_type,
                details={
                    "filename": upload.filename,
                    "size_bytes": upload.size_bytes,
                    "max_bytes": self._max_upload_bytes,
                },
            )

    def start_upload(self, session_id: str, upload: AudioUpload) -> AnalysisSession:
        self.validate_upload(upload)
        session = self._get_or_create(session_id)
        session.filename = upload.filename
        session.source = "upload"
        session.recording_duration = None
        handle = upload.handle if upload.handle is not None else upload.filename
        session.orchestrator.start(handle)
        logger.info(f"Session {session_id}: analysing upload {upload.filename!r}")
        return session

    def start_recording(
        self,
        session_id: str,
        duration_seconds: int = DEFAULT_RECORDING_DURATION,
    ) -> AnalysisSession:
        session = self._get_or_create(session_id)
        session.filename = None
        session.source = "recording"
        session.recording_duration = duration_seconds
        session.orchestrator.start(RECORDED_AUDIO_SENTINEL)
        logger.info(f"Session {session_id}: analysing {duration_seconds}s recording")
        return session

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    async def await_result(self, session_id: str) -> AnalysisResult:
        """Wait for the session's in-flight analysis, then return the latest result."""
        session = self.get_session(session_id)
        result = await session.orchestrator.wait()
        if result is None:
            raise AnalysisNotReadyError(
                "No analysis has been started for this session",
                session_id=session_id,
            )
        return result

    def latest_result(self, session_id: str) -> AnalysisResult:
        """Latest completed result; refused while an analysis is processing."""
        state = self.get_state(session_id)
        if state.visible_result is None:
            message = (
                "Analysis still processing" if state.processing
                else "No completed analysis for this session"
            )
            raise AnalysisNotReadyError(message, session_id=session_id)
        return state.visible_result

    # ------------------------------------------------------------------
    # Feedback
    # ------------------------------------------------------------------

    def submit_feedback(self, comment: str, session_id: Optional[str] = None) -> str:
        self._feedback.append(FeedbackEntry(comment=comment.strip(), session_id=session_id))
        logger.info(f"Feedback received ({len(comment)} chars)")
        return FEEDBACK_THANK_YOU

    @property
    def feedback(self) -> list:
        return list(self._feedback)
