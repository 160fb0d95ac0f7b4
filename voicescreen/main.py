"""
Voice Biomarker Screening - FastAPI Application

API endpoints for:
- Starting a simulated analysis from an upload or a recording
- Polling / awaiting the latest result of a session
- Rendered reports
- Biomarker catalog reference and feedback
"""
import os
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import Depends, FastAPI, File, Query, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from voicescreen.config import settings
from voicescreen.core.reports import AnalysisReportGenerator, label_for
from voicescreen.core.scoring import BIOMARKER_SPECS, INDICATOR_SPREADS, total_weight
from voicescreen.models import (
    AnalysisResultResponse,
    AnalysisStartedResponse,
    BiomarkerSpecResponse,
    CatalogResponse,
    ErrorResponse,
    FeedbackRequest,
    FeedbackResponse,
    HealthResponse,
    RecordingRequest,
    SessionStatusResponse,
)
from voicescreen.services import AnalysisService, AnalysisSession, AudioUpload
from voicescreen.utils import VoiceScreeningError, get_logger, setup_logging

setup_logging(settings.log_level, settings.log_file)
logger = get_logger(__name__)


# ---- Service Singletons ----
_analysis_service = AnalysisService(
    max_upload_bytes=settings.max_upload_bytes,
    max_feedback_entries=settings.max_feedback_entries,
    max_sessions=settings.max_sessions,
)
_report_gen = AnalysisReportGenerator()
START_TIME = datetime.now()


def get_analysis_service() -> AnalysisService:
    return _analysis_service


def get_report_generator() -> AnalysisReportGenerator:
    return _report_gen


# ---- Application Lifespan ----

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"{settings.app_name} v{settings.version} ready to accept requests")
    yield
    # No cancellation: analyses already started still complete.
    waited = await _analysis_service.wait_all()
    logger.info(f"{settings.app_name} shut down ({waited} orchestrator(s) drained).")


# ---- FastAPI Application ----

app = FastAPI(
    title=settings.app_name,
    description="Simulated voice-biomarker risk assessment (demonstration only)",
    version=settings.version,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(VoiceScreeningError)
async def voice_screening_error_handler(request: Request, exc: VoiceScreeningError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}")
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(**exc.to_dict()).model_dump(),
    )


# ---- Utility Functions ----

def _upload_size(file: UploadFile) -> int:
    """Size from the multipart parser, or from the spooled file position."""
    if file.size is not None:
        return file.size
    file.file.seek(0, os.SEEK_END)
    size = file.file.tell()
    file.file.seek(0)
    return size


def _started_response(session: AnalysisSession) -> AnalysisStartedResponse:
    state = session.orchestrator.state
    return AnalysisStartedResponse(
        session_id=session.session_id,
        analysis_id=state.analysis_id,
        processing=state.processing,
        source=session.source or "unknown",
        filename=session.filename,
        recording_duration=session.recording_duration,
    )


def _health(service: AnalysisService) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=settings.version,
        timestamp=datetime.now().isoformat(),
        uptime_seconds=(datetime.now() - START_TIME).total_seconds(),
        active_sessions=service.session_count,
    )


# ---- API Endpoints ----

@app.get("/", response_model=HealthResponse, tags=["Health"])
async def root(service: AnalysisService = Depends(get_analysis_service)):
    """API root - health check."""
    return _health(service)


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(service: AnalysisService = Depends(get_analysis_service)):
    """Health check endpoint."""
    return _health(service)


@app.get("/api/v1/biomarkers", response_model=CatalogResponse, tags=["Reference"])
async def list_biomarkers():
    """
    The fixed biomarker catalog: weights and the bounds values are drawn from.
    """
    return CatalogResponse(
        biomarkers=[
            BiomarkerSpecResponse(
                name=spec.kind.value,
                label=label_for(spec.kind.value),
                weight=spec.weight,
                min_value=spec.low,
                max_value=spec.high,
            )
            for spec in BIOMARKER_SPECS
        ],
        total_weight=round(total_weight(), 9),
        indicator_spreads=dict(INDICATOR_SPREADS),
    )


@app.post(
    "/api/v1/sessions/{session_id}/upload",
    response_model=AnalysisStartedResponse,
    status_code=202,
    tags=["Analysis"],
)
async def upload_audio(
    session_id: str,
    file: UploadFile = File(...),
    service: AnalysisService = Depends(get_analysis_service),
):
    """
    Upload an audio file and start analysing it.

    Only ``audio/*`` content types are accepted. Poll the session or call
    ``/result`` to get the outcome. The body is never read; the spooled
    file itself is the analysis handle.
    """
    upload = AudioUpload(
        filename=file.filename or "audio",
        content_type=file.content_type,
        size_bytes=_upload_size(file),
        handle=file,
    )
    session = service.start_upload(session_id, upload)
    return _started_response(session)


@app.post(
    "/api/v1/sessions/{session_id}/recording",
    response_model=AnalysisStartedResponse,
    status_code=202,
    tags=["Analysis"],
)
async def finish_recording(
    session_id: str,
    request: RecordingRequest,
    service: AnalysisService = Depends(get_analysis_service),
):
    """
    Finish a recording and start analysing it.
    """
    session = service.start_recording(session_id, request.duration_seconds)
    return _started_response(session)


@app.get("/api/v1/sessions/{session_id}", response_model=SessionStatusResponse, tags=["Analysis"])
async def get_session_status(
    session_id: str,
    service: AnalysisService = Depends(get_analysis_service),
):
    """
    Processing flag and latest result. ``result`` is null while processing.
    """
    session = service.get_session(session_id)
    state = session.orchestrator.state
    visible = state.visible_result
    return SessionStatusResponse(
        session_id=session_id,
        processing=state.processing,
        analysis_id=state.analysis_id,
        source=session.source,
        filename=session.filename,
        result=AnalysisResultResponse(**visible.to_dict()) if visible else None,
    )


@app.get(
    "/api/v1/sessions/{session_id}/result",
    response_model=AnalysisResultResponse,
    tags=["Analysis"],
)
async def await_session_result(
    session_id: str,
    service: AnalysisService = Depends(get_analysis_service),
):
    """
    Wait for the in-flight analysis (if any) and return the latest result.
    """
    result = await service.await_result(session_id)
    return AnalysisResultResponse(**result.to_dict())


@app.get("/api/v1/sessions/{session_id}/report", tags=["Reports"])
async def get_session_report(
    session_id: str,
    fmt: str = Query(default="json", alias="format", pattern="^(json|text)$", description="json or text"),
    service: AnalysisService = Depends(get_analysis_service),
    report_gen: AnalysisReportGenerator = Depends(get_report_generator),
):
    """
    Rendered report of the session's latest completed analysis.
    """
    result = service.latest_result(session_id)
    rendered = report_gen.render(result, fmt=fmt)
    if fmt == "text":
        return PlainTextResponse(rendered)
    return rendered


@app.delete("/api/v1/sessions/{session_id}", status_code=204, tags=["Analysis"])
async def end_session(
    session_id: str,
    service: AnalysisService = Depends(get_analysis_service),
):
    """
    End a session and discard its result.
    """
    service.end_session(session_id)


@app.post("/api/v1/feedback", response_model=FeedbackResponse, tags=["Feedback"])
async def submit_feedback(
    request: FeedbackRequest,
    service: AnalysisService = Depends(get_analysis_service),
):
    """
    Leave a comment about the demo.
    """
    message = service.submit_feedback(request.comment, session_id=request.session_id)
    return FeedbackResponse(message=message)


# ---- Run with uvicorn ----
def run(host: Optional[str] = None, port: Optional[int] = None) -> None:
    import uvicorn
    uvicorn.run(app, host=host or settings.host, port=port or settings.port)


if __name__ == "__main__":
    run()
