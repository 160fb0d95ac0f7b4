"""
Voice Screening Service - Configuration
=======================================
Runtime settings for the HTTP service, loaded from the environment and the
project-level .env file.

Scoring constants (biomarker weights, thresholds, simulated latency) live
next to the code that uses them and are deliberately not settings.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# ── Paths ───────────────────────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parent.parent

# ── Load .env ───────────────────────────────────────────────────────────
load_dotenv(PROJECT_ROOT / ".env")


def _split_csv(raw: str) -> List[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class Settings:
    """Service settings; every field can be overridden by an env variable."""
    app_name: str = "Voice Biomarker Screening API"
    version: str = "1.0.0"
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_file: Optional[str] = field(default_factory=lambda: os.getenv("LOG_FILE") or None)
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    cors_origins: List[str] = field(
        default_factory=lambda: _split_csv(os.getenv("CORS_ORIGINS", "*"))
    )
    max_upload_bytes: int = field(
        default_factory=lambda: int(os.getenv("MAX_UPLOAD_BYTES", str(25 * 1024 * 1024)))
    )
    max_feedback_entries: int = field(
        default_factory=lambda: int(os.getenv("MAX_FEEDBACK_ENTRIES", "500"))
    )
    max_sessions: int = field(
        default_factory=lambda: int(os.getenv("MAX_SESSIONS", "1000"))
    )


settings = Settings()
