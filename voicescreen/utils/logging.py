"""
Logging Setup

Every line has the same four fields, so console and file output can be
grepped the same way:

    [2026-01-05T10:21:07.113000+00:00] INFO     [voicescreen.services.analysis] Session s1: analysing 30s recording

The timestamp is the record's creation time in UTC. Analysis ids and
session ids are part of the message text.
"""
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

# Third-party loggers that are chatty below WARNING (multipart parses every upload).
NOISY_LOGGERS = ("multipart", "python_multipart")


class StructuredFormatter(logging.Formatter):
    """Formats records as ``[utc timestamp] LEVEL [logger] message``."""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def __init__(self, use_color: bool = False):
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        line = f"[{timestamp}] {record.levelname:8} [{record.name}] {record.getMessage()}"

        if self.use_color and record.levelname in self.COLORS:
            line = f"{self.COLORS[record.levelname]}{line}{self.RESET}"
        if record.exc_info:
            line += f"\n{self.formatException(record.exc_info)}"
        return line


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Route all voicescreen loggers to stdout, and to ``log_file`` if given.

    Colour is only used when stdout is a terminal; the file never gets it.
    Calling this again replaces the previous handlers.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(StructuredFormatter(use_color=sys.stdout.isatty()))
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(StructuredFormatter())
        root_logger.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
