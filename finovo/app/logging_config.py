"""
Logging configuration for the Finovo backend.

Uses structlog for structured logging with:
- Console output (stdout, always on)
- File output with weekly rotation (logs/finovo.log, optional)
- JSON rendering for both outputs
- Redaction of credentials before anything is rendered

Log rotation: Weekly with 52 weeks (1 year) retention, gzip compression.
"""
import gzip
import logging
import logging.handlers
import shutil
import sys
from pathlib import Path
from typing import Any, Optional

import structlog
from structlog.types import EventDict

LOG_FILE_NAME = "finovo.log"

# Event keys never written to logs in clear
SENSITIVE_KEYS = frozenset({"password", "new_password", "hashed_password", "session_id", "cookie"})


def get_log_directory(base_dir: Optional[Path] = None) -> Path:
    """Get or create the log directory (default: <project root>/logs)."""
    log_dir = base_dir or Path(__file__).parent.parent.parent / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def add_log_level(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Add log level to the event dict.
    """
    if method_name == "warn":
        method_name = "warning"
    event_dict["level"] = method_name.upper()
    return event_dict


def redact_sensitive(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Mask credential-like values.

    Session ids keep their first 8 characters so log lines can still be
    correlated; every other sensitive key is replaced entirely.
    """
    for key in SENSITIVE_KEYS.intersection(event_dict):
        value = event_dict[key]
        if key == "session_id" and isinstance(value, str):
            event_dict[key] = value[:8] + "..."
        else:
            event_dict[key] = "***"
    return event_dict


def _get_rotated_filename(default_name: str) -> str:
    """
    Custom namer for rotated log files.
    Adds .gz extension for compression.

    Example: finovo.log.2026-03-02 -> finovo.log.2026-03-02.gz
    """
    return default_name + ".gz"


def _compress_rotated_file(source: str, dest: str) -> None:
    """Gzip a rotated log file and remove the uncompressed original."""
    with open(source, 'rb') as f_in:
        with gzip.open(dest, 'wb') as f_out:
            shutil.copyfileobj(f_in, f_out)
    Path(source).unlink()


def _build_file_handler(log_dir: Path, level: int) -> logging.Handler:
    # W0 = rotate every Monday at midnight UTC, keep one year
    file_handler = logging.handlers.TimedRotatingFileHandler(
        filename=str(log_dir / LOG_FILE_NAME),
        when="W0",
        interval=1,
        backupCount=52,
        encoding="utf-8",
        utc=True,
        )
    file_handler.setLevel(level)
    file_handler.rotator = _compress_rotated_file
    file_handler.namer = _get_rotated_filename
    return file_handler


def configure_logging(
    log_level: str = "INFO",
    enable_file_logging: bool = True,
    log_dir: Optional[Path] = None,
    ) -> None:
    """
    Configure structured logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        enable_file_logging: Whether to also write logs/finovo.log
        log_dir: Override for the log directory (tests)
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    handlers: list[logging.Handler] = [console_handler]

    if enable_file_logging:
        handlers.append(_build_file_handler(get_log_directory(log_dir), numeric_level))

    # force=True drops whatever handlers were installed before (uvicorn, reloads)
    logging.basicConfig(
        format="%(message)s",
        handlers=handlers,
        level=numeric_level,
        force=True
        )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            add_log_level,
            redact_sensitive,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
            ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
        )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a logger instance (structured logger).

    Usage:
        logger = get_logger(__name__)
        logger.info("message", key="value")
    """
    return structlog.get_logger(name)
