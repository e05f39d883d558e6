"""Structured logging configuration for the shorts analyzer.

structlog renders both structlog loggers and plain ``logging.getLogger``
loggers, so every line carries the same timestamp, level and request fields.
"""

import logging
import sys
from contextvars import ContextVar

import structlog

# Request ID of the HTTP request being handled, if any
current_request_id: ContextVar[str | None] = ContextVar("current_request_id", default=None)

# Third-party loggers that are only interesting at WARNING and above
NOISY_LOGGERS = (
    "httpx",
    "httpcore",
    "openai",
    "google_genai",
    "google_genai.models",
    "googleapiclient.discovery_cache",
    "urllib3.connectionpool",
    "yt_dlp",
    "faster_whisper",
)


def add_request_id(_logger, _method_name, event_dict):
    """Structlog processor that stamps the current request_id on each event."""
    request_id = current_request_id.get()
    if request_id:
        event_dict["request_id"] = request_id
    return event_dict


def setup_logging(log_level: str = "INFO", json_output: bool = False) -> None:
    """Configure structlog and route stdlib logging through it.

    Args:
        log_level: Root level name (DEBUG, INFO, WARNING, ERROR); unknown
            names fall back to INFO
        json_output: Render JSON lines (LOG_JSON=true) instead of the
            colored console format
    """
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_request_id,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    )

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger bound to ``name``."""
    return structlog.get_logger(name)


def set_request_context(request_id: str, **fields) -> None:
    """Attach a request id (and optional fields such as path) to later log lines."""
    current_request_id.set(request_id)
    if fields:
        structlog.contextvars.bind_contextvars(**fields)


def clear_request_context() -> None:
    """Forget everything bound by set_request_context()."""
    current_request_id.set(None)
    structlog.contextvars.clear_contextvars()
