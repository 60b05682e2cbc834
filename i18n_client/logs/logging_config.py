"""
Logging setup for the i18n client.

Provides:
- A package logger with console and optional rotating file output
- Request ID tracking through contextvars (RequestContext)
- HTTP request/response log helpers used by the transport
"""
import logging
import uuid
from contextvars import ContextVar
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .config import (
    CLIENT_LOGGER_NAME,
    LOG_OUTPUT_DIR,
    LOG_MAX_BYTES,
    LOG_BACKUP_COUNT,
    LOG_FILE_NAME,
    LOG_PREVIEW_LENGTH,
    LOG_DATE_FORMAT,
    LOG_DETAILED_FORMAT,
    LOG_SIMPLE_FORMAT,
)

_request_id: ContextVar[Optional[str]] = ContextVar("i18n_request_id", default=None)


# =========================
# Request ID Context
# =========================

def generate_request_id() -> str:
    """Generate a new request identifier."""
    return uuid.uuid4().hex


def set_request_id(request_id: str) -> None:
    _request_id.set(request_id)


def get_request_id() -> Optional[str]:
    return _request_id.get()


def clear_request_id() -> None:
    _request_id.set(None)


class RequestContext:
    """
    Context manager binding a request ID to every log record emitted inside it.

    Example:
        with RequestContext() as request_id:
            logger.info("inside")   # record.request_id == request_id
    """

    def __init__(self, request_id: Optional[str] = None):
        self.request_id = request_id or generate_request_id()
        self._token = None

    def __enter__(self) -> str:
        self._token = _request_id.set(self.request_id)
        return self.request_id

    def __exit__(self, exc_type, exc, tb) -> None:
        _request_id.reset(self._token)


class RequestIdFilter(logging.Filter):
    """Inject the current request ID into log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"
        return True


# =========================
# Setup
# =========================

def setup_client_logging(
    level: int = logging.INFO,
    log_dir: Optional[str] = LOG_OUTPUT_DIR,
    detailed: bool = False,
) -> logging.Logger:
    """
    Configure the package logger.

    Safe to call more than once; handlers are replaced rather than stacked.

    Args:
        level: Logging level for the package logger
        log_dir: Directory for a rotating log file (console only if None)
        detailed: Use the detailed format (logger name and function)

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(CLIENT_LOGGER_NAME)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        LOG_DETAILED_FORMAT if detailed else LOG_SIMPLE_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )
    request_filter = RequestIdFilter()

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    console.addFilter(request_filter)
    logger.addHandler(console)

    if log_dir:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            path / LOG_FILE_NAME,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        file_handler.addFilter(request_filter)
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def get_client_logger(name: Optional[str] = None) -> logging.Logger:
    """Get the package logger, or a child of it."""
    if name:
        return logging.getLogger(f"{CLIENT_LOGGER_NAME}.{name}")
    return logging.getLogger(CLIENT_LOGGER_NAME)


# =========================
# Log Helpers
# =========================

def preview(text: Optional[str], length: int = LOG_PREVIEW_LENGTH) -> str:
    """Shorten text for log lines."""
    if not text:
        return ""
    text = text.replace("\n", " ")
    if len(text) <= length:
        return text
    return text[:length] + "..."


def log_http_request(
    method: str,
    url: str,
    client_name: str = "i18n",
    request_id: Optional[str] = None,
) -> str:
    """
    Log an outgoing HTTP request.

    Returns:
        The request ID (current context ID, or a new one)
    """
    request_id = request_id or get_request_id() or generate_request_id()
    get_client_logger("http").debug(
        f"[{client_name.upper()}_HTTP] REQUEST | request_id={request_id} | "
        f"method={method} | url={url}"
    )
    return request_id


def log_http_response(
    request_id: str,
    method: str,
    url: str,
    status: Optional[int],
    latency_ms: float,
    client_name: str = "i18n",
    error_message: Optional[str] = None,
) -> None:
    """Log the outcome of an HTTP request with its latency."""
    logger = get_client_logger("http")
    line = (
        f"[{client_name.upper()}_HTTP] RESPONSE | request_id={request_id} | "
        f"method={method} | url={url} | status={status} | latency_ms={latency_ms:.1f}"
    )
    if error_message:
        logger.warning(f"{line} | error={error_message}")
    else:
        logger.debug(line)
