"""
Logs Module

Provides:
- Logging configuration for the client (console + rotating file)
- HTTP request/response logging with latency
- Request ID tracking (RequestContext)
"""

from .logging_config import (
    setup_client_logging,
    get_client_logger,
    log_http_request,
    log_http_response,
    preview,
    RequestContext,
    RequestIdFilter,
    set_request_id,
    get_request_id,
    clear_request_id,
    generate_request_id,
)

__all__ = [
    "setup_client_logging",
    "get_client_logger",
    "log_http_request",
    "log_http_response",
    "preview",
    "RequestContext",
    "RequestIdFilter",
    "set_request_id",
    "get_request_id",
    "clear_request_id",
    "generate_request_id",
]
