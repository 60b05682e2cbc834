"""
Core Module

Shared infrastructure components:
- HTTP client base class
- Exception hierarchy
"""

from .http_client_base import BaseHTTPClient, HTTPClientConfig
from .exceptions import (
    I18nClientError,
    TranslationError,
    TranslationNetworkError,
    TranslationTimeoutError,
    TranslationAPIError,
)

__all__ = [
    "BaseHTTPClient",
    "HTTPClientConfig",
    "I18nClientError",
    "TranslationError",
    "TranslationNetworkError",
    "TranslationTimeoutError",
    "TranslationAPIError",
]
