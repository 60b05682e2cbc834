"""
Exception hierarchy for the translation API client.

Transport code raises these; the client coordinator catches them at the
boundary of each public operation and turns them into result objects.
"""
from typing import Optional


class I18nClientError(Exception):
    """Base class for all client errors."""


class TranslationError(I18nClientError):
    """A translation API call failed."""


class TranslationNetworkError(TranslationError):
    """Connection-level failure (DNS, refused, reset)."""


class TranslationTimeoutError(TranslationNetworkError):
    """The request did not complete within the configured timeout."""


class TranslationAPIError(TranslationError):
    """The API answered with a non-2xx status or an unusable body."""

    def __init__(self, message: str, status: Optional[int] = None):
        self.message = message
        self.status = status
        super().__init__(message)
