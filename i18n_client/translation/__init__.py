"""
Translation Module

Client-side translation with local caching, request deduplication and
batching over the translation HTTP API.
"""

from .client import I18nClient
from .transport import TranslationTransport

__all__ = ["I18nClient", "TranslationTransport"]
