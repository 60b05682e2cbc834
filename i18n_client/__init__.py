"""
i18n-client - Client-side translation with local caching.

Provides:
- Async translation client with request deduplication and batching
- Expiring local cache (memory, JSON file or Redis)
- aiohttp transport for the translation HTTP API
- Optional FastAPI gateway router (i18n_client.service)
"""

from .config import I18nClientConfig
from .cache import (
    CacheStore,
    MemoryCacheStore,
    FileCacheStore,
    RedisCacheStore,
    create_cache_store,
)
from .core import (
    I18nClientError,
    TranslationError,
    TranslationNetworkError,
    TranslationTimeoutError,
    TranslationAPIError,
)
from .logs import setup_client_logging, get_client_logger
from .schemas import (
    BatchItemResult,
    BatchResult,
    JobStatus,
    Language,
    TranslationItem,
    TranslationResult,
)
from .translation import I18nClient, TranslationTransport

__version__ = "0.1.0"

__all__ = [
    # Client
    "I18nClient",
    "I18nClientConfig",
    "TranslationTransport",
    # Cache
    "CacheStore",
    "MemoryCacheStore",
    "FileCacheStore",
    "RedisCacheStore",
    "create_cache_store",
    # Results
    "BatchItemResult",
    "BatchResult",
    "JobStatus",
    "Language",
    "TranslationItem",
    "TranslationResult",
    # Errors
    "I18nClientError",
    "TranslationError",
    "TranslationNetworkError",
    "TranslationTimeoutError",
    "TranslationAPIError",
    # Logging
    "setup_client_logging",
    "get_client_logger",
    "__version__",
]
