"""
Cache Module

Expiring key-value caches for translations and the language list:
- CacheStore interface and the shared TTL/prefix logic
- In-memory, JSON file and Redis backends
- Cache key generation
"""
from typing import Optional

from .base import CacheEntry, CacheStore, KeyValueCacheStore
from .config import (
    I18N_CACHE_BACKEND,
    I18N_CACHE_KEY_PREFIX,
    LANGUAGES_CACHE_KEY,
)
from .file_store import FileCacheStore
from .keys import generate_cache_key, language_pair_scope, simple_hash
from .memory_store import MemoryCacheStore
from .redis_store import RedisCacheStore

CACHE_BACKENDS = {
    "memory": MemoryCacheStore,
    "file": FileCacheStore,
    "redis": RedisCacheStore,
}


def create_cache_store(backend: Optional[str] = None, **kwargs) -> CacheStore:
    """
    Create a cache store by backend name.

    Args:
        backend: memory | file | redis (defaults to I18N_CACHE_BACKEND)
        **kwargs: Passed to the store constructor

    Raises:
        ValueError: Unknown backend name
    """
    name = (backend or I18N_CACHE_BACKEND).lower()
    try:
        store_cls = CACHE_BACKENDS[name]
    except KeyError:
        raise ValueError(
            f"Unknown cache backend '{name}'. Available: {', '.join(sorted(CACHE_BACKENDS))}"
        ) from None
    return store_cls(**kwargs)


__all__ = [
    "CacheEntry",
    "CacheStore",
    "KeyValueCacheStore",
    "MemoryCacheStore",
    "FileCacheStore",
    "RedisCacheStore",
    "CACHE_BACKENDS",
    "create_cache_store",
    "generate_cache_key",
    "language_pair_scope",
    "simple_hash",
    "I18N_CACHE_KEY_PREFIX",
    "LANGUAGES_CACHE_KEY",
]
