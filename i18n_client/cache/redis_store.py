"""
Redis Cache Store - Async Redis-backed translation cache.

Entries keep the same ``{value, expiresAt}`` layout as the other stores and are
also written with a native Redis expiry, so stale keys disappear even when
nobody reads them.
"""
import re
import time
import redis.asyncio as redis
from typing import Callable, Iterable, List, Optional

from .base import KeyValueCacheStore
from .config import I18N_CACHE_KEY_PREFIX, REDIS_HOST, REDIS_PORT, REDIS_DB
from ..logs.logging_config import get_client_logger

logger = get_client_logger("cache")

_GLOB_SPECIAL = re.compile(r"([*?\[\]\\])")


class RedisCacheStore(KeyValueCacheStore):
    """Async Redis cache store."""

    def __init__(
        self,
        host: str = REDIS_HOST,
        port: int = REDIS_PORT,
        db: int = REDIS_DB,
        key_prefix: str = I18N_CACHE_KEY_PREFIX,
        clock: Callable[[], float] = time.time,
        client: Optional[redis.Redis] = None,
    ):
        super().__init__(key_prefix=key_prefix, clock=clock)
        self._redis: Optional[redis.Redis] = client
        self._host = host
        self._port = port
        self._db = db

    async def _get_redis(self) -> redis.Redis:
        """Get or create async Redis connection."""
        if self._redis is None:
            self._redis = redis.Redis(
                host=self._host,
                port=self._port,
                db=self._db,
                decode_responses=True
            )
            logger.info(f"[CACHE_STORE] Redis initialized | host={self._host}:{self._port} | db={self._db}")
        return self._redis

    async def close(self):
        """Close Redis connection."""
        if self._redis:
            await self._redis.aclose()
            self._redis = None

    async def _read(self, storage_key: str) -> Optional[str]:
        r = await self._get_redis()
        return await r.get(storage_key)

    async def _write(self, storage_key: str, data: str, ttl: int) -> None:
        r = await self._get_redis()
        if ttl and ttl > 0:
            await r.setex(storage_key, int(ttl), data)
        else:
            await r.set(storage_key, data)

    async def _delete(self, storage_key: str) -> None:
        r = await self._get_redis()
        await r.delete(storage_key)

    async def _delete_many(self, storage_keys: Iterable[str]) -> None:
        keys = list(storage_keys)
        if keys:
            r = await self._get_redis()
            await r.delete(*keys)

    async def _keys(self, storage_prefix: str) -> List[str]:
        r = await self._get_redis()
        pattern = _GLOB_SPECIAL.sub(r"\\\1", storage_prefix) + "*"
        return [key async for key in r.scan_iter(match=pattern)]
