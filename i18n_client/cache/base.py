"""
Cache store interface and the shared expiring key-value implementation.

Entries are stored as JSON text ``{"value": ..., "expiresAt": <epoch ms>}``
under a reserved key prefix, so a store can share its backing storage with
unrelated data without ever touching it.
"""
import json
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional

from .config import I18N_CACHE_KEY_PREFIX
from ..logs.logging_config import get_client_logger

logger = get_client_logger("cache")


@dataclass
class CacheEntry:
    """A cached value with its absolute expiry time."""
    value: Any
    expires_at: int  # epoch milliseconds

    def is_expired(self, now_ms: int) -> bool:
        return self.expires_at <= now_ms

    def to_json(self) -> str:
        return json.dumps({"value": self.value, "expiresAt": self.expires_at}, ensure_ascii=False)

    @classmethod
    def from_json(cls, json_str: str) -> "CacheEntry":
        data = json.loads(json_str)
        return cls(value=data["value"], expires_at=int(data["expiresAt"]))


class CacheStore(ABC):
    """
    Abstract cache store used by the client.

    Implementations may raise on storage failures; the client treats any
    failure as a cache miss.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Return the live value for key, or None if absent or expired."""
        ...

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: int) -> None:
        """Store value under key for ttl seconds, overwriting any entry."""
        ...

    @abstractmethod
    async def clear(self, scope: Optional[str] = None) -> int:
        """
        Remove entries created by this store.

        Args:
            scope: Only remove keys starting with this sub-prefix

        Returns:
            Number of removed entries
        """
        ...

    async def close(self) -> None:
        """Release backend resources."""
        pass


class KeyValueCacheStore(CacheStore):
    """
    Expiring cache on top of a plain text key-value backend.

    Subclasses implement the raw primitives; TTL handling, the key prefix and
    serialization live here.
    """

    def __init__(
        self,
        key_prefix: str = I18N_CACHE_KEY_PREFIX,
        clock: Callable[[], float] = time.time,
    ):
        self._prefix = key_prefix
        self._clock = clock

    @property
    def key_prefix(self) -> str:
        return self._prefix

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    # ---- raw backend primitives ----

    @abstractmethod
    async def _read(self, storage_key: str) -> Optional[str]:
        ...

    @abstractmethod
    async def _write(self, storage_key: str, data: str, ttl: int) -> None:
        ...

    @abstractmethod
    async def _delete(self, storage_key: str) -> None:
        ...

    @abstractmethod
    async def _keys(self, storage_prefix: str) -> List[str]:
        """Return every backend key starting with storage_prefix."""
        ...

    async def _delete_many(self, storage_keys: Iterable[str]) -> None:
        for storage_key in storage_keys:
            await self._delete(storage_key)

    # ---- CacheStore ----

    async def get(self, key: str) -> Optional[Any]:
        storage_key = self._key(key)
        data = await self._read(storage_key)
        if data is None:
            return None

        try:
            entry = CacheEntry.from_json(data)
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"[CACHE] Corrupt entry evicted | key={storage_key} | error={e}")
            await self._delete(storage_key)
            return None

        if entry.is_expired(self._now_ms()):
            logger.debug(f"[CACHE] Expired | key={storage_key}")
            await self._delete(storage_key)
            return None

        return entry.value

    async def set(self, key: str, value: Any, ttl: int) -> None:
        entry = CacheEntry(value=value, expires_at=self._now_ms() + int(ttl * 1000))
        await self._write(self._key(key), entry.to_json(), ttl)

    async def clear(self, scope: Optional[str] = None) -> int:
        storage_prefix = self._key(scope or "")
        keys = await self._keys(storage_prefix)
        if keys:
            await self._delete_many(keys)
        logger.debug(f"[CACHE] Cleared | prefix={storage_prefix} | removed={len(keys)}")
        return len(keys)
