"""In-process cache store."""
import time
from typing import Callable, List, MutableMapping, Optional

from .base import KeyValueCacheStore
from .config import I18N_CACHE_KEY_PREFIX


class MemoryCacheStore(KeyValueCacheStore):
    """
    Dict-backed cache store.

    A caller-supplied mapping may be passed as ``storage``; it can hold
    unrelated keys, which the store leaves alone.
    """

    def __init__(
        self,
        storage: Optional[MutableMapping[str, str]] = None,
        key_prefix: str = I18N_CACHE_KEY_PREFIX,
        clock: Callable[[], float] = time.time,
    ):
        super().__init__(key_prefix=key_prefix, clock=clock)
        self._storage: MutableMapping[str, str] = storage if storage is not None else {}

    @property
    def storage(self) -> MutableMapping[str, str]:
        return self._storage

    async def _read(self, storage_key: str) -> Optional[str]:
        return self._storage.get(storage_key)

    async def _write(self, storage_key: str, data: str, ttl: int) -> None:
        self._storage[storage_key] = data

    async def _delete(self, storage_key: str) -> None:
        self._storage.pop(storage_key, None)

    async def _keys(self, storage_prefix: str) -> List[str]:
        return [k for k in list(self._storage) if k.startswith(storage_prefix)]
