"""
File-backed cache store.

The whole cache is one JSON object on disk. Reads and writes run in a worker
thread so the event loop never blocks on file I/O.
"""
import asyncio
import json
import os
import tempfile
import time
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Union

from .base import KeyValueCacheStore
from .config import I18N_CACHE_FILE, I18N_CACHE_KEY_PREFIX


class FileCacheStore(KeyValueCacheStore):
    """
    JSON file cache store.

    Other keys present in the file (not under the key prefix) are preserved
    across writes and clears.
    """

    def __init__(
        self,
        path: Union[str, Path] = I18N_CACHE_FILE,
        key_prefix: str = I18N_CACHE_KEY_PREFIX,
        clock: Callable[[], float] = time.time,
    ):
        super().__init__(key_prefix=key_prefix, clock=clock)
        self._path = Path(path)
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> Dict[str, str]:
        if not self._path.exists():
            return {}
        with self._path.open("r", encoding="utf-8") as f:
            content = f.read()
        if not content.strip():
            return {}
        data = json.loads(content)
        if not isinstance(data, dict):
            raise ValueError(f"Cache file {self._path} does not contain a JSON object")
        return data

    def _dump(self, data: Dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(self._path.parent), suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
            os.replace(tmp_path, self._path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def _update(self, changes: Dict[str, Optional[str]]) -> None:
        data = self._load()
        for key, value in changes.items():
            if value is None:
                data.pop(key, None)
            else:
                data[key] = value
        self._dump(data)

    async def _read(self, storage_key: str) -> Optional[str]:
        async with self._lock:
            data = await asyncio.to_thread(self._load)
        return data.get(storage_key)

    async def _write(self, storage_key: str, data: str, ttl: int) -> None:
        async with self._lock:
            await asyncio.to_thread(self._update, {storage_key: data})

    async def _delete(self, storage_key: str) -> None:
        await self._delete_many([storage_key])

    async def _delete_many(self, storage_keys: Iterable[str]) -> None:
        changes = {key: None for key in storage_keys}
        async with self._lock:
            await asyncio.to_thread(self._update, changes)

    async def _keys(self, storage_prefix: str) -> List[str]:
        async with self._lock:
            data = await asyncio.to_thread(self._load)
        return [k for k in data if k.startswith(storage_prefix)]
