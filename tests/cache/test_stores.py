"""
Cache store and cache key tests
"""

from __future__ import annotations

import asyncio
import fnmatch
import json

import pytest

from i18n_client.cache import (
    CacheEntry,
    FileCacheStore,
    MemoryCacheStore,
    RedisCacheStore,
    create_cache_store,
    generate_cache_key,
    language_pair_scope,
    simple_hash,
)


class FakeRedis:
    """Minimal async Redis double for the commands RedisCacheStore uses."""

    def __init__(self):
        self.data = {}
        self.expiries = {}
        self.closed = False

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value):
        self.data[key] = value

    async def setex(self, key, ttl, value):
        self.data[key] = value
        self.expiries[key] = ttl

    async def delete(self, *keys):
        removed = 0
        for key in keys:
            if self.data.pop(key, None) is not None:
                removed += 1
        return removed

    async def scan_iter(self, match=None):
        for key in list(self.data):
            if match is None or fnmatch.fnmatchcase(key, match):
                yield key

    async def aclose(self):
        self.closed = True


class TestCacheKeys:
    """Key and hash generation"""

    def test_known_hashes(self):
        assert simple_hash("") == "0"
        assert simple_hash("a") == "61"
        assert simple_hash("Hello") == "42628b2"
        assert simple_hash("hello world") == "6aefe2c4"

    def test_hash_is_non_negative_hex(self):
        for text in ["Good morning", "x" * 500, "こんにちは", "emoji 🎉"]:
            value = simple_hash(text)
            assert value == value.lower()
            int(value, 16)
            assert not value.startswith("-")

    def test_generate_cache_key(self):
        assert generate_cache_key("en", "es", "Hello") == "en:es:42628b2"

    def test_language_pair_scope(self):
        assert language_pair_scope("en", "es") == "en:es:"
        assert generate_cache_key("en", "es", "x").startswith(language_pair_scope("en", "es"))


class TestCacheEntry:
    """Serialized entry layout"""

    def test_json_layout(self):
        entry = CacheEntry(value="Hola", expires_at=1000)
        assert json.loads(entry.to_json()) == {"value": "Hola", "expiresAt": 1000}
        assert CacheEntry.from_json(entry.to_json()) == entry

    def test_expiry_boundary(self):
        entry = CacheEntry(value="x", expires_at=1000)
        assert entry.is_expired(999) is False
        assert entry.is_expired(1000) is True


class TestMemoryCacheStore:
    """Shared KeyValueCacheStore behaviour through the memory backend"""

    def test_set_get(self, clock):
        store = MemoryCacheStore(clock=clock)

        async def run():
            await store.set("k", "v", 60)
            return await store.get("k")

        assert asyncio.run(run()) == "v"
        assert json.loads(store.storage["i18n_k"])["expiresAt"] == int(clock.now * 1000) + 60_000

    def test_missing_key(self, clock):
        assert asyncio.run(MemoryCacheStore(clock=clock).get("nope")) is None

    def test_expired_entry_evicted_on_read(self, clock):
        store = MemoryCacheStore(clock=clock)

        async def run():
            await store.set("k", "v", 5)
            clock.advance(5)
            return await store.get("k")

        assert asyncio.run(run()) is None
        assert store.storage == {}

    def test_set_overwrites_and_restarts_ttl(self, clock):
        store = MemoryCacheStore(clock=clock)

        async def run():
            await store.set("k", "old", 10)
            clock.advance(8)
            await store.set("k", "new", 10)
            clock.advance(8)
            return await store.get("k")

        assert asyncio.run(run()) == "new"

    def test_list_values(self, clock):
        store = MemoryCacheStore(clock=clock)
        value = [{"code": "es", "name": "Spanish"}]

        async def run():
            await store.set("languages", value, 60)
            return await store.get("languages")

        assert asyncio.run(run()) == value

    def test_clear_scoped_and_unrelated(self, clock):
        storage = {"unrelated": "keep", "i18nish": "keep"}
        store = MemoryCacheStore(storage=storage, clock=clock)

        async def run():
            await store.set("en:es:1", "a", 60)
            await store.set("en:es:2", "b", 60)
            await store.set("en:de:1", "c", 60)
            scoped = await store.clear("en:es:")
            remaining = sorted(store.storage)
            everything = await store.clear()
            return scoped, remaining, everything

        scoped, remaining, everything = asyncio.run(run())

        assert scoped == 2
        assert remaining == ["i18n_en:de:1", "i18nish", "unrelated"]
        assert everything == 1
        assert storage == {"unrelated": "keep", "i18nish": "keep"}

    def test_custom_prefix(self, clock):
        store = MemoryCacheStore(key_prefix="app_", clock=clock)
        asyncio.run(store.set("k", "v", 60))

        assert list(store.storage) == ["app_k"]


class TestFileCacheStore:
    """JSON file backend"""

    def test_persists_across_instances(self, tmp_path, clock):
        path = tmp_path / "cache.json"

        async def run():
            await FileCacheStore(path, clock=clock).set("k", "Hola", 60)
            return await FileCacheStore(path, clock=clock).get("k")

        assert asyncio.run(run()) == "Hola"
        assert "i18n_k" in json.loads(path.read_text(encoding="utf-8"))

    def test_missing_file_is_empty(self, tmp_path, clock):
        store = FileCacheStore(tmp_path / "absent" / "cache.json", clock=clock)

        assert asyncio.run(store.get("k")) is None
        assert asyncio.run(store.clear()) == 0

    def test_expiry_and_clear_keep_foreign_keys(self, tmp_path, clock):
        path = tmp_path / "cache.json"
        path.write_text(json.dumps({"foreign": "value"}), encoding="utf-8")
        store = FileCacheStore(path, clock=clock)

        async def run():
            await store.set("a", "1", 10)
            await store.set("b", "2", 100)
            clock.advance(10)
            expired = await store.get("a")
            removed = await store.clear()
            return expired, removed

        expired, removed = asyncio.run(run())

        assert expired is None
        assert removed == 1
        assert json.loads(path.read_text(encoding="utf-8")) == {"foreign": "value"}

    def test_concurrent_writes_not_lost(self, tmp_path, clock):
        store = FileCacheStore(tmp_path / "cache.json", clock=clock)

        async def run():
            await asyncio.gather(*[store.set(f"k{i}", str(i), 60) for i in range(10)])
            return [await store.get(f"k{i}") for i in range(10)]

        assert asyncio.run(run()) == [str(i) for i in range(10)]

    def test_non_object_file_raises(self, tmp_path, clock):
        path = tmp_path / "cache.json"
        path.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(ValueError):
            asyncio.run(FileCacheStore(path, clock=clock).get("k"))


class TestRedisCacheStore:
    """Redis backend against an in-memory double"""

    def test_set_uses_native_expiry(self, clock):
        fake = FakeRedis()
        store = RedisCacheStore(client=fake, clock=clock)

        async def run():
            await store.set("en:es:1", "Hola", 120)
            return await store.get("en:es:1")

        assert asyncio.run(run()) == "Hola"
        assert fake.expiries == {"i18n_en:es:1": 120}

    def test_clear_with_scope(self, clock):
        fake = FakeRedis()
        fake.data["session:1"] = "keep"
        store = RedisCacheStore(client=fake, clock=clock)

        async def run():
            await store.set("en:es:1", "a", 60)
            await store.set("en:de:1", "b", 60)
            scoped = await store.clear("en:es:")
            rest = await store.clear()
            return scoped, rest

        assert asyncio.run(run()) == (1, 1)
        assert fake.data == {"session:1": "keep"}

    def test_expired_entry_evicted(self, clock):
        fake = FakeRedis()
        store = RedisCacheStore(client=fake, clock=clock)

        async def run():
            await store.set("k", "v", 1)
            clock.advance(2)
            return await store.get("k")

        assert asyncio.run(run()) is None
        assert fake.data == {}

    def test_close(self, clock):
        fake = FakeRedis()
        store = RedisCacheStore(client=fake, clock=clock)
        asyncio.run(store.close())

        assert fake.closed is True


class TestCreateCacheStore:
    """Backend factory"""

    def test_known_backends(self, tmp_path):
        assert isinstance(create_cache_store("memory"), MemoryCacheStore)
        assert isinstance(create_cache_store("FILE", path=tmp_path / "c.json"), FileCacheStore)
        assert isinstance(create_cache_store("redis", client=FakeRedis()), RedisCacheStore)

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unknown cache backend 'sqlite'"):
            create_cache_store("sqlite")
