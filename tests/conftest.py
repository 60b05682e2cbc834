"""
Shared fixtures: a scripted transport double, a controllable clock and a
client factory wired to both.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional

import pytest

from i18n_client import I18nClient, MemoryCacheStore
from i18n_client.logs import get_request_id


class FakeClock:
    """Manually advanced clock (seconds since epoch)."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeTransport:
    """In-memory stand-in for TranslationTransport that records every call."""

    def __init__(self):
        self.translate_calls: List[Dict[str, Any]] = []
        self.request_ids: List[Optional[str]] = []
        self.batch_calls: List[Dict[str, Any]] = []
        self.status_calls: List[str] = []
        self.language_calls = 0

        self.translations: Dict[str, str] = {}
        self.translate_error: Optional[BaseException] = None
        self.translate_delay = 0.0

        self.batch_response: Optional[Dict[str, Any]] = None
        self.batch_error: Optional[BaseException] = None

        self.status_response: Dict[str, Any] = {"jobId": "job-1", "status": "pending"}
        self.status_error: Optional[BaseException] = None

        self.languages_response: List[Dict[str, Any]] = [
            {"code": "en", "name": "English"},
            {"code": "es", "name": "Spanish", "nativeName": "Español", "flag": "🇪🇸"},
            {"code": "ar", "name": "Arabic", "rtl": True},
        ]
        self.languages_error: Optional[BaseException] = None

        self.closed = False

    async def translate(self, text, source_language, target_language, preserve_formatting=True):
        self.translate_calls.append({
            "text": text,
            "source_language": source_language,
            "target_language": target_language,
            "preserve_formatting": preserve_formatting,
        })
        self.request_ids.append(get_request_id())
        if self.translate_delay:
            await asyncio.sleep(self.translate_delay)
        if self.translate_error is not None:
            raise self.translate_error
        return self.translations.get(text, f"[{target_language}] {text}")

    async def batch_translate(self, items, preserve_formatting=True, async_job=False):
        self.batch_calls.append({
            "items": items,
            "preserve_formatting": preserve_formatting,
            "async_job": async_job,
        })
        if self.batch_error is not None:
            raise self.batch_error
        if self.batch_response is not None:
            return self.batch_response
        return {
            "results": [
                {
                    "id": item["id"],
                    "text": f"[{item['targetLanguage']}] {item['text']}",
                    "translated": True,
                }
                for item in items
            ]
        }

    async def job_status(self, job_id):
        self.status_calls.append(job_id)
        if self.status_error is not None:
            raise self.status_error
        return self.status_response

    async def languages(self):
        self.language_calls += 1
        if self.languages_error is not None:
            raise self.languages_error
        return self.languages_response

    async def close(self):
        self.closed = True


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def storage() -> Dict[str, str]:
    """Backing mapping shared with the memory store (may hold unrelated keys)."""
    return {}


@pytest.fixture
def make_client(transport, clock, storage):
    """Factory for clients using the fake transport and a memory cache."""

    def factory(**overrides) -> I18nClient:
        overrides.setdefault("api_key", "test-key")
        cache = overrides.pop("cache", None) or MemoryCacheStore(storage=storage, clock=clock)
        return I18nClient(cache=cache, transport=transport, **overrides)

    return factory
