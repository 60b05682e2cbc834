"""
Translation client: request deduplication, local caching and batching on top
of the translation API transport.

None of the public coroutines raise for network, API or cache failures;
failures come back inside the returned result objects.
"""
import asyncio
import dataclasses
import uuid
from collections import Counter
from typing import Any, Dict, Iterable, List, Optional, Union

from pydantic import ValidationError

from ..cache import (
    CacheStore,
    LANGUAGES_CACHE_KEY,
    create_cache_store,
    generate_cache_key,
    language_pair_scope,
)
from ..config import I18nClientConfig
from ..core import HTTPClientConfig
from ..logs.logging_config import get_client_logger, preview
from ..schemas import (
    BatchItemResult,
    BatchResult,
    JobStatus,
    Language,
    TranslationItem,
    TranslationResult,
)
from .config import ASYNC_JOB_STATUS, TRANSLATION_FAILED_MESSAGE
from .transport import TranslationTransport

logger = get_client_logger("client")

ItemInput = Union[TranslationItem, Dict[str, Any]]


def _error_message(error: BaseException) -> str:
    return str(error) or error.__class__.__name__


class I18nClient:
    """
    Caching, deduplicating client for the translation API.

    Example:
        async with I18nClient(api_key="secret", default_target_language="es") as client:
            result = await client.translate("Hello")
            print(result.text)   # "Hola"
    """

    def __init__(
        self,
        config: Optional[I18nClientConfig] = None,
        cache: Optional[CacheStore] = None,
        transport: Optional[TranslationTransport] = None,
        **overrides,
    ):
        """
        Initialize the client.

        Args:
            config: Client configuration (I18N_* environment settings if not given)
            cache: Cache store (backend from I18N_CACHE_BACKEND if not given)
            transport: API transport (built from config if not given)
            **overrides: I18nClientConfig fields overriding `config`
        """
        config = config or I18nClientConfig.from_env()
        if overrides:
            config = dataclasses.replace(config, **overrides)
        self.config = config

        self._cache = cache if cache is not None else create_cache_store()
        self._transport = transport or TranslationTransport(
            HTTPClientConfig(
                api_url=config.api_url,
                api_key=config.api_key,
                timeout=config.timeout,
                pool_limit=config.pool_limit,
                headers=dict(config.extra_headers),
            )
        )
        self._pending: Dict[str, "asyncio.Task[TranslationResult]"] = {}

        if not config.api_key:
            logger.warning("[I18N] No API key provided. Translations will fail.")

    async def __aenter__(self) -> "I18nClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Release the HTTP session and cache backend connections."""
        await self._transport.close()
        await self._cache.close()

    @property
    def cache(self) -> CacheStore:
        return self._cache

    @property
    def in_flight(self) -> int:
        """Number of translation requests currently on the wire."""
        return len(self._pending)

    # =========================
    # Single translation
    # =========================

    async def translate(
        self,
        text: Optional[str],
        source_language: Optional[str] = None,
        target_language: Optional[str] = None,
        preserve_formatting: bool = True,
        force: bool = False,
    ) -> TranslationResult:
        """
        Translate text from the source to the target language.

        Concurrent calls for the same (source, target, text) share a single
        API request and receive the same outcome.

        Args:
            text: Text to translate
            source_language: Source language code (configured default if not given)
            target_language: Target language code (configured default if not given)
            preserve_formatting: Ask the API to keep formatting
            force: Skip the cache lookup

        Returns:
            TranslationResult. On failure `text` is the original input and
            `error` holds the reason.
        """
        source = source_language or self.config.default_source_language
        target = target_language or self.config.default_target_language

        if not text:
            return TranslationResult(text="", translated=False)
        if not target:
            return TranslationResult(text=text, translated=False)
        if source == target:
            return TranslationResult(text=text, translated=False)

        cache_key = generate_cache_key(source, target, text)

        if self.config.use_local_cache and not force:
            cached = await self._get_from_cache(cache_key)
            if isinstance(cached, str) and cached:
                self._log(f"[I18N] Cache hit | key={cache_key}")
                return TranslationResult(text=cached, translated=True, from_cache=True)

        # Callers await the shared task through a shield: cancelling one
        # caller must not cancel the request for the others.
        pending = self._pending.get(cache_key)
        if pending is not None:
            self._log(f"[I18N] Using pending request | key={cache_key}")
            result = await asyncio.shield(pending)
            return result.model_copy()

        task = asyncio.ensure_future(
            self._run_translation(cache_key, text, source, target, preserve_formatting)
        )
        self._pending[cache_key] = task
        task.add_done_callback(lambda done: self._release_pending(cache_key, done))

        result = await asyncio.shield(task)
        return result.model_copy()

    def _release_pending(self, cache_key: str, task: "asyncio.Task[TranslationResult]") -> None:
        if self._pending.get(cache_key) is task:
            del self._pending[cache_key]

    async def _run_translation(
        self,
        cache_key: str,
        text: str,
        source_language: str,
        target_language: str,
        preserve_formatting: bool,
    ) -> TranslationResult:
        """Fetch a translation and cache it on success."""
        result = await self._fetch_translation(
            text, source_language, target_language, preserve_formatting
        )
        if result.translated and result.text and self.config.use_local_cache:
            await self._save_to_cache(cache_key, result.text)
        return result

    async def _fetch_translation(
        self,
        text: str,
        source_language: str,
        target_language: str,
        preserve_formatting: bool,
    ) -> TranslationResult:
        try:
            translated = await self._transport.translate(
                text, source_language, target_language, preserve_formatting
            )
        except Exception as e:
            logger.warning(
                f"[I18N] Translation error | {source_language}->{target_language} | "
                f"text={preview(text)!r} | error={_error_message(e)}"
            )
            return TranslationResult(text=text, translated=False, error=_error_message(e))

        return TranslationResult(text=translated, translated=True)

    # =========================
    # Batch translation
    # =========================

    async def batch_translate(
        self,
        items: Optional[Iterable[ItemInput]],
        preserve_formatting: bool = True,
        async_job: bool = False,
        force: bool = False,
    ) -> BatchResult:
        """
        Translate several items with a single API request.

        Cached items are answered locally and left out of the request. The
        returned results follow the input order.

        Args:
            items: TranslationItem instances or dicts (`text`, optional `id`,
                `sourceLanguage`, `targetLanguage`)
            preserve_formatting: Ask the API to keep formatting
            async_job: Ask the API to process the batch as a background job
            force: Skip the cache lookup

        Returns:
            BatchResult with `results`, or a job handle (`job_id`, `status`)
            when the API accepted an async job. Async job results are not
            cached.
        """
        items = list(items or [])
        if not items:
            return BatchResult(results=[])

        try:
            processed = [self._prepare_item(item) for item in items]
        except ValidationError as e:
            logger.warning(f"[I18N] Invalid batch items | errors={e.error_count()}")
            return BatchResult(results=[], error=f"Invalid translation items: {e.error_count()} error(s)")

        duplicates = sorted(
            item_id for item_id, count in Counter(item.id for item in processed).items() if count > 1
        )
        if duplicates:
            logger.warning(f"[I18N] Duplicate batch item ids | ids={duplicates}")
            return BatchResult(
                results=[], error=f"Invalid translation items: duplicate id(s) {', '.join(duplicates)}"
            )

        # index -> cached translation
        cached_texts: Dict[int, str] = {}
        if self.config.use_local_cache and not force:
            for index, item in enumerate(processed):
                cached = await self._get_from_cache(self._item_cache_key(item))
                if isinstance(cached, str) and cached:
                    cached_texts[index] = cached

        to_translate = [item for index, item in enumerate(processed) if index not in cached_texts]

        if not to_translate:
            self._log(f"[I18N] Batch served from cache | items={len(processed)}")
            return BatchResult(results=[
                self._cached_item_result(item, cached_texts[index])
                for index, item in enumerate(processed)
            ])

        self._log(
            f"[I18N] Batch request | items={len(processed)} | "
            f"cached={len(cached_texts)} | sent={len(to_translate)}"
        )

        try:
            response = await self._transport.batch_translate(
                [item.to_wire() for item in to_translate],
                preserve_formatting=preserve_formatting,
                async_job=async_job,
            )
        except Exception as e:
            message = _error_message(e)
            logger.warning(f"[I18N] Batch translation error | items={len(to_translate)} | error={message}")
            return BatchResult(
                error=message,
                results=[
                    self._cached_item_result(item, cached_texts[index])
                    if index in cached_texts
                    else BatchItemResult(id=item.id, text=item.text, translated=False, error=message)
                    for index, item in enumerate(processed)
                ],
            )

        if async_job and response.get("jobId"):
            job_id = str(response["jobId"])
            self._log(f"[I18N] Batch accepted as async job | job_id={job_id}")
            return BatchResult(job_id=job_id, status=ASYNC_JOB_STATUS)

        server_results = await self._collect_batch_results(response, processed)

        results: List[BatchItemResult] = []
        for index, item in enumerate(processed):
            if index in cached_texts:
                results.append(self._cached_item_result(item, cached_texts[index]))
            elif item.id in server_results:
                results.append(server_results[item.id])
            else:
                results.append(BatchItemResult(
                    id=item.id,
                    text=item.text,
                    translated=False,
                    error=TRANSLATION_FAILED_MESSAGE,
                ))

        return BatchResult(results=results)

    async def _collect_batch_results(
        self,
        response: Dict[str, Any],
        processed: List[TranslationItem],
    ) -> Dict[str, BatchItemResult]:
        """Index server results by id and cache the successful ones."""
        originals = {item.id: item for item in processed}
        server_results: Dict[str, BatchItemResult] = {}

        raw_results = response.get("results")
        if not isinstance(raw_results, list):
            logger.warning("[I18N] Batch response without results list")
            return server_results

        for raw in raw_results:
            try:
                result = BatchItemResult.model_validate(raw)
            except ValidationError:
                logger.warning(f"[I18N] Skipping malformed batch result | value={raw!r}")
                continue
            if result.id is None:
                continue
            if result.translated and not result.text:
                logger.warning(f"[I18N] Skipping batch result without text | id={result.id}")
                continue

            server_results[result.id] = result

            if result.translated and self.config.use_local_cache:
                original = originals.get(result.id)
                if original is not None:
                    await self._save_to_cache(self._item_cache_key(original), result.text)

        return server_results

    def _prepare_item(self, item: ItemInput) -> TranslationItem:
        if not isinstance(item, TranslationItem):
            item = TranslationItem.model_validate(item)
        return item.model_copy(update={
            "id": item.id or uuid.uuid4().hex,
            "source_language": item.source_language or self.config.default_source_language,
            "target_language": item.target_language or self.config.default_target_language,
        })

    @staticmethod
    def _item_cache_key(item: TranslationItem) -> str:
        return generate_cache_key(item.source_language, item.target_language, item.text)

    @staticmethod
    def _cached_item_result(item: TranslationItem, text: str) -> BatchItemResult:
        return BatchItemResult(id=item.id, text=text, translated=True, from_cache=True)

    # =========================
    # Async jobs
    # =========================

    async def check_job_status(self, job_id: str) -> JobStatus:
        """
        Check the status of an async batch job.

        Results of completed jobs are not written to the cache: the status
        response carries no language pair to build cache keys from.

        Returns:
            JobStatus from the API, or status "error" with `error` on failure
        """
        try:
            raw = await self._transport.job_status(job_id)
            status = JobStatus.model_validate(raw)
        except Exception as e:
            message = _error_message(e)
            logger.warning(f"[I18N] Job status check error | job_id={job_id} | error={message}")
            return JobStatus(job_id=job_id, status="error", error=message)

        if status.status == "completed" and status.results and self.config.use_local_cache:
            self._log(f"[I18N] Job results not cached (no language pair) | job_id={job_id}")

        return status

    # =========================
    # Languages
    # =========================

    async def get_languages(self) -> List[Language]:
        """
        Get the languages supported by the API.

        Returns:
            Language list (cached), or an empty list on failure
        """
        if self.config.use_local_cache:
            cached = await self._get_from_cache(LANGUAGES_CACHE_KEY)
            if isinstance(cached, list):
                try:
                    return [Language.model_validate(entry) for entry in cached]
                except ValidationError:
                    logger.warning("[I18N] Ignoring malformed cached language list")

        try:
            raw = await self._transport.languages()
            languages = [Language.model_validate(entry) for entry in raw]
        except Exception as e:
            logger.warning(f"[I18N] Failed to fetch languages | error={_error_message(e)}")
            return []

        if self.config.use_local_cache:
            await self._save_to_cache(
                LANGUAGES_CACHE_KEY, [language.to_wire() for language in languages]
            )

        return languages

    # =========================
    # Cache management
    # =========================

    async def clear_cache(self, target_language: Optional[str] = None) -> int:
        """
        Remove cached entries.

        Without a target language every entry under the cache key prefix is
        removed. With one, only entries for (default source language ->
        target_language) are removed; entries created with an explicit,
        non-default source language stay in the cache.

        Returns:
            Number of removed entries (0 when caching is disabled or on error)
        """
        if not self.config.use_local_cache:
            return 0

        scope = None
        if target_language:
            scope = language_pair_scope(self.config.default_source_language, target_language)

        try:
            removed = await self._cache.clear(scope)
        except Exception as e:
            logger.warning(f"[I18N] Error clearing cache | error={_error_message(e)}")
            return 0

        if target_language:
            self._log(f"[I18N] Cleared cache for {target_language} | removed={removed}")
        else:
            self._log(f"[I18N] Cleared all translation cache | removed={removed}")
        return removed

    async def _get_from_cache(self, key: str) -> Optional[Any]:
        try:
            return await self._cache.get(key)
        except Exception as e:
            logger.warning(f"[I18N] Error reading from cache | key={key} | error={_error_message(e)}")
            return None

    async def _save_to_cache(self, key: str, value: Any) -> None:
        try:
            await self._cache.set(key, value, self.config.cache_ttl)
        except Exception as e:
            logger.warning(f"[I18N] Error saving to cache | key={key} | error={_error_message(e)}")

    def _log(self, message: str) -> None:
        """Diagnostic log line, emitted only in debug mode."""
        if self.config.debug:
            logger.info(message)
