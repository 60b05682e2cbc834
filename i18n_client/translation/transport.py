"""
Translation API transport.

Thin endpoint layer over BaseHTTPClient. Every method raises on failure; the
client coordinator decides how failures surface to callers.
"""
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from ..core import BaseHTTPClient, HTTPClientConfig, TranslationAPIError
from .config import (
    TRANSLATE_PATH,
    BATCH_TRANSLATE_PATH,
    JOB_STATUS_PATH,
    LANGUAGES_PATH,
    TRANSLATION_FAILED_MESSAGE,
    JOB_STATUS_FAILED_MESSAGE,
    LANGUAGES_FAILED_MESSAGE,
)


class TranslationTransport(BaseHTTPClient):
    """HTTP calls to the four translation API endpoints."""

    def __init__(self, config: Optional[HTTPClientConfig] = None):
        super().__init__(config or HTTPClientConfig())

    async def translate(
        self,
        text: str,
        source_language: str,
        target_language: str,
        preserve_formatting: bool = True,
    ) -> str:
        """
        Translate one text.

        Returns:
            The translated text

        Raises:
            TranslationAPIError: Failed response, or a success body without `text`
        """
        result = await self.request_json(
            "POST",
            TRANSLATE_PATH,
            payload={
                "text": text,
                "sourceLanguage": source_language,
                "targetLanguage": target_language,
                "preserveFormatting": preserve_formatting,
            },
            error_message=TRANSLATION_FAILED_MESSAGE,
        )
        translated = result.get("text")
        if not isinstance(translated, str):
            raise TranslationAPIError(result.get("error") or TRANSLATION_FAILED_MESSAGE)
        return translated

    async def batch_translate(
        self,
        items: List[Dict[str, Any]],
        preserve_formatting: bool = True,
        async_job: bool = False,
    ) -> Dict[str, Any]:
        """
        Translate several items in one request.

        Returns:
            Raw response body: ``{"results": [...]}`` or ``{"jobId": ...}``
        """
        return await self.request_json(
            "POST",
            BATCH_TRANSLATE_PATH,
            payload={
                "items": items,
                "preserveFormatting": preserve_formatting,
                "async": async_job,
            },
            error_message=TRANSLATION_FAILED_MESSAGE,
        )

    async def job_status(self, job_id: str) -> Dict[str, Any]:
        """Fetch the status of an async batch job."""
        return await self.request_json(
            "GET",
            JOB_STATUS_PATH.format(job_id=quote(str(job_id), safe="")),
            error_message=JOB_STATUS_FAILED_MESSAGE,
        )

    async def languages(self) -> List[Dict[str, Any]]:
        """Fetch the supported language list."""
        result = await self.request_json(
            "GET",
            LANGUAGES_PATH,
            error_message=LANGUAGES_FAILED_MESSAGE,
        )
        languages = result.get("languages")
        if not isinstance(languages, list):
            raise TranslationAPIError(LANGUAGES_FAILED_MESSAGE)
        return languages
