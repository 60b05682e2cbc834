"""
Translation Gateway Service

FastAPI endpoints exposing a shared I18nClient to HTTP consumers. The router
only forwards to the client; caching and deduplication happen there.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Header, Response
from pydantic import BaseModel, ConfigDict, Field

from .config import I18nClientConfig
from .logs import clear_request_id, generate_request_id, set_request_id
from .schemas import (
    BatchResult,
    JobStatus,
    Language,
    TranslationItem,
    TranslationResult,
)
from .translation import I18nClient

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


async def bind_request_id(
    response: Response,
    x_request_id: Optional[str] = Header(None),
):
    """Tag log lines of one gateway request with its ID (caller's or generated)."""
    request_id = x_request_id or generate_request_id()
    set_request_id(request_id)
    response.headers[REQUEST_ID_HEADER] = request_id
    try:
        yield request_id
    finally:
        clear_request_id()


# Create router
router = APIRouter(
    prefix="/api/i18n/v1",
    tags=["Translation"],
    dependencies=[Depends(bind_request_id)],
)


# =====================
# Shared Client
# =====================

_client: Optional[I18nClient] = None


def get_i18n_client() -> I18nClient:
    """Get the global client instance (configured from the environment)."""
    global _client
    if _client is None:
        _client = I18nClient(I18nClientConfig.from_env())
    return _client


def init_i18n_client(client: I18nClient) -> I18nClient:
    """Install a custom global client."""
    global _client
    _client = client
    return _client


async def close_i18n_client():
    """Close the global client. Call this on application shutdown."""
    global _client
    if _client:
        await _client.close()
        _client = None


# =====================
# Request/Response Models
# =====================

class TranslateRequest(BaseModel):
    """Request for a single translation."""
    model_config = ConfigDict(populate_by_name=True)

    text: str = Field("", description="Text to translate")
    source_language: Optional[str] = Field(None, alias="sourceLanguage", description="Source language (default if not provided)")
    target_language: Optional[str] = Field(None, alias="targetLanguage", description="Target language (default if not provided)")
    preserve_formatting: bool = Field(True, alias="preserveFormatting")
    force: bool = Field(False, description="Skip the local cache")


class BatchTranslateRequest(BaseModel):
    """Request for batch translation."""
    model_config = ConfigDict(populate_by_name=True)

    items: List[TranslationItem] = Field(default_factory=list, description="Items to translate")
    preserve_formatting: bool = Field(True, alias="preserveFormatting")
    async_job: bool = Field(False, alias="async", description="Process as a background job")
    force: bool = Field(False, description="Skip the local cache")


class ClearCacheResponse(BaseModel):
    """Response after clearing the cache."""
    removed: int = Field(..., description="Number of removed entries")
    target_language: Optional[str] = Field(None, alias="targetLanguage")


# =====================
# API Endpoints
# =====================

@router.post("/translate", response_model=TranslationResult, response_model_exclude_none=True)
async def translate_endpoint(
    request: TranslateRequest,
    client: I18nClient = Depends(get_i18n_client),
):
    """
    Translate a single text.

    Failures do not produce an error status: the response carries the original
    text with `translated=false` and an `error` message.
    """
    logger.info(
        f"[GATEWAY_TRANSLATE] START | chars={len(request.text)} | "
        f"source={request.source_language} | target={request.target_language}"
    )

    result = await client.translate(
        request.text,
        source_language=request.source_language,
        target_language=request.target_language,
        preserve_formatting=request.preserve_formatting,
        force=request.force,
    )

    logger.info(
        f"[GATEWAY_TRANSLATE] END | translated={result.translated} | "
        f"from_cache={bool(result.from_cache)} | error={result.error}"
    )
    return result


@router.post("/translate/batch", response_model=BatchResult, response_model_exclude_none=True)
async def batch_translate_endpoint(
    request: BatchTranslateRequest,
    client: I18nClient = Depends(get_i18n_client),
):
    """
    Translate several items.

    **Returns:**
    - `results` in input order, or `jobId` + `status` for async jobs
    """
    logger.info(f"[GATEWAY_BATCH] START | items={len(request.items)} | async={request.async_job}")

    result = await client.batch_translate(
        request.items,
        preserve_formatting=request.preserve_formatting,
        async_job=request.async_job,
        force=request.force,
    )

    logger.info(
        f"[GATEWAY_BATCH] END | results={len(result.results or [])} | "
        f"job_id={result.job_id} | error={result.error}"
    )
    return result


@router.get("/translate/status/{job_id}", response_model=JobStatus, response_model_exclude_none=True)
async def job_status_endpoint(job_id: str, client: I18nClient = Depends(get_i18n_client)):
    """Check the status of an async batch job."""
    return await client.check_job_status(job_id)


@router.get("/languages", response_model=List[Language], response_model_exclude_none=True)
async def languages_endpoint(client: I18nClient = Depends(get_i18n_client)):
    """List supported languages (empty when the API is unreachable)."""
    return await client.get_languages()


@router.delete("/cache", response_model=ClearCacheResponse, response_model_exclude_none=True)
async def clear_cache_endpoint(
    target_language: Optional[str] = None,
    client: I18nClient = Depends(get_i18n_client),
):
    """
    Clear the local translation cache.

    With `target_language`, only entries translated from the default source
    language into it are removed.
    """
    removed = await client.clear_cache(target_language)
    logger.info(f"[GATEWAY_CACHE] Cleared | target={target_language} | removed={removed}")
    return ClearCacheResponse(removed=removed, targetLanguage=target_language)


@router.get("/config")
async def get_gateway_config(client: I18nClient = Depends(get_i18n_client)):
    """
    Get the client configuration.

    **Returns:**
    - Client settings with the API key masked
    """
    return client.config.to_dict()
