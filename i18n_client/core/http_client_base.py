"""
Base HTTP Client

Provides the shared JSON-over-HTTP plumbing for the translation API.

Features:
- One pooled aiohttp session per client instance, created lazily
- API key header on every request
- Request/response logging with latency
- Non-2xx responses, timeouts and connection failures mapped onto the
  exception hierarchy in core.exceptions

Usage:
    config = HTTPClientConfig(api_url="https://api.example.com", api_key="...")
    client = BaseHTTPClient(config)
    data = await client.request_json("GET", "/api/languages")
    await client.close()
"""

import time
import json
import asyncio
import aiohttp
from dataclasses import dataclass, field
from typing import Optional, Dict, Any

from .config import API_KEY_HEADER, I18N_CONNECTION_TIMEOUT, I18N_CONNECTION_POOL_LIMIT
from .exceptions import (
    TranslationAPIError,
    TranslationNetworkError,
    TranslationTimeoutError,
)
from ..logs.logging_config import (
    get_client_logger,
    log_http_request,
    log_http_response,
)

logger = get_client_logger("http")


@dataclass
class HTTPClientConfig:
    """
    Configuration for an HTTP client instance.

    Example:
        config = HTTPClientConfig(
            api_url="https://api.yourdomain.com",
            api_key="secret",
            timeout=10,
        )
    """
    api_url: str = "https://api.yourdomain.com"
    api_key: Optional[str] = None

    # Connection settings
    timeout: int = I18N_CONNECTION_TIMEOUT
    pool_limit: int = I18N_CONNECTION_POOL_LIMIT

    # Sent with every request in addition to the defaults
    headers: Dict[str, str] = field(default_factory=dict)

    # Logging identifier
    client_name: str = "i18n"

    def build_url(self, path: str) -> str:
        return f"{self.api_url.rstrip('/')}{path}"

    def build_headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers[API_KEY_HEADER] = self.api_key
        headers.update(self.headers)
        return headers


class BaseHTTPClient:
    """
    Base JSON HTTP client with session pooling and logging.

    Each instance owns its session, so independent clients keep independent
    connection pools.
    """

    def __init__(self, config: HTTPClientConfig):
        self.config = config
        self._session: Optional[aiohttp.ClientSession] = None

        logger.debug(
            f"[{config.client_name.upper()}_HTTP] Initialized | "
            f"url={config.api_url} | timeout={config.timeout}s"
        )

    async def get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session for this instance."""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.config.timeout)
            connector = aiohttp.TCPConnector(
                limit=self.config.pool_limit,
                limit_per_host=self.config.pool_limit
            )
            self._session = aiohttp.ClientSession(
                timeout=timeout,
                connector=connector,
                headers=self.config.build_headers()
            )
            logger.debug(f"[{self.config.client_name.upper()}_HTTP] Session created")
        return self._session

    async def close(self):
        """Close this instance's session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None
            logger.debug(f"[{self.config.client_name.upper()}_HTTP] Session closed")

    async def request_json(
        self,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None,
        error_message: str = "Request failed",
    ) -> Dict[str, Any]:
        """
        Send a request and return the decoded JSON object body.

        Args:
            method: HTTP method
            path: Path appended to the configured API URL
            payload: JSON body (omitted when None)
            error_message: Message used when a failed response carries no `error`

        Returns:
            Decoded JSON object

        Raises:
            TranslationAPIError: Non-2xx status or a body that is not a JSON object
            TranslationTimeoutError: Request exceeded the configured timeout
            TranslationNetworkError: Connection-level failure
        """
        url = self.config.build_url(path)
        name = self.config.client_name.upper()
        request_id = log_http_request(method, url, client_name=self.config.client_name)
        start_time = time.time()
        status = None

        try:
            session = await self.get_session()
            async with session.request(method, url, json=payload) as r:
                status = r.status
                try:
                    result = await r.json(content_type=None)
                except (json.JSONDecodeError, UnicodeDecodeError, aiohttp.ContentTypeError):
                    result = None

                if not 200 <= r.status < 300:
                    message = None
                    if isinstance(result, dict):
                        message = result.get("error")
                    raise TranslationAPIError(message or error_message, status=r.status)

                if not isinstance(result, dict):
                    raise TranslationAPIError(
                        f"Invalid response body from {path}", status=r.status
                    )

        except asyncio.TimeoutError as e:
            latency_ms = (time.time() - start_time) * 1000
            log_http_response(request_id, method, url, status, latency_ms,
                              client_name=self.config.client_name, error_message="timeout")
            logger.error(f"[{name}_HTTP] Timeout | url={url} | timeout={self.config.timeout}s")
            raise TranslationTimeoutError(
                f"Request to {path} timed out after {self.config.timeout}s"
            ) from e

        except aiohttp.ClientError as e:
            latency_ms = (time.time() - start_time) * 1000
            log_http_response(request_id, method, url, status, latency_ms,
                              client_name=self.config.client_name, error_message=str(e))
            logger.error(f"[{name}_HTTP] Request failed | url={url} | error={e}")
            raise TranslationNetworkError(f"Translation service unavailable: {e}") from e

        except TranslationAPIError as e:
            latency_ms = (time.time() - start_time) * 1000
            log_http_response(request_id, method, url, status, latency_ms,
                              client_name=self.config.client_name, error_message=e.message)
            raise

        latency_ms = (time.time() - start_time) * 1000
        log_http_response(request_id, method, url, status, latency_ms,
                          client_name=self.config.client_name)
        return result

    def get_client_info(self) -> Dict[str, Any]:
        """Get information about this client's configuration."""
        return {
            "api_url": self.config.api_url,
            "timeout": self.config.timeout,
            "pool_limit": self.config.pool_limit,
            "session_open": self._session is not None and not self._session.closed,
        }
