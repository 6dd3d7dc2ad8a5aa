"""Base HTTP provider abstraction.

This module defines the error taxonomy for upstream failures and the shared
plumbing every upstream client uses: a lazily created ``httpx.AsyncClient``,
retrying GET requests and a TTL cache for parsed payloads.

## Retry Policy

Transport failures (connection errors, timeouts) and non-2xx responses are
retried. With the default settings a request is attempted 3 times, waiting
200 ms after the first failure and 400 ms after the second. When every
attempt fails an ``UpstreamError`` wraps the last underlying error.

A 2xx response whose body cannot be parsed or validated is a data-contract
violation rather than a transient failure and raises ``SchemaError``
immediately, without retrying.

## Caching

Parsed payloads are cached by a caller-supplied key for a fixed TTL. Only
successful results are written, so a failed fetch never poisons the cache.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, TypeVar

import httpx
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_incrementing,
)

from weather_activities.cache import TTLCache
from weather_activities.config import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Failures worth another attempt
TRANSIENT_ERRORS = (httpx.TransportError, httpx.HTTPStatusError)


class UpstreamError(Exception):
    """Raised when the upstream provider cannot be reached or keeps failing."""

    def __init__(
        self,
        message: str,
        provider: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code
        self.response_body = response_body


class SchemaError(UpstreamError):
    """Raised when an upstream response does not match the expected shape."""

    def __init__(self, message: str, provider: str, payload: str | None = None):
        super().__init__(message, provider=provider, response_body=payload)
        self.payload = payload


class HttpProvider:
    """Shared HTTP plumbing for upstream API clients.

    Subclasses set ``name`` and build their public operations on top of
    ``_get_json`` and ``_cached``.

    Attributes:
        name: Provider name used in errors and logs
    """

    name: str = "upstream"

    def __init__(
        self,
        settings: Settings,
        cache: TTLCache[Any] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the provider.

        Args:
            settings: Timeouts, retry policy and cache sizing
            cache: Cache for parsed payloads (one is created if omitted)
            transport: Custom httpx transport; overrides the IPv4 transport
        """
        self.settings = settings
        self.timeout = settings.http_timeout_seconds
        self.max_attempts = settings.max_attempts
        self.retry_backoff = settings.retry_backoff_seconds
        if cache is None:
            cache = TTLCache(
                ttl_seconds=settings.cache_ttl_seconds,
                max_entries=settings.cache_max_entries,
            )
        self.cache: TTLCache[Any] = cache
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> HttpProvider:
        """Enter async context manager."""
        self._get_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def _build_transport(self) -> httpx.AsyncBaseTransport:
        if self._transport is not None:
            return self._transport
        if self.settings.force_ipv4:
            # Binding the local side to an IPv4 address makes name resolution
            # pick A records only.
            return httpx.AsyncHTTPTransport(local_address="0.0.0.0")
        return httpx.AsyncHTTPTransport()

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._build_transport(),
                headers=self._get_default_headers(),
            )
        return self._client

    def _get_default_headers(self) -> dict[str, str]:
        """Get default headers for requests."""
        return {
            "User-Agent": self.settings.user_agent,
            "Accept": "application/json",
        }

    def _retrying(self) -> AsyncRetrying:
        return AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_incrementing(start=self.retry_backoff, increment=self.retry_backoff),
            retry=retry_if_exception_type(TRANSIENT_ERRORS),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )

    async def _get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        """GET ``url`` with retries and return the decoded JSON body.

        Raises:
            UpstreamError: If every attempt failed
            SchemaError: If a successful response is not valid JSON
        """
        client = self._get_client()

        try:
            async for attempt in self._retrying():
                with attempt:
                    response = await client.get(url, params=params)
                    response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"{self.name}: {url} failed after {self.max_attempts} attempts "
                f"with HTTP {e.response.status_code}"
            )
            raise UpstreamError(
                f"{self.name} request failed after {self.max_attempts} attempts: "
                f"HTTP {e.response.status_code}",
                provider=self.name,
                status_code=e.response.status_code,
                response_body=e.response.text,
            ) from e
        except httpx.TransportError as e:
            logger.error(
                f"{self.name}: {url} failed after {self.max_attempts} attempts: {e!r}"
            )
            raise UpstreamError(
                f"{self.name} request failed after {self.max_attempts} attempts: {e}",
                provider=self.name,
            ) from e

        try:
            return response.json()
        except ValueError as e:
            raise SchemaError(
                f"{self.name} returned a body that is not JSON",
                provider=self.name,
                payload=response.text[:500],
            ) from e

    async def _cached(self, key: str, loader: Callable[[], Awaitable[T]]) -> T:
        """Return the cached value for ``key`` or load and cache it."""
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(f"{self.name}: cache hit {key}")
            return cached

        logger.debug(f"{self.name}: cache miss {key}")
        value = await loader()
        self.cache.set(key, value)
        return value
