"""
REST Base Implementation

Shared aiohttp transport for exchange REST clients.

Key Features:
- Constructor injection for config and logger
- One pooled ClientSession shared by every endpoint group
- Authentication headers only when the caller asks for them
- Status classification delegated to the exchange subclass
- No automatic retries; transport failures surface to the caller
"""

import asyncio
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Type, TypeVar
from urllib.parse import urlencode

import aiohttp
import msgspec

from cryptomkt.config.structs import ExchangeConfig
from cryptomkt.infrastructure.exceptions.exchange import (
    ExchangeConnectionRestError, ResponseDecodeError
)
from cryptomkt.infrastructure.logging import HFTLoggerInterface, NullLogger
from .structs import HTTPMethod, RestResponse

T = TypeVar("T")

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class BaseRestClientInterface(ABC):
    """
    Abstract base class for exchange REST transports.

    Provides session management, header assembly and dispatch while keeping
    authentication and error classification exchange-specific.
    """

    # Statuses whose body is parsed into a typed API error; others pass through
    ERROR_STATUSES = frozenset({400, 401, 403, 404, 429, 503})

    def __init__(self, config: ExchangeConfig, logger: Optional[HFTLoggerInterface] = None):
        """
        Initialize base REST client with constructor injection.

        Args:
            config: Exchange configuration
            logger: Logger instance (injected); no-op when omitted
        """
        self.config = config
        self.logger = logger or NullLogger()

        self._session: Optional[aiohttp.ClientSession] = None
        self._connector: Optional[aiohttp.TCPConnector] = None

        self._request_count = 0
        self._total_latency = 0.0

        self.logger.debug(f"{self.exchange_name} REST transport initialized",
                          exchange=self.exchange_name.lower(),
                          base_url=config.base_url)

    @property
    @abstractmethod
    def exchange_name(self) -> str:
        """Exchange name for logging and identification."""
        pass

    @abstractmethod
    async def _authenticate(self, method: HTTPMethod, path: str,
                            params: Dict[str, str]) -> Dict[str, str]:
        """
        Generate authentication headers for the request.

        Args:
            method: HTTP method
            path: Canonical path including version prefix
            params: Query or form parameters that will be sent

        Returns:
            Headers to merge into the request
        """
        pass

    @abstractmethod
    def _handle_error(self, status: int, response_text: str) -> Exception:
        """
        Map a classified error status to an exception.

        Args:
            status: HTTP status code (one of ERROR_STATUSES)
            response_text: Response body text

        Returns:
            Appropriate exception for the error
        """
        pass

    def canonical_path(self, endpoint: str) -> str:
        """Versioned path of an endpoint, e.g. '/ticker' -> '/v1/ticker'."""
        return f"{self.config.api_prefix}{endpoint}"

    def build_url(self, endpoint: str) -> str:
        return f"{self.config.base_url.rstrip('/')}{self.canonical_path(endpoint)}"

    @staticmethod
    def _clean_params(params: Optional[Dict[str, Any]]) -> Dict[str, str]:
        """Drop unset values and render the rest as text."""
        if not params:
            return {}
        return {k: str(v) for k, v in params.items() if v is not None}

    def parse_response(self, response: RestResponse, response_type: Type[T]) -> T:
        """
        Decode a response body into a typed struct using msgspec.

        Raises:
            ResponseDecodeError: If the body does not match response_type
        """
        try:
            return msgspec.json.decode(response.text, type=response_type)
        except (msgspec.DecodeError, msgspec.ValidationError) as e:
            raise ResponseDecodeError(
                response.status,
                f"Cannot decode {getattr(response_type, '__name__', response_type)} from {response.url}: {e}",
                response.text
            ) from e

    async def _ensure_session(self):
        """Ensure aiohttp session is created inside the running loop."""
        if self._session is None or self._session.closed:
            self._connector = aiohttp.TCPConnector(
                limit=100,
                limit_per_host=20,
                ttl_dns_cache=300,
                keepalive_timeout=30,
            )

            timeout = aiohttp.ClientTimeout(
                total=self.config.network.request_timeout,
                connect=self.config.network.connect_timeout,
            )

            self._session = aiohttp.ClientSession(
                connector=self._connector,
                timeout=timeout,
                headers={'User-Agent': 'cryptomkt-rest/1.0'}
            )

    async def _request(self, method: HTTPMethod, endpoint: str,
                       params: Optional[Dict[str, Any]], authenticated: bool) -> RestResponse:
        await self._ensure_session()

        path = self.canonical_path(endpoint)
        url = self.build_url(endpoint)
        clean_params = self._clean_params(params)

        headers = {'Accept': 'application/json'}
        if method == HTTPMethod.POST:
            headers['Content-Type'] = FORM_CONTENT_TYPE
        if authenticated:
            headers.update(await self._authenticate(method, path, clean_params))

        if method == HTTPMethod.POST:
            request_kwargs = {'data': urlencode(clean_params)}
        else:
            request_kwargs = {'params': clean_params or None}

        try:
            async with self._session.request(method.value, url, headers=headers,
                                             **request_kwargs) as response:
                response_text = await response.text()
                status = response.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ExchangeConnectionRestError(f"{type(e).__name__}: {e}", url=url) from e

        if status in self.ERROR_STATUSES:
            raise self._handle_error(status, response_text)

        return RestResponse(status=status, text=response_text, url=url)

    async def send(self, method: HTTPMethod, endpoint: str,
                   params: Optional[Dict[str, Any]] = None,
                   authenticated: bool = False) -> RestResponse:
        """
        Issue one request.

        Args:
            method: HTTP method
            endpoint: Endpoint path without version prefix, e.g. '/orders/cancel'
            params: Query parameters (GET) or form fields (POST); None values are dropped
            authenticated: Attach API key, timestamp and signature headers

        Returns:
            RestResponse for 200 and for any status outside ERROR_STATUSES

        Raises:
            ExchangeConnectionRestError: Network, DNS or timeout failure
            ExchangeApiError: Classified error status with a structured body
            ErrorBodyDecodeError: Classified error status with an unparseable body
        """
        start_time = time.perf_counter()

        try:
            response = await self._request(method, endpoint, params, authenticated)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            self.logger.metric(f"{self.exchange_name.lower()}_request_errors", 1,
                               endpoint=endpoint, method=method.value, error=type(e).__name__)
            self.logger.error(f"{self.exchange_name} request failed",
                              exchange=self.exchange_name.lower(),
                              method=method.value,
                              endpoint=endpoint,
                              error_type=type(e).__name__,
                              error_message=str(e),
                              duration_ms=duration_ms)
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        self._request_count += 1
        self._total_latency += duration_ms

        self.logger.metric(f"{self.exchange_name.lower()}_request_duration_ms", duration_ms,
                           endpoint=endpoint, method=method.value, status=response.status)
        self.logger.debug(f"{method.value} {endpoint} -> {response.status}",
                          authenticated=authenticated, duration_ms=duration_ms)

        return response

    async def close(self):
        """Clean up resources and close connections."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None
        self._connector = None

        if self._request_count > 0:
            self.logger.info(f"{self.exchange_name} REST transport closed",
                             exchange=self.exchange_name.lower(),
                             total_requests=self._request_count,
                             avg_latency_ms=self._total_latency / self._request_count)

    async def __aenter__(self):
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def get_performance_stats(self) -> Dict[str, Any]:
        """Get performance statistics for monitoring."""
        if self._request_count == 0:
            return {"requests": 0, "avg_latency_ms": 0.0}

        return {
            "requests": self._request_count,
            "avg_latency_ms": self._total_latency / self._request_count,
            "total_latency_ms": self._total_latency
        }
