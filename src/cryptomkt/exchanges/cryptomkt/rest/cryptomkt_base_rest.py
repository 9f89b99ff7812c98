"""
CryptoMarket Base REST Implementation

Concrete transport shared by the public, payment and trading endpoint groups.

Key Features:
- Timestamp from an injected ClockSource (NTP by default)
- X-MKT-APIKEY / X-MKT-TIMESTAMP / X-MKT-SIGNATURE headers on private calls only
- Error statuses mapped to typed ExchangeApiError subclasses
- Envelope unwrapping: {status, data, pagination, message}
"""

import time
from contextlib import contextmanager
from typing import Any, Dict, Optional, Tuple, Type, TypeVar

import msgspec

from cryptomkt.config.structs import ExchangeConfig
from cryptomkt.infrastructure.clock import ClockSource, create_clock
from cryptomkt.infrastructure.exceptions.exchange import (
    ExchangeApiError, InvalidParameterError, AuthenticationError,
    InsufficientPermissionsError, NotFoundError, TooManyRequestsError,
    ServiceUnavailableError, ErrorBodyDecodeError, ResponseDecodeError
)
from cryptomkt.infrastructure.exceptions.system import ConfigurationError
from cryptomkt.infrastructure.logging import HFTLoggerInterface
from cryptomkt.infrastructure.networking.http import (
    BaseRestClientInterface, HTTPMethod, RestResponse
)
from cryptomkt.exchanges.cryptomkt.structs.exchange import (
    CryptomktEnvelope, CryptomktErrorResponse, CryptomktPagination
)
from .strategies.auth import CryptomktAuthStrategy

T = TypeVar("T")

_STATUS_ERRORS: Dict[int, Type[ExchangeApiError]] = {
    400: InvalidParameterError,
    401: AuthenticationError,
    403: InsufficientPermissionsError,
    404: NotFoundError,
    429: TooManyRequestsError,
    503: ServiceUnavailableError,
}


@contextmanager
def mapping_errors(endpoint: str):
    """Report wire values that cannot be coerced (e.g. price 'abc') as decode errors."""
    try:
        yield
    except ValueError as e:
        raise ResponseDecodeError(200, f"Cannot map response from {endpoint}: {e}") from e


def _api_code(value: Any) -> Optional[int]:
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.lstrip('-').isdigit():
        return int(value)
    return None


class CryptomktBaseRest(BaseRestClientInterface):
    """
    Base REST client for CryptoMarket.

    A single instance is shared (not owned) by every endpoint group of a
    client. ``authenticated`` is decided per call by the endpoint group.
    """

    def __init__(self, config: ExchangeConfig, clock: Optional[ClockSource] = None,
                 logger: Optional[HFTLoggerInterface] = None):
        """
        Args:
            config: Exchange configuration with URL, timeouts and credentials
            clock: Timestamp source for signing; built from config.clock when omitted
            logger: Logger (injected); no-op when omitted
        """
        super().__init__(config, logger)

        self.clock = clock or create_clock(config.clock, self.logger)
        self._auth: Optional[CryptomktAuthStrategy] = None
        if config.has_credentials():
            self._auth = CryptomktAuthStrategy(config.credentials, self.logger)

    @property
    def exchange_name(self) -> str:
        return "CRYPTOMKT"

    @property
    def has_credentials(self) -> bool:
        return self._auth is not None

    async def _authenticate(self, method: HTTPMethod, path: str,
                            params: Dict[str, str]) -> Dict[str, str]:
        if self._auth is None:
            raise ConfigurationError(
                f"Credentials required for authenticated request {method.value} {path}",
                "credentials"
            )

        timestamp = await self.clock.now()

        start_time = time.perf_counter()
        auth_data = self._auth.sign_request(method, path, params, timestamp)
        self.logger.latency("cryptomkt_auth", (time.perf_counter() - start_time) * 1000,
                            path=path)

        return auth_data.headers

    def _handle_error(self, status: int, response_text: str) -> Exception:
        """
        Parse a structured error body into the exception for its status.

        A body that is not a JSON object with a ``message`` produces
        ErrorBodyDecodeError instead of an API error.
        """
        try:
            error = msgspec.json.decode(response_text, type=CryptomktErrorResponse)
        except (msgspec.DecodeError, msgspec.ValidationError) as e:
            return ErrorBodyDecodeError(
                status,
                f"Unparseable error body for HTTP {status}: {e}",
                response_text
            )

        error_class = _STATUS_ERRORS.get(status, ExchangeApiError)
        api_status = str(error.status) if error.status is not None else None
        return error_class(status, error.message, _api_code(error.id), api_status)

    def decode_envelope(self, response: RestResponse,
                        data_type: Type[T]) -> Tuple[T, Optional[CryptomktPagination]]:
        """
        Unwrap a response envelope and decode its data.

        Raises:
            ExchangeApiError: Envelope status is 'error'
            ResponseDecodeError: Envelope or data does not match the expected shape
        """
        envelope = self.parse_response(response, CryptomktEnvelope)

        if envelope.status != "success":
            raise ExchangeApiError(
                response.status,
                envelope.message or f"API returned status '{envelope.status}'",
                api_status=envelope.status
            )

        if envelope.data is None:
            raise ResponseDecodeError(response.status,
                                      f"Missing data in response from {response.url}",
                                      response.text)

        try:
            data = msgspec.json.decode(envelope.data, type=data_type)
        except (msgspec.DecodeError, msgspec.ValidationError) as e:
            raise ResponseDecodeError(response.status,
                                      f"Unexpected data in response from {response.url}: {e}",
                                      response.text) from e

        return data, envelope.pagination

    async def request(self, method: HTTPMethod, endpoint: str, data_type: Type[T],
                      params: Optional[Dict[str, Any]] = None,
                      authenticated: bool = False) -> Tuple[T, Optional[CryptomktPagination]]:
        """Send a request and decode the envelope's data as ``data_type``."""
        response = await self.send(method, endpoint, params, authenticated)
        return self.decode_envelope(response, data_type)
