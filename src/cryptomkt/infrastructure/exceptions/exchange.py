from typing import Any, Optional


class ExchangeRestError(Exception):
    """Base exception for all exchange REST API errors."""
    def __init__(self, code: int, message: str, api_code: int | None = None) -> None:
        self.api_code = api_code
        self.message = message
        self.status_code = code
        super().__init__(f"HTTP {code}: {message}")


# Transport Errors (never retried by the client)
class ExchangeConnectionRestError(ExchangeRestError):
    """Network failure before any HTTP status was received (connect, DNS, timeout)."""
    def __init__(self, message: str, url: Optional[str] = None) -> None:
        super().__init__(0, message)
        self.url = url

    def __str__(self):
        return f"Request to {self.url} failed: {self.message}"


class ClockSyncError(ExchangeConnectionRestError):
    """Network time lookup failed; the request is not signed with a local fallback."""
    pass


# API Errors (server answered with a structured error body)
class ExchangeApiError(ExchangeRestError):
    """Structured API error parsed from an error response or an error envelope."""
    def __init__(self, code: int, message: str, api_code: int | None = None,
                 api_status: str | None = None) -> None:
        super().__init__(code, message, api_code)
        self.api_status = api_status


class InvalidParameterError(ExchangeApiError):
    """HTTP 400 - request validation failed."""
    pass


class AuthenticationError(ExchangeApiError):
    """HTTP 401 - API key, timestamp or signature rejected."""
    pass


class InsufficientPermissionsError(AuthenticationError):
    """HTTP 403 - API key lacks required permissions for endpoint."""
    pass


class NotFoundError(ExchangeApiError):
    """HTTP 404 - resource or endpoint not found."""
    pass


class TooManyRequestsError(ExchangeApiError):
    """HTTP 429 Too Many Requests."""
    pass


class ServiceUnavailableError(ExchangeApiError):
    """HTTP 503 - exchange unavailable or in maintenance."""
    pass


# Decode Errors (body could not be interpreted at all)
class ResponseDecodeError(ExchangeRestError):
    """Response body did not match the expected JSON shape."""
    def __init__(self, code: int, message: str, body: str = "") -> None:
        super().__init__(code, message)
        self.body = body[:200]


class ErrorBodyDecodeError(ResponseDecodeError):
    """Error response (4xx/5xx) whose body is not a parseable API error."""
    pass


# Business Errors (payment outcome embedded in a successful response)
class PaymentStatusError(ExchangeRestError):
    """Payment order reported a non-success business status despite HTTP 200."""
    def __init__(self, message: str, payment_status: int, payment: Any = None) -> None:
        super().__init__(200, message, payment_status)
        self.payment_status = payment_status
        self.payment = payment


class MultiplePaymentsError(PaymentStatusError):
    """Status -4: more than one payment was sent to the deposit address."""
    pass


class AmountMismatchError(PaymentStatusError):
    """Status -3: received amount differs from the expected amount."""
    pass


class ConversionFailedError(PaymentStatusError):
    """Status -2: currency conversion could not be completed."""
    pass


class PaymentExpiredError(PaymentStatusError):
    """Status -1: payment window expired."""
    pass
