"""
Async client for the CryptoMarket REST API (v1).

Public market data, payment orders and trading over one shared aiohttp
transport, with typed msgspec results and structured exceptions.
"""

from .client import CryptomktClient, create_client, create_public_client
from .config import ExchangeConfig, ExchangeCredentials, NetworkConfig, ClockConfig, load_exchange_config
from .exchanges.structs import (
    Side, OrderStatus, PaymentStatus,
    Pagination, Ticker, OrderBookEntry, OrderBookPage, Trade, TradesPage,
    OrderAmount, MarketOrder, MarketOrdersPage, Balance, PaymentOrder, PaymentOrdersPage
)
from .exchanges.cryptomkt.structs.requests import (
    BooksOptions, TradesOptions, MarketOrderOptions, PaymentOrdersOptions,
    MarketOrderRequest, CancelOrderRequest, PaymentRequest
)
from .infrastructure.clock import ClockSource, LocalClock, NtpClock
from .infrastructure.exceptions.exchange import (
    ExchangeRestError, ExchangeConnectionRestError, ClockSyncError, ExchangeApiError,
    InvalidParameterError, AuthenticationError, InsufficientPermissionsError,
    NotFoundError, TooManyRequestsError, ServiceUnavailableError,
    ResponseDecodeError, ErrorBodyDecodeError,
    PaymentStatusError, MultiplePaymentsError, AmountMismatchError,
    ConversionFailedError, PaymentExpiredError
)
from .infrastructure.exceptions.system import ConfigurationError

__version__ = "0.1.0"

__all__ = [
    'CryptomktClient', 'create_client', 'create_public_client',
    'ExchangeConfig', 'ExchangeCredentials', 'NetworkConfig', 'ClockConfig', 'load_exchange_config',
    'Side', 'OrderStatus', 'PaymentStatus',
    'Pagination', 'Ticker', 'OrderBookEntry', 'OrderBookPage', 'Trade', 'TradesPage',
    'OrderAmount', 'MarketOrder', 'MarketOrdersPage', 'Balance', 'PaymentOrder', 'PaymentOrdersPage',
    'BooksOptions', 'TradesOptions', 'MarketOrderOptions', 'PaymentOrdersOptions',
    'MarketOrderRequest', 'CancelOrderRequest', 'PaymentRequest',
    'ClockSource', 'LocalClock', 'NtpClock',
    'ExchangeRestError', 'ExchangeConnectionRestError', 'ClockSyncError', 'ExchangeApiError',
    'InvalidParameterError', 'AuthenticationError', 'InsufficientPermissionsError',
    'NotFoundError', 'TooManyRequestsError', 'ServiceUnavailableError',
    'ResponseDecodeError', 'ErrorBodyDecodeError',
    'PaymentStatusError', 'MultiplePaymentsError', 'AmountMismatchError',
    'ConversionFailedError', 'PaymentExpiredError',
    'ConfigurationError',
]
