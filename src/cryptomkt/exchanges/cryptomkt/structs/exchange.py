"""
CryptoMarket wire structures.

Numbers are usually transported as strings, sometimes as JSON numbers, and
occasionally as "", "null" or null. Wire structs keep them loose; coercion
happens in ``cryptomkt.exchanges.cryptomkt.utils``.
"""

from typing import Optional, Union

import msgspec

# Loose numeric field: "120347", 120347, 0.5, "", "null" or null
WireNumber = Optional[Union[str, float]]
# Pagination cursors: 1, "1", "null" or null
WireCursor = Optional[Union[int, str]]


class CryptomktPagination(msgspec.Struct):
    """Pagination block of list responses."""
    previous: WireCursor = None
    limit: WireCursor = None
    page: WireCursor = None
    next: WireCursor = None


class CryptomktEnvelope(msgspec.Struct):
    """Outer response object; ``data`` is decoded only once status is 'success'."""
    status: str
    data: Optional[msgspec.Raw] = None
    pagination: Optional[CryptomktPagination] = None
    message: Optional[str] = None


class CryptomktErrorResponse(msgspec.Struct):
    """Body of 400/401/403/404/429/503 responses."""
    message: str
    id: Optional[Union[int, str]] = None
    status: Optional[Union[int, str]] = None


class CryptomktTickerResponse(msgspec.Struct):
    market: str
    high: WireNumber = None
    low: WireNumber = None
    ask: WireNumber = None
    bid: WireNumber = None
    last_price: WireNumber = None
    volume: WireNumber = None
    timestamp: Optional[str] = None


class CryptomktBookEntryResponse(msgspec.Struct):
    price: WireNumber = None
    amount: WireNumber = None
    timestamp: Optional[str] = None


class CryptomktTradeResponse(msgspec.Struct):
    market: str
    price: WireNumber = None
    amount: WireNumber = None
    tid: Optional[Union[str, int]] = None
    market_taker: Optional[str] = None
    timestamp: Optional[str] = None


class CryptomktOrderAmountResponse(msgspec.Struct):
    original: WireNumber = None
    remaining: WireNumber = None
    executed: WireNumber = None


class CryptomktOrderResponse(msgspec.Struct):
    id: str
    market: str
    type: str
    status: str
    amount: CryptomktOrderAmountResponse = msgspec.field(default_factory=CryptomktOrderAmountResponse)
    price: WireNumber = None
    execution_price: WireNumber = None
    avg_execution_price: WireNumber = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    executed_at: Optional[str] = None


class CryptomktBalanceResponse(msgspec.Struct):
    wallet: str
    available: WireNumber = None
    balance: WireNumber = None


class CryptomktPaymentResponse(msgspec.Struct):
    id: str
    status: Union[int, str]
    external_id: Optional[str] = None
    to_receive: WireNumber = None
    to_receive_currency: Optional[str] = None
    expected_amount: WireNumber = None
    expected_currency: Optional[str] = None
    deposit_address: Optional[str] = None
    deposit_memo: Optional[str] = None
    refund_email: Optional[str] = None
    qr: Optional[str] = None
    obs: Optional[str] = None
    callback_url: Optional[str] = None
    error_url: Optional[str] = None
    success_url: Optional[str] = None
    payment_url: Optional[str] = None
    remaining: WireNumber = None
    language: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    server_at: Optional[str] = None
