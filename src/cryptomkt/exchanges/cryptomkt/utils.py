"""
CryptoMarket Direct Utility Functions

Plain functions converting between wire structs and unified structs.
Coercion helpers raise ValueError on text that is not a number; endpoint
groups turn that into ResponseDecodeError.
"""

import math
from decimal import Decimal
from typing import Optional, Union

from cryptomkt.exchanges.cryptomkt.structs.exchange import (
    CryptomktPagination, CryptomktTickerResponse, CryptomktBookEntryResponse,
    CryptomktTradeResponse, CryptomktOrderResponse, CryptomktBalanceResponse,
    CryptomktPaymentResponse
)
from cryptomkt.exchanges.structs import (
    Side, OrderStatus, PaymentStatus, Pagination, Ticker, OrderBookEntry, Trade,
    OrderAmount, MarketOrder, Balance, PaymentOrder
)
from cryptomkt.exchanges.structs.types import MarketName, WalletName, OrderId, PaymentId

_NULL_STRINGS = frozenset({"", "null", "none"})

_CRYPTOMKT_SIDE_MAP = {
    'buy': Side.BUY,
    'sell': Side.SELL,
}

_CRYPTOMKT_ORDER_STATUS_MAP = {
    'active': OrderStatus.ACTIVE,
    'executed': OrderStatus.EXECUTED,
    'cancelled': OrderStatus.CANCELLED,
    'canceled': OrderStatus.CANCELLED,
}

# Reverse mapping for unified -> CryptoMarket
_SIDE_TO_CRYPTOMKT = {v: k for k, v in _CRYPTOMKT_SIDE_MAP.items()}


def _is_null(value) -> bool:
    return value is None or (isinstance(value, str) and value.strip().lower() in _NULL_STRINGS)


def to_float(value: Union[str, float, int, None]) -> Optional[float]:
    """'12.5' -> 12.5; '', 'null' and None -> None."""
    if _is_null(value):
        return None
    return float(value)


def to_int(value: Union[str, float, int, None], default: Optional[int] = 0) -> Optional[int]:
    """Integer counters; '', 'null' and None give ``default``."""
    if _is_null(value):
        return default
    if isinstance(value, str):
        return int(float(value)) if '.' in value else int(value)
    return int(value)


def format_number(value: Union[int, float]) -> str:
    """Render an amount exactly for form fields: no exponent, no trailing zeros."""
    if isinstance(value, int):
        return str(value)
    if not math.isfinite(value):
        raise ValueError(f"Amount must be finite: {value!r}")
    text = format(Decimal(repr(float(value))), 'f')
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text


def to_side(side: str) -> Side:
    try:
        return _CRYPTOMKT_SIDE_MAP[side.lower()]
    except KeyError:
        raise ValueError(f"Unknown order side: {side!r}") from None


def from_side(side: Side) -> str:
    return _SIDE_TO_CRYPTOMKT[side]


def to_order_status(status: str) -> OrderStatus:
    return _CRYPTOMKT_ORDER_STATUS_MAP.get(status.lower(), OrderStatus.UNKNOWN)


def payment_status_text(code: int) -> str:
    try:
        return PaymentStatus(code).text
    except ValueError:
        return "unknown"


def rest_to_pagination(pagination: Optional[CryptomktPagination]) -> Optional[Pagination]:
    if pagination is None:
        return None
    return Pagination(
        page=to_int(pagination.page),
        limit=to_int(pagination.limit, None),
        previous=to_int(pagination.previous, None),
        next=to_int(pagination.next, None)
    )


def rest_to_ticker(ticker: CryptomktTickerResponse) -> Ticker:
    return Ticker(
        market=MarketName(ticker.market),
        last_price=to_float(ticker.last_price),
        bid=to_float(ticker.bid),
        ask=to_float(ticker.ask),
        high=to_float(ticker.high),
        low=to_float(ticker.low),
        volume=to_float(ticker.volume),
        timestamp=ticker.timestamp
    )


def rest_to_book_entry(entry: CryptomktBookEntryResponse) -> OrderBookEntry:
    return OrderBookEntry(
        price=to_float(entry.price) or 0.0,
        amount=to_float(entry.amount) or 0.0,
        timestamp=entry.timestamp
    )


def rest_to_trade(trade: CryptomktTradeResponse) -> Trade:
    return Trade(
        market=MarketName(trade.market),
        price=to_float(trade.price) or 0.0,
        amount=to_float(trade.amount) or 0.0,
        tid=str(trade.tid) if trade.tid is not None else None,
        taker_side=_CRYPTOMKT_SIDE_MAP.get(trade.market_taker.lower()) if trade.market_taker else None,
        timestamp=trade.timestamp
    )


def rest_to_order(order: CryptomktOrderResponse) -> MarketOrder:
    return MarketOrder(
        order_id=OrderId(order.id),
        market=MarketName(order.market),
        side=to_side(order.type),
        status=to_order_status(order.status),
        amount=OrderAmount(
            original=to_float(order.amount.original),
            remaining=to_float(order.amount.remaining),
            executed=to_float(order.amount.executed)
        ),
        price=to_float(order.price),
        execution_price=to_float(order.execution_price),
        avg_execution_price=to_float(order.avg_execution_price),
        created_at=order.created_at,
        updated_at=order.updated_at,
        executed_at=order.executed_at
    )


def rest_to_balance(balance: CryptomktBalanceResponse) -> Balance:
    return Balance(
        wallet=WalletName(balance.wallet),
        available=to_float(balance.available) or 0.0,
        balance=to_float(balance.balance) or 0.0
    )


def rest_to_payment(payment: CryptomktPaymentResponse) -> PaymentOrder:
    return PaymentOrder(
        payment_id=PaymentId(payment.id),
        status=to_int(payment.status),
        to_receive=to_float(payment.to_receive),
        to_receive_currency=payment.to_receive_currency,
        external_id=payment.external_id,
        expected_amount=to_float(payment.expected_amount),
        expected_currency=payment.expected_currency,
        deposit_address=payment.deposit_address,
        deposit_memo=payment.deposit_memo,
        refund_email=payment.refund_email,
        qr=payment.qr,
        obs=payment.obs,
        callback_url=payment.callback_url,
        error_url=payment.error_url,
        success_url=payment.success_url,
        payment_url=payment.payment_url,
        remaining=to_float(payment.remaining),
        language=payment.language,
        created_at=payment.created_at,
        updated_at=payment.updated_at,
        server_at=payment.server_at
    )
