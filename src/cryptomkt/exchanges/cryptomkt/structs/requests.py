"""
Request and query option structures.

``to_params()`` renders the documented field names; unset optional fields are
omitted and never sent or signed.
"""

import math
from typing import Dict, Mapping, Optional

import msgspec

from cryptomkt.exchanges.structs import Side
from cryptomkt.exchanges.cryptomkt.utils import format_number, from_side, to_side


def _drop_unset(params: Dict[str, Optional[str]]) -> Dict[str, str]:
    return {k: v for k, v in params.items() if v is not None}


def _opt(value) -> Optional[str]:
    return None if value is None else str(value)


class BooksOptions(msgspec.Struct, frozen=True):
    """Order book query: one side of one market, paginated."""
    market: str
    side: Side
    page: Optional[int] = None
    limit: Optional[int] = None

    def to_params(self) -> Dict[str, str]:
        return _drop_unset({
            "market": self.market,
            "type": from_side(self.side),
            "page": _opt(self.page),
            "limit": _opt(self.limit),
        })


class TradesOptions(msgspec.Struct, frozen=True):
    """Trades query; ``start``/``end`` are dates as YYYY-MM-DD."""
    market: str
    start: Optional[str] = None
    end: Optional[str] = None
    page: Optional[int] = None
    limit: Optional[int] = None

    def to_params(self) -> Dict[str, str]:
        return _drop_unset({
            "market": self.market,
            "start": self.start,
            "end": self.end,
            "page": _opt(self.page),
            "limit": _opt(self.limit),
        })


class MarketOrderOptions(msgspec.Struct, frozen=True):
    market: str
    page: Optional[int] = None
    limit: Optional[int] = None

    def to_params(self) -> Dict[str, str]:
        return _drop_unset({
            "market": self.market,
            "page": _opt(self.page),
            "limit": _opt(self.limit),
        })


class PaymentOrdersOptions(msgspec.Struct, frozen=True):
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    page: Optional[int] = None
    limit: Optional[int] = None

    def to_params(self) -> Dict[str, str]:
        return _drop_unset({
            "start_date": self.start_date,
            "end_date": self.end_date,
            "page": _opt(self.page),
            "limit": _opt(self.limit),
        })


class MarketOrderRequest(msgspec.Struct, frozen=True):
    """New limit order."""
    market: str
    side: Side
    amount: float
    price: float

    def validate(self) -> None:
        if not self.market:
            raise ValueError("market is required")
        if not math.isfinite(self.amount) or self.amount <= 0:
            raise ValueError("amount must be positive")
        if not math.isfinite(self.price) or self.price <= 0:
            raise ValueError("price must be positive")

    def to_params(self) -> Dict[str, str]:
        return {
            "amount": format_number(self.amount),
            "market": self.market,
            "price": format_number(self.price),
            "type": from_side(self.side),
        }

    @classmethod
    def from_params(cls, params: Mapping[str, str]) -> "MarketOrderRequest":
        """Inverse of ``to_params``."""
        return cls(
            market=params["market"],
            side=to_side(params["type"]),
            amount=float(params["amount"]),
            price=float(params["price"]),
        )


class CancelOrderRequest(msgspec.Struct, frozen=True):
    order_id: str

    def to_params(self) -> Dict[str, str]:
        return {"id": self.order_id}


class PaymentRequest(msgspec.Struct, frozen=True):
    """
    New payment order.

    Attributes:
        to_receive: Amount the merchant receives
        to_receive_currency: Currency of ``to_receive``
        payment_receiver: Email of the CryptoMarket account receiving funds
        external_id: Merchant reference
        callback_url: Notification URL for status changes
        error_url: Redirect on failure
        success_url: Redirect on success
        refund_email: Payer email for refunds
        language: Payment page language (es, en, pt)
    """
    to_receive: float
    to_receive_currency: str
    payment_receiver: str
    external_id: Optional[str] = None
    callback_url: Optional[str] = None
    error_url: Optional[str] = None
    success_url: Optional[str] = None
    refund_email: Optional[str] = None
    language: str = "es"

    def validate(self) -> None:
        if not math.isfinite(self.to_receive) or self.to_receive <= 0:
            raise ValueError("to_receive must be positive")
        if not self.to_receive_currency:
            raise ValueError("to_receive_currency is required")
        if not self.payment_receiver:
            raise ValueError("payment_receiver is required")

    def to_params(self) -> Dict[str, str]:
        return _drop_unset({
            "callback_url": self.callback_url,
            "error_url": self.error_url,
            "external_id": self.external_id,
            "language": self.language or "es",
            "payment_receiver": self.payment_receiver,
            "refund_email": self.refund_email,
            "success_url": self.success_url,
            "to_receive": format_number(self.to_receive),
            "to_receive_currency": self.to_receive_currency,
        })
