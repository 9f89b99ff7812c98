from typing import Optional

from msgspec import Struct

from .enums import Side, OrderStatus, PaymentStatus
from .types import MarketName, WalletName, OrderId, PaymentId


class Pagination(Struct, frozen=True):
    """Page cursor returned with list endpoints. Absent neighbours are None."""
    page: int = 0
    limit: Optional[int] = None
    previous: Optional[int] = None
    next: Optional[int] = None

    @property
    def has_next(self) -> bool:
        return self.next is not None

    @property
    def has_previous(self) -> bool:
        return self.previous is not None


class Ticker(Struct, frozen=True):
    """Market ticker snapshot."""
    market: MarketName
    last_price: Optional[float] = None
    bid: Optional[float] = None
    ask: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    volume: Optional[float] = None
    timestamp: Optional[str] = None

    @property
    def spread(self) -> Optional[float]:
        if self.bid is None or self.ask is None:
            return None
        return self.ask - self.bid


class OrderBookEntry(Struct, frozen=True):
    """Single order book level."""
    price: float
    amount: float
    timestamp: Optional[str] = None


class OrderBookPage(Struct, frozen=True):
    market: MarketName
    side: Side
    entries: list[OrderBookEntry]
    pagination: Optional[Pagination] = None


class Trade(Struct, frozen=True):
    """Public trade."""
    market: MarketName
    price: float
    amount: float
    tid: Optional[str] = None
    taker_side: Optional[Side] = None
    timestamp: Optional[str] = None


class TradesPage(Struct, frozen=True):
    trades: list[Trade]
    pagination: Optional[Pagination] = None


class OrderAmount(Struct, frozen=True):
    """Order quantities. Fields the exchange omits for a status are None."""
    original: Optional[float] = None
    remaining: Optional[float] = None
    executed: Optional[float] = None


class MarketOrder(Struct, frozen=True):
    """Order representation."""
    order_id: OrderId
    market: MarketName
    side: Side
    status: OrderStatus
    amount: OrderAmount
    price: Optional[float] = None
    execution_price: Optional[float] = None
    avg_execution_price: Optional[float] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    executed_at: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status == OrderStatus.ACTIVE


class MarketOrdersPage(Struct, frozen=True):
    orders: list[MarketOrder]
    pagination: Optional[Pagination] = None


class Balance(Struct, frozen=True):
    """Wallet balance; ``balance`` includes funds held by active orders."""
    wallet: WalletName
    available: float
    balance: float

    @property
    def locked(self) -> float:
        return self.balance - self.available


class PaymentOrder(Struct, frozen=True):
    """Payment order created through the payment endpoint."""
    payment_id: PaymentId
    status: int
    to_receive: Optional[float] = None
    to_receive_currency: Optional[str] = None
    external_id: Optional[str] = None
    expected_amount: Optional[float] = None
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
    remaining: Optional[float] = None
    language: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    server_at: Optional[str] = None

    @property
    def payment_status(self) -> Optional[PaymentStatus]:
        """Known status code as enum, None for codes the exchange added later."""
        try:
            return PaymentStatus(self.status)
        except ValueError:
            return None

    @property
    def status_text(self) -> str:
        status = self.payment_status
        return status.text if status is not None else "unknown"


class PaymentOrdersPage(Struct, frozen=True):
    payments: list[PaymentOrder]
    pagination: Optional[Pagination] = None
