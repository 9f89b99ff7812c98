from .enums import Side, OrderStatus, PaymentStatus
from .types import MarketName, WalletName, OrderId, PaymentId
from .common import (
    Pagination, Ticker, OrderBookEntry, OrderBookPage, Trade, TradesPage,
    OrderAmount, MarketOrder, MarketOrdersPage, Balance, PaymentOrder, PaymentOrdersPage
)

__all__ = [
    'Side', 'OrderStatus', 'PaymentStatus',
    'MarketName', 'WalletName', 'OrderId', 'PaymentId',
    'Pagination', 'Ticker', 'OrderBookEntry', 'OrderBookPage', 'Trade', 'TradesPage',
    'OrderAmount', 'MarketOrder', 'MarketOrdersPage', 'Balance', 'PaymentOrder',
    'PaymentOrdersPage',
]
