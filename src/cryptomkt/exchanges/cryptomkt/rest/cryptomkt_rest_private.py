"""
CryptoMarket Private REST API

Trading endpoints: orders and wallet balances. All calls are authenticated.
"""

from typing import List, Union

from cryptomkt.exchanges.structs import MarketOrder, MarketOrdersPage, Balance
from cryptomkt.exchanges.cryptomkt.structs.exchange import (
    CryptomktOrderResponse, CryptomktBalanceResponse
)
from cryptomkt.exchanges.cryptomkt.structs.requests import (
    MarketOrderOptions, MarketOrderRequest, CancelOrderRequest
)
from cryptomkt.exchanges.cryptomkt.utils import rest_to_order, rest_to_balance, rest_to_pagination
from cryptomkt.infrastructure.networking.http import HTTPMethod
from .cryptomkt_base_rest import CryptomktBaseRest, mapping_errors


class CryptomktPrivateRest:
    """Order management and balances."""

    def __init__(self, transport: CryptomktBaseRest):
        self._transport = transport
        self.logger = transport.logger

    async def _get_orders(self, endpoint: str, options: MarketOrderOptions) -> MarketOrdersPage:
        data, pagination = await self._transport.request(
            HTTPMethod.GET, endpoint, List[CryptomktOrderResponse],
            options.to_params(), authenticated=True
        )

        with mapping_errors(endpoint):
            return MarketOrdersPage(
                orders=[rest_to_order(o) for o in data],
                pagination=rest_to_pagination(pagination)
            )

    async def get_active_orders(self, options: MarketOrderOptions) -> MarketOrdersPage:
        """Open orders of a market."""
        return await self._get_orders('/orders/active', options)

    async def get_executed_orders(self, options: MarketOrderOptions) -> MarketOrdersPage:
        """Executed (filled) orders of a market."""
        return await self._get_orders('/orders/executed', options)

    async def create_order(self, request: MarketOrderRequest) -> MarketOrder:
        """
        Place a limit order.

        Args:
            request: Market, side, amount and price

        Returns:
            MarketOrder as accepted by the exchange

        Raises:
            ValueError: If the request is invalid
        """
        request.validate()

        data, _ = await self._transport.request(
            HTTPMethod.POST, '/orders/create', CryptomktOrderResponse,
            request.to_params(), authenticated=True
        )

        with mapping_errors('/orders/create'):
            order = rest_to_order(data)

        self.logger.info("Order created",
                         order_id=order.order_id,
                         market=order.market,
                         side=order.side.name,
                         status=order.status.name)
        return order

    async def get_order_status(self, order_id: str) -> MarketOrder:
        data, _ = await self._transport.request(
            HTTPMethod.GET, '/orders/status', CryptomktOrderResponse,
            {'id': order_id}, authenticated=True
        )

        with mapping_errors('/orders/status'):
            return rest_to_order(data)

    async def cancel_order(self, order: Union[str, CancelOrderRequest]) -> MarketOrder:
        """Cancel an order by id."""
        request = order if isinstance(order, CancelOrderRequest) else CancelOrderRequest(order)

        data, _ = await self._transport.request(
            HTTPMethod.POST, '/orders/cancel', CryptomktOrderResponse,
            request.to_params(), authenticated=True
        )

        with mapping_errors('/orders/cancel'):
            cancelled = rest_to_order(data)

        self.logger.info("Order cancelled", order_id=cancelled.order_id,
                         status=cancelled.status.name)
        return cancelled

    async def get_balance(self) -> List[Balance]:
        """Balances of all wallets."""
        data, _ = await self._transport.request(
            HTTPMethod.GET, '/balance', List[CryptomktBalanceResponse], authenticated=True
        )

        with mapping_errors('/balance'):
            balances = [rest_to_balance(b) for b in data]

        self.logger.debug(f"Retrieved {len(balances)} wallet balances")
        return balances
