"""
CryptoMarket Public REST API

Market list, tickers, order book and trades. These endpoints never send
authentication headers, even when the shared transport holds credentials.
"""

from typing import List, Optional

from cryptomkt.exchanges.structs import (
    Ticker, OrderBookPage, TradesPage, MarketName
)
from cryptomkt.exchanges.cryptomkt.structs.exchange import (
    CryptomktTickerResponse, CryptomktBookEntryResponse, CryptomktTradeResponse
)
from cryptomkt.exchanges.cryptomkt.structs.requests import BooksOptions, TradesOptions
from cryptomkt.exchanges.cryptomkt.utils import (
    rest_to_ticker, rest_to_book_entry, rest_to_trade, rest_to_pagination
)
from cryptomkt.infrastructure.networking.http import HTTPMethod
from .cryptomkt_base_rest import CryptomktBaseRest, mapping_errors


class CryptomktPublicRest:
    """Public market data endpoints."""

    def __init__(self, transport: CryptomktBaseRest):
        self._transport = transport
        self.logger = transport.logger

    async def get_markets(self) -> List[MarketName]:
        """List of market pairs, e.g. ['ETHCLP', 'ETHARS', ...]."""
        data, _ = await self._transport.request(HTTPMethod.GET, '/market', List[str])
        return [MarketName(market) for market in data]

    async def get_ticker(self, market: Optional[str] = None) -> List[Ticker]:
        """
        Ticker for one market, or all markets when ``market`` is None.

        Returns:
            List of Ticker (one element when a market is given)
        """
        params = {'market': market} if market else None
        data, _ = await self._transport.request(
            HTTPMethod.GET, '/ticker', List[CryptomktTickerResponse], params
        )
        with mapping_errors('/ticker'):
            return [rest_to_ticker(t) for t in data]

    async def get_order_book(self, options: BooksOptions) -> OrderBookPage:
        data, pagination = await self._transport.request(
            HTTPMethod.GET, '/book', List[CryptomktBookEntryResponse], options.to_params()
        )

        with mapping_errors('/book'):
            page = OrderBookPage(
                market=MarketName(options.market),
                side=options.side,
                entries=[rest_to_book_entry(e) for e in data],
                pagination=rest_to_pagination(pagination)
            )

        self.logger.debug(f"Retrieved {len(page.entries)} book entries",
                          market=options.market, side=options.side.name)
        return page

    async def get_trades(self, options: TradesOptions) -> TradesPage:
        data, pagination = await self._transport.request(
            HTTPMethod.GET, '/trades', List[CryptomktTradeResponse], options.to_params()
        )

        with mapping_errors('/trades'):
            return TradesPage(
                trades=[rest_to_trade(t) for t in data],
                pagination=rest_to_pagination(pagination)
            )
