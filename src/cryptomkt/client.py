"""
CryptoMarket client facade.

Composes the public, payment and trading endpoint groups around one shared
transport (one aiohttp session, one clock, one logger).

Usage:
    async with create_client(api_key, api_secret) as client:
        tickers = await client.public.get_ticker("ETHCLP")
        balances = await client.market.get_balance()

    async with create_public_client() as client:
        markets = await client.public.get_markets()
"""

from pathlib import Path
from typing import Optional

from cryptomkt.config import ExchangeConfig, ExchangeCredentials, ConfigManager
from cryptomkt.exchanges.cryptomkt.rest import (
    CryptomktBaseRest, CryptomktPublicRest, CryptomktPaymentRest, CryptomktPrivateRest
)
from cryptomkt.infrastructure.clock import ClockSource
from cryptomkt.infrastructure.exceptions.system import ConfigurationError
from cryptomkt.infrastructure.logging import HFTLoggerInterface, get_exchange_logger, configure_logging


class CryptomktClient:
    """
    Entry point of the library.

    Without credentials only ``public`` is usable; ``payment`` and ``market``
    raise ConfigurationError on access.
    """

    def __init__(self, config: Optional[ExchangeConfig] = None, *,
                 api_key: Optional[str] = None, api_secret: Optional[str] = None,
                 clock: Optional[ClockSource] = None,
                 logger: Optional[HFTLoggerInterface] = None):
        """
        Args:
            config: Full configuration; defaults are used when omitted
            api_key: Overrides config credentials (requires api_secret)
            api_secret: Overrides config credentials (requires api_key)
            clock: Timestamp source for signing (NTP per config by default)
            logger: Injected logger; no-op when omitted
        """
        config = config or ExchangeConfig()
        if api_key is not None or api_secret is not None:
            config = ExchangeConfig(
                name=config.name,
                credentials=ExchangeCredentials(api_key=api_key or "", secret_key=api_secret or ""),
                base_url=config.base_url,
                api_version=config.api_version,
                network=config.network,
                clock=config.clock,
            )

        try:
            config.validate()
        except ValueError as e:
            raise ConfigurationError(f"Invalid client configuration: {e}", "config") from e

        self.config = config
        self._transport = CryptomktBaseRest(config, clock=clock, logger=logger)
        self.logger = self._transport.logger

        self._public = CryptomktPublicRest(self._transport)
        self._payment: Optional[CryptomktPaymentRest] = None
        self._market: Optional[CryptomktPrivateRest] = None
        if self._transport.has_credentials:
            self._payment = CryptomktPaymentRest(self._transport)
            self._market = CryptomktPrivateRest(self._transport)

        self.logger.info("CryptoMarket client initialized", **config.get_summary())

    @classmethod
    def from_config(cls, path: Optional[Path | str] = None,
                    env_file: Optional[Path | str] = None,
                    clock: Optional[ClockSource] = None) -> "CryptomktClient":
        """
        Build a client from config.yaml (and .env).

        The logging section, when present, configures the logger factory and
        the client receives an exchange logger.
        """
        manager = ConfigManager(path, env_file)
        config = manager.get_exchange_config()

        logging_config = manager.get_logging_config()
        logger = None
        if logging_config is not None:
            configure_logging(logging_config)
            logger = get_exchange_logger(config.name, 'rest')

        return cls(config, clock=clock, logger=logger)

    @property
    def transport(self) -> CryptomktBaseRest:
        return self._transport

    @property
    def is_authenticated(self) -> bool:
        return self._transport.has_credentials

    @property
    def public(self) -> CryptomktPublicRest:
        return self._public

    @property
    def payment(self) -> CryptomktPaymentRest:
        if self._payment is None:
            raise ConfigurationError("Payment API requires api_key and api_secret", "credentials")
        return self._payment

    @property
    def market(self) -> CryptomktPrivateRest:
        if self._market is None:
            raise ConfigurationError("Trading API requires api_key and api_secret", "credentials")
        return self._market

    async def close(self) -> None:
        try:
            await self._transport.close()
        finally:
            await self.logger.flush()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


def create_client(api_key: str, api_secret: str, **kwargs) -> CryptomktClient:
    """Client with credentials; remaining keyword arguments go to CryptomktClient."""
    if not api_key or not api_secret:
        raise ConfigurationError("api_key and api_secret are required", "credentials")
    return CryptomktClient(api_key=api_key, api_secret=api_secret, **kwargs)


def create_public_client(**kwargs) -> CryptomktClient:
    """Client limited to public market data."""
    return CryptomktClient(**kwargs)
