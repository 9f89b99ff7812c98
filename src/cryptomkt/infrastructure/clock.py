"""
Timestamp sources for request signing.

The exchange rejects signatures whose timestamp falls outside its tolerance
window, so a drifted host clock fails every private call. ``NtpClock`` reads
network time instead; when that lookup fails the error is raised and the
request is not signed with the local clock.
"""

import asyncio
import socket
import time
from abc import ABC, abstractmethod
from typing import Optional

import ntplib

from cryptomkt.config.structs import ClockConfig, DEFAULT_NTP_SERVER, DEFAULT_NTP_PORT
from cryptomkt.infrastructure.exceptions.exchange import ClockSyncError
from cryptomkt.infrastructure.logging import HFTLoggerInterface, NullLogger


class ClockSource(ABC):
    """Supplies the current Unix time in whole seconds."""

    @abstractmethod
    async def now(self) -> int:
        pass


class LocalClock(ClockSource):
    """System clock."""

    async def now(self) -> int:
        return int(time.time())


class NtpClock(ClockSource):
    """
    Network time from an NTP server.

    Each call performs one query in a worker thread so the event loop is not
    blocked by the UDP round trip.
    """

    def __init__(self, server: str = DEFAULT_NTP_SERVER, port: int = DEFAULT_NTP_PORT,
                 version: int = 3, timeout: float = 5.0,
                 logger: Optional[HFTLoggerInterface] = None):
        self.server = server
        self.port = port
        self.version = version
        self.timeout = timeout
        self.logger = logger or NullLogger()
        self._client = ntplib.NTPClient()

    @property
    def address(self) -> str:
        return f"ntp://{self.server}:{self.port}"

    def _query(self) -> float:
        response = self._client.request(self.server, version=self.version,
                                        port=self.port, timeout=self.timeout)
        return response.tx_time

    async def now(self) -> int:
        try:
            tx_time = await asyncio.to_thread(self._query)
        except (ntplib.NTPException, socket.gaierror, OSError) as e:
            self.logger.error("NTP time lookup failed",
                              server=self.server,
                              error_type=type(e).__name__,
                              error_message=str(e))
            raise ClockSyncError(f"NTP time lookup failed: {e}", url=self.address) from e

        return int(tx_time)


def create_clock(config: ClockConfig, logger: Optional[HFTLoggerInterface] = None) -> ClockSource:
    """Build the clock selected by configuration."""
    if config.source == "local":
        return LocalClock()
    if config.source == "ntp":
        return NtpClock(server=config.ntp_server, port=config.ntp_port,
                        version=config.ntp_version, timeout=config.ntp_timeout,
                        logger=logger)
    raise ValueError(f"Unknown clock source: {config.source}")
