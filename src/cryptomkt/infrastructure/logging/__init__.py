"""
Structured Logging

Usage:
    from cryptomkt.infrastructure.logging import get_exchange_logger

    logger = get_exchange_logger('cryptomkt', 'rest')
    client = CryptomktClient(config, logger=logger)

    # Metrics logging
    logger.metric("request_duration_ms", 1.23, endpoint="/v1/ticker")

Components default to ``NullLogger`` when no logger is injected.
"""

from .interfaces import (
    LogLevel,
    LogType,
    LogRecord,
    LogBackend,
    HFTLoggerInterface
)

from .hft_logger import HFTLogger, NullLogger, LoggingTimer

from .factory import (
    LoggerFactory,
    get_logger,
    get_exchange_logger,
    configure_logging
)

from .structs import (
    LoggingConfig,
    BackendConfig,
    ConsoleBackendConfig,
    FileBackendConfig
)

from .backends.console import ConsoleBackend
from .backends.file import FileBackend

__all__ = [
    'LogLevel',
    'LogType',
    'LogRecord',
    'LogBackend',
    'HFTLoggerInterface',
    'HFTLogger',
    'NullLogger',
    'LoggingTimer',
    'LoggerFactory',
    'get_logger',
    'get_exchange_logger',
    'configure_logging',
    'LoggingConfig',
    'BackendConfig',
    'ConsoleBackendConfig',
    'FileBackendConfig',
    'ConsoleBackend',
    'FileBackend',
]
