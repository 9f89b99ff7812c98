"""
Logging Factory

Creates and caches logger instances from a LoggingConfig struct. Client
components never call this implicitly; callers opt in by passing the
returned logger to the client.
"""

import os
from typing import Dict, Optional

from .interfaces import HFTLoggerInterface, LogBackend
from .hft_logger import HFTLogger
from .backends.console import ConsoleBackend
from .backends.file import FileBackend
from .structs import LoggingConfig


class LoggerFactory:
    """Simplified logging factory - trust config, fail fast."""

    _cached_loggers: Dict[str, HFTLoggerInterface] = {}
    _default_config: Optional[LoggingConfig] = None

    @classmethod
    def create_logger(cls, name: str, config: Optional[LoggingConfig] = None) -> HFTLoggerInterface:
        """Create logger instance, cached by name."""
        if name in cls._cached_loggers:
            return cls._cached_loggers[name]

        config = config or cls.get_default_config()
        config.validate()

        backends: list[LogBackend] = []
        if config.console and config.console.enabled:
            backends.append(ConsoleBackend(config.console, 'console'))
        if config.file and config.file.enabled:
            backends.append(FileBackend(config.file, 'file'))

        logger = HFTLogger(name=name, backends=backends, context=config.default_context)

        cls._cached_loggers[name] = logger
        return logger

    @classmethod
    def get_default_config(cls) -> LoggingConfig:
        if cls._default_config is None:
            environment = os.getenv('ENVIRONMENT', 'dev')
            if environment == 'prod':
                cls._default_config = LoggingConfig.default_production()
            else:
                cls._default_config = LoggingConfig.default_development()
        return cls._default_config

    @classmethod
    def configure(cls, config: LoggingConfig) -> None:
        """Replace the default config; already created loggers are dropped."""
        config.validate()
        cls._default_config = config
        cls._cached_loggers.clear()

    @classmethod
    def clear_cache(cls) -> None:
        """Clear cached logger instances."""
        cls._cached_loggers.clear()
        cls._default_config = None


def get_logger(name: str) -> HFTLoggerInterface:
    """Get logger for a component."""
    return LoggerFactory.create_logger(name)


def get_exchange_logger(exchange: str, component: str) -> HFTLoggerInterface:
    """
    Get logger for an exchange component with the exchange set as context.

    Args:
        exchange: Exchange name (e.g. 'cryptomkt')
        component: Component name (e.g. 'rest.private')
    """
    logger = LoggerFactory.create_logger(f"{exchange.lower()}.{component}")
    logger.set_context(exchange=exchange.lower())
    return logger


def configure_logging(config: LoggingConfig) -> None:
    """Set the configuration used by subsequent get_logger calls."""
    LoggerFactory.configure(config)
