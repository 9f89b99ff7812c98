from .structs import (
    ExchangeConfig,
    ExchangeCredentials,
    NetworkConfig,
    ClockConfig,
    DEFAULT_BASE_URL,
    DEFAULT_API_VERSION,
    DEFAULT_NTP_SERVER,
    DEFAULT_NTP_PORT,
)
from .config_manager import ConfigManager, load_exchange_config, substitute_env_vars

__all__ = [
    'ExchangeConfig',
    'ExchangeCredentials',
    'NetworkConfig',
    'ClockConfig',
    'DEFAULT_BASE_URL',
    'DEFAULT_API_VERSION',
    'DEFAULT_NTP_SERVER',
    'DEFAULT_NTP_PORT',
    'ConfigManager',
    'load_exchange_config',
    'substitute_env_vars',
]
