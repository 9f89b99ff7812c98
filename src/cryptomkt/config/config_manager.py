"""
Configuration loading from config.yaml and .env.

The YAML file may reference environment variables:
- ${VAR_NAME} - environment variable (empty if unset, allows public-only mode)
- ${VAR_NAME:default} - environment variable with default value

Example config.yaml:

    cryptomkt:
      api_key: "${CRYPTOMKT_API_KEY}"
      secret_key: "${CRYPTOMKT_SECRET_KEY}"
      base_url: "https://api.cryptomkt.com"
      network:
        request_timeout: 10
    logging:
      console:
        min_level: INFO
"""

import os
import re
from pathlib import Path
from typing import Any, Dict, Optional

import msgspec
import yaml
from dotenv import load_dotenv

from cryptomkt.infrastructure.exceptions.system import ConfigurationError
from cryptomkt.infrastructure.logging import LoggingConfig
from .structs import ExchangeConfig, ExchangeCredentials, NetworkConfig, ClockConfig

_ENV_VAR_PATTERN = re.compile(r'\$\{([^}]+)\}')


def guess_file_paths(file_name: str) -> list[Path]:
    """Possible locations of a configuration file, in search order."""
    return [
        Path.cwd() / file_name,
        Path(__file__).parent.parent.parent.parent / file_name,  # Project root
        Path.home() / file_name,
    ]


def substitute_env_vars(content: str) -> str:
    """Substitute ${VAR} and ${VAR:default} references in raw configuration text."""
    def replace_var(match: re.Match) -> str:
        var_expr = match.group(1)

        if ':' in var_expr:
            var_name, default_value = var_expr.split(':', 1)
            env_value = os.getenv(var_name.strip())
            return default_value if env_value is None else env_value

        return os.getenv(var_expr.strip(), "")

    return _ENV_VAR_PATTERN.sub(replace_var, content)


class ConfigManager:
    """
    Loads the exchange section of config.yaml into an ExchangeConfig.

    Environment variables from a .env file are loaded first (without
    overriding variables already set) so YAML references resolve.
    """

    SECTION = "cryptomkt"

    def __init__(self, path: Optional[Path | str] = None, env_file: Optional[Path | str] = None):
        self._path = Path(path) if path else None
        self._env_file = Path(env_file) if env_file else None
        self._data: Optional[Dict[str, Any]] = None
        self.config_file_path: Optional[Path] = None

    def _load_env_file(self) -> None:
        if self._env_file is not None:
            if not self._env_file.exists():
                raise ConfigurationError(f"Env file not found: {self._env_file}", "env_file")
            load_dotenv(dotenv_path=self._env_file, override=False)
            return

        for env_path in guess_file_paths('.env'):
            if env_path.exists():
                load_dotenv(dotenv_path=env_path, override=False)
                return

    def _find_config_file(self) -> Optional[Path]:
        if self._path is not None:
            if not self._path.exists():
                raise ConfigurationError(f"Config file not found: {self._path}", "path")
            return self._path

        for config_path in guess_file_paths('config.yaml'):
            if config_path.exists():
                return config_path
        return None

    def load(self) -> Dict[str, Any]:
        """Read and cache the substituted YAML document (empty if no file exists)."""
        if self._data is not None:
            return self._data

        self._load_env_file()
        config_path = self._find_config_file()

        if config_path is None:
            self._data = {}
            return self._data

        raw_content = config_path.read_text(encoding='utf-8')
        try:
            data = yaml.safe_load(substitute_env_vars(raw_content)) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}", "path") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Top level of {config_path} must be a mapping", "path")

        self.config_file_path = config_path
        self._data = data
        return data

    def get_exchange_config(self) -> ExchangeConfig:
        """Build and validate the exchange configuration."""
        data = self.load().get(self.SECTION) or {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"'{self.SECTION}' section must be a mapping", self.SECTION)

        try:
            config = ExchangeConfig(
                name=str(data.get('name', 'cryptomkt')),
                credentials=self._parse_credentials(data),
                base_url=str(data.get('base_url', ExchangeConfig().base_url)),
                api_version=str(data.get('api_version', ExchangeConfig().api_version)),
                network=msgspec.convert(data.get('network') or {}, NetworkConfig, strict=False),
                clock=msgspec.convert(data.get('clock') or {}, ClockConfig, strict=False),
            )
            config.validate()
        except (msgspec.ValidationError, ValueError, TypeError) as e:
            raise ConfigurationError(f"Invalid {self.SECTION} configuration: {e}", self.SECTION) from e

        return config

    def get_logging_config(self) -> Optional[LoggingConfig]:
        """Logging section as a LoggingConfig, or None when absent."""
        data = self.load().get('logging')
        if not data:
            return None
        try:
            config = LoggingConfig.from_dict(data)
            config.validate()
        except (msgspec.ValidationError, ValueError) as e:
            raise ConfigurationError(f"Invalid logging configuration: {e}", "logging") from e
        return config

    @staticmethod
    def _parse_credentials(data: Dict[str, Any]) -> ExchangeCredentials:
        # Substitution of an unset variable yields None or ''
        api_key = data.get('api_key') or ''
        secret_key = data.get('secret_key') or ''
        return ExchangeCredentials(api_key=str(api_key), secret_key=str(secret_key))


def load_exchange_config(path: Optional[Path | str] = None,
                         env_file: Optional[Path | str] = None) -> ExchangeConfig:
    """Load ExchangeConfig from config.yaml (defaults when no file is found)."""
    return ConfigManager(path, env_file).get_exchange_config()
