"""
Logging Configuration Structures

Structured configuration for the logging system using msgspec.Struct.
"""

from typing import Optional, Dict, Any
from msgspec import Struct
import msgspec


class BackendConfig(Struct, frozen=True):
    """
    Base configuration for all logging backends.

    Attributes:
        enabled: Whether this backend is active
        min_level: Minimum log level to process (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    enabled: bool = True
    min_level: str = "INFO"

    def validate(self) -> None:
        """Validate backend configuration."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.min_level.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {self.min_level}")


class ConsoleBackendConfig(BackendConfig, frozen=True):
    """
    Console backend configuration.

    Attributes:
        color: Enable colored output
        include_context: Include context information
        include_metrics: Also print metric records
        max_message_length: Maximum message length before truncation
    """
    color: bool = False
    include_context: bool = True
    include_metrics: bool = False
    max_message_length: int = 1000


class FileBackendConfig(BackendConfig, frozen=True):
    """
    File backend configuration.

    Attributes:
        path: Log file path
        format: Output format (text or json)
        buffer_size: Number of records buffered before an automatic flush
    """
    path: str = "logs/cryptomkt.log"
    format: str = "text"
    buffer_size: int = 100

    def validate(self) -> None:
        """Validate file backend configuration."""
        super().validate()
        if self.format not in {"text", "json"}:
            raise ValueError(f"Invalid format: {self.format}")
        if self.buffer_size <= 0:
            raise ValueError("buffer_size must be positive")


class LoggingConfig(Struct, frozen=True):
    """
    Complete logging configuration.

    Attributes:
        environment: Environment name (dev, prod, test)
        console: Console backend configuration
        file: File backend configuration
        default_context: Default context for all log messages
    """
    environment: str = "dev"
    console: Optional[ConsoleBackendConfig] = None
    file: Optional[FileBackendConfig] = None
    default_context: Optional[Dict[str, Any]] = None

    def validate(self) -> None:
        """Validate complete configuration."""
        if self.environment not in {"dev", "prod", "test", "staging"}:
            raise ValueError(f"Invalid environment: {self.environment}")

        if self.console:
            self.console.validate()
        if self.file:
            self.file.validate()

    def get_enabled_backends(self) -> list[str]:
        """Get list of enabled backend names."""
        enabled = []
        if self.console and self.console.enabled:
            enabled.append("console")
        if self.file and self.file.enabled:
            enabled.append("file")
        return enabled

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoggingConfig":
        """Create from a plain dictionary (e.g. the ``logging`` section of config.yaml)."""
        return msgspec.convert(data, cls)

    @classmethod
    def default_development(cls) -> "LoggingConfig":
        return cls(
            environment="dev",
            console=ConsoleBackendConfig(min_level="DEBUG", color=True)
        )

    @classmethod
    def default_production(cls) -> "LoggingConfig":
        return cls(
            environment="prod",
            console=ConsoleBackendConfig(min_level="WARNING"),
            file=FileBackendConfig(min_level="INFO", format="json")
        )
