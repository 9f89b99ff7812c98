from typing import Dict, Any
from msgspec import Struct, field


DEFAULT_BASE_URL = "https://api.cryptomkt.com"
DEFAULT_API_VERSION = "v1"
DEFAULT_NTP_SERVER = "2.cl.pool.ntp.org"
DEFAULT_NTP_PORT = 123


class NetworkConfig(Struct, frozen=True):
    """
    Network configuration settings.

    Attributes:
        request_timeout: Total HTTP request timeout in seconds
        connect_timeout: Connection timeout in seconds
    """
    request_timeout: float = 10.0
    connect_timeout: float = 5.0

    def validate(self) -> None:
        """Validate network configuration."""
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")
        if self.connect_timeout <= 0:
            raise ValueError("connect_timeout must be positive")


class ClockConfig(Struct, frozen=True):
    """
    Timestamp source used to sign private requests.

    Attributes:
        source: 'ntp' (network time) or 'local' (system clock)
        ntp_server: NTP host queried when source is 'ntp'
        ntp_port: NTP port
        ntp_timeout: NTP query timeout in seconds
        ntp_version: NTP protocol version
    """
    source: str = "ntp"
    ntp_server: str = DEFAULT_NTP_SERVER
    ntp_port: int = DEFAULT_NTP_PORT
    ntp_timeout: float = 5.0
    ntp_version: int = 3

    def validate(self) -> None:
        """Validate clock configuration."""
        if self.source not in ("ntp", "local"):
            raise ValueError(f"Unknown clock source: {self.source}")
        if self.source == "ntp" and not self.ntp_server:
            raise ValueError("ntp_server is required for ntp clock source")
        if not 0 < self.ntp_port < 65536:
            raise ValueError("ntp_port out of range")
        if self.ntp_timeout <= 0:
            raise ValueError("ntp_timeout must be positive")
        if self.ntp_version not in (1, 2, 3, 4):
            raise ValueError(f"Unsupported ntp_version: {self.ntp_version}")


class ExchangeCredentials(Struct, frozen=True):
    """Exchange API credentials. The secret is only ever used as an HMAC key."""
    api_key: str = ""
    secret_key: str = ""

    @property
    def has_private_api(self) -> bool:
        """Check if both credentials are provided."""
        return bool(self.api_key) and bool(self.secret_key)

    def get_preview(self) -> str:
        """Get safe preview of credentials for logging."""
        if not self.api_key:
            return "Not configured"
        if len(self.api_key) > 8:
            return f"{self.api_key[:4]}...{self.api_key[-4:]}"
        return "***"

    def validate(self) -> None:
        """Validate credentials (allows empty for public-only mode)."""
        if not self.api_key and not self.secret_key:
            return

        if bool(self.api_key) != bool(self.secret_key):
            raise ValueError("Both api_key and secret_key must be provided together or both empty")

    def __repr__(self) -> str:
        return f"ExchangeCredentials(api_key={self.get_preview()!r}, secret_key='***')"


class ExchangeConfig(Struct, frozen=True):
    """
    Complete exchange configuration including credentials and settings.

    Attributes:
        name: Exchange name used in logs
        credentials: API credentials (empty for public-only mode)
        base_url: REST API host, without version prefix
        api_version: Version path segment prepended to every endpoint
        network: Network timeouts
        clock: Timestamp source for request signing
    """
    name: str = "cryptomkt"
    credentials: ExchangeCredentials = field(default_factory=ExchangeCredentials)
    base_url: str = DEFAULT_BASE_URL
    api_version: str = DEFAULT_API_VERSION
    network: NetworkConfig = field(default_factory=NetworkConfig)
    clock: ClockConfig = field(default_factory=ClockConfig)

    @property
    def api_prefix(self) -> str:
        """Path prefix of every endpoint, e.g. '/v1'."""
        return f"/{self.api_version.strip('/')}"

    def has_credentials(self) -> bool:
        """
        Check if exchange has valid credentials for private operations.

        Returns:
            True if exchange has valid API credentials
        """
        return self.credentials.has_private_api

    def is_public_only(self) -> bool:
        """
        Check if exchange is configured for public-only operations.

        Returns:
            True if exchange has no credentials (public-only mode)
        """
        return not self.has_credentials()

    def validate(self) -> None:
        """Validate complete configuration."""
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL: {self.base_url}")
        if not self.api_version.strip('/'):
            raise ValueError("api_version is required")
        self.credentials.validate()
        self.network.validate()
        self.clock.validate()

    def get_summary(self) -> Dict[str, Any]:
        """Loggable summary without secrets."""
        return {
            "name": self.name,
            "base_url": self.base_url,
            "api_version": self.api_version,
            "credentials": self.credentials.get_preview(),
            "clock": self.clock.source,
            "request_timeout": self.network.request_timeout,
        }
