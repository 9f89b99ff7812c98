"""
CryptoMarket request signing (protocol ``cryptomkt-v1``).

Signing string, in order:
    1. timestamp as decimal Unix seconds
    2. request path only, e.g. ``/v1/orders/cancel`` (no scheme, host or query)
    3. for paths declared PATH_AND_SORTED_VALUES: parameter values ordered by
       ascending parameter name, concatenated without names or separators.
       An empty parameter set contributes nothing.

Signature: lowercase hex HMAC-SHA384 of the signing string keyed by the API
secret. Every path that can be signed is declared in SIGNED_ENDPOINTS; there
is no fallback rule for undeclared paths.
"""

import hashlib
import hmac
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from cryptomkt.config.structs import ExchangeCredentials
from cryptomkt.infrastructure.logging import HFTLoggerInterface, NullLogger
from cryptomkt.infrastructure.networking.http.structs import HTTPMethod
from cryptomkt.infrastructure.networking.http.strategies import (
    AuthStrategy, AuthenticationData, SigningContext
)

SIGNING_PROTOCOL = "cryptomkt-v1"

HEADER_API_KEY = "X-MKT-APIKEY"
HEADER_TIMESTAMP = "X-MKT-TIMESTAMP"
HEADER_SIGNATURE = "X-MKT-SIGNATURE"


class SignatureRule(Enum):
    PATH_ONLY = "path"
    PATH_AND_SORTED_VALUES = "path+sorted_values"


SIGNED_ENDPOINTS: Dict[Tuple[HTTPMethod, str], SignatureRule] = {
    # Payments
    (HTTPMethod.POST, "/v1/payment/new_order"): SignatureRule.PATH_AND_SORTED_VALUES,
    (HTTPMethod.GET, "/v1/payment/status"): SignatureRule.PATH_ONLY,
    (HTTPMethod.GET, "/v1/payment/orders"): SignatureRule.PATH_ONLY,
    # Trading
    (HTTPMethod.GET, "/v1/orders/active"): SignatureRule.PATH_ONLY,
    (HTTPMethod.GET, "/v1/orders/executed"): SignatureRule.PATH_ONLY,
    (HTTPMethod.POST, "/v1/orders/create"): SignatureRule.PATH_AND_SORTED_VALUES,
    (HTTPMethod.GET, "/v1/orders/status"): SignatureRule.PATH_ONLY,
    (HTTPMethod.POST, "/v1/orders/cancel"): SignatureRule.PATH_AND_SORTED_VALUES,
    (HTTPMethod.GET, "/v1/balance"): SignatureRule.PATH_ONLY,
}


def get_signature_rule(method: HTTPMethod, path: str) -> SignatureRule:
    try:
        return SIGNED_ENDPOINTS[(method, path)]
    except KeyError:
        raise ValueError(
            f"No {SIGNING_PROTOCOL} signing rule declared for {method.value} {path}"
        ) from None


def sorted_param_values(params: Optional[Mapping[str, Any]]) -> Tuple[str, ...]:
    """Parameter values ordered by ascending name. ``None`` values are not sent, so not signed."""
    if not params:
        return ()
    return tuple(str(params[name]) for name in sorted(params) if params[name] is not None)


def _join(timestamp: int | str, path: str, values: Tuple[str, ...]) -> bytes:
    # New buffer per call; nothing is shared between concurrent signatures
    return "".join((str(timestamp), path) + values).encode("utf-8")


def build_signature_payload(timestamp: int | str, path: str,
                            params: Optional[Mapping[str, Any]] = None) -> bytes:
    """Signing string for a path whose parameter values are part of the signature."""
    return _join(timestamp, path, sorted_param_values(params))


def sign_payload(secret: str | bytes, payload: bytes) -> str:
    key = secret.encode("utf-8") if isinstance(secret, str) else secret
    return hmac.new(key, payload, hashlib.sha384).hexdigest()


def create_signing_context(timestamp: int | str, method: HTTPMethod, path: str,
                           params: Optional[Mapping[str, Any]] = None) -> SigningContext:
    """Apply the declared rule for (method, path) to select what gets signed."""
    rule = get_signature_rule(method, path)
    values = sorted_param_values(params) if rule is SignatureRule.PATH_AND_SORTED_VALUES else ()
    return SigningContext(timestamp=timestamp, method=method, path=path, values=values)


def sign(secret: str | bytes, timestamp: int | str, method: HTTPMethod, path: str,
         params: Optional[Mapping[str, Any]] = None) -> str:
    """
    Compute the request signature.

    Args:
        secret: API secret (HMAC key)
        timestamp: Unix seconds, rendered as decimal text
        method: HTTP method, selects the declared rule together with path
        path: Canonical path including version prefix
        params: Query or form parameters

    Returns:
        Lowercase hex HMAC-SHA384 digest

    Raises:
        ValueError: If no signing rule is declared for (method, path)
    """
    context = create_signing_context(timestamp, method, path, params)
    return sign_payload(secret, _join(context.timestamp, context.path, context.values))


class CryptomktAuthStrategy(AuthStrategy):
    """Produces the three X-MKT authentication headers for a private request."""

    def __init__(self, credentials: ExchangeCredentials, logger: Optional[HFTLoggerInterface] = None):
        if not credentials.has_private_api:
            raise ValueError("CryptoMarket credentials not configured")

        self.api_key = credentials.api_key
        self._secret = credentials.secret_key.encode("utf-8")
        self.logger = logger or NullLogger()

    def sign_request(self, method: HTTPMethod, path: str,
                     params: Optional[Dict[str, Any]], timestamp: int) -> AuthenticationData:
        signature = sign(self._secret, timestamp, method, path, params)

        self.logger.debug("Request signed",
                          protocol=SIGNING_PROTOCOL,
                          method=method.value,
                          path=path,
                          timestamp=timestamp)

        return AuthenticationData(headers={
            HEADER_API_KEY: self.api_key,
            HEADER_TIMESTAMP: str(timestamp),
            HEADER_SIGNATURE: signature,
        })

    def requires_auth(self, path: str) -> bool:
        return any(signed_path == path for _, signed_path in SIGNED_ENDPOINTS)
