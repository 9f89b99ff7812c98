"""
Authentication Strategy Interface

Strategy for request authentication and signing.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from ..structs import HTTPMethod
from .structs import AuthenticationData


class AuthStrategy(ABC):
    """
    Strategy for request authentication and signing.

    Implementations must be pure with respect to shared state: the same
    strategy instance is used concurrently by every in-flight request.
    """

    @abstractmethod
    def sign_request(
        self,
        method: HTTPMethod,
        path: str,
        params: Optional[Dict[str, Any]],
        timestamp: int
    ) -> AuthenticationData:
        """
        Generate authentication data for request.

        Args:
            method: HTTP method
            path: Canonical request path including version prefix
            params: Request parameters (query or form)
            timestamp: Unix timestamp in seconds

        Returns:
            AuthenticationData with headers to attach
        """
        pass

    @abstractmethod
    def requires_auth(self, path: str) -> bool:
        """
        Check if a path has a declared signing rule.

        Args:
            path: Canonical request path

        Returns:
            True if requests to this path can be signed
        """
        pass
