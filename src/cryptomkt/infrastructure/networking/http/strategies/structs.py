"""
REST Transport Strategy Data Structures
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple

from ..structs import HTTPMethod


@dataclass(frozen=True)
class SigningContext:
    """Inputs of one signature. Built fresh per request, never persisted."""
    timestamp: int
    method: HTTPMethod
    path: str
    values: Tuple[str, ...] = ()


@dataclass(frozen=True)
class AuthenticationData:
    """Authentication headers to merge into an outgoing request."""
    headers: Dict[str, str] = field(default_factory=dict)
