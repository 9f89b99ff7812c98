from .auth import AuthStrategy
from .structs import AuthenticationData, SigningContext

__all__ = ['AuthStrategy', 'AuthenticationData', 'SigningContext']
