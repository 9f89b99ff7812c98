from .structs import HTTPMethod, RestResponse
from .strategies import AuthStrategy, AuthenticationData, SigningContext
from .rest_client_interface import BaseRestClientInterface, FORM_CONTENT_TYPE

__all__ = [
    'HTTPMethod',
    'RestResponse',
    'AuthStrategy',
    'AuthenticationData',
    'SigningContext',
    'BaseRestClientInterface',
    'FORM_CONTENT_TYPE',
]
