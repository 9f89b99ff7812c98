from enum import Enum

import msgspec


class HTTPMethod(Enum):
    """HTTP methods used by the REST API."""
    GET = "GET"
    POST = "POST"


class RestResponse(msgspec.Struct, frozen=True):
    """Raw response passed through the transport for endpoint-level decoding."""
    status: int
    text: str
    url: str

    @property
    def ok(self) -> bool:
        return self.status == 200
