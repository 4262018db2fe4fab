from guardian_gg.client.errors import (
    ApiError,
    ErrorKind,
    GuardianError,
    HttpError,
    ParseError,
    TransportError,
)
from guardian_gg.client.guardian import GuardianClient
from guardian_gg.client.inflight import InFlightRegistry, RequestKey, request_key
from guardian_gg.client.types import RawResponse, RequestOptions

__all__ = [
    "ApiError",
    "ErrorKind",
    "GuardianClient",
    "GuardianError",
    "HttpError",
    "InFlightRegistry",
    "ParseError",
    "RawResponse",
    "RequestKey",
    "RequestOptions",
    "TransportError",
    "request_key",
]
