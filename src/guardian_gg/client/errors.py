from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from guardian_gg.client.types import RequestOptions


class ErrorKind(StrEnum):
    HTTP = "http"
    PARSE = "parse"
    API = "api"
    TRANSPORT = "transport"


class GuardianError(RuntimeError):
    """
    Base error delivered to waiters when a request fails.

    Errors are handed to callbacks as values; only the awaitable surface
    (`GuardianClient.fetch`) raises them.
    """

    kind: ErrorKind

    def __init__(
        self,
        message: str,
        *,
        code: int | None = None,
        text: str = "",
        body: Any = None,
        request: RequestOptions | None = None,
        url: str | None = None,
        action: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.text = text
        self.body = body
        self.request = request
        self.url = url
        self.action = action

    def __str__(self) -> str:
        parts = [self.message]
        if self.code is not None:
            parts.append(f"code={self.code}")
        if self.url:
            parts.append(f"url={self.url}")
        return " | ".join(parts)


class HttpError(GuardianError):
    """The API answered with a non-200 HTTP status."""

    kind = ErrorKind.HTTP


class ParseError(GuardianError):
    """The body was not JSON, or was JSON of an unsupported shape."""

    kind = ErrorKind.PARSE


class ApiError(GuardianError):
    """The payload carried an explicit failing `statusCode`."""

    kind = ErrorKind.API


class TransportError(GuardianError):
    """Timeouts and connection failures raised by the transport."""

    kind = ErrorKind.TRANSPORT
