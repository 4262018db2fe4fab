from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol

import httpx

from guardian_gg.client.types import RawResponse


class Transport(Protocol):
    """
    Performs the physical network call.

    Must return a RawResponse for every HTTP status and raise only for
    transport failures (timeouts, connection errors).
    """

    async def perform(
        self,
        method: str,
        url: str,
        *,
        body: str | bytes | None = None,
    ) -> RawResponse: ...

    async def aclose(self) -> None: ...


@dataclass
class HttpxTransport:
    """
    Transport backed by a single httpx.AsyncClient.

    - One underlying client for connection pooling.
    - Status handling is left to the normalizer; only transport failures raise.
    """

    timeout_s: float = 30.0
    connect_timeout_s: float = 10.0
    headers: Mapping[str, str] = field(default_factory=dict)

    transport: httpx.AsyncBaseTransport | None = None

    def __post_init__(self) -> None:
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout_s, connect=self.connect_timeout_s),
            headers=dict(self.headers),
            transport=self.transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> HttpxTransport:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def perform(
        self,
        method: str,
        url: str,
        *,
        body: str | bytes | None = None,
    ) -> RawResponse:
        resp = await self._client.request(method=method, url=url, content=body)
        return RawResponse(status_code=resp.status_code, text=resp.text)
