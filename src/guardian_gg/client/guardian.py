from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Mapping
from typing import Any

import httpx

from guardian_gg.client import endpoints
from guardian_gg.client.errors import GuardianError, TransportError
from guardian_gg.client.inflight import InFlightRegistry
from guardian_gg.client.responses import NormalizedResult, normalize
from guardian_gg.client.transport import HttpxTransport, Transport
from guardian_gg.client.types import Callback, Endpoint, RequestOptions
from guardian_gg.client.urls import format_url
from guardian_gg.core.config import Settings, settings

logger = logging.getLogger(__name__)


class GuardianClient:
    """
    guardian.gg API client.

    Results are delivered to `callback(error, payload)`. Identical requests
    issued while one is already in flight share that single call; every
    caller receives the same result, in the order they asked. Callback
    scheduling requires a running asyncio event loop.
    """

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout_s: float = 30.0,
        connect_timeout_s: float = 10.0,
        headers: Mapping[str, str] | None = None,
        transport: Transport | None = None,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url or settings.api_base_url
        self.timeout_s = timeout_s
        self.transport: Transport = transport or HttpxTransport(
            timeout_s=timeout_s,
            connect_timeout_s=connect_timeout_s,
            headers=dict(headers or {}),
            transport=http_transport,
        )
        self.inflight = InFlightRegistry()
        self._tasks: set[asyncio.Task[None]] = set()

    @classmethod
    def from_settings(cls, cfg: Settings = settings, **overrides: Any) -> GuardianClient:
        kwargs: dict[str, Any] = {
            "base_url": cfg.api_base_url,
            "timeout_s": cfg.timeout_s,
            "connect_timeout_s": cfg.connect_timeout_s,
            "headers": {"User-Agent": cfg.user_agent},
        }
        kwargs.update(overrides)
        return cls(**kwargs)

    async def __aenter__(self) -> GuardianClient:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def join(self) -> None:
        """Wait until every scheduled API call has delivered its result."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def aclose(self) -> None:
        try:
            await self.join()
        finally:
            await self.transport.aclose()

    def format(self, endpoint: Endpoint, template: Mapping[str, Any] | None = None) -> httpx.URL:
        return format_url(self.base_url, endpoint, template)

    def send(self, request: RequestOptions, callback: Callback) -> GuardianClient:
        """
        Issue a request, or join the identical one already in flight.

        Returns the client for chaining; the result arrives via `callback`.
        """
        loop = asyncio.get_running_loop()

        method = request.method.upper()
        href = str(self.format(request.url, request.template))

        # Consumers may ask for the same data from several places at once;
        # only the first of them reaches the network.
        if self.inflight.add(method, href, callback):
            return self

        task = loop.create_task(self._perform(method, href, request))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return self

    async def _perform(self, method: str, href: str, request: RequestOptions) -> None:
        logger.debug("%s %s", method, href)

        result: NormalizedResult
        try:
            raw = await self.transport.perform(method, href, body=request.body)
            result = normalize(raw, request=request, url=href, filter_path=request.filter)
        except httpx.TransportError as e:
            result = (
                TransportError(
                    str(e) or type(e).__name__,
                    request=request,
                    url=href,
                    action="retry",
                ),
                None,
            )
        except Exception as e:
            # Waiters still get exactly one delivery before the failure surfaces.
            self.inflight.run(
                method,
                href,
                TransportError(f"Request failed: {e!r}", request=request, url=href),
                None,
            )
            raise

        error, payload = result
        self.inflight.run(method, href, error, payload)

    async def fetch(self, request: RequestOptions) -> Any:
        """Awaitable form of `send`: returns the payload or raises the GuardianError."""
        loop = asyncio.get_running_loop()
        future: asyncio.Future[Any] = loop.create_future()

        def deliver(error: GuardianError | None, payload: Any) -> None:
            if future.done():
                return
            if error is not None:
                future.set_exception(error)
            else:
                future.set_result(payload)

        self.send(request, deliver)
        return await future

    # -----------------------------
    # Endpoints
    # -----------------------------

    def user_elo(self, membership_id: str | int, callback: Callback) -> GuardianClient:
        return self.send(endpoints.user_elo(membership_id), callback)

    def seasons(self, membership_id: str | int, callback: Callback) -> GuardianClient:
        return self.send(endpoints.seasons(membership_id), callback)

    def team_elo(self, team: Iterable[str | int], callback: Callback) -> GuardianClient:
        return self.send(endpoints.team_elo(team), callback)

    def fireteam(
        self,
        membership_id: str | int,
        callback: Callback,
        mode: int = endpoints.DEFAULT_FIRETEAM_MODE,
    ) -> GuardianClient:
        return self.send(endpoints.fireteam(membership_id, mode), callback)

    def team(self, membership_ids: Iterable[str | int], callback: Callback) -> GuardianClient:
        return self.send(endpoints.team(membership_ids), callback)
