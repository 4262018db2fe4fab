from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from guardian_gg.client.errors import GuardianError
from guardian_gg.client.types import Callback

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestKey:
    method: str
    url: str


def request_key(method: str, url: httpx.URL | str) -> RequestKey:
    """Canonical identity of a request: upper-cased method and URL string."""

    return RequestKey(method=method.upper(), url=str(url))


class InFlightRegistry:
    """
    Coalesces identical in-flight requests.

    Each key maps to the ordered list of callbacks waiting on one physical
    call. `add` always registers the callback and tells the caller whether a
    call is already underway; `run` fans the single result out to every
    waiter and forgets the key.
    """

    def __init__(self) -> None:
        self._pending: dict[RequestKey, list[Callback]] = {}

    def __len__(self) -> int:
        return len(self._pending)

    def __contains__(self, key: object) -> bool:
        return key in self._pending

    def waiting(self, method: str, url: httpx.URL | str) -> int:
        return len(self._pending.get(request_key(method, url), ()))

    def add(self, method: str, url: httpx.URL | str, callback: Callback) -> bool:
        """
        Register `callback` for the request.

        Returns True when the request is already pending, in which case the
        caller must not perform the call itself.
        """
        key = request_key(method, url)
        waiters = self._pending.get(key)

        if waiters is not None:
            waiters.append(callback)
            logger.debug("join %s %s (%d waiting)", key.method, key.url, len(waiters))
            return True

        self._pending[key] = [callback]
        logger.debug("leader %s %s", key.method, key.url)
        return False

    def run(
        self,
        method: str,
        url: httpx.URL | str,
        error: GuardianError | None = None,
        payload: Any = None,
    ) -> None:
        """
        Deliver `(error, payload)` to every waiter of the request, in order.

        Unknown keys are ignored. Every waiter is called even if an earlier
        one raises; the first exception is re-raised afterwards.
        """
        key = request_key(method, url)
        waiters = self._pending.pop(key, None)
        if waiters is None:
            logger.debug("no waiters for %s %s", key.method, key.url)
            return

        first_exc: Exception | None = None
        for callback in waiters:
            try:
                callback(error, payload)
            except Exception as e:
                logger.exception("callback for %s %s raised", key.method, key.url)
                if first_exc is None:
                    first_exc = e

        if first_exc is not None:
            raise first_exc
