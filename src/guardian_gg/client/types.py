from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from guardian_gg.client.errors import GuardianError

Endpoint = str | Sequence[str]

Callback = Callable[[GuardianError | None, Any], None]


@dataclass(frozen=True)
class RequestOptions:
    """
    Everything the facade needs to issue one API call.

    `url` is an endpoint pattern (string or path segments) with `{name}`
    placeholders filled from `template`. `filter` is an optional dotted path
    applied to the normalized payload.
    """

    url: Endpoint
    template: Mapping[str, Any] = field(default_factory=dict)
    filter: str | None = None
    method: str = "GET"
    body: str | bytes | None = None


@dataclass(frozen=True)
class RawResponse:
    """Transport-level result handed to the normalizer."""

    status_code: int
    text: str
    body: Any = None
