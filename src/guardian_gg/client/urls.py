from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from guardian_gg.client.types import Endpoint


def join_endpoint(endpoint: Endpoint) -> str:
    if isinstance(endpoint, str):
        return endpoint
    return "/".join(str(segment) for segment in endpoint)


def substitute(path: str, placeholders: Mapping[str, Any] | None) -> str:
    """
    Replace every literal `{name}` occurrence with the placeholder value.

    Tokens without a matching placeholder are left as they are.
    """

    for name, value in (placeholders or {}).items():
        path = path.replace("{" + name + "}", str(value))
    return path


def format_url(
    base_url: str,
    endpoint: Endpoint,
    placeholders: Mapping[str, Any] | None = None,
) -> httpx.URL:
    """
    Build the canonical absolute URL for an API endpoint.

    All documented endpoints live under a trailing slash, so one is added to
    the path when missing to avoid a redirect round trip.
    """

    path = substitute(join_endpoint(endpoint).lstrip("/"), placeholders)
    url = httpx.URL(base_url.rstrip("/") + "/" + path)

    if not url.path.endswith("/"):
        url = url.copy_with(path=url.path + "/")

    return url
