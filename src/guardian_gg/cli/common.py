from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any

import typer

from guardian_gg.client.errors import GuardianError
from guardian_gg.client.guardian import GuardianClient
from guardian_gg.client.types import RequestOptions
from guardian_gg.core.config import settings


@dataclass
class CliState:
    base_url: str = settings.api_base_url
    timeout_s: float = settings.timeout_s


state = CliState()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def make_client() -> GuardianClient:
    return GuardianClient.from_settings(base_url=state.base_url, timeout_s=state.timeout_s)


async def _fetch(request: RequestOptions) -> Any:
    async with make_client() as client:
        return await client.fetch(request)


def fetch_and_echo(request: RequestOptions) -> None:
    """
    Run one API call and print its payload as JSON.
    Errors go to stderr with exit code 1.
    """
    try:
        payload = asyncio.run(_fetch(request))
    except GuardianError as e:
        typer.echo(f"Error ({e.kind}): {e}", err=True)
        raise typer.Exit(code=1) from e

    typer.echo(json.dumps(payload, indent=2, sort_keys=True))
