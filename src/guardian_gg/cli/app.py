from __future__ import annotations

import typer

from guardian_gg.cli.common import configure_logging, fetch_and_echo, state
from guardian_gg.client import endpoints
from guardian_gg.core.config import settings

app = typer.Typer(no_args_is_help=True, help="Query the guardian.gg ELO API.")


@app.callback()
def main(
    base_url: str = typer.Option(
        settings.api_base_url, "--base-url", help="Location of the guardian.gg API."
    ),
    timeout: float = typer.Option(
        settings.timeout_s, "--timeout", help="Request timeout in seconds."
    ),
    log_level: str = typer.Option(
        settings.log_level, "--log-level", help="Logging level (e.g. DEBUG)."
    ),
) -> None:
    state.base_url = base_url
    state.timeout_s = timeout
    configure_logging(log_level)


@app.command("user-elo")
def user_elo_cmd(
    membership_id: str = typer.Argument(..., help="Destiny membership id."),
) -> None:
    """ELO ratings of a user, per playlist."""

    fetch_and_echo(endpoints.user_elo(membership_id))


@app.command("seasons")
def seasons_cmd(
    membership_id: str = typer.Argument(..., help="Destiny membership id."),
) -> None:
    """ELO ratings of previous seasons."""

    fetch_and_echo(endpoints.seasons(membership_id))


@app.command("team-elo")
def team_elo_cmd(
    membership_ids: list[str] = typer.Argument(..., help="Membership ids of the team."),
) -> None:
    """ELO of a team, keyed by membership id."""

    fetch_and_echo(endpoints.team_elo(membership_ids))


@app.command("fireteam")
def fireteam_cmd(
    membership_id: str = typer.Argument(..., help="Destiny membership id."),
    mode: int = typer.Option(
        endpoints.DEFAULT_FIRETEAM_MODE, "--mode", help="Game mode (14 = Trials)."
    ),
) -> None:
    """Last known fireteam of a user."""

    fetch_and_echo(endpoints.fireteam(membership_id, mode))


@app.command("team")
def team_cmd(
    membership_ids: list[str] = typer.Argument(..., help="Membership ids of the team."),
) -> None:
    """Team information for a list of membership ids."""

    fetch_and_echo(endpoints.team(membership_ids))
