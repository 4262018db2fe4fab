from __future__ import annotations

from collections.abc import Iterable

from guardian_gg.client.types import RequestOptions

DEFAULT_FIRETEAM_MODE = 14


def _join_ids(ids: Iterable[str | int]) -> str:
    return ",".join(str(i) for i in ids)


def user_elo(membership_id: str | int) -> RequestOptions:
    """ELO ratings of a user, one record per playlist."""

    return RequestOptions(url="elo/{membershipId}", template={"membershipId": membership_id})


def seasons(membership_id: str | int) -> RequestOptions:
    """ELO ratings of previous seasons."""

    return RequestOptions(
        url="v2/players/{membershipId}/seasons",
        template={"membershipId": membership_id},
    )


def team_elo(team: Iterable[str | int]) -> RequestOptions:
    """ELO of a team, keyed by membership id."""

    return RequestOptions(
        url="dtr/elo?alpha={teamArray}",
        template={"teamArray": _join_ids(team)},
        filter="players",
    )


def fireteam(membership_id: str | int, mode: int = DEFAULT_FIRETEAM_MODE) -> RequestOptions:
    """Last known fireteam of a user for a game mode."""

    return RequestOptions(
        url="fireteam/{mode}/{membershipId}",
        template={"membershipId": membership_id, "mode": mode},
    )


def team(membership_ids: Iterable[str | int]) -> RequestOptions:
    return RequestOptions(
        url="dtr/{membershipIdArray}",
        template={"membershipIdArray": _join_ids(membership_ids)},
    )
