"""Resource level entry points: one function per API resource, each returning a BatchResult."""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from nhlapi.batch import BatchResult, get_records_for_urls
from nhlapi.client.http import HttpClient
from nhlapi.lookup import PlayerMap, prepare_player_ids
from nhlapi.transforms import process_minsonice
from nhlapi.urls import (
    url_conferences,
    url_divisions,
    url_players,
    url_players_season_stats,
    url_schedule,
    url_seasons,
    url_standings,
    url_teams,
)


def players(
    player_ids: Sequence[int] | None = None,
    player_names: Sequence[str] | None = None,
    *,
    player_map: PlayerMap | None = None,
    client: HttpClient | None = None,
    max_workers: int | None = None,
) -> BatchResult:
    """Player bio information, one row per player.

    Names are resolved through the lookup table first; unknown names are
    skipped with a warning and never requested.
    """

    if player_ids is None and player_names is None:
        raise ValueError("Provide player_ids and/or player_names.")

    ids = list(player_ids or [])
    if player_names is not None:
        ids.extend(prepare_player_ids(player_names, player_map))

    return get_records_for_urls(url_players(ids), "people", client=client, max_workers=max_workers)


def players_season_stats(
    player_ids: Sequence[int],
    seasons: Sequence[int | str],
    *,
    client: HttpClient | None = None,
    max_workers: int | None = None,
) -> BatchResult:
    """Single season statistics per player and season, time-on-ice in minutes."""

    player_ids = list(player_ids)
    urls = url_players_season_stats(player_ids, seasons)
    result = get_records_for_urls(
        urls,
        "stats",
        record_path="splits",
        meta=[["type", "displayName"]],
        client=client,
        max_workers=max_workers,
    )
    if not isinstance(result.data, pd.DataFrame) or result.data.empty:
        return result

    # urls are built player-major, so each player's urls form a contiguous block.
    n_seasons = len(urls) // max(len(player_ids), 1)
    id_by_url = {url: player_ids[idx // n_seasons] for idx, url in enumerate(urls)}
    data = process_minsonice(result.data).assign(playerId=lambda d: d["url"].map(id_by_url))
    return BatchResult(data=data, errors=result.errors, results=result.results)


def teams(
    team_ids: Sequence[int] | None = None,
    *,
    client: HttpClient | None = None,
    max_workers: int | None = None,
) -> BatchResult:
    return get_records_for_urls(
        url_teams(team_ids), "teams", client=client, max_workers=max_workers
    )


def divisions(
    division_ids: Sequence[int] | None = None,
    *,
    client: HttpClient | None = None,
    max_workers: int | None = None,
) -> BatchResult:
    return get_records_for_urls(
        url_divisions(division_ids), "divisions", client=client, max_workers=max_workers
    )


def conferences(
    conference_ids: Sequence[int] | None = None,
    *,
    client: HttpClient | None = None,
    max_workers: int | None = None,
) -> BatchResult:
    return get_records_for_urls(
        url_conferences(conference_ids), "conferences", client=client, max_workers=max_workers
    )


def seasons(
    seasons: Sequence[int | str] | None = None,
    *,
    client: HttpClient | None = None,
    max_workers: int | None = None,
) -> BatchResult:
    """Season metadata; `seasons=None` lists all seasons, ["current"] the current one."""

    return get_records_for_urls(
        url_seasons(seasons), "seasons", client=client, max_workers=max_workers
    )


def schedule(
    seasons: Sequence[int | str],
    team_ids: Sequence[int] | None = None,
    *,
    client: HttpClient | None = None,
    max_workers: int | None = None,
) -> BatchResult:
    """One row per game for each requested season."""

    return get_records_for_urls(
        url_schedule(seasons, team_ids),
        "dates",
        record_path="games",
        meta=["date"],
        client=client,
        max_workers=max_workers,
    )


def standings(
    seasons: Sequence[int | str],
    *,
    client: HttpClient | None = None,
    max_workers: int | None = None,
) -> BatchResult:
    """One row per team per standings group for each requested season."""

    return get_records_for_urls(
        url_standings(seasons),
        "records",
        record_path="teamRecords",
        meta=["standingsType", ["division", "name"], ["conference", "name"]],
        client=client,
        max_workers=max_workers,
    )
