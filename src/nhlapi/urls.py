"""URL builders for the NHL stats API endpoints."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from urllib.parse import urlencode

from nhlapi.core.config import settings

CURRENT_SEASON = "current"


def make_seasons(seasons: int | str | Iterable[int | str] = range(1950, 2020)) -> list[str]:
    """
    Make seasons consumable by the API.

    The API wants seasons as "YYYYZZZZ" where ZZZZ = YYYY + 1. Accepts:
      - ints or 4-character strings "YYYY": 1995 -> "19951996"
      - 8-character strings "YYYYZZZZ": returned unchanged
      - the single value "current": returned unchanged
    """

    if isinstance(seasons, (int, str)):
        seasons = [seasons]
    values = list(seasons)

    if len(values) == 1 and values[0] == CURRENT_SEASON:
        return [CURRENT_SEASON]

    out: list[str] = []
    for s in values:
        if isinstance(s, bool) or not isinstance(s, (int, str)):
            raise TypeError(f"Season must be int or str, got {type(s).__name__}: {s!r}")
        if isinstance(s, int):
            out.append(f"{s}{s + 1}")
        elif len(s) == 4 and s.isdigit():
            out.append(f"{s}{int(s) + 1}")
        else:
            out.append(s)
    return out


def _join(*parts: object, base_url: str | None = None) -> str:
    root = (base_url or settings.base_url).rstrip("/")
    return "/".join([root, *(str(p).strip("/") for p in parts)])


def _with_query(url: str, params: dict[str, object]) -> str:
    query = urlencode({k: v for k, v in params.items() if v is not None})
    return f"{url}?{query}" if query else url


def _collection_urls(resource: str, ids: Sequence[object] | None, base_url: str | None) -> list[str]:
    if not ids:
        return [_join(resource, base_url=base_url)]
    return [_join(resource, i, base_url=base_url) for i in ids]


def url_players(player_ids: Sequence[int | str], *, base_url: str | None = None) -> list[str]:
    return [_join("people", i, base_url=base_url) for i in player_ids]


def url_players_season_stats(
    player_ids: Sequence[int | str],
    seasons: Sequence[int | str],
    *,
    base_url: str | None = None,
) -> list[str]:
    out: list[str] = []
    for pid in player_ids:
        for season in make_seasons(seasons):
            url = _join("people", pid, "stats", base_url=base_url)
            out.append(_with_query(url, {"stats": "statsSingleSeason", "season": season}))
    return out


def url_teams(team_ids: Sequence[int] | None = None, *, base_url: str | None = None) -> list[str]:
    return _collection_urls("teams", team_ids, base_url)


def url_divisions(
    division_ids: Sequence[int] | None = None, *, base_url: str | None = None
) -> list[str]:
    return _collection_urls("divisions", division_ids, base_url)


def url_conferences(
    conference_ids: Sequence[int] | None = None, *, base_url: str | None = None
) -> list[str]:
    return _collection_urls("conferences", conference_ids, base_url)


def url_seasons(
    seasons: Sequence[int | str] | None = None, *, base_url: str | None = None
) -> list[str]:
    codes = make_seasons(seasons) if seasons else None
    return _collection_urls("seasons", codes, base_url)


def url_schedule(
    seasons: Sequence[int | str],
    team_ids: Sequence[int] | None = None,
    *,
    base_url: str | None = None,
) -> list[str]:
    team_param = ",".join(str(t) for t in team_ids) if team_ids else None
    return [
        _with_query(_join("schedule", base_url=base_url), {"season": s, "teamId": team_param})
        for s in make_seasons(seasons)
    ]


def url_standings(seasons: Sequence[int | str], *, base_url: str | None = None) -> list[str]:
    return [
        _with_query(_join("standings", base_url=base_url), {"season": s})
        for s in make_seasons(seasons)
    ]
