from __future__ import annotations

from pathlib import Path

import pandas as pd
import typer

from nhlapi import resources
from nhlapi.batch import BatchResult
from nhlapi.core.config import settings
from nhlapi.core.logging import setup_logging
from nhlapi.lookup import PlayerMap, generate_player_map

app = typer.Typer(no_args_is_help=True, help="Fetch NHL stats API resources as CSV.")

_OUT_HELP = "Write CSV to this path instead of stdout."


@app.callback()
def main(
    log_level: str = typer.Option(settings.log_level, "--log-level", help="Logging level."),
) -> None:
    setup_logging(log_level)


def _emit(result: BatchResult, out: Path | None) -> None:
    frames = [result.data] if isinstance(result.data, pd.DataFrame) else result.data
    if not result.merged:
        typer.echo(f"Could not merge results, writing {len(frames)} tables.", err=True)

    if out is None:
        for df in frames:
            typer.echo(df.to_csv(index=False), nl=False)
    else:
        with out.open("w", newline="", encoding="utf-8") as fh:
            for df in frames:
                df.to_csv(fh, index=False)

    result.report(lambda msg: typer.echo(msg, err=True))


@app.command("players")
def players_cmd(
    player_ids: list[int] | None = typer.Option(None, "--id", help="Player id (repeatable)."),
    player_names: list[str] | None = typer.Option(
        None, "--name", help="Player full name (repeatable, case insensitive)."
    ),
    player_map: Path | None = typer.Option(
        None, "--player-map", help="CSV lookup table (defaults to NHLAPI_PLAYER_MAP_PATH)."
    ),
    out: Path | None = typer.Option(None, "--out", help=_OUT_HELP),
) -> None:
    """Player bio information by id and/or name."""

    if not player_ids and not player_names:
        raise typer.BadParameter("Pass at least one --id or --name.")
    pm = PlayerMap.from_csv(player_map) if player_map is not None else None
    result = resources.players(
        player_ids=player_ids or None,
        player_names=player_names or None,
        player_map=pm,
    )
    _emit(result, out)


@app.command("player-stats")
def player_stats_cmd(
    player_ids: list[int] = typer.Option(..., "--id", help="Player id (repeatable)."),
    seasons: list[str] = typer.Option(..., "--season", help="Season, e.g. 2019 or 20192020."),
    out: Path | None = typer.Option(None, "--out", help=_OUT_HELP),
) -> None:
    """Single season statistics for players."""

    _emit(resources.players_season_stats(player_ids, seasons), out)


@app.command("teams")
def teams_cmd(
    team_ids: list[int] | None = typer.Option(None, "--id", help="Team id (repeatable)."),
    out: Path | None = typer.Option(None, "--out", help=_OUT_HELP),
) -> None:
    """Team information (all teams when no --id is given)."""

    _emit(resources.teams(team_ids or None), out)


@app.command("divisions")
def divisions_cmd(
    division_ids: list[int] | None = typer.Option(None, "--id", help="Division id (repeatable)."),
    out: Path | None = typer.Option(None, "--out", help=_OUT_HELP),
) -> None:
    _emit(resources.divisions(division_ids or None), out)


@app.command("conferences")
def conferences_cmd(
    conference_ids: list[int] | None = typer.Option(
        None, "--id", help="Conference id (repeatable)."
    ),
    out: Path | None = typer.Option(None, "--out", help=_OUT_HELP),
) -> None:
    _emit(resources.conferences(conference_ids or None), out)


@app.command("seasons")
def seasons_cmd(
    seasons: list[str] | None = typer.Option(
        None, "--season", help="Season, e.g. 2019, 20192020 or current."
    ),
    out: Path | None = typer.Option(None, "--out", help=_OUT_HELP),
) -> None:
    """Season metadata (all seasons when no --season is given)."""

    _emit(resources.seasons(seasons or None), out)


@app.command("schedule")
def schedule_cmd(
    seasons: list[str] = typer.Option(..., "--season", help="Season (repeatable)."),
    team_ids: list[int] | None = typer.Option(None, "--team-id", help="Restrict to team ids."),
    out: Path | None = typer.Option(None, "--out", help=_OUT_HELP),
) -> None:
    """Game schedule, one row per game."""

    _emit(resources.schedule(seasons, team_ids or None), out)


@app.command("standings")
def standings_cmd(
    seasons: list[str] = typer.Option(..., "--season", help="Season (repeatable)."),
    out: Path | None = typer.Option(None, "--out", help=_OUT_HELP),
) -> None:
    _emit(resources.standings(seasons), out)


@app.command("player-map")
def player_map_cmd(
    first_id: int = typer.Option(8444849, "--first-id", help="First player id to scan."),
    last_id: int = typer.Option(8490000, "--last-id", help="Last player id to scan (inclusive)."),
    out: Path = typer.Option(Path("player_map.csv"), "--out", help="CSV path to write."),
) -> None:
    """Build the hashed name -> id lookup table by scanning a player id range."""

    if last_id < first_id:
        raise typer.BadParameter("--last-id must be >= --first-id.")
    table = generate_player_map(list(range(first_id, last_id + 1)), target_path=out)
    typer.echo(f"Wrote {len(table)} players to {out}")
