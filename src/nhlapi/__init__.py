from nhlapi.batch import BatchResult, get_data, get_records, report_get_data_errors
from nhlapi.processing import merge_tables, process_copyright, process_result, process_results
from nhlapi.resources import (
    conferences,
    divisions,
    players,
    players_season_stats,
    schedule,
    seasons,
    standings,
    teams,
)

__all__ = [
    "BatchResult",
    "conferences",
    "divisions",
    "get_data",
    "get_records",
    "merge_tables",
    "players",
    "players_season_stats",
    "process_copyright",
    "process_result",
    "process_results",
    "report_get_data_errors",
    "schedule",
    "seasons",
    "standings",
    "teams",
]
