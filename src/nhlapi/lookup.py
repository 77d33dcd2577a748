"""Resolve player names to NHL API player ids via a table of hashed names."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd

from nhlapi.batch import get_records_for_urls
from nhlapi.client.errors import LookupMissError
from nhlapi.client.http import HttpClient
from nhlapi.core.config import settings
from nhlapi.core.text import hash_name
from nhlapi.urls import url_players

logger = logging.getLogger(__name__)

HASH_COL = "nameMd5"
ID_COL = "id"


@dataclass(frozen=True)
class PlayerMap:
    """Hashed lowercase player name -> player id."""

    ids_by_hash: Mapping[str, int] = field(default_factory=dict)

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> PlayerMap:
        missing = {HASH_COL, ID_COL} - set(df.columns)
        if missing:
            raise ValueError(f"Player map is missing columns: {sorted(missing)}")
        return cls(
            ids_by_hash={str(h): int(i) for h, i in zip(df[HASH_COL], df[ID_COL], strict=True)}
        )

    @classmethod
    def from_csv(cls, path: str | Path) -> PlayerMap:
        return cls.from_frame(pd.read_csv(path, dtype={HASH_COL: str}))

    @classmethod
    def from_settings(cls) -> PlayerMap:
        return cls.from_csv(settings.require_player_map_path())

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {HASH_COL: list(self.ids_by_hash.keys()), ID_COL: list(self.ids_by_hash.values())}
        )

    def get_id(self, name: str) -> int:
        try:
            return self.ids_by_hash[hash_name(name)]
        except KeyError:
            raise LookupMissError(name) from None

    def __len__(self) -> int:
        return len(self.ids_by_hash)


def _require_names(player_names: Sequence[str]) -> list[str]:
    if isinstance(player_names, str):
        return [player_names]
    names = list(player_names)
    if not all(isinstance(n, str) for n in names):
        raise TypeError("player_names must be a sequence of strings.")
    return names


def map_player_ids(
    player_names: Sequence[str], player_map: PlayerMap | None = None
) -> dict[str, int | None]:
    """Map each name to its id, or None (with a logged warning) when not found."""

    names = _require_names(player_names)
    pm = player_map if player_map is not None else PlayerMap.from_settings()

    out: dict[str, int | None] = {}
    for name in names:
        try:
            out[name] = pm.get_id(name)
        except LookupMissError as exc:
            logger.warning("%s", exc)
            out[name] = None
    return out


def prepare_player_ids(
    player_names: Sequence[str], player_map: PlayerMap | None = None
) -> list[int]:
    """Ids for the names that could be resolved, in input order; repeated names repeat."""

    names = _require_names(player_names)
    mapped = map_player_ids(names, player_map)
    return [pid for pid in (mapped[n] for n in names) if pid is not None]


def generate_player_map(
    player_ids: Sequence[int],
    *,
    target_path: str | Path | None = None,
    client: HttpClient | None = None,
    max_workers: int | None = None,
) -> pd.DataFrame:
    """
    Fetch players by id and build the hashed name table.

    Writes it as CSV to `target_path` when given. Ids that fail to resolve are
    simply absent from the table.
    """

    result = get_records_for_urls(
        url_players(player_ids), "people", client=client, max_workers=max_workers
    )
    frames = [result.data] if isinstance(result.data, pd.DataFrame) else result.data
    frames = [f[["fullName", ID_COL]] for f in frames if {"fullName", ID_COL} <= set(f.columns)]
    players = pd.concat(frames, ignore_index=True) if frames else pd.DataFrame()

    if players.empty:
        table = pd.DataFrame({HASH_COL: pd.Series(dtype=str), ID_COL: pd.Series(dtype=int)})
    else:
        table = pd.DataFrame(
            {
                HASH_COL: [hash_name(n) for n in players["fullName"]],
                ID_COL: players[ID_COL].astype(int).to_list(),
            }
        )

    if target_path is not None:
        table.to_csv(target_path, index=False)
    return table
