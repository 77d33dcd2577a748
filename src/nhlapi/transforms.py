from __future__ import annotations

import math
import re
from collections.abc import Iterable

import pandas as pd


def _convert_one(value: object, splitter: str) -> float:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return math.nan
    mins, _, secs = str(value).partition(splitter)
    try:
        return int(mins) + int(secs or 0) / 60
    except ValueError:
        return math.nan


def convert_minsonice(values: Iterable[object], splitter: str = ":") -> list[float]:
    """Convert "mins:secs" strings to numeric minutes, e.g. "20:30" -> 20.5."""

    return [_convert_one(v, splitter) for v in values]


def process_minsonice(df: pd.DataFrame, pattern: str = "timeOn|TimeOn") -> pd.DataFrame:
    """Convert every column whose name matches `pattern` from "mm:ss" to minutes."""

    rx = re.compile(pattern)
    cols = [c for c in df.columns if isinstance(c, str) and rx.search(c)]
    if not cols:
        return df
    df = df.copy()
    for col in cols:
        df[col] = convert_minsonice(df[col])
    return df
