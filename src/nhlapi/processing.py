"""Turn tagged API payloads into data frames and bind them together."""

from __future__ import annotations

import logging
import warnings
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import pandas as pd

from nhlapi.client.errors import (
    MergeFallbackWarning,
    MergeReconciliationFailure,
    SchemaMismatchError,
)
from nhlapi.client.types import COPYRIGHT_ATTR, URL_ATTR, FetchSuccess, Json, TaggedPayload

logger = logging.getLogger(__name__)

DEFAULT_ATTRIBUTES: tuple[str, ...] = (URL_ATTR, COPYRIGHT_ATTR)


# -----------------------------
# Provenance
# -----------------------------


def process_copyright(payload: TaggedPayload | Json, el: str = COPYRIGHT_ATTR) -> TaggedPayload:
    """Move the top-level `el` field out of the body into the provenance side-channel.

    Returns the payload unchanged if `el` is absent, so applying it twice is a no-op.
    """

    if not isinstance(payload, TaggedPayload):
        payload = TaggedPayload(body=dict(payload))
    if el not in payload.body:
        return payload

    body = {k: v for k, v in payload.body.items() if k != el}
    provenance = {**payload.provenance, el: payload.body[el]}
    return TaggedPayload(body=body, provenance=provenance)


def attributes_to_cols(
    payload: TaggedPayload,
    df: pd.DataFrame,
    attributes: Iterable[str] = DEFAULT_ATTRIBUTES,
) -> pd.DataFrame:
    """Broadcast provenance attributes into columns of the same name.

    An existing column with the same name is overwritten (a warning is logged).
    """

    df = df.copy()
    for name in attributes:
        if name not in payload.provenance:
            continue
        if name in df.columns:
            logger.warning(
                "Column %r already present in data, overwriting with provenance value", name
            )
        df[name] = [payload.provenance[name]] * len(df)
    return df


# -----------------------------
# Extraction
# -----------------------------


def _is_records(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(v, Mapping) for v in value)


def element_to_frame(
    value: Any,
    *,
    record_path: str | list[str] | None = None,
    meta: list[str | list[str]] | None = None,
) -> pd.DataFrame:
    """
    Normalize one payload element into a data frame.

    Supports:
      - list of records: one row per record, nested keys flattened with "."
      - mapping wrapping a single list of records, e.g. {"rows": [...]}: unwrapped
      - any other mapping: a single row
      - list of scalars: a single "value" column
      - empty list / mapping / None: a zero-row, zero-column frame
    """

    if value is None or (isinstance(value, (list, dict)) and len(value) == 0):
        return pd.DataFrame()

    if isinstance(value, Mapping):
        if len(value) == 1:
            (inner,) = value.values()
            if _is_records(inner):
                value = inner
        if isinstance(value, Mapping):
            value = [value]
        if not value:
            return pd.DataFrame()

    if isinstance(value, list) and not any(isinstance(v, (Mapping, list)) for v in value):
        return pd.DataFrame({"value": value})
    if not _is_records(value):
        raise TypeError(f"Cannot build a table from element of type {type(value).__name__}")

    if record_path is not None:
        return pd.json_normalize(value, record_path=record_path, meta=meta, errors="ignore")
    return pd.json_normalize(value)


def process_result(
    payload: TaggedPayload | FetchSuccess | Json,
    el_name: str,
    *,
    record_path: str | list[str] | None = None,
    meta: list[str | list[str]] | None = None,
    attributes: Iterable[str] = DEFAULT_ATTRIBUTES,
) -> pd.DataFrame:
    """Extract `el_name` as a table and attach provenance columns to every row."""

    if isinstance(payload, FetchSuccess):
        payload = TaggedPayload.from_fetch(payload)
    tagged = process_copyright(payload)
    df = element_to_frame(tagged.body.get(el_name), record_path=record_path, meta=meta)
    return attributes_to_cols(tagged, df, attributes)


# -----------------------------
# Merging
# -----------------------------


def merge_tables(tables: Sequence[pd.DataFrame], *, fill: bool = True) -> pd.DataFrame:
    """
    Row-bind `tables` into one frame, preserving input order.

    Zero-row tables are dropped first. With `fill=False` every remaining table
    must have the same column set (SchemaMismatchError otherwise). With
    `fill=True` columns are unioned in first-seen order and missing cells are
    null. Unexpected fill-mode errors surface as MergeReconciliationFailure.
    """

    frames = [t for t in tables if isinstance(t, pd.DataFrame) and len(t) > 0]
    if not frames:
        return pd.DataFrame()

    first_cols = list(frames[0].columns)

    if not fill:
        for df in frames[1:]:
            if set(df.columns) != set(first_cols) or len(df.columns) != len(first_cols):
                raise SchemaMismatchError(first_cols, list(df.columns))
        return pd.concat([df[first_cols] for df in frames], ignore_index=True)

    try:
        if all(list(df.columns) == first_cols for df in frames):
            return pd.concat(frames, ignore_index=True)

        all_cols: list[Any] = []
        seen: set[Any] = set()
        for df in frames:
            for col in df.columns:
                if col not in seen:
                    seen.add(col)
                    all_cols.append(col)

        filled = [df.reindex(columns=all_cols) for df in frames]
        return pd.concat(filled, ignore_index=True)
    except Exception as exc:
        raise MergeReconciliationFailure(f"Could not reconcile tables: {exc}") from exc


def process_results(
    payloads: Sequence[TaggedPayload | FetchSuccess | Json],
    el_name: str,
    *,
    record_path: str | list[str] | None = None,
    meta: list[str | list[str]] | None = None,
    fill: bool = True,
) -> pd.DataFrame | list[pd.DataFrame]:
    """Extract a table from each payload and merge them.

    If reconciliation fails, warns and returns the per-payload tables unmerged.
    """

    tables = [
        process_result(p, el_name, record_path=record_path, meta=meta) for p in payloads
    ]
    return bind_tables(tables, fill=fill)


def bind_tables(
    tables: Sequence[pd.DataFrame], *, fill: bool = True
) -> pd.DataFrame | list[pd.DataFrame]:
    """merge_tables, returning `tables` unmerged (with a warning) if reconciliation fails."""

    try:
        return merge_tables(tables, fill=fill)
    except MergeReconciliationFailure as exc:
        logger.warning("merge_tables failed, returning unmerged data: %s", exc)
        warnings.warn(
            "merge_tables failed, returning unmerged data.", MergeFallbackWarning, stacklevel=3
        )
        return list(tables)
