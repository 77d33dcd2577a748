from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Sequence
from dataclasses import dataclass, field
from typing import Any

import pandas as pd

from nhlapi.client.http import HttpClient
from nhlapi.client.types import FetchFailure, FetchResult, FetchSuccess
from nhlapi.fetch import fetch_urls
from nhlapi.processing import bind_tables, process_result

logger = logging.getLogger(__name__)

Reporter = Callable[..., Any]


def _default_reporter(message: str) -> None:
    logger.error(message)


def get_data(
    urls: Sequence[str],
    *,
    client: HttpClient | None = None,
    max_workers: int | None = None,
) -> list[FetchResult]:
    """Retrieve every URL; failures are kept in place as FetchFailure entries."""

    return fetch_urls(urls, client=client, max_workers=max_workers)


def remove_errors(results: Sequence[FetchResult]) -> list[FetchSuccess]:
    return [r for r in results if isinstance(r, FetchSuccess)]


def report_get_data_errors(
    results: Sequence[FetchResult],
    reporter: Reporter = _default_reporter,
    *args: Any,
    **kwargs: Any,
) -> list[str]:
    """Report the URLs whose retrieval failed and return them.

    `reporter` is only called when at least one retrieval failed; extra
    arguments are forwarded to it, e.g. ``reporter=print, file=sys.stderr``.
    """

    error_urls = [r.url for r in results if isinstance(r, FetchFailure)]
    if not error_urls:
        logger.debug("No errors encountered in %d url retrievals", len(results))
        return error_urls

    message = " ".join(
        [
            "The following",
            str(len(error_urls)),
            "of",
            str(len(results)),
            "url retrievals errored:\n",
            "\n ".join(error_urls),
        ]
    )
    reporter(message, *args, **kwargs)
    return error_urls


@dataclass(frozen=True)
class BatchResult:
    """
    Outcome of one batch call.

    `data` is the merged frame, or the list of per-request frames when they
    could not be merged. `errors` is the ordered list of URLs that failed.
    """

    data: pd.DataFrame | list[pd.DataFrame]
    errors: list[str]
    results: list[FetchResult] = field(repr=False)

    @property
    def merged(self) -> bool:
        return isinstance(self.data, pd.DataFrame)

    def report(self, reporter: Reporter = _default_reporter, *args: Any, **kwargs: Any) -> list[str]:
        return report_get_data_errors(self.results, reporter, *args, **kwargs)


def get_records(
    ids: Sequence[Hashable],
    url_builder: Callable[[Any], str],
    el_name: str,
    *,
    record_path: str | list[str] | None = None,
    meta: list[str | list[str]] | None = None,
    fill: bool = True,
    client: HttpClient | None = None,
    max_workers: int | None = None,
) -> BatchResult:
    """Build one URL per id, fetch them all, and merge the extracted tables.

    Failed retrievals do not abort the batch; they are listed in
    ``BatchResult.errors``.
    """

    urls = [url_builder(i) for i in ids]
    return get_records_for_urls(
        urls,
        el_name,
        record_path=record_path,
        meta=meta,
        fill=fill,
        client=client,
        max_workers=max_workers,
    )


def get_records_for_urls(
    urls: Sequence[str],
    el_name: str,
    *,
    record_path: str | list[str] | None = None,
    meta: list[str | list[str]] | None = None,
    fill: bool = True,
    client: HttpClient | None = None,
    max_workers: int | None = None,
) -> BatchResult:
    fetched = get_data(urls, client=client, max_workers=max_workers)

    # A payload whose element cannot be tabulated is ledgered like a failed fetch.
    results: list[FetchResult] = []
    tables: list[pd.DataFrame] = []
    for r in fetched:
        if isinstance(r, FetchSuccess):
            try:
                tables.append(process_result(r, el_name, record_path=record_path, meta=meta))
            except (TypeError, KeyError, ValueError, IndexError) as exc:
                logger.warning("Could not extract %r from %s: %s", el_name, r.url, exc)
                r = FetchFailure(url=r.url, cause=f"Could not extract {el_name!r}: {exc}")
        results.append(r)

    successes = remove_errors(results)
    errors = [r.url for r in results if isinstance(r, FetchFailure)]

    data = bind_tables(tables, fill=fill)

    logger.debug(
        "Batch for %r: %d urls, %d succeeded, %d failed",
        el_name,
        len(results),
        len(successes),
        len(errors),
    )
    return BatchResult(data=data, errors=errors, results=results)
