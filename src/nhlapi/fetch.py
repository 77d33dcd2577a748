from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from nhlapi.client.errors import TransportError
from nhlapi.client.http import HttpClient
from nhlapi.client.types import FetchFailure, FetchResult, FetchSuccess
from nhlapi.core.config import settings

logger = logging.getLogger(__name__)


def fetch_url(client: HttpClient, url: str) -> FetchResult:
    try:
        payload = client.get_json(url)
    except TransportError as exc:
        logger.warning("Retrieval failed for %s: %s", url, exc)
        return FetchFailure(url=url, cause=str(exc))
    return FetchSuccess(url=url, payload=payload)


def fetch_urls(
    urls: Sequence[str],
    *,
    client: HttpClient | None = None,
    max_workers: int | None = None,
) -> list[FetchResult]:
    """Fetch every URL concurrently and return one result per URL, in input order.

    A failing URL yields a FetchFailure in its slot; it never prevents the other
    URLs from being fetched. If `client` is not given, a temporary one is opened
    and closed around the batch.
    """

    urls = list(urls)
    workers = settings.max_workers if max_workers is None else max_workers
    if workers < 1:
        raise ValueError(f"max_workers must be >= 1, got {workers}")
    if not urls:
        return []

    own_client = client is None
    http = HttpClient() if client is None else client
    try:
        if workers == 1 or len(urls) == 1:
            return [fetch_url(http, url) for url in urls]
        # executor.map yields in submission order regardless of completion order.
        with ThreadPoolExecutor(max_workers=min(workers, len(urls))) as executor:
            return list(executor.map(lambda u: fetch_url(http, u), urls))
    finally:
        if own_client:
            http.close()
