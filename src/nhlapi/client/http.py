from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx

from nhlapi.client.errors import RateLimitedError, TransportError
from nhlapi.core.config import settings

Json = dict[str, Any]


@dataclass
class HttpClient:
    """
    Thin httpx wrapper used as the transport for batch fetching.

    - Uses a single underlying httpx.Client for connection pooling; the client
      is shared by the fetch worker threads.
    - Converts every transport problem into TransportError carrying the URL.
    - Does not retry.
    """

    timeout_s: float = field(default_factory=lambda: settings.timeout_s)
    connect_timeout_s: float = field(default_factory=lambda: settings.connect_timeout_s)
    headers: Mapping[str, str] = field(default_factory=dict)

    transport: httpx.BaseTransport | None = None

    def __post_init__(self) -> None:
        self._client = httpx.Client(
            timeout=httpx.Timeout(self.timeout_s, connect=self.connect_timeout_s),
            headers={"Accept": "application/json", **dict(self.headers)},
            transport=self.transport,
            follow_redirects=True,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def get_json(self, url: str, *, params: Mapping[str, Any] | None = None) -> Json:
        """
        GET `url` and return the parsed JSON object.
        Raises TransportError (including RateLimitedError) on transport issues / non-2xx.
        """
        try:
            resp = self._client.get(url, params=params)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(f"{type(e).__name__}: {e}", url=url) from e

        if resp.status_code == 429:
            raise RateLimitedError("API rate limited the request (HTTP 429).", url=url)

        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TransportError(f"HTTP {resp.status_code} for GET {url}", url=url) from e

        try:
            data = resp.json()
        except ValueError as e:
            raise TransportError("Response was not valid JSON.", url=url) from e

        if not isinstance(data, dict):
            raise TransportError(f"Expected JSON object, got {type(data)}", url=url)

        return data
