from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

Json = dict[str, Any]

URL_ATTR = "url"
COPYRIGHT_ATTR = "copyright"


@dataclass(frozen=True)
class FetchSuccess:
    url: str
    payload: Json

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class FetchFailure:
    """A URL whose retrieval failed; `cause` is a human readable reason."""

    url: str
    cause: str

    @property
    def ok(self) -> bool:
        return False


FetchResult = FetchSuccess | FetchFailure


@dataclass
class TaggedPayload:
    """
    A parsed API response plus its provenance side-channel.

    `provenance` holds out-of-band attributes (source url, copyright notice)
    in its own mapping, so `body` is never modified to make room for them. A
    provenance name may coincide with a body field (e.g. a top-level "url");
    when attributes become columns the provenance value overwrites it.
    """

    body: Json
    provenance: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_fetch(cls, result: FetchSuccess) -> TaggedPayload:
        return cls(body=dict(result.payload), provenance={URL_ATTR: result.url})
