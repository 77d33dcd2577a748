from __future__ import annotations

from collections.abc import Sequence


class NhlApiError(RuntimeError):
    """Base exception for nhlapi failures."""


class TransportError(NhlApiError):
    """HTTP/network/transport layer failures (timeouts, connection errors, non-2xx, bad JSON)."""

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class RateLimitedError(TransportError):
    """The API throttled the request (HTTP 429)."""


class SchemaMismatchError(NhlApiError):
    """Strict merge was asked to bind tables whose column sets differ."""

    def __init__(self, expected: Sequence[str], found: Sequence[str]) -> None:
        self.expected = list(expected)
        self.found = list(found)
        super().__init__(
            f"Column sets differ: expected {self.expected}, found {self.found}"
        )


class MergeReconciliationFailure(NhlApiError):
    """Fill-mode merge failed for a reason other than a schema mismatch."""


class LookupMissError(NhlApiError, LookupError):
    """A player name is not present in the name -> id lookup table."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Id for player: {name} not found.")
        self.name = name


class MergeFallbackWarning(UserWarning):
    """Emitted when per-request tables are returned unmerged."""
