from nhlapi.client.errors import (
    LookupMissError,
    MergeFallbackWarning,
    MergeReconciliationFailure,
    NhlApiError,
    RateLimitedError,
    SchemaMismatchError,
    TransportError,
)
from nhlapi.client.http import HttpClient
from nhlapi.client.types import FetchFailure, FetchResult, FetchSuccess, TaggedPayload

__all__ = [
    "FetchFailure",
    "FetchResult",
    "FetchSuccess",
    "HttpClient",
    "LookupMissError",
    "MergeFallbackWarning",
    "MergeReconciliationFailure",
    "NhlApiError",
    "RateLimitedError",
    "SchemaMismatchError",
    "TaggedPayload",
    "TransportError",
]
