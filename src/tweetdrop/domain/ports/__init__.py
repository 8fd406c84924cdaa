"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import EngagementFetcher, EngagementFetchResult
from .resolution import NameResolver

__all__ = [
    "EngagementFetchResult",
    "EngagementFetcher",
    "NameResolver",
]
