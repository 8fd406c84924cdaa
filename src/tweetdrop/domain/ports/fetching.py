"""Ports for fetching engagement records from external providers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from tweetdrop.domain.model import EngagementRecord


@dataclass(slots=True)
class EngagementFetchResult:
    """Ordered engagement records plus per-source counts for the run log."""

    records: list[EngagementRecord] = field(default_factory=list["EngagementRecord"])
    replies: int = 0
    replies_without_retweet: int = 0
    quotes: int = 0


@runtime_checkable
class EngagementFetcher(Protocol):
    """Callable port for retrieving engagement records.

    The order of ``records`` is load-bearing: deduplication keeps the first
    record seen per author and per address.
    """

    def __call__(self, *, page_limit: int | None = None) -> EngagementFetchResult: ...


__all__ = ["EngagementFetchResult", "EngagementFetcher"]
