"""First-wins deduplication passes keyed on author and on address."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Hashable, Iterable

    from tweetdrop.domain.model import Candidate, ResolvedClaim


@dataclass(slots=True)
class DedupResult[T]:
    survivors: list[T] = field(default_factory=list)
    dropped: int = 0


def dedupe_first_seen[T](items: Iterable[T], key: Callable[[T], Hashable]) -> DedupResult[T]:
    """Keep the first item for each key; later items with the same key are dropped."""

    seen: set[Hashable] = set()
    result: DedupResult[T] = DedupResult()
    for item in items:
        item_key = key(item)
        if item_key in seen:
            result.dropped += 1
            continue
        seen.add(item_key)
        result.survivors.append(item)
    return result


def dedupe_by_author(candidates: Iterable[Candidate]) -> DedupResult[Candidate]:
    return dedupe_first_seen(candidates, lambda candidate: candidate.author_handle)


def dedupe_by_address(claims: Iterable[ResolvedClaim]) -> DedupResult[ResolvedClaim]:
    # Addresses are checksummed by the resolver, so equal accounts compare equal.
    return dedupe_first_seen(claims, lambda claim: claim.address)
