"""Eligibility pipeline: engagement records to deduplicated, resolved claims."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from .deduplication import dedupe_by_address, dedupe_by_author
from .extraction import extract_candidates
from .resolution import (
    DEFAULT_RESOLVER_CONCURRENCY,
    DEFAULT_RESOLVER_TIMEOUT_SECONDS,
    AddressResolver,
    ResolutionStatus,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from tweetdrop.domain.model import EngagementRecord, ResolvedClaim
    from tweetdrop.domain.ports import NameResolver

log = getLogger(__name__)


@dataclass(slots=True)
class EligibilityReport:
    """Per-stage counters; every dropped record is accounted for exactly once."""

    records: int = 0
    candidates: int = 0
    author_duplicates: int = 0
    unresolved: int = 0
    invalid_addresses: int = 0
    resolver_errors: int = 0
    address_duplicates: int = 0
    claims: int = 0

    @property
    def extraction_misses(self) -> int:
        return self.records - self.candidates


@dataclass(slots=True)
class EligibilityResult:
    claims: list[ResolvedClaim] = field(default_factory=list["ResolvedClaim"])
    report: EligibilityReport = field(default_factory=EligibilityReport)


async def run_eligibility(
    records: Sequence[EngagementRecord],
    *,
    name_resolver: NameResolver | None = None,
    extract_hex_addresses: bool = False,
    resolver_timeout_seconds: float = DEFAULT_RESOLVER_TIMEOUT_SECONDS,
    resolver_concurrency: int = DEFAULT_RESOLVER_CONCURRENCY,
) -> EligibilityResult:
    """Run extraction, author dedup, resolution and address dedup in order."""

    report = EligibilityReport(records=len(records))

    candidates = extract_candidates(records, extract_hex_addresses=extract_hex_addresses)
    report.candidates = len(candidates)
    log.info(f"Extracted {report.candidates} candidates from {report.records} records")

    by_author = dedupe_by_author(candidates)
    report.author_duplicates = by_author.dropped
    log.info(
        "Kept %d candidates after author dedup (%d duplicates)",
        len(by_author.survivors),
        by_author.dropped,
    )

    resolver = AddressResolver(
        name_resolver=name_resolver,
        timeout_seconds=resolver_timeout_seconds,
        concurrency=resolver_concurrency,
    )
    batch = await resolver.resolve_all(by_author.survivors)
    counts = batch.counts()
    report.unresolved = counts[ResolutionStatus.UNRESOLVED]
    report.invalid_addresses = counts[ResolutionStatus.INVALID_ADDRESS]
    report.resolver_errors = counts[ResolutionStatus.RESOLVER_ERROR]
    log.info(
        "Resolved %d addresses: unresolved=%d, invalid=%d, resolver_errors=%d",
        counts[ResolutionStatus.RESOLVED],
        report.unresolved,
        report.invalid_addresses,
        report.resolver_errors,
    )

    by_address = dedupe_by_address(batch.claims)
    report.address_duplicates = by_address.dropped
    report.claims = len(by_address.survivors)
    log.info(
        "Collected %d unique claims (%d duplicate addresses)",
        report.claims,
        report.address_duplicates,
    )

    return EligibilityResult(claims=by_address.survivors, report=report)
