"""Eligibility resolution: from engagement records to unique, resolved claims.

Each stage is a function of its input sequence; accumulators such as the
dedup key sets live only inside a single call.
"""

from __future__ import annotations

from .deduplication import DedupResult, dedupe_by_address, dedupe_by_author
from .extraction import extract_candidate, extract_candidates
from .indexing import index_claims
from .pipeline import EligibilityReport, EligibilityResult, run_eligibility
from .resolution import (
    AddressResolver,
    ResolutionBatch,
    ResolutionOutcome,
    ResolutionStatus,
    normalize_address,
)

__all__ = [
    "AddressResolver",
    "DedupResult",
    "EligibilityReport",
    "EligibilityResult",
    "ResolutionBatch",
    "ResolutionOutcome",
    "ResolutionStatus",
    "dedupe_by_address",
    "dedupe_by_author",
    "extract_candidate",
    "extract_candidates",
    "index_claims",
    "normalize_address",
    "run_eligibility",
]
