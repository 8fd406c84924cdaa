"""Public domain model surface."""

from __future__ import annotations

from tweetdrop.domain.model.claims import (
    Address,
    ClaimProof,
    ClaimSet,
    Digest,
    IndexedClaim,
    ResolvedClaim,
)
from tweetdrop.domain.model.engagement import Candidate, EngagementRecord

__all__ = [
    "Address",
    "Candidate",
    "ClaimProof",
    "ClaimSet",
    "Digest",
    "EngagementRecord",
    "IndexedClaim",
    "ResolvedClaim",
]
