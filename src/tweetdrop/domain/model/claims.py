"""Claim-side value objects, from resolved address to exported proof."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

type Address = str
type Digest = bytes


@dataclass(frozen=True, slots=True)
class ResolvedClaim:
    """Candidate whose token resolved to an EIP-55 checksummed address."""

    author_handle: str
    address: Address


@dataclass(frozen=True, slots=True)
class IndexedClaim:
    """Claim with its position in the commitment and its amount in base units."""

    index: int
    address: Address
    amount: int


@dataclass(frozen=True, slots=True)
class ClaimProof:
    index: int
    amount_hex: str
    proof: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ClaimSet:
    """Root plus per-address proofs; the artifact published for claimers."""

    merkle_root: str
    claims: Mapping[Address, ClaimProof] = field(default_factory=dict[Address, ClaimProof])

    def __len__(self) -> int:
        return len(self.claims)
