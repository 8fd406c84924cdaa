"""Commitment building: indexed claims to leaves to Merkle tree."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from tweetdrop.domain.errors import CommitmentError, DuplicateClaimError, EmptyClaimSetError

from .leaves import hash_claim
from .merkle import MerkleTree, PairingRule

if TYPE_CHECKING:
    from collections.abc import Sequence

    from tweetdrop.domain.model import IndexedClaim

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Commitment:
    claims: tuple[IndexedClaim, ...]
    tree: MerkleTree

    @property
    def hex_root(self) -> str:
        return self.tree.hex_root


def build_commitment(
    claims: Sequence[IndexedClaim],
    *,
    pairing: PairingRule = PairingRule.POSITIONAL,
) -> Commitment:
    """Commit to ``claims`` in their given order.

    Raises ``EmptyClaimSetError`` for an empty set, ``CommitmentError`` when
    indices are not exactly ``0..N-1`` in order, and ``DuplicateClaimError``
    when two claims share an address.
    """

    if not claims:
        raise EmptyClaimSetError

    first_seen: dict[str, int] = {}
    for position, claim in enumerate(claims):
        if claim.index != position:
            raise CommitmentError(f"Claim at position {position} carries index {claim.index}")
        key = claim.address.lower()
        if key in first_seen:
            raise DuplicateClaimError(
                claim.address, first_index=first_seen[key], second_index=claim.index
            )
        first_seen[key] = claim.index

    tree = MerkleTree.build([hash_claim(claim) for claim in claims], pairing=pairing)
    log.info(f"Built {pairing} Merkle tree over {tree.leaf_count} claims: root={tree.hex_root}")
    return Commitment(claims=tuple(claims), tree=tree)
