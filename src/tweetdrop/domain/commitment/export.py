"""Proof export and verification of exported claim sets."""

from __future__ import annotations

from typing import TYPE_CHECKING

from eth_utils import decode_hex, encode_hex, to_checksum_address

from tweetdrop.domain.model import ClaimProof, ClaimSet, IndexedClaim

from .leaves import hash_claim
from .merkle import PairingRule, verify_proof

if TYPE_CHECKING:
    from .builder import Commitment


def amount_to_hex(amount: int) -> str:
    """``0x``-prefixed lowercase hex with an even digit count (``10`` -> ``0x0a``)."""

    if amount < 0:
        raise ValueError(f"Amount must be non-negative, got {amount}")
    digits = format(amount, "x")
    if len(digits) % 2:
        digits = "0" + digits
    return "0x" + digits


def export_claim_set(commitment: Commitment) -> ClaimSet:
    """Serialize every claim's proof, keyed by checksummed address."""

    tree = commitment.tree
    claims: dict[str, ClaimProof] = {}
    for claim in commitment.claims:
        claims[claim.address] = ClaimProof(
            index=claim.index,
            amount_hex=amount_to_hex(claim.amount),
            proof=tuple(encode_hex(sibling) for sibling in tree.proof(claim.index)),
        )
    return ClaimSet(merkle_root=tree.hex_root, claims=claims)


def verify_claim(
    claim_set: ClaimSet,
    address: str,
    *,
    pairing: PairingRule = PairingRule.POSITIONAL,
) -> bool:
    """Check the exported proof for ``address`` against the claim set's root.

    Returns ``False`` when the address is not part of the claim set.
    """

    checksummed = to_checksum_address(address)
    entry = claim_set.claims.get(checksummed)
    if entry is None:
        return False
    leaf = hash_claim(
        IndexedClaim(index=entry.index, address=checksummed, amount=int(entry.amount_hex, 16))
    )
    return verify_proof(
        decode_hex(claim_set.merkle_root),
        leaf,
        [decode_hex(sibling) for sibling in entry.proof],
        pairing=pairing,
        index=entry.index,
        leaf_count=len(claim_set.claims),
    )
