"""Leaf encoding shared with the on-chain claim verifier.

A leaf is ``keccak256(abi.encodePacked(uint256 index, address account,
uint256 amount))``: 32 + 20 + 32 bytes, no padding between fields. Any
change here invalidates every published proof.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from eth_abi.packed import encode_packed
from eth_utils import keccak

if TYPE_CHECKING:
    from tweetdrop.domain.model import IndexedClaim

LEAF_TYPES: Final[tuple[str, str, str]] = ("uint256", "address", "uint256")
ENCODED_LEAF_LENGTH: Final[int] = 32 + 20 + 32


def encode_claim(claim: IndexedClaim) -> bytes:
    return encode_packed(LEAF_TYPES, (claim.index, claim.address, claim.amount))


def hash_claim(claim: IndexedClaim) -> bytes:
    return keccak(encode_claim(claim))
