"""Claim commitment: leaf encoding, Merkle tree, proof export."""

from __future__ import annotations

from .builder import Commitment, build_commitment
from .export import amount_to_hex, export_claim_set, verify_claim
from .leaves import encode_claim, hash_claim
from .merkle import MerkleTree, PairingRule, hash_pair, verify_proof

__all__ = [
    "Commitment",
    "MerkleTree",
    "PairingRule",
    "amount_to_hex",
    "build_commitment",
    "encode_claim",
    "export_claim_set",
    "hash_claim",
    "hash_pair",
    "verify_claim",
    "verify_proof",
]
