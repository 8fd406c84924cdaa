"""Domain error hierarchy.

Only configuration-level impossibilities surface as exceptions; per-record
drops (misses, unresolved names, duplicates) are counted, not raised.
"""

from __future__ import annotations


class TweetdropError(RuntimeError):
    """Base class for fatal pipeline errors."""


class AmountPolicyError(TweetdropError):
    """Raised when the amount policy is malformed or has no amount for a claim."""


class CommitmentError(TweetdropError):
    """Raised when a claim set cannot be committed to a Merkle root."""


class EmptyClaimSetError(CommitmentError):
    """Raised when no claims reach the commitment stage."""

    def __init__(self) -> None:
        super().__init__("Refusing to commit an empty claim set")


class DuplicateClaimError(CommitmentError):
    """Raised when two claims share an address at commitment time."""

    def __init__(self, address: str, *, first_index: int, second_index: int) -> None:
        super().__init__(
            f"Address {address} appears at index {first_index} and {second_index}"
        )
        self.address = address
        self.first_index = first_index
        self.second_index = second_index


class NameResolutionError(TweetdropError):
    """Raised by name resolvers when the backing service fails.

    The eligibility pipeline catches this per candidate; it never aborts a run.
    """
