"""Binary keccak-256 Merkle tree over an ordered leaf sequence."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from eth_utils import encode_hex, keccak

from tweetdrop.domain.errors import EmptyClaimSetError

if TYPE_CHECKING:
    from collections.abc import Sequence

DIGEST_LENGTH = 32


class PairingRule(StrEnum):
    """How two sibling digests are ordered before hashing.

    ``POSITIONAL`` keeps left before right, which is the default of the
    ``merkletreejs`` JavaScript library and the default here. ``SORTED``
    concatenates the smaller digest first, as OpenZeppelin's
    ``MerkleProof.verify`` expects.
    """

    SORTED = "sorted"
    POSITIONAL = "positional"


def hash_pair(left: bytes, right: bytes, pairing: PairingRule) -> bytes:
    if pairing is PairingRule.SORTED and right < left:
        left, right = right, left
    return keccak(left + right)


@dataclass(frozen=True, slots=True)
class MerkleTree:
    """All layers from leaves (``layers[0]``) up to the single root.

    An unpaired last node is promoted unchanged to the next layer; it is
    neither duplicated nor hashed. Leaves are never reordered.
    """

    layers: tuple[tuple[bytes, ...], ...]
    pairing: PairingRule = PairingRule.POSITIONAL

    @classmethod
    def build(
        cls, leaves: Sequence[bytes], *, pairing: PairingRule = PairingRule.POSITIONAL
    ) -> MerkleTree:
        if not leaves:
            raise EmptyClaimSetError
        for leaf in leaves:
            if len(leaf) != DIGEST_LENGTH:
                raise ValueError(f"Leaf must be {DIGEST_LENGTH} bytes, got {len(leaf)}")

        current = tuple(leaves)
        layers = [current]
        while len(current) > 1:
            parents: list[bytes] = []
            for position in range(0, len(current), 2):
                if position + 1 < len(current):
                    parents.append(hash_pair(current[position], current[position + 1], pairing))
                else:
                    parents.append(current[position])
            current = tuple(parents)
            layers.append(current)
        return cls(layers=tuple(layers), pairing=pairing)

    @property
    def leaves(self) -> tuple[bytes, ...]:
        return self.layers[0]

    @property
    def leaf_count(self) -> int:
        return len(self.layers[0])

    @property
    def root(self) -> bytes:
        return self.layers[-1][0]

    @property
    def hex_root(self) -> str:
        return encode_hex(self.root)

    def proof(self, index: int) -> tuple[bytes, ...]:
        """Sibling digests from leaf ``index`` up to (excluding) the root."""

        if not 0 <= index < self.leaf_count:
            raise IndexError(f"Leaf index {index} out of range for {self.leaf_count} leaves")
        siblings: list[bytes] = []
        position = index
        for layer in self.layers[:-1]:
            sibling = position ^ 1
            if sibling < len(layer):
                siblings.append(layer[sibling])
            position //= 2
        return tuple(siblings)


def verify_proof(
    root: bytes,
    leaf: bytes,
    proof: Sequence[bytes],
    *,
    pairing: PairingRule = PairingRule.POSITIONAL,
    index: int | None = None,
    leaf_count: int | None = None,
) -> bool:
    """Recompute the root from ``leaf`` and ``proof`` and compare it to ``root``.

    Positional proofs carry no side information, so ``index`` and
    ``leaf_count`` are required to replay which side each sibling sits on and
    which layers promoted the node without a sibling.
    """

    if pairing is PairingRule.SORTED:
        node = leaf
        for sibling in proof:
            node = hash_pair(node, sibling, pairing)
        return node == root

    if index is None or leaf_count is None:
        raise ValueError("Positional proofs need the leaf index and leaf count")
    if not 0 <= index < leaf_count:
        return False

    node = leaf
    remaining = list(proof)
    position = index
    width = leaf_count
    while width > 1:
        if position ^ 1 < width:
            if not remaining:
                return False
            sibling = remaining.pop(0)
            node = keccak(sibling + node) if position & 1 else keccak(node + sibling)
        position //= 2
        width = (width + 1) // 2
    return not remaining and node == root
