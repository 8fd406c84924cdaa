"""Dense index and amount assignment for surviving claims."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tweetdrop.domain.model import IndexedClaim

if TYPE_CHECKING:
    from collections.abc import Iterable

    from tweetdrop.domain.amounts import AmountPolicy
    from tweetdrop.domain.model import ResolvedClaim


def index_claims(claims: Iterable[ResolvedClaim], policy: AmountPolicy) -> list[IndexedClaim]:
    """Number ``claims`` 0..N-1 in the given order and attach their amounts.

    The returned order is the leaf order of the commitment; callers must not
    reorder it.
    """

    return [
        IndexedClaim(index=index, address=claim.address, amount=policy.amount_for(claim))
        for index, claim in enumerate(claims)
    ]
