from __future__ import annotations

from tweetdrop.domain.eligibility import dedupe_by_address, dedupe_by_author
from tweetdrop.domain.eligibility.deduplication import dedupe_first_seen
from tweetdrop.domain.model import Candidate, ResolvedClaim

ADDRESS_A = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
ADDRESS_B = "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359"


def test_dedupe_first_seen_keeps_first_occurrence() -> None:
    result = dedupe_first_seen(["a", "b", "a", "c", "b"], key=lambda item: item)

    assert result.survivors == ["a", "b", "c"]
    assert result.dropped == 2


def test_dedupe_by_author_keeps_earliest_candidate() -> None:
    candidates = [
        Candidate(author_handle="alice", raw_token="first.eth"),
        Candidate(author_handle="bob", raw_token="bob.eth"),
        Candidate(author_handle="alice", raw_token="second.eth"),
    ]

    result = dedupe_by_author(candidates)

    assert [candidate.raw_token for candidate in result.survivors] == ["first.eth", "bob.eth"]
    assert result.dropped == 1


def test_dedupe_by_address_drops_later_authors() -> None:
    claims = [
        ResolvedClaim(author_handle="alice", address=ADDRESS_A),
        ResolvedClaim(author_handle="bob", address=ADDRESS_B),
        ResolvedClaim(author_handle="carol", address=ADDRESS_A),
    ]

    result = dedupe_by_address(claims)

    assert [claim.author_handle for claim in result.survivors] == ["alice", "bob"]
    assert result.dropped == 1


def test_dedupe_passes_are_independent_per_call() -> None:
    claims = [ResolvedClaim(author_handle="alice", address=ADDRESS_A)]

    first = dedupe_by_address(claims)
    second = dedupe_by_address(claims)

    assert first.survivors == second.survivors == claims
    assert first.dropped == second.dropped == 0
