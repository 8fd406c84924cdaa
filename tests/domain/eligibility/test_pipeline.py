from __future__ import annotations

import asyncio

from tweetdrop.domain.eligibility import run_eligibility
from tweetdrop.domain.model import EngagementRecord

ADDRESS_A = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
ADDRESS_B = "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359"
ADDRESS_C = "0xdbF03B407c01E7cD3CBea99509d93f8DDDC8C6FB"


def _record(handle: str, text: str) -> EngagementRecord:
    return EngagementRecord(author_id=f"id-{handle}", author_handle=handle, text=text)


def test_report_accounts_for_every_record(fake_resolver_factory: type) -> None:
    resolver = fake_resolver_factory(
        {"alice.eth": ADDRESS_A, "bob.eth": ADDRESS_B, "again.eth": ADDRESS_A}
    )
    records = [
        _record("alice", "alice.eth"),
        _record("bob", "bob.eth"),
        _record("alice", "second try: other.eth"),
        _record("carol", "no token here"),
        _record("dave", "ghost.eth"),
        _record("erin", "again.eth"),
    ]

    result = asyncio.run(run_eligibility(records, name_resolver=resolver))
    report = result.report

    assert [claim.address for claim in result.claims] == [ADDRESS_A, ADDRESS_B]
    assert report.records == 6
    assert report.extraction_misses == 1
    assert report.author_duplicates == 1
    assert report.unresolved == 1
    assert report.address_duplicates == 1
    assert report.claims == 2
    dropped = (
        report.extraction_misses
        + report.author_duplicates
        + report.unresolved
        + report.invalid_addresses
        + report.resolver_errors
        + report.address_duplicates
    )
    assert report.records == report.claims + dropped


def test_author_dedup_runs_before_resolution(fake_resolver_factory: type) -> None:
    resolver = fake_resolver_factory({"first.eth": None, "second.eth": ADDRESS_C})
    records = [_record("alice", "first.eth"), _record("alice", "second.eth")]

    result = asyncio.run(run_eligibility(records, name_resolver=resolver))

    assert result.claims == []
    assert resolver.calls == ["first.eth"]
    assert result.report.author_duplicates == 1
    assert result.report.unresolved == 1


def test_empty_input_yields_empty_result() -> None:
    result = asyncio.run(run_eligibility([]))

    assert result.claims == []
    assert result.report.records == 0
    assert result.report.claims == 0
