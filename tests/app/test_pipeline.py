from __future__ import annotations

import json
from pathlib import Path  # noqa: TC003

import pytest

from tweetdrop import app as app_module
from tweetdrop.adapters.files import ClaimEntry, read_entries, write_entries
from tweetdrop.config import AirdropConfig
from tweetdrop.domain.amounts import ConstantAmount
from tweetdrop.domain.commitment import PairingRule, verify_claim
from tweetdrop.domain.errors import AmountPolicyError, DuplicateClaimError, EmptyClaimSetError
from tweetdrop.domain.model import EngagementRecord, ResolvedClaim
from tweetdrop.domain.ports import EngagementFetchResult

ADDRESS_A = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
ADDRESS_B = "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359"
ADDRESS_C = "0xdbF03B407c01E7cD3CBea99509d93f8DDDC8C6FB"


def _record(handle: str, text: str) -> EngagementRecord:
    return EngagementRecord(author_id=f"id-{handle}", author_handle=handle, text=text)


class FakeFetcher:
    def __init__(self, records: list[EngagementRecord]) -> None:
        self.records = records
        self.page_limits: list[int | None] = []

    def __call__(self, *, page_limit: int | None = None) -> EngagementFetchResult:
        self.page_limits.append(page_limit)
        return EngagementFetchResult(
            records=list(self.records), replies=len(self.records), quotes=0
        )


def _config(tmp_path: Path, **overrides: object) -> AirdropConfig:
    values: dict[str, object] = {
        "entries_dir": tmp_path / "output",
        "airdrop_file": tmp_path / "airdrop.jsonl",
        "proofs_file": tmp_path / "proofs.json",
    }
    values.update(overrides)
    return AirdropConfig(**values)  # type: ignore[arg-type]


def test_same_address_from_different_authors_keeps_first() -> None:
    records = [
        _record("alice", f"mine {ADDRESS_A.lower()}"),
        _record("bob", f"also mine {ADDRESS_A}"),
    ]

    claim_set, report = app_module.build_claim_set(
        records, ConstantAmount(10), extract_hex_addresses=True
    )

    assert list(claim_set.claims) == [ADDRESS_A]
    assert report.address_duplicates == 1


@pytest.mark.parametrize(
    ("suffix", "accepted"),
    [(ADDRESS_A, True), ("0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAeD", False)],
)
def test_hex_prefixed_token_is_truncated_then_checksummed(
    suffix: str,
    accepted: bool,  # noqa: FBT001
) -> None:
    records = [
        _record("alice", f"claim here: {suffix}1234.eth extra"),
        _record("bob", "claim here: bob-wallet"),
        _record("carol", f"{ADDRESS_B}"),
    ]

    claim_set, report = app_module.build_claim_set(
        records, ConstantAmount(10), extract_hex_addresses=True
    )

    assert (ADDRESS_A in claim_set.claims) is accepted
    assert report.invalid_addresses == (0 if accepted else 1)
    assert ADDRESS_B in claim_set.claims


def test_name_token_claim_carries_resolved_address(fake_resolver_factory: type) -> None:
    resolver = fake_resolver_factory({"foo.eth": ADDRESS_C})

    claim_set, _ = app_module.build_claim_set(
        [_record("alice", "Foo.ETH")], ConstantAmount(10), name_resolver=resolver
    )

    assert list(claim_set.claims) == [ADDRESS_C]
    assert resolver.calls == ["foo.eth"]


def test_name_token_without_resolver_is_dropped() -> None:
    records = [_record("alice", "alice.eth"), _record("bob", f"{ADDRESS_B}")]

    claim_set, report = app_module.build_claim_set(
        records, ConstantAmount(10), extract_hex_addresses=True
    )

    assert list(claim_set.claims) == [ADDRESS_B]
    assert report.unresolved == 1


def test_three_claims_at_ten_tokens_verify(fake_resolver_factory: type) -> None:
    resolver = fake_resolver_factory({"a.eth": ADDRESS_A, "b.eth": ADDRESS_B, "c.eth": ADDRESS_C})
    records = [_record("a", "a.eth"), _record("b", "b.eth"), _record("c", "c.eth")]

    claim_set, _ = app_module.build_claim_set(records, ConstantAmount(10), name_resolver=resolver)

    assert [(entry.index, entry.amount_hex) for entry in claim_set.claims.values()] == [
        (0, "0x0a"),
        (1, "0x0a"),
        (2, "0x0a"),
    ]
    assert list(claim_set.claims) == [ADDRESS_A, ADDRESS_B, ADDRESS_C]
    assert all(verify_claim(claim_set, address) for address in claim_set.claims)


def test_build_claim_set_with_no_survivors_fails() -> None:
    with pytest.raises(EmptyClaimSetError):
        app_module.build_claim_set([_record("alice", "nothing")], ConstantAmount(10))


def test_commit_claims_rejects_duplicates() -> None:
    claims = [
        ResolvedClaim(author_handle="a", address=ADDRESS_A),
        ResolvedClaim(author_handle="b", address=ADDRESS_A),
    ]

    with pytest.raises(DuplicateClaimError):
        app_module.commit_claims(claims, ConstantAmount(10))


def test_collect_compile_generate_verify(tmp_path: Path, fake_resolver_factory: type) -> None:
    config = _config(tmp_path, batch_size=2, num_tokens="25")
    fetcher = FakeFetcher(
        [
            _record("alice", "alice.eth"),
            _record("bob", "bob.eth"),
            _record("carol", "carol.eth"),
            _record("alice", "again.eth"),
        ]
    )
    resolver = fake_resolver_factory(
        {"alice.eth": ADDRESS_A, "bob.eth": ADDRESS_B, "carol.eth": ADDRESS_C}
    )

    collected = app_module.collect_entries(
        fetcher=fetcher, name_resolver=resolver, config=config, page_limit=3
    )

    assert fetcher.page_limits == [3]
    assert collected.report.claims == 3
    assert [path.name for path in collected.batch_files] == ["batch-0.jsonl", "batch-1.jsonl"]

    compiled = app_module.compile_airdrop(config=config)

    assert [entry.amount for entry in compiled] == ["25", "25", "25"]
    assert read_entries(config.airdrop_file) == compiled

    claim_set = app_module.generate_proofs(config=config)

    document = json.loads(config.proofs_file.read_text())
    assert document["merkleRoot"] == claim_set.merkle_root
    assert document["claims"][ADDRESS_B] == {
        "index": 1,
        "amount": "0x19",
        "proof": list(claim_set.claims[ADDRESS_B].proof),
    }
    assert app_module.verify_address(ADDRESS_C.lower(), config=config)
    assert not app_module.verify_address(
        "0x0000000000000000000000000000000000000001", config=config
    )


def test_collect_without_rpc_provider_drops_names(tmp_path: Path) -> None:
    config = _config(tmp_path, extract_hex_addresses=True)
    fetcher = FakeFetcher([_record("alice", "alice.eth"), _record("bob", ADDRESS_B)])

    collected = app_module.collect_entries(
        fetcher=fetcher, ens_config_factory=lambda: None, config=config
    )

    assert collected.report.unresolved == 1
    assert collected.report.claims == 1


def test_compile_uses_amounts_file(tmp_path: Path) -> None:
    amounts = tmp_path / "amounts.json"
    amounts.write_text(json.dumps({"alice": "100", ADDRESS_B: 7}))
    config = _config(tmp_path, amounts_file=amounts)
    config.entries_dir.mkdir()
    write_entries(
        [
            ClaimEntry(twitter="alice", address=ADDRESS_A),
            ClaimEntry(twitter="bob", address=ADDRESS_B),
        ],
        config.entries_dir / "batch-0.jsonl",
    )

    compiled = app_module.compile_airdrop(config=config)

    assert [entry.amount for entry in compiled] == ["100", "7"]


def test_compile_with_amounts_file_and_unknown_claim_fails(tmp_path: Path) -> None:
    amounts = tmp_path / "amounts.json"
    amounts.write_text(json.dumps({"alice": "100"}))
    config = _config(tmp_path, amounts_file=amounts)
    config.entries_dir.mkdir()
    write_entries(
        [ClaimEntry(twitter="bob", address=ADDRESS_B)], config.entries_dir / "batch-0.jsonl"
    )

    with pytest.raises(AmountPolicyError):
        app_module.compile_airdrop(config=config)


def test_generate_requires_compiled_amounts(tmp_path: Path) -> None:
    config = _config(tmp_path)
    write_entries([ClaimEntry(twitter="alice", address=ADDRESS_A)], config.airdrop_file)

    with pytest.raises(AmountPolicyError, match="run compile first"):
        app_module.generate_proofs(config=config)


def test_generate_honours_sorted_pairing(tmp_path: Path) -> None:
    config = _config(tmp_path, pairing=PairingRule.SORTED)
    write_entries(
        [
            ClaimEntry(twitter="alice", address=ADDRESS_A, amount="10"),
            ClaimEntry(twitter="bob", address=ADDRESS_B, amount="10"),
            ClaimEntry(twitter="carol", address=ADDRESS_C, amount="10"),
        ],
        config.airdrop_file,
    )

    claim_set = app_module.generate_proofs(config=config)

    assert [entry.index for entry in claim_set.claims.values()] == [0, 1, 2]
    assert all(app_module.verify_address(address, config=config) for address in claim_set.claims)


def test_build_amount_policy_defaults_to_ten(tmp_path: Path) -> None:
    policy = app_module.build_amount_policy(_config(tmp_path))

    assert isinstance(policy, ConstantAmount)
    assert policy.value == 10
