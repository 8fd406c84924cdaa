"""Application orchestration entry points, one per batch job."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from tweetdrop.adapters.ens import EnsNameResolver
from tweetdrop.adapters.files import (
    ClaimEntry,
    EntryFormatError,
    load_amount_table,
    read_claim_set,
    read_entries,
    read_entry_batches,
    write_claim_set,
    write_entries,
    write_entry_batches,
)
from tweetdrop.adapters.twitter import TwitterEngagementFetcher
from tweetdrop.config import get_airdrop_config, get_ens_config
from tweetdrop.config.airdrop import DEFAULT_NUM_TOKENS
from tweetdrop.domain.amounts import AmountTable, ConstantAmount, parse_amount
from tweetdrop.domain.commitment import (
    PairingRule,
    build_commitment,
    export_claim_set,
    verify_claim,
)
from tweetdrop.domain.eligibility import (
    EligibilityReport,
    index_claims,
    normalize_address,
    run_eligibility,
)
from tweetdrop.domain.errors import AmountPolicyError
from tweetdrop.domain.model import ResolvedClaim

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from pathlib import Path

    from tweetdrop.config import AirdropConfig, EnsConfig
    from tweetdrop.domain.amounts import AmountPolicy
    from tweetdrop.domain.eligibility import EligibilityResult
    from tweetdrop.domain.model import ClaimSet, EngagementRecord
    from tweetdrop.domain.ports import EngagementFetcher, NameResolver


log = getLogger(__name__)


@dataclass(slots=True)
class CollectResult:
    report: EligibilityReport
    batch_files: list[Path] = field(default_factory=list["Path"])


def collect_entries(
    *,
    fetcher: EngagementFetcher | None = None,
    name_resolver: NameResolver | None = None,
    ens_config_factory: Callable[[], EnsConfig | None] = get_ens_config,
    config: AirdropConfig | None = None,
    page_limit: int | None = None,
) -> CollectResult:
    """Fetch engagement, resolve unique claims and write them as review batches."""

    active_config = config or get_airdrop_config()
    effective_fetcher = fetcher or TwitterEngagementFetcher()

    fetched = effective_fetcher(page_limit=page_limit)
    log.info(
        f"Fetched {len(fetched.records)} records: replies={fetched.replies}, "
        f"without_retweet={fetched.replies_without_retweet}, quotes={fetched.quotes}"
    )

    result = asyncio.run(
        _resolve_records(
            fetched.records,
            name_resolver=name_resolver,
            ens_config=ens_config_factory() if name_resolver is None else None,
            config=active_config,
        )
    )

    entries = [
        ClaimEntry(twitter=claim.author_handle, address=claim.address) for claim in result.claims
    ]
    batch_files = write_entry_batches(
        entries, active_config.entries_dir, batch_size=active_config.batch_size
    )
    return CollectResult(report=result.report, batch_files=batch_files)


def compile_airdrop(*, config: AirdropConfig | None = None) -> list[ClaimEntry]:
    """Merge review batches into the airdrop file, attaching each claim's amount."""

    active_config = config or get_airdrop_config()
    policy = build_amount_policy(active_config)

    compiled: list[ClaimEntry] = []
    for entry in read_entry_batches(active_config.entries_dir):
        claim = _entry_claim(entry)
        amount = policy.amount_for(claim)
        compiled.append(
            ClaimEntry(twitter=claim.author_handle, address=claim.address, amount=str(amount))
        )

    write_entries(compiled, active_config.airdrop_file)
    log.info(f"Compiled {len(compiled)} entries into {active_config.airdrop_file}")
    return compiled


def generate_proofs(*, config: AirdropConfig | None = None) -> ClaimSet:
    """Commit to the airdrop file and write the root and proofs."""

    active_config = config or get_airdrop_config()
    entries = read_entries(active_config.airdrop_file)

    claims: list[ResolvedClaim] = []
    amounts: dict[str, int] = {}
    for entry in entries:
        claim = _entry_claim(entry)
        if entry.amount is None:
            raise AmountPolicyError(f"Entry for {claim.address} has no amount; run compile first")
        amounts.setdefault(claim.address, parse_amount(entry.amount))
        claims.append(claim)

    claim_set = commit_claims(
        claims, AmountTable(by_address=amounts), pairing=active_config.pairing
    )
    write_claim_set(claim_set, active_config.proofs_file)
    log.info(f"Wrote {len(claim_set)} proofs to {active_config.proofs_file}")
    return claim_set


def verify_address(
    address: str,
    *,
    proofs_file: Path | None = None,
    config: AirdropConfig | None = None,
) -> bool:
    active_config = config or get_airdrop_config()
    claim_set = read_claim_set(proofs_file or active_config.proofs_file)
    return verify_claim(claim_set, address, pairing=active_config.pairing)


def build_claim_set(
    records: Sequence[EngagementRecord],
    policy: AmountPolicy,
    *,
    name_resolver: NameResolver | None = None,
    pairing: PairingRule = PairingRule.POSITIONAL,
    extract_hex_addresses: bool = False,
) -> tuple[ClaimSet, EligibilityReport]:
    """Run the whole pipeline in one process, without the file hand-off."""

    result = asyncio.run(
        run_eligibility(
            records,
            name_resolver=name_resolver,
            extract_hex_addresses=extract_hex_addresses,
        )
    )
    return commit_claims(result.claims, policy, pairing=pairing), result.report


def commit_claims(
    claims: Sequence[ResolvedClaim],
    policy: AmountPolicy,
    *,
    pairing: PairingRule = PairingRule.POSITIONAL,
) -> ClaimSet:
    indexed = index_claims(claims, policy)
    commitment = build_commitment(indexed, pairing=pairing)
    return export_claim_set(commitment)


def build_amount_policy(config: AirdropConfig) -> AmountPolicy:
    """Lookup table from ``AMOUNTS_FILE`` if set, else ``NUM_TOKENS`` for everyone.

    With a table, ``NUM_TOKENS`` (when set) is the fallback for unlisted claims.
    """

    if config.amounts_file is not None:
        default = parse_amount(config.num_tokens) if config.num_tokens is not None else None
        return load_amount_table(config.amounts_file, default=default)
    return ConstantAmount(parse_amount(config.num_tokens or DEFAULT_NUM_TOKENS))


async def _resolve_records(
    records: Sequence[EngagementRecord],
    *,
    name_resolver: NameResolver | None,
    ens_config: EnsConfig | None,
    config: AirdropConfig,
) -> EligibilityResult:
    if name_resolver is None and ens_config is not None:
        async with EnsNameResolver(config=ens_config) as ens:
            return await _resolve_records(
                records, name_resolver=ens, ens_config=None, config=config
            )

    if name_resolver is None:
        log.warning("No RPC_PROVIDER configured; ENS names will be dropped")
    return await run_eligibility(
        records,
        name_resolver=name_resolver,
        extract_hex_addresses=config.extract_hex_addresses,
        resolver_timeout_seconds=config.resolver_timeout_seconds,
        resolver_concurrency=config.resolver_concurrency,
    )


def _entry_claim(entry: ClaimEntry) -> ResolvedClaim:
    address = normalize_address(entry.address)
    if address is None:
        raise EntryFormatError(f"Invalid address {entry.address!r} for @{entry.twitter}")
    return ResolvedClaim(author_handle=entry.twitter, address=address)
