"""Address resolution: turn candidate tokens into checksummed addresses."""

from __future__ import annotations

import asyncio
import re
from collections import Counter
from dataclasses import dataclass, field
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from eth_utils import is_checksum_address, to_checksum_address

from tweetdrop.domain.eligibility.extraction import NAME_SUFFIX
from tweetdrop.domain.errors import NameResolutionError
from tweetdrop.domain.model import ResolvedClaim

if TYPE_CHECKING:
    from collections.abc import Sequence

    from tweetdrop.domain.model import Candidate
    from tweetdrop.domain.ports import NameResolver

log = getLogger(__name__)

DEFAULT_RESOLVER_TIMEOUT_SECONDS = 10.0
DEFAULT_RESOLVER_CONCURRENCY = 8

_RAW_ADDRESS = re.compile(r"^0x[0-9a-fA-F]{40}$")


class ResolutionStatus(StrEnum):
    RESOLVED = "resolved"
    UNRESOLVED = "unresolved"
    INVALID_ADDRESS = "invalid_address"
    RESOLVER_ERROR = "resolver_error"


@dataclass(frozen=True, slots=True)
class ResolutionOutcome:
    candidate: Candidate
    status: ResolutionStatus
    claim: ResolvedClaim | None = None


@dataclass(slots=True)
class ResolutionBatch:
    """Outcomes in candidate order."""

    outcomes: list[ResolutionOutcome] = field(default_factory=list[ResolutionOutcome])

    @property
    def claims(self) -> list[ResolvedClaim]:
        return [outcome.claim for outcome in self.outcomes if outcome.claim is not None]

    def count(self, status: ResolutionStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status is status)

    def counts(self) -> Counter[ResolutionStatus]:
        return Counter(outcome.status for outcome in self.outcomes)


def normalize_address(token: str) -> str | None:
    """Return the EIP-55 form of ``token`` or ``None`` if it is not a valid address.

    All-lowercase and all-uppercase hex carry no checksum and are accepted;
    mixed case must match its checksum exactly. Tools that lowercase before
    checksumming accept any casing, so a mixed-case token with a bad checksum
    they would keep is dropped here.
    """

    if not _RAW_ADDRESS.match(token):
        return None
    body = token[2:]
    if body not in (body.lower(), body.upper()) and not is_checksum_address(token):
        return None
    return to_checksum_address(token)


def is_name_token(token: str) -> bool:
    return NAME_SUFFIX in token.casefold()


@dataclass(slots=True)
class AddressResolver:
    """Resolve candidates to claims, optionally through a ``NameResolver``.

    Without a name resolver every name token is dropped as unresolved and raw
    addresses are validated by checksum only. Resolver failures and timeouts
    only ever drop the candidate at hand.
    """

    name_resolver: NameResolver | None = None
    timeout_seconds: float = DEFAULT_RESOLVER_TIMEOUT_SECONDS
    concurrency: int = DEFAULT_RESOLVER_CONCURRENCY

    async def resolve_one(self, candidate: Candidate) -> ResolutionOutcome:
        token = candidate.raw_token
        if is_name_token(token):
            return await self._resolve_name(candidate)

        address = normalize_address(token)
        if address is None:
            log.debug("Dropping @%s: invalid address %r", candidate.author_handle, token)
            return ResolutionOutcome(candidate, ResolutionStatus.INVALID_ADDRESS)
        return _resolved(candidate, address)

    async def resolve_all(self, candidates: Sequence[Candidate]) -> ResolutionBatch:
        """Resolve ``candidates`` concurrently, returning outcomes in input order."""

        if self.concurrency < 1:
            raise ValueError("Resolver concurrency must be at least 1")

        slots: list[ResolutionOutcome | None] = [None] * len(candidates)
        semaphore = asyncio.Semaphore(self.concurrency)

        async def fill(position: int, candidate: Candidate) -> None:
            async with semaphore:
                slots[position] = await self.resolve_one(candidate)

        async with asyncio.TaskGroup() as group:
            for position, candidate in enumerate(candidates):
                group.create_task(fill(position, candidate))

        outcomes = [outcome for outcome in slots if outcome is not None]
        if len(outcomes) != len(candidates):
            raise RuntimeError("Address resolution lost a candidate")
        return ResolutionBatch(outcomes=outcomes)

    async def _resolve_name(self, candidate: Candidate) -> ResolutionOutcome:
        name = candidate.raw_token.lower()
        if self.name_resolver is None:
            log.debug("Dropping @%s: no name resolver for %s", candidate.author_handle, name)
            return ResolutionOutcome(candidate, ResolutionStatus.UNRESOLVED)

        try:
            async with asyncio.timeout(self.timeout_seconds):
                resolved = await self.name_resolver.resolve(name)
        except TimeoutError:
            log.warning("Timed out resolving %s for @%s", name, candidate.author_handle)
            return ResolutionOutcome(candidate, ResolutionStatus.RESOLVER_ERROR)
        except NameResolutionError as exc:
            log.warning("Failed to resolve %s for @%s: %s", name, candidate.author_handle, exc)
            return ResolutionOutcome(candidate, ResolutionStatus.RESOLVER_ERROR)
        except Exception:
            log.warning(
                "Unexpected error resolving %s for @%s", name, candidate.author_handle, exc_info=True
            )
            return ResolutionOutcome(candidate, ResolutionStatus.RESOLVER_ERROR)

        if resolved is None:
            log.debug("Dropping @%s: %s has no address", candidate.author_handle, name)
            return ResolutionOutcome(candidate, ResolutionStatus.UNRESOLVED)

        address = normalize_address(resolved)
        if address is None:
            log.warning("Resolver returned malformed address %r for %s", resolved, name)
            return ResolutionOutcome(candidate, ResolutionStatus.INVALID_ADDRESS)
        return _resolved(candidate, address)


def _resolved(candidate: Candidate, address: str) -> ResolutionOutcome:
    claim = ResolvedClaim(author_handle=candidate.author_handle, address=address)
    return ResolutionOutcome(candidate, ResolutionStatus.RESOLVED, claim)
