from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import pytest

from tweetdrop.domain.errors import NameResolutionError

if TYPE_CHECKING:
    from collections.abc import Mapping

_CONFIG_ENV_VARS = (
    "TWITTER_BEARER",
    "CONVERSATION_ID",
    "PAGE_LIMIT",
    "RPC_PROVIDER",
    "ENS_REGISTRY",
    "NUM_TOKENS",
    "AMOUNTS_FILE",
    "ENTRIES_DIR",
    "AIRDROP_FILE",
    "PROOFS_FILE",
    "BATCH_SIZE",
    "MERKLE_PAIRING",
    "EXTRACT_HEX_ADDRESSES",
    "RESOLVER_TIMEOUT_SECONDS",
    "RESOLVER_CONCURRENCY",
    "TWEETDROP_DATA_DIR",
)


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class FakeNameResolver:
    """In-memory name resolver.

    Names mapped to an exception instance raise it; names mapped to ``"sleep"``
    never answer.
    """

    def __init__(self, names: Mapping[str, str | Exception | None]) -> None:
        self._names = dict(names)
        self.calls: list[str] = []

    async def resolve(self, name: str) -> str | None:
        self.calls.append(name)
        answer = self._names.get(name)
        if isinstance(answer, Exception):
            raise answer
        if answer == "sleep":
            await asyncio.sleep(60)
        return answer


@pytest.fixture
def fake_resolver_factory() -> type[FakeNameResolver]:
    return FakeNameResolver


@pytest.fixture
def resolver_failure() -> NameResolutionError:
    return NameResolutionError("RPC request failed: connection refused")
