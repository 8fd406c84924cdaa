"""ENS name resolution over Ethereum JSON-RPC ``eth_call``."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final

import httpx
from eth_abi import decode
from eth_abi.exceptions import DecodingError
from eth_utils import (
    decode_hex,
    encode_hex,
    function_signature_to_4byte_selector,
    keccak,
    to_checksum_address,
)
from pydantic import ValidationError

from tweetdrop.adapters.http_resilience import ResilientClient, default_client_factory
from tweetdrop.domain.errors import NameResolutionError

from .schema import JsonRpcResponse

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from tweetdrop.config.ens import EnsConfig
    from tweetdrop.config.http_resilience import ResilienceConfig
    from tweetdrop.domain.ports.resolution import NameResolver

log = getLogger(__name__)

RESOLVER_SELECTOR: Final[bytes] = function_signature_to_4byte_selector("resolver(bytes32)")
ADDR_SELECTOR: Final[bytes] = function_signature_to_4byte_selector("addr(bytes32)")
EMPTY_NODE: Final[bytes] = b"\x00" * 32


def namehash(name: str) -> bytes:
    """EIP-137 namehash of an already-normalized (lowercased) name."""

    node = EMPTY_NODE
    if name:
        for label in reversed(name.split(".")):
            node = keccak(node + keccak(text=label))
    return node


@dataclass(slots=True)
class EnsNameResolver:
    """Resolve ``*.eth`` names via the ENS registry and the name's resolver.

    Use as an async context manager so the HTTP client lives on the loop that
    performs the lookups.
    """

    config: EnsConfig
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=default_client_factory
    )
    _client: ResilientClient | None = field(default=None, init=False, repr=False)
    _request_ids: itertools.count[int] = field(
        default_factory=lambda: itertools.count(1), init=False, repr=False
    )

    async def __aenter__(self) -> EnsNameResolver:
        self._client = self.client_factory(self.config.resilience)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def resolve(self, name: str) -> str | None:
        node = namehash(name)
        resolver_address = await self._call_for_address(
            self.config.registry_address, RESOLVER_SELECTOR + node
        )
        if resolver_address is None:
            log.debug("No resolver set for %s", name)
            return None
        return await self._call_for_address(resolver_address, ADDR_SELECTOR + node)

    async def _call_for_address(self, to: str, data: bytes) -> str | None:
        result = await self._eth_call(to, data)
        # Calls to accounts without code return "0x".
        if len(result) < 32:
            return None
        try:
            (address,) = decode(["address"], result[:32])
        except DecodingError as exc:
            raise NameResolutionError(f"Malformed address word from {to}") from exc
        if int(address, 16) == 0:
            return None
        return to_checksum_address(address)

    async def _eth_call(self, to: str, data: bytes) -> bytes:
        if self._client is None:
            raise RuntimeError("EnsNameResolver must be entered before resolving names")

        payload = {
            "jsonrpc": "2.0",
            "id": next(self._request_ids),
            "method": "eth_call",
            "params": [{"to": to, "data": encode_hex(data)}, "latest"],
        }
        try:
            response = await self._client.post(self.config.rpc_url, json=payload)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise NameResolutionError(f"RPC request failed: {exc}") from exc

        try:
            body = JsonRpcResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise NameResolutionError("Malformed JSON-RPC response") from exc

        if body.error is not None:
            raise NameResolutionError(f"RPC error {body.error.code}: {body.error.message}")
        if body.result is None:
            raise NameResolutionError("JSON-RPC response carried no result")
        try:
            return decode_hex(body.result)
        except ValueError as exc:
            raise NameResolutionError(f"Malformed eth_call result {body.result!r}") from exc


if TYPE_CHECKING:

    def _resolver_check(resolver: EnsNameResolver) -> NameResolver:
        return resolver
