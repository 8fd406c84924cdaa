"""ENS name-resolution configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .env import optional_env_var
from .http_resilience import RateLimit, ResilienceConfig

ENS_REGISTRY_ADDRESS: Final[str] = "0x00000000000C2E074eC69A0dFb2997BA6C7d2e1e"
RPC_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class EnsConfig:
    rpc_url: str
    registry_address: str
    resilience: ResilienceConfig


def default_rpc_resilience(rpc_url: str) -> ResilienceConfig:
    return ResilienceConfig(
        name="ens",
        base_url=rpc_url,
        timeout_seconds=RPC_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        default_headers={"Content-Type": "application/json"},
    )


def get_ens_config(*, resilience: ResilienceConfig | None = None) -> EnsConfig | None:
    """Return the ENS config, or ``None`` when no ``RPC_PROVIDER`` is set.

    Running without an RPC endpoint is supported: name tokens are then dropped
    as unresolved instead of failing the run.
    """

    rpc_url = optional_env_var("RPC_PROVIDER")
    if rpc_url is None:
        return None
    registry = optional_env_var("ENS_REGISTRY") or ENS_REGISTRY_ADDRESS
    return EnsConfig(
        rpc_url=rpc_url,
        registry_address=registry,
        resilience=resilience or default_rpc_resilience(rpc_url),
    )
