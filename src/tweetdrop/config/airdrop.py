"""Airdrop job configuration: amounts, file locations, commitment options."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Final

from tweetdrop.domain.commitment import PairingRule
from tweetdrop.domain.eligibility.resolution import (
    DEFAULT_RESOLVER_CONCURRENCY,
    DEFAULT_RESOLVER_TIMEOUT_SECONDS,
)

from .env import env_bool, env_float, env_int, optional_env_var
from .errors import ConfigurationError

DEFAULT_NUM_TOKENS: Final[str] = "10"
DEFAULT_ENTRIES_DIR: Final[str] = "output"
DEFAULT_AIRDROP_FILE: Final[str] = "airdrop.jsonl"
DEFAULT_PROOFS_FILE: Final[str] = "proofs.json"
DEFAULT_BATCH_SIZE: Final[int] = 100


@dataclass(frozen=True, slots=True)
class AirdropConfig:
    num_tokens: str | None = None
    amounts_file: Path | None = None
    entries_dir: Path = Path(DEFAULT_ENTRIES_DIR)
    airdrop_file: Path = Path(DEFAULT_AIRDROP_FILE)
    proofs_file: Path = Path(DEFAULT_PROOFS_FILE)
    batch_size: int = DEFAULT_BATCH_SIZE
    pairing: PairingRule = PairingRule.POSITIONAL
    extract_hex_addresses: bool = False
    resolver_timeout_seconds: float = DEFAULT_RESOLVER_TIMEOUT_SECONDS
    resolver_concurrency: int = DEFAULT_RESOLVER_CONCURRENCY


def parse_pairing(value: str) -> PairingRule:
    try:
        return PairingRule(value.strip().lower())
    except ValueError as exc:
        choices = ", ".join(rule.value for rule in PairingRule)
        raise ConfigurationError(
            f"Unsupported Merkle pairing {value!r} (expected one of: {choices})"
        ) from exc


def get_airdrop_config() -> AirdropConfig:
    amounts_file = optional_env_var("AMOUNTS_FILE")
    batch_size = env_int("BATCH_SIZE", DEFAULT_BATCH_SIZE)
    if batch_size < 1:
        raise ConfigurationError("BATCH_SIZE must be at least 1")
    concurrency = env_int("RESOLVER_CONCURRENCY", DEFAULT_RESOLVER_CONCURRENCY)
    if concurrency < 1:
        raise ConfigurationError("RESOLVER_CONCURRENCY must be at least 1")
    timeout = env_float("RESOLVER_TIMEOUT_SECONDS", DEFAULT_RESOLVER_TIMEOUT_SECONDS)
    if timeout <= 0:
        raise ConfigurationError("RESOLVER_TIMEOUT_SECONDS must be positive")

    return AirdropConfig(
        num_tokens=optional_env_var("NUM_TOKENS"),
        amounts_file=Path(amounts_file) if amounts_file else None,
        entries_dir=Path(optional_env_var("ENTRIES_DIR") or DEFAULT_ENTRIES_DIR),
        airdrop_file=Path(optional_env_var("AIRDROP_FILE") or DEFAULT_AIRDROP_FILE),
        proofs_file=Path(optional_env_var("PROOFS_FILE") or DEFAULT_PROOFS_FILE),
        batch_size=batch_size,
        pairing=parse_pairing(optional_env_var("MERKLE_PAIRING") or PairingRule.POSITIONAL.value),
        extract_hex_addresses=env_bool("EXTRACT_HEX_ADDRESSES"),
        resolver_timeout_seconds=timeout,
        resolver_concurrency=concurrency,
    )
