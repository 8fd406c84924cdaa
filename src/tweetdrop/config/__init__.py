"""Application configuration helpers."""

from __future__ import annotations

from .airdrop import AirdropConfig, get_airdrop_config, parse_pairing
from .ens import ENS_REGISTRY_ADDRESS, EnsConfig, get_ens_config
from .env import (
    env_bool,
    env_float,
    env_int,
    optional_env_var,
    require_env_var,
    require_env_vars,
)
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .storage import StorageConfig, get_storage_config
from .twitter import TwitterConfig, get_twitter_config

__all__ = [
    "ENS_REGISTRY_ADDRESS",
    "AirdropConfig",
    "CacheConfig",
    "ConfigurationError",
    "EnsConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "TwitterConfig",
    "configure_logging",
    "env_bool",
    "env_float",
    "env_int",
    "get_airdrop_config",
    "get_ens_config",
    "get_storage_config",
    "get_twitter_config",
    "optional_env_var",
    "parse_pairing",
    "require_env_var",
    "require_env_vars",
]
