"""Twitter API configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_int, require_env_vars
from .errors import ConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig

TWITTER_BASE_URL = "https://api.twitter.com/2/"
TWITTER_TIMEOUT_SECONDS = 15.0
# One app-auth rate-limit window.
TWITTER_CACHE_TTL_SECONDS = 15 * 60.0


@dataclass(frozen=True)
class TwitterConfig:
    """Holds Twitter API configuration values."""

    bearer_token: str
    conversation_id: str
    page_limit: int | None
    resilience: ResilienceConfig


def default_twitter_resilience(bearer_token: str) -> ResilienceConfig:
    return ResilienceConfig(
        name="twitter",
        base_url=TWITTER_BASE_URL,
        timeout_seconds=TWITTER_TIMEOUT_SECONDS,
        # Recent search allows 450 requests per 15 minutes for app auth.
        ratelimit=RateLimit(max_calls=1, per_seconds=2.0),
        cache=CacheConfig(backend="sqlite", ttl_seconds=TWITTER_CACHE_TTL_SECONDS),
        default_headers={"Authorization": f"Bearer {bearer_token}"},
    )


def get_twitter_config(*, resilience: ResilienceConfig | None = None) -> TwitterConfig:
    values = require_env_vars(("TWITTER_BEARER", "CONVERSATION_ID"))
    page_limit = env_int("PAGE_LIMIT", 0)
    if page_limit < 0:
        raise ConfigurationError("PAGE_LIMIT must be non-negative")
    bearer = values["TWITTER_BEARER"].strip()
    return TwitterConfig(
        bearer_token=bearer,
        conversation_id=values["CONVERSATION_ID"].strip(),
        page_limit=page_limit or None,
        resilience=resilience or default_twitter_resilience(bearer),
    )
