"""httpx client with retries, client-side rate limiting and optional caching."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from aiolimiter import AsyncLimiter
from hishel import AsyncSqliteStorage, FilterPolicy
from hishel import Response as HishelCacheResponse
from hishel._policies import BaseFilter
from hishel.httpx import AsyncCacheClient
from httpx_retries import Retry, RetryTransport

from tweetdrop.config.storage import get_storage_config

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType

    from tweetdrop.config.http_resilience import CacheConfig, ResilienceConfig, RetryPolicy

log = getLogger(__name__)


def build_retry(policy: RetryPolicy) -> Retry:
    return Retry(
        total=policy.total,
        backoff_factor=policy.backoff_factor,
        max_backoff_wait=policy.max_backoff_wait,
        respect_retry_after_header=policy.respect_retry_after_header,
        allowed_methods=tuple(policy.allowed_methods),
        status_forcelist=tuple(policy.status_forcelist),
        retry_on_exceptions=policy.retry_on_exceptions,
        backoff_jitter=policy.backoff_jitter,
    )


class ResilientClient:
    """Async HTTP client shared by the Twitter collector and the ENS resolver.

    Every request waits for the rate limiter (when configured) before it is
    sent; retries happen inside the transport and do not take extra tokens.
    """

    def __init__(self, config: ResilienceConfig) -> None:
        self.config = config
        self._limiter: AsyncLimiter | None = (
            AsyncLimiter(config.ratelimit.max_calls, config.ratelimit.per_seconds)
            if config.ratelimit
            else None
        )
        self._client = self._build_client(config)

    @staticmethod
    def _build_client(config: ResilienceConfig) -> httpx.AsyncClient:
        transport = RetryTransport(retry=build_retry(config.retry))
        headers = dict(config.default_headers) if config.default_headers else None
        base_url = config.base_url or ""

        storage, policy = _build_cache_components(config.cache)
        if storage is not None:
            log.debug(f"Caching {config.name} responses ({config.cache})")
            return AsyncCacheClient(
                base_url=base_url,
                timeout=config.timeout_seconds,
                headers=headers,
                transport=transport,
                storage=storage,
                policy=policy,
            )
        return httpx.AsyncClient(
            base_url=base_url,
            timeout=config.timeout_seconds,
            headers=headers,
            transport=transport,
        )

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: httpx.QueryParams | Mapping[str, str | int] | None = None,
        json: object = None,
    ) -> httpx.Response:
        if self._limiter is not None:
            await self._limiter.acquire()
        response = await self._client.request(method, url, params=params, json=json)
        log.debug(f"{self.config.name}: {method} {response.url} -> {response.status_code}")
        if response.status_code == httpx.codes.TOO_MANY_REQUESTS:
            log.warning(f"{self.config.name}: still rate limited after retries")
        return response

    async def get(
        self,
        url: str,
        *,
        params: httpx.QueryParams | Mapping[str, str | int] | None = None,
    ) -> httpx.Response:
        return await self.request("GET", url, params=params)

    async def post(self, url: str, *, json: object = None) -> httpx.Response:
        return await self.request("POST", url, json=json)


def default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


class _SuccessfulResponseFilter(BaseFilter[HishelCacheResponse]):
    """Cache only responses below 400."""

    def needs_body(self) -> bool:
        return False

    def apply(self, item: HishelCacheResponse, body: bytes | None) -> bool:  # noqa: ARG002
        return item.status_code < httpx.codes.BAD_REQUEST


def _build_cache_components(
    config: CacheConfig | None,
) -> tuple[AsyncSqliteStorage | None, FilterPolicy | None]:
    if config is None:
        return None, None

    if config.backend == "sqlite":
        database_path = str(get_storage_config().http_cache_path())
    elif config.backend == "memory":
        database_path = ":memory:"
    else:
        msg = f"Unsupported cache backend: {config.backend}"
        raise ValueError(msg)

    storage = AsyncSqliteStorage(database_path=database_path, default_ttl=config.ttl_seconds)
    policy = FilterPolicy(response_filters=[_SuccessfulResponseFilter()])
    return storage, policy
