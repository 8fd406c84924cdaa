"""HTTP client collecting replies, quotes and retweeters from Twitter API v2."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final

import httpx
from pydantic import ValidationError

from tweetdrop.adapters.http_resilience import ResilientClient, default_client_factory
from tweetdrop.config.twitter import TWITTER_BASE_URL, TwitterConfig, get_twitter_config
from tweetdrop.domain.ports.fetching import EngagementFetcher, EngagementFetchResult

from .schema import ErrorResponse, TweetsResponse, UsersResponse
from .translator import parse_tweets_page

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

    from tweetdrop.config.http_resilience import ResilienceConfig
    from tweetdrop.domain.model import EngagementRecord

log = getLogger(__name__)

MAX_RESULTS: Final[int] = 100


class TwitterAPIError(RuntimeError):
    """Raised when the Twitter API rejects a request or returns garbage."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


@dataclass(slots=True)
class TwitterEngagementFetcher:
    """Collect engagement records for one conversation.

    Replies come first (only from authors who retweeted when
    ``require_retweet`` is set), followed by quote tweets, each in API order.
    """

    config: TwitterConfig = field(default_factory=get_twitter_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=default_client_factory
    )
    require_retweet: bool = True

    def __call__(self, *, page_limit: int | None = None) -> EngagementFetchResult:
        effective_limit = (page_limit if page_limit is not None else self.config.page_limit) or None
        return asyncio.run(self._fetch_async(page_limit=effective_limit))

    async def _fetch_async(self, *, page_limit: int | None) -> EngagementFetchResult:
        conversation_id = self.config.conversation_id
        async with self.client_factory(self.config.resilience) as client:
            log.info("~~~ Collect tweet responses ~~~")
            replies = await self._collect_tweets(
                client,
                path="tweets/search/recent",
                params={
                    "query": f"conversation_id:{conversation_id}",
                    "max_results": MAX_RESULTS,
                    "expansions": "author_id",
                },
                token_param="next_token",
                page_limit=page_limit,
            )
            log.info(f"Collected {len(replies)} tweet responses")

            kept_replies = replies
            if self.require_retweet:
                retweeters = await self._collect_retweeters(client)
                kept_replies = [reply for reply in replies if reply.author_id in retweeters]
                log.info(f"Filtered {len(kept_replies)} tweet responses with retweet")

            log.info("~~~ Collect tweet quotes ~~~")
            quotes = await self._collect_tweets(
                client,
                path=f"tweets/{conversation_id}/quote_tweets",
                params={"max_results": MAX_RESULTS, "expansions": "author_id"},
                token_param="pagination_token",
                page_limit=page_limit,
            )
            log.info(f"Collected {len(quotes)} tweet quotes")

        return EngagementFetchResult(
            records=[*kept_replies, *quotes],
            replies=len(replies),
            replies_without_retweet=len(replies) - len(kept_replies),
            quotes=len(quotes),
        )

    async def _collect_tweets(
        self,
        client: ResilientClient,
        *,
        path: str,
        params: dict[str, str | int],
        token_param: str,
        page_limit: int | None,
    ) -> list[EngagementRecord]:
        records: list[EngagementRecord] = []
        async for payload in self._paginate(
            client, path=path, params=params, token_param=token_param, page_limit=page_limit
        ):
            page = _validate(TweetsResponse, payload)
            records.extend(parse_tweets_page(page))
            log.info(f"Collected {len(records)}")
        return records

    async def _collect_retweeters(self, client: ResilientClient) -> set[str]:
        # The retweet filter needs the complete set, so this loop ignores page_limit.
        retweeters: set[str] = set()
        async for payload in self._paginate(
            client,
            path=f"tweets/{self.config.conversation_id}/retweeted_by",
            params={"max_results": MAX_RESULTS},
            token_param="pagination_token",
            page_limit=None,
        ):
            page = _validate(UsersResponse, payload)
            retweeters.update(user.id for user in page.data)
            log.info(f"Collected {len(retweeters)} retweets")
        return retweeters

    async def _paginate(
        self,
        client: ResilientClient,
        *,
        path: str,
        params: dict[str, str | int],
        token_param: str,
        page_limit: int | None,
    ) -> AsyncIterator[dict[str, object]]:
        """Yield raw pages until the API stops returning a token or the limit is hit."""

        token: str | None = None
        pages = 0
        while True:
            query = dict(params)
            if token is not None:
                query[token_param] = token
            payload = await self._perform_request(client, path=path, params=query)
            pages += 1
            yield payload

            meta = payload.get("meta")
            token = meta.get("next_token") if isinstance(meta, dict) else None
            if not token:
                break
            if page_limit is not None and pages >= page_limit:
                log.info(f"Reached page limit ({page_limit}) for {path}")
                break

    async def _perform_request(
        self,
        client: ResilientClient,
        *,
        path: str,
        params: dict[str, str | int],
    ) -> dict[str, object]:
        base_url = self.config.resilience.base_url or TWITTER_BASE_URL
        response = await client.get(f"{base_url}{path}", params=httpx.QueryParams(params))

        if response.is_error:
            error = _parse_error(response)
            log.error(f"Twitter API error {response.status_code}: {error.message}")
            raise TwitterAPIError(error.message, status=response.status_code)

        payload = response.json()
        if not isinstance(payload, dict):
            raise TwitterAPIError("Unexpected Twitter response payload")
        return payload


def _parse_error(response: httpx.Response) -> ErrorResponse:
    try:
        return ErrorResponse.model_validate(response.json())
    except (ValueError, ValidationError):
        return ErrorResponse(status=response.status_code, detail=response.text or None)


def _validate[TModel: (TweetsResponse, UsersResponse)](
    model: type[TModel], payload: dict[str, object]
) -> TModel:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise TwitterAPIError(f"Malformed Twitter payload: {exc}") from exc


if TYPE_CHECKING:
    _fetcher_check: EngagementFetcher = TwitterEngagementFetcher()
