"""Translate Twitter payloads into engagement records."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from tweetdrop.domain.model import EngagementRecord

from .schema import TweetPayload, TweetsResponse

if TYPE_CHECKING:
    from collections.abc import Mapping

log = getLogger(__name__)


def parse_engagement_record(
    payload: TweetPayload | Mapping[str, object],
    users_by_id: Mapping[str, str],
) -> EngagementRecord | None:
    """Build a record from one tweet, or ``None`` if it has no author.

    When the author is missing from ``includes.users`` the author id stands in
    for the handle, so deduplication still sees one identity per author.
    """

    tweet = payload if isinstance(payload, TweetPayload) else TweetPayload.model_validate(payload)
    if tweet.author_id is None:
        log.debug("Skipping tweet %s without author_id", tweet.id)
        return None
    handle = users_by_id.get(tweet.author_id)
    if handle is None:
        log.debug("No username expanded for author %s; using the id", tweet.author_id)
        handle = tweet.author_id
    return EngagementRecord(author_id=tweet.author_id, author_handle=handle, text=tweet.text)


def parse_tweets_page(page: TweetsResponse) -> list[EngagementRecord]:
    users = page.users_by_id()
    records: list[EngagementRecord] = []
    for tweet in page.data:
        record = parse_engagement_record(tweet, users)
        if record is not None:
            records.append(record)
    return records
