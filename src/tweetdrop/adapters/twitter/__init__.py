"""Public interface for the Twitter adapter."""

from __future__ import annotations

from .client import TwitterAPIError, TwitterEngagementFetcher
from .schema import TweetPayload, TweetsResponse, UserPayload, UsersResponse
from .translator import parse_engagement_record, parse_tweets_page

__all__ = [
    "TweetPayload",
    "TweetsResponse",
    "TwitterAPIError",
    "TwitterEngagementFetcher",
    "UserPayload",
    "UsersResponse",
    "parse_engagement_record",
    "parse_tweets_page",
]
