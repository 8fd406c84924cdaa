"""Pydantic models describing the Twitter API v2 payloads we consume."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class TwitterBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class UserPayload(TwitterBaseModel):
    id: str
    username: str
    name: str | None = None


class TweetPayload(TwitterBaseModel):
    id: str
    text: str
    author_id: str | None = None


class Includes(TwitterBaseModel):
    users: list[UserPayload] = Field(default_factory=list[UserPayload])


class PageMeta(TwitterBaseModel):
    result_count: int = 0
    next_token: str | None = None


class TweetsResponse(TwitterBaseModel):
    """Search and quote-tweet pages. ``data`` is absent when a page is empty."""

    data: list[TweetPayload] = Field(default_factory=list[TweetPayload])
    includes: Includes = Field(default_factory=Includes)
    meta: PageMeta = Field(default_factory=PageMeta)

    def users_by_id(self) -> dict[str, str]:
        return {user.id: user.username for user in self.includes.users}


class UsersResponse(TwitterBaseModel):
    """``retweeted_by`` pages."""

    data: list[UserPayload] = Field(default_factory=list[UserPayload])
    meta: PageMeta = Field(default_factory=PageMeta)


class ErrorResponse(TwitterBaseModel):
    title: str | None = None
    detail: str | None = None
    status: int | None = None
    type: str | None = None

    @property
    def message(self) -> str:
        return self.detail or self.title or "Unknown Twitter API error"
