from __future__ import annotations

from tweetdrop.adapters.twitter import TweetsResponse, parse_engagement_record, parse_tweets_page


def test_parse_engagement_record_uses_expanded_username() -> None:
    record = parse_engagement_record(
        {"id": "1", "text": "alice.eth", "author_id": "42"}, {"42": "alice"}
    )

    assert record is not None
    assert record.author_id == "42"
    assert record.author_handle == "alice"
    assert record.text == "alice.eth"


def test_parse_engagement_record_falls_back_to_author_id() -> None:
    record = parse_engagement_record({"id": "1", "text": "hi", "author_id": "42"}, {})

    assert record is not None
    assert record.author_handle == "42"


def test_parse_engagement_record_skips_tweets_without_author() -> None:
    assert parse_engagement_record({"id": "1", "text": "hi"}, {}) is None


def test_parse_tweets_page_keeps_api_order() -> None:
    page = TweetsResponse.model_validate(
        {
            "data": [
                {"id": "2", "text": "second.eth", "author_id": "b"},
                {"id": "1", "text": "first.eth", "author_id": "a"},
                {"id": "3", "text": "orphan"},
            ],
            "includes": {
                "users": [
                    {"id": "a", "username": "alice", "name": "Alice"},
                    {"id": "b", "username": "bob"},
                ]
            },
            "meta": {"result_count": 3},
        }
    )

    records = parse_tweets_page(page)

    assert [record.author_handle for record in records] == ["bob", "alice"]


def test_empty_page_has_no_records() -> None:
    page = TweetsResponse.model_validate({"meta": {"result_count": 0}})

    assert parse_tweets_page(page) == []
