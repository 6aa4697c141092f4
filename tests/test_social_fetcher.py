from datetime import datetime, timezone

import requests

from fakes import FakeResponse, FakeSession
from social_fetcher import SocialFetcher

NOW = datetime(2024, 5, 8, 12, 0, 0, tzinfo=timezone.utc)


def _fetcher(session, token="bearer", handle="thenewsminute"):
    return SocialFetcher(token, handle, session=session, base_url="https://x.test/2", clock=lambda: NOW)


def test_skips_without_token():
    session = FakeSession()
    assert _fetcher(session, token=None).fetch("flood") == []
    assert session.calls == []


def test_skips_without_handle():
    session = FakeSession()
    assert _fetcher(session, handle=None).fetch("flood") == []
    assert session.calls == []


def test_maps_posts_to_stories():
    payload = {
        "data": [{"id": "111", "text": "Flood waters rise"}, {"id": "222", "text": "Relief camps open"}],
        "meta": {"result_count": 2},
    }
    session = FakeSession(get=[FakeResponse(payload=payload)])

    stories = _fetcher(session).fetch("flood relief")

    assert [s.headline for s in stories] == ["Flood waters rise", "Relief camps open"]
    assert stories[0].link == "https://x.com/i/status/111"
    assert stories[0].date_posted == "2024-05-01T12:00:00.000Z"

    method, url, kwargs = session.calls[0]
    assert url == "https://x.test/2/tweets/search/recent"
    assert kwargs["params"]["query"] == "from:thenewsminute (flood relief) -is:retweet -is:reply"
    assert kwargs["params"]["max_results"] == 20
    assert kwargs["params"]["start_time"] == "2024-05-01T12:00:00.000Z"
    assert kwargs["headers"]["Authorization"] == "Bearer bearer"


def test_zero_results():
    session = FakeSession(get=[FakeResponse(payload={"meta": {"result_count": 0}})])
    assert _fetcher(session).fetch("flood") == []


def test_http_error_is_contained():
    session = FakeSession(get=[FakeResponse(status_code=503, payload={})])
    assert _fetcher(session).fetch("flood") == []


def test_transport_error_is_contained():
    session = FakeSession(get=[requests.Timeout("slow")])
    assert _fetcher(session).fetch("flood") == []


def test_fetch_recent_has_no_keyword_clause():
    session = FakeSession(get=[FakeResponse(payload={"data": [{"id": "9", "text": "Update"}]})])
    stories = _fetcher(session).fetch_recent()

    assert len(stories) == 1
    assert session.calls[0][2]["params"]["query"] == "from:thenewsminute -is:retweet -is:reply"


def test_non_object_body_is_contained():
    session = FakeSession(get=[FakeResponse(payload=["unexpected"])])
    assert _fetcher(session).fetch("flood") == []


def test_bad_post_does_not_drop_the_batch():
    payload = {
        "data": [
            {"id": "1", "text": "ok"},
            {"id": "2", "text": None},
            {"id": "3", "text": 42},
            {"text": "no id"},
        ]
    }
    session = FakeSession(get=[FakeResponse(payload=payload)])

    stories = _fetcher(session).fetch("flood")

    assert [(s.headline, s.link) for s in stories] == [
        ("ok", "https://x.com/i/status/1"),
        ("", "https://x.com/i/status/2"),
    ]
