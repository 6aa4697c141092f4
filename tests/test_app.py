import json

import pytest

from aggregator import Aggregator
from app import create_app
from fakes import FakeGenerator
from pipeline import TrendService
from social_fetcher import SocialFetcher
from source_catalog import SourceCatalog
from source_fetcher import SourceFetcher


class ExplodingAggregator:
    def aggregate(self, keywords):
        raise RuntimeError("secret upstream detail")


def _service(draft_generator=None, counter_measure_generator=None, aggregator_factory=None):
    return TrendService(
        draft_generator=draft_generator or FakeGenerator(reply=json.dumps({"interestingTweetsOrStories": []})),
        counter_measure_generator=counter_measure_generator or FakeGenerator(reply="Formal response."),
        catalog_factory=lambda: SourceCatalog(False, False),
        aggregator_factory=aggregator_factory
        or (lambda catalog: Aggregator(catalog, SourceFetcher(None), SocialFetcher(None, None))),
        notify=lambda draft: "sent",
    )


@pytest.fixture
def service():
    return _service()


@pytest.fixture
def client(service):
    app = create_app(service)
    app.config["TESTING"] = True
    return app.test_client()


def test_list_starts_empty(client):
    resp = client.get("/api/trends")
    assert resp.status_code == 200
    assert resp.get_json() == []


def test_posted_trend_is_listed_first(client):
    client.post("/api/trends", json={"content": "older"})
    created = client.post("/api/trends", json={"content": "X"}).get_json()

    trends = client.get("/api/trends").get_json()

    assert trends[0]["content"] == "X"
    assert trends[0]["id"] == created["id"]
    assert set(created) == {"id", "date", "content", "timestamp"}


@pytest.mark.parametrize("body", [{}, {"keywords": ""}, {"keywords": "   \t"}, {"keywords": 42}])
def test_search_requires_keywords(client, service, body):
    resp = client.post("/api/search-trends", json=body)
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Keywords are required"}
    assert service.list_trends() == []


def test_search_with_no_sources_returns_no_results_trend(client, service):
    resp = client.post("/api/search-trends", json={"keywords": "flood relief"})

    assert resp.status_code == 200
    payload = resp.get_json()
    assert payload["keywords"] == "flood relief"
    assert payload["content"].startswith("Search Results for \"flood relief\" - ")
    assert service.list_trends()[0].id == payload["id"]


def test_search_failure_is_generic_500():
    app = create_app(_service(aggregator_factory=lambda catalog: ExplodingAggregator()))
    resp = app.test_client().post("/api/search-trends", json={"keywords": "flood"})

    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Failed to search trends"}
    assert "secret" not in resp.get_data(as_text=True)


@pytest.mark.parametrize("body", [{}, {"searchResult": ""}, {"searchResult": "  "}])
def test_counter_measure_requires_search_result(client, service, body):
    resp = client.post("/api/generate-counter-measure", json=body)
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Search result is required"}
    assert len(service.counter_measures) == 0


def test_counter_measure_round_trip(client):
    created = client.post(
        "/api/generate-counter-measure", json={"searchResult": "Rumour spreads", "keywords": "flood"}
    ).get_json()

    assert created["counterMeasure"] == "Formal response."
    assert created["searchResult"] == "Rumour spreads"
    assert created["keywords"] == "flood"

    fetched = client.get(f"/api/counter-measure/{created['id']}")
    assert fetched.status_code == 200
    assert fetched.get_json() == created


def test_counter_measure_failure_is_generic_500():
    app = create_app(_service(counter_measure_generator=FakeGenerator(reply="")))
    resp = app.test_client().post("/api/generate-counter-measure", json={"searchResult": "Rumour"})

    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Failed to generate counter-measure"}


def test_unknown_counter_measure_is_404(client):
    resp = client.get("/api/counter-measure/does-not-exist")
    assert resp.status_code == 404
    assert resp.get_json() == {"error": "Counter-measure not found"}


def test_non_json_body_is_treated_as_missing(client):
    resp = client.post("/api/search-trends", data="keywords=flood", content_type="text/plain")
    assert resp.status_code == 400
