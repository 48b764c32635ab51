import pytest
import requests

from player_demand.core.config import Settings
from player_demand.vendors import dataforseo


class DummyResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload or {}

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"http error {self.status_code}")

    def json(self):
        return self._payload


class DummySession:
    def __init__(self, response=None):
        self.calls = []
        self.auth = None
        self.response = response

    def post(self, url, json=None, timeout=None):
        self.calls.append((url, json, timeout))
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


def _payload(results):
    return {
        "status_code": 20000,
        "status_message": "Ok.",
        "tasks": [{"status_code": 20000, "status_message": "Ok.", "result": results}],
    }


def test_fetch_posts_task_and_parses_records():
    session = DummySession(
        DummyResponse(
            payload=_payload(
                [
                    {
                        "keyword": "cole palmer jersey",
                        "search_volume": 1200,
                        "competition": "HIGH",
                        "competition_level": "HIGH",
                        "cpc": "0.85",
                        "monthly_searches": [
                            {"year": 2025, "month": 7, "search_volume": 1300},
                            {"year": 2025, "month": 6, "search_volume": 1000},
                        ],
                    },
                    {"keyword": "", "search_volume": 5},
                ]
            )
        )
    )
    client = dataforseo.DataForSEOClient("user", "pass", use_sandbox=True, timeout=7, session=session)

    records = client.fetch(["cole palmer jersey"], 2826, "en", "2025-06-01", "2025-07-31")

    url, body, timeout = session.calls[0]
    assert url == "https://sandbox.dataforseo.com/v3/keywords_data/google_ads/search_volume/live"
    assert body == [
        {
            "keywords": ["cole palmer jersey"],
            "location_code": 2826,
            "language_code": "en",
            "date_from": "2025-06-01",
            "date_to": "2025-07-31",
        }
    ]
    assert timeout == 7
    assert session.auth == ("user", "pass")
    assert client.is_live is False
    assert client.api_mode == "Sandbox"

    assert len(records) == 1
    record = records[0]
    assert record.search_volume == 1200
    assert record.cpc == 0.85
    assert [m.volume for m in record.monthly_searches] == [1300, 1000]


def test_fetch_empty_keywords_makes_no_request():
    session = DummySession()
    client = dataforseo.DataForSEOClient("u", "p", session=session)

    assert client.fetch([], 2840) == []
    assert session.calls == []


def test_fetch_rejects_oversized_batch_without_request():
    session = DummySession()
    client = dataforseo.DataForSEOClient("u", "p", session=session)

    with pytest.raises(dataforseo.ProviderError):
        client.fetch([f"k{i}" for i in range(1001)], 2840)
    assert session.calls == []


def test_fetch_wraps_transport_errors():
    session = DummySession(requests.ConnectionError("boom"))
    client = dataforseo.DataForSEOClient("u", "p", session=session)

    with pytest.raises(dataforseo.ProviderError):
        client.fetch(["football"], 2840)


def test_fetch_raises_on_http_error():
    session = DummySession(DummyResponse(status_code=401))
    client = dataforseo.DataForSEOClient("u", "p", session=session)

    with pytest.raises(dataforseo.ProviderError):
        client.fetch(["football"], 2840)


def test_parse_rejects_failed_status():
    with pytest.raises(dataforseo.ProviderError):
        dataforseo.parse_search_volume_payload({"status_code": 40100, "status_message": "not authorized"})

    with pytest.raises(dataforseo.ProviderError):
        dataforseo.parse_search_volume_payload(
            {"status_code": 20000, "tasks": [{"status_code": 40501, "status_message": "invalid field"}]}
        )


def test_parse_empty_task_result():
    assert dataforseo.parse_search_volume_payload(_payload(None)) == []
    assert dataforseo.parse_search_volume_payload({"status_code": 20000, "tasks": []}) == []


def test_build_client_uses_live_endpoint_by_default():
    client = dataforseo.build_client(Settings(dataforseo_username="u", dataforseo_password="p"), session=DummySession())

    assert client.is_live is True
    assert client.base_url == dataforseo.LIVE_BASE_URL


def test_test_connection_queries_single_keyword():
    session = DummySession(DummyResponse(payload=_payload([{"keyword": "football", "search_volume": 100}])))
    client = dataforseo.DataForSEOClient("u", "p", session=session)

    records = client.test_connection()

    assert records[0].keyword == "football"
    assert session.calls[0][1][0]["keywords"] == ["football"]
    assert session.calls[0][1][0]["location_code"] == 2840


def test_labs_fetch_returns_exact_match_under_seed_keyword():
    session = DummySession(
        DummyResponse(
            payload=_payload(
                [
                    {"keyword": "cole palmer shirts", "search_volume": 90},
                    {"keyword": "Cole Palmer Shirt", "search_volume": 880, "cpc": 0.4},
                ]
            )
        )
    )
    client = dataforseo.DataForSEOLabsClient("u", "p", use_sandbox=True, session=session)

    records = client.fetch(["cole palmer shirt"], 2826, "en", "2025-01-01", None)

    url, body, _ = session.calls[0]
    assert url == "https://sandbox.dataforseo.com/v3/dataforseo_labs/google/keyword_ideas/live"
    assert body == [
        {"keyword": "cole palmer shirt", "location_code": 2826, "language_code": "en", "limit": 1, "date_from": "2025-01-01"}
    ]
    assert len(records) == 1
    assert records[0].keyword == "cole palmer shirt"
    assert records[0].search_volume == 880


def test_labs_fetch_falls_back_to_first_idea():
    session = DummySession(DummyResponse(payload=_payload([{"keyword": "palmer kit", "search_volume": 30}])))
    client = dataforseo.DataForSEOLabsClient("u", "p", session=session)

    records = client.fetch(["cole palmer shirt"], 2840)

    assert records[0].keyword == "cole palmer shirt"
    assert records[0].search_volume == 30


def test_labs_fetch_no_ideas():
    session = DummySession(DummyResponse(payload=_payload([])))
    client = dataforseo.DataForSEOLabsClient("u", "p", session=session)

    assert client.fetch(["nobody at all"], 2840) == []


def test_labs_fetch_rejects_more_than_one_keyword():
    session = DummySession()
    client = dataforseo.DataForSEOLabsClient("u", "p", session=session)

    with pytest.raises(dataforseo.ProviderError):
        client.fetch(["a", "b"], 2840)
    assert session.calls == []


def test_labs_request_cost():
    assert dataforseo.labs_request_cost() == pytest.approx(0.0101)
    assert dataforseo.labs_request_cost(100) == pytest.approx(0.02)


def test_build_labs_client_uses_settings():
    client = dataforseo.build_labs_client(Settings(use_sandbox=True), session=DummySession())

    assert isinstance(client, dataforseo.DataForSEOLabsClient)
    assert client.is_live is False
