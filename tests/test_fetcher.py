import pytest

from player_demand.core.models import Batch, KeywordRecord
from player_demand.etl.fetcher import RateLimitedFetcher


class DummyProvider:
    def __init__(self, fail_on=()):
        self.calls = []
        self.fail_on = set(fail_on)

    def fetch(self, keywords, location_code, language_code="en", date_from=None, date_to=None):
        self.calls.append((list(keywords), location_code, language_code, date_from, date_to))
        if len(self.calls) in self.fail_on:
            raise RuntimeError("provider unavailable")
        return [KeywordRecord(keyword=k, search_volume=10) for k in keywords]


def _batches():
    return [
        Batch("M1", 1, ["a", "b"], 1),
        Batch("M1", 1, ["c"], 2),
        Batch("M2", 2, ["a", "b"], 1),
    ]


def test_fetch_all_records_failure_and_continues():
    provider = DummyProvider(fail_on={2})
    sleeps = []
    fetcher = RateLimitedFetcher(provider, 2000, sleep=sleeps.append)

    result = fetcher.fetch_all(_batches())

    assert len(provider.calls) == 3
    assert [r.keyword for r in result.results["M1"]] == ["a", "b"]
    assert [r.keyword for r in result.results["M2"]] == ["a", "b"]
    assert len(result.failures) == 1
    assert result.failures[0].batch.batch_index == 2
    assert "provider unavailable" in result.failures[0].error
    assert result.requests_made == 3
    assert sleeps == [2.0, 2.0]


def test_fetch_all_zero_delay_never_sleeps():
    sleeps = []
    RateLimitedFetcher(DummyProvider(), 0, sleep=sleeps.append).fetch_all(_batches())
    assert sleeps == []


def test_fetch_all_keeps_market_with_only_failures():
    provider = DummyProvider(fail_on={1})
    result = RateLimitedFetcher(provider, 0).fetch_all([Batch("M1", 1, ["a"], 1)])

    assert result.results == {"M1": []}
    assert result.failures[0].to_dict()["market"] == "M1"


def test_fetch_all_passes_language_and_dates():
    provider = DummyProvider()
    fetcher = RateLimitedFetcher(provider, 0, language_code="de", date_from="2025-01-01", date_to="2025-06-30")

    fetcher.fetch_all([Batch("Germany", 2276, ["x"], 1)])

    assert provider.calls == [(["x"], 2276, "de", "2025-01-01", "2025-06-30")]


def test_fetch_all_empty_plan():
    result = RateLimitedFetcher(DummyProvider(), 100).fetch_all([])
    assert result.results == {}
    assert result.requests_made == 0


def test_negative_delay_rejected():
    with pytest.raises(ValueError):
        RateLimitedFetcher(DummyProvider(), -1)
