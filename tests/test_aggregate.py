import pytest

from player_demand.core.models import KeywordRecord, MonthlySearch
from player_demand.etl import aggregate
from player_demand.etl.resolvers import ExactMapResolver, TermClassifier


def _record(keyword, volume, monthly=()):
    return KeywordRecord(
        keyword=keyword,
        search_volume=volume,
        monthly_searches=[MonthlySearch(year, month, vol) for year, month, vol in monthly],
    )


@pytest.fixture
def resolver():
    return ExactMapResolver.from_generated(["A", "B"], ["x", "jersey"])


@pytest.fixture
def classifier():
    return TermClassifier(["jersey"])


def test_trend_contribution_from_primary_keyword(resolver, classifier):
    aggregator = aggregate.VolumeAggregator(primary_keywords={"A": "A x"})
    records = {"M1": [_record("A x", 100, [(2025, 7, 120), (2025, 6, 100)])]}

    profiles = aggregator.aggregate(records, resolver, classifier)

    assert profiles["A"].markets[0].trend_percent == pytest.approx(20.0)
    assert profiles["A"].trend_percent == pytest.approx(20.0)


@pytest.mark.parametrize(
    "monthly",
    [
        [(2025, 7, 120)],
        [(2025, 7, 120), (2025, 6, 0)],
        [],
    ],
)
def test_trend_contribution_is_zero_without_usable_history(monthly):
    assert aggregate.trend_contribution([MonthlySearch(*m) for m in monthly]) == 0.0


def test_non_primary_keywords_do_not_move_trend(resolver, classifier):
    aggregator = aggregate.VolumeAggregator(primary_keywords={"A": "A x"})
    records = {"M1": [_record("A jersey", 50, [(2025, 7, 500), (2025, 6, 100)])]}

    profiles = aggregator.aggregate(records, resolver, classifier)

    assert profiles["A"].trend_percent == 0.0


def test_profile_invariants_and_splits(resolver, classifier):
    records = {
        "UK": [_record("A x", 300), _record("A jersey", 200), _record("B x", 10)],
        "US": [_record("A x", 400), _record("A jersey", None), _record("B jersey", 0)],
        "Spain": [_record("A jersey", 100)],
    }

    profiles = aggregate.VolumeAggregator().aggregate(records, resolver, classifier)

    a = profiles["A"]
    assert a.total_volume == 1000
    assert a.entity_volume == 700
    assert a.merch_volume == 300
    assert a.total_volume == sum(m.volume for m in a.markets)
    for metric in a.markets:
        assert metric.volume == metric.entity_volume + metric.merch_volume
    assert a.market_count == 3
    assert a.primary_market == "UK"
    assert a.market_count <= len(a.markets)

    b = profiles["B"]
    assert b.total_volume == 10
    assert b.market_count == 1
    assert b.primary_market == "UK"


def test_primary_market_tie_keeps_first(resolver, classifier):
    records = {"UK": [_record("A x", 50)], "US": [_record("A x", 50)]}

    profiles = aggregate.VolumeAggregator().aggregate(records, resolver, classifier)

    assert profiles["A"].primary_market == "UK"


def test_significance_threshold_limits_market_count(resolver, classifier):
    records = {"UK": [_record("A x", 50)], "US": [_record("A x", 500)]}

    profiles = aggregate.VolumeAggregator(significance_threshold=100).aggregate(records, resolver, classifier)

    assert profiles["A"].market_count == 1
    assert len(profiles["A"].markets) == 2


def test_unresolved_keywords_are_dropped_and_counted(resolver, classifier):
    aggregator = aggregate.VolumeAggregator()
    records = {"UK": [_record("A x", 5), _record("Zed x", 1000), _record("random words", 3)]}

    profiles = aggregator.aggregate(records, resolver, classifier)

    assert list(profiles) == ["A"]
    assert aggregator.processed_count == 1
    assert aggregator.dropped_count == 2


def test_metadata_lookup_is_copied_onto_profile(resolver, classifier):
    aggregator = aggregate.VolumeAggregator(metadata_lookup=lambda name: {"position": "FW"} if name == "A" else {})

    profiles = aggregator.aggregate({"UK": [_record("A x", 1), _record("B x", 1)]}, resolver, classifier)

    assert profiles["A"].metadata == {"position": "FW"}
    assert profiles["B"].metadata == {}


def test_invalid_classifier_bucket_raises(resolver):
    with pytest.raises(ValueError):
        aggregate.VolumeAggregator().aggregate({"UK": [_record("A x", 1)]}, resolver, lambda keyword: "other")


def test_rank_profiles_orders_by_total_volume(resolver, classifier):
    records = {"UK": [_record("A x", 5), _record("B x", 50)]}

    ranked = aggregate.rank_profiles(aggregate.VolumeAggregator().aggregate(records, resolver, classifier))

    assert [p.name for p in ranked] == ["B", "A"]
