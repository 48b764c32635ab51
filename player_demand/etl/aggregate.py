"""Turn raw per-market keyword records into per-entity, per-market demand profiles."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from player_demand.core.models import EntityProfile, KeywordRecord, MarketMetric, MonthlySearch
from player_demand.etl.resolvers import ENTITY, MERCH, normalize_keyword

logger = logging.getLogger(__name__)

Resolver = Callable[[str], Optional[str]]
Classifier = Callable[[str], str]


def trend_contribution(monthly_searches: Sequence[MonthlySearch]) -> float:
    """Month-over-month change in percent from a most-recent-first series."""
    if len(monthly_searches) < 2:
        return 0.0
    current = monthly_searches[0].volume
    previous = monthly_searches[1].volume
    if previous <= 0:
        return 0.0
    return (current - previous) / previous * 100


class VolumeAggregator:
    """Accumulate keyword volumes per entity and market.

    `primary_keywords` maps an entity to the keyword whose monthly series
    drives its trend; entities without an entry use their own name. After each
    `aggregate()` call `processed_count` and `dropped_count` add up to the
    number of records seen.
    """

    def __init__(
        self,
        *,
        significance_threshold: int = 0,
        primary_keywords: Optional[Mapping[str, str]] = None,
        metadata_lookup: Optional[Callable[[str], Dict[str, Any]]] = None,
    ) -> None:
        self.significance_threshold = significance_threshold
        self._primary = {entity: normalize_keyword(keyword) for entity, keyword in (primary_keywords or {}).items()}
        self._metadata_lookup = metadata_lookup
        self.processed_count = 0
        self.dropped_count = 0

    def is_primary(self, entity: str, keyword: str) -> bool:
        target = self._primary.get(entity, normalize_keyword(entity))
        return normalize_keyword(keyword) == target

    def aggregate(
        self,
        records: Mapping[str, Sequence[KeywordRecord]],
        resolver: Resolver,
        classifier: Classifier,
    ) -> Dict[str, EntityProfile]:
        self.processed_count = 0
        self.dropped_count = 0
        per_entity: Dict[str, Dict[str, MarketMetric]] = {}

        for market, record_list in records.items():
            for record in record_list:
                entity = resolver(record.keyword)
                if not entity:
                    self.dropped_count += 1
                    logger.debug("Dropping unresolved keyword %r in %s", record.keyword, market)
                    continue

                bucket = classifier(record.keyword)
                if bucket not in (ENTITY, MERCH):
                    raise ValueError(f"classifier returned {bucket!r} for {record.keyword!r}")

                markets = per_entity.setdefault(entity, {})
                metric = markets.get(market)
                if metric is None:
                    metric = markets[market] = MarketMetric(market=market)

                volume = max(int(record.search_volume or 0), 0)
                metric.volume += volume
                if bucket == MERCH:
                    metric.merch_volume += volume
                else:
                    metric.entity_volume += volume

                if self.is_primary(entity, record.keyword):
                    metric.trend_percent += trend_contribution(record.monthly_searches)
                self.processed_count += 1

        profiles: Dict[str, EntityProfile] = {}
        for index, (entity, markets) in enumerate(per_entity.items(), start=1):
            profiles[entity] = self._build_profile(index, entity, list(markets.values()))

        logger.info(
            "Aggregated %d records into %d profiles (%d dropped)",
            self.processed_count,
            len(profiles),
            self.dropped_count,
        )
        return profiles

    def _build_profile(self, profile_id: int, entity: str, metrics: List[MarketMetric]) -> EntityProfile:
        primary_market: Optional[str] = None
        best = -1
        for metric in metrics:
            if metric.volume > best:
                best = metric.volume
                primary_market = metric.market

        trend = sum(metric.trend_percent for metric in metrics) / len(metrics) if metrics else 0.0
        metadata = self._metadata_lookup(entity) if self._metadata_lookup else {}

        return EntityProfile(
            id=profile_id,
            name=entity,
            total_volume=sum(metric.volume for metric in metrics),
            entity_volume=sum(metric.entity_volume for metric in metrics),
            merch_volume=sum(metric.merch_volume for metric in metrics),
            trend_percent=trend,
            market_count=sum(1 for metric in metrics if metric.volume > self.significance_threshold),
            primary_market=primary_market,
            markets=metrics,
            metadata=metadata,
        )


def rank_profiles(profiles: Mapping[str, EntityProfile]) -> List[EntityProfile]:
    """Profiles ordered by total volume, highest first; ties keep aggregation order."""
    return sorted(profiles.values(), key=lambda profile: profile.total_volume, reverse=True)
