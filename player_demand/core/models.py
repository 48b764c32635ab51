"""Core data models shared by the keyword demand pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True, slots=True)
class Market:
    """A geography and the numeric location code DataForSEO understands."""

    name: str
    location_code: int


@dataclass(slots=True)
class MonthlySearch:
    year: int
    month: int
    volume: int

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "MonthlySearch":
        volume = raw.get("volume", raw.get("search_volume"))
        return cls(
            year=int(raw.get("year") or 0),
            month=int(raw.get("month") or 0),
            volume=int(volume or 0),
        )


@dataclass(slots=True)
class KeywordRecord:
    """One provider result for one keyword in one market.

    `monthly_searches` is ordered most-recent-first, as the provider returns it.
    """

    keyword: str
    search_volume: Optional[int] = None
    competition: Optional[Any] = None
    cpc: Optional[float] = None
    monthly_searches: List[MonthlySearch] = field(default_factory=list)
    competition_level: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "KeywordRecord":
        monthly = raw.get("monthly_searches") or []
        return cls(
            keyword=str(raw.get("keyword") or ""),
            search_volume=raw.get("search_volume"),
            competition=raw.get("competition"),
            cpc=raw.get("cpc"),
            monthly_searches=[MonthlySearch.from_dict(item) for item in monthly if isinstance(item, dict)],
            competition_level=raw.get("competition_level"),
        )


@dataclass(slots=True)
class Batch:
    """A bounded group of keywords submitted in one provider call for one market."""

    market: str
    location_code: int
    keywords: List[str]
    batch_index: int


@dataclass(slots=True)
class BatchFailure:
    batch: Batch
    error: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "market": self.batch.market,
            "locationCode": self.batch.location_code,
            "batchIndex": self.batch.batch_index,
            "keywordCount": len(self.batch.keywords),
            "error": self.error,
        }


@dataclass(slots=True)
class FetchResult:
    results: Dict[str, List[KeywordRecord]] = field(default_factory=dict)
    failures: List[BatchFailure] = field(default_factory=list)
    requests_made: int = 0

    def raw_results(self) -> Dict[str, List[Dict[str, Any]]]:
        return {market: [record.to_dict() for record in records] for market, records in self.results.items()}


@dataclass(slots=True)
class MarketMetric:
    """Per entity, per market totals. `volume == entity_volume + merch_volume`."""

    market: str
    volume: int = 0
    entity_volume: int = 0
    merch_volume: int = 0
    trend_percent: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class EntityProfile:
    id: int
    name: str
    total_volume: int = 0
    entity_volume: int = 0
    merch_volume: int = 0
    trend_percent: float = 0.0
    opportunity_score: int = 0
    market_count: int = 0
    primary_market: Optional[str] = None
    markets: List[MarketMetric] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "total_volume": self.total_volume,
            "entity_volume": self.entity_volume,
            "merch_volume": self.merch_volume,
            "trend_percent": self.trend_percent,
            "opportunity_score": self.opportunity_score,
            "market_count": self.market_count,
            "primary_market": self.primary_market,
            "markets": [metric.to_dict() for metric in self.markets],
            "metadata": dict(self.metadata),
        }


@dataclass(slots=True)
class RunMetadata:
    """Run parameters; `terms` and `primary_keywords` are enough to recompute the stored profiles."""

    entities: List[str] = field(default_factory=list)
    markets: List[str] = field(default_factory=list)
    keyword_count: int = 0
    actual_cost: float = 0.0
    date_range: Optional[Dict[str, str]] = None
    api_mode: str = "Unknown"
    terms: List[str] = field(default_factory=list)
    primary_keywords: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entities": list(self.entities),
            "markets": list(self.markets),
            "terms": list(self.terms),
            "primaryKeywords": dict(self.primary_keywords),
            "keywordCount": self.keyword_count,
            "actualCost": self.actual_cost,
            "dateRange": self.date_range,
            "apiMode": self.api_mode,
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "RunMetadata":
        primary = raw.get("primaryKeywords") or {}
        if not isinstance(primary, dict):
            raise ValueError("primaryKeywords must be an object")
        return cls(
            entities=list(raw.get("entities") or []),
            markets=list(raw.get("markets") or []),
            keyword_count=int(raw.get("keywordCount") or 0),
            actual_cost=float(raw.get("actualCost") or 0.0),
            date_range=raw.get("dateRange"),
            api_mode=raw.get("apiMode") or "Unknown",
            terms=list(raw.get("terms") or []),
            primary_keywords={str(entity): str(keyword) for entity, keyword in primary.items()},
        )


@dataclass(slots=True)
class Run:
    """One batch + fetch + aggregate execution, written to the store exactly once."""

    test_type: str
    source: str
    timestamp: str
    metadata: RunMetadata
    raw_results: Dict[str, Any] = field(default_factory=dict)
    processed_results: Dict[str, Any] = field(default_factory=dict)
    failures: List[Dict[str, Any]] = field(default_factory=list)
    id: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "testType": self.test_type,
            "source": self.source,
            "metadata": self.metadata.to_dict(),
            "rawResults": self.raw_results,
            "processedResults": self.processed_results,
            "failures": self.failures,
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Run":
        for key in ("id", "timestamp"):
            if not isinstance(raw.get(key), str):
                raise ValueError(f"{key} must be a string")
        for key, kind in (("metadata", dict), ("rawResults", dict), ("processedResults", dict), ("failures", list)):
            if raw.get(key) is not None and not isinstance(raw[key], kind):
                raise ValueError(f"{key} has the wrong shape")
        return cls(
            id=raw["id"],
            timestamp=raw["timestamp"],
            test_type=raw.get("testType") or "",
            source=raw.get("source") or "",
            metadata=RunMetadata.from_dict(raw.get("metadata") or {}),
            raw_results=raw.get("rawResults") or {},
            processed_results=raw.get("processedResults") or {},
            failures=list(raw.get("failures") or []),
        )
