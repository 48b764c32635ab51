"""Keyword demand collection: batch, guard, fetch, aggregate, score and persist a run."""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence

from player_demand.core import catalog
from player_demand.core.config import ConfigError, InvalidConfiguration, Settings, get_settings
from player_demand.core.cost_guard import CostError, CostGuardConfig, authorize
from player_demand.core.models import BatchFailure, EntityProfile, KeywordRecord, Market, Run, RunMetadata
from player_demand.core.storage import PersistenceError, ResultStore
from player_demand.etl.aggregate import Classifier, VolumeAggregator, rank_profiles
from player_demand.etl.batcher import estimate_cost, generate_keywords, plan_batches, plan_summary
from player_demand.etl.fetcher import KeywordVolumeProvider, RateLimitedFetcher
from player_demand.etl.resolvers import DEFAULT_MERCH_INDICATORS, ExactMapResolver, PatternResolver, TermClassifier
from player_demand.etl.scoring import OpportunityScorer
from player_demand.vendors.dataforseo import LABS_KEYWORDS_PER_REQUEST, build_client, build_labs_client, labs_request_cost

logger = logging.getLogger(__name__)

SOURCE = "DataForSEO Google Ads"
LABS_SOURCE = "DataForSEO Labs"
MICRO_PLAYER_COUNT = 5
MICRO_MARKET_COUNT = 2

PLAYER_KEYWORD_TEMPLATES = (
    "{name}",
    "{name} soccer",
    "{name} football",
    "{name} goals",
    "{name} stats",
    "{name} highlights",
    "{name} transfer",
    "{name} jersey",
    "{name} shirt",
    "{name} merchandise",
    "{name} kit",
    "{name} boots",
    "buy {name} jersey",
    "{name} soccer jersey",
    "{name} football shirt",
)


@dataclass
class PipelineResult:
    run: Run
    profiles: List[EntityProfile]
    failures: List[BatchFailure]
    saved: bool
    estimated_cost: float
    storage_error: Optional[str] = None
    plan: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.run.id,
            "testType": self.run.test_type,
            "entities": self.run.metadata.entities,
            "markets": self.run.metadata.markets,
            "keywordCount": self.run.metadata.keyword_count,
            "estimatedCost": self.estimated_cost,
            "actualCost": self.run.metadata.actual_cost,
            "dateRange": self.run.metadata.date_range,
            "apiMode": self.run.metadata.api_mode,
            "plan": self.plan,
            "profiles": [profile.to_dict() for profile in self.profiles],
            "failures": [failure.to_dict() for failure in self.failures],
            "saved": self.saved,
            "storageError": self.storage_error,
        }


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _date_range(date_from: Optional[str], date_to: Optional[str]) -> Optional[Dict[str, str]]:
    if date_from and date_to:
        return {"from": date_from, "to": date_to}
    return None


def run_pipeline(
    *,
    entities: Sequence[str],
    terms: Sequence[str],
    markets: Sequence[Market],
    provider: KeywordVolumeProvider,
    store: ResultStore,
    settings: Optional[Settings] = None,
    test_type: str = "custom",
    source: str = SOURCE,
    classifier: Optional[Classifier] = None,
    max_per_batch: Optional[int] = None,
    cost_per_batch: Optional[float] = None,
    delay_ms: Optional[int] = None,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
    sleep: Optional[Callable[[float], None]] = None,
) -> PipelineResult:
    """Run the full collection for entities x terms x markets and persist it once.

    Batch failures are recorded on the run and never abort it. A failed save is
    reported on the result; the computed profiles are returned either way.
    `max_per_batch`, `cost_per_batch` and `delay_ms` default to the Google Ads
    values from settings.
    """
    settings = settings or get_settings()
    if not entities:
        raise InvalidConfiguration("at least one entity is required")
    if not terms:
        raise InvalidConfiguration("at least one term is required")
    if not markets:
        raise InvalidConfiguration("at least one market is required")

    max_per_batch = max_per_batch or settings.max_keywords_per_batch
    cost_per_batch = settings.cost_per_batch if cost_per_batch is None else cost_per_batch
    delay_ms = settings.request_delay_ms if delay_ms is None else delay_ms

    keywords = generate_keywords(entities, terms)
    batches = plan_batches(keywords, markets, max_per_batch)
    estimated = estimate_cost(len(batches), cost_per_batch)
    live = getattr(provider, "is_live", True)
    logger.info(
        "Planned %s run: %d entities x %d terms x %d markets = %d keywords in %d batches ($%.2f)",
        test_type,
        len(entities),
        len(terms),
        len(markets),
        len(keywords),
        len(batches),
        estimated,
    )

    authorize(estimated, CostGuardConfig.from_settings(settings), live=live)

    fetcher = RateLimitedFetcher(
        provider,
        delay_ms,
        language_code=settings.language_code,
        date_from=date_from,
        date_to=date_to,
        sleep=sleep,
    )
    fetched = fetcher.fetch_all(batches)

    primary_keywords = {entity: f"{entity} {terms[0]}" for entity in entities}
    aggregator = VolumeAggregator(
        significance_threshold=settings.significance_threshold,
        primary_keywords=primary_keywords,
        metadata_lookup=catalog.player_metadata,
    )
    profiles = aggregator.aggregate(
        fetched.results,
        ExactMapResolver.from_generated(entities, terms),
        classifier or TermClassifier(catalog.APPROVED_MERCH_TERMS),
    )
    OpportunityScorer(settings.volume_norm, settings.max_markets).apply(profiles.values())
    ranked = rank_profiles(profiles)

    run = Run(
        test_type=test_type,
        source=source,
        timestamp=_now_iso(),
        metadata=RunMetadata(
            entities=list(entities),
            markets=[market.name for market in markets],
            keyword_count=len(keywords),
            actual_cost=estimate_cost(fetched.requests_made, cost_per_batch),
            date_range=_date_range(date_from, date_to),
            api_mode="Live" if live else "Sandbox",
            terms=list(terms),
            primary_keywords=primary_keywords,
        ),
        raw_results=fetched.raw_results(),
        processed_results={
            "profiles": [profile.to_dict() for profile in ranked],
            "stats": {
                "requests": fetched.requests_made,
                "failedBatches": len(fetched.failures),
                "recordsProcessed": aggregator.processed_count,
                "recordsDropped": aggregator.dropped_count,
            },
        },
        failures=[failure.to_dict() for failure in fetched.failures],
    )

    result = PipelineResult(
        run=run,
        profiles=ranked,
        failures=fetched.failures,
        saved=False,
        estimated_cost=estimated,
        plan=plan_summary(entities, terms, markets, max_per_batch, cost_per_batch),
    )
    try:
        store.save(run)
        result.saved = True
    except PersistenceError as exc:
        logger.error("Run computed but not saved: %s", exc)
        result.storage_error = str(exc)

    logger.info(
        "Completed %s run: profiles=%d failed_batches=%d actual_cost=$%.2f saved=%s",
        test_type,
        len(ranked),
        len(fetched.failures),
        run.metadata.actual_cost,
        result.saved,
    )
    return result


def search_volume(
    keywords: Sequence[str],
    *,
    provider: KeywordVolumeProvider,
    location_code: int = 2840,
    language_code: str = "en",
) -> List[KeywordRecord]:
    cleaned = [keyword.strip() for keyword in keywords if keyword and keyword.strip()]
    if not cleaned:
        raise InvalidConfiguration("keywords must contain at least one non-empty keyword")
    return provider.fetch(cleaned, location_code, language_code)


def player_keywords(player_name: str) -> List[str]:
    return [template.format(name=player_name) for template in PLAYER_KEYWORD_TEMPLATES]


def player_data(
    player_name: str,
    *,
    provider: KeywordVolumeProvider,
    location_codes: Sequence[int] = (2840,),
    settings: Optional[Settings] = None,
    sleep: Optional[Callable[[float], None]] = None,
) -> Dict[str, Any]:
    """Fetch and aggregate one player's general and merchandise keywords across markets."""
    settings = settings or get_settings()
    player_name = (player_name or "").strip()
    if not player_name:
        raise InvalidConfiguration("player name is required")
    if not location_codes:
        raise InvalidConfiguration("at least one location code is required")

    keywords = player_keywords(player_name)
    batches = plan_batches(keywords, catalog.markets_by_code(location_codes), settings.max_keywords_per_batch)
    authorize(
        estimate_cost(len(batches), settings.cost_per_batch),
        CostGuardConfig.from_settings(settings),
        live=getattr(provider, "is_live", True),
    )

    fetched = RateLimitedFetcher(
        provider,
        settings.request_delay_ms,
        language_code=settings.language_code,
        sleep=sleep,
    ).fetch_all(batches)

    aggregator = VolumeAggregator(
        significance_threshold=settings.significance_threshold,
        metadata_lookup=catalog.player_metadata,
    )
    profiles = aggregator.aggregate(
        fetched.results,
        ExactMapResolver({keyword: player_name for keyword in keywords}),
        TermClassifier(DEFAULT_MERCH_INDICATORS),
    )
    OpportunityScorer(settings.volume_norm, settings.max_markets).apply(profiles.values())

    profile = profiles.get(player_name)
    return {
        "playerName": player_name,
        "profile": profile.to_dict() if profile else None,
        "failures": [failure.to_dict() for failure in fetched.failures],
    }


def test_connection(provider: KeywordVolumeProvider) -> List[KeywordRecord]:
    return provider.fetch(["football"], 2840)


def run_micro_test(
    *,
    provider: KeywordVolumeProvider,
    store: ResultStore,
    settings: Optional[Settings] = None,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
    sleep: Optional[Callable[[float], None]] = None,
) -> PipelineResult:
    return run_pipeline(
        entities=catalog.PLAYER_NAMES[:MICRO_PLAYER_COUNT],
        terms=catalog.APPROVED_MERCH_TERMS,
        markets=catalog.priority_markets()[:MICRO_MARKET_COUNT],
        provider=provider,
        store=store,
        settings=settings,
        test_type="micro",
        date_from=date_from,
        date_to=date_to,
        sleep=sleep,
    )


def run_full_production_test(
    *,
    provider: KeywordVolumeProvider,
    store: ResultStore,
    settings: Optional[Settings] = None,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
    sleep: Optional[Callable[[float], None]] = None,
) -> PipelineResult:
    return run_pipeline(
        entities=catalog.PLAYER_NAMES,
        terms=catalog.APPROVED_MERCH_TERMS,
        markets=catalog.priority_markets(),
        provider=provider,
        store=store,
        settings=settings,
        test_type="full_production",
        date_from=date_from,
        date_to=date_to,
        sleep=sleep,
    )


def collect_all_data(
    *,
    provider: KeywordVolumeProvider,
    store: ResultStore,
    settings: Optional[Settings] = None,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
    sleep: Optional[Callable[[float], None]] = None,
) -> Dict[str, Any]:
    result = run_full_production_test(
        provider=provider,
        store=store,
        settings=settings,
        date_from=date_from,
        date_to=date_to,
        sleep=sleep,
    )
    payload = result.to_dict()
    payload["filePath"] = str(store.path_for(result.run.id)) if result.saved else None
    return payload


def run_labs_micro_test(
    *,
    provider: KeywordVolumeProvider,
    store: ResultStore,
    settings: Optional[Settings] = None,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
    sleep: Optional[Callable[[float], None]] = None,
) -> PipelineResult:
    """Micro test against the Labs keyword-ideas provider, one keyword per request."""
    settings = settings or get_settings()
    return run_pipeline(
        entities=catalog.PLAYER_NAMES[:MICRO_PLAYER_COUNT],
        terms=catalog.APPROVED_MERCH_TERMS,
        markets=catalog.priority_markets()[:MICRO_MARKET_COUNT],
        provider=provider,
        store=store,
        settings=settings,
        test_type="labs_micro",
        date_from=date_from,
        date_to=date_to,
        sleep=sleep,
        **_labs_options(settings),
    )


def run_labs_full_production_test(
    *,
    provider: KeywordVolumeProvider,
    store: ResultStore,
    settings: Optional[Settings] = None,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
    sleep: Optional[Callable[[float], None]] = None,
) -> PipelineResult:
    settings = settings or get_settings()
    return run_pipeline(
        entities=catalog.PLAYER_NAMES,
        terms=catalog.APPROVED_MERCH_TERMS,
        markets=catalog.priority_markets(),
        provider=provider,
        store=store,
        settings=settings,
        test_type="labs_full_production",
        date_from=date_from,
        date_to=date_to,
        sleep=sleep,
        **_labs_options(settings),
    )


def _labs_options(settings: Settings) -> Dict[str, Any]:
    return {
        "source": LABS_SOURCE,
        "max_per_batch": LABS_KEYWORDS_PER_REQUEST,
        "cost_per_batch": labs_request_cost(LABS_KEYWORDS_PER_REQUEST),
        "delay_ms": settings.labs_request_delay_ms,
    }


def dashboard_profiles(store: ResultStore, settings: Optional[Settings] = None) -> List[Dict[str, Any]]:
    """Recompute ranked profiles from the newest stored run's raw records.

    Runs that recorded their terms are resolved exactly, with the primary
    keywords they were scored with. Older runs fall back to pattern matching
    over the approved merch terms.
    """
    settings = settings or get_settings()
    runs = store.list_all()
    if not runs:
        return []

    latest = runs[0]
    meta = latest.metadata
    records = {
        market: [KeywordRecord.from_dict(item) for item in items if isinstance(item, dict)]
        for market, items in latest.raw_results.items()
        if isinstance(items, list)
    }
    if meta.terms and meta.entities:
        resolver = ExactMapResolver.from_generated(meta.entities, meta.terms)
    else:
        resolver = PatternResolver(catalog.APPROVED_MERCH_TERMS, known_entities=meta.entities or None)
    aggregator = VolumeAggregator(
        significance_threshold=settings.significance_threshold,
        primary_keywords=meta.primary_keywords or None,
        metadata_lookup=catalog.player_metadata,
    )
    profiles = aggregator.aggregate(records, resolver, TermClassifier(catalog.APPROVED_MERCH_TERMS))
    OpportunityScorer(settings.volume_norm, settings.max_markets).apply(profiles.values())
    return [profile.to_dict() for profile in rank_profiles(profiles)]


_RUNNERS = {
    "micro": (run_micro_test, build_client),
    "full": (run_full_production_test, build_client),
    "labs-micro": (run_labs_micro_test, build_labs_client),
    "labs-full": (run_labs_full_production_test, build_labs_client),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Collect DataForSEO keyword demand for tracked players")
    parser.add_argument(
        "--mode",
        choices=tuple(_RUNNERS),
        default="micro",
        help="Micro test or full production run, against Google Ads or the Labs endpoint",
    )
    parser.add_argument("--date-from", dest="date_from", help="Historical range start (YYYY-MM-DD)")
    parser.add_argument("--date-to", dest="date_to", help="Historical range end (YYYY-MM-DD)")
    parser.add_argument("--data-dir", dest="data_dir", help="Directory for stored runs (defaults to DATA_DIR)")
    return parser


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    args = build_parser().parse_args()

    try:
        settings = get_settings()
        store = ResultStore(args.data_dir or settings.data_dir)
        runner, client_factory = _RUNNERS[args.mode]
        result = runner(
            provider=client_factory(settings),
            store=store,
            settings=settings,
            date_from=args.date_from,
            date_to=args.date_to,
        )
    except (ConfigError, InvalidConfiguration, CostError) as exc:
        logger.error("Run refused: %s", exc)
        raise SystemExit(2) from exc
    except Exception as exc:  # pragma: no cover - CLI fallback
        logger.error("Collection failed: %s", exc, exc_info=True)
        raise SystemExit(1) from exc

    logger.info("Run %s finished with %d profiles and %d failed batches", result.run.id, len(result.profiles), len(result.failures))
    if not result.saved:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
