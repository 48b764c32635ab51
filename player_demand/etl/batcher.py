"""Keyword generation and request batching for the keyword-volume provider."""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, Iterable, List, Sequence

from player_demand.core.config import InvalidConfiguration
from player_demand.core.models import Batch, Market

logger = logging.getLogger(__name__)


def generate_keywords(entities: Iterable[str], terms: Iterable[str]) -> List[str]:
    """Return every "{entity} {term}" combination, entities outer and terms inner."""
    term_list = list(terms)
    return [f"{entity} {term}" for entity in entities for term in term_list]


def plan_batches(keywords: Sequence[str], markets: Iterable[Market], max_per_batch: int) -> List[Batch]:
    """Chunk keywords in order into groups of at most `max_per_batch`, once per market."""
    if max_per_batch <= 0:
        raise InvalidConfiguration(f"max_per_batch must be positive, got {max_per_batch}")

    chunks = [list(keywords[start:start + max_per_batch]) for start in range(0, len(keywords), max_per_batch)]

    batches: List[Batch] = []
    for market in markets:
        for index, chunk in enumerate(chunks, start=1):
            batches.append(
                Batch(
                    market=market.name,
                    location_code=market.location_code,
                    keywords=list(chunk),
                    batch_index=index,
                )
            )

    logger.debug("Planned %d batches for %d keywords (max %d per batch)", len(batches), len(keywords), max_per_batch)
    return batches


def estimate_cost(batch_count: int, cost_per_batch: float) -> float:
    return batch_count * cost_per_batch


def plan_summary(
    entities: Sequence[str],
    terms: Sequence[str],
    markets: Sequence[Market],
    max_per_batch: int,
    cost_per_batch: float,
) -> Dict[str, Any]:
    """Expected request/keyword counts and cost for a run, without building the batches."""
    if max_per_batch <= 0:
        raise InvalidConfiguration(f"max_per_batch must be positive, got {max_per_batch}")

    keyword_count = len(entities) * len(terms)
    requests_per_market = math.ceil(keyword_count / max_per_batch)
    total_requests = requests_per_market * len(markets)
    return {
        "entity_count": len(entities),
        "market_count": len(markets),
        "term_count": len(terms),
        "keyword_count": keyword_count,
        "requests_per_market": requests_per_market,
        "total_requests": total_requests,
        "max_per_batch": max_per_batch,
        "estimated_cost": estimate_cost(total_requests, cost_per_batch),
    }
