"""Opportunity score: 50% volume, 30% trend, 20% market reach, bounded to 0-100.

The weights are the published dashboard methodology. Volume is normalised at
10,000 monthly searches per score point unless `VOLUME_NORM` overrides it.
"""

from __future__ import annotations

import math
from typing import Iterable

from player_demand.core.config import InvalidConfiguration
from player_demand.core.models import EntityProfile

VOLUME_WEIGHT = 0.5
TREND_WEIGHT = 0.3
MARKET_WEIGHT = 0.2

DEFAULT_VOLUME_NORM = 10000.0
DEFAULT_MAX_MARKETS = 10
TREND_CAP = 50.0


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def volume_score(total_volume: float, volume_norm: float = DEFAULT_VOLUME_NORM) -> float:
    return clamp(total_volume / volume_norm, 0.0, 100.0)


def trend_score(trend_percent: float) -> float:
    return clamp(trend_percent, -TREND_CAP, TREND_CAP) + TREND_CAP


def market_score(market_count: int, max_markets: int = DEFAULT_MAX_MARKETS) -> float:
    return clamp(market_count / max_markets * 100, 0.0, 100.0)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class OpportunityScorer:
    def __init__(self, volume_norm: float = DEFAULT_VOLUME_NORM, max_markets: int = DEFAULT_MAX_MARKETS) -> None:
        if volume_norm <= 0:
            raise InvalidConfiguration(f"volume_norm must be positive, got {volume_norm}")
        if max_markets <= 0:
            raise InvalidConfiguration(f"max_markets must be positive, got {max_markets}")
        self.volume_norm = volume_norm
        self.max_markets = max_markets

    def raw_score(self, profile: EntityProfile) -> float:
        return (
            volume_score(profile.total_volume, self.volume_norm) * VOLUME_WEIGHT
            + trend_score(profile.trend_percent) * TREND_WEIGHT
            + market_score(profile.market_count, self.max_markets) * MARKET_WEIGHT
        )

    def score(self, profile: EntityProfile) -> int:
        return round_half_up(clamp(self.raw_score(profile), 0.0, 100.0))

    def apply(self, profiles: Iterable[EntityProfile]) -> None:
        """Write the score onto each profile in place."""
        for profile in profiles:
            profile.opportunity_score = self.score(profile)
