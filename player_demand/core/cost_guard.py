"""Pre-flight cost checks; nothing may reach the provider before `authorize` passes."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from player_demand.core.config import Settings

logger = logging.getLogger(__name__)


class CostError(RuntimeError):
    """Base class for runs refused on cost grounds."""


class RealMoneyDisabled(CostError):
    pass


class CostLimitExceeded(CostError):
    pass


@dataclass(frozen=True)
class CostGuardConfig:
    allow_real_money: bool = False
    max_allowed_cost: float = 5.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "CostGuardConfig":
        return cls(allow_real_money=settings.allow_real_money, max_allowed_cost=settings.max_allowed_cost)


def authorize(estimated_cost: float, config: CostGuardConfig, *, live: bool) -> None:
    """Raise unless a run costing `estimated_cost` may go ahead.

    `live` is True when the run targets the billable endpoint rather than the sandbox.
    """
    if live and not config.allow_real_money:
        logger.error("Refusing live run: ALLOW_REAL_MONEY is disabled (estimated cost $%.2f)", estimated_cost)
        raise RealMoneyDisabled("Live DataForSEO runs are disabled; set ALLOW_REAL_MONEY=true to enable them.")
    if estimated_cost > config.max_allowed_cost:
        logger.error("Refusing run: estimated cost $%.2f exceeds limit $%.2f", estimated_cost, config.max_allowed_cost)
        raise CostLimitExceeded(
            f"Estimated cost ${estimated_cost:.2f} exceeds the configured limit ${config.max_allowed_cost:.2f}."
        )
    logger.info("Cost check passed: estimated $%.2f (limit $%.2f, live=%s)", estimated_cost, config.max_allowed_cost, live)
