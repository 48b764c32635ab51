import pytest

from player_demand.core import cost_guard
from player_demand.core.config import Settings


def test_live_run_refused_without_real_money():
    config = cost_guard.CostGuardConfig(allow_real_money=False, max_allowed_cost=100.0)

    with pytest.raises(cost_guard.RealMoneyDisabled):
        cost_guard.authorize(0.05, config, live=True)


def test_sandbox_run_allowed_without_real_money():
    config = cost_guard.CostGuardConfig(allow_real_money=False, max_allowed_cost=1.0)

    cost_guard.authorize(0.5, config, live=False)


def test_cost_limit_exceeded():
    config = cost_guard.CostGuardConfig(allow_real_money=True, max_allowed_cost=1.0)

    with pytest.raises(cost_guard.CostLimitExceeded):
        cost_guard.authorize(1.01, config, live=True)


def test_cost_limit_is_inclusive():
    config = cost_guard.CostGuardConfig(allow_real_money=True, max_allowed_cost=1.0)

    cost_guard.authorize(1.0, config, live=True)


def test_real_money_is_checked_before_cost():
    config = cost_guard.CostGuardConfig(allow_real_money=False, max_allowed_cost=0.0)

    with pytest.raises(cost_guard.RealMoneyDisabled):
        cost_guard.authorize(10.0, config, live=True)


def test_config_from_settings():
    config = cost_guard.CostGuardConfig.from_settings(Settings(allow_real_money=True, max_allowed_cost=2.5))

    assert config == cost_guard.CostGuardConfig(allow_real_money=True, max_allowed_cost=2.5)
