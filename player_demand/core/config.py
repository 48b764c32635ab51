"""Application configuration helpers.

DataForSEO credentials are billable and must only come from the environment
(or a local `.env`). The cost ceiling and the real-money switch live here too
so that every entry point shares the same guard values.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes"}


class ConfigError(RuntimeError):
    """Raised when an environment value cannot be parsed."""


class InvalidConfiguration(ValueError):
    """Raised when a run is asked for with unusable parameters (batch size, empty lists)."""


@dataclass(frozen=True)
class Settings:
    dataforseo_username: str = ""
    dataforseo_password: str = ""
    use_sandbox: bool = False
    allow_real_money: bool = False
    max_allowed_cost: float = 5.0
    cost_per_batch: float = 0.05
    max_keywords_per_batch: int = 1000
    request_delay_ms: int = 2000
    labs_request_delay_ms: int = 200
    request_timeout: int = 30
    language_code: str = "en"
    volume_norm: float = 10000.0
    max_markets: int = 10
    significance_threshold: int = 0
    data_dir: str = os.path.join("data", "api-results")
    dashboard_password: str = ""
    worker_port: int = 9000


def parse_bool(value: Any) -> bool:
    """Interpret a flag from env or JSON: real booleans as-is, strings by the truthy set."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in _TRUTHY


def _env_bool(name: str, default: str = "false") -> bool:
    return parse_bool(os.getenv(name, default))


def _env_number(name: str, default: str, cast):
    raw = (os.getenv(name) or default).strip()
    try:
        return cast(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} must be numeric, got {raw!r}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    username = os.getenv("DATAFORSEO_USERNAME", "")
    password = os.getenv("DATAFORSEO_PASSWORD", "")
    dashboard_password = os.getenv("DASHBOARD_PASSWORD", "")

    if not username or not password:
        logger.warning("DATAFORSEO_USERNAME/DATAFORSEO_PASSWORD are not configured; provider requests will fail.")
    if not dashboard_password:
        logger.warning("DASHBOARD_PASSWORD is not configured; dashboard login is disabled.")

    return Settings(
        dataforseo_username=username,
        dataforseo_password=password,
        use_sandbox=_env_bool("DATAFORSEO_USE_SANDBOX"),
        allow_real_money=_env_bool("ALLOW_REAL_MONEY"),
        max_allowed_cost=_env_number("MAX_ALLOWED_COST", "5.0", float),
        cost_per_batch=_env_number("COST_PER_BATCH", "0.05", float),
        max_keywords_per_batch=_env_number("MAX_KEYWORDS_PER_BATCH", "1000", int),
        request_delay_ms=_env_number("REQUEST_DELAY_MS", "2000", int),
        labs_request_delay_ms=_env_number("LABS_REQUEST_DELAY_MS", "200", int),
        request_timeout=_env_number("REQUEST_TIMEOUT", "30", int),
        language_code=os.getenv("LANGUAGE_CODE", "en").strip() or "en",
        volume_norm=_env_number("VOLUME_NORM", "10000", float),
        max_markets=_env_number("MAX_MARKETS", "10", int),
        significance_threshold=_env_number("MARKET_SIGNIFICANCE_THRESHOLD", "0", int),
        data_dir=os.getenv("DATA_DIR") or os.path.join("data", "api-results"),
        dashboard_password=dashboard_password,
        worker_port=_env_number("WORKER_PORT", "9000", int),
    )
