"""Client utilities for the DataForSEO keyword search-volume API."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from player_demand.core.config import Settings
from player_demand.core.models import KeywordRecord, MonthlySearch

logger = logging.getLogger(__name__)

LIVE_BASE_URL = "https://api.dataforseo.com/v3"
SANDBOX_BASE_URL = "https://sandbox.dataforseo.com/v3"
SEARCH_VOLUME_PATH = "/keywords_data/google_ads/search_volume/live"
KEYWORD_IDEAS_PATH = "/dataforseo_labs/google/keyword_ideas/live"
MAX_KEYWORDS_PER_REQUEST = 1000
STATUS_OK = 20000

# Labs bills a flat fee per request plus a per-keyword fee, and is queried one keyword at a time.
LABS_BASE_COST = 0.01
LABS_COST_PER_KEYWORD = 0.0001
LABS_KEYWORDS_PER_REQUEST = 1


class ProviderError(RuntimeError):
    """Raised when DataForSEO cannot be reached or reports a failed task."""


class DataForSEOClient:
    """Keyword-volume provider backed by the Google Ads search volume endpoint.

    Every call is billable on the live endpoint; nothing here retries. Callers
    decide whether a failed batch is worth another request.
    """

    def __init__(
        self,
        username: str,
        password: str,
        *,
        use_sandbox: bool = False,
        timeout: int = 30,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = SANDBOX_BASE_URL if use_sandbox else LIVE_BASE_URL
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.auth = (username, password)

    @property
    def is_live(self) -> bool:
        return self.base_url == LIVE_BASE_URL

    @property
    def api_mode(self) -> str:
        return "Live" if self.is_live else "Sandbox"

    def fetch(
        self,
        keywords: List[str],
        location_code: int,
        language_code: str = "en",
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
    ) -> List[KeywordRecord]:
        if not keywords:
            return []
        if len(keywords) > MAX_KEYWORDS_PER_REQUEST:
            raise ProviderError(
                f"DataForSEO accepts at most {MAX_KEYWORDS_PER_REQUEST} keywords per request, got {len(keywords)}"
            )

        task: Dict[str, Any] = {
            "keywords": list(keywords),
            "location_code": location_code,
            "language_code": language_code,
        }
        if date_from:
            task["date_from"] = date_from
        if date_to:
            task["date_to"] = date_to

        url = f"{self.base_url}{SEARCH_VOLUME_PATH}"
        logger.info("DataForSEO search_volume request: %d keywords location=%s", len(keywords), location_code)
        try:
            response = self._session.post(url, json=[task], timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise ProviderError(f"DataForSEO request failed: {exc}") from exc

        return parse_search_volume_payload(payload)

    def test_connection(self) -> List[KeywordRecord]:
        return self.fetch(["football"], 2840)


def build_client(settings: Settings, session: Optional[requests.Session] = None) -> DataForSEOClient:
    return DataForSEOClient(
        settings.dataforseo_username,
        settings.dataforseo_password,
        use_sandbox=settings.use_sandbox,
        timeout=settings.request_timeout,
        session=session,
    )


class DataForSEOLabsClient(DataForSEOClient):
    """Keyword-volume provider backed by the Labs keyword-ideas endpoint.

    Labs answers with keyword ideas for a single seed keyword. The record whose
    keyword matches the seed is returned; when none matches, the first idea is
    returned under the seed keyword.
    """

    def fetch(
        self,
        keywords: List[str],
        location_code: int,
        language_code: str = "en",
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
    ) -> List[KeywordRecord]:
        if not keywords:
            return []
        if len(keywords) > LABS_KEYWORDS_PER_REQUEST:
            raise ProviderError(
                f"DataForSEO Labs accepts {LABS_KEYWORDS_PER_REQUEST} keyword per request, got {len(keywords)}"
            )

        keyword = keywords[0]
        task: Dict[str, Any] = {
            "keyword": keyword,
            "location_code": location_code,
            "language_code": language_code,
            "limit": 1,
        }
        if date_from:
            task["date_from"] = date_from
        if date_to:
            task["date_to"] = date_to

        url = f"{self.base_url}{KEYWORD_IDEAS_PATH}"
        logger.info("DataForSEO Labs keyword_ideas request: %r location=%s", keyword, location_code)
        try:
            response = self._session.post(url, json=[task], timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise ProviderError(f"DataForSEO Labs request failed: {exc}") from exc

        ideas = parse_search_volume_payload(payload)
        if not ideas:
            logger.warning("No Labs results for keyword: %s", keyword)
            return []

        wanted = keyword.lower()
        match = next((idea for idea in ideas if idea.keyword.lower() == wanted), ideas[0])
        match.keyword = keyword
        return [match]

    def test_connection(self) -> List[KeywordRecord]:
        return self.fetch(["football"], 2840)


def labs_request_cost(keyword_count: int = LABS_KEYWORDS_PER_REQUEST) -> float:
    return LABS_BASE_COST + LABS_COST_PER_KEYWORD * keyword_count


def build_labs_client(settings: Settings, session: Optional[requests.Session] = None) -> DataForSEOLabsClient:
    return DataForSEOLabsClient(
        settings.dataforseo_username,
        settings.dataforseo_password,
        use_sandbox=settings.use_sandbox,
        timeout=settings.request_timeout,
        session=session,
    )


def parse_search_volume_payload(payload: Optional[Dict[str, Any]]) -> List[KeywordRecord]:
    """Validate a DataForSEO envelope and turn `tasks[0].result` into KeywordRecords."""
    if not payload:
        raise ProviderError("DataForSEO returned an empty payload.")

    status = payload.get("status_code")
    if status != STATUS_OK:
        logger.error("search_volume failed: status=%s, message=%s", status, payload.get("status_message"))
        raise ProviderError(payload.get("status_message") or f"status {status}")

    tasks = payload.get("tasks") or []
    if not tasks:
        logger.warning("No tasks returned from DataForSEO")
        return []

    task = tasks[0] or {}
    task_status = task.get("status_code")
    if task_status is not None and task_status != STATUS_OK:
        logger.error("search_volume task failed: status=%s, message=%s", task_status, task.get("status_message"))
        raise ProviderError(task.get("status_message") or f"task status {task_status}")

    records: List[KeywordRecord] = []
    for raw in task.get("result") or []:
        if not isinstance(raw, dict):
            continue
        keyword = (raw.get("keyword") or "").strip()
        if not keyword:
            continue

        monthly = [
            MonthlySearch(
                year=_safe_int(item.get("year")) or 0,
                month=_safe_int(item.get("month")) or 0,
                volume=_safe_int(item.get("search_volume")) or 0,
            )
            for item in raw.get("monthly_searches") or []
            if isinstance(item, dict)
        ]
        records.append(
            KeywordRecord(
                keyword=keyword,
                search_volume=_safe_int(raw.get("search_volume")),
                competition=raw.get("competition"),
                cpc=_safe_float(raw.get("cpc")),
                monthly_searches=monthly,
                competition_level=raw.get("competition_level"),
            )
        )
    return records


def _safe_float(value: Any) -> Optional[float]:
    try:
        if value is None:
            return None
        return float(value)
    except (TypeError, ValueError):
        return None


def _safe_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
