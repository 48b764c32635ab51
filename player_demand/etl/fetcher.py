"""Sequential, rate-limited execution of a batch plan against a keyword-volume provider."""

from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional, Protocol, Sequence

from player_demand.core.models import Batch, BatchFailure, FetchResult, KeywordRecord

logger = logging.getLogger(__name__)


class KeywordVolumeProvider(Protocol):
    def fetch(
        self,
        keywords: List[str],
        location_code: int,
        language_code: str = "en",
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
    ) -> List[KeywordRecord]:
        ...


class RateLimitedFetcher:
    """Issue batches one at a time, sleeping `delay_ms` between consecutive calls.

    A batch that raises is recorded in `failures` and the run moves on; no
    batch is retried. The delay is applied after failed batches as well, since
    the provider counted the request either way.
    """

    def __init__(
        self,
        provider: KeywordVolumeProvider,
        delay_ms: int,
        *,
        language_code: str = "en",
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ) -> None:
        if delay_ms < 0:
            raise ValueError("delay_ms must not be negative")
        self.provider = provider
        self.delay_ms = delay_ms
        self.language_code = language_code
        self.date_from = date_from
        self.date_to = date_to
        self._sleep = sleep or time.sleep

    def fetch_all(self, batches: Sequence[Batch]) -> FetchResult:
        result = FetchResult()
        for batch in batches:
            result.results.setdefault(batch.market, [])

        total = len(batches)
        for position, batch in enumerate(batches, start=1):
            logger.info(
                "Batch %d/%d: market=%s batch=%d keywords=%d",
                position,
                total,
                batch.market,
                batch.batch_index,
                len(batch.keywords),
            )
            result.requests_made += 1
            try:
                records = self.provider.fetch(
                    batch.keywords,
                    batch.location_code,
                    self.language_code,
                    self.date_from,
                    self.date_to,
                )
            except Exception as exc:  # noqa: BLE001
                logger.warning("Batch %d for %s failed: %s", batch.batch_index, batch.market, exc)
                result.failures.append(BatchFailure(batch=batch, error=str(exc)))
            else:
                result.results[batch.market].extend(records)
                logger.info("Batch %d for %s returned %d records", batch.batch_index, batch.market, len(records))

            if position < total and self.delay_ms:
                self._sleep(self.delay_ms / 1000.0)

        logger.info(
            "Fetch complete: requests=%d failures=%d markets=%d",
            result.requests_made,
            len(result.failures),
            len(result.results),
        )
        return result
