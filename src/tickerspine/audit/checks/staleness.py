"""Stale review: unwatched charting tickers nobody has opened in a while."""

from __future__ import annotations

from collections.abc import Sequence

from tickerspine.audit.archetypes import assess_staleness
from tickerspine.audit.base import AuditPlugin
from tickerspine.audit.ids import AuditId
from tickerspine.audit.models import AuditResult, FindingCode, StaleTickerData
from tickerspine.core.logging import get_logger
from tickerspine.core.protocols import RecentRepository, TickerRepository
from tickerspine.core.settings import get_settings
from tickerspine.core.timestamps import Clock, days_to_ms, now_ms
from tickerspine.domain.categories import WatchCategories

logger = get_logger(__name__)


class StaleReviewCheck(AuditPlugin):
    """
    Flag charting tickers by last-open time.

    Never opened is HIGH with ``days_since_open == -1``; opened before the
    threshold is MEDIUM. Watched tickers are skipped. ``clock`` returns
    epoch milliseconds and is read once per run.
    """

    id = AuditId.STALE_REVIEW.value
    title = "Stale Review"
    supports_targets = False

    def __init__(
        self,
        recent: RecentRepository,
        tickers: TickerRepository,
        watch: WatchCategories,
        threshold_days: int | None = None,
        clock: Clock = now_ms,
    ):
        self._recent = recent
        self._tickers = tickers
        self._watch = watch
        self._threshold_days = threshold_days if threshold_days is not None else get_settings().stale_review_threshold_days
        self._clock = clock

    async def run(self, targets: Sequence[str] | None = None) -> list[AuditResult]:
        self._require_full_scan(targets)

        now = self._clock()
        threshold_ms = days_to_ms(self._threshold_days)
        results: list[AuditResult] = []

        for tv_ticker in self._tickers.get_all_keys():
            if self._watch.is_watched(tv_ticker):
                continue
            stale = assess_staleness(self._recent.get(tv_ticker), now_ms=now, threshold_ms=threshold_ms)
            if stale is None:
                continue
            if stale.last_opened:
                message = f"{tv_ticker}: last opened {stale.days_since_open} days ago"
            else:
                message = f"{tv_ticker}: never opened"
            results.append(
                AuditResult(
                    plugin_id=self.id,
                    code=FindingCode.STALE_TICKER,
                    target=tv_ticker,
                    message=message,
                    severity=stale.severity,
                    data=StaleTickerData(tv_ticker, stale.last_opened, stale.days_since_open),
                )
            )

        logger.debug(
            "audit_scan_completed",
            plugin_id=self.id,
            threshold_days=self._threshold_days,
            findings=len(results),
        )
        return results
