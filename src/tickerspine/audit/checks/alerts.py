"""Alert coverage: every unwatched vendor ticker should carry at least two alerts."""

from __future__ import annotations

from collections.abc import Sequence

from tickerspine.audit.base import AuditPlugin
from tickerspine.audit.ids import AuditId
from tickerspine.audit.models import AlertCoverageData, AuditResult, FindingCode, Severity
from tickerspine.core.logging import get_logger
from tickerspine.core.protocols import AlertRepository, PairRepository
from tickerspine.domain.categories import WatchCategories
from tickerspine.domain.symbols import SymbolResolver

logger = get_logger(__name__)

_SEVERITY = {
    FindingCode.NO_PAIR: Severity.HIGH,
    FindingCode.SINGLE_ALERT: Severity.HIGH,
    FindingCode.NO_ALERTS: Severity.MEDIUM,
}


class AlertsCoverageCheck(AuditPlugin):
    """
    Classify each vendor ticker by its alert count.

    NO_PAIR (no pair record), NO_ALERTS (pair known, zero alerts) and
    SINGLE_ALERT are findings; two or more alerts is valid. Tickers whose
    charting alias is watched are skipped: they are already being looked at.
    """

    id = AuditId.ALERTS.value
    title = "Alerts Coverage"

    def __init__(
        self,
        pairs: PairRepository,
        alerts: AlertRepository,
        watch: WatchCategories,
        symbols: SymbolResolver,
    ):
        self._pairs = pairs
        self._alerts = alerts
        self._watch = watch
        self._symbols = symbols

    async def run(self, targets: Sequence[str] | None = None) -> list[AuditResult]:
        investing_tickers = list(targets) if targets else self._pairs.get_all_keys()
        results: list[AuditResult] = []

        for investing_ticker in investing_tickers:
            mapped = self._symbols.investing_to_tv(investing_ticker)
            if self._watch.is_watched(mapped or investing_ticker):
                continue

            alert_count = self._alert_count(investing_ticker)
            if alert_count is None:
                code = FindingCode.NO_PAIR
            elif alert_count == 0:
                code = FindingCode.NO_ALERTS
            elif alert_count == 1:
                code = FindingCode.SINGLE_ALERT
            else:
                continue

            results.append(
                AuditResult(
                    plugin_id=self.id,
                    code=code,
                    target=investing_ticker,
                    message=f"{investing_ticker}: {code.value}",
                    severity=_SEVERITY[code],
                    data=AlertCoverageData(investing_ticker, mapped, alert_count),
                )
            )

        logger.debug("audit_scan_completed", plugin_id=self.id, scanned=len(investing_tickers), findings=len(results))
        return results

    def _alert_count(self, investing_ticker: str) -> int | None:
        pair = self._pairs.get_pair_info(investing_ticker)
        if pair is None:
            return None
        return len(self._alerts.get(pair.pair_id) or [])
