"""
Orphan checks: derived records whose parent is gone.

All four are global. Orphan alerts are aggregated per pairId: one finding
with the alert count, never one per alert.
"""

from __future__ import annotations

from collections.abc import Sequence

from tickerspine.audit.archetypes import find_orphans
from tickerspine.audit.base import AuditPlugin
from tickerspine.audit.ids import AuditId
from tickerspine.audit.models import (
    AuditResult,
    FindingCode,
    OrphanAlertData,
    OrphanExchangeData,
    OrphanFlagData,
    OrphanSequenceData,
    Severity,
)
from tickerspine.core.logging import get_logger
from tickerspine.core.protocols import (
    AlertRepository,
    CategoryRepository,
    ExchangeRepository,
    PairRepository,
    SequenceRepository,
    TickerRepository,
)
from tickerspine.domain.models import Alert
from tickerspine.domain.symbols import SymbolResolver

logger = get_logger(__name__)


class OrphanAlertsCheck(AuditPlugin):
    """Alerts keyed by a pairId that no pair record carries."""

    id = AuditId.ORPHAN_ALERTS.value
    title = "Alerts"
    supports_targets = False

    def __init__(self, alerts: AlertRepository, pairs: PairRepository):
        self._alerts = alerts
        self._pairs = pairs

    async def run(self, targets: Sequence[str] | None = None) -> list[AuditResult]:
        self._require_full_scan(targets)

        valid_pair_ids = set()
        for ticker in self._pairs.get_all_keys():
            pair = self._pairs.get(ticker)
            if pair is not None:
                valid_pair_ids.add(pair.pair_id)

        by_pair = {pair_id: self._alerts.get(pair_id) or [] for pair_id in self._alerts.get_all_keys()}
        results: list[AuditResult] = []
        for pair_id, alerts in find_orphans(by_pair, valid_pair_ids.__contains__):
            alert_name = _alert_name(alerts, pair_id)
            results.append(
                AuditResult(
                    plugin_id=self.id,
                    code=FindingCode.NO_PAIR_MAPPING,
                    target=alert_name,
                    message=f"{alert_name}: {len(alerts)} alert(s) exist but have no corresponding pair",
                    severity=Severity.HIGH,
                    data=OrphanAlertData(pair_id, alert_name, len(alerts)),
                )
            )
        return results


def _alert_name(alerts: Sequence[Alert], pair_id: str) -> str:
    return next((alert.name for alert in alerts if alert.name), pair_id)


class OrphanSequencesCheck(AuditPlugin):
    """Price-sequence state for a ticker the ticker repository no longer has."""

    id = AuditId.ORPHAN_SEQUENCES.value
    title = "Sequences"
    supports_targets = False

    def __init__(self, sequences: SequenceRepository, tickers: TickerRepository, symbols: SymbolResolver):
        self._sequences = sequences
        self._tickers = tickers
        self._symbols = symbols

    async def run(self, targets: Sequence[str] | None = None) -> list[AuditResult]:
        self._require_full_scan(targets)

        by_ticker = {
            ticker: self._sequences.get(ticker)
            for ticker in self._sequences.get_all_keys()
            if not self._symbols.is_composite(ticker)
        }
        return [
            AuditResult(
                plugin_id=self.id,
                code=FindingCode.ORPHAN_SEQUENCE,
                target=ticker,
                message=f"{ticker}: Sequence ({sequence}) exists but ticker not in TickerRepo",
                severity=Severity.MEDIUM,
                data=OrphanSequenceData(ticker, sequence),
            )
            for ticker, sequence in find_orphans(by_ticker, self._tickers.has)
        ]


class OrphanFlagsCheck(AuditPlugin):
    """Flagged tickers known to neither the ticker nor the pair repository."""

    id = AuditId.ORPHAN_FLAGS.value
    title = "Flags"
    supports_targets = False

    def __init__(
        self,
        flags: CategoryRepository,
        tickers: TickerRepository,
        pairs: PairRepository,
        symbols: SymbolResolver,
    ):
        self._flags = flags
        self._tickers = tickers
        self._pairs = pairs
        self._symbols = symbols

    async def run(self, targets: Sequence[str] | None = None) -> list[AuditResult]:
        self._require_full_scan(targets)

        results: list[AuditResult] = []
        for category_index, tickers in self._flags.get_category_lists().lists():
            # Sorted so set iteration order cannot leak into the output.
            for ticker in sorted(tickers):
                if self._symbols.is_composite(ticker):
                    continue
                if self._tickers.has(ticker) or self._pairs.has(ticker):
                    continue
                results.append(
                    AuditResult(
                        plugin_id=self.id,
                        code=FindingCode.ORPHAN_FLAG,
                        target=ticker,
                        message=(
                            f"{ticker}: Flag in category {category_index} but ticker not in TickerRepo or PairRepo"
                        ),
                        severity=Severity.LOW,
                        data=OrphanFlagData(ticker, category_index),
                    )
                )

        logger.debug("audit_scan_completed", plugin_id=self.id, findings=len(results))
        return results


class OrphanExchangeCheck(AuditPlugin):
    """Exchange mappings for charting tickers that no longer exist."""

    id = AuditId.ORPHAN_EXCHANGE.value
    title = "Exchange"
    supports_targets = False

    def __init__(self, exchanges: ExchangeRepository, tickers: TickerRepository):
        self._exchanges = exchanges
        self._tickers = tickers

    async def run(self, targets: Sequence[str] | None = None) -> list[AuditResult]:
        self._require_full_scan(targets)

        by_ticker = {ticker: self._exchanges.get(ticker) for ticker in self._exchanges.get_all_keys()}
        return [
            AuditResult(
                plugin_id=self.id,
                code=FindingCode.ORPHAN_EXCHANGE,
                target=tv_ticker,
                message=f"{tv_ticker}: Exchange mapping ({value}) exists but ticker not in TickerRepo",
                severity=Severity.MEDIUM,
                data=OrphanExchangeData(tv_ticker, value),
            )
            for tv_ticker, value in find_orphans(by_ticker, self._tickers.has)
        ]
