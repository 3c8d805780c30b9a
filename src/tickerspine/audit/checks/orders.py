"""
Broker-order checks.

Both read the GTT order book through ``OrderRepository.get_gtt_orders``,
the one repository read that suspends.
"""

from __future__ import annotations

from collections.abc import Sequence

from tickerspine.audit.archetypes import matches_accepted, missing_from_categories
from tickerspine.audit.base import AuditPlugin
from tickerspine.audit.ids import AuditId
from tickerspine.audit.models import AuditResult, FindingCode, RiskMultipleData, Severity, UnwatchedOrderData
from tickerspine.core.logging import get_logger
from tickerspine.core.protocols import CategoryRepository, OrderRepository
from tickerspine.core.settings import AuditSettings, get_settings
from tickerspine.domain.models import Order

logger = get_logger(__name__)


class GttUnwatchedCheck(AuditPlugin):
    """Tickers with live GTT orders that sit in none of the watched categories.

    Targeted runs restrict the scan to the given broker tickers.
    """

    id = AuditId.GTT_UNWATCHED.value
    title = "GTT Unwatched Orders"

    def __init__(
        self,
        orders: OrderRepository,
        watch: CategoryRepository,
        watched_categories: Sequence[int] | None = None,
    ):
        self._orders = orders
        self._watch = watch
        self._categories = tuple(
            watched_categories if watched_categories is not None else get_settings().watched_categories
        )
        if not self._categories:
            raise ValueError("watched_categories must name at least one category")

    async def run(self, targets: Sequence[str] | None = None) -> list[AuditResult]:
        book = await self._orders.get_gtt_orders()
        lists = self._watch.get_category_lists()
        wanted = set(targets) if targets else None

        results: list[AuditResult] = []
        for tv_ticker, legs in book.items():
            if wanted is not None and tv_ticker not in wanted:
                continue
            if not missing_from_categories(tv_ticker, lists, self._categories):
                continue
            results.append(
                AuditResult(
                    plugin_id=self.id,
                    code=FindingCode.UNWATCHED_GTT,
                    target=tv_ticker,
                    message=f"{tv_ticker}: GTT order exists but ticker not in watchlist",
                    severity=Severity.HIGH,
                    data=UnwatchedOrderData(tv_ticker, tuple(leg.id for leg in legs), self._categories),
                )
            )

        logger.debug("audit_scan_completed", plugin_id=self.id, scanned=len(book), findings=len(results))
        return results


class TradeRiskCheck(AuditPlugin):
    """
    Position risk must be half or full risk, within tolerance.

    For every two-leg (stop/target) order the stop is its first price; the
    entry is the first price of the ticker's first single-leg order. Risk
    is ``|entry - stop| * quantity`` of the two-leg order. Tickers without
    an entry order are skipped.
    """

    id = AuditId.TRADE_RISK.value
    title = "Trade Risk Multiple"
    supports_targets = False

    def __init__(self, orders: OrderRepository, settings: AuditSettings | None = None):
        settings = settings or get_settings()
        self._orders = orders
        self._accepted = settings.accepted_risks
        self._tolerance = settings.risk_tolerance

    async def run(self, targets: Sequence[str] | None = None) -> list[AuditResult]:
        self._require_full_scan(targets)

        book = await self._orders.get_gtt_orders()
        results: list[AuditResult] = []
        for tv_ticker, legs in book.items():
            results.extend(self._check_ticker(tv_ticker, legs))
        return results

    def _check_ticker(self, tv_ticker: str, legs: Sequence[Order]) -> list[AuditResult]:
        entry_order = next((leg for leg in legs if leg.is_entry), None)
        if entry_order is None:
            return []

        half, full = self._accepted
        findings = []
        for leg in legs:
            if not leg.is_stop_target:
                continue
            entry = entry_order.prices[0]
            stop = leg.prices[0]
            risk = abs(entry - stop) * leg.quantity
            if matches_accepted(risk, self._accepted, self._tolerance):
                continue
            findings.append(
                AuditResult(
                    plugin_id=self.id,
                    code=FindingCode.INVALID_RISK_MULTIPLE,
                    target=tv_ticker,
                    message=f"{tv_ticker}: Risk {risk:.0f} not a multiple of {half:g}/{full:g}",
                    severity=Severity.HIGH,
                    data=RiskMultipleData(
                        tv_ticker=tv_ticker,
                        order_id=leg.id,
                        order_ids=(entry_order.id, leg.id),
                        entry=entry,
                        stop=stop,
                        quantity=leg.quantity,
                        computed_risk=risk,
                        expected_multiples=self._accepted,
                    ),
                )
            )
        return findings
