"""
Duplicate-group checks.

Both are global: a group is only a group once the whole collection has
been seen. Each group of two or more members is one finding carrying every
member, plus the ranked candidates when a ``CanonicalRanker`` is supplied.
"""

from __future__ import annotations

from collections.abc import Sequence

from tickerspine.audit.archetypes import group_duplicates
from tickerspine.audit.base import AuditPlugin
from tickerspine.audit.ids import AuditId
from tickerspine.audit.models import (
    AuditResult,
    DuplicatePairIdData,
    FindingCode,
    Severity,
    TickerCollisionData,
)
from tickerspine.audit.ranker import CanonicalRanker
from tickerspine.core.logging import get_logger
from tickerspine.core.protocols import PairRepository, TickerRepository

logger = get_logger(__name__)


class DuplicatePairIdsCheck(AuditPlugin):
    """Several vendor tickers sharing one pairId. Target is the pairId."""

    id = AuditId.DUPLICATE_PAIR_IDS.value
    title = "Duplicate PairIds"
    supports_targets = False

    def __init__(self, pairs: PairRepository, ranker: CanonicalRanker | None = None):
        self._pairs = pairs
        self._ranker = ranker

    async def run(self, targets: Sequence[str] | None = None) -> list[AuditResult]:
        self._require_full_scan(targets)

        def pair_id_of(ticker: str) -> str | None:
            pair = self._pairs.get(ticker)
            return pair.pair_id if pair else None

        results: list[AuditResult] = []
        for pair_id, investing_tickers in group_duplicates(self._pairs.get_all_keys(), pair_id_of).items():
            first = self._pairs.get(investing_tickers[0])
            pair_name = first.name if first and first.name else pair_id
            ranked = self._ranker.rank_investing_tickers(investing_tickers, pair_id) if self._ranker else []
            results.append(
                AuditResult(
                    plugin_id=self.id,
                    code=FindingCode.DUPLICATE_PAIR_ID,
                    target=pair_id,
                    message=f"{pair_name} ({pair_id}): shared by {', '.join(investing_tickers)}",
                    severity=Severity.MEDIUM,
                    data=DuplicatePairIdData(pair_id, tuple(investing_tickers), pair_name, tuple(ranked)),
                )
            )

        logger.debug("audit_scan_completed", plugin_id=self.id, findings=len(results))
        return results


class TickerCollisionCheck(AuditPlugin):
    """Several charting tickers reverse-mapping to one vendor ticker."""

    id = AuditId.TICKER_COLLISION.value
    title = "Ticker Reverse Map Collisions"
    supports_targets = False

    def __init__(self, tickers: TickerRepository, ranker: CanonicalRanker | None = None):
        self._tickers = tickers
        self._ranker = ranker

    async def run(self, targets: Sequence[str] | None = None) -> list[AuditResult]:
        self._require_full_scan(targets)

        results: list[AuditResult] = []
        for investing_ticker, tv_tickers in group_duplicates(self._tickers.get_all_keys(), self._tickers.get).items():
            ranked = self._ranker.rank_tv_tickers(tv_tickers) if self._ranker else []
            results.append(
                AuditResult(
                    plugin_id=self.id,
                    code=FindingCode.TICKER_COLLISION,
                    target=investing_ticker,
                    message=f"{investing_ticker}: {len(tv_tickers)} tvTicker aliases ({', '.join(tv_tickers)})",
                    severity=Severity.MEDIUM,
                    data=TickerCollisionData(investing_ticker, tuple(tv_tickers), tuple(ranked)),
                )
            )

        logger.debug("audit_scan_completed", plugin_id=self.id, findings=len(results))
        return results
