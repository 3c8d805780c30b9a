"""
Existence checks between the vendor and charting ticker systems.

Five checks share one question, "does this vendor ticker have a charting
ticker?", and differ in scope:

- ``tv-mapping`` and ``golden`` walk vendor tickers (or the given targets)
  through the symbol resolver.
- ``unmapped-pairs`` does the same against the pair repository and skips
  targets that are not known pairs.
- ``reverse-golden`` and ``integrity`` are global and audit one alias per
  pairId, so an instrument with three aliases is reported once.
"""

from __future__ import annotations

from collections.abc import Sequence

from tickerspine.audit.archetypes import find_missing, first_per_group
from tickerspine.audit.base import AuditPlugin
from tickerspine.audit.ids import AuditId
from tickerspine.audit.models import AuditResult, FindingCode, MissingMappingData, Severity
from tickerspine.core.logging import get_logger
from tickerspine.core.protocols import PairRepository, TickerRepository
from tickerspine.domain.symbols import SymbolResolver

logger = get_logger(__name__)


def _pair_id(pairs: PairRepository, investing_ticker: str) -> str | None:
    pair = pairs.get_pair_info(investing_ticker)
    return pair.pair_id if pair else None


class _ResolverMappingCheck(AuditPlugin):
    def __init__(self, pairs: PairRepository, symbols: SymbolResolver):
        self._pairs = pairs
        self._symbols = symbols

    async def run(self, targets: Sequence[str] | None = None) -> list[AuditResult]:
        investing_tickers = list(targets) if targets else self._pairs.get_all_keys()
        missing = find_missing(investing_tickers, self._symbols.investing_to_tv)
        return [
            AuditResult(
                plugin_id=self.id,
                code=FindingCode.NO_TV_MAPPING,
                target=ticker,
                message=f"{ticker}: NO_TV_MAPPING",
                severity=Severity.HIGH,
                data=MissingMappingData(ticker, _pair_id(self._pairs, ticker)),
            )
            for ticker in missing
        ]


class TvMappingCheck(_ResolverMappingCheck):
    id = AuditId.TV_MAPPING.value
    title = "TradingView Mapping"


class GoldenCheck(_ResolverMappingCheck):
    """Every vendor ticker resolves to a charting ticker."""

    id = AuditId.GOLDEN.value
    title = "Golden Integrity"


class UnmappedPairsCheck(AuditPlugin):
    """Pairs without a charting mapping; unknown targets are ignored."""

    id = AuditId.UNMAPPED_PAIRS.value
    title = "Unmapped Pairs"

    def __init__(self, pairs: PairRepository, tickers: TickerRepository):
        self._pairs = pairs
        self._tickers = tickers

    async def run(self, targets: Sequence[str] | None = None) -> list[AuditResult]:
        candidates = list(targets) if targets else self._pairs.get_all_keys()
        known = [ticker for ticker in candidates if self._pairs.get(ticker) is not None]
        return [
            AuditResult(
                plugin_id=self.id,
                code=FindingCode.NO_TV_MAPPING,
                target=ticker,
                message=f"{ticker}: Pair exists but has no TradingView mapping",
                severity=Severity.HIGH,
                data=MissingMappingData(ticker, _pair_id(self._pairs, ticker)),
            )
            for ticker in find_missing(known, self._tickers.get_tv_ticker)
        ]


class _PerInstrumentMappingCheck(AuditPlugin):
    supports_targets = False
    severity = Severity.HIGH

    def __init__(self, pairs: PairRepository, tickers: TickerRepository):
        self._pairs = pairs
        self._tickers = tickers

    async def run(self, targets: Sequence[str] | None = None) -> list[AuditResult]:
        self._require_full_scan(targets)

        representatives = first_per_group(self._pairs.get_all_keys(), lambda t: _pair_id(self._pairs, t))
        results = [
            AuditResult(
                plugin_id=self.id,
                code=FindingCode.NO_TV_MAPPING,
                target=ticker,
                message=f"{ticker}: Pair exists but has no TradingView mapping",
                severity=self.severity,
                data=MissingMappingData(ticker, _pair_id(self._pairs, ticker)),
            )
            for ticker in find_missing(representatives, self._tickers.get_tv_ticker)
        ]
        logger.debug("audit_scan_completed", plugin_id=self.id, scanned=len(representatives), findings=len(results))
        return results


class ReverseGoldenCheck(_PerInstrumentMappingCheck):
    id = AuditId.REVERSE_GOLDEN.value
    title = "ReverseGolden Integrity"
    severity = Severity.MEDIUM


class IntegrityCheck(_PerInstrumentMappingCheck):
    """Every pair has a charting ticker; unmapped pairs block alert creation."""

    id = AuditId.INTEGRITY.value
    title = "Integrity"
