"""
Canonical ranker: pick the surviving alias of one instrument.

When a duplicate-group or collision finding says several tickers denote the
same instrument, remediation keeps one and removes the rest. The ranker
decides which one by scoring live repository signals.

Manifesto:
    The choice must be explainable and repeatable. Every score is a plain
    weighted sum of boolean or count signals, every tie is broken by a
    fixed rule, and the sort is stable so candidates that nothing
    distinguishes stay in the order the caller passed them.

    Aliases containing an HTML entity (``M&amp;M``) come from upstream
    markup-parsing bugs. They take a penalty large enough to sink them
    below every clean alias whatever their other signals.

Architecture:
    ::

        rank_investing_tickers(tickers, pair_id)      vendor-side aliases
            alerts(pair_id) × 100                     same for every alias
          + watched(tv) 50 + recent(tv) 10 + tv mapping 1

        rank_tv_tickers(tickers)                      charting aliases
            alerts(pair of tv) × 100 + watched 50 + recent 10
          + sequence 5 + exchange 5 + preferred exchange 3
          + pair mapping 1

        either path: HTML-encoded alias → −1 000 000

        order: score desc → shorter alias → input order

Examples:
    >>> ranker = CanonicalRanker(deps)
    >>> [r.ticker for r in ranker.rank_tv_tickers(["LONGNAME", "SHORT", "MID"])]
    ['MID', 'SHORT', 'LONGNAME']
    >>> ranker.canonical(["M_M", "M&amp;M"]).ticker
    'M_M'

Guardrails:
    ❌ DON'T: Break ties by alphabetical order
    ✅ DO: Rely on the stable sort; callers pass a meaningful order

Tags:
    ranker, canonical, deduplication, scoring, tickerspine
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from tickerspine.audit.models import RankedAlias
from tickerspine.core.logging import get_logger
from tickerspine.core.protocols import (
    AlertRepository,
    ExchangeRepository,
    PairRepository,
    RecentRepository,
    SequenceRepository,
)
from tickerspine.core.settings import AuditSettings, get_settings
from tickerspine.domain.categories import WatchCategories
from tickerspine.domain.symbols import SymbolResolver

logger = get_logger(__name__)

WEIGHT_ALERTS = 100
WEIGHT_WATCHED = 50
WEIGHT_RECENT = 10
WEIGHT_SEQUENCE = 5
WEIGHT_EXCHANGE = 5
WEIGHT_PREFERRED_EXCHANGE = 3
WEIGHT_PAIR = 1
ENCODED_PENALTY = -1_000_000

_HTML_ENTITY = re.compile(r"&(#\d+|#x[0-9a-f]+|[a-z]+);", re.IGNORECASE)


def is_html_encoded(ticker: str) -> bool:
    """True for ``&amp;``, ``&#38;`` or ``&#x26;`` style entities."""
    return _HTML_ENTITY.search(ticker) is not None


def sort_ranked(ranked: Sequence[RankedAlias]) -> list[RankedAlias]:
    return sorted(ranked, key=lambda r: (-r.score, len(r.ticker)))


@dataclass
class RankerDeps:
    """Collaborators read by the ranker."""

    alerts: AlertRepository
    watch: WatchCategories
    recent: RecentRepository
    sequences: SequenceRepository
    exchanges: ExchangeRepository
    pairs: PairRepository
    symbols: SymbolResolver


class CanonicalRanker:
    """Score and order aliases of one instrument.

    Pure and synchronous: reads repositories, never writes them.
    """

    def __init__(self, deps: RankerDeps, settings: AuditSettings | None = None):
        self._deps = deps
        self._preferred_prefix = (settings or get_settings()).preferred_exchange_prefix

    def rank_investing_tickers(self, investing_tickers: Sequence[str], pair_id: str) -> list[RankedAlias]:
        """Rank vendor tickers that share ``pair_id``, most canonical first.

        Alerts are pairId-scoped, so the alert count is the same for every
        alias here; mapping, watch and recency signals decide.
        """
        alert_count = self._alert_count(pair_id)
        ranked = []
        for ticker in investing_tickers:
            tv_ticker = self._deps.symbols.investing_to_tv(ticker)
            is_watched = self._deps.watch.is_watched(tv_ticker) if tv_ticker else False
            recent = (self._deps.recent.get(tv_ticker) or 0) if tv_ticker else 0
            has_mapping = tv_ticker is not None
            encoded = is_html_encoded(ticker)

            score = (
                alert_count * WEIGHT_ALERTS
                + (WEIGHT_WATCHED if is_watched else 0)
                + (WEIGHT_RECENT if recent > 0 else 0)
                + (WEIGHT_PAIR if has_mapping else 0)
            )
            if encoded:
                score += ENCODED_PENALTY

            ranked.append(
                RankedAlias(
                    ticker=ticker,
                    score=score,
                    alert_count=alert_count,
                    is_watched=is_watched,
                    recent_timestamp=recent,
                    has_sequence=self._deps.sequences.has(tv_ticker) if tv_ticker else False,
                    has_exchange=self._deps.exchanges.has(tv_ticker) if tv_ticker else False,
                    has_pair_mapping=has_mapping,
                    is_encoded=encoded,
                )
            )

        result = sort_ranked(ranked)
        logger.debug("ranked_investing_tickers", pair_id=pair_id, order=[r.ticker for r in result])
        return result

    def rank_tv_tickers(self, tv_tickers: Sequence[str]) -> list[RankedAlias]:
        """Rank charting tickers that reverse-map to one vendor ticker."""
        ranked = []
        for ticker in tv_tickers:
            investing = self._deps.symbols.tv_to_investing(ticker)
            pair = self._deps.pairs.get_pair_info(investing) if investing else None
            alert_count = self._alert_count(pair.pair_id) if pair else 0
            is_watched = self._deps.watch.is_watched(ticker)
            recent = self._deps.recent.get(ticker) or 0
            has_sequence = self._deps.sequences.has(ticker)
            exchange_value = self._deps.exchanges.get(ticker)
            has_exchange = self._deps.exchanges.has(ticker)
            preferred = bool(exchange_value) and exchange_value.startswith(self._preferred_prefix)
            has_mapping = investing is not None
            encoded = is_html_encoded(ticker)

            score = (
                alert_count * WEIGHT_ALERTS
                + (WEIGHT_WATCHED if is_watched else 0)
                + (WEIGHT_RECENT if recent > 0 else 0)
                + (WEIGHT_SEQUENCE if has_sequence else 0)
                + (WEIGHT_EXCHANGE if has_exchange else 0)
                + (WEIGHT_PREFERRED_EXCHANGE if preferred else 0)
                + (WEIGHT_PAIR if has_mapping else 0)
            )
            if encoded:
                score += ENCODED_PENALTY

            ranked.append(
                RankedAlias(
                    ticker=ticker,
                    score=score,
                    alert_count=alert_count,
                    is_watched=is_watched,
                    recent_timestamp=recent,
                    has_sequence=has_sequence,
                    has_exchange=has_exchange,
                    has_pair_mapping=has_mapping,
                    is_encoded=encoded,
                )
            )

        result = sort_ranked(ranked)
        logger.debug("ranked_tv_tickers", order=[r.ticker for r in result])
        return result

    def canonical(self, tv_tickers: Sequence[str]) -> RankedAlias | None:
        """Top-ranked charting alias, or None for an empty candidate list."""
        ranked = self.rank_tv_tickers(tv_tickers)
        return ranked[0] if ranked else None

    def _alert_count(self, pair_id: str) -> int:
        alerts = self._deps.alerts.get(pair_id)
        return len(alerts) if alerts else 0


__all__ = [
    "WEIGHT_ALERTS",
    "WEIGHT_WATCHED",
    "WEIGHT_RECENT",
    "WEIGHT_SEQUENCE",
    "WEIGHT_EXCHANGE",
    "WEIGHT_PREFERRED_EXCHANGE",
    "WEIGHT_PAIR",
    "ENCODED_PENALTY",
    "is_html_encoded",
    "sort_ranked",
    "RankerDeps",
    "CanonicalRanker",
]
