"""
Wiring: build every built-in check from one bundle of repositories.

Repositories are passed in, never looked up. An application builds its
``AuditRepositories`` once; tests build one from in-memory repositories.

Examples:
    >>> repos = AuditRepositories(pairs=..., tickers=..., ...)
    >>> registry = build_audit_registry(repos, ranker=build_ranker(repos))
    >>> len(registry)
    15
"""

from __future__ import annotations

from dataclasses import dataclass

from tickerspine.audit.checks.alerts import AlertsCoverageCheck
from tickerspine.audit.checks.duplicates import DuplicatePairIdsCheck, TickerCollisionCheck
from tickerspine.audit.checks.mapping import (
    GoldenCheck,
    IntegrityCheck,
    ReverseGoldenCheck,
    TvMappingCheck,
    UnmappedPairsCheck,
)
from tickerspine.audit.checks.orders import GttUnwatchedCheck, TradeRiskCheck
from tickerspine.audit.checks.orphans import (
    OrphanAlertsCheck,
    OrphanExchangeCheck,
    OrphanFlagsCheck,
    OrphanSequencesCheck,
)
from tickerspine.audit.checks.staleness import StaleReviewCheck
from tickerspine.audit.ranker import CanonicalRanker, RankerDeps
from tickerspine.audit.registry import AuditRegistry
from tickerspine.core.logging import get_logger
from tickerspine.core.protocols import (
    AlertRepository,
    CategoryRepository,
    ExchangeRepository,
    OrderRepository,
    PairRepository,
    RecentRepository,
    SequenceRepository,
    TickerRepository,
)
from tickerspine.core.settings import AuditSettings, get_settings
from tickerspine.core.timestamps import Clock, now_ms
from tickerspine.domain.categories import WatchCategories
from tickerspine.domain.symbols import SymbolResolver

logger = get_logger(__name__)


@dataclass
class AuditRepositories:
    """Every collaborator the built-in checks read."""

    pairs: PairRepository
    tickers: TickerRepository
    alerts: AlertRepository
    exchanges: ExchangeRepository
    sequences: SequenceRepository
    recent: RecentRepository
    watch: CategoryRepository
    flags: CategoryRepository
    orders: OrderRepository


def build_resolver(repos: AuditRepositories, settings: AuditSettings | None = None) -> SymbolResolver:
    settings = settings or get_settings()
    return SymbolResolver(repos.tickers, repos.exchanges, settings.composite_operators)


def build_ranker(repos: AuditRepositories, settings: AuditSettings | None = None) -> CanonicalRanker:
    settings = settings or get_settings()
    deps = RankerDeps(
        alerts=repos.alerts,
        watch=WatchCategories(repos.watch),
        recent=repos.recent,
        sequences=repos.sequences,
        exchanges=repos.exchanges,
        pairs=repos.pairs,
        symbols=build_resolver(repos, settings),
    )
    return CanonicalRanker(deps, settings)


def build_audit_registry(
    repos: AuditRepositories,
    settings: AuditSettings | None = None,
    ranker: CanonicalRanker | None = None,
    clock: Clock | None = None,
) -> AuditRegistry:
    """Construct and register the fifteen built-in checks.

    Args:
        repos: Repository bundle shared by all checks
        settings: Thresholds and category indices (default: ``get_settings()``)
        ranker: Attached to the duplicate-group checks when given
        clock: Epoch-ms clock for the staleness check

    Returns:
        A fresh ``AuditRegistry``; no state is shared between calls.
    """
    settings = settings or get_settings()
    symbols = build_resolver(repos, settings)
    watch = WatchCategories(repos.watch)

    registry = AuditRegistry()
    for plugin in (
        AlertsCoverageCheck(repos.pairs, repos.alerts, watch, symbols),
        TvMappingCheck(repos.pairs, symbols),
        GoldenCheck(repos.pairs, symbols),
        UnmappedPairsCheck(repos.pairs, repos.tickers),
        ReverseGoldenCheck(repos.pairs, repos.tickers),
        IntegrityCheck(repos.pairs, repos.tickers),
        DuplicatePairIdsCheck(repos.pairs, ranker),
        TickerCollisionCheck(repos.tickers, ranker),
        OrphanAlertsCheck(repos.alerts, repos.pairs),
        OrphanSequencesCheck(repos.sequences, repos.tickers, symbols),
        OrphanFlagsCheck(repos.flags, repos.tickers, repos.pairs, symbols),
        OrphanExchangeCheck(repos.exchanges, repos.tickers),
        GttUnwatchedCheck(repos.orders, repos.watch, settings.watched_categories),
        TradeRiskCheck(repos.orders, settings),
        StaleReviewCheck(
            repos.recent,
            repos.tickers,
            watch,
            settings.stale_review_threshold_days,
            clock or now_ms,
        ),
    ):
        registry.register(plugin)

    logger.info("audit_registry_built", plugins=len(registry), ranked=ranker is not None)
    return registry
