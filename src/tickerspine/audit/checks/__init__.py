"""Built-in audit checks and the factory that wires them."""

from tickerspine.audit.checks.alerts import AlertsCoverageCheck
from tickerspine.audit.checks.duplicates import DuplicatePairIdsCheck, TickerCollisionCheck
from tickerspine.audit.checks.factory import (
    AuditRepositories,
    build_audit_registry,
    build_ranker,
    build_resolver,
)
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

__all__ = [
    "AlertsCoverageCheck",
    "TvMappingCheck",
    "GoldenCheck",
    "UnmappedPairsCheck",
    "ReverseGoldenCheck",
    "IntegrityCheck",
    "DuplicatePairIdsCheck",
    "TickerCollisionCheck",
    "OrphanAlertsCheck",
    "OrphanSequencesCheck",
    "OrphanFlagsCheck",
    "OrphanExchangeCheck",
    "GttUnwatchedCheck",
    "TradeRiskCheck",
    "StaleReviewCheck",
    "AuditRepositories",
    "build_audit_registry",
    "build_ranker",
    "build_resolver",
]
