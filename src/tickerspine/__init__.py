"""
TickerSpine - consistency audits and canonical alias resolution for
multi-system ticker mappings.

- tickerspine.core: errors, logging, settings, repository protocols
- tickerspine.domain: instrument records, categories, symbol resolution
- tickerspine.repositories: in-memory repository implementations
- tickerspine.audit: checks, registries, ranker, runner
"""

__version__ = "0.1.0"

from tickerspine.audit import (  # noqa: E402
    AuditRegistry,
    AuditReport,
    AuditResult,
    AuditRunner,
    CanonicalRanker,
    SectionRegistry,
    Severity,
    build_audit_registry,
)

__all__ = [
    "__version__",
    "AuditRegistry",
    "AuditReport",
    "AuditResult",
    "AuditRunner",
    "CanonicalRanker",
    "SectionRegistry",
    "Severity",
    "build_audit_registry",
]
