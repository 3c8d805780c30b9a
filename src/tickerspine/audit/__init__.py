"""
Consistency-audit engine.

- models: ``AuditResult``, severity/status, typed finding payloads
- base: ``AuditPlugin`` contract
- archetypes: the generic scan algorithms
- registry: ``AuditRegistry`` and ``SectionRegistry``
- ranker: ``CanonicalRanker``
- runner: ``AuditRunner`` / ``AuditReport``
- checks: the fifteen built-in checks and ``build_audit_registry``
"""

from tickerspine.audit.base import AuditPlugin
from tickerspine.audit.checks import AuditRepositories, build_audit_registry, build_ranker
from tickerspine.audit.ids import AuditId
from tickerspine.audit.models import AuditResult, FindingCode, RankedAlias, Severity, Status
from tickerspine.audit.ranker import CanonicalRanker, RankerDeps, is_html_encoded
from tickerspine.audit.registry import AuditRegistry, AuditSection, SectionRegistry
from tickerspine.audit.runner import AuditReport, AuditRunner

__all__ = [
    "AuditPlugin",
    "AuditId",
    "AuditResult",
    "FindingCode",
    "RankedAlias",
    "Severity",
    "Status",
    "CanonicalRanker",
    "RankerDeps",
    "is_html_encoded",
    "AuditRegistry",
    "AuditSection",
    "SectionRegistry",
    "AuditReport",
    "AuditRunner",
    "AuditRepositories",
    "build_audit_registry",
    "build_ranker",
]
