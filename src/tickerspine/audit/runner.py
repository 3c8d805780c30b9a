"""
Run registered checks and collect their findings.

Manifesto:
    Checks are independent and read-only, so the runner starts them all at
    once in an ``asyncio.TaskGroup`` and waits. It adds nothing else: no
    timeouts, no retries, no persistence. A check that raises (a usage or
    construction error) cancels its siblings and propagates to the caller;
    errors are never turned into findings. A single failure surfaces as
    itself, several as an ``ExceptionGroup``.

Architecture:
    ::

        runner = AuditRunner(registry)
        report = await runner.run_all()          all plugins, concurrently
        report = await runner.run_one("alerts", ["TCS"])

        report.results                  flat tuple, plugin registration order
        report.by_plugin()              {plugin_id: [AuditResult, ...]}
        report.failures(Severity.HIGH)  gate on severity
        report.has_failures()
        report.counts_by_severity()     {"LOW": n, "MEDIUM": n, "HIGH": n}

Examples:
    >>> report = await AuditRunner(registry).run_all()
    >>> if report.has_failures(Severity.HIGH):
    ...     show(report.failures(Severity.HIGH))

Guardrails:
    ❌ DON'T: Wrap the runner in ``return_exceptions=True`` style catch-alls
    ✅ DO: Let a malformed call surface at development time

Tags:
    runner, orchestration, asyncio, audit, tickerspine
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from tickerspine.audit.base import AuditPlugin
from tickerspine.audit.models import AuditResult, Severity, Status
from tickerspine.audit.registry import AuditRegistry
from tickerspine.core.logging import LogContext, get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class AuditReport:
    """Findings of one runner invocation."""

    results: tuple[AuditResult, ...] = ()
    plugin_ids: tuple[str, ...] = field(default=())

    def by_plugin(self) -> dict[str, list[AuditResult]]:
        """Findings grouped by plugin id; every executed plugin has a key."""
        grouped: dict[str, list[AuditResult]] = {plugin_id: [] for plugin_id in self.plugin_ids}
        for result in self.results:
            grouped.setdefault(result.plugin_id, []).append(result)
        return grouped

    def failures(self, min_severity: Severity = Severity.LOW) -> list[AuditResult]:
        return [r for r in self.results if r.status is Status.FAIL and r.severity >= min_severity]

    def has_failures(self, min_severity: Severity = Severity.LOW) -> bool:
        return bool(self.failures(min_severity))

    def counts_by_severity(self) -> dict[str, int]:
        counts = {severity.value: 0 for severity in Severity}
        for result in self.failures():
            counts[result.severity.value] += 1
        return counts

    def to_dict(self) -> dict[str, Any]:
        return {
            "plugins": list(self.plugin_ids),
            "total": len(self.results),
            "counts": self.counts_by_severity(),
            "results": [r.to_dict() for r in self.results],
        }


class AuditRunner:
    """Executes plugins from an ``AuditRegistry``."""

    def __init__(self, registry: AuditRegistry):
        self.registry = registry

    async def run_all(self) -> AuditReport:
        """Run every registered plugin concurrently (full scan)."""
        plugins = self.registry.list()
        try:
            async with asyncio.TaskGroup() as group:
                tasks = [group.create_task(self._run_plugin(plugin, None)) for plugin in plugins]
        except ExceptionGroup as exc:
            if len(exc.exceptions) == 1:
                raise exc.exceptions[0] from None
            raise

        report = AuditReport(
            results=tuple(result for task in tasks for result in task.result()),
            plugin_ids=tuple(plugin.id for plugin in plugins),
        )
        counts = report.counts_by_severity()
        if report.has_failures():
            logger.warning("audit_run_completed", plugins=len(plugins), findings=len(report.results), **counts)
        else:
            logger.info("audit_run_completed", plugins=len(plugins), findings=0)
        return report

    async def run_one(self, plugin_id: str, targets: Sequence[str] | None = None) -> AuditReport:
        """Run one plugin, optionally restricted to ``targets``.

        Raises:
            NotRegisteredError: If ``plugin_id`` is unknown
            TargetedModeNotSupportedError: If the plugin is global and
                ``targets`` is non-empty
        """
        plugin = self.registry.must_get(plugin_id)
        results = await self._run_plugin(plugin, targets)
        return AuditReport(results=tuple(results), plugin_ids=(plugin.id,))

    async def _run_plugin(self, plugin: AuditPlugin, targets: Sequence[str] | None) -> list[AuditResult]:
        async with LogContext(plugin_id=plugin.id):
            results = await plugin.run(targets)
            logger.info("audit_plugin_completed", findings=len(results), targeted=bool(targets))
        return results


__all__ = ["AuditReport", "AuditRunner"]
