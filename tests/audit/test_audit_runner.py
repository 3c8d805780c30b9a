"""Tests for the factory wiring and AuditRunner / AuditReport."""

from __future__ import annotations

import asyncio

import pytest

from tickerspine.audit import AuditId, AuditPlugin, AuditRegistry, AuditRunner, Severity
from tickerspine.audit.checks import build_audit_registry
from tickerspine.core.errors import NotRegisteredError, TargetedModeNotSupportedError
from tickerspine.domain import Alert, Order, OrderType, PairInfo


# ── Fixtures ─────────────────────────────────────────────────────────────


@pytest.fixture()
def populated(repos):
    """A small book with at least one finding for most checks."""
    repos.pairs.add_pair(PairInfo("Voltas", "18462", "NSE", "VOLTAS"))
    repos.pairs.add_pair(PairInfo("Voltas", "18462", "NSE", "VOLT"))
    repos.pairs.add_pair(PairInfo("Tata", "1", "NSE", "TCS"))
    repos.tickers.set("TCS", "TCS")
    repos.alerts.add_alert(Alert("a1", "1", 3500.0))
    repos.alerts.add_alert(Alert("a2", "ORPHAN_PAIR", 10.0))
    repos.alerts.add_alert(Alert("a3", "ORPHAN_PAIR", 12.0))
    repos.sequences.set("OLD", "seq")
    repos.exchanges.set("OLD", "NSE:OLD")
    repos.flags.get_category_lists().add(2, "GONE")
    repos.orders.add_order("TCS", Order("TCS", 300, OrderType.SINGLE, "e1", (100.0,)))
    repos.orders.add_order("TCS", Order("TCS", 300, OrderType.TWO_LEG, "s1", (90.0, 130.0)))
    return repos


@pytest.fixture()
def registry(populated, settings, ranker, clock):
    return build_audit_registry(populated, settings, ranker=ranker, clock=clock)


@pytest.fixture()
def runner(registry):
    return AuditRunner(registry)


class _Boom(AuditPlugin):
    id = "boom"
    title = "Boom"

    async def run(self, targets=None):
        raise RuntimeError("repository offline")


class _AlsoBoom(_Boom):
    id = "also-boom"
    title = "Also Boom"


class _Pending(AuditPlugin):
    """Waits on its repository forever; records whether it was cancelled."""

    id = "pending"
    title = "Pending"

    def __init__(self):
        self.started = asyncio.Event()
        self.cancelled = False

    async def run(self, targets=None):
        self.started.set()
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return []


# ── Factory ──────────────────────────────────────────────────────────────


class TestBuildAuditRegistry:
    def test_registers_all_checks_in_order(self, registry):
        assert registry.ids() == [audit_id.value for audit_id in AuditId]
        assert len(registry) == 15

    def test_global_checks(self, registry):
        targeted = {p.id for p in registry.list() if p.supports_targets}
        assert targeted == {"alerts", "tv-mapping", "golden", "unmapped-pairs", "gtt-unwatched"}

    def test_fresh_registry_per_call(self, repos, settings):
        assert build_audit_registry(repos, settings) is not build_audit_registry(repos, settings)


# ── AuditRunner ──────────────────────────────────────────────────────────


class TestAuditRunner:
    @pytest.mark.asyncio
    async def test_run_all_collects_every_plugin(self, runner):
        report = await runner.run_all()

        grouped = report.by_plugin()
        assert list(grouped) == [audit_id.value for audit_id in AuditId]
        assert grouped["ticker-collision"] == []
        assert [r.target for r in grouped["duplicate-pair-ids"]] == ["18462"]
        assert [r.target for r in grouped["orphan-alerts"]] == ["ORPHAN_PAIR"]
        assert grouped["orphan-alerts"][0].data.alert_count == 2
        assert [r.target for r in grouped["trade-risk"]] == ["TCS"]
        assert [r.target for r in grouped["stale-review"]] == ["TCS"]
        assert [r.code.value for r in grouped["alerts"]] == ["NO_ALERTS", "NO_ALERTS", "SINGLE_ALERT"]

    @pytest.mark.asyncio
    async def test_results_in_registration_order(self, runner, registry):
        report = await runner.run_all()
        order = {plugin_id: i for i, plugin_id in enumerate(registry.ids())}
        positions = [order[r.plugin_id] for r in report.results]
        assert positions == sorted(positions)

    @pytest.mark.asyncio
    async def test_deterministic(self, runner):
        first = await runner.run_all()
        second = await runner.run_all()
        assert first == second

    @pytest.mark.asyncio
    async def test_empty_targets_equal_full_scan(self, runner, registry):
        for plugin_id in registry.ids():
            full = await runner.run_one(plugin_id)
            empty = await runner.run_one(plugin_id, [])
            assert full == empty, plugin_id

    @pytest.mark.asyncio
    async def test_run_one_targeted(self, runner):
        report = await runner.run_one("alerts", ["TCS"])
        assert report.plugin_ids == ("alerts",)
        assert [r.target for r in report.results] == ["TCS"]

    @pytest.mark.asyncio
    async def test_run_one_unknown(self, runner):
        with pytest.raises(NotRegisteredError):
            await runner.run_one("nope")

    @pytest.mark.asyncio
    async def test_global_plugin_with_targets_raises(self, runner):
        with pytest.raises(TargetedModeNotSupportedError):
            await runner.run_one("integrity", ["TCS"])

    @pytest.mark.asyncio
    async def test_plugin_errors_propagate(self):
        registry = AuditRegistry()
        registry.register(_Boom())
        with pytest.raises(RuntimeError, match="repository offline"):
            await AuditRunner(registry).run_all()

    @pytest.mark.asyncio
    async def test_failure_cancels_running_siblings(self):
        pending = _Pending()
        registry = AuditRegistry()
        registry.register(pending)
        registry.register(_Boom())

        with pytest.raises(RuntimeError, match="repository offline"):
            await AuditRunner(registry).run_all()

        assert pending.started.is_set()
        assert pending.cancelled

    @pytest.mark.asyncio
    async def test_several_failures_raise_group(self):
        registry = AuditRegistry()
        registry.register(_Boom())
        registry.register(_AlsoBoom())

        with pytest.raises(ExceptionGroup) as excinfo:
            await AuditRunner(registry).run_all()

        assert len(excinfo.value.exceptions) == 2
        assert all(isinstance(e, RuntimeError) for e in excinfo.value.exceptions)

    @pytest.mark.asyncio
    async def test_clean_book(self, repos, settings, clock):
        report = await AuditRunner(build_audit_registry(repos, settings, clock=clock)).run_all()
        assert report.results == ()
        assert not report.has_failures()
        assert report.by_plugin()["alerts"] == []


# ── AuditReport ──────────────────────────────────────────────────────────


class TestAuditReport:
    @pytest.mark.asyncio
    async def test_severity_gate(self, runner):
        report = await runner.run_all()
        high = report.failures(Severity.HIGH)
        assert high
        assert all(r.severity is Severity.HIGH for r in high)
        assert len(report.failures()) == len(report.results)
        assert report.has_failures(Severity.LOW)

    @pytest.mark.asyncio
    async def test_counts(self, runner):
        report = await runner.run_all()
        counts = report.counts_by_severity()
        assert set(counts) == {"LOW", "MEDIUM", "HIGH"}
        assert sum(counts.values()) == len(report.results)
        assert counts["LOW"] == 1

    @pytest.mark.asyncio
    async def test_to_dict(self, runner):
        d = (await runner.run_all()).to_dict()
        assert d["total"] == len(d["results"])
        assert d["plugins"][0] == "alerts"
        assert {"plugin_id", "code", "target", "message", "severity", "status"} <= set(d["results"][0])
