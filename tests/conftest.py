"""
Shared pytest fixtures for tickerspine tests.

This module provides:
- Empty in-memory repositories, one fixture per collaborator
- An ``AuditRepositories`` bundle over those repositories
- Deterministic settings and a frozen epoch-ms clock
- Settings-cache and logging-context cleanup between tests

Usage:
    def test_something(repos, pairs, tickers):
        pairs.add_pair(PairInfo("Voltas", "18462", "NSE", "VOLTAS"))
        ...
"""

from collections.abc import Iterator

import pytest
import structlog

from tickerspine.audit.checks.factory import AuditRepositories, build_ranker, build_resolver
from tickerspine.core.settings import AuditSettings, reset_settings
from tickerspine.core.timestamps import MS_PER_DAY
from tickerspine.domain.categories import WatchCategories
from tickerspine.repositories import (
    InMemoryAlertRepository,
    InMemoryCategoryRepository,
    InMemoryExchangeRepository,
    InMemoryOrderRepository,
    InMemoryPairRepository,
    InMemoryRecentRepository,
    InMemorySequenceRepository,
    InMemoryTickerRepository,
)

# 2025-01-01T00:00:00Z
NOW_MS = 1_735_689_600_000


# =============================================================================
# Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _isolate_settings_and_logging() -> Iterator[None]:
    """Fresh settings cache and an empty logging context for every test."""
    reset_settings()
    structlog.contextvars.clear_contextvars()
    yield
    reset_settings()
    structlog.contextvars.clear_contextvars()


# =============================================================================
# Settings / time
# =============================================================================


@pytest.fixture()
def settings() -> AuditSettings:
    return AuditSettings(_env_file=None)


@pytest.fixture()
def clock():
    """Frozen clock returning ``NOW_MS``."""
    return lambda: NOW_MS


@pytest.fixture()
def days_ago():
    """Epoch ms ``days`` before the frozen clock."""
    return lambda days: NOW_MS - int(days * MS_PER_DAY)


# =============================================================================
# Repositories
# =============================================================================


@pytest.fixture()
def pairs() -> InMemoryPairRepository:
    return InMemoryPairRepository()


@pytest.fixture()
def tickers() -> InMemoryTickerRepository:
    return InMemoryTickerRepository()


@pytest.fixture()
def alerts() -> InMemoryAlertRepository:
    return InMemoryAlertRepository()


@pytest.fixture()
def exchanges() -> InMemoryExchangeRepository:
    return InMemoryExchangeRepository()


@pytest.fixture()
def sequences() -> InMemorySequenceRepository:
    return InMemorySequenceRepository()


@pytest.fixture()
def recent() -> InMemoryRecentRepository:
    return InMemoryRecentRepository()


@pytest.fixture()
def watch_repo() -> InMemoryCategoryRepository:
    return InMemoryCategoryRepository()


@pytest.fixture()
def flag_repo() -> InMemoryCategoryRepository:
    return InMemoryCategoryRepository()


@pytest.fixture()
def orders() -> InMemoryOrderRepository:
    return InMemoryOrderRepository()


@pytest.fixture()
def repos(pairs, tickers, alerts, exchanges, sequences, recent, watch_repo, flag_repo, orders) -> AuditRepositories:
    return AuditRepositories(
        pairs=pairs,
        tickers=tickers,
        alerts=alerts,
        exchanges=exchanges,
        sequences=sequences,
        recent=recent,
        watch=watch_repo,
        flags=flag_repo,
        orders=orders,
    )


@pytest.fixture()
def watch(watch_repo) -> WatchCategories:
    return WatchCategories(watch_repo)


@pytest.fixture()
def symbols(repos, settings):
    return build_resolver(repos, settings)


@pytest.fixture()
def ranker(repos, settings):
    return build_ranker(repos, settings)
