"""
Read-side repository protocols consumed by the audit engine.

The engine never writes and never assumes how records persist. Each check
and the canonical ranker receive the repositories they need as constructor
arguments; anything matching one of these shapes works (in-memory maps in
tests, storage-backed stores in an application).

Architecture:
    ::

        KeyValueRepository[K, V]   get_all_keys() / get(key) / has(key)
        ├── PairRepository         investing ticker → PairInfo
        ├── TickerRepository       tv ticker → investing ticker (+ reverse)
        ├── AlertRepository        pairId → list[Alert]
        ├── ExchangeRepository     tv ticker → "EXCH:SYMBOL"
        ├── SequenceRepository     tv ticker → sequence name
        └── RecentRepository       tv ticker → last-open epoch ms

        CategoryRepository         get_category_lists() → CategoryLists
        OrderRepository            async get_gtt_orders() → ticker → [Order]

Guardrails:
    ❌ DON'T: Add write methods here; the engine is read-only
    ✅ DO: Put mutation on the concrete repositories

    ❌ DON'T: Look repositories up from a global container inside a check
    ✅ DO: Inject them at construction

Tags:
    protocol, repository, contracts, tickerspine
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from tickerspine.domain.categories import CategoryLists
    from tickerspine.domain.models import Alert, Order, PairInfo

K = TypeVar("K")
V = TypeVar("V", covariant=True)


@runtime_checkable
class KeyValueRepository(Protocol[K, V]):
    """Enumerate keys, fetch by key, test for a key."""

    def get_all_keys(self) -> list[K]: ...

    def get(self, key: K) -> V | None: ...

    def has(self, key: K) -> bool: ...


@runtime_checkable
class PairRepository(KeyValueRepository[str, "PairInfo"], Protocol):
    """Vendor pair info keyed by investing ticker."""

    def get_pair_info(self, investing_ticker: str) -> PairInfo | None: ...


@runtime_checkable
class TickerRepository(KeyValueRepository[str, str], Protocol):
    """Charting ticker → vendor ticker, with the reverse lookup."""

    def get_investing_ticker(self, tv_ticker: str) -> str | None: ...

    def get_tv_ticker(self, investing_ticker: str) -> str | None: ...


@runtime_checkable
class AlertRepository(KeyValueRepository[str, "list[Alert]"], Protocol):
    """Price alerts grouped by vendor pairId."""


@runtime_checkable
class ExchangeRepository(KeyValueRepository[str, str], Protocol):
    """Exchange-qualified ticker keyed by charting ticker."""


@runtime_checkable
class SequenceRepository(KeyValueRepository[str, str], Protocol):
    """Price-sequence state keyed by charting ticker."""


@runtime_checkable
class RecentRepository(KeyValueRepository[str, int], Protocol):
    """Last-open timestamp (epoch milliseconds) keyed by charting ticker."""


@runtime_checkable
class CategoryRepository(Protocol):
    """Watch or flag categories."""

    def get_category_lists(self) -> CategoryLists: ...


@runtime_checkable
class OrderRepository(Protocol):
    """Conditional broker orders; the read may cross a network boundary."""

    async def get_gtt_orders(self) -> Mapping[str, Sequence[Order]]: ...


__all__ = [
    "KeyValueRepository",
    "PairRepository",
    "TickerRepository",
    "AlertRepository",
    "ExchangeRepository",
    "SequenceRepository",
    "RecentRepository",
    "CategoryRepository",
    "OrderRepository",
]
