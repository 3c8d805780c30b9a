"""
In-memory repositories.

Dict-backed implementations of every protocol in
``tickerspine.core.protocols``. Tests use them as substitute collaborators;
an application can load its persisted state into them before auditing.
Persistence itself is out of scope here.

Architecture::

    InMemoryMapRepository[K, V]
      ├── get_all_keys() / get() / has()      ← read protocol
      └── set() / delete() / clear() / get_count()
    ├── InMemoryPairRepository       + get_pair_info()
    ├── InMemoryTickerRepository     + reverse map (investing → tv)
    ├── InMemoryAlertRepository      + add_alert()
    ├── InMemoryExchangeRepository
    ├── InMemorySequenceRepository
    └── InMemoryRecentRepository     + touch()

    InMemoryCategoryRepository       get_category_lists()
    InMemoryOrderRepository          async get_gtt_orders()

Tags:
    repository, in-memory, testing, tickerspine
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Generic, TypeVar

from tickerspine.core.timestamps import now_ms
from tickerspine.domain.categories import CategoryLists
from tickerspine.domain.models import Alert, Order, PairInfo

K = TypeVar("K")
V = TypeVar("V")


class InMemoryMapRepository(Generic[K, V]):
    """Insertion-ordered key → value store."""

    def __init__(self, items: Mapping[K, V] | None = None):
        self._map: dict[K, V] = {}
        for key, value in (items or {}).items():
            self.set(key, value)

    def get_all_keys(self) -> list[K]:
        return list(self._map)

    def get(self, key: K) -> V | None:
        return self._map.get(key)

    def has(self, key: K) -> bool:
        return key in self._map

    def set(self, key: K, value: V) -> None:
        self._map[key] = value

    def delete(self, key: K) -> bool:
        return self._map.pop(key, None) is not None

    def clear(self) -> None:
        self._map.clear()

    def get_count(self) -> int:
        return len(self._map)


class InMemoryPairRepository(InMemoryMapRepository[str, PairInfo]):
    """Investing ticker → PairInfo."""

    def get_pair_info(self, investing_ticker: str) -> PairInfo | None:
        return self.get(investing_ticker)

    def add_pair(self, pair: PairInfo) -> None:
        self.set(pair.investing_ticker, pair)


class InMemoryTickerRepository(InMemoryMapRepository[str, str]):
    """TV ticker → investing ticker, with a maintained reverse map.

    When several TV tickers point at one investing ticker the reverse map
    keeps the last one written; the collision check exists to surface that.
    """

    def __init__(self, items: Mapping[str, str] | None = None):
        self._reverse: dict[str, str] = {}
        super().__init__(items)

    def get_investing_ticker(self, tv_ticker: str) -> str | None:
        return self.get(tv_ticker)

    def get_tv_ticker(self, investing_ticker: str) -> str | None:
        return self._reverse.get(investing_ticker)

    def set(self, key: str, value: str) -> None:
        previous = self._map.get(key)
        super().set(key, value)
        if previous is not None and previous != value:
            self._unlink(previous, key)
        self._reverse[value] = key

    def delete(self, key: str) -> bool:
        value = self._map.get(key)
        removed = super().delete(key)
        if value is not None:
            self._unlink(value, key)
        return removed

    def _unlink(self, investing_ticker: str, tv_ticker: str) -> None:
        if self._reverse.get(investing_ticker) != tv_ticker:
            return
        del self._reverse[investing_ticker]
        # Fall back to the last remaining alias in insertion order.
        for alias, target in self._map.items():
            if target == investing_ticker:
                self._reverse[investing_ticker] = alias

    def clear(self) -> None:
        super().clear()
        self._reverse.clear()


class InMemoryAlertRepository(InMemoryMapRepository[str, list[Alert]]):
    """PairId → alerts."""

    def add_alert(self, alert: Alert) -> None:
        self._map.setdefault(alert.pair_id, []).append(alert)

    @classmethod
    def from_alerts(cls, alerts: Iterable[Alert]) -> InMemoryAlertRepository:
        repo = cls()
        for alert in alerts:
            repo.add_alert(alert)
        return repo


class InMemoryExchangeRepository(InMemoryMapRepository[str, str]):
    """TV ticker → exchange-qualified ticker (``"NSE:TCS"``)."""


class InMemorySequenceRepository(InMemoryMapRepository[str, str]):
    """TV ticker → price-sequence name."""


class InMemoryRecentRepository(InMemoryMapRepository[str, int]):
    """TV ticker → last-open epoch milliseconds."""

    def touch(self, tv_ticker: str, at_ms: int | None = None) -> None:
        self.set(tv_ticker, now_ms() if at_ms is None else at_ms)


class InMemoryCategoryRepository:
    """Holds one ``CategoryLists`` (watch or flag)."""

    def __init__(self, lists: CategoryLists | Mapping[int, Iterable[str]] | None = None):
        if isinstance(lists, CategoryLists):
            self._lists = lists
        else:
            self._lists = CategoryLists(lists)

    def get_category_lists(self) -> CategoryLists:
        return self._lists

    def get_all_items(self) -> set[str]:
        return self._lists.get_all_items()


class InMemoryOrderRepository:
    """Broker ticker → order legs.

    ``get_gtt_orders`` is a coroutine so checks exercise the same await
    path as against a network-backed broker client.
    """

    def __init__(self, orders: Mapping[str, Sequence[Order]] | None = None):
        self._orders: dict[str, list[Order]] = {}
        for ticker, legs in (orders or {}).items():
            for leg in legs:
                self.add_order(ticker, leg)

    def add_order(self, ticker: str, order: Order) -> None:
        self._orders.setdefault(ticker, []).append(order)

    async def get_gtt_orders(self) -> Mapping[str, Sequence[Order]]:
        return {ticker: tuple(legs) for ticker, legs in self._orders.items()}

    def get_count(self) -> int:
        return len(self._orders)
