"""
Watch and flag categories.

A ``CategoryLists`` is a fixed family of eight ticker sets (indices 0..7).
Membership is exclusive: adding a ticker to one list removes it from the
others. Index 5 is the default watchlist.

The family is always fully initialized. Asking for an index outside 0..7
is a caller bug and raises ``CategoryIndexError``; it never reads as an
empty list.

Examples:
    >>> lists = CategoryLists()
    >>> lists.add(0, "TCS")
    >>> lists.toggle(1, "TCS")
    >>> lists.contains(0, "TCS"), lists.contains(1, "TCS")
    (False, True)
    >>> lists.get_list(8)
    Traceback (most recent call last):
    ...
    tickerspine.core.errors.CategoryIndexError: Category list for index 8 not found (valid range 0..7)

Tags:
    categories, watchlist, flags, tickerspine
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from tickerspine.core.errors import CategoryIndexError
from tickerspine.core.protocols import CategoryRepository
from tickerspine.core.settings import CATEGORY_COUNT, DEFAULT_WATCHLIST_INDEX


class CategoryLists:
    """Eight mutually exclusive ticker sets."""

    def __init__(self, lists: Mapping[int, Iterable[str]] | None = None):
        self._lists: list[set[str]] = [set() for _ in range(CATEGORY_COUNT)]
        for index, tickers in (lists or {}).items():
            self.set_list(index, tickers)

    def _check(self, index: int) -> int:
        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < CATEGORY_COUNT:
            raise CategoryIndexError(index, CATEGORY_COUNT)
        return index

    def toggle(self, index: int, ticker: str) -> None:
        """Add ``ticker`` to ``index`` if absent there, else remove it."""
        if self.contains(index, ticker):
            self.delete(index, ticker)
        else:
            self.add(index, ticker)

    def add(self, index: int, ticker: str) -> None:
        """Add ``ticker`` to ``index`` and remove it from every other list."""
        self._lists[self._check(index)].add(ticker)
        for other, members in enumerate(self._lists):
            if other != index:
                members.discard(ticker)

    def delete(self, index: int, ticker: str) -> None:
        self._lists[self._check(index)].discard(ticker)

    def set_list(self, index: int, tickers: Iterable[str]) -> None:
        """Replace the whole list at ``index``."""
        self._lists[self._check(index)] = set(tickers)

    def get_list(self, index: int) -> frozenset[str]:
        return frozenset(self._lists[self._check(index)])

    def contains(self, index: int, ticker: str) -> bool:
        return ticker in self._lists[self._check(index)]

    def contains_in_any(self, ticker: str, indices: Iterable[int] | None = None) -> bool:
        """Whether ``ticker`` is in any list (or any of ``indices``)."""
        selected = range(CATEGORY_COUNT) if indices is None else [self._check(i) for i in indices]
        return any(ticker in self._lists[i] for i in selected)

    def get_all_items(self) -> set[str]:
        items: set[str] = set()
        for members in self._lists:
            items |= members
        return items

    def lists(self) -> Iterator[tuple[int, frozenset[str]]]:
        """Iterate ``(index, members)`` in index order."""
        for index, members in enumerate(self._lists):
            yield index, frozenset(members)

    def __len__(self) -> int:
        return CATEGORY_COUNT

    def __repr__(self) -> str:
        sizes = ", ".join(f"{i}:{len(m)}" for i, m in enumerate(self._lists))
        return f"CategoryLists({sizes})"


class WatchCategories:
    """Watch-state lookups over a category repository."""

    def __init__(self, repo: CategoryRepository):
        self._repo = repo

    def get_category(self, index: int) -> frozenset[str]:
        return self._repo.get_category_lists().get_list(index)

    def get_default_watchlist(self) -> frozenset[str]:
        return self.get_category(DEFAULT_WATCHLIST_INDEX)

    def is_watched(self, ticker: str) -> bool:
        """A ticker is watched when it sits in any watch category."""
        return self._repo.get_category_lists().contains_in_any(ticker)

    def is_in_any(self, ticker: str, indices: Iterable[int]) -> bool:
        return self._repo.get_category_lists().contains_in_any(ticker, indices)


__all__ = ["CategoryLists", "WatchCategories"]
