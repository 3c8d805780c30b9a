"""Tests for tickerspine.domain.categories: CategoryLists + WatchCategories."""

from __future__ import annotations

import pytest

from tickerspine.core.errors import CategoryIndexError
from tickerspine.domain.categories import CategoryLists, WatchCategories
from tickerspine.repositories import InMemoryCategoryRepository


# ── CategoryLists ────────────────────────────────────────────────────────


class TestCategoryLists:
    def test_always_eight_initialized_lists(self):
        lists = CategoryLists()
        assert len(lists) == 8
        assert [members for _, members in lists.lists()] == [frozenset()] * 8

    def test_toggle_adds_then_removes(self):
        lists = CategoryLists()
        lists.toggle(2, "TCS")
        assert lists.contains(2, "TCS")
        lists.toggle(2, "TCS")
        assert not lists.contains(2, "TCS")

    def test_add_is_exclusive(self):
        lists = CategoryLists()
        lists.add(0, "TCS")
        lists.add(3, "TCS")
        assert not lists.contains(0, "TCS")
        assert lists.contains(3, "TCS")

    def test_set_list_replaces(self):
        lists = CategoryLists({5: ["A", "B"]})
        lists.set_list(5, ["C"])
        assert lists.get_list(5) == frozenset({"C"})

    def test_delete(self):
        lists = CategoryLists({1: ["A"]})
        lists.delete(1, "A")
        lists.delete(1, "missing")
        assert lists.get_list(1) == frozenset()

    def test_get_list_is_a_copy(self):
        lists = CategoryLists({0: ["A"]})
        snapshot = lists.get_list(0)
        lists.add(0, "B")
        assert snapshot == frozenset({"A"})

    def test_contains_in_any(self):
        lists = CategoryLists({4: ["RUN"], 6: ["OTHER"]})
        assert lists.contains_in_any("RUN")
        assert lists.contains_in_any("RUN", [0, 1, 4])
        assert not lists.contains_in_any("OTHER", [0, 1, 4])

    def test_get_all_items(self):
        lists = CategoryLists({0: ["A"], 7: ["B"]})
        assert lists.get_all_items() == {"A", "B"}

    @pytest.mark.parametrize("index", [-1, 8, 100])
    def test_out_of_range_raises(self, index):
        lists = CategoryLists()
        with pytest.raises(CategoryIndexError, match=f"index {index} not found"):
            lists.get_list(index)
        with pytest.raises(CategoryIndexError):
            lists.toggle(index, "TCS")

    def test_bool_index_rejected(self):
        with pytest.raises(CategoryIndexError):
            CategoryLists().get_list(True)

    def test_contains_in_any_checks_indices(self):
        with pytest.raises(CategoryIndexError):
            CategoryLists().contains_in_any("TCS", [0, 9])

    def test_constructor_rejects_bad_index(self):
        with pytest.raises(CategoryIndexError):
            CategoryLists({8: ["A"]})


# ── WatchCategories ──────────────────────────────────────────────────────


class TestWatchCategories:
    def test_is_watched_any_category(self):
        watch = WatchCategories(InMemoryCategoryRepository({6: ["TCS"]}))
        assert watch.is_watched("TCS")
        assert not watch.is_watched("INFY")

    def test_default_watchlist_is_index_five(self):
        watch = WatchCategories(InMemoryCategoryRepository({5: ["TCS"]}))
        assert watch.get_default_watchlist() == frozenset({"TCS"})

    def test_get_category_and_is_in_any(self):
        watch = WatchCategories(InMemoryCategoryRepository({1: ["TCS"]}))
        assert watch.get_category(1) == frozenset({"TCS"})
        assert watch.is_in_any("TCS", (0, 1, 4))
        assert not watch.is_in_any("TCS", (2, 3))

    def test_reads_live_repository(self):
        repo = InMemoryCategoryRepository()
        watch = WatchCategories(repo)
        assert not watch.is_watched("TCS")
        repo.get_category_lists().add(0, "TCS")
        assert watch.is_watched("TCS")
