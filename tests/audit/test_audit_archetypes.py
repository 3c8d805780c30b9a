"""Tests for tickerspine.audit.archetypes: the generic scan algorithms."""

from __future__ import annotations

import pytest

from tickerspine.audit.archetypes import (
    NEVER_OPENED,
    assess_staleness,
    find_missing,
    find_orphans,
    first_per_group,
    group_by,
    group_duplicates,
    matches_accepted,
    missing_from_categories,
    within_tolerance,
)
from tickerspine.audit.models import Severity
from tickerspine.core.timestamps import MS_PER_DAY
from tickerspine.domain.categories import CategoryLists

NOW = 1_000 * MS_PER_DAY
THRESHOLD = 90 * MS_PER_DAY


# ── Existence ────────────────────────────────────────────────────────────


class TestExistence:
    def test_find_missing_keeps_input_order(self):
        mapping = {"B": "b"}
        assert find_missing(["C", "B", "A"], mapping.get) == ["C", "A"]

    def test_empty_value_counts_as_missing(self):
        assert find_missing(["A"], {"A": ""}.get) == ["A"]

    def test_first_per_group(self):
        groups = {"VOLTAS": "1", "VOLT": "1", "TCS": "2", "GHOST": None}
        assert first_per_group(["VOLTAS", "VOLT", "GHOST", "TCS"], groups.get) == ["VOLTAS", "TCS"]


# ── Duplicate group ──────────────────────────────────────────────────────


class TestDuplicateGroup:
    def test_group_by_preserves_order(self):
        groups = {"a": "x", "b": "y", "c": "x"}
        assert group_by(["a", "b", "c"], groups.get) == {"x": ["a", "c"], "y": ["b"]}

    def test_only_groups_of_two_or_more(self):
        groups = {"VOLTAS": "18462", "VOLT": "18462", "TCS": "1"}
        assert group_duplicates(["VOLTAS", "VOLT", "TCS"], groups.get) == {"18462": ["VOLTAS", "VOLT"]}

    def test_repeated_key_is_not_a_duplicate(self):
        assert group_duplicates(["A", "A"], {"A": "1"}.get) == {}

    def test_ungrouped_keys_dropped(self):
        assert group_by(["A"], {}.get) == {}


# ── Orphan ───────────────────────────────────────────────────────────────


class TestOrphan:
    def test_one_entry_per_parent(self):
        dependents = {"ORPHAN_PAIR": ["a1", "a2"], "18462": ["a3"]}
        orphans = find_orphans(dependents, {"18462"}.__contains__)
        assert orphans == [("ORPHAN_PAIR", ["a1", "a2"])]


# ── Set membership ───────────────────────────────────────────────────────


class TestSetMembership:
    def test_missing_from_named_categories(self):
        lists = CategoryLists({4: ["RUN"], 6: ["PARKED"]})
        assert not missing_from_categories("RUN", lists, (0, 1, 4))
        assert missing_from_categories("PARKED", lists, (0, 1, 4))
        assert missing_from_categories("NOWHERE", lists, (0, 1, 4))


# ── Numeric tolerance ────────────────────────────────────────────────────


class TestNumericTolerance:
    @pytest.mark.parametrize(
        ("value", "ok"),
        [(6400, True), (6368, True), (6336, True), (6335, False), (3200, True), (3232, True), (3000, False)],
    )
    def test_accepted_multiples(self, value, ok):
        assert matches_accepted(value, (3200, 6400), 0.01) is ok

    def test_zero_expected(self):
        assert within_tolerance(0, 0, 0.01)
        assert not within_tolerance(1, 0, 0.01)


# ── Staleness ────────────────────────────────────────────────────────────


class TestStaleness:
    @pytest.mark.parametrize("last", [None, 0])
    def test_never_opened_is_high_with_sentinel(self, last):
        stale = assess_staleness(last, now_ms=NOW, threshold_ms=THRESHOLD)
        assert stale.severity is Severity.HIGH
        assert stale.days_since_open == NEVER_OPENED == -1
        assert stale.last_opened == 0

    def test_old_is_medium(self):
        stale = assess_staleness(NOW - 100 * MS_PER_DAY, now_ms=NOW, threshold_ms=THRESHOLD)
        assert stale.severity is Severity.MEDIUM
        assert stale.days_since_open == 100

    def test_recent_is_none(self):
        assert assess_staleness(NOW - 10 * MS_PER_DAY, now_ms=NOW, threshold_ms=THRESHOLD) is None

    def test_exactly_at_threshold_is_not_stale(self):
        assert assess_staleness(NOW - THRESHOLD, now_ms=NOW, threshold_ms=THRESHOLD) is None
