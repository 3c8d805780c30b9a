"""
Check archetypes: the generic scan algorithms behind every audit.

Each concrete check is a thin configuration of one of these functions over
specific repositories. They are pure: same inputs, same outputs, in input
order, so two runs over an unchanged snapshot are identical.

STDLIB ONLY - NO PYDANTIC.

Archetypes:
    ::

        find_missing           existence        key in A without a value in B
        group_duplicates       duplicate-group  derived key shared by >= 2 members
        find_orphans           orphan           dependents whose parent is gone
        missing_from_categories set-membership  ticker outside a union of lists
        matches_accepted       numeric-tolerance value within ±t of an accepted one
        assess_staleness       staleness        never recorded / older than threshold

Examples:
    >>> group_duplicates(["VOLTAS", "VOLT", "TCS"], {"VOLTAS": "18462", "VOLT": "18462", "TCS": "1"}.get)
    {'18462': ['VOLTAS', 'VOLT']}
    >>> matches_accepted(6368, (3200, 6400), 0.01)
    True
    >>> assess_staleness(0, now_ms=10, threshold_ms=5)
    Staleness(severity=<Severity.HIGH: 'HIGH'>, days_since_open=-1, last_opened=0)

Tags:
    audit, archetype, pure-function, determinism, tickerspine
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import TypeVar

from tickerspine.audit.models import Severity
from tickerspine.core.timestamps import whole_days_between
from tickerspine.domain.categories import CategoryLists

K = TypeVar("K")
G = TypeVar("G", bound=Hashable)
D = TypeVar("D")


# =============================================================================
# EXISTENCE
# =============================================================================


def find_missing(keys: Iterable[K], resolve: Callable[[K], object | None]) -> list[K]:
    """Keys whose relation resolves to nothing (``None`` or empty)."""
    return [key for key in keys if not resolve(key)]


def first_per_group(keys: Iterable[K], group_of: Callable[[K], G | None]) -> list[K]:
    """First key seen for each group, skipping keys without a group.

    Used by the per-instrument existence checks, which audit one alias per
    pairId instead of every alias.
    """
    seen: set[G] = set()
    firsts: list[K] = []
    for key in keys:
        group = group_of(key)
        if group is None or group in seen:
            continue
        seen.add(group)
        firsts.append(key)
    return firsts


# =============================================================================
# DUPLICATE GROUP
# =============================================================================


def group_by(keys: Iterable[K], group_of: Callable[[K], G | None]) -> dict[G, list[K]]:
    """Group keys by a derived value, preserving first-seen order.

    Keys whose derived value is ``None`` are dropped; a key appearing
    twice in the input is kept once.
    """
    groups: dict[G, list[K]] = {}
    for key in keys:
        group = group_of(key)
        if group is None:
            continue
        members = groups.setdefault(group, [])
        if key not in members:
            members.append(key)
    return groups


def group_duplicates(keys: Iterable[K], group_of: Callable[[K], G | None]) -> dict[G, list[K]]:
    """Groups with two or more distinct members."""
    return {group: members for group, members in group_by(keys, group_of).items() if len(members) >= 2}


# =============================================================================
# ORPHAN
# =============================================================================


def find_orphans(dependents: Mapping[G, D], parent_exists: Callable[[G], bool]) -> list[tuple[G, D]]:
    """Parent ids referenced by dependents whose parent record is absent.

    One entry per parent id, carrying its dependents unchanged, so callers
    aggregate (count, name) instead of reporting each dependent.
    """
    return [(parent_id, deps) for parent_id, deps in dependents.items() if not parent_exists(parent_id)]


# =============================================================================
# SET MEMBERSHIP
# =============================================================================


def missing_from_categories(ticker: str, lists: CategoryLists, indices: Sequence[int]) -> bool:
    """True when ``ticker`` is in none of the listed categories."""
    return not lists.contains_in_any(ticker, indices)


# =============================================================================
# NUMERIC TOLERANCE
# =============================================================================


def within_tolerance(value: float, expected: float, tolerance: float) -> bool:
    """Relative comparison: ``|value - expected| / expected <= tolerance``."""
    if expected == 0:
        return value == 0
    return abs(value - expected) / abs(expected) <= tolerance


def matches_accepted(value: float, accepted: Iterable[float], tolerance: float) -> bool:
    return any(within_tolerance(value, expected, tolerance) for expected in accepted)


# =============================================================================
# STALENESS
# =============================================================================

NEVER_OPENED = -1


@dataclass(frozen=True)
class Staleness:
    severity: Severity
    days_since_open: int
    last_opened: int


def assess_staleness(last_opened: int | None, *, now_ms: int, threshold_ms: int) -> Staleness | None:
    """
    Classify one last-access timestamp.

    Returns:
        ``HIGH`` with ``days_since_open == -1`` when never recorded,
        ``MEDIUM`` with whole elapsed days when older than the threshold,
        ``None`` when within it.
    """
    if not last_opened or last_opened <= 0:
        return Staleness(Severity.HIGH, NEVER_OPENED, 0)
    if last_opened < now_ms - threshold_ms:
        return Staleness(Severity.MEDIUM, whole_days_between(last_opened, now_ms), last_opened)
    return None


__all__ = [
    "find_missing",
    "first_per_group",
    "group_by",
    "group_duplicates",
    "find_orphans",
    "missing_from_categories",
    "within_tolerance",
    "matches_accepted",
    "NEVER_OPENED",
    "Staleness",
    "assess_staleness",
]
