"""
Epoch-millisecond helpers.

Last-open timestamps are stored as integer epoch milliseconds. Checks that
compare against "now" take a ``Clock`` so a scan is reproducible in tests.

STDLIB ONLY.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from datetime import UTC, datetime

MS_PER_DAY = 24 * 60 * 60 * 1000

Clock = Callable[[], int]


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def days_to_ms(days: float) -> int:
    return int(days * MS_PER_DAY)


def whole_days_between(earlier_ms: int, later_ms: int) -> int:
    """Number of complete days between two epoch-ms instants."""
    return (later_ms - earlier_ms) // MS_PER_DAY


def to_datetime(epoch_ms: int) -> datetime:
    """Convert epoch milliseconds to an aware UTC datetime."""
    return datetime.fromtimestamp(epoch_ms / 1000, tz=UTC)
