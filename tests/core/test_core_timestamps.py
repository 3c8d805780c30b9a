"""Tests for tickerspine.core.timestamps."""

from datetime import UTC, datetime

from tickerspine.core.timestamps import MS_PER_DAY, days_to_ms, now_ms, to_datetime, whole_days_between


def test_days_to_ms():
    assert days_to_ms(90) == 90 * MS_PER_DAY


def test_whole_days_floors():
    assert whole_days_between(0, MS_PER_DAY * 2 - 1) == 1
    assert whole_days_between(0, MS_PER_DAY * 2) == 2


def test_to_datetime_is_utc():
    assert to_datetime(1_735_689_600_000) == datetime(2025, 1, 1, tzinfo=UTC)


def test_now_ms_is_epoch_millis():
    assert now_ms() > 1_700_000_000_000
