"""Tests for time utilities."""

import pytest
from datetime import datetime, timezone, timedelta

from disasteriq.utils.time import epoch_millis, hours_ago_label, to_utc_z, utc_now_z


def test_utc_now_z_always_ends_with_z():
    """Test that utc_now_z() always ends with Z."""
    result = utc_now_z()
    assert result.endswith('Z'), f"Expected result to end with 'Z', got: {result}"


def test_to_utc_z_never_contains_plus_00_00_z():
    """Test that to_utc_z() never returns invalid +00:00Z format."""
    dt = datetime.now(timezone.utc)
    result = to_utc_z(dt)
    assert '+00:00' not in result, f"Result should not contain '+00:00', got: {result}"


def test_to_utc_z_raises_on_naive_datetime():
    """Test that to_utc_z() raises ValueError for naive datetime."""
    naive_dt = datetime.now()
    with pytest.raises(ValueError, match="Naive datetime not allowed"):
        to_utc_z(naive_dt)


def test_to_utc_z_converts_non_utc_timezone():
    """Test that to_utc_z() converts non-UTC timezone to UTC."""
    est = timezone(timedelta(hours=-5))
    dt_est = datetime(2025, 12, 23, 12, 0, 0, tzinfo=est)

    assert to_utc_z(dt_est) == '2025-12-23T17:00:00.000Z'


def test_to_utc_z_truncates_to_milliseconds():
    """Test that to_utc_z() matches the feed's millisecond precision."""
    dt = datetime(2025, 12, 23, 12, 34, 56, 123456, tzinfo=timezone.utc)
    assert to_utc_z(dt) == '2025-12-23T12:34:56.123Z'


def test_epoch_millis():
    dt = datetime(2025, 1, 1, tzinfo=timezone.utc)
    assert epoch_millis(dt) == 1735689600000


@pytest.mark.parametrize("hours,label", [(1, "1 hour ago"), (2, "2 hours ago"), (24, "24 hours ago")])
def test_hours_ago_label(hours, label):
    assert hours_ago_label(hours) == label
