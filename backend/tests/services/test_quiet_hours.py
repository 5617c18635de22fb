"""
Tests for quiet hours evaluation.

This test module verifies:
1. Overnight windows (start > end) block across midnight
2. Same-day windows block between start and end
3. Window boundaries (blocked at start, allowed at end)
4. Disabled quiet hours and degenerate (start == end) windows never block
5. Timezone handling for datetime inputs
"""

from datetime import datetime, time, timezone

import pytest

from personalization.schemas.notification import QuietHours
from personalization.services.quiet_hours import (
    is_notification_allowed,
    is_quiet_hours_active,
    is_within_window,
    local_minutes,
    minutes_since_midnight,
)


def quiet(start="22:00", end="08:00", enabled=True, tz="UTC") -> QuietHours:
    return QuietHours(enabled=enabled, start=start, end=end, timezone=tz)


class TestMinuteConversion:
    """Test HH:MM to minutes-since-midnight conversion."""

    def test_string(self):
        assert minutes_since_midnight("00:00") == 0
        assert minutes_since_midnight("08:30") == 510
        assert minutes_since_midnight("23:59") == 1439

    def test_time_object(self):
        assert minutes_since_midnight(time(22, 15)) == 1335


class TestWindow:
    """Test the raw window predicate."""

    def test_overnight_window(self):
        start, end = 22 * 60, 8 * 60
        assert is_within_window(23 * 60, start, end)
        assert is_within_window(2 * 60, start, end)
        assert not is_within_window(12 * 60, start, end)

    def test_same_day_window(self):
        start, end = 12 * 60, 14 * 60
        assert is_within_window(13 * 60, start, end)
        assert not is_within_window(11 * 60 + 59, start, end)
        assert not is_within_window(14 * 60, start, end)

    def test_degenerate_window_never_matches(self):
        for minute in (0, 9 * 60, 9 * 60 + 1, 1439):
            assert not is_within_window(minute, 9 * 60, 9 * 60)


class TestIsNotificationAllowed:
    """Test is_notification_allowed with string times."""

    @pytest.mark.parametrize("current, expected", [
        ("23:00", False),
        ("02:00", False),
        ("10:00", True),
    ])
    def test_overnight_scenario(self, current, expected):
        assert is_notification_allowed(quiet("22:00", "08:00"), current) is expected

    def test_overnight_boundaries(self):
        window = quiet("22:00", "08:00")
        assert is_notification_allowed(window, "22:00") is False
        assert is_notification_allowed(window, "08:00") is True
        assert is_notification_allowed(window, "07:59") is False
        assert is_notification_allowed(window, "21:59") is True

    def test_same_day_boundaries(self):
        window = quiet("12:00", "14:00")
        assert is_notification_allowed(window, "12:00") is False
        assert is_notification_allowed(window, "13:30") is False
        assert is_notification_allowed(window, "14:00") is True
        assert is_notification_allowed(window, "11:59") is True

    @pytest.mark.parametrize("current", ["00:00", "03:00", "23:00", "12:00"])
    def test_disabled_always_allows(self, current):
        assert is_notification_allowed(quiet(enabled=False), current) is True

    @pytest.mark.parametrize("current", ["00:00", "09:00", "09:01", "23:59"])
    def test_degenerate_window_never_blocks(self, current):
        assert is_notification_allowed(quiet("09:00", "09:00"), current) is True

    def test_time_object_input(self):
        assert is_notification_allowed(quiet(), time(23, 30)) is False
        assert is_notification_allowed(quiet(), time(9, 0)) is True


class TestTimezones:
    """Test datetime inputs and timezone conversion."""

    def test_aware_datetime_converted_to_window_timezone(self):
        # 03:30 UTC is 22:30 the previous evening in New York (EST, UTC-5)
        window = quiet("22:00", "08:00", tz="America/New_York")
        moment = datetime(2024, 1, 15, 3, 30, tzinfo=timezone.utc)
        assert is_notification_allowed(window, moment) is False

    def test_aware_datetime_outside_window(self):
        # 17:00 UTC is 12:00 in New York
        window = quiet("22:00", "08:00", tz="America/New_York")
        moment = datetime(2024, 1, 15, 17, 0, tzinfo=timezone.utc)
        assert is_notification_allowed(window, moment) is True

    def test_naive_datetime_read_in_given_timezone(self):
        # Naive 12:00 in Tokyo is 03:00 UTC, inside a UTC 22:00-08:00 window
        window = quiet("22:00", "08:00", tz="UTC")
        moment = datetime(2024, 1, 15, 12, 0)
        assert is_notification_allowed(window, moment, timezone="Asia/Tokyo") is False
        assert is_notification_allowed(window, moment) is True

    def test_unknown_timezone_falls_back_to_utc(self):
        moment = datetime(2024, 1, 15, 23, 0)
        assert local_minutes(moment, "UTC", "Not/AZone") == 23 * 60

    def test_string_time_is_not_converted(self):
        assert local_minutes("23:00", "Asia/Tokyo", "America/New_York") == 23 * 60


class TestQuietHoursActive:
    """Test the status helper."""

    def test_active_inside_enabled_window(self):
        assert is_quiet_hours_active(quiet(), "23:00") is True

    def test_inactive_outside_window(self):
        assert is_quiet_hours_active(quiet(), "10:00") is False

    def test_inactive_when_disabled(self):
        assert is_quiet_hours_active(quiet(enabled=False), "23:00") is False
