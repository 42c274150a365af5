"""
Tests for timezone and reporting-window helpers
"""
import pytest
from datetime import date, datetime, timezone

from fleetbooks.utils.timezone_utils import (
    EPOCH_DATE,
    analytics_period_start,
    display_today,
    get_display_timezone,
    month_bounds,
    owner_period_start,
    utc_now,
)


class TestTimezoneUtils:

    def test_default_display_timezone(self):
        """Outside an app context the Kolkata default is used"""
        assert get_display_timezone() == "Asia/Kolkata"

    def test_display_today_crosses_midnight(self):
        """20:00 UTC is already the next day in India (UTC+5:30)"""
        now = datetime(2024, 3, 31, 20, 0, tzinfo=timezone.utc)
        assert display_today(now) == date(2024, 4, 1)

    def test_display_today_naive_treated_as_utc(self):
        assert display_today(datetime(2024, 3, 31, 10, 0)) == date(2024, 3, 31)

    def test_utc_now_is_naive(self):
        assert utc_now().tzinfo is None

    def test_month_bounds(self):
        assert month_bounds(2, 2024) == (date(2024, 2, 1), date(2024, 2, 29))
        assert month_bounds(12, 2023) == (date(2023, 12, 1), date(2023, 12, 31))
        with pytest.raises(ValueError):
            month_bounds(13, 2024)

    def test_analytics_periods(self):
        today = date(2024, 5, 31)
        assert analytics_period_start("7d", today) == date(2024, 5, 24)
        assert analytics_period_start("30d", today) == date(2024, 5, 1)
        assert analytics_period_start("90d", today) == date(2024, 3, 2)
        assert analytics_period_start("all", today) == EPOCH_DATE

    def test_owner_periods(self):
        today = date(2024, 5, 15)
        assert owner_period_start("today", today) == today
        assert owner_period_start("week", today) == date(2024, 5, 8)
        assert owner_period_start("month", today) == date(2024, 5, 1)
        assert owner_period_start("all", today) == EPOCH_DATE
