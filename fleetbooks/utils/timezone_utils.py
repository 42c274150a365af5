"""
Timezone and reporting-window helpers for FleetBooks.
Trip and payment dates are calendar dates in the display timezone
(configurable, default Asia/Kolkata); audit timestamps are stored in UTC.
"""

import calendar
from datetime import date, datetime, timedelta, timezone
from typing import Optional, Tuple

import pytz

DEFAULT_DISPLAY_TIMEZONE = "Asia/Kolkata"

# Start of the "all" reporting window
EPOCH_DATE = date(2020, 1, 1)


def get_display_timezone() -> str:
    """
    Get the configured display timezone.
    Falls back to Asia/Kolkata outside of an application context.
    """
    try:
        from flask import current_app
        return current_app.config.get("DISPLAY_TIMEZONE", DEFAULT_DISPLAY_TIMEZONE)
    except RuntimeError:
        return DEFAULT_DISPLAY_TIMEZONE


def utc_now() -> datetime:
    """
    Get current time in UTC as a naive datetime, the form stored in DateTime columns.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def display_today(now: Optional[datetime] = None) -> date:
    """
    Today's calendar date in the display timezone.

    Args:
        now: Optional aware datetime to use instead of the current time
    """
    display_tz = pytz.timezone(get_display_timezone())
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(display_tz).date()


def month_bounds(month: int, year: int) -> Tuple[date, date]:
    """
    First and last calendar day of a month.

    Raises:
        ValueError: If month is outside 1-12
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month must be between 1 and 12, got {month}")
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


# Rolling windows used by the business analytics dashboard
ANALYTICS_PERIODS = {"7d": 7, "30d": 30, "90d": 90}

# Calendar windows used by the owner dashboard
OWNER_PERIODS = ("today", "week", "month", "all")


def analytics_period_start(period: str, today: Optional[date] = None) -> date:
    """
    Start date for the business analytics periods (7d, 30d, 90d, all).
    Unknown periods fall back to the whole history.
    """
    today = today or display_today()
    days = ANALYTICS_PERIODS.get(period)
    if days is None:
        return EPOCH_DATE
    return today - timedelta(days=days)


def owner_period_start(period: str, today: Optional[date] = None) -> date:
    """
    Start date for the owner dashboard periods (today, week, month, all).
    Unknown periods fall back to the whole history.
    """
    today = today or display_today()
    if period == "today":
        return today
    if period == "week":
        return today - timedelta(days=7)
    if period == "month":
        return today.replace(day=1)
    return EPOCH_DATE
