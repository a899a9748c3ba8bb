# File: utils/dt_utils.py
"""Calendar math for LifeDates.

Pure Python date/time functions with ZERO Home Assistant dependencies.
All functions here can be unit tested without Home Assistant mocking.

⚠️ UTILS PURITY: NO `homeassistant.*` imports allowed.
   Uses standard library: datetime, zoneinfo, dateutil.

Every value entering the engines is a calendar `date` (midnight-normalised).
Interval arithmetic uses calendar semantics: adding one month to Jan 31 clamps
to the last day of February rather than overflowing into March.

Functions:
    - dt_today_local: Get today's date in local timezone
    - dt_now_utc: Get current datetime in UTC
    - dt_parse_date: Parse date strings
    - as_calendar_date: Normalize date/datetime/ISO inputs to a date
    - date_parts: Split a date into (year, month, day)
    - same_month_day: Compare two dates ignoring the year
    - safe_date: Build a date, clamping impossible days
    - dt_add_interval / dt_subtract_interval: Calendar interval arithmetic
    - days_between: Whole-day difference
    - date_to_week_coordinates / week_coordinates_to_date: Life calendar
"""

from __future__ import annotations

import calendar
from datetime import UTC, date, datetime, timedelta
import logging
from zoneinfo import ZoneInfo

# Third-party date utilities (no HA dependency)
from dateutil.relativedelta import relativedelta

# Module-level logger (no HA dependency)
_LOGGER = logging.getLogger(__name__)

# ==============================================================================
# Constants (local copies to avoid circular imports)
# These mirror const.py values but are defined locally for purity.
# ==============================================================================

# Default timezone - can be overridden by caller
DEFAULT_TIME_ZONE: ZoneInfo = ZoneInfo("UTC")

# Time unit constants
TIME_UNIT_DAYS = "days"
TIME_UNIT_WEEKS = "weeks"
TIME_UNIT_MONTHS = "months"
TIME_UNIT_YEARS = "years"

DAYS_PER_WEEK = 7


# ==============================================================================
# Timezone Configuration
# ==============================================================================


def set_default_timezone(tz: ZoneInfo) -> None:
    """Set the default timezone for all dt_utils functions.

    Call this during integration setup to configure the user's timezone.
    """
    global DEFAULT_TIME_ZONE  # noqa: PLW0603
    DEFAULT_TIME_ZONE = tz


def get_default_timezone() -> ZoneInfo:
    """Get the current default timezone."""
    return DEFAULT_TIME_ZONE


# ==============================================================================
# Current Date/Time Functions
# ==============================================================================


def dt_today_local(tz: ZoneInfo | None = None) -> date:
    """Return today's date in local timezone as a `datetime.date`.

    Args:
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.

    Example:
        datetime.date(2025, 4, 7)
    """
    tz_info = tz or DEFAULT_TIME_ZONE
    return datetime.now(tz_info).date()


def dt_now_utc() -> datetime:
    """Return the current datetime in UTC (timezone-aware)."""
    return datetime.now(UTC)


# ==============================================================================
# Parsing / Normalization
# ==============================================================================


def dt_parse_date(date_str: str | None) -> date | None:
    """Safely parse a date string into a `datetime.date`.

    Accepts formats:
    - "2025-04-07" (ISO format)
    - "2025-04-07T10:00:00+00:00" (ISO datetime, date part kept)
    - "04/07/2025" (US format)
    - "2025/04/07"

    Args:
        date_str: Date string to parse, or None

    Returns:
        datetime.date or None if parsing fails.
    """
    if not date_str or not isinstance(date_str, str):
        return None

    try:
        return date.fromisoformat(date_str)
    except ValueError:
        pass

    try:
        return datetime.fromisoformat(date_str).date()
    except ValueError:
        pass

    for fmt in ("%m/%d/%Y", "%Y/%m/%d"):
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue

    return None


def as_calendar_date(
    value: str | date | datetime | None, tz: ZoneInfo | None = None
) -> date | None:
    """Normalize a date, datetime or ISO string to a calendar date.

    Timezone-aware datetimes are converted to the local timezone before the
    date part is taken, so "today" is always the local calendar day.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(tz or DEFAULT_TIME_ZONE)
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return dt_parse_date(value)
    _LOGGER.warning("as_calendar_date: unsupported input type %s", type(value))
    return None


# ==============================================================================
# Calendar Primitives
# ==============================================================================


def date_parts(value: date) -> tuple[int, int, int]:
    """Return (year, month, day) for a date."""
    return value.year, value.month, value.day


def same_month_day(first: date, second: date) -> bool:
    """Return True when both dates share month and day, ignoring the year."""
    return (first.month, first.day) == (second.month, second.day)


def safe_date(year: int, month: int, day: int) -> date:
    """Build a date, clamping the day to the last valid day of the month.

    safe_date(2023, 2, 29) -> 2023-02-28
    """
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day, last_day))


def days_between(start: date | datetime, end: date | datetime) -> int:
    """Return the whole number of days from start to end.

    Both values are normalised to their calendar date (midnight) first, so
    time-of-day never produces a fractional or off-by-one result.
    """
    start_date = start.date() if isinstance(start, datetime) else start
    end_date = end.date() if isinstance(end, datetime) else end
    return (end_date - start_date).days


# ==============================================================================
# Interval Calculations
# ==============================================================================


def dt_add_interval(base_date: date, interval_unit: str, delta: int) -> date | None:
    """Add (or subtract, with negative delta) a calendar interval to a date.

    Days and weeks are fixed day counts. Months and years are calendar
    intervals that clamp to the last valid day of the resulting month.

    Args:
        base_date: Starting calendar date.
        interval_unit: One of the TIME_UNIT_* constants.
        delta: Number of units to add.

    Returns:
        The resulting date, or None on error (unknown unit, out of range).

    Example:
        >>> dt_add_interval(date(2024, 1, 31), "months", 1)
        datetime.date(2024, 2, 29)
    """
    try:
        if interval_unit == TIME_UNIT_DAYS:
            return base_date + timedelta(days=delta)
        if interval_unit == TIME_UNIT_WEEKS:
            return base_date + timedelta(days=delta * DAYS_PER_WEEK)
        if interval_unit == TIME_UNIT_MONTHS:
            return base_date + relativedelta(months=delta)
        if interval_unit == TIME_UNIT_YEARS:
            return base_date + relativedelta(years=delta)
    except (ValueError, OverflowError) as exc:
        _LOGGER.error("Error adding interval: %s", exc)
        return None

    _LOGGER.warning("Unknown interval_unit: %s", interval_unit)
    return None


def dt_subtract_interval(
    base_date: date, interval_unit: str, delta: int
) -> date | None:
    """Subtract a calendar interval from a date.

    Uses the same semantics as dt_add_interval: a one-month lead on a
    March 31 target resolves to the last day of February.
    """
    return dt_add_interval(base_date, interval_unit, -delta)


# ==============================================================================
# Life Calendar (week grid)
# ==============================================================================


def date_to_week_coordinates(value: date, birth_date: date) -> tuple[int, int, int]:
    """Convert a date to life-calendar coordinates.

    Returns:
        (week_year, week_number, day_of_week) where week_year counts calendar
        years since the birth year, week_number is the zero-based week within
        the calendar year and day_of_week is 1-7.
    """
    days_since_new_year = (value - date(value.year, 1, 1)).days
    week_year = value.year - birth_date.year
    week_number = days_since_new_year // DAYS_PER_WEEK
    day_of_week = days_since_new_year % DAYS_PER_WEEK + 1
    return week_year, week_number, day_of_week


def week_coordinates_to_date(
    birth_date: date, week_year: int, week_number: int, day_of_week: int = 1
) -> date:
    """Convert life-calendar coordinates back to a calendar date."""
    new_year = date(birth_date.year + week_year, 1, 1)
    return new_year + timedelta(
        days=week_number * DAYS_PER_WEEK + max(day_of_week, 1) - 1
    )
