"""Tests for dt_utils - pure calendar math, no HA fixtures needed."""

from __future__ import annotations

from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

import pytest

from custom_components.lifedates.utils.dt_utils import (
    as_calendar_date,
    date_to_week_coordinates,
    days_between,
    dt_add_interval,
    dt_parse_date,
    dt_subtract_interval,
    dt_today_local,
    get_default_timezone,
    safe_date,
    same_month_day,
    set_default_timezone,
    week_coordinates_to_date,
)

# =============================================================================
# TEST: PARSING
# =============================================================================


class TestParsing:
    """Date parsing and normalisation."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("2025-04-07", date(2025, 4, 7)),
            ("2025-04-07T10:00:00+00:00", date(2025, 4, 7)),
            ("04/07/2025", date(2025, 4, 7)),
            ("2025/04/07", date(2025, 4, 7)),
        ],
    )
    def test_supported_formats(self, raw: str, expected: date) -> None:
        """ISO, ISO datetime, US and slash formats all parse."""
        assert dt_parse_date(raw) == expected

    def test_garbage_returns_none(self) -> None:
        assert dt_parse_date("not a date") is None
        assert dt_parse_date("") is None
        assert dt_parse_date(None) is None

    def test_aware_datetime_uses_local_calendar_day(self) -> None:
        """23:30 UTC is already the next day in Tokyo."""
        value = datetime(2024, 3, 14, 23, 30, tzinfo=UTC)
        assert as_calendar_date(value, ZoneInfo("Asia/Tokyo")) == date(2024, 3, 15)
        assert as_calendar_date(value, ZoneInfo("UTC")) == date(2024, 3, 14)

    def test_date_passes_through(self) -> None:
        assert as_calendar_date(date(2024, 1, 1)) == date(2024, 1, 1)
        assert as_calendar_date(None) is None


# =============================================================================
# TEST: CALENDAR PRIMITIVES
# =============================================================================


class TestCalendarPrimitives:
    """safe_date, same_month_day and days_between."""

    def test_safe_date_clamps_impossible_days(self) -> None:
        assert safe_date(2023, 2, 29) == date(2023, 2, 28)
        assert safe_date(2024, 2, 30) == date(2024, 2, 29)
        assert safe_date(2024, 4, 31) == date(2024, 4, 30)
        assert safe_date(2024, 5, 31) == date(2024, 5, 31)

    def test_same_month_day_ignores_year(self) -> None:
        assert same_month_day(date(1990, 3, 15), date(2024, 3, 15))
        assert not same_month_day(date(1990, 3, 15), date(2024, 3, 16))

    def test_days_between_normalises_time_of_day(self) -> None:
        """Late evening to early morning is one whole day, not a fraction."""
        start = datetime(2024, 3, 10, 23, 59)
        end = datetime(2024, 3, 11, 0, 1)
        assert days_between(start, end) == 1
        assert days_between(date(2024, 3, 10), date(2024, 3, 15)) == 5


# =============================================================================
# TEST: INTERVAL ARITHMETIC
# =============================================================================


class TestIntervals:
    """Calendar interval addition and subtraction."""

    def test_add_month_clamps_to_month_end(self) -> None:
        assert dt_add_interval(date(2024, 1, 31), "months", 1) == date(2024, 2, 29)
        assert dt_add_interval(date(2023, 1, 31), "months", 1) == date(2023, 2, 28)

    def test_add_weeks_is_seven_days(self) -> None:
        assert dt_add_interval(date(2024, 1, 1), "weeks", 2) == date(2024, 1, 15)

    def test_add_year_from_leap_day(self) -> None:
        assert dt_add_interval(date(2024, 2, 29), "years", 1) == date(2025, 2, 28)

    def test_subtract_month_from_march_31(self) -> None:
        """A one-month lead on March 31 lands on the last day of February."""
        assert dt_subtract_interval(date(2024, 3, 31), "months", 1) == date(2024, 2, 29)
        assert dt_subtract_interval(date(2023, 3, 31), "months", 1) == date(2023, 2, 28)

    def test_subtract_days(self) -> None:
        assert dt_subtract_interval(date(2024, 3, 1), "days", 1) == date(2024, 2, 29)

    def test_unknown_unit_returns_none(self) -> None:
        assert dt_add_interval(date(2024, 1, 1), "fortnights", 1) is None

    def test_out_of_range_returns_none(self) -> None:
        assert dt_add_interval(date(9999, 12, 31), "days", 1) is None


# =============================================================================
# TEST: LIFE CALENDAR
# =============================================================================


class TestWeekCoordinates:
    """Life-calendar coordinates."""

    def test_coordinates(self) -> None:
        # 2024-06-10 is day 161 of 2024 (zero-based), exactly 23 weeks in
        assert date_to_week_coordinates(date(2024, 6, 10), date(1990, 3, 15)) == (
            34,
            23,
            1,
        )

    def test_new_year_is_origin(self) -> None:
        assert date_to_week_coordinates(date(2000, 1, 1), date(2000, 7, 1)) == (0, 0, 1)

    def test_coordinates_convert_back(self) -> None:
        birth = date(1990, 3, 15)
        value = date(2024, 6, 12)
        assert week_coordinates_to_date(
            birth, *date_to_week_coordinates(value, birth)
        ) == value


# =============================================================================
# TEST: DEFAULT TIME ZONE
# =============================================================================


class TestDefaultTimezone:
    """The configured zone decides which calendar day "today" is."""

    def test_today_follows_configured_zone(self) -> None:
        previous = get_default_timezone()
        try:
            set_default_timezone(ZoneInfo("Pacific/Kiritimati"))
            assert get_default_timezone() == ZoneInfo("Pacific/Kiritimati")
            assert dt_today_local() == datetime.now(
                ZoneInfo("Pacific/Kiritimati")
            ).date()
        finally:
            set_default_timezone(previous)
