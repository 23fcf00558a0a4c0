"""Tests for almanac.domain.calendar module."""

import pytest
from pydantic import ValidationError

from almanac.domain import (
    CalendarDate,
    Season,
    day_of_week,
    days_since_epoch,
    format_full_date,
    format_short_date,
    format_time,
    format_time_24,
    from_absolute_minute,
    from_days_since_epoch,
    get_month,
    is_leap_year,
    month_length,
    sun_times,
    time_of_day,
    year_length,
)
from almanac.domain.calendar import COMMON_YEAR_DAYS, MONTHS


class TestMonths:
    """Tests for the month table and month lengths."""

    def test_twelve_months(self):
        assert len(MONTHS) == 12
        assert MONTHS[0].name == "Frostmorn"
        assert MONTHS[11].name == "Stillnight"

    def test_common_year_length(self):
        assert COMMON_YEAR_DAYS == 361
        assert year_length(2847) == 361

    def test_leap_year_length(self):
        assert year_length(2848) == 362

    @pytest.mark.parametrize("year,expected", [
        (4, True),
        (2848, True),
        (2847, False),
        (1, False),
    ])
    def test_is_leap_year(self, year: int, expected: bool):
        assert is_leap_year(year) == expected

    def test_only_last_month_gains_leap_day(self):
        """Test the twelfth month is the only one affected by leap years."""
        for month in range(1, 12):
            assert month_length(month, 2848) == month_length(month, 2847)
        assert month_length(12, 2847) == 29
        assert month_length(12, 2848) == 30

    def test_get_month_out_of_range_falls_back(self):
        assert get_month(0).name == "Frostmorn"
        assert get_month(13).name == "Frostmorn"

    @pytest.mark.parametrize("month,season", [
        (1, Season.WINTER),
        (3, Season.SPRING),
        (7, Season.SUMMER),
        (9, Season.AUTUMN),
        (11, Season.WINTER),
    ])
    def test_month_seasons(self, month: int, season: Season):
        assert get_month(month).season == season


class TestDayCounting:
    """Tests for days since epoch and its inverse."""

    def test_epoch_is_day_zero(self):
        assert days_since_epoch(1, 1, 1) == 0

    def test_epoch_is_firstday(self):
        assert day_of_week(1, 1, 1) == "Firstday"
        assert day_of_week(1, 1, 8) == "Firstday"
        assert day_of_week(1, 1, 7) == "Restday"

    def test_leap_day_counted(self):
        """Test a leap year adds one day to the following years."""
        assert days_since_epoch(5, 1, 1) == 4 * 361 + 1

    @pytest.mark.parametrize("days", [0, 1, 360, 361, 1444, 1445, 100_000, 1_027_000])
    def test_inverse(self, days: int):
        year, month, day = from_days_since_epoch(days)
        assert days_since_epoch(year, month, day) == days

    def test_last_day_of_leap_year(self):
        last = days_since_epoch(4, 12, 30)
        assert from_days_since_epoch(last) == (4, 12, 30)
        assert from_days_since_epoch(last + 1) == (5, 1, 1)

    def test_from_absolute_minute(self):
        date = CalendarDate(year=2847, month=7, day=14, hour=18, minute=5)
        assert from_absolute_minute(date.absolute_minute) == date


class TestTimeOfDay:
    """Tests for the descriptive time-of-day labels."""

    @pytest.mark.parametrize("hour,label", [
        (5, "Early Morning"),
        (7, "Early Morning"),
        (8, "Morning"),
        (12, "Midday"),
        (14, "Afternoon"),
        (17, "Evening"),
        (20, "Night"),
        (23, "Late Night"),
        (0, "Late Night"),
        (4, "Late Night"),
    ])
    def test_labels(self, hour: int, label: str):
        assert time_of_day(hour) == label

    def test_sun_times_by_season(self):
        assert sun_times(Season.SUMMER).day_length == 16
        assert sun_times(Season.WINTER).sunrise == "7:30"


class TestCalendarDate:
    """Tests for CalendarDate."""

    def test_derived_fields(self, default_date: CalendarDate):
        assert default_date.month_name == "Goldpeak"
        assert default_date.season == Season.SUMMER
        assert default_date.day_of_week == day_of_week(2847, 7, 14)

    def test_day_number(self, default_date: CalendarDate):
        assert default_date.day_number == days_since_epoch(2847, 7, 14)

    def test_absolute_minute(self, default_date: CalendarDate):
        assert default_date.absolute_minute == default_date.day_number * 1440 + 18 * 60

    def test_immutability(self, default_date: CalendarDate):
        with pytest.raises(ValidationError):
            default_date.day = 3  # type: ignore

    def test_json_round_trip(self, default_date: CalendarDate):
        """Test computed fields in the dump are ignored when loading."""
        data = default_date.model_dump(mode="json")
        assert data["month_name"] == "Goldpeak"
        assert CalendarDate.model_validate(data) == default_date


class TestFormatting:
    """Tests for display helpers."""

    @pytest.mark.parametrize("hour,minute,expected", [
        (0, 5, "12:05 AM"),
        (9, 30, "9:30 AM"),
        (12, 0, "12:00 PM"),
        (18, 0, "6:00 PM"),
        (23, 59, "11:59 PM"),
    ])
    def test_format_time(self, hour: int, minute: int, expected: str):
        assert format_time(hour, minute) == expected

    def test_format_time_24(self):
        assert format_time_24(7, 5) == "07:05"

    def test_format_dates(self):
        assert format_short_date(2847, 7, 14) == "14 Goldpeak, 2847"
        assert format_full_date(2847, 7, 14).endswith("14 of Goldpeak, 2847 AV")
