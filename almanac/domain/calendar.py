"""The in-world calendar.

Twelve months of uneven length, a seven-day week, and a single leap rule:
the twelfth month (Stillnight) gains one day in every year divisible by four.
Years are reckoned "AV". Day 0 of the calendar is the first day of the first
month of year 1, and it is a Firstday.

Everything here is a pure function of (year, month, day, hour, minute) so it
can be shared by the clock, the festival scheduler and the forecasters.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, computed_field

from .types import Season


MINUTES_PER_HOUR = 60
HOURS_PER_DAY = 24
MINUTES_PER_DAY = MINUTES_PER_HOUR * HOURS_PER_DAY
MONTHS_PER_YEAR = 12
LEAP_MONTH = 12
LEAP_CYCLE_YEARS = 4


class MonthDefinition(BaseModel):
    """A month of the calendar as it is in a common year."""

    model_config = ConfigDict(frozen=True)

    name: str
    base_days: int
    season: Season


MONTHS: tuple[MonthDefinition, ...] = (
    MonthDefinition(name="Frostmorn", base_days=30, season=Season.WINTER),
    MonthDefinition(name="Deepsnow", base_days=28, season=Season.WINTER),
    MonthDefinition(name="Thawbreak", base_days=31, season=Season.SPRING),
    MonthDefinition(name="Rainbloom", base_days=30, season=Season.SPRING),
    MonthDefinition(name="Sunrise", base_days=31, season=Season.SPRING),
    MonthDefinition(name="Highsun", base_days=30, season=Season.SUMMER),
    MonthDefinition(name="Goldpeak", base_days=31, season=Season.SUMMER),
    MonthDefinition(name="Harvest", base_days=31, season=Season.AUTUMN),
    MonthDefinition(name="Leaffall", base_days=30, season=Season.AUTUMN),
    MonthDefinition(name="Dimlight", base_days=30, season=Season.AUTUMN),
    MonthDefinition(name="Darkeve", base_days=30, season=Season.WINTER),
    MonthDefinition(name="Stillnight", base_days=29, season=Season.WINTER),
)

DAYS_OF_WEEK: tuple[str, ...] = (
    "Firstday",
    "Seconday",
    "Thirdsday",
    "Fourthday",
    "Fifthday",
    "Sixthday",
    "Restday",
)

COMMON_YEAR_DAYS = sum(m.base_days for m in MONTHS)


# =============================================================================
# Calendar arithmetic
# =============================================================================


def get_month(month: int) -> MonthDefinition:
    """Look up a month (1-indexed). Out-of-range values fall back to the first month."""
    if 1 <= month <= MONTHS_PER_YEAR:
        return MONTHS[month - 1]
    return MONTHS[0]


def is_leap_year(year: int) -> bool:
    return year % LEAP_CYCLE_YEARS == 0


def month_length(month: int, year: int) -> int:
    """Number of days in a month of a given year."""
    length = get_month(month).base_days
    if month == LEAP_MONTH and is_leap_year(year):
        length += 1
    return length


def year_length(year: int) -> int:
    return COMMON_YEAR_DAYS + (1 if is_leap_year(year) else 0)


def days_since_epoch(year: int, month: int, day: int) -> int:
    """Count of whole days between the epoch and the given date.

    Works for years before the epoch too (the result is then negative).
    """
    elapsed_years = year - 1
    # Leap years strictly before `year`; floor division keeps this right below the epoch
    total = elapsed_years * COMMON_YEAR_DAYS + elapsed_years // LEAP_CYCLE_YEARS
    for m in range(1, month):
        total += month_length(m, year)
    return total + day - 1


def absolute_minute(year: int, month: int, day: int, hour: int, minute: int) -> int:
    """Minutes elapsed since the epoch under this calendar's own rules."""
    return (
        days_since_epoch(year, month, day) * MINUTES_PER_DAY
        + hour * MINUTES_PER_HOUR
        + minute
    )


def day_of_week(year: int, month: int, day: int) -> str:
    return DAYS_OF_WEEK[days_since_epoch(year, month, day) % len(DAYS_OF_WEEK)]


def from_days_since_epoch(days: int) -> tuple[int, int, int]:
    """Inverse of days_since_epoch: returns (year, month, day)."""
    # Average year is 361.25 days; start from the estimate and correct
    year = 1 + (days * LEAP_CYCLE_YEARS) // (COMMON_YEAR_DAYS * LEAP_CYCLE_YEARS + 1)
    while days_since_epoch(year, 1, 1) > days:
        year -= 1
    while days_since_epoch(year + 1, 1, 1) <= days:
        year += 1

    remaining = days - days_since_epoch(year, 1, 1)
    month = 1
    while remaining >= month_length(month, year):
        remaining -= month_length(month, year)
        month += 1
    return year, month, remaining + 1


def from_absolute_minute(total: int) -> "CalendarDate":
    days, minute_of_day = divmod(total, MINUTES_PER_DAY)
    year, month, day = from_days_since_epoch(days)
    hour, minute = divmod(minute_of_day, MINUTES_PER_HOUR)
    return CalendarDate(year=year, month=month, day=day, hour=hour, minute=minute)


# =============================================================================
# Time of day and daylight
# =============================================================================


def time_of_day(hour: int) -> str:
    """Descriptive label for an hour (0-23)."""
    if 5 <= hour < 8:
        return "Early Morning"
    if 8 <= hour < 12:
        return "Morning"
    if 12 <= hour < 14:
        return "Midday"
    if 14 <= hour < 17:
        return "Afternoon"
    if 17 <= hour < 20:
        return "Evening"
    if 20 <= hour < 23:
        return "Night"
    return "Late Night"


class SunTimes(BaseModel):
    """Sunrise and sunset for a season."""

    model_config = ConfigDict(frozen=True)

    sunrise: str
    sunset: str
    day_length: float


_SUN_TIMES: dict[Season, SunTimes] = {
    Season.WINTER: SunTimes(sunrise="7:30", sunset="17:00", day_length=9.5),
    Season.SPRING: SunTimes(sunrise="6:00", sunset="19:00", day_length=13),
    Season.SUMMER: SunTimes(sunrise="5:00", sunset="21:00", day_length=16),
    Season.AUTUMN: SunTimes(sunrise="6:30", sunset="18:30", day_length=12),
}


def sun_times(season: Season) -> SunTimes:
    return _SUN_TIMES.get(season, _SUN_TIMES[Season.AUTUMN])


# =============================================================================
# Dates
# =============================================================================


class CalendarDate(BaseModel):
    """A moment on the calendar, without any of the atmospheric state."""

    model_config = ConfigDict(frozen=True)

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0

    @computed_field
    @property
    def month_name(self) -> str:
        return get_month(self.month).name

    @computed_field
    @property
    def season(self) -> Season:
        return get_month(self.month).season

    @computed_field
    @property
    def day_of_week(self) -> str:
        return day_of_week(self.year, self.month, self.day)

    @property
    def day_number(self) -> int:
        """Days since the epoch."""
        return days_since_epoch(self.year, self.month, self.day)

    @property
    def absolute_minute(self) -> int:
        return absolute_minute(self.year, self.month, self.day, self.hour, self.minute)


# =============================================================================
# Display helpers
# =============================================================================


def format_time(hour: int, minute: int) -> str:
    """12-hour clock, e.g. '6:05 PM'."""
    display_hour = hour % 12 or 12
    suffix = "AM" if hour < 12 else "PM"
    return f"{display_hour}:{minute:02d} {suffix}"


def format_time_24(hour: int, minute: int) -> str:
    return f"{hour:02d}:{minute:02d}"


def format_full_date(year: int, month: int, day: int) -> str:
    """e.g. 'Thirdsday, 14 of Goldpeak, 2847 AV'."""
    return f"{day_of_week(year, month, day)}, {day} of {get_month(month).name}, {year} AV"


def format_short_date(year: int, month: int, day: int) -> str:
    return f"{day} {get_month(month).name}, {year}"
