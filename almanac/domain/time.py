from pydantic import BaseModel, ConfigDict, Field, computed_field

from .calendar import (
    CalendarDate,
    SunTimes,
    absolute_minute,
    day_of_week,
    get_month,
    sun_times,
    time_of_day,
)
from .celestial import CelestialEvent, UpcomingCelestialEvent
from .festivals import ActiveFestival, UpcomingFestival
from .moons import MoonPair
from .types import RegionType, Season
from .weather import WeatherSnapshot


class ClockSettings(BaseModel):
    """Behaviour switches for the clock and the narrative estimator."""
    model_config = ConfigDict(frozen=True)

    auto_advance: bool = True
    parse_narrative: bool = True
    confirm_large_jumps: bool = True
    large_jump_threshold: int = 240  # minutes
    region_type: RegionType = RegionType.DEFAULT
    use_24_hour: bool = False
    festival_horizon_days: int = 14
    alignment_horizon_days: int = 14
    forecast_days: int = 3


class TimePatch(BaseModel):
    """Partial calendar fields for an absolute jump. None means keep."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    year: int | None = None
    month: int | None = None
    day: int | None = None
    hour: int | None = None
    minute: int | None = None


class TimeSnapshot(BaseModel):
    """Immutable representation of the world clock and everything hung off it."""
    model_config = ConfigDict(frozen=True)

    year: int
    month: int
    day: int
    hour: int
    minute: int

    moons: MoonPair
    weather: WeatherSnapshot
    celestial_events: tuple[CelestialEvent, ...] = ()
    celestial_effects: tuple[str, ...] = ()
    upcoming_festivals: tuple[UpcomingFestival, ...] = ()
    current_festival: ActiveFestival | None = None
    upcoming_alignments: tuple[UpcomingCelestialEvent, ...] = ()
    settings: ClockSettings = Field(default_factory=ClockSettings)

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

    @computed_field
    @property
    def time_of_day(self) -> str:
        return time_of_day(self.hour)

    @computed_field
    @property
    def sun(self) -> SunTimes:
        return sun_times(self.season)

    @computed_field
    @property
    def absolute_minute(self) -> int:
        """Minutes since the epoch under the in-world calendar."""
        return absolute_minute(self.year, self.month, self.day, self.hour, self.minute)

    @property
    def date(self) -> CalendarDate:
        """The calendar part of the snapshot."""
        return CalendarDate(
            year=self.year, month=self.month, day=self.day,
            hour=self.hour, minute=self.minute,
        )

    def with_date(self, date: CalendarDate) -> "TimeSnapshot":
        return self.model_copy(update={
            "year": date.year,
            "month": date.month,
            "day": date.day,
            "hour": date.hour,
            "minute": date.minute,
        })
