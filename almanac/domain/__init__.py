from .types import (
    MoonKey,
    RuleId,
    Season,
    MoonPhaseName,
    PHASE_ORDER,
    Rarity,
    RegionType,
    Visibility,
    Confidence,
    SkipTarget,
)
from .calendar import (
    MINUTES_PER_HOUR,
    MINUTES_PER_DAY,
    MONTHS,
    DAYS_OF_WEEK,
    MonthDefinition,
    CalendarDate,
    SunTimes,
    get_month,
    is_leap_year,
    month_length,
    year_length,
    days_since_epoch,
    absolute_minute,
    day_of_week,
    from_days_since_epoch,
    from_absolute_minute,
    time_of_day,
    sun_times,
    format_time,
    format_time_24,
    format_full_date,
    format_short_date,
)
from .moons import MoonEffect, MoonDefinition, MoonState, MoonPair, Moonlight, LUNARA, VEIL, MOONS
from .celestial import CelestialEventRule, CelestialEvent, UpcomingCelestialEvent, CELESTIAL_RULES
from .festivals import FestivalDefinition, UpcomingFestival, ActiveFestival, load_festivals
from .weather import (
    WeatherConditionDef,
    TemperatureDef,
    WindDef,
    WEATHER_CONDITIONS,
    TEMPERATURES,
    WIND_LEVELS,
    WeatherTable,
    RegionModifiers,
    WEATHER_TABLES,
    REGION_MODIFIERS,
    WeatherModifiers,
    ForecastDay,
    WeatherSnapshot,
    WeatherOverrides,
    weather_family,
    precipitation_for,
)
from .time import ClockSettings, TimePatch, TimeSnapshot
from .events import (
    TimeAdvancedEvent,
    DayBoundaryCrossedEvent,
    MonthBoundaryCrossedEvent,
    YearBoundaryCrossedEvent,
    TimeSetAbsoluteEvent,
    MoonPhaseChangedEvent,
    CelestialEventBeganEvent,
    WeatherChangedEvent,
    ClockEvent,
    ClockEventAdapter,
)

__all__ = [
    # Types
    "MoonKey",
    "RuleId",
    "Season",
    "MoonPhaseName",
    "PHASE_ORDER",
    "Rarity",
    "RegionType",
    "Visibility",
    "Confidence",
    "SkipTarget",
    # Calendar
    "MINUTES_PER_HOUR",
    "MINUTES_PER_DAY",
    "MONTHS",
    "DAYS_OF_WEEK",
    "MonthDefinition",
    "CalendarDate",
    "SunTimes",
    "get_month",
    "is_leap_year",
    "month_length",
    "year_length",
    "days_since_epoch",
    "absolute_minute",
    "day_of_week",
    "from_days_since_epoch",
    "from_absolute_minute",
    "time_of_day",
    "sun_times",
    "format_time",
    "format_time_24",
    "format_full_date",
    "format_short_date",
    # Moons
    "MoonEffect",
    "MoonDefinition",
    "MoonState",
    "MoonPair",
    "Moonlight",
    "LUNARA",
    "VEIL",
    "MOONS",
    # Celestial
    "CelestialEventRule",
    "CelestialEvent",
    "UpcomingCelestialEvent",
    "CELESTIAL_RULES",
    # Festivals
    "FestivalDefinition",
    "UpcomingFestival",
    "ActiveFestival",
    "load_festivals",
    # Weather
    "WeatherConditionDef",
    "TemperatureDef",
    "WindDef",
    "WEATHER_CONDITIONS",
    "TEMPERATURES",
    "WIND_LEVELS",
    "WeatherTable",
    "RegionModifiers",
    "WEATHER_TABLES",
    "REGION_MODIFIERS",
    "WeatherModifiers",
    "ForecastDay",
    "WeatherSnapshot",
    "WeatherOverrides",
    "weather_family",
    "precipitation_for",
    # Time
    "ClockSettings",
    "TimePatch",
    "TimeSnapshot",
    # Events
    "TimeAdvancedEvent",
    "DayBoundaryCrossedEvent",
    "MonthBoundaryCrossedEvent",
    "YearBoundaryCrossedEvent",
    "TimeSetAbsoluteEvent",
    "MoonPhaseChangedEvent",
    "CelestialEventBeganEvent",
    "WeatherChangedEvent",
    "ClockEvent",
    "ClockEventAdapter",
]
