from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, TypeAdapter

from .calendar import CalendarDate
from .celestial import CelestialEvent
from .types import MoonKey, MoonPhaseName
from .weather import WeatherSnapshot

# --- Clock Events ---

class TimeAdvancedEvent(BaseModel):
    """Clock moved forward by a number of minutes."""
    model_config = ConfigDict(frozen=True)
    type: Literal["time_advanced"] = "time_advanced"
    absolute_minute: int

    before: CalendarDate
    after: CalendarDate
    minutes_elapsed: int

class DayBoundaryCrossedEvent(BaseModel):
    """One or more midnights passed during a single advance."""
    model_config = ConfigDict(frozen=True)
    type: Literal["day_boundary_crossed"] = "day_boundary_crossed"
    absolute_minute: int

    before: CalendarDate
    date: CalendarDate
    days_crossed: int = 1

class MonthBoundaryCrossedEvent(BaseModel):
    """One or more month boundaries passed during a single advance."""
    model_config = ConfigDict(frozen=True)
    type: Literal["month_boundary_crossed"] = "month_boundary_crossed"
    absolute_minute: int

    before: CalendarDate
    date: CalendarDate
    months_crossed: int = 1

class YearBoundaryCrossedEvent(BaseModel):
    """One or more new years passed during a single advance."""
    model_config = ConfigDict(frozen=True)
    type: Literal["year_boundary_crossed"] = "year_boundary_crossed"
    absolute_minute: int

    before: CalendarDate
    date: CalendarDate
    years_crossed: int = 1

class TimeSetAbsoluteEvent(BaseModel):
    """Clock was set to an explicit date/time."""
    model_config = ConfigDict(frozen=True)
    type: Literal["time_set_absolute"] = "time_set_absolute"
    absolute_minute: int

    before: CalendarDate
    after: CalendarDate


# --- Sky Events ---

class MoonPhaseChangedEvent(BaseModel):
    """A moon moved into a different named phase."""
    model_config = ConfigDict(frozen=True)
    type: Literal["moon_phase_changed"] = "moon_phase_changed"
    absolute_minute: int

    moon: MoonKey
    old_phase: MoonPhaseName
    new_phase: MoonPhaseName

class CelestialEventBeganEvent(BaseModel):
    """An alignment became active that was not active before."""
    model_config = ConfigDict(frozen=True)
    type: Literal["celestial_event_began"] = "celestial_event_began"
    absolute_minute: int

    event: CelestialEvent


# --- Weather Events ---

class WeatherChangedEvent(BaseModel):
    """Weather was regenerated or set by hand."""
    model_config = ConfigDict(frozen=True)
    type: Literal["weather_changed"] = "weather_changed"
    absolute_minute: int

    before: WeatherSnapshot | None
    after: WeatherSnapshot


# --- The discriminated union ---

ClockEvent = Annotated[
    Union[
        TimeAdvancedEvent,
        DayBoundaryCrossedEvent,
        MonthBoundaryCrossedEvent,
        YearBoundaryCrossedEvent,
        TimeSetAbsoluteEvent,
        MoonPhaseChangedEvent,
        CelestialEventBeganEvent,
        WeatherChangedEvent,
    ],
    Discriminator("type"),
]

ClockEventAdapter: TypeAdapter[ClockEvent] = TypeAdapter(ClockEvent)
