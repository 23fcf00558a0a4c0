"""Weather vocabulary, lookup tables and the weather snapshot.

Season tables are cumulative percentages: each entry's chance is the upper
bound of its slice of a 0-100 roll. Region modifiers multiply the width of a
slice before the table is re-normalised.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .types import RegionType, Season, Visibility


# =============================================================================
# Static definitions
# =============================================================================


class WeatherConditionDef(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    icon: str
    visibility: Visibility
    travel_modifier: float
    combat_modifier: float
    description: str


class TemperatureDef(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    min_celsius: int
    max_celsius: int
    effect: str | None = None  # cold_damage, heat_damage, stamina_drain


class WindDef(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    speed: str
    ranged_penalty: int


WEATHER_CONDITIONS: dict[str, WeatherConditionDef] = {
    "clear": WeatherConditionDef(
        name="Clear", icon="☀️", visibility=Visibility.EXCELLENT,
        travel_modifier=1.0, combat_modifier=1.0,
        description="Clear skies with good visibility",
    ),
    "partly_cloudy": WeatherConditionDef(
        name="Partly Cloudy", icon="⛅", visibility=Visibility.GOOD,
        travel_modifier=1.0, combat_modifier=1.0,
        description="Scattered clouds, pleasant conditions",
    ),
    "cloudy": WeatherConditionDef(
        name="Cloudy", icon="☁️", visibility=Visibility.GOOD,
        travel_modifier=1.0, combat_modifier=1.0,
        description="Overcast skies",
    ),
    "foggy": WeatherConditionDef(
        name="Foggy", icon="🌫️", visibility=Visibility.POOR,
        travel_modifier=0.7, combat_modifier=0.9,
        description="Thick fog reduces visibility significantly",
    ),
    "misty": WeatherConditionDef(
        name="Misty", icon="🌁", visibility=Visibility.MODERATE,
        travel_modifier=0.9, combat_modifier=0.95,
        description="Light mist hangs in the air",
    ),
    "light_rain": WeatherConditionDef(
        name="Light Rain", icon="🌦️", visibility=Visibility.MODERATE,
        travel_modifier=0.9, combat_modifier=0.95,
        description="Light drizzle, slightly damp conditions",
    ),
    "rain": WeatherConditionDef(
        name="Rain", icon="🌧️", visibility=Visibility.MODERATE,
        travel_modifier=0.8, combat_modifier=0.9,
        description="Steady rain, wet conditions",
    ),
    "heavy_rain": WeatherConditionDef(
        name="Heavy Rain", icon="⛈️", visibility=Visibility.POOR,
        travel_modifier=0.6, combat_modifier=0.8,
        description="Torrential downpour, difficult conditions",
    ),
    "thunderstorm": WeatherConditionDef(
        name="Thunderstorm", icon="⛈️", visibility=Visibility.POOR,
        travel_modifier=0.5, combat_modifier=0.7,
        description="Thunder, lightning, and heavy rain",
    ),
    "light_snow": WeatherConditionDef(
        name="Light Snow", icon="🌨️", visibility=Visibility.MODERATE,
        travel_modifier=0.8, combat_modifier=0.9,
        description="Light snowfall, cold conditions",
    ),
    "snow": WeatherConditionDef(
        name="Snow", icon="❄️", visibility=Visibility.MODERATE,
        travel_modifier=0.6, combat_modifier=0.8,
        description="Steady snowfall, accumulating",
    ),
    "heavy_snow": WeatherConditionDef(
        name="Heavy Snow", icon="🌨️", visibility=Visibility.POOR,
        travel_modifier=0.4, combat_modifier=0.7,
        description="Blizzard conditions, dangerous",
    ),
    "blizzard": WeatherConditionDef(
        name="Blizzard", icon="❄️", visibility=Visibility.VERY_POOR,
        travel_modifier=0.2, combat_modifier=0.6,
        description="Severe blizzard, travel extremely dangerous",
    ),
    "hail": WeatherConditionDef(
        name="Hail", icon="🌨️", visibility=Visibility.MODERATE,
        travel_modifier=0.5, combat_modifier=0.7,
        description="Hailstones falling, seek shelter",
    ),
    "windy": WeatherConditionDef(
        name="Windy", icon="💨", visibility=Visibility.GOOD,
        travel_modifier=0.9, combat_modifier=0.9,
        description="Strong winds, ranged attacks affected",
    ),
    "dust_storm": WeatherConditionDef(
        name="Dust Storm", icon="🌪️", visibility=Visibility.VERY_POOR,
        travel_modifier=0.3, combat_modifier=0.6,
        description="Choking dust, near-zero visibility",
    ),
}

TEMPERATURES: dict[str, TemperatureDef] = {
    "freezing": TemperatureDef(name="Freezing", min_celsius=-20, max_celsius=-5, effect="cold_damage"),
    "cold": TemperatureDef(name="Cold", min_celsius=-5, max_celsius=5, effect="stamina_drain"),
    "cool": TemperatureDef(name="Cool", min_celsius=5, max_celsius=15),
    "mild": TemperatureDef(name="Mild", min_celsius=15, max_celsius=22),
    "warm": TemperatureDef(name="Warm", min_celsius=22, max_celsius=28),
    "hot": TemperatureDef(name="Hot", min_celsius=28, max_celsius=35, effect="stamina_drain"),
    "scorching": TemperatureDef(name="Scorching", min_celsius=35, max_celsius=45, effect="heat_damage"),
}

WIND_LEVELS: dict[str, WindDef] = {
    "calm": WindDef(name="Calm", speed="0-5", ranged_penalty=0),
    "light_breeze": WindDef(name="Light Breeze", speed="5-15", ranged_penalty=0),
    "moderate_wind": WindDef(name="Moderate Wind", speed="15-25", ranged_penalty=-1),
    "strong_wind": WindDef(name="Strong Wind", speed="25-40", ranged_penalty=-2),
    "gale": WindDef(name="Gale", speed="40-60", ranged_penalty=-4),
    "storm_force": WindDef(name="Storm Force", speed="60+", ranged_penalty=-6),
}

PRECIPITATION: dict[str, str] = {
    "light_rain": "light",
    "rain": "moderate",
    "heavy_rain": "heavy",
    "thunderstorm": "heavy",
    "light_snow": "light",
    "snow": "moderate",
    "heavy_snow": "heavy",
    "blizzard": "severe",
    "hail": "hail",
}

# First matching family wins, so "misty" belongs to the cloudy family
WEATHER_FAMILIES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("clear", ("clear", "partly_cloudy")),
    ("cloudy", ("partly_cloudy", "cloudy", "misty")),
    ("rainy", ("light_rain", "rain", "heavy_rain", "thunderstorm")),
    ("snowy", ("light_snow", "snow", "heavy_snow", "blizzard")),
    ("foggy", ("foggy", "misty", "cloudy")),
)


def weather_family(condition: str) -> tuple[str, ...]:
    """Conditions considered similar to `condition` for day-to-day continuity."""
    for _, members in WEATHER_FAMILIES:
        if condition in members:
            return members
    return (condition,)


def precipitation_for(condition: str) -> str:
    return PRECIPITATION.get(condition, "none")


# =============================================================================
# Season tables and region modifiers
# =============================================================================


class WeatherTable(BaseModel):
    """Cumulative-percentage tables for one season."""

    model_config = ConfigDict(frozen=True)

    conditions: tuple[tuple[str, float], ...]
    temperatures: tuple[tuple[str, float], ...]
    wind: tuple[tuple[str, float], ...]


class RegionModifiers(BaseModel):
    """Per-bucket multipliers applied to a season table."""

    model_config = ConfigDict(frozen=True)

    conditions: dict[str, float] = Field(default_factory=dict)
    temperatures: dict[str, float] = Field(default_factory=dict)
    wind: dict[str, float] = Field(default_factory=dict)


WEATHER_TABLES: dict[Season, WeatherTable] = {
    Season.WINTER: WeatherTable(
        conditions=(
            ("clear", 15), ("partly_cloudy", 25), ("cloudy", 45), ("foggy", 50),
            ("light_snow", 65), ("snow", 80), ("heavy_snow", 90), ("blizzard", 95),
            ("rain", 100),
        ),
        temperatures=(("freezing", 40), ("cold", 85), ("cool", 100)),
        wind=(
            ("calm", 20), ("light_breeze", 50), ("moderate_wind", 75),
            ("strong_wind", 90), ("gale", 100),
        ),
    ),
    Season.SPRING: WeatherTable(
        conditions=(
            ("clear", 25), ("partly_cloudy", 45), ("cloudy", 60), ("misty", 70),
            ("light_rain", 85), ("rain", 95), ("thunderstorm", 100),
        ),
        temperatures=(("cold", 10), ("cool", 40), ("mild", 80), ("warm", 100)),
        wind=(("calm", 25), ("light_breeze", 60), ("moderate_wind", 85), ("strong_wind", 100)),
    ),
    Season.SUMMER: WeatherTable(
        conditions=(
            ("clear", 45), ("partly_cloudy", 65), ("cloudy", 75), ("light_rain", 85),
            ("thunderstorm", 95), ("heavy_rain", 100),
        ),
        temperatures=(("mild", 10), ("warm", 50), ("hot", 85), ("scorching", 100)),
        wind=(("calm", 35), ("light_breeze", 70), ("moderate_wind", 90), ("strong_wind", 100)),
    ),
    Season.AUTUMN: WeatherTable(
        conditions=(
            ("clear", 25), ("partly_cloudy", 45), ("cloudy", 65), ("foggy", 75),
            ("misty", 82), ("light_rain", 92), ("rain", 100),
        ),
        temperatures=(("cold", 15), ("cool", 55), ("mild", 85), ("warm", 100)),
        wind=(
            ("calm", 20), ("light_breeze", 50), ("moderate_wind", 80),
            ("strong_wind", 95), ("gale", 100),
        ),
    ),
}

REGION_MODIFIERS: dict[RegionType, RegionModifiers] = {
    RegionType.DEFAULT: RegionModifiers(),
    RegionType.COASTAL: RegionModifiers(
        conditions={"foggy": 1.5, "misty": 1.3, "rain": 1.2},
        temperatures={"hot": 0.8, "cold": 0.8},
        wind={"moderate_wind": 1.3, "strong_wind": 1.5},
    ),
    RegionType.MOUNTAIN: RegionModifiers(
        conditions={"snow": 1.5, "heavy_snow": 1.5, "clear": 1.2},
        temperatures={"freezing": 1.5, "cold": 1.3, "hot": 0.5},
        wind={"strong_wind": 1.5, "gale": 1.5},
    ),
    RegionType.DESERT: RegionModifiers(
        conditions={"clear": 1.5, "dust_storm": 2.0, "rain": 0.3},
        temperatures={"scorching": 1.5, "hot": 1.3, "freezing": 0.5},
        wind={"calm": 0.7, "strong_wind": 1.2},
    ),
    RegionType.FOREST: RegionModifiers(
        conditions={"foggy": 1.2, "misty": 1.3, "rain": 1.1},
        temperatures={"hot": 0.9, "scorching": 0.7},
        wind={"strong_wind": 0.7, "gale": 0.5},
    ),
    RegionType.SWAMP: RegionModifiers(
        conditions={"foggy": 2.0, "misty": 1.5, "rain": 1.3, "clear": 0.6},
        temperatures={"hot": 1.2},
        wind={"calm": 1.3, "strong_wind": 0.5},
    ),
    RegionType.PLAINS: RegionModifiers(
        conditions={"clear": 1.1, "thunderstorm": 1.2},
        wind={"strong_wind": 1.2},
    ),
    RegionType.TUNDRA: RegionModifiers(
        conditions={"snow": 1.5, "blizzard": 2.0, "clear": 0.7},
        temperatures={"freezing": 2.0, "cold": 1.5, "warm": 0.2, "hot": 0},
        wind={"gale": 1.5},
    ),
}


def table_for(season: Season) -> WeatherTable:
    return WEATHER_TABLES.get(season, WEATHER_TABLES[Season.AUTUMN])


def modifiers_for(region_type: RegionType) -> RegionModifiers:
    return REGION_MODIFIERS.get(region_type, REGION_MODIFIERS[RegionType.DEFAULT])


# =============================================================================
# Snapshot
# =============================================================================


class WeatherModifiers(BaseModel):
    model_config = ConfigDict(frozen=True)

    travel: float = 1.0
    combat: float = 1.0
    ranged: int = 0


class ForecastDay(BaseModel):
    """One day of a forecast; `day` counts from 1 (tomorrow)."""

    model_config = ConfigDict(frozen=True)

    day: int
    condition: str
    condition_name: str
    icon: str
    temperature: str
    temperature_name: str


class WeatherSnapshot(BaseModel):
    """Today's weather plus a short forecast."""

    model_config = ConfigDict(frozen=True)

    condition: str
    condition_name: str
    icon: str
    description: str
    temperature: str
    temperature_name: str
    wind: str
    wind_name: str
    precipitation: str = "none"
    visibility: Visibility = Visibility.GOOD
    effects: tuple[str, ...] = ()
    modifiers: WeatherModifiers = Field(default_factory=WeatherModifiers)
    forecast: tuple[ForecastDay, ...] = ()
    region_type: RegionType = RegionType.DEFAULT


class WeatherOverrides(BaseModel):
    """Explicit values for a manual weather change. Unset fields are kept."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    condition: str | None = None
    temperature: str | None = None
    wind: str | None = None
    precipitation: str | None = None
    visibility: Visibility | None = None
    description: str | None = None
    effects: tuple[str, ...] | None = None
    region_type: RegionType | None = None
