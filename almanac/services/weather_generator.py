"""
WeatherGenerator - season and region weighted weather with continuity.

Each day is three independent draws (condition, temperature, wind) against
the season's tables after the region's multipliers are applied. The
condition draw is biased towards the previous day's condition family, which
makes a forecast a first-order Markov chain over families.
"""

from __future__ import annotations

import logging
import random
from typing import Sequence

from almanac.domain import (
    TEMPERATURES,
    WEATHER_CONDITIONS,
    WIND_LEVELS,
    ForecastDay,
    RegionType,
    Season,
    Visibility,
    WeatherModifiers,
    WeatherOverrides,
    WeatherSnapshot,
    precipitation_for,
    weather_family,
)
from almanac.domain.weather import modifiers_for, table_for


logger = logging.getLogger(__name__)


Weights = list[tuple[str, float]]


def weighted_table(
    cumulative: Sequence[tuple[str, float]],
    modifiers: dict[str, float],
) -> Weights:
    """
    Turn a cumulative-percentage table into per-bucket weights.

    Each slice width is multiplied by its region modifier (default 1) and
    the result is re-normalised to sum to 100.
    """
    weights: Weights = []
    previous = 0.0
    for key, upper in cumulative:
        weights.append((key, (upper - previous) * modifiers.get(key, 1.0)))
        previous = upper

    total = sum(w for _, w in weights)
    if total <= 0:
        return weights
    return [(key, w * 100 / total) for key, w in weights]


def weather_effects(condition: str, temperature: str, wind: str) -> tuple[str, ...]:
    """Gameplay effects implied by a condition/temperature/wind combination."""
    effects: list[str] = []
    condition_def = WEATHER_CONDITIONS.get(condition)
    temperature_def = TEMPERATURES.get(temperature)
    wind_def = WIND_LEVELS.get(wind)

    if condition_def is not None:
        if condition_def.visibility == Visibility.POOR:
            effects.append("Perception checks at disadvantage")
        elif condition_def.visibility == Visibility.VERY_POOR:
            effects.append("Heavily obscured beyond 30 feet")

    if temperature_def is not None:
        if temperature_def.effect == "cold_damage":
            effects.append("Cold damage without protection")
        elif temperature_def.effect == "heat_damage":
            effects.append("Heat exhaustion risk")
        elif temperature_def.effect == "stamina_drain":
            effects.append("Stamina drains faster")

    if wind_def is not None and wind_def.ranged_penalty < -2:
        effects.append(f"Ranged attacks: {wind_def.ranged_penalty} penalty")

    if condition == "thunderstorm":
        effects.extend(["Lightning strike risk", "Loud thunder masks sounds"])
    elif condition == "blizzard":
        effects.extend(["Getting lost is likely", "Frostbite risk"])
    elif condition == "dust_storm":
        effects.extend(["Breathing difficulty", "Equipment damage risk"])

    return tuple(effects)


class WeatherGenerator:
    """
    Generates weather snapshots and forecasts.

    All randomness comes from the injected `rng`, so a seeded generator
    produces the same weather sequence every time.
    """

    CONTINUITY_CHANCE = 0.4

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    # -------------------------------------------------------------------------
    # Draws
    # -------------------------------------------------------------------------

    def _roll(self, weights: Weights) -> str:
        roll = self.rng.random() * 100
        cumulative = 0.0
        for key, weight in weights:
            cumulative += weight
            if weight > 0 and roll < cumulative:
                return key
        # Rounding can leave the roll just past the last slice
        for key, weight in reversed(weights):
            if weight > 0:
                return key
        return weights[-1][0]

    def draw_condition(
        self,
        season: Season,
        region_type: RegionType = RegionType.DEFAULT,
        previous_condition: str | None = None,
    ) -> str:
        weights = weighted_table(
            table_for(season).conditions, modifiers_for(region_type).conditions
        )
        if previous_condition is not None and self.rng.random() < self.CONTINUITY_CHANCE:
            present = {key for key, weight in weights if weight > 0}
            similar = [c for c in weather_family(previous_condition) if c in present]
            if similar:
                return self.rng.choice(similar)
        return self._roll(weights)

    def draw_temperature(self, season: Season, region_type: RegionType = RegionType.DEFAULT) -> str:
        return self._roll(weighted_table(
            table_for(season).temperatures, modifiers_for(region_type).temperatures
        ))

    def draw_wind(self, season: Season, region_type: RegionType = RegionType.DEFAULT) -> str:
        return self._roll(weighted_table(
            table_for(season).wind, modifiers_for(region_type).wind
        ))

    # -------------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------------

    def generate(
        self,
        season: Season,
        region_type: RegionType = RegionType.DEFAULT,
        previous_condition: str | None = None,
        forecast_days: int = 3,
    ) -> WeatherSnapshot:
        """Generate today's weather and a forecast that follows on from it."""
        condition = self.draw_condition(season, region_type, previous_condition)
        temperature = self.draw_temperature(season, region_type)
        wind = self.draw_wind(season, region_type)

        condition_def = WEATHER_CONDITIONS.get(condition, WEATHER_CONDITIONS["clear"])
        temperature_def = TEMPERATURES.get(temperature, TEMPERATURES["mild"])
        wind_def = WIND_LEVELS.get(wind, WIND_LEVELS["light_breeze"])

        weather = WeatherSnapshot(
            condition=condition,
            condition_name=condition_def.name,
            icon=condition_def.icon,
            description=condition_def.description,
            temperature=temperature,
            temperature_name=temperature_def.name,
            wind=wind,
            wind_name=wind_def.name,
            precipitation=precipitation_for(condition),
            visibility=condition_def.visibility,
            effects=weather_effects(condition, temperature, wind),
            modifiers=WeatherModifiers(
                travel=condition_def.travel_modifier,
                combat=condition_def.combat_modifier,
                ranged=wind_def.ranged_penalty,
            ),
            forecast=self.forecast(season, region_type, forecast_days, previous_condition=condition),
            region_type=region_type,
        )
        logger.debug(
            f"Weather generated | season={season.value} | region={region_type.value} | "
            f"condition={condition} | temperature={temperature} | wind={wind}"
        )
        return weather

    def forecast(
        self,
        season: Season,
        region_type: RegionType = RegionType.DEFAULT,
        days: int = 3,
        previous_condition: str | None = None,
    ) -> tuple[ForecastDay, ...]:
        """Chain `days` condition/temperature draws, each seeded by the day before."""
        forecast: list[ForecastDay] = []
        for day in range(1, days + 1):
            condition = self.draw_condition(season, region_type, previous_condition)
            temperature = self.draw_temperature(season, region_type)
            condition_def = WEATHER_CONDITIONS.get(condition)
            temperature_def = TEMPERATURES.get(temperature)
            forecast.append(ForecastDay(
                day=day,
                condition=condition,
                condition_name=condition_def.name if condition_def else condition,
                icon=condition_def.icon if condition_def else "❓",
                temperature=temperature,
                temperature_name=temperature_def.name if temperature_def else temperature,
            ))
            previous_condition = condition
        return tuple(forecast)

    def set_manual(self, current: WeatherSnapshot, overrides: WeatherOverrides) -> WeatherSnapshot:
        """
        Merge explicit values into the current weather.

        An overridden condition, temperature or wind refreshes its own
        display fields. Effects, modifiers and the forecast are left as they
        were unless given explicitly.
        """
        update: dict = {}

        if overrides.condition is not None:
            update["condition"] = overrides.condition
            condition_def = WEATHER_CONDITIONS.get(overrides.condition)
            if condition_def is not None:
                update["condition_name"] = condition_def.name
                update["icon"] = condition_def.icon
                update["visibility"] = condition_def.visibility
                update["description"] = condition_def.description

        if overrides.temperature is not None:
            update["temperature"] = overrides.temperature
            temperature_def = TEMPERATURES.get(overrides.temperature)
            if temperature_def is not None:
                update["temperature_name"] = temperature_def.name

        if overrides.wind is not None:
            update["wind"] = overrides.wind
            wind_def = WIND_LEVELS.get(overrides.wind)
            if wind_def is not None:
                update["wind_name"] = wind_def.name

        # Remaining explicit values win over anything derived above
        for field_name in ("precipitation", "visibility", "description", "effects", "region_type"):
            value = getattr(overrides, field_name)
            if value is not None:
                update[field_name] = value

        return current.model_copy(update=update)
