"""
WeatherPhase - generates a new day's weather.

Runs only when the context asks for it (the date changed, or weather was
explicitly regenerated). Today's condition seeds the continuity draw.
"""

import logging

from almanac.domain import WeatherChangedEvent
from almanac.runtime.context import RolloverContext
from almanac.runtime.pipeline import BasePhase
from almanac.services.weather_generator import WeatherGenerator


logger = logging.getLogger(__name__)


class WeatherPhase(BasePhase):
    """Regenerate weather for the working snapshot's season and region."""

    def __init__(self, generator: WeatherGenerator):
        self._generator = generator

    async def _execute(self, ctx: RolloverContext) -> RolloverContext:
        if not ctx.regenerate_weather:
            return ctx

        snapshot = ctx.snapshot
        before = snapshot.weather
        after = self._generator.generate(
            snapshot.season,
            snapshot.settings.region_type,
            previous_condition=before.condition,
            forecast_days=snapshot.settings.forecast_days,
        )
        logger.info(
            f"Weather changed | {before.condition} -> {after.condition} | "
            f"region={after.region_type.value}"
        )
        event = WeatherChangedEvent(absolute_minute=ctx.at_minute, before=before, after=after)
        return ctx.with_snapshot_fields(weather=after).with_event(event)
