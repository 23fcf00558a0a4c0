"""
Bootstrap helpers for a fresh world clock.

Builds the default snapshot: 14 Goldpeak 2847 AV, 6 PM, Lunara eleven days
into its cycle and the Veil new, with weather and festivals filled in.
"""

from __future__ import annotations

import random

from almanac.domain import CalendarDate, ClockSettings, TimeSnapshot
from almanac.services import celestial_detector, festival_scheduler
from almanac.services.moon_tracker import MoonPhaseTracker
from almanac.services.weather_generator import WeatherGenerator


DEFAULT_DATE = CalendarDate(year=2847, month=7, day=14, hour=18, minute=0)
DEFAULT_PRIMARY_DAY = 11
DEFAULT_SECONDARY_DAY = 0


def build_initial_snapshot(
    settings: ClockSettings | None = None,
    rng: random.Random | None = None,
    date: CalendarDate = DEFAULT_DATE,
    primary_day: int = DEFAULT_PRIMARY_DAY,
    secondary_day: int = DEFAULT_SECONDARY_DAY,
    tracker: MoonPhaseTracker | None = None,
) -> TimeSnapshot:
    """Build a complete snapshot for a new session."""
    settings = settings or ClockSettings()
    tracker = tracker or MoonPhaseTracker()
    generator = WeatherGenerator(rng)

    moons = tracker.initial_pair(primary_day, secondary_day)
    weather = generator.generate(
        date.season,
        settings.region_type,
        previous_condition=None,
        forecast_days=settings.forecast_days,
    )
    active = celestial_detector.detect(moons.primary, moons.secondary, date)

    return TimeSnapshot(
        year=date.year,
        month=date.month,
        day=date.day,
        hour=date.hour,
        minute=date.minute,
        moons=moons,
        weather=weather,
        celestial_events=active,
        celestial_effects=celestial_detector.collect_effects(active),
        upcoming_festivals=festival_scheduler.upcoming(date, settings.festival_horizon_days),
        current_festival=festival_scheduler.current(date),
        upcoming_alignments=celestial_detector.forecast(
            moons.primary,
            moons.secondary,
            date,
            settings.alignment_horizon_days,
            tracker=tracker,
        ),
        settings=settings,
    )
