"""Shared pytest fixtures for almanac tests."""

import random
import tempfile
from pathlib import Path

import pytest

from almanac.domain import (
    CalendarDate,
    ClockSettings,
    FestivalDefinition,
    RegionType,
    TimeSnapshot,
    WeatherSnapshot,
)
from almanac.runtime.context import RolloverContext
from almanac.services.bootstrap import build_initial_snapshot
from almanac.services.moon_tracker import MoonPhaseTracker
from almanac.services.weather_generator import WeatherGenerator


# =============================================================================
# Randomness and services
# =============================================================================

@pytest.fixture
def rng() -> random.Random:
    """A seeded random source."""
    return random.Random(1234)


@pytest.fixture
def tracker() -> MoonPhaseTracker:
    return MoonPhaseTracker()


@pytest.fixture
def generator(rng: random.Random) -> WeatherGenerator:
    return WeatherGenerator(rng)


# =============================================================================
# Settings and dates
# =============================================================================

@pytest.fixture
def settings() -> ClockSettings:
    return ClockSettings()


@pytest.fixture
def default_date() -> CalendarDate:
    """14 Goldpeak 2847, 6 PM."""
    return CalendarDate(year=2847, month=7, day=14, hour=18, minute=0)


@pytest.fixture
def sample_weather() -> WeatherSnapshot:
    """Fixed clear, warm weather."""
    return WeatherSnapshot(
        condition="clear",
        condition_name="Clear",
        icon="☀️",
        description="Clear skies with good visibility",
        temperature="warm",
        temperature_name="Warm",
        wind="calm",
        wind_name="Calm",
        region_type=RegionType.DEFAULT,
    )


# =============================================================================
# Snapshots
# =============================================================================

@pytest.fixture
def make_snapshot(tracker: MoonPhaseTracker, sample_weather: WeatherSnapshot):
    """Factory for snapshots at an explicit date and moon position."""

    def _make(
        year: int = 2847,
        month: int = 7,
        day: int = 14,
        hour: int = 18,
        minute: int = 0,
        primary_day: int = 11,
        secondary_day: int = 0,
        settings: ClockSettings | None = None,
    ) -> TimeSnapshot:
        return TimeSnapshot(
            year=year,
            month=month,
            day=day,
            hour=hour,
            minute=minute,
            moons=tracker.initial_pair(primary_day, secondary_day),
            weather=sample_weather,
            settings=settings or ClockSettings(),
        )

    return _make


@pytest.fixture
def snapshot(make_snapshot) -> TimeSnapshot:
    """A bare snapshot at the default date (no festivals or alignments filled in)."""
    return make_snapshot()


@pytest.fixture
def initial_snapshot() -> TimeSnapshot:
    """A fully built default snapshot with seeded weather."""
    return build_initial_snapshot(rng=random.Random(7))


@pytest.fixture
def rollover_context(snapshot: TimeSnapshot) -> RolloverContext:
    """A context for a one-day move."""
    moved = snapshot.model_copy(update={"day": snapshot.day + 1})
    return RolloverContext(previous=snapshot, snapshot=moved, days_crossed=1, regenerate_weather=True)


# =============================================================================
# Festivals
# =============================================================================

@pytest.fixture
def sample_festival() -> FestivalDefinition:
    """A three-day festival starting 20 Harvest."""
    return FestivalDefinition(
        name="Harvest Moon Festival",
        month=8,
        day=20,
        duration_days=3,
        description="Celebration of the harvest",
        effects=("Markets overflow",),
        traditions=("Lantern walks",),
    )


# =============================================================================
# Storage Fixtures
# =============================================================================

@pytest.fixture
def temp_state_dir():
    """Create a temporary state directory for storage tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        state_path = Path(tmpdir) / "state"
        state_path.mkdir()
        yield state_path
