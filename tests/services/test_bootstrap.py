"""Tests for almanac.services.bootstrap module."""

import random

from almanac.domain import CalendarDate, ClockSettings, MoonPhaseName, RegionType
from almanac.services.bootstrap import DEFAULT_DATE, build_initial_snapshot


class TestBuildInitialSnapshot:
    """Tests for the default starting snapshot."""

    def test_default_date(self, initial_snapshot):
        assert initial_snapshot.date == DEFAULT_DATE
        assert initial_snapshot.month_name == "Goldpeak"

    def test_default_moons(self, initial_snapshot):
        assert initial_snapshot.moons.primary.day_in_cycle == 11
        assert initial_snapshot.moons.primary.phase == MoonPhaseName.WAXING_GIBBOUS
        assert initial_snapshot.moons.secondary.phase == MoonPhaseName.NEW
        assert not initial_snapshot.moons.secondary.visible

    def test_weather_and_forecast(self, initial_snapshot):
        assert initial_snapshot.weather.condition
        assert len(initial_snapshot.weather.forecast) == 3

    def test_festivals_and_alignments_filled(self, initial_snapshot):
        assert [f.name for f in initial_snapshot.upcoming_festivals] == ["Midsummer Eve"]
        assert initial_snapshot.current_festival is None
        assert "silver_tide" in {a.event.id for a in initial_snapshot.upcoming_alignments}

    def test_seeded_is_reproducible(self):
        assert build_initial_snapshot(rng=random.Random(3)) == build_initial_snapshot(rng=random.Random(3))

    def test_settings_respected(self):
        settings = ClockSettings(region_type=RegionType.TUNDRA, forecast_days=1)
        snapshot = build_initial_snapshot(settings=settings, rng=random.Random(3))
        assert snapshot.settings == settings
        assert snapshot.weather.region_type == RegionType.TUNDRA
        assert len(snapshot.weather.forecast) == 1

    def test_custom_date_detects_active_events(self):
        date = CalendarDate(year=2847, month=8, day=12, hour=21)
        snapshot = build_initial_snapshot(rng=random.Random(3), date=date)
        assert [e.id for e in snapshot.celestial_events] == ["starfall"]
        assert any(line.startswith("Starfall:") for line in snapshot.celestial_effects)
