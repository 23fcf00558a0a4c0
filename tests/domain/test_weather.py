"""Tests for almanac.domain.weather module."""

import pytest

from almanac.domain import (
    REGION_MODIFIERS,
    TEMPERATURES,
    WEATHER_CONDITIONS,
    WEATHER_TABLES,
    WIND_LEVELS,
    RegionType,
    Season,
    precipitation_for,
    weather_family,
)


class TestSeasonTables:
    """Tests for the cumulative season tables."""

    @pytest.mark.parametrize("season", list(Season))
    def test_tables_end_at_100(self, season: Season):
        table = WEATHER_TABLES[season]
        for column in (table.conditions, table.temperatures, table.wind):
            assert column[-1][1] == 100

    @pytest.mark.parametrize("season", list(Season))
    def test_tables_are_cumulative(self, season: Season):
        table = WEATHER_TABLES[season]
        for column in (table.conditions, table.temperatures, table.wind):
            bounds = [upper for _, upper in column]
            assert bounds == sorted(bounds)

    @pytest.mark.parametrize("season", list(Season))
    def test_table_keys_are_known(self, season: Season):
        table = WEATHER_TABLES[season]
        assert all(key in WEATHER_CONDITIONS for key, _ in table.conditions)
        assert all(key in TEMPERATURES for key, _ in table.temperatures)
        assert all(key in WIND_LEVELS for key, _ in table.wind)

    def test_every_region_has_modifiers(self):
        assert set(REGION_MODIFIERS) == set(RegionType)
        assert REGION_MODIFIERS[RegionType.DEFAULT].conditions == {}


class TestFamilies:
    """Tests for condition families."""

    def test_rain_family(self):
        assert weather_family("rain") == ("light_rain", "rain", "heavy_rain", "thunderstorm")

    def test_first_family_wins(self):
        """Test a condition in two families resolves to the first listed."""
        assert weather_family("partly_cloudy") == ("clear", "partly_cloudy")
        assert weather_family("misty") == ("partly_cloudy", "cloudy", "misty")

    def test_unknown_condition_is_its_own_family(self):
        assert weather_family("dust_storm") == ("dust_storm",)


class TestPrecipitation:
    """Tests for precipitation lookup."""

    @pytest.mark.parametrize("condition,expected", [
        ("clear", "none"),
        ("light_rain", "light"),
        ("thunderstorm", "heavy"),
        ("blizzard", "severe"),
        ("hail", "hail"),
    ])
    def test_lookup(self, condition: str, expected: str):
        assert precipitation_for(condition) == expected
