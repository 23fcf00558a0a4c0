"""Tests for almanac.config module."""

from pathlib import Path

import pytest

from almanac.config import load_settings, rng_seed, state_dir
from almanac.domain import ClockSettings, RegionType
from almanac.errors import ConfigurationError


class TestLoadSettings:
    """Tests for reading ALMANAC_* settings."""

    def test_empty_environment(self):
        assert load_settings({}) == ClockSettings()

    def test_values_parsed(self):
        settings = load_settings({
            "ALMANAC_REGION_TYPE": "coastal",
            "ALMANAC_LARGE_JUMP_THRESHOLD": "180",
            "ALMANAC_USE_24_HOUR": "true",
            "ALMANAC_AUTO_ADVANCE": "false",
        })
        assert settings.region_type == RegionType.COASTAL
        assert settings.large_jump_threshold == 180
        assert settings.use_24_hour is True
        assert settings.auto_advance is False

    def test_blank_values_ignored(self):
        assert load_settings({"ALMANAC_FORECAST_DAYS": "  "}).forecast_days == 3

    def test_base_settings_kept(self):
        base = ClockSettings(region_type=RegionType.SWAMP, forecast_days=5)
        settings = load_settings({"ALMANAC_FORECAST_DAYS": "2"}, base=base)
        assert settings.region_type == RegionType.SWAMP
        assert settings.forecast_days == 2

    def test_unrelated_variables_ignored(self):
        assert load_settings({"REGION_TYPE": "desert", "ALMANAC_COLOUR": "blue"}) == ClockSettings()

    @pytest.mark.parametrize("env", [
        {"ALMANAC_REGION_TYPE": "moon"},
        {"ALMANAC_FORECAST_DAYS": "three"},
    ])
    def test_invalid_values(self, env: dict):
        with pytest.raises(ConfigurationError):
            load_settings(env)


class TestStateDir:
    def test_default(self):
        assert state_dir({}) == Path("almanac_state")

    def test_override(self):
        assert state_dir({"ALMANAC_STATE_DIR": "/tmp/sky"}) == Path("/tmp/sky")


class TestRngSeed:
    def test_unset(self):
        assert rng_seed({}) is None

    def test_integer(self):
        assert rng_seed({"ALMANAC_SEED": "42"}) == 42

    def test_invalid(self):
        with pytest.raises(ConfigurationError):
            rng_seed({"ALMANAC_SEED": "forty-two"})
