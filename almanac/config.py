"""
Environment configuration.

Settings come from ALMANAC_* environment variables (main.py loads a .env
file first with python-dotenv). Each ClockSettings field maps to the upper
case variable of the same name, e.g. ALMANAC_REGION_TYPE=coastal or
ALMANAC_LARGE_JUMP_THRESHOLD=180. Unset variables keep their defaults.
"""

import os
from pathlib import Path
from typing import Mapping

from pydantic import ValidationError

from almanac.domain import ClockSettings
from almanac.errors import ConfigurationError


ENV_PREFIX = "ALMANAC_"
DEFAULT_STATE_DIR = Path("almanac_state")


def load_settings(
    env: Mapping[str, str] | None = None,
    base: ClockSettings | None = None,
) -> ClockSettings:
    """Build ClockSettings from the environment, on top of `base` if given."""
    env = os.environ if env is None else env
    values = (base or ClockSettings()).model_dump()

    for field_name in ClockSettings.model_fields:
        raw = env.get(f"{ENV_PREFIX}{field_name.upper()}")
        if raw is not None and raw.strip() != "":
            values[field_name] = raw.strip()

    try:
        return ClockSettings.model_validate(values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid {ENV_PREFIX}* setting: {e}") from e


def state_dir(env: Mapping[str, str] | None = None) -> Path:
    """Directory for snapshots, the event log and the log file."""
    env = os.environ if env is None else env
    return Path(env.get(f"{ENV_PREFIX}STATE_DIR") or DEFAULT_STATE_DIR)


def rng_seed(env: Mapping[str, str] | None = None) -> int | None:
    """Optional fixed seed for weather and other random draws."""
    env = os.environ if env is None else env
    raw = env.get(f"{ENV_PREFIX}SEED")
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{ENV_PREFIX}SEED must be an integer, got {raw!r}") from e
