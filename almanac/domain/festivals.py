"""Festival definitions.

The annual festival table is static game data kept in data/festivals.yaml and
loaded once per process.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict


DEFAULT_FESTIVALS_PATH = Path(__file__).parent.parent / "data" / "festivals.yaml"


class FestivalDefinition(BaseModel):
    """A recurring festival, fixed to a calendar day."""

    model_config = ConfigDict(frozen=True)

    name: str
    month: int
    day: int
    duration_days: int = 1
    description: str = ""
    effects: tuple[str, ...] = ()
    traditions: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> FestivalDefinition:
        """Create a FestivalDefinition from a dictionary (YAML data)."""
        return cls(
            name=data["name"],
            month=data["month"],
            day=data["day"],
            duration_days=data.get("duration_days", 1),
            description=data.get("description", ""),
            effects=tuple(data.get("effects", [])),
            traditions=tuple(data.get("traditions", [])),
        )


class UpcomingFestival(BaseModel):
    """A festival relative to today."""

    model_config = ConfigDict(frozen=True)

    festival: FestivalDefinition
    days_until: int
    is_today: bool = False
    is_ongoing: bool = False

    @property
    def name(self) -> str:
        return self.festival.name


class ActiveFestival(BaseModel):
    """A festival that is being celebrated today."""

    model_config = ConfigDict(frozen=True)

    festival: FestivalDefinition
    day_of_festival: int
    is_last_day: bool

    @property
    def name(self) -> str:
        return self.festival.name


@lru_cache(maxsize=None)
def load_festivals(path: Path = DEFAULT_FESTIVALS_PATH) -> tuple[FestivalDefinition, ...]:
    """Load the festival table from YAML. Missing files yield an empty table."""
    if not path.exists():
        return ()

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not data or "festivals" not in data:
        return ()
    return tuple(FestivalDefinition.from_dict(entry) for entry in data["festivals"])
