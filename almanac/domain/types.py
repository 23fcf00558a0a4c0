"""Foundational types for Almanac.

Symbolic vocabularies shared by the calendar, moon, weather and estimator
models. Enums are `str` subclasses so they serialize as their plain values.
"""

from __future__ import annotations

from enum import Enum
from typing import NewType

# Type aliases for domain identifiers
MoonKey = NewType("MoonKey", str)
RuleId = NewType("RuleId", str)


class Season(str, Enum):
    WINTER = "winter"
    SPRING = "spring"
    SUMMER = "summer"
    AUTUMN = "autumn"


class MoonPhaseName(str, Enum):
    """The eight discrete positions within a moon's cycle, in cycle order."""

    NEW = "new"
    WAXING_CRESCENT = "waxing_crescent"
    FIRST_QUARTER = "first_quarter"
    WAXING_GIBBOUS = "waxing_gibbous"
    FULL = "full"
    WANING_GIBBOUS = "waning_gibbous"
    LAST_QUARTER = "last_quarter"
    WANING_CRESCENT = "waning_crescent"


# Index order matters: phase = PHASE_ORDER[(day_in_cycle * 8) // cycle_length]
PHASE_ORDER: tuple[MoonPhaseName, ...] = tuple(MoonPhaseName)


class Rarity(str, Enum):
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    VERY_RARE = "very_rare"
    ANNUAL = "annual"


class RegionType(str, Enum):
    """Terrain classes that bias weather generation."""

    DEFAULT = "default"
    COASTAL = "coastal"
    MOUNTAIN = "mountain"
    DESERT = "desert"
    FOREST = "forest"
    SWAMP = "swamp"
    PLAINS = "plains"
    TUNDRA = "tundra"


class Visibility(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    MODERATE = "moderate"
    POOR = "poor"
    VERY_POOR = "very_poor"


class Confidence(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SkipTarget(str, Enum):
    """Symbolic times of day a narrative can jump to."""

    MORNING = "morning"
    NOON = "noon"
    EVENING = "evening"
    NIGHT = "night"
    MIDNIGHT = "midnight"

    @property
    def hour(self) -> int:
        """The hour of day this target lands on."""
        return _SKIP_TARGET_HOURS[self]


_SKIP_TARGET_HOURS: dict[SkipTarget, int] = {
    SkipTarget.MORNING: 7,
    SkipTarget.NOON: 12,
    SkipTarget.EVENING: 18,
    SkipTarget.NIGHT: 21,
    SkipTarget.MIDNIGHT: 0,
}
