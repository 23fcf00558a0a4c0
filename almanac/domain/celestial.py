"""Celestial events: named conditions over both moons and the date."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from pydantic import BaseModel, ConfigDict

from .calendar import CalendarDate
from .moons import VEIL, MoonEffect, MoonState
from .types import MoonPhaseName, Rarity, RuleId


CelestialCondition = Callable[[MoonState, MoonState, CalendarDate], bool]


@dataclass(frozen=True)
class CelestialEventRule:
    """A static alignment rule. `condition` receives (primary, secondary, date)."""

    id: RuleId
    name: str
    description: str
    condition: CelestialCondition
    effects: tuple[MoonEffect, ...]
    rarity: Rarity
    icon: str = ""


class CelestialEvent(BaseModel):
    """An alignment that is active right now."""

    model_config = ConfigDict(frozen=True)

    id: RuleId
    name: str
    description: str
    effects: tuple[MoonEffect, ...]
    rarity: Rarity
    icon: str = ""

    @classmethod
    def from_rule(cls, rule: CelestialEventRule) -> CelestialEvent:
        return cls(
            id=rule.id,
            name=rule.name,
            description=rule.description,
            effects=rule.effects,
            rarity=rule.rarity,
            icon=rule.icon,
        )


class UpcomingCelestialEvent(BaseModel):
    """The next occurrence of an alignment within a look-ahead window."""

    model_config = ConfigDict(frozen=True)

    event: CelestialEvent
    days_until: int


# =============================================================================
# Rule table
# =============================================================================


def _convergence(primary: MoonState, secondary: MoonState, date: CalendarDate) -> bool:
    return primary.phase == MoonPhaseName.FULL and secondary.phase == MoonPhaseName.FULL


def _veils_eclipse(primary: MoonState, secondary: MoonState, date: CalendarDate) -> bool:
    return (
        primary.phase == MoonPhaseName.FULL
        and secondary.day_in_cycle == VEIL.cycle_length // 2
    )


def _void_night(primary: MoonState, secondary: MoonState, date: CalendarDate) -> bool:
    return primary.phase == MoonPhaseName.NEW and secondary.phase == MoonPhaseName.NEW


def _silver_tide(primary: MoonState, secondary: MoonState, date: CalendarDate) -> bool:
    # Lunara at perigee
    return primary.phase == MoonPhaseName.FULL and primary.day_in_cycle % 7 == 0


def _starfall(primary: MoonState, secondary: MoonState, date: CalendarDate) -> bool:
    return date.month == 8 and 10 <= date.day <= 15


CELESTIAL_RULES: tuple[CelestialEventRule, ...] = (
    CelestialEventRule(
        id=RuleId("convergence"),
        name="Convergence Night",
        description="Both moons are full simultaneously",
        condition=_convergence,
        effects=(
            MoonEffect(type="magic", modifier=2, description="All magical effects doubled"),
            MoonEffect(type="undead", modifier=50, description="Undead surge"),
            MoonEffect(type="spirits", modifier=100, description="Spirits roam freely"),
        ),
        rarity=Rarity.VERY_RARE,
        icon="✨",
    ),
    CelestialEventRule(
        id=RuleId("veils_eclipse"),
        name="Veil's Eclipse",
        description="The Veil passes before Lunara",
        condition=_veils_eclipse,
        effects=(
            MoonEffect(type="shadow_magic", modifier=50, description="Shadow magic peaks"),
            MoonEffect(type="undead", modifier=30, description="Undead empowered"),
            MoonEffect(type="light_magic", modifier=-30, description="Light magic weakened"),
        ),
        rarity=Rarity.RARE,
        icon="🌑",
    ),
    CelestialEventRule(
        id=RuleId("void_night"),
        name="Void Night",
        description="Both moons are new - darkest night",
        condition=_void_night,
        effects=(
            MoonEffect(type="darkness", modifier=3, description="Near total darkness"),
            MoonEffect(type="aberrations", modifier=50, description="Aberrations stir"),
            MoonEffect(type="divination", modifier=-50, description="Divination blocked"),
        ),
        rarity=Rarity.RARE,
        icon="⬛",
    ),
    CelestialEventRule(
        id=RuleId("silver_tide"),
        name="Silver Tide",
        description="Lunara at perigee during full moon",
        condition=_silver_tide,
        effects=(
            MoonEffect(type="tides", modifier=4, description="Extreme tides"),
            MoonEffect(type="water_magic", modifier=20, description="Water magic enhanced"),
            MoonEffect(type="coastal", modifier=-20, description="Coastal travel dangerous"),
        ),
        rarity=Rarity.UNCOMMON,
        icon="🌊",
    ),
    CelestialEventRule(
        id=RuleId("starfall"),
        name="Starfall",
        description="Meteor shower visible",
        condition=_starfall,
        effects=(
            MoonEffect(type="star_metal", modifier=100, description="Star metal may fall"),
            MoonEffect(type="wishes", modifier=1, description="Wishes more potent"),
        ),
        rarity=Rarity.ANNUAL,
        icon="⭐",
    ),
)
