"""Moon definitions and per-moon state.

Two moons cycle independently: Lunara (28 days) and The Veil (35 days).
Their cycle lengths share no common factor beyond 7, so alignments such as
both moons being full at once come round only rarely.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .types import PHASE_ORDER, MoonKey, MoonPhaseName


class MoonEffect(BaseModel):
    """A gameplay effect attached to a moon phase or celestial event."""

    model_config = ConfigDict(frozen=True)

    type: str
    modifier: float
    description: str


class MoonDefinition(BaseModel):
    """Static description of one moon."""

    model_config = ConfigDict(frozen=True)

    key: MoonKey
    name: str
    title: str
    cycle_length: int
    color: str
    phase_names: dict[MoonPhaseName, str]
    phase_icons: dict[MoonPhaseName, str]
    light_levels: dict[MoonPhaseName, float]
    hidden_phases: frozenset[MoonPhaseName] = frozenset()
    phase_effects: dict[MoonPhaseName, tuple[MoonEffect, ...]] = Field(default_factory=dict)

    def phase_at(self, day_in_cycle: int) -> MoonPhaseName:
        """Bucket a cycle day into one of the eight phases."""
        return PHASE_ORDER[(day_in_cycle * len(PHASE_ORDER)) // self.cycle_length]

    def effects_for(self, phase: MoonPhaseName) -> tuple[MoonEffect, ...]:
        return self.phase_effects.get(phase, ())

    def is_visible(self, phase: MoonPhaseName) -> bool:
        return phase not in self.hidden_phases


class MoonState(BaseModel):
    """Where a moon currently sits in its cycle."""

    model_config = ConfigDict(frozen=True)

    moon: MoonKey
    phase: MoonPhaseName
    day_in_cycle: int
    days_until_full: int
    days_until_new: int
    visible: bool = True
    light_level: float = 0
    effects: tuple[MoonEffect, ...] = ()


class MoonPair(BaseModel):
    """Both moons as seen on one night."""

    model_config = ConfigDict(frozen=True)

    primary: MoonState
    secondary: MoonState


class Moonlight(BaseModel):
    """Combined light cast by both moons."""

    model_config = ConfigDict(frozen=True)

    level: float
    primary_contribution: float
    secondary_contribution: float
    description: str


# =============================================================================
# The two moons
# =============================================================================

LUNARA = MoonDefinition(
    key=MoonKey("lunara"),
    name="Lunara",
    title="The Silver Moon",
    cycle_length=28,
    color="#c0c0c0",
    phase_names={
        MoonPhaseName.NEW: "New Moon",
        MoonPhaseName.WAXING_CRESCENT: "Waxing Crescent",
        MoonPhaseName.FIRST_QUARTER: "First Quarter",
        MoonPhaseName.WAXING_GIBBOUS: "Waxing Gibbous",
        MoonPhaseName.FULL: "Full Moon",
        MoonPhaseName.WANING_GIBBOUS: "Waning Gibbous",
        MoonPhaseName.LAST_QUARTER: "Last Quarter",
        MoonPhaseName.WANING_CRESCENT: "Waning Crescent",
    },
    phase_icons={
        MoonPhaseName.NEW: "🌑",
        MoonPhaseName.WAXING_CRESCENT: "🌒",
        MoonPhaseName.FIRST_QUARTER: "🌓",
        MoonPhaseName.WAXING_GIBBOUS: "🌔",
        MoonPhaseName.FULL: "🌕",
        MoonPhaseName.WANING_GIBBOUS: "🌖",
        MoonPhaseName.LAST_QUARTER: "🌗",
        MoonPhaseName.WANING_CRESCENT: "🌘",
    },
    light_levels={
        MoonPhaseName.NEW: 0,
        MoonPhaseName.WAXING_CRESCENT: 1,
        MoonPhaseName.FIRST_QUARTER: 2,
        MoonPhaseName.WAXING_GIBBOUS: 3,
        MoonPhaseName.FULL: 4,
        MoonPhaseName.WANING_GIBBOUS: 3,
        MoonPhaseName.LAST_QUARTER: 2,
        MoonPhaseName.WANING_CRESCENT: 1,
    },
    phase_effects={
        MoonPhaseName.NEW: (
            MoonEffect(type="undead", modifier=-10, description="Undead -10% activity"),
            MoonEffect(type="stealth", modifier=2, description="Stealth +2 in darkness"),
            MoonEffect(type="darkvision", modifier=-10, description="Darkvision range -10ft"),
        ),
        MoonPhaseName.FULL: (
            MoonEffect(type="undead", modifier=20, description="Undead +20% activity"),
            MoonEffect(type="lycanthrope", modifier=100, description="Lycanthrope transformation forced"),
            MoonEffect(type="tides", modifier=2, description="High tides"),
            MoonEffect(type="moonlight", modifier=4, description="Bright moonlight (dim light outdoors)"),
        ),
        MoonPhaseName.WAXING_GIBBOUS: (
            MoonEffect(type="undead", modifier=10, description="Undead +10% activity"),
        ),
        MoonPhaseName.WANING_GIBBOUS: (
            MoonEffect(type="undead", modifier=10, description="Undead +10% activity"),
        ),
    },
)

VEIL = MoonDefinition(
    key=MoonKey("veil"),
    name="The Veil",
    title="The Shadow Moon",
    cycle_length=35,
    color="#4a3a6a",
    phase_names={
        MoonPhaseName.NEW: "Hidden",
        MoonPhaseName.WAXING_CRESCENT: "Emerging",
        MoonPhaseName.FIRST_QUARTER: "Half Revealed",
        MoonPhaseName.WAXING_GIBBOUS: "Nearly Full",
        MoonPhaseName.FULL: "Unveiled",
        MoonPhaseName.WANING_GIBBOUS: "Fading",
        MoonPhaseName.LAST_QUARTER: "Half Hidden",
        MoonPhaseName.WANING_CRESCENT: "Retreating",
    },
    phase_icons={
        MoonPhaseName.NEW: "⚫",
        MoonPhaseName.WAXING_CRESCENT: "🌘",
        MoonPhaseName.FIRST_QUARTER: "🌗",
        MoonPhaseName.WAXING_GIBBOUS: "🌖",
        MoonPhaseName.FULL: "🌕",
        MoonPhaseName.WANING_GIBBOUS: "🌔",
        MoonPhaseName.LAST_QUARTER: "🌓",
        MoonPhaseName.WANING_CRESCENT: "🌒",
    },
    light_levels={
        MoonPhaseName.NEW: 0,
        MoonPhaseName.WAXING_CRESCENT: 0.5,
        MoonPhaseName.FIRST_QUARTER: 1,
        MoonPhaseName.WAXING_GIBBOUS: 1.5,
        MoonPhaseName.FULL: 2,
        MoonPhaseName.WANING_GIBBOUS: 1.5,
        MoonPhaseName.LAST_QUARTER: 1,
        MoonPhaseName.WANING_CRESCENT: 0.5,
    },
    hidden_phases=frozenset({MoonPhaseName.NEW}),
    phase_effects={
        MoonPhaseName.NEW: (
            MoonEffect(type="shadow_magic", modifier=-20, description="Shadow magic weakened"),
            MoonEffect(type="spirits", modifier=-50, description="Spirits dormant"),
        ),
        MoonPhaseName.FULL: (
            MoonEffect(type="shadow_magic", modifier=30, description="Shadow magic enhanced"),
            MoonEffect(type="spirits", modifier=50, description="Spirit activity high"),
            MoonEffect(type="veil_thin", modifier=1, description="Veil between worlds thin"),
        ),
    },
)

MOONS: dict[MoonKey, MoonDefinition] = {LUNARA.key: LUNARA, VEIL.key: VEIL}
