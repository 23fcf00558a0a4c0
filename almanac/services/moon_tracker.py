"""
MoonPhaseTracker - keeps both moons in step with the calendar.

A moon's state is a pure function of its day in cycle, so advancing by any
number of days is a single modular step. Phase-change notifications compare
the bucketed phase before and after the step, not the raw day.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from almanac.domain import (
    LUNARA,
    VEIL,
    MoonDefinition,
    MoonKey,
    MoonPair,
    MoonPhaseChangedEvent,
    MoonState,
    Moonlight,
)


logger = logging.getLogger(__name__)


# Combined light thresholds, brightest first
_MOONLIGHT_DESCRIPTIONS: tuple[tuple[float, str], ...] = (
    (5, "Bright as twilight"),
    (4, "Bright moonlight"),
    (3, "Good moonlight"),
    (2, "Dim moonlight"),
    (1, "Faint moonlight"),
)


@dataclass(frozen=True)
class MoonUpdate:
    """Result of moving one moon forward or back."""
    state: MoonState
    event: MoonPhaseChangedEvent | None = None


@dataclass(frozen=True)
class MoonPairUpdate:
    """Result of moving both moons by the same number of days."""
    moons: MoonPair
    events: tuple[MoonPhaseChangedEvent, ...] = ()


class MoonPhaseTracker:
    """
    Computes moon states for the primary and secondary moon.

    The tracker holds only static definitions; every call takes the current
    state and returns a new one.
    """

    def __init__(
        self,
        primary: MoonDefinition = LUNARA,
        secondary: MoonDefinition = VEIL,
    ):
        self.primary = primary
        self.secondary = secondary
        self._definitions: dict[MoonKey, MoonDefinition] = {
            primary.key: primary,
            secondary.key: secondary,
        }

    def definition_for(self, state: MoonState) -> MoonDefinition:
        return self._definitions[state.moon]

    def state_for(self, definition: MoonDefinition, day_in_cycle: int) -> MoonState:
        """Build the full state of a moon on a given day of its cycle."""
        cycle = definition.cycle_length
        day = day_in_cycle % cycle
        phase = definition.phase_at(day)
        return MoonState(
            moon=definition.key,
            phase=phase,
            day_in_cycle=day,
            days_until_full=(cycle // 2 - day + cycle) % cycle,
            # Never 0: on the new-moon day itself this is the next new moon
            days_until_new=(cycle - day) % cycle or cycle,
            visible=definition.is_visible(phase),
            light_level=definition.light_levels.get(phase, 0),
            effects=definition.effects_for(phase),
        )

    def initial_pair(self, primary_day: int = 11, secondary_day: int = 0) -> MoonPair:
        return MoonPair(
            primary=self.state_for(self.primary, primary_day),
            secondary=self.state_for(self.secondary, secondary_day),
        )

    def advance_days(
        self,
        definition: MoonDefinition,
        state: MoonState,
        days: int,
        at_minute: int = 0,
    ) -> MoonUpdate:
        """Move a moon by `days` (negative moves it back)."""
        new_state = self.state_for(definition, state.day_in_cycle + days)
        event = None
        if new_state.phase != state.phase:
            event = MoonPhaseChangedEvent(
                absolute_minute=at_minute,
                moon=definition.key,
                old_phase=state.phase,
                new_phase=new_state.phase,
            )
            logger.debug(
                f"Moon phase changed | moon={definition.key} | "
                f"{state.phase.value} -> {new_state.phase.value}"
            )
        return MoonUpdate(state=new_state, event=event)

    def advance_one_day(
        self,
        definition: MoonDefinition,
        state: MoonState,
        at_minute: int = 0,
    ) -> MoonUpdate:
        return self.advance_days(definition, state, 1, at_minute=at_minute)

    def advance_pair(self, moons: MoonPair, days: int, at_minute: int = 0) -> MoonPairUpdate:
        """Move both moons together. Emits at most one event per moon."""
        if days == 0:
            return MoonPairUpdate(moons=moons)

        primary = self.advance_days(self.primary, moons.primary, days, at_minute)
        secondary = self.advance_days(self.secondary, moons.secondary, days, at_minute)
        events = tuple(u.event for u in (primary, secondary) if u.event is not None)
        return MoonPairUpdate(
            moons=MoonPair(primary=primary.state, secondary=secondary.state),
            events=events,
        )

    def moonlight(self, moons: MoonPair) -> Moonlight:
        """Combined light from both moons."""
        primary_light = moons.primary.light_level
        secondary_light = moons.secondary.light_level
        level = primary_light + secondary_light

        description = "Moonless darkness"
        for threshold, label in _MOONLIGHT_DESCRIPTIONS:
            if level >= threshold:
                description = label
                break

        return Moonlight(
            level=level,
            primary_contribution=primary_light,
            secondary_contribution=secondary_light,
            description=description,
        )
