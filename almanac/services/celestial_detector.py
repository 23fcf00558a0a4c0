"""
Celestial event detection.

Rules are evaluated independently; a rule whose condition raises is logged
and treated as not matching so the remaining rules still report.
"""

from __future__ import annotations

import logging
from typing import Iterable

from almanac.domain import (
    CELESTIAL_RULES,
    CalendarDate,
    CelestialEvent,
    CelestialEventRule,
    MoonState,
    UpcomingCelestialEvent,
    from_days_since_epoch,
)
from almanac.services.moon_tracker import MoonPhaseTracker


logger = logging.getLogger(__name__)


def _matches(
    rule: CelestialEventRule,
    primary: MoonState,
    secondary: MoonState,
    date: CalendarDate,
) -> bool:
    try:
        return bool(rule.condition(primary, secondary, date))
    except Exception as e:
        logger.debug(f"Celestial rule {rule.id} failed, treating as no match: {e}")
        return False


def detect(
    primary: MoonState,
    secondary: MoonState,
    date: CalendarDate,
    rules: Iterable[CelestialEventRule] = CELESTIAL_RULES,
) -> tuple[CelestialEvent, ...]:
    """All alignments active for the given moons and date."""
    return tuple(
        CelestialEvent.from_rule(rule)
        for rule in rules
        if _matches(rule, primary, secondary, date)
    )


def collect_effects(events: Iterable[CelestialEvent]) -> tuple[str, ...]:
    """Flatten event effects into display lines, e.g. 'Void Night: Divination blocked'."""
    return tuple(
        f"{event.name}: {effect.description}"
        for event in events
        for effect in event.effects
    )


def forecast(
    primary: MoonState,
    secondary: MoonState,
    date: CalendarDate,
    horizon_days: int,
    tracker: MoonPhaseTracker | None = None,
    rules: Iterable[CelestialEventRule] = CELESTIAL_RULES,
) -> tuple[UpcomingCelestialEvent, ...]:
    """
    Next occurrence of each rule within `horizon_days` after today.

    Today is not included; what is active today is reported by detect().
    Results are sorted by days_until.
    """
    tracker = tracker or MoonPhaseTracker()
    primary_def = tracker.definition_for(primary)
    secondary_def = tracker.definition_for(secondary)
    pending = list(rules)
    found: list[UpcomingCelestialEvent] = []
    today = date.day_number

    for offset in range(1, horizon_days + 1):
        if not pending:
            break
        year, month, day = from_days_since_epoch(today + offset)
        future_date = CalendarDate(year=year, month=month, day=day)
        future_primary = tracker.state_for(primary_def, primary.day_in_cycle + offset)
        future_secondary = tracker.state_for(secondary_def, secondary.day_in_cycle + offset)

        for rule in list(pending):
            if _matches(rule, future_primary, future_secondary, future_date):
                found.append(UpcomingCelestialEvent(
                    event=CelestialEvent.from_rule(rule),
                    days_until=offset,
                ))
                pending.remove(rule)

    return tuple(found)
