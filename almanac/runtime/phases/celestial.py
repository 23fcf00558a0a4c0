"""
CelestialPhase - active alignments, their effects and the ones coming up.

Raises a CelestialEventBeganEvent for every alignment active now that was
not active in the previous snapshot.
"""

import logging

from almanac.domain import CelestialEventBeganEvent
from almanac.runtime.context import RolloverContext
from almanac.runtime.pipeline import BasePhase
from almanac.services import celestial_detector
from almanac.services.moon_tracker import MoonPhaseTracker


logger = logging.getLogger(__name__)


class CelestialPhase(BasePhase):
    """Detect and forecast alignments for the working snapshot."""

    def __init__(self, tracker: MoonPhaseTracker):
        self._tracker = tracker

    async def _execute(self, ctx: RolloverContext) -> RolloverContext:
        snapshot = ctx.snapshot
        primary = snapshot.moons.primary
        secondary = snapshot.moons.secondary
        date = snapshot.date

        active = celestial_detector.detect(primary, secondary, date)
        alignments = celestial_detector.forecast(
            primary,
            secondary,
            date,
            snapshot.settings.alignment_horizon_days,
            tracker=self._tracker,
        )

        previously_active = {event.id for event in ctx.previous.celestial_events}
        began = [
            CelestialEventBeganEvent(absolute_minute=ctx.at_minute, event=event)
            for event in active
            if event.id not in previously_active
        ]
        for event in began:
            logger.info(f"Celestial event began | {event.event.name} ({event.event.rarity.value})")

        return ctx.with_snapshot_fields(
            celestial_events=active,
            celestial_effects=celestial_detector.collect_effects(active),
            upcoming_alignments=alignments,
        ).with_events(began)
