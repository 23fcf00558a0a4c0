"""
MoonPhase - steps both moons by the calendar days crossed.

A negative day count (an absolute jump into the past) moves the moons back,
so incremental advances and absolute jumps land on the same moon states.
"""

import logging

from almanac.runtime.context import RolloverContext
from almanac.runtime.pipeline import BasePhase
from almanac.services.moon_tracker import MoonPhaseTracker


logger = logging.getLogger(__name__)


class MoonPhase(BasePhase):
    """Realign the moons with the working snapshot's date."""

    def __init__(self, tracker: MoonPhaseTracker):
        self._tracker = tracker

    async def _execute(self, ctx: RolloverContext) -> RolloverContext:
        if not ctx.date_changed:
            return ctx

        update = self._tracker.advance_pair(
            ctx.snapshot.moons, ctx.days_crossed, at_minute=ctx.at_minute
        )
        if update.events:
            logger.info(
                "Moon phases changed | "
                + ", ".join(f"{e.moon}: {e.new_phase.value}" for e in update.events)
            )
        return ctx.with_snapshot_fields(moons=update.moons).with_events(update.events)
