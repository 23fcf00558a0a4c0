"""FestivalPhase - refreshes the current and upcoming festivals."""

from typing import Sequence

from almanac.domain import FestivalDefinition
from almanac.runtime.context import RolloverContext
from almanac.runtime.pipeline import BasePhase
from almanac.services import festival_scheduler


class FestivalPhase(BasePhase):
    """Recompute festivals for the working snapshot's date."""

    def __init__(self, festivals: Sequence[FestivalDefinition] | None = None):
        """
        Args:
            festivals: Festival table; None uses the bundled YAML table
        """
        self._festivals = festivals

    async def _execute(self, ctx: RolloverContext) -> RolloverContext:
        snapshot = ctx.snapshot
        date = snapshot.date
        return ctx.with_snapshot_fields(
            upcoming_festivals=festival_scheduler.upcoming(
                date, snapshot.settings.festival_horizon_days, self._festivals
            ),
            current_festival=festival_scheduler.current(date, self._festivals),
        )
