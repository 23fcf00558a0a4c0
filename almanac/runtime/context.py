"""
RolloverContext - immutable context passed through rollover phases.

The clock moves the calendar fields first; the context then carries the
moved snapshot through the phases that bring moons, alignments, festivals
and weather up to date. Each phase returns a new context via the with_*
methods, accumulating notifications as it goes.
"""

from typing import Iterable

from pydantic import BaseModel, ConfigDict

from almanac.domain import ClockEvent, TimeSnapshot


class RolloverContext(BaseModel):
    """
    Immutable context passed through rollover phases.

    `previous` is the snapshot before the operation started; `snapshot` is
    the working copy the phases update.
    """

    model_config = ConfigDict(frozen=True)

    previous: TimeSnapshot
    snapshot: TimeSnapshot

    # Signed calendar days between previous and snapshot
    days_crossed: int = 0
    regenerate_weather: bool = False

    events: tuple[ClockEvent, ...] = ()

    # ==========================================================================
    # Transformation methods (return new context)
    # ==========================================================================

    def with_snapshot(self, snapshot: TimeSnapshot) -> "RolloverContext":
        """Replace the working snapshot."""
        return self.model_copy(update={"snapshot": snapshot})

    def with_snapshot_fields(self, **fields) -> "RolloverContext":
        """Update individual fields of the working snapshot."""
        return self.with_snapshot(self.snapshot.model_copy(update=fields))

    def with_event(self, event: ClockEvent) -> "RolloverContext":
        """Add a single notification."""
        return self.model_copy(update={"events": (*self.events, event)})

    def with_events(self, events: Iterable[ClockEvent]) -> "RolloverContext":
        """Add multiple notifications."""
        return self.model_copy(update={"events": (*self.events, *events)})

    # ==========================================================================
    # Query helpers
    # ==========================================================================

    @property
    def at_minute(self) -> int:
        """Absolute minute stamped on notifications raised by phases."""
        return self.snapshot.absolute_minute

    @property
    def date_changed(self) -> bool:
        return self.days_crossed != 0


class RolloverResult(BaseModel):
    """
    Result of running the rollover pipeline.

    The engine commits `snapshot` and then publishes `events` in order.
    """

    model_config = ConfigDict(frozen=True)

    snapshot: TimeSnapshot
    events: tuple[ClockEvent, ...]

    @classmethod
    def from_context(cls, ctx: RolloverContext) -> "RolloverResult":
        """Create a RolloverResult from a completed RolloverContext."""
        return cls(snapshot=ctx.snapshot, events=ctx.events)
