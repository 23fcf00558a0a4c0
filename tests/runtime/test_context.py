"""Tests for almanac.runtime.context module."""

import pytest
from pydantic import ValidationError

from almanac.domain import DayBoundaryCrossedEvent, MoonKey, MoonPhaseChangedEvent, MoonPhaseName
from almanac.runtime.context import RolloverContext, RolloverResult


def _day_event(ctx: RolloverContext) -> DayBoundaryCrossedEvent:
    return DayBoundaryCrossedEvent(absolute_minute=ctx.at_minute, before=ctx.previous.date, date=ctx.snapshot.date)


class TestRolloverContextCreation:
    """Tests for RolloverContext creation."""

    def test_defaults(self, snapshot):
        ctx = RolloverContext(previous=snapshot, snapshot=snapshot)
        assert ctx.days_crossed == 0
        assert not ctx.regenerate_weather
        assert ctx.events == ()
        assert not ctx.date_changed

    def test_date_changed(self, rollover_context: RolloverContext):
        assert rollover_context.date_changed
        assert rollover_context.at_minute == rollover_context.snapshot.absolute_minute

    def test_immutability(self, rollover_context: RolloverContext):
        with pytest.raises(ValidationError):
            rollover_context.days_crossed = 3  # type: ignore


class TestRolloverContextTransforms:
    """Tests for the with_* methods."""

    def test_with_snapshot(self, rollover_context: RolloverContext, make_snapshot):
        other = make_snapshot(day=1)
        updated = rollover_context.with_snapshot(other)
        assert updated.snapshot == other
        assert rollover_context.snapshot != other

    def test_with_snapshot_fields(self, rollover_context: RolloverContext):
        updated = rollover_context.with_snapshot_fields(celestial_effects=("Something",))
        assert updated.snapshot.celestial_effects == ("Something",)
        assert updated.previous == rollover_context.previous

    def test_with_event_appends(self, rollover_context: RolloverContext):
        first = _day_event(rollover_context)
        second = MoonPhaseChangedEvent(
            absolute_minute=rollover_context.at_minute,
            moon=MoonKey("lunara"),
            old_phase=MoonPhaseName.NEW,
            new_phase=MoonPhaseName.WAXING_CRESCENT,
        )
        updated = rollover_context.with_event(first).with_events([second])
        assert updated.events == (first, second)
        assert rollover_context.events == ()


class TestRolloverResult:
    """Tests for RolloverResult."""

    def test_from_context(self, rollover_context: RolloverContext):
        ctx = rollover_context.with_event(_day_event(rollover_context))
        result = RolloverResult.from_context(ctx)
        assert result.snapshot == ctx.snapshot
        assert result.events == ctx.events
