"""Tests for almanac.runtime.phases.moon module."""

import pytest

from almanac.domain import MoonPhaseChangedEvent, MoonPhaseName
from almanac.runtime.context import RolloverContext
from almanac.runtime.phases import MoonPhase


class TestMoonPhase:
    """Tests for stepping the moons during rollover."""

    @pytest.mark.asyncio
    async def test_skips_when_date_unchanged(self, tracker, snapshot):
        ctx = RolloverContext(previous=snapshot, snapshot=snapshot)
        result = await MoonPhase(tracker).execute(ctx)
        assert result is ctx

    @pytest.mark.asyncio
    async def test_steps_both_moons(self, tracker, rollover_context: RolloverContext):
        result = await MoonPhase(tracker).execute(rollover_context)
        assert result.snapshot.moons.primary.day_in_cycle == 12
        assert result.snapshot.moons.secondary.day_in_cycle == 1
        assert result.events == ()

    @pytest.mark.asyncio
    async def test_phase_change_raises_event(self, tracker, make_snapshot):
        previous = make_snapshot(primary_day=13)
        moved = make_snapshot(day=15, primary_day=13)
        ctx = RolloverContext(previous=previous, snapshot=moved, days_crossed=1)

        result = await MoonPhase(tracker).execute(ctx)

        assert result.snapshot.moons.primary.phase == MoonPhaseName.FULL
        assert len(result.events) == 1
        event = result.events[0]
        assert isinstance(event, MoonPhaseChangedEvent)
        assert event.moon == "lunara"
        assert event.old_phase == MoonPhaseName.WAXING_GIBBOUS
        assert event.absolute_minute == moved.absolute_minute

    @pytest.mark.asyncio
    async def test_negative_days_move_back(self, tracker, make_snapshot):
        previous = make_snapshot(primary_day=2, secondary_day=3)
        moved = make_snapshot(day=9, primary_day=2, secondary_day=3)
        ctx = RolloverContext(previous=previous, snapshot=moved, days_crossed=-5)

        result = await MoonPhase(tracker).execute(ctx)

        assert result.snapshot.moons.primary.day_in_cycle == 25
        assert result.snapshot.moons.secondary.day_in_cycle == 33
