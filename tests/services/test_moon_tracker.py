"""Tests for almanac.services.moon_tracker module."""

import pytest

from almanac.domain import LUNARA, VEIL, MoonPhaseName
from almanac.services.moon_tracker import MoonPhaseTracker


class TestStateFor:
    """Tests for building a moon state from a cycle day."""

    def test_wraps_cycle(self, tracker: MoonPhaseTracker):
        assert tracker.state_for(LUNARA, 30).day_in_cycle == 2
        assert tracker.state_for(LUNARA, -1).day_in_cycle == 27

    def test_days_until_full(self, tracker: MoonPhaseTracker):
        assert tracker.state_for(LUNARA, 11).days_until_full == 3
        assert tracker.state_for(LUNARA, 14).days_until_full == 0
        assert tracker.state_for(LUNARA, 20).days_until_full == 22

    def test_days_until_new_never_zero(self, tracker: MoonPhaseTracker):
        assert tracker.state_for(LUNARA, 0).days_until_new == 28
        assert tracker.state_for(LUNARA, 27).days_until_new == 1
        assert tracker.state_for(VEIL, 0).days_until_new == 35

    def test_visibility_and_light(self, tracker: MoonPhaseTracker):
        hidden = tracker.state_for(VEIL, 0)
        assert not hidden.visible
        assert hidden.light_level == 0
        full = tracker.state_for(LUNARA, 15)
        assert full.visible
        assert full.light_level == 4

    def test_effects_follow_phase(self, tracker: MoonPhaseTracker):
        assert tracker.state_for(LUNARA, 15).effects == LUNARA.effects_for(MoonPhaseName.FULL)

    def test_initial_pair(self, tracker: MoonPhaseTracker):
        pair = tracker.initial_pair()
        assert pair.primary.moon == "lunara"
        assert pair.primary.phase == MoonPhaseName.WAXING_GIBBOUS
        assert pair.secondary.moon == "veil"
        assert pair.secondary.phase == MoonPhaseName.NEW


class TestAdvance:
    """Tests for moving moons forward and back."""

    def test_phase_change_event(self, tracker: MoonPhaseTracker):
        state = tracker.state_for(LUNARA, 13)
        update = tracker.advance_one_day(LUNARA, state, at_minute=99)
        assert update.state.phase == MoonPhaseName.FULL
        assert update.event is not None
        assert update.event.old_phase == MoonPhaseName.WAXING_GIBBOUS
        assert update.event.new_phase == MoonPhaseName.FULL
        assert update.event.absolute_minute == 99

    def test_no_event_within_phase(self, tracker: MoonPhaseTracker):
        state = tracker.state_for(LUNARA, 14)
        update = tracker.advance_one_day(LUNARA, state)
        assert update.state.phase == MoonPhaseName.FULL
        assert update.event is None

    def test_full_cycle_returns_to_same_state(self, tracker: MoonPhaseTracker):
        state = tracker.state_for(VEIL, 12)
        update = tracker.advance_days(VEIL, state, 35)
        assert update.state == state
        assert update.event is None

    def test_backwards(self, tracker: MoonPhaseTracker):
        state = tracker.state_for(LUNARA, 2)
        update = tracker.advance_days(LUNARA, state, -3)
        assert update.state.day_in_cycle == 27
        assert update.state.phase == MoonPhaseName.WANING_CRESCENT

    @pytest.mark.parametrize("days", [1, 7, 28, 35, 140, 1000])
    def test_pair_jump_matches_single_steps(self, tracker: MoonPhaseTracker, days: int):
        """Test one jump of n days lands where n one-day steps would."""
        pair = tracker.initial_pair()
        jumped = tracker.advance_pair(pair, days).moons

        stepped = pair
        for _ in range(days):
            stepped = tracker.advance_pair(stepped, 1).moons
        assert jumped == stepped

    def test_pair_emits_at_most_one_event_per_moon(self, tracker: MoonPhaseTracker):
        update = tracker.advance_pair(tracker.initial_pair(), 100)
        moons = [e.moon for e in update.events]
        assert len(moons) == len(set(moons))

    def test_pair_zero_days(self, tracker: MoonPhaseTracker):
        pair = tracker.initial_pair()
        update = tracker.advance_pair(pair, 0)
        assert update.moons is pair
        assert update.events == ()

    def test_moons_move_independently(self, tracker: MoonPhaseTracker):
        update = tracker.advance_pair(tracker.initial_pair(11, 0), 28)
        assert update.moons.primary.day_in_cycle == 11
        assert update.moons.secondary.day_in_cycle == 28


class TestMoonlight:
    """Tests for combined moonlight."""

    def test_both_full(self, tracker: MoonPhaseTracker):
        light = tracker.moonlight(tracker.initial_pair(15, 19))
        assert light.level == 6
        assert light.description == "Bright as twilight"

    def test_darkness(self, tracker: MoonPhaseTracker):
        light = tracker.moonlight(tracker.initial_pair(0, 0))
        assert light.level == 0
        assert light.description == "Moonless darkness"

    def test_contributions(self, tracker: MoonPhaseTracker):
        light = tracker.moonlight(tracker.initial_pair(11, 0))
        assert light.primary_contribution == 3
        assert light.secondary_contribution == 0
        assert light.description == "Good moonlight"
