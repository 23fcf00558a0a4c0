"""Tests for almanac.services.duration_estimator module."""

import re

import pytest

from almanac.domain import Confidence, RuleId, SkipTarget
from almanac.services.duration_estimator import (
    DURATION_RULES,
    DurationEstimator,
    SceneRule,
    estimate,
    parse_amount,
    skip_to_minutes,
)


class TestRuleTable:
    """Tests for the ordered rule table."""

    def test_sorted_by_priority(self):
        priorities = [rule.priority for rule in DURATION_RULES]
        assert priorities == sorted(priorities, reverse=True)

    def test_unique_ids(self):
        ids = [rule.id for rule in DURATION_RULES]
        assert len(ids) == len(set(ids))

    @pytest.mark.parametrize("token,expected", [
        ("3", 3),
        ("12", 12),
        ("three", 3),
        ("Twelve", 12),
        ("many", None),
    ])
    def test_parse_amount(self, token: str, expected):
        assert parse_amount(token) == expected


class TestExplicitDurations:
    """Tests for explicit and fixed durations."""

    @pytest.mark.parametrize("text,minutes,rule", [
        ("Three hours later, the caravan arrives.", 180, "explicit_hours"),
        ("2 days pass without incident.", 2880, "explicit_days"),
        ("Twelve minutes pass.", 12, "explicit_minutes"),
        ("Half an hour later they regroup.", 30, "half_hour"),
        ("An hour later the bells ring.", 60, "an_hour"),
        ("A day later, word arrives.", 1440, "a_day"),
        ("A few hours later", 120, "few_hours"),
        ("Several hours later", 180, "several_hours"),
        ("A few minutes later", 10, "few_minutes"),
    ])
    def test_cues(self, text: str, minutes: int, rule: str):
        result = estimate(text)
        assert result.minutes == minutes
        assert result.confidence == Confidence.HIGH
        assert result.matched_rules == (rule,)

    def test_explicit_beats_scene(self):
        result = estimate("Two hours later, after a long rest, they wake.")
        assert result.minutes == 120
        assert result.matched_rules == ("explicit_hours",)


class TestSkipTo:
    """Tests for time-of-day jumps."""

    @pytest.mark.parametrize("text,target", [
        ("The next morning, they set out.", SkipTarget.MORNING),
        ("The following day was quiet.", SkipTarget.MORNING),
        ("As night falls, the camp settles.", SkipTarget.EVENING),
        ("At midnight the door opens.", SkipTarget.MIDNIGHT),
        ("By noon the road is dusty.", SkipTarget.NOON),
    ])
    def test_targets(self, text: str, target: SkipTarget):
        result = estimate(text)
        assert result.skip_to == target
        assert result.minutes == 0
        assert result.confidence == Confidence.HIGH

    @pytest.mark.parametrize("hour,minute,target,expected", [
        (18, 0, SkipTarget.MORNING, 780),
        (6, 30, SkipTarget.MORNING, 30),
        (7, 0, SkipTarget.MORNING, 1440),
        (23, 15, SkipTarget.MIDNIGHT, 45),
        (9, 0, SkipTarget.NOON, 180),
    ])
    def test_skip_to_minutes(self, hour: int, minute: int, target: SkipTarget, expected: int):
        assert skip_to_minutes(hour, minute, target) == expected


class TestScenes:
    """Tests for scene estimates."""

    def test_single_scene(self):
        result = estimate("They travel along the river.")
        assert result.minutes == 120
        assert result.confidence == Confidence.MEDIUM

    def test_longest_scene_wins(self):
        result = estimate("They talk over dinner.")
        assert result.minutes == 45
        assert set(result.matched_rules) == {"conversation", "meal"}

    @pytest.mark.parametrize("text,minutes,rules", [
        ("They grab a quick meal, then travel on toward the pass.", 120, {"quick_meal", "meal", "travel"}),
        ("They share a long conversation as they travel north.", 120,
         {"long_conversation", "conversation", "travel"}),
        ("They grab a quick meal.", 45, {"quick_meal", "meal"}),
        ("A fierce battle breaks out.", 15, {"fierce_combat", "combat"}),
    ])
    def test_concurrent_scenes_all_count(self, text: str, minutes: int, rules: set[str]):
        """Test a specific scene cue never hides a longer concurrent one."""
        result = estimate(text)
        assert result.minutes == minutes
        assert result.confidence == Confidence.MEDIUM
        assert set(result.matched_rules) == rules

    def test_rest_and_travel_take_longest(self):
        result = estimate("After the journey they sleep.")
        assert result.minutes == 480
        assert result.matched_rules == ("long_rest", "travel")

    def test_explicit_still_gates_scenes(self):
        result = estimate("Ten minutes later, after a quick meal and a long journey.")
        assert result.minutes == 10
        assert result.matched_rules == ("explicit_minutes",)


class TestDefaults:
    """Tests for text with no cues."""

    @pytest.mark.parametrize("text", ["", "   ", None, "Nothing much happens.", "The witchcraft glows."])
    def test_low_confidence_default(self, text):
        result = estimate(text)
        assert result.minutes == 3
        assert result.confidence == Confidence.LOW
        assert result.matched_rules == ()

    def test_custom_rules(self):
        rules = (SceneRule(id=RuleId("nap"), trigger=re.compile(r"\bnap\b"), priority=1, estimate=25),)
        assert DurationEstimator(rules).estimate("a short nap").minutes == 25
