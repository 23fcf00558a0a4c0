"""
Narrative duration estimation.

Infers how much in-world time a block of prose covers from textual cues.
Rules form one ordered table of tagged variants:

- explicit: an amount in the text times a unit ("3 hours later")
- fixed: a set duration ("half an hour later")
- skip_to: jump to a time of day ("the next morning")
- scene: a typical duration for a kind of scene ("a long rest")

The table is kept sorted by priority, highest first. An explicit, fixed or
skip-to match raises the priority floor: later rules below it are ignored, it
replaces whatever came before it and it stops scene accumulation. Scene
matches never raise the floor, so every matching scene cue counts, and they
combine as the longest single estimate, never a sum ("a quick meal, then
travel" is the travel time).
"""

from __future__ import annotations

import logging
import re
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator

from almanac.domain import MINUTES_PER_DAY, MINUTES_PER_HOUR, Confidence, RuleId, SkipTarget


logger = logging.getLogger(__name__)


DEFAULT_MINUTES = 3

NUMBER_WORDS: dict[str, int] = {
    "one": 1, "two": 2, "three": 3, "four": 4, "five": 5, "six": 6,
    "seven": 7, "eight": 8, "nine": 9, "ten": 10, "eleven": 11, "twelve": 12,
}

_AMOUNT = r"(\d+|" + "|".join(NUMBER_WORDS) + r")"


def _re(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


def parse_amount(token: str) -> int | None:
    """Parse '3' or 'three'. Returns None for anything else."""
    token = token.strip().lower()
    if token.isdigit():
        return int(token)
    return NUMBER_WORDS.get(token)


# =============================================================================
# Rule variants
# =============================================================================


class ExplicitRule(BaseModel):
    """Amount captured from the text, multiplied by a unit in minutes."""
    model_config = ConfigDict(frozen=True)
    kind: Literal["explicit"] = "explicit"
    id: RuleId
    trigger: re.Pattern[str]
    priority: int

    unit_minutes: int
    group: int = 1


class FixedRule(BaseModel):
    """A cue that always means the same duration."""
    model_config = ConfigDict(frozen=True)
    kind: Literal["fixed"] = "fixed"
    id: RuleId
    trigger: re.Pattern[str]
    priority: int

    minutes: int


class SkipToRule(BaseModel):
    """A cue that jumps to a time of day rather than a duration."""
    model_config = ConfigDict(frozen=True)
    kind: Literal["skip_to"] = "skip_to"
    id: RuleId
    trigger: re.Pattern[str]
    priority: int

    target: SkipTarget


class SceneRule(BaseModel):
    """A kind of scene with a typical length."""
    model_config = ConfigDict(frozen=True)
    kind: Literal["scene"] = "scene"
    id: RuleId
    trigger: re.Pattern[str]
    priority: int

    estimate: int


DurationRule = Annotated[
    Union[ExplicitRule, FixedRule, SkipToRule, SceneRule],
    Discriminator("kind"),
]


class DurationEstimate(BaseModel):
    """How much time a passage of narrative covers."""
    model_config = ConfigDict(frozen=True)

    minutes: int
    confidence: Confidence
    skip_to: SkipTarget | None = None
    matched_rules: tuple[RuleId, ...] = ()


# =============================================================================
# Rule table
# =============================================================================

_PASSING = r"\s*(?:later|pass|have\s+passed)"

_RULES: list[DurationRule] = [
    # Explicit amounts
    ExplicitRule(id=RuleId("explicit_hours"), trigger=_re(rf"\b{_AMOUNT}\s*hours?{_PASSING}"),
                 priority=10, unit_minutes=MINUTES_PER_HOUR),
    ExplicitRule(id=RuleId("explicit_minutes"), trigger=_re(rf"\b{_AMOUNT}\s*minutes?{_PASSING}"),
                 priority=10, unit_minutes=1),
    ExplicitRule(id=RuleId("explicit_days"), trigger=_re(rf"\b{_AMOUNT}\s*days?{_PASSING}"),
                 priority=10, unit_minutes=MINUTES_PER_DAY),
    FixedRule(id=RuleId("half_hour"), trigger=_re(r"\bhalf\s*(?:an?\s*)?hour\s*(?:later|pass)"),
              priority=10, minutes=30),
    FixedRule(id=RuleId("an_hour"), trigger=_re(r"(?<!half\s)\b(?:a|an|one)\s*hour\s*(?:later|pass)"),
              priority=10, minutes=60),
    FixedRule(id=RuleId("a_day"), trigger=_re(r"\b(?:a|one)\s*day\s*(?:later|pass)"),
              priority=10, minutes=MINUTES_PER_DAY),
    FixedRule(id=RuleId("several_hours"), trigger=_re(r"\bseveral\s*hours?\s*(?:later|pass)"),
              priority=9, minutes=180),
    FixedRule(id=RuleId("few_hours"), trigger=_re(r"\b(?:a\s*)?few\s*hours?\s*(?:later|pass)"),
              priority=9, minutes=120),
    FixedRule(id=RuleId("few_minutes"), trigger=_re(r"\b(?:a\s*)?few\s*minutes?\s*(?:later|pass)"),
              priority=9, minutes=10),

    # Time-of-day jumps
    SkipToRule(id=RuleId("next_morning"), trigger=_re(r"\bthe\s*next\s*(?:morning|day)"),
               priority=8, target=SkipTarget.MORNING),
    SkipToRule(id=RuleId("next_evening"), trigger=_re(r"\bthe\s*next\s*evening"),
               priority=8, target=SkipTarget.EVENING),
    SkipToRule(id=RuleId("next_night"), trigger=_re(r"\bthe\s*next\s*night"),
               priority=8, target=SkipTarget.NIGHT),
    SkipToRule(id=RuleId("following_morning"), trigger=_re(r"\bthe\s*following\s*(?:morning|day)"),
               priority=8, target=SkipTarget.MORNING),
    SkipToRule(id=RuleId("dawn"),
               trigger=_re(r"\b(?:dawn\s*breaks|sunrise|morning\s*comes|wake\s*(?:up|to))"),
               priority=7, target=SkipTarget.MORNING),
    SkipToRule(id=RuleId("dusk"),
               trigger=_re(r"\b(?:night\s*falls|sunset|dusk\s*(?:falls|comes)|evening\s*comes)"),
               priority=7, target=SkipTarget.EVENING),
    SkipToRule(id=RuleId("midnight"), trigger=_re(r"\b(?:midnight|dead\s*of\s*night)"),
               priority=7, target=SkipTarget.MIDNIGHT),
    SkipToRule(id=RuleId("noon"), trigger=_re(r"\b(?:noon|midday|middle\s*of\s*the\s*day)"),
               priority=7, target=SkipTarget.NOON),

    # Scene types
    SceneRule(id=RuleId("fierce_combat"),
              trigger=_re(r"\b(?:fierce|brutal|long|extended)\s*(?:combat|fight|battle)"),
              priority=5, estimate=15),
    SceneRule(id=RuleId("combat"), trigger=_re(r"\b(?:combat|fight|battle|attack|clash|skirmish)"),
              priority=4, estimate=5),
    SceneRule(id=RuleId("long_rest"),
              trigger=_re(r"\b(?:long\s*rest|sleep|camp\s*for\s*the\s*night|retire\s*for\s*the\s*(?:night|evening))"),
              priority=6, estimate=480),
    SceneRule(id=RuleId("short_rest"),
              trigger=_re(r"\b(?:short\s*rest|breather|catch\s*(?:your|their)?\s*breath|take\s*a\s*break)"),
              priority=5, estimate=60),
    SceneRule(id=RuleId("travel"),
              trigger=_re(r"\b(?:travel|journey|walk|ride|march|trek|make\s*(?:your|their)\s*way)"),
              priority=4, estimate=120),
    SceneRule(id=RuleId("long_conversation"), trigger=_re(r"\blong\s*(?:conversation|discussion|talk)"),
              priority=5, estimate=45),
    SceneRule(id=RuleId("conversation"), trigger=_re(r"\b(?:conversation|talk|discuss|speak|chat)"),
              priority=4, estimate=15),
    SceneRule(id=RuleId("meal"), trigger=_re(r"\b(?:meal|breakfast|lunch|dinner|supper|feast|banquet)"),
              priority=4, estimate=45),
    SceneRule(id=RuleId("quick_meal"), trigger=_re(r"\bquick\s*(?:meal|bite|snack)"),
              priority=5, estimate=15),
    SceneRule(id=RuleId("shopping"), trigger=_re(r"\b(?:shop|browse|merchant|store|market|bazaar|trade)"),
              priority=4, estimate=30),
    SceneRule(id=RuleId("search"),
              trigger=_re(r"\b(?:search|examine|investigate|look\s*around|explore|scout)"),
              priority=4, estimate=20),
    SceneRule(id=RuleId("training"), trigger=_re(r"\b(?:train|practice|spar|exercise|drill)"),
              priority=4, estimate=60),
    SceneRule(id=RuleId("study"), trigger=_re(r"\b(?:study|read|research|learn)"),
              priority=4, estimate=60),
    SceneRule(id=RuleId("crafting"), trigger=_re(r"\b(?:craft|forge|brew|create|make)"),
              priority=4, estimate=120),
    SceneRule(id=RuleId("ritual"), trigger=_re(r"\b(?:meditate|pray|ritual|ceremony)"),
              priority=4, estimate=30),
    SceneRule(id=RuleId("waiting"), trigger=_re(r"\b(?:wait|waiting|bide\s*(?:your|their)\s*time)"),
              priority=3, estimate=30),
]

# Stable sort keeps table order within a priority
DURATION_RULES: tuple[DurationRule, ...] = tuple(
    sorted(_RULES, key=lambda rule: rule.priority, reverse=True)
)


# =============================================================================
# Estimation
# =============================================================================


def skip_to_minutes(hour: int, minute: int, target: SkipTarget) -> int:
    """Minutes from hour:minute forward to the next occurrence of `target`.

    Always moves forward: if the target hour is now or already past today,
    it rolls to tomorrow.
    """
    hours = target.hour - hour
    if hours <= 0:
        hours += 24
    return hours * MINUTES_PER_HOUR - minute


class DurationEstimator:
    """Evaluates narrative text against an ordered rule table."""

    def __init__(self, rules: tuple[DurationRule, ...] = DURATION_RULES):
        self.rules = rules

    def estimate(self, text: str | None) -> DurationEstimate:
        if not text or not text.strip():
            return DurationEstimate(minutes=DEFAULT_MINUTES, confidence=Confidence.LOW)

        highest = 0
        decided: DurationEstimate | None = None
        scene_estimates: list[int] = []
        scene_rules: list[RuleId] = []

        for rule in self.rules:
            if rule.priority < highest:
                continue
            match = rule.trigger.search(text)
            if match is None:
                continue

            # Scene cues never raise the floor; concurrent scenes all count
            if isinstance(rule, SceneRule):
                if decided is not None:
                    continue
                scene_estimates.append(rule.estimate)
                scene_rules.append(rule.id)
                continue

            resolved = self._resolve(rule, match)
            if resolved is None:
                continue
            decided = resolved
            scene_estimates.clear()
            scene_rules.clear()
            highest = rule.priority

        if decided is not None:
            result = decided
        elif scene_estimates:
            result = DurationEstimate(
                minutes=max(scene_estimates),
                confidence=Confidence.MEDIUM,
                matched_rules=tuple(scene_rules),
            )
        else:
            result = DurationEstimate(minutes=DEFAULT_MINUTES, confidence=Confidence.LOW)

        logger.debug(
            f"Duration estimated | minutes={result.minutes} | "
            f"confidence={result.confidence.value} | skip_to={result.skip_to} | "
            f"rules={list(result.matched_rules)}"
        )
        return result

    @staticmethod
    def _resolve(rule: DurationRule, match: re.Match[str]) -> DurationEstimate | None:
        if isinstance(rule, ExplicitRule):
            amount = parse_amount(match.group(rule.group))
            if amount is None:
                return None
            return DurationEstimate(
                minutes=amount * rule.unit_minutes,
                confidence=Confidence.HIGH,
                matched_rules=(rule.id,),
            )
        if isinstance(rule, FixedRule):
            return DurationEstimate(
                minutes=rule.minutes,
                confidence=Confidence.HIGH,
                matched_rules=(rule.id,),
            )
        if isinstance(rule, SkipToRule):
            return DurationEstimate(
                minutes=0,
                confidence=Confidence.HIGH,
                skip_to=rule.target,
                matched_rules=(rule.id,),
            )
        return None


_default_estimator = DurationEstimator()


def estimate(text: str | None) -> DurationEstimate:
    """Estimate with the built-in rule table."""
    return _default_estimator.estimate(text)
