from .clock import CalendarClock, ClockUpdate
from .moon_tracker import MoonPhaseTracker, MoonUpdate, MoonPairUpdate
from . import celestial_detector
from . import festival_scheduler
from .weather_generator import WeatherGenerator, weather_effects, weighted_table
from .duration_estimator import (
    DurationEstimator,
    DurationEstimate,
    DurationRule,
    ExplicitRule,
    FixedRule,
    SkipToRule,
    SceneRule,
    DURATION_RULES,
    estimate,
    skip_to_minutes,
)
from .context_builder import build_time_context, build_atmosphere_directives
from .bootstrap import build_initial_snapshot

__all__ = [
    "CalendarClock",
    "ClockUpdate",
    "MoonPhaseTracker",
    "MoonUpdate",
    "MoonPairUpdate",
    "celestial_detector",
    "festival_scheduler",
    "WeatherGenerator",
    "weather_effects",
    "weighted_table",
    "DurationEstimator",
    "DurationEstimate",
    "DurationRule",
    "ExplicitRule",
    "FixedRule",
    "SkipToRule",
    "SceneRule",
    "DURATION_RULES",
    "estimate",
    "skip_to_minutes",
    "build_time_context",
    "build_atmosphere_directives",
    "build_initial_snapshot",
]
