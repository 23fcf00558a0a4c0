"""
Rollover phases - each phase transforms the RolloverContext.

Phases execute in order:
1. MoonPhase - step both moons by the days crossed
2. CelestialPhase - detect and forecast alignments
3. FestivalPhase - current and upcoming festivals
4. WeatherPhase - regenerate weather when asked to
"""

from .moon import MoonPhase
from .celestial import CelestialPhase
from .festival import FestivalPhase
from .weather import WeatherPhase

__all__ = [
    "MoonPhase",
    "CelestialPhase",
    "FestivalPhase",
    "WeatherPhase",
]
