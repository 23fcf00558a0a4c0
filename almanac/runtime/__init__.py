"""
Runtime layer - the pipeline that follows every clock change.

1. Context building (RolloverContext)
2. Phase execution (RolloverPipeline)
3. Result extraction (RolloverResult)
"""

from .context import RolloverContext, RolloverResult
from .pipeline import RolloverPipeline, Phase, BasePhase, PhaseError
from .phases import MoonPhase, CelestialPhase, FestivalPhase, WeatherPhase

__all__ = [
    "RolloverContext",
    "RolloverResult",
    "RolloverPipeline",
    "Phase",
    "BasePhase",
    "PhaseError",
    "MoonPhase",
    "CelestialPhase",
    "FestivalPhase",
    "WeatherPhase",
]
