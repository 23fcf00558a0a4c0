"""
Almanac - world clock and atmospheric simulation engine.

Keeps a fantasy-world calendar moving and everything hung off it:
- Calendar clock with leap years and boundary notifications
- Two moons with independent phase cycles
- Celestial alignments detected from both moons and the date
- Festivals loaded from YAML
- Seasonal, regional weather with day-to-day continuity
- Duration estimates from narrative text

Main entry points:
- AlmanacEngine: The main facade class
- build_time_context: Render a snapshot for narrative prompts

Example usage:
    from almanac import AlmanacEngine
    from almanac.storage import FilePersistence

    engine = AlmanacEngine(persist=FilePersistence("almanac_state"))
    snapshot = await engine.advance(90)
    result = await engine.apply_narrative("We rest until morning.")
"""

from .engine import AlmanacEngine, NarrativeAdvance, UpdateQueue
from .errors import AlmanacError, InvalidArgumentError, ConfigurationError, PersistenceError
from .services import build_time_context
from .logging_config import setup_logging

__all__ = [
    "AlmanacEngine",
    "NarrativeAdvance",
    "UpdateQueue",
    "AlmanacError",
    "InvalidArgumentError",
    "ConfigurationError",
    "PersistenceError",
    "build_time_context",
    "setup_logging",
]
