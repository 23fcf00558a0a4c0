"""
RolloverPipeline - orchestrates the phases that follow a clock change.

After the clock moves the calendar fields, the pipeline runs each phase in
order against the moved snapshot:

1. MoonPhase - step both moons by the days crossed
2. CelestialPhase - detect and forecast alignments
3. FestivalPhase - current and upcoming festivals
4. WeatherPhase - new weather when the date changed

Phases are independent units so each can be tested on its own context.
"""

import logging
import re
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from almanac.errors import AlmanacError
from almanac.logging_config import log_phase
from almanac.runtime.context import RolloverContext, RolloverResult


logger = logging.getLogger(__name__)


@runtime_checkable
class Phase(Protocol):
    """
    Protocol for rollover phases.

    Each phase receives a RolloverContext and returns a new RolloverContext
    with its transformations applied.
    """

    @property
    def name(self) -> str:
        """Human-readable phase name for logging."""
        ...

    async def execute(self, ctx: RolloverContext) -> RolloverContext:
        ...


class BasePhase(ABC):
    """
    Base class for phases with common functionality.

    Provides:
    - Automatic name from class name
    - Logging wrapper around execution
    - Error handling
    """

    @property
    def name(self) -> str:
        """Phase name derived from class name."""
        # CelestialPhase -> celestial
        class_name = self.__class__.__name__
        if class_name.endswith("Phase"):
            class_name = class_name[:-5]
        return re.sub(r"(?<!^)(?=[A-Z])", "_", class_name).lower()

    @abstractmethod
    async def _execute(self, ctx: RolloverContext) -> RolloverContext:
        """Override this to implement phase logic."""
        ...

    async def execute(self, ctx: RolloverContext) -> RolloverContext:
        """Execute with logging and error handling."""
        logger.debug(f"Phase {self.name} starting | days_crossed={ctx.days_crossed}")
        try:
            result = await self._execute(ctx)
            logger.debug(
                f"Phase {self.name} complete | "
                f"events={len(result.events) - len(ctx.events)}"
            )
            return result
        except Exception as e:
            logger.error(f"Phase {self.name} failed: {e}", exc_info=True)
            raise PhaseError(phase_name=self.name, original_error=e) from e


@dataclass
class PhaseError(AlmanacError):
    """Error that occurred during phase execution."""

    phase_name: str
    original_error: Exception

    def __str__(self) -> str:
        return f"Phase '{self.phase_name}' failed: {self.original_error}"


class RolloverPipeline:
    """
    Runs the rollover phases in order against one context.

    Usage:
        pipeline = RolloverPipeline([
            MoonPhase(tracker),
            CelestialPhase(tracker),
            FestivalPhase(),
            WeatherPhase(generator),
        ])

        result = await pipeline.execute(ctx)
    """

    def __init__(self, phases: list[Phase]):
        self.phases = phases

    async def execute(self, ctx: RolloverContext) -> RolloverResult:
        """Execute all phases and return the resulting snapshot and events."""
        start_time = time.perf_counter()

        for phase in self.phases:
            phase_start = time.perf_counter()
            ctx = await phase.execute(ctx)
            log_phase(logger, ctx.at_minute, phase.name, "complete", (time.perf_counter() - phase_start) * 1000)

        logger.debug(
            f"Rollover complete | days_crossed={ctx.days_crossed} | "
            f"weather={'regenerated' if ctx.regenerate_weather else 'kept'} | "
            f"duration={(time.perf_counter() - start_time) * 1000:.1f}ms | events={len(ctx.events)}"
        )

        return RolloverResult.from_context(ctx)
