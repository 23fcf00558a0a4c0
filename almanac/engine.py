"""
AlmanacEngine - the main facade for the world clock.

This is the primary entry point. It:
- Owns the current TimeSnapshot and hands out read-only views of it
- Serialises every mutation through an UpdateQueue
- Runs the rollover pipeline after clock changes
- Commits through an injected persistence hook before swapping state
- Publishes notifications to registered callbacks
"""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, TypeVar

from pydantic import ValidationError

from almanac.domain import (
    ClockEvent,
    ClockSettings,
    RegionType,
    TimePatch,
    TimeSnapshot,
    WeatherChangedEvent,
    WeatherOverrides,
    WeatherSnapshot,
)
from almanac.errors import InvalidArgumentError, PersistenceError
from almanac.logging_config import log_advance, log_event
from almanac.runtime import (
    CelestialPhase,
    FestivalPhase,
    MoonPhase,
    RolloverContext,
    RolloverPipeline,
    RolloverResult,
    WeatherPhase,
)
from almanac.services import (
    CalendarClock,
    DurationEstimate,
    DurationEstimator,
    MoonPhaseTracker,
    WeatherGenerator,
    build_initial_snapshot,
    skip_to_minutes,
)
from almanac.storage import PersistHook


logger = logging.getLogger(__name__)

T = TypeVar("T")
E = TypeVar("E")

EventCallback = Callable[[ClockEvent], None]


class UpdateQueue:
    """
    Runs queued operations one at a time, in submission order.

    Each submitted operation becomes a task that waits for the task before
    it. Callers await a shielded view of their task, so cancelling a caller
    never cancels the update itself.
    """

    def __init__(self):
        self._tail: asyncio.Task | None = None

    async def submit(self, operation: Callable[[], Awaitable[T]]) -> T:
        previous = self._tail

        async def run() -> T:
            if previous is not None and not previous.done():
                # Waits without re-raising; the predecessor's caller gets its error
                await asyncio.wait({previous})
            return await operation()

        task = asyncio.ensure_future(run())
        task.add_done_callback(self._retrieve)
        self._tail = task
        return await asyncio.shield(task)

    @property
    def idle(self) -> bool:
        return self._tail is None or self._tail.done()

    async def drain(self) -> None:
        """Wait until every queued operation has finished."""
        while not self.idle:
            await asyncio.wait({self._tail})

    @staticmethod
    def _retrieve(task: asyncio.Task) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.debug(f"Queued update failed | {type(error).__name__}: {error}")


@dataclass(frozen=True)
class NarrativeAdvance:
    """What apply_narrative did with a piece of narrative text."""
    estimate: DurationEstimate | None
    minutes: int = 0
    applied: bool = False
    large_jump: bool = False


class AlmanacEngine:
    """
    The world clock engine.

    This facade coordinates:
    - CalendarClock for calendar arithmetic
    - RolloverPipeline for moons, alignments, festivals and weather
    - DurationEstimator for narrative text
    - UpdateQueue for ordering mutations
    - The persistence hook for commits
    """

    def __init__(
        self,
        snapshot: TimeSnapshot | None = None,
        settings: ClockSettings | None = None,
        rng: random.Random | None = None,
        persist: PersistHook | None = None,
    ):
        """
        Initialize the engine.

        Args:
            snapshot: Restored snapshot; None builds the default one
            settings: Overrides the snapshot's settings when given
            rng: Random source for weather; seed it for reproducible runs
            persist: Awaited with every new snapshot before it is committed
        """
        self._rng = rng or random.Random()
        self._persist = persist

        self._clock = CalendarClock()
        self._tracker = MoonPhaseTracker()
        self._generator = WeatherGenerator(self._rng)
        self._estimator = DurationEstimator()

        self._weather_phase = WeatherPhase(self._generator)
        self._pipeline = self._build_pipeline()
        self._queue = UpdateQueue()

        if snapshot is None:
            snapshot = build_initial_snapshot(settings=settings, rng=self._rng, tracker=self._tracker)
        elif settings is not None:
            snapshot = snapshot.model_copy(update={"settings": settings})
        self._snapshot = snapshot

        self._event_callbacks: list[EventCallback] = []
        self._typed_callbacks: list[tuple[type, Callable[[Any], None]]] = []

        logger.info(
            f"AlmanacEngine ready | minute={snapshot.absolute_minute} | "
            f"region={snapshot.settings.region_type.value}"
        )

    def _build_pipeline(self) -> RolloverPipeline:
        return RolloverPipeline([
            MoonPhase(self._tracker),
            CelestialPhase(self._tracker),
            FestivalPhase(),
            self._weather_phase,
        ])

    # =========================================================================
    # Queries
    # =========================================================================

    def current_snapshot(self) -> TimeSnapshot:
        """The committed snapshot. Snapshots are frozen, so this is read-only."""
        return self._snapshot

    @property
    def snapshot(self) -> TimeSnapshot:
        return self._snapshot

    @property
    def settings(self) -> ClockSettings:
        return self._snapshot.settings

    @property
    def pipeline(self) -> RolloverPipeline:
        return self._pipeline

    def estimate(self, text: str | None) -> DurationEstimate:
        """Estimate how long a piece of narrative text takes. Never mutates."""
        return self._estimator.estimate(text)

    # =========================================================================
    # Mutations
    # =========================================================================

    async def advance(self, minutes: int) -> TimeSnapshot:
        """
        Move the clock forward by `minutes`.

        Raises:
            InvalidArgumentError: minutes is negative or not an integer
            PersistenceError: the persistence hook failed
        """
        async def operation() -> TimeSnapshot:
            result = await self._advance(self._snapshot, minutes)
            if result is None:
                return self._snapshot
            return await self._commit("advance", result, f"minutes={minutes}")

        return await self._queue.submit(operation)

    async def set_absolute(self, **fields: int) -> TimeSnapshot:
        """
        Jump to an explicit date/time (year, month, day, hour, minute).

        Out-of-range values are clamped. Moons are realigned to the new date
        and weather is regenerated if the date changed.
        """
        try:
            patch = TimePatch(**fields)
        except ValidationError as e:
            raise InvalidArgumentError(f"Invalid date fields: {e}", value=fields) from e

        async def operation() -> TimeSnapshot:
            current = self._snapshot
            update = self._clock.set_absolute(current, patch)
            ctx = RolloverContext(
                previous=current,
                snapshot=update.snapshot,
                days_crossed=update.days_crossed,
                regenerate_weather=update.date_changed,
                events=update.events,
            )
            result = await self._pipeline.execute(ctx)
            return await self._commit("set_absolute", result, f"days={update.days_crossed}")

        return await self._queue.submit(operation)

    async def regenerate_weather(self, region_type: RegionType | str | None = None) -> WeatherSnapshot:
        """
        Roll fresh weather for the current date and return it.

        A given region type also becomes the region for later days.
        """
        try:
            region = RegionType(region_type) if region_type is not None else None
        except ValueError as e:
            raise InvalidArgumentError(f"Unknown region type {region_type!r}", value=region_type) from e

        async def operation() -> WeatherSnapshot:
            current = self._snapshot
            working = current
            if region is not None and region != current.settings.region_type:
                working = current.model_copy(update={
                    "settings": current.settings.model_copy(update={"region_type": region}),
                })
            ctx = RolloverContext(previous=current, snapshot=working, regenerate_weather=True)
            ctx = await self._weather_phase.execute(ctx)
            committed = await self._commit(
                "regenerate_weather",
                RolloverResult.from_context(ctx),
                f"region={working.settings.region_type.value}",
            )
            return committed.weather

        return await self._queue.submit(operation)

    async def set_weather(self, **overrides: Any) -> TimeSnapshot:
        """Set weather fields by hand (condition, temperature, wind, ...)."""
        try:
            weather_overrides = WeatherOverrides(**overrides)
        except ValidationError as e:
            raise InvalidArgumentError(f"Invalid weather override: {e}", value=overrides) from e

        async def operation() -> TimeSnapshot:
            current = self._snapshot
            after = self._generator.set_manual(current.weather, weather_overrides)
            event = WeatherChangedEvent(
                absolute_minute=current.absolute_minute,
                before=current.weather,
                after=after,
            )
            result = RolloverResult(
                snapshot=current.model_copy(update={"weather": after}),
                events=(event,),
            )
            return await self._commit("set_weather", result, f"condition={after.condition}")

        return await self._queue.submit(operation)

    async def update_settings(self, **changes: Any) -> TimeSnapshot:
        """
        Change clock settings.

        Festivals and alignments are recomputed so new horizons apply at once.
        """
        async def operation() -> TimeSnapshot:
            current = self._snapshot
            try:
                settings = ClockSettings.model_validate({**current.settings.model_dump(), **changes})
            except ValidationError as e:
                raise InvalidArgumentError(f"Invalid settings: {e}", value=changes) from e
            ctx = RolloverContext(
                previous=current,
                snapshot=current.model_copy(update={"settings": settings}),
            )
            result = await self._pipeline.execute(ctx)
            return await self._commit("update_settings", result, ", ".join(sorted(changes)))

        return await self._queue.submit(operation)

    async def reset(self, snapshot: TimeSnapshot | None = None) -> TimeSnapshot:
        """Replace the state with `snapshot`, or a fresh default one keeping the current settings."""
        async def operation() -> TimeSnapshot:
            fresh = snapshot or build_initial_snapshot(
                settings=self._snapshot.settings, rng=self._rng, tracker=self._tracker,
            )
            return await self._commit("reset", RolloverResult(snapshot=fresh, events=()))

        return await self._queue.submit(operation)

    async def apply_narrative(self, text: str | None) -> NarrativeAdvance:
        """
        Estimate the time a piece of narrative takes and advance by it.

        Does nothing when narrative parsing is off. With auto-advance off the
        estimate is returned without moving the clock.
        """
        async def operation() -> NarrativeAdvance:
            current = self._snapshot
            settings = current.settings
            if not settings.parse_narrative:
                return NarrativeAdvance(estimate=None)

            estimate = self._estimator.estimate(text)
            minutes = estimate.minutes
            if estimate.skip_to is not None:
                minutes = skip_to_minutes(current.hour, current.minute, estimate.skip_to)

            large_jump = minutes > settings.large_jump_threshold
            if large_jump and settings.confirm_large_jumps:
                logger.warning(
                    f"Large time jump | minutes={minutes} | "
                    f"threshold={settings.large_jump_threshold} | rules={list(estimate.matched_rules)}"
                )

            if not settings.auto_advance or minutes == 0:
                return NarrativeAdvance(estimate=estimate, minutes=minutes, large_jump=large_jump)

            result = await self._advance(current, minutes)
            if result is not None:
                await self._commit("narrative", result, f"minutes={minutes} | confidence={estimate.confidence.value}")
            return NarrativeAdvance(estimate=estimate, minutes=minutes, applied=True, large_jump=large_jump)

        return await self._queue.submit(operation)

    async def drain(self) -> None:
        """Wait for all queued updates to finish."""
        await self._queue.drain()

    # =========================================================================
    # Internals
    # =========================================================================

    async def _advance(self, current: TimeSnapshot, minutes: int) -> RolloverResult | None:
        update = self._clock.advance(current, minutes)
        if not update.events:
            return None
        ctx = RolloverContext(
            previous=current,
            snapshot=update.snapshot,
            days_crossed=update.days_crossed,
            regenerate_weather=update.date_changed,
            events=update.events,
        )
        if not update.date_changed:
            return RolloverResult.from_context(ctx)
        return await self._pipeline.execute(ctx)

    async def _commit(self, operation: str, result: RolloverResult, details: str | None = None) -> TimeSnapshot:
        """Persist, swap, then publish. Nothing changes if persisting fails."""
        snapshot = result.snapshot
        if self._persist is not None:
            try:
                await self._persist(snapshot)
            except Exception as e:
                logger.error(f"Persist failed | operation={operation} | {e}", exc_info=True)
                raise PersistenceError(f"Failed to persist snapshot after {operation}: {e}") from e

        self._snapshot = snapshot
        log_advance(logger, snapshot.absolute_minute, operation.upper(), details)
        self._publish(result.events)
        return snapshot

    def _publish(self, events: tuple[ClockEvent, ...]) -> None:
        for event in events:
            log_event(logger, event.absolute_minute, event.type)
            for callback in self._event_callbacks:
                try:
                    callback(event)
                except Exception as e:
                    logger.error(f"Event callback error: {e}", exc_info=True)
            for event_type, callback in self._typed_callbacks:
                if not isinstance(event, event_type):
                    continue
                try:
                    callback(event)
                except Exception as e:
                    logger.error(f"{event_type.__name__} callback error: {e}", exc_info=True)

    # =========================================================================
    # Callbacks
    # =========================================================================

    def on_event(self, callback: EventCallback) -> None:
        """Register a callback for every notification."""
        self._event_callbacks.append(callback)

    def on(self, event_type: type[E], callback: Callable[[E], None]) -> None:
        """Register a callback for one notification type, e.g. engine.on(WeatherChangedEvent, cb)."""
        self._typed_callbacks.append((event_type, callback))
