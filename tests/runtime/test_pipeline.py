"""Tests for almanac.runtime.pipeline module."""

import logging

import pytest

from almanac.domain import DayBoundaryCrossedEvent
from almanac.runtime.context import RolloverContext, RolloverResult
from almanac.runtime.pipeline import BasePhase, Phase, PhaseError, RolloverPipeline


class SimplePhase(BasePhase):
    """Simple phase for testing."""

    def __init__(self, phase_name: str = "simple"):
        self._phase_name = phase_name

    @property
    def name(self) -> str:
        return self._phase_name

    async def _execute(self, ctx: RolloverContext) -> RolloverContext:
        return ctx


class EventProducingPhase(BasePhase):
    """Phase that produces a notification."""

    async def _execute(self, ctx: RolloverContext) -> RolloverContext:
        return ctx.with_event(DayBoundaryCrossedEvent(
            absolute_minute=ctx.at_minute, before=ctx.previous.date, date=ctx.snapshot.date,
        ))


class ErrorPhase(BasePhase):
    """Phase that raises an error."""

    def __init__(self, error_message: str = "Test error"):
        self.error_message = error_message

    async def _execute(self, ctx: RolloverContext) -> RolloverContext:
        raise ValueError(self.error_message)


class RecordingPhase(BasePhase):
    """Phase that records the order it ran in."""

    def __init__(self, label: str, log: list[str]):
        self.label = label
        self.log = log

    @property
    def name(self) -> str:
        return self.label

    async def _execute(self, ctx: RolloverContext) -> RolloverContext:
        self.log.append(self.label)
        return ctx


class TestPhaseProtocol:
    """Tests for Phase protocol compliance."""

    def test_base_phase_implements_protocol(self):
        assert isinstance(SimplePhase(), Phase)

    def test_name_derived_from_class(self):
        """Test phase names drop the suffix and become snake_case."""
        assert EventProducingPhase().name == "event_producing"
        assert ErrorPhase().name == "error"


class TestBasePhase:
    """Tests for BasePhase execution."""

    @pytest.mark.asyncio
    async def test_execute_returns_context(self, rollover_context: RolloverContext):
        result = await SimplePhase().execute(rollover_context)
        assert isinstance(result, RolloverContext)

    @pytest.mark.asyncio
    async def test_execute_wraps_error(self, rollover_context: RolloverContext):
        with pytest.raises(PhaseError) as exc_info:
            await ErrorPhase("Something went wrong").execute(rollover_context)

        assert exc_info.value.phase_name == "error"
        assert isinstance(exc_info.value.original_error, ValueError)
        assert "Something went wrong" in str(exc_info.value)


class TestPhaseError:
    """Tests for PhaseError."""

    def test_str(self):
        error = PhaseError(phase_name="moon", original_error=ValueError("bad"))
        assert str(error) == "Phase 'moon' failed: bad"


class TestRolloverPipeline:
    """Tests for RolloverPipeline."""

    @pytest.mark.asyncio
    async def test_empty_pipeline(self, rollover_context: RolloverContext):
        result = await RolloverPipeline([]).execute(rollover_context)
        assert isinstance(result, RolloverResult)
        assert result.snapshot == rollover_context.snapshot

    @pytest.mark.asyncio
    async def test_phases_run_in_order(self, rollover_context: RolloverContext):
        log: list[str] = []
        pipeline = RolloverPipeline([RecordingPhase("a", log), RecordingPhase("b", log), RecordingPhase("c", log)])
        await pipeline.execute(rollover_context)
        assert log == ["a", "b", "c"]

    @pytest.mark.asyncio
    async def test_events_collected(self, rollover_context: RolloverContext):
        pipeline = RolloverPipeline([EventProducingPhase(), EventProducingPhase()])
        result = await pipeline.execute(rollover_context)
        assert len(result.events) == 2

    @pytest.mark.asyncio
    async def test_error_stops_pipeline(self, rollover_context: RolloverContext):
        log: list[str] = []
        pipeline = RolloverPipeline([ErrorPhase(), RecordingPhase("after", log)])
        with pytest.raises(PhaseError):
            await pipeline.execute(rollover_context)
        assert log == []

    @pytest.mark.asyncio
    async def test_logs_each_phase(self, rollover_context: RolloverContext, caplog):
        caplog.set_level(logging.DEBUG, logger="almanac.runtime.pipeline")
        pipeline = RolloverPipeline([SimplePhase("one"), EventProducingPhase()])
        await pipeline.execute(rollover_context)
        assert "PHASE | one | complete" in caplog.text
        assert "PHASE | event_producing | complete" in caplog.text
        assert "Rollover complete | days_crossed=" in caplog.text
        assert "events=1" in caplog.text

