"""
CalendarClock - moves the calendar fields of a TimeSnapshot.

The clock only touches year/month/day/hour/minute. Moons, weather and the
other derived state are brought up to date afterwards by the rollover
pipeline, using the `days_crossed` the clock reports.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from almanac.domain import (
    MINUTES_PER_HOUR,
    ClockEvent,
    DayBoundaryCrossedEvent,
    MonthBoundaryCrossedEvent,
    TimeAdvancedEvent,
    TimePatch,
    TimeSetAbsoluteEvent,
    TimeSnapshot,
    YearBoundaryCrossedEvent,
    month_length,
)
from almanac.domain.calendar import HOURS_PER_DAY, MONTHS_PER_YEAR
from almanac.errors import InvalidArgumentError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClockUpdate:
    """A moved snapshot plus the notifications the move produced."""
    snapshot: TimeSnapshot
    events: tuple[ClockEvent, ...] = ()
    days_crossed: int = 0
    months_crossed: int = 0
    years_crossed: int = 0

    @property
    def date_changed(self) -> bool:
        return self.days_crossed != 0


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


class CalendarClock:
    """Pure calendar arithmetic over TimeSnapshots."""

    def advance(self, snapshot: TimeSnapshot, minutes: int) -> ClockUpdate:
        """
        Move the clock forward.

        Args:
            snapshot: Current snapshot
            minutes: Non-negative whole number of minutes

        Returns:
            ClockUpdate with one TimeAdvancedEvent and at most one boundary
            event per unit (day, month, year) that was crossed

        Raises:
            InvalidArgumentError: minutes is negative or not an integer
        """
        if isinstance(minutes, bool) or not isinstance(minutes, int):
            raise InvalidArgumentError(
                f"Advance amount must be a whole number of minutes, got {minutes!r}",
                value=minutes,
            )
        if minutes < 0:
            raise InvalidArgumentError(
                f"Cannot advance by a negative amount ({minutes} minutes)",
                value=minutes,
            )
        if minutes == 0:
            return ClockUpdate(snapshot=snapshot)

        carry_hours, minute = divmod(snapshot.minute + minutes, MINUTES_PER_HOUR)
        days_crossed, hour = divmod(snapshot.hour + carry_hours, HOURS_PER_DAY)

        year, month = snapshot.year, snapshot.month
        day = snapshot.day + days_crossed
        months_crossed = 0
        years_crossed = 0

        # Month length depends on month and year, so re-check on every step
        while day > month_length(month, year):
            day -= month_length(month, year)
            month += 1
            months_crossed += 1
            if month > MONTHS_PER_YEAR:
                month = 1
                year += 1
                years_crossed += 1

        moved = snapshot.model_copy(update={
            "year": year,
            "month": month,
            "day": day,
            "hour": hour,
            "minute": minute,
        })
        at = moved.absolute_minute
        after = moved.date

        events: list[ClockEvent] = [
            TimeAdvancedEvent(
                absolute_minute=at,
                before=snapshot.date,
                after=after,
                minutes_elapsed=minutes,
            )
        ]
        if days_crossed:
            events.append(DayBoundaryCrossedEvent(
                absolute_minute=at, before=snapshot.date, date=after, days_crossed=days_crossed,
            ))
        if months_crossed:
            events.append(MonthBoundaryCrossedEvent(
                absolute_minute=at, before=snapshot.date, date=after, months_crossed=months_crossed,
            ))
        if years_crossed:
            events.append(YearBoundaryCrossedEvent(
                absolute_minute=at, before=snapshot.date, date=after, years_crossed=years_crossed,
            ))

        logger.debug(
            f"Clock advanced | minutes={minutes} | days={days_crossed} | "
            f"months={months_crossed} | years={years_crossed}"
        )

        return ClockUpdate(
            snapshot=moved,
            events=tuple(events),
            days_crossed=days_crossed,
            months_crossed=months_crossed,
            years_crossed=years_crossed,
        )

    def set_absolute(self, snapshot: TimeSnapshot, patch: TimePatch) -> ClockUpdate:
        """
        Jump to an explicit date/time.

        Only the fields set on `patch` change. Out-of-range values are
        clamped silently, and the day is clamped against the length of the
        resulting month. `days_crossed` is the signed number of calendar
        days between the old and the new date.
        """
        year = snapshot.year if patch.year is None else patch.year
        month = snapshot.month if patch.month is None else patch.month
        day = snapshot.day if patch.day is None else patch.day
        hour = snapshot.hour if patch.hour is None else patch.hour
        minute = snapshot.minute if patch.minute is None else patch.minute

        month = _clamp(month, 1, MONTHS_PER_YEAR)
        day = _clamp(day, 1, month_length(month, year))
        hour = _clamp(hour, 0, HOURS_PER_DAY - 1)
        minute = _clamp(minute, 0, MINUTES_PER_HOUR - 1)

        moved = snapshot.model_copy(update={
            "year": year,
            "month": month,
            "day": day,
            "hour": hour,
            "minute": minute,
        })
        before = snapshot.date
        after = moved.date
        days_crossed = after.day_number - before.day_number

        logger.debug(
            f"Clock set | {before.year}-{before.month}-{before.day} -> "
            f"{year}-{month}-{day} {hour:02d}:{minute:02d} | days={days_crossed}"
        )

        event = TimeSetAbsoluteEvent(
            absolute_minute=moved.absolute_minute,
            before=before,
            after=after,
        )
        return ClockUpdate(snapshot=moved, events=(event,), days_crossed=days_crossed)
