"""
Festival scheduling against the annual festival table.

Distances are measured in calendar day numbers, so month lengths and leap
years are accounted for and a festival that has already passed this year is
counted to its occurrence next year.
"""

from __future__ import annotations

from typing import Sequence

from almanac.domain import (
    ActiveFestival,
    CalendarDate,
    FestivalDefinition,
    UpcomingFestival,
    days_since_epoch,
    load_festivals,
    month_length,
)


def festival_day_number(festival: FestivalDefinition, year: int) -> int:
    """Day number of a festival's first day in `year`, clamped to the month's end."""
    day = min(festival.day, month_length(festival.month, year))
    return days_since_epoch(year, festival.month, day)


def days_until(festival: FestivalDefinition, date: CalendarDate) -> int:
    """
    Signed days from `date` to the festival's start.

    Negative only while the festival is running (it started earlier this
    year and has days left). A festival that is over for this year is
    counted to next year.
    """
    today = date.day_number
    delta = festival_day_number(festival, date.year) - today
    if delta >= 0 or delta > -festival.duration_days:
        return delta
    return festival_day_number(festival, date.year + 1) - today


def upcoming(
    date: CalendarDate,
    horizon_days: int = 30,
    festivals: Sequence[FestivalDefinition] | None = None,
) -> tuple[UpcomingFestival, ...]:
    """
    Festivals starting within `horizon_days`, plus any that are under way.

    Sorted ascending by days_until, so running festivals come first.
    """
    if festivals is None:
        festivals = load_festivals()

    results: list[UpcomingFestival] = []
    for festival in festivals:
        delta = days_until(festival, date)
        if delta < 0:
            results.append(UpcomingFestival(
                festival=festival, days_until=delta, is_ongoing=True,
            ))
        elif delta <= horizon_days:
            results.append(UpcomingFestival(
                festival=festival, days_until=delta, is_today=delta == 0,
            ))

    results.sort(key=lambda u: u.days_until)
    return tuple(results)


def current(
    date: CalendarDate,
    festivals: Sequence[FestivalDefinition] | None = None,
) -> ActiveFestival | None:
    """The festival being celebrated on `date`, if any."""
    if festivals is None:
        festivals = load_festivals()

    for festival in festivals:
        if festival.month != date.month:
            continue
        # Festivals never run past the end of their month; Year's End is
        # two days only in leap years
        month_end = month_length(festival.month, date.year)
        first_day = min(festival.day, month_end)
        last_day = min(festival.day + festival.duration_days - 1, month_end)
        if first_day <= date.day <= last_day:
            return ActiveFestival(
                festival=festival,
                day_of_festival=date.day - first_day + 1,
                is_last_day=date.day == last_day,
            )
    return None
