#!/usr/bin/env python3
"""
Almanac - world clock and atmospheric simulation (command line).

Loads the latest saved snapshot (or creates one), applies the requested
changes, prints what the clock announced and the resulting status.
"""

import argparse
import asyncio
import logging
import random
import sys
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

from rich.console import Console
from rich.table import Table
from rich.text import Text

from almanac.config import load_settings, rng_seed, state_dir
from almanac.domain import ClockEvent, TimeSnapshot, format_time, format_time_24
from almanac.engine import AlmanacEngine
from almanac.errors import AlmanacError
from almanac.logging_config import setup_logging
from almanac.services import build_time_context
from almanac.storage import EventLog, FilePersistence


console = Console()

# Map ClockEvent type literals to display colors
EVENT_COLORS = {
    "time_advanced": "dim",
    "day_boundary_crossed": "cyan",
    "month_boundary_crossed": "bold cyan",
    "year_boundary_crossed": "bold magenta",
    "time_set_absolute": "yellow",
    "moon_phase_changed": "blue",
    "celestial_event_began": "bold magenta",
    "weather_changed": "green",
}


def _describe_event(event: ClockEvent) -> str:
    """Extract a human-readable description from a ClockEvent."""
    match event.type:
        case "time_advanced":
            return f"{event.minutes_elapsed} minutes passed."
        case "day_boundary_crossed":
            return f"A new day: {event.date.day} {event.date.month_name} ({event.days_crossed} crossed)."
        case "month_boundary_crossed":
            return f"The month turned to {event.date.month_name}."
        case "year_boundary_crossed":
            return f"The year {event.date.year} AV began."
        case "time_set_absolute":
            return f"Time set to {event.after.day} {event.after.month_name} {event.after.year}."
        case "moon_phase_changed":
            return f"{event.moon.title()} is now {event.new_phase.value.replace('_', ' ')}."
        case "celestial_event_began":
            return f"{event.event.name}: {event.event.description}"
        case "weather_changed":
            return f"Weather is now {event.after.condition_name.lower()}."
        case _:
            return event.type


def print_event(event: ClockEvent) -> None:
    color = EVENT_COLORS.get(event.type, "white")
    console.print(Text(f"  • {_describe_event(event)}", style=color))


def print_status(snapshot: TimeSnapshot) -> None:
    settings = snapshot.settings
    clock = (
        format_time_24(snapshot.hour, snapshot.minute)
        if settings.use_24_hour
        else format_time(snapshot.hour, snapshot.minute)
    )

    table = Table(title="Almanac", show_header=False, title_style="bold")
    table.add_column(style="bold")
    table.add_column()
    table.add_row("Date", f"{snapshot.day_of_week}, {snapshot.day} {snapshot.month_name} {snapshot.year} AV")
    table.add_row("Time", f"{clock} ({snapshot.time_of_day})")
    table.add_row("Season", snapshot.season.value.title())
    weather = snapshot.weather
    table.add_row(
        "Weather",
        f"{weather.icon} {weather.condition_name}, {weather.temperature_name}, {weather.wind_name}",
    )
    table.add_row("Region", settings.region_type.value)
    table.add_row("Lunara", snapshot.moons.primary.phase.value.replace("_", " "))
    table.add_row("Veil", snapshot.moons.secondary.phase.value.replace("_", " "))
    if snapshot.current_festival is not None:
        table.add_row("Festival", snapshot.current_festival.name)
    if snapshot.celestial_events:
        table.add_row("Sky", ", ".join(e.name for e in snapshot.celestial_events))
    console.print(table)


def _parse_fields(pairs: list[str]) -> dict[str, int]:
    fields = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            raise argparse.ArgumentTypeError(f"Expected FIELD=VALUE, got {pair!r}")
        try:
            fields[key.strip()] = int(value)
        except ValueError:
            raise argparse.ArgumentTypeError(f"{key.strip()} must be an integer, got {value!r}")
    return fields


async def run(args: argparse.Namespace, state: Path) -> None:
    persistence = FilePersistence(state, keep=args.keep)
    restored = None if args.init else persistence.load_latest()

    settings = load_settings(base=restored.settings if restored else None)
    seed = rng_seed()
    rng = random.Random(seed) if seed is not None else None

    engine = AlmanacEngine(snapshot=restored, settings=settings, rng=rng, persist=persistence)

    event_log = EventLog(state)
    engine.on_event(event_log.append)
    engine.on_event(print_event)

    if restored is None:
        console.print("[bold]Starting a new almanac...[/bold]")
        await engine.reset()

    if args.set:
        await engine.set_absolute(**_parse_fields(args.set))
    if args.region:
        await engine.regenerate_weather(args.region)
    if args.weather:
        await engine.set_weather(condition=args.weather)
    if args.advance is not None:
        await engine.advance(args.advance)
    if args.narrate:
        result = await engine.apply_narrative(args.narrate)
        if result.estimate is not None:
            note = " (large jump)" if result.large_jump else ""
            applied = "applied" if result.applied else "not applied"
            console.print(
                f"Estimated {result.minutes} minutes, "
                f"{result.estimate.confidence.value} confidence, {applied}{note}"
            )

    print_status(engine.current_snapshot())
    if args.context:
        console.print(build_time_context(engine.current_snapshot()))


def main():
    parser = argparse.ArgumentParser(
        description="Almanac - world clock and atmospheric simulation"
    )
    parser.add_argument(
        "--state",
        type=Path,
        default=None,
        help="Path to state directory (default: $ALMANAC_STATE_DIR or ./almanac_state)",
    )
    parser.add_argument(
        "--init",
        action="store_true",
        help="Start a fresh almanac (ignores saved snapshots)",
    )
    parser.add_argument(
        "--advance",
        type=int,
        metavar="MINUTES",
        help="Advance the clock by MINUTES",
    )
    parser.add_argument(
        "--narrate",
        metavar="TEXT",
        help="Estimate the time TEXT takes and advance by it",
    )
    parser.add_argument(
        "--set",
        action="append",
        metavar="FIELD=VALUE",
        help="Jump to an absolute date/time, e.g. --set month=12 --set day=21",
    )
    parser.add_argument(
        "--region",
        metavar="REGION",
        help="Regenerate weather for REGION (coastal, mountain, desert, ...)",
    )
    parser.add_argument(
        "--weather",
        metavar="CONDITION",
        help="Set the weather condition by hand",
    )
    parser.add_argument(
        "--keep",
        type=int,
        default=None,
        help="Keep only the newest N snapshots",
    )
    parser.add_argument(
        "--status",
        action="store_true",
        help="Just show the current status and exit",
    )
    parser.add_argument(
        "--context",
        action="store_true",
        help="Also print the narrative context block",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()
    state = args.state or state_dir()

    # Configure logging - always log DEBUG to file, console level depends on --debug
    console_level = logging.DEBUG if args.debug else logging.WARNING
    log_path = setup_logging(state, console_level=console_level)
    console.print(f"Logging to: {log_path}", style="dim")

    if args.status:
        snapshot = FilePersistence(state).load_latest()
        if snapshot is None:
            console.print("No almanac found. Run without --status to create one.")
            return
        print_status(snapshot)
        if args.context:
            console.print(build_time_context(snapshot))
        return

    try:
        asyncio.run(run(args, state))
    except (AlmanacError, argparse.ArgumentTypeError) as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
