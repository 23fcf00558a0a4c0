"""
Narrative context - renders a TimeSnapshot as text for storytellers.

Readers downstream (dialogue generators, scene writers) get a compact block
describing when and under what sky the scene takes place, plus a few
atmosphere directives derived from the hour, the weather and the moons.
"""

from almanac.domain import (
    MoonPhaseName,
    TimeSnapshot,
    Visibility,
    format_time,
    format_time_24,
)


ALIGNMENT_NOTICE_DAYS = 3
FESTIVAL_NOTICE_DAYS = 5


def _phase_label(phase: MoonPhaseName) -> str:
    return phase.value.replace("_", " ").title()


def build_time_context(snapshot: TimeSnapshot) -> str:
    """Build the 'TIME & ENVIRONMENT' block for a snapshot."""
    lines = ["## TIME & ENVIRONMENT"]

    lines.append(f"Date: {snapshot.day_of_week}, {snapshot.day} of {snapshot.month_name}, {snapshot.year} AV")

    if snapshot.settings.use_24_hour:
        clock = format_time_24(snapshot.hour, snapshot.minute)
    else:
        clock = format_time(snapshot.hour, snapshot.minute)
    lines.append(f"Time: {clock} ({snapshot.time_of_day})")

    weather = snapshot.weather
    lines.append(f"Weather: {weather.condition_name}, {weather.temperature_name}, {weather.wind_name}")
    if weather.visibility not in (Visibility.GOOD, Visibility.EXCELLENT):
        lines.append(f"Visibility: {weather.visibility.value.replace('_', ' ')}")

    primary = snapshot.moons.primary
    secondary = snapshot.moons.secondary
    lines.append(f"Lunara: {_phase_label(primary.phase)} | Veil: {_phase_label(secondary.phase)}")

    if snapshot.celestial_effects:
        lines.append(f"Celestial Effects: {', '.join(snapshot.celestial_effects)}")

    soon = [a for a in snapshot.upcoming_alignments if a.days_until <= ALIGNMENT_NOTICE_DAYS]
    if soon:
        lines.append("Upcoming: " + ", ".join(f"{a.event.name} in {a.days_until}d" for a in soon))

    if snapshot.current_festival is not None:
        active = snapshot.current_festival
        lines.append(
            f"Festival: {active.name} "
            f"(day {active.day_of_festival} of {active.festival.duration_days})"
        )

    upcoming = [
        f for f in snapshot.upcoming_festivals
        if 0 < f.days_until <= FESTIVAL_NOTICE_DAYS
    ]
    if upcoming:
        lines.append("Festivals: " + ", ".join(f"{f.name} in {f.days_until}d" for f in upcoming))

    return "\n".join(lines)


def build_atmosphere_directives(snapshot: TimeSnapshot) -> list[str]:
    """Short scene-writing hints implied by the hour, weather and moons."""
    directives = []

    hour = snapshot.hour
    if hour >= 22 or hour < 5:
        directives.append("Late night/early morning: describe darkness, quiet, limited visibility")
    elif hour <= 7:
        directives.append("Dawn: describe growing light, morning sounds, dew")
    elif 17 <= hour <= 20:
        directives.append("Evening: describe fading light, long shadows, activity winding down")

    condition = snapshot.weather.condition
    if "storm" in condition or "rain" in condition:
        directives.append("Storm/rain active: wet conditions, difficult hearing, reduced visibility")
    elif "fog" in condition:
        directives.append("Fog: limited visibility, muffled sounds, eerie atmosphere")
    elif "snow" in condition or condition == "blizzard":
        directives.append("Snow: cold, difficult terrain, muted sounds")

    if snapshot.moons.primary.phase == MoonPhaseName.FULL:
        directives.append("Full moon: enhanced undead activity, lycanthrope danger, bright night")
    if not snapshot.moons.secondary.visible:
        directives.append("Veil hidden: shadow magic weakened, certain creatures dormant")

    return directives
