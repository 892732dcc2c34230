"""Sky darkness (0 = daylight, 1 = night) from local sunrise and sunset times."""

from __future__ import annotations

from datetime import datetime, time

DAWN_BEFORE_MIN = 40
DAWN_AFTER_MIN = 20
DUSK_BEFORE_MIN = 20
DUSK_AFTER_MIN = 40

DEFAULT_SUNRISE = time(6, 30)
DEFAULT_SUNSET = time(18, 30)


def parse_clock(value, default: time) -> time:
    """Accept a time, an "HH:MM" string or None."""
    if isinstance(value, time):
        return value
    if not value:
        return default
    try:
        hours, minutes = str(value).strip().split(":", 1)
        return time(int(hours), int(minutes))
    except ValueError:
        return default


def _minutes(t: time) -> int:
    return t.hour * 60 + t.minute


def _ease_in_out_cubic(t: float) -> float:
    if t < 0.5:
        return 4 * t * t * t
    return 1 - ((-2 * t + 2) ** 3) / 2


def sky_darkness(now: datetime, sunrise: time = DEFAULT_SUNRISE,
                 sunset: time = DEFAULT_SUNSET) -> float:
    minute = now.hour * 60 + now.minute + now.second / 60
    dawn_start = _minutes(sunrise) - DAWN_BEFORE_MIN
    dawn_end = _minutes(sunrise) + DAWN_AFTER_MIN
    dusk_start = _minutes(sunset) - DUSK_BEFORE_MIN
    dusk_end = _minutes(sunset) + DUSK_AFTER_MIN

    if minute < dawn_start or minute >= dusk_end:
        return 1.0
    if minute < dawn_end:
        progress = (minute - dawn_start) / (dawn_end - dawn_start)
        return 1.0 - _ease_in_out_cubic(progress)
    if minute < dusk_start:
        return 0.0
    progress = (minute - dusk_start) / (dusk_end - dusk_start)
    return _ease_in_out_cubic(progress)


def darkness_for(config: dict):
    """Return a ``now -> darkness`` callable using the configured sun times."""
    sunrise = parse_clock(config.get("sunrise"), DEFAULT_SUNRISE)
    sunset = parse_clock(config.get("sunset"), DEFAULT_SUNSET)

    def _at(now: datetime) -> float:
        return sky_darkness(now, sunrise, sunset)

    return _at
