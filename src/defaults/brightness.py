"""Context-aware brightness: sky darkness curve, vibe, energy and house rules."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from defaults.models import EnergyLevel

# Sky darkness (0 = full daylight, 1 = night) -> base brightness.
CURVE_DARKNESS = np.array([0.0, 0.3, 0.5, 0.7, 1.0])
CURVE_BRIGHTNESS = np.array([0.60, 0.75, 0.85, 0.90, 0.85])

DEFAULT_VIBE = 0.5
QUIET_HOURS_FACTOR = 0.5
HOA_CAP = 0.75
MIN_BRIGHTNESS = 0.05
MAX_BRIGHTNESS = 1.0

ENERGY_MULTIPLIERS: dict[EnergyLevel, float] = {
    EnergyLevel.VERY_LOW: 0.70,
    EnergyLevel.LOW: 0.85,
    EnergyLevel.MEDIUM: 1.00,
    EnergyLevel.HIGH: 1.10,
    EnergyLevel.VERY_HIGH: 1.15,
    EnergyLevel.DYNAMIC: 1.00,
}


@dataclass(frozen=True)
class BrightnessRecommendation:
    brightness: float
    factors: dict[str, float] = field(default_factory=dict, hash=False, compare=False)


def base_for_darkness(sky_darkness: float) -> float:
    """Piecewise-linear base brightness; input clamped to [0, 1]."""
    d = min(1.0, max(0.0, sky_darkness))
    return float(np.interp(d, CURVE_DARKNESS, CURVE_BRIGHTNESS))


def in_quiet_hours(minute_of_day: int, start: int | None, end: int | None) -> bool:
    """Whether minute_of_day falls in [start, end); the window may wrap midnight."""
    if start is None or end is None or start == end:
        return False
    if start < end:
        return start <= minute_of_day < end
    return minute_of_day >= start or minute_of_day < end


def clamp(value: float) -> float:
    return max(MIN_BRIGHTNESS, min(MAX_BRIGHTNESS, value))


def calculate(
    sky_darkness: float,
    vibe_level: float | None = None,
    quiet_hours_start: int | None = None,
    quiet_hours_end: int | None = None,
    minute_of_day: int = 720,
    hoa_compliance: bool = False,
    energy: EnergyLevel | None = None,
) -> BrightnessRecommendation:
    """Recommend a 0-1 brightness before any learned bias is applied."""
    base = base_for_darkness(sky_darkness)
    vibe = DEFAULT_VIBE if vibe_level is None else min(1.0, max(0.0, vibe_level))
    vibe_factor = 0.80 + vibe * 0.35
    energy_factor = ENERGY_MULTIPLIERS.get(energy, 1.0) if energy is not None else 1.0
    quiet = in_quiet_hours(minute_of_day, quiet_hours_start, quiet_hours_end)

    value = base * vibe_factor * energy_factor
    if quiet:
        value *= QUIET_HOURS_FACTOR
    if hoa_compliance:
        value = min(value, HOA_CAP)

    return BrightnessRecommendation(
        brightness=clamp(value),
        factors={
            "base": base,
            "vibe": vibe_factor,
            "energy": energy_factor,
            "quiet_hours": QUIET_HOURS_FACTOR if quiet else 1.0,
        },
    )
