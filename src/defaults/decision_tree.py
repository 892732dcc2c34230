"""Effect selection from analysed mood/motion/energy, plus speed recommendation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

from defaults.analysis import QueryAnalysis
from defaults.effects import EFFECTS, category_for, effect_info
from defaults.models import EffectInfo, EnergyLevel, MotionType

_ENERGY_RANK = {
    EnergyLevel.VERY_LOW: 0,
    EnergyLevel.LOW: 1,
    EnergyLevel.MEDIUM: 2,
    EnergyLevel.DYNAMIC: 2,
    EnergyLevel.HIGH: 3,
    EnergyLevel.VERY_HIGH: 4,
}

FALLBACK_BY_ENERGY: dict[EnergyLevel | None, int] = {
    EnergyLevel.VERY_LOW: 0,    # Solid
    EnergyLevel.LOW: 2,         # Breathe
    EnergyLevel.MEDIUM: 17,     # Twinkle
    EnergyLevel.DYNAMIC: 17,
    EnergyLevel.HIGH: 28,       # Chase
    EnergyLevel.VERY_HIGH: 28,
    None: 0,
}


@dataclass(frozen=True)
class EffectSelection:
    effect: EffectInfo
    is_inferred: bool


def suggest_effects(
    analysis: QueryAnalysis,
    require_color_respect: bool = False,
    learned_preferences: Mapping[int, float] | None = None,
) -> list[int]:
    """Rank catalog effects that match the analysed motion or mood.

    Motion matches weigh more than mood matches; ties go to the effect whose
    energy is closest to the request, then to learned favourites.
    """
    if analysis.motion is None and analysis.mood is None:
        return []
    learned = learned_preferences or {}
    target = _ENERGY_RANK.get(analysis.energy)

    scored = []
    for meta in EFFECTS.values():
        if require_color_respect and not meta.respects_colors:
            continue
        if meta.id == 0 and analysis.motion is not MotionType.STATIC:
            continue
        score = 0.0
        if analysis.motion is not None and meta.motion is analysis.motion:
            score += 3
        if analysis.mood is not None and analysis.mood in meta.moods:
            score += 2
        if score == 0:
            continue
        if target is not None:
            score -= 0.5 * abs(_ENERGY_RANK[meta.energy] - target)
        score += 2 * learned.get(meta.id, 0.0)
        scored.append((score, -meta.id, meta.id))

    scored.sort(reverse=True)
    return [effect_id for _score, _neg, effect_id in scored]


def select_effect(
    analysis: QueryAnalysis,
    has_user_colors: bool = False,
    preferred_styles: Sequence[str] = (),
    learned_preferences: Mapping[int, float] | None = None,
) -> EffectSelection:
    candidates = suggest_effects(analysis, has_user_colors, learned_preferences)
    if candidates:
        best = candidates[0]
        styles = {s.lower() for s in preferred_styles}
        if styles:
            for effect_id in candidates:
                if category_for(effect_id) in styles:
                    best = effect_id
                    break
        return EffectSelection(
            effect=effect_info(best),
            is_inferred=True,
        )

    fallback = FALLBACK_BY_ENERGY.get(analysis.energy, 0)
    return EffectSelection(
        effect=effect_info(fallback),
        is_inferred=False,
    )


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def recommend_speed(effect_id: int, energy: EnergyLevel | None) -> float:
    """0-1 speed for an effect, shifted toward its min or max by energy.

    Static effects get 0; effects missing from the catalog get 0.5.
    """
    meta = EFFECTS.get(effect_id)
    if meta is None:
        return 0.5
    if meta.motion is MotionType.STATIC:
        return 0.0

    if energy is EnergyLevel.VERY_LOW:
        raw = meta.min_speed
    elif energy is EnergyLevel.LOW:
        raw = _lerp(meta.min_speed, meta.default_speed, 0.35)
    elif energy is EnergyLevel.HIGH:
        raw = _lerp(meta.default_speed, meta.max_speed, 0.65)
    elif energy is EnergyLevel.VERY_HIGH:
        raw = meta.max_speed
    else:
        raw = meta.default_speed
    return max(0.0, min(1.0, raw / 255.0))
