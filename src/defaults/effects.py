"""Effect catalog: motion, energy, moods and speed range for known effect ids."""

from __future__ import annotations

from dataclasses import dataclass

from defaults.models import EffectInfo, EnergyLevel, Mood, MotionType

E = EnergyLevel
M = Mood
T = MotionType


@dataclass(frozen=True)
class EffectMeta:
    id: int
    name: str
    motion: MotionType
    energy: EnergyLevel
    moods: frozenset[Mood] = frozenset()
    min_speed: int = 0
    max_speed: int = 255
    default_speed: int = 128
    respects_colors: bool = True


def _fx(id, name, motion, energy, moods=(), min_speed=0, max_speed=255,
        default_speed=128, respects_colors=True) -> EffectMeta:
    return EffectMeta(id, name, motion, energy, frozenset(moods), min_speed,
                      max_speed, default_speed, respects_colors)


EFFECTS: dict[int, EffectMeta] = {m.id: m for m in (
    _fx(0, "Solid", T.STATIC, E.VERY_LOW, (M.CALM, M.ELEGANT), 0, 0, 0),
    _fx(1, "Blink", T.PULSING, E.MEDIUM, (M.PLAYFUL,), 20, 200, 100),
    _fx(2, "Breathe", T.PULSING, E.LOW, (M.CALM, M.ROMANTIC, M.ELEGANT, M.COZY), 20, 150, 60),
    _fx(3, "Wipe", T.FLOWING, E.MEDIUM, (M.MODERN,), 30, 200, 100),
    _fx(9, "Rainbow", T.FLOWING, E.MEDIUM, (M.PLAYFUL, M.FESTIVE), default_speed=80,
        respects_colors=False),
    _fx(12, "Fade", T.PULSING, E.LOW, (M.CALM, M.ELEGANT), 20, 120, 60),
    _fx(13, "Theater", T.CHASING, E.MEDIUM, (M.FESTIVE, M.PLAYFUL), 40, 180, 100),
    _fx(17, "Twinkle", T.TWINKLING, E.LOW, (M.MAGICAL, M.FESTIVE, M.ELEGANT, M.ROMANTIC),
        40, 150, 80),
    _fx(20, "Sparkle", T.TWINKLING, E.MEDIUM, (M.MAGICAL, M.FESTIVE), 50, 180, 100),
    _fx(25, "Strobe Mega", T.EXPLOSIVE, E.VERY_HIGH, (M.ENERGETIC, M.DRAMATIC),
        default_speed=220),
    _fx(28, "Chase", T.CHASING, E.HIGH, (M.FESTIVE, M.PLAYFUL, M.MODERN), 80, 220, 150),
    _fx(38, "Fire", T.FLICKERING, E.MEDIUM, (M.COZY, M.MYSTERIOUS, M.NATURAL), 40, 150, 80,
        respects_colors=False),
    _fx(41, "Running Dual", T.CHASING, E.HIGH, (M.ENERGETIC, M.FESTIVE), 80, 220, 150),
    _fx(42, "Halloween", T.TWINKLING, E.MEDIUM, (M.MYSTERIOUS,), default_speed=80),
    _fx(46, "Lightning", T.EXPLOSIVE, E.DYNAMIC, (M.DRAMATIC, M.MYSTERIOUS), default_speed=100),
    _fx(49, "Fairy", T.TWINKLING, E.LOW, (M.MAGICAL, M.ROMANTIC, M.ELEGANT), 30, 100, 60),
    _fx(52, "Fireworks Starburst", T.EXPLOSIVE, E.HIGH, (M.FESTIVE, M.ENERGETIC, M.DRAMATIC),
        100, 220, 150),
    _fx(63, "Pride 2015", T.FLOWING, E.MEDIUM, (M.PLAYFUL,), respects_colors=False),
    _fx(66, "Fire 2012", T.FLICKERING, E.MEDIUM, (M.COZY, M.NATURAL), default_speed=80),
    _fx(67, "Colorwaves", T.FLOWING, E.LOW, (M.CALM, M.NATURAL), default_speed=60),
    _fx(74, "Colortwinkles", T.TWINKLING, E.MEDIUM, (M.MAGICAL, M.PLAYFUL), default_speed=80),
    _fx(80, "Twinklefox", T.TWINKLING, E.LOW, (M.MAGICAL, M.CALM), 30, 120, 70),
    _fx(87, "Glitter", T.TWINKLING, E.MEDIUM, (M.FESTIVE, M.MAGICAL), 50, 150, 100),
    _fx(88, "Candle Multi", T.FLICKERING, E.LOW, (M.COZY, M.ROMANTIC), default_speed=60),
    _fx(90, "Sunrise", T.MORPHING, E.VERY_LOW, (M.CALM, M.NATURAL), 10, 60, 30),
    _fx(95, "Flow", T.FLOWING, E.LOW, (M.NATURAL, M.CALM, M.MODERN), 40, 120, 80),
    _fx(101, "Dynamic Smooth", T.MORPHING, E.LOW, (M.CALM, M.MODERN), default_speed=60),
)}

_BREATHE = {2, 25}
_CHASE = {3, 4, 14, 15, 28, 29, 33, 34, 47, 48, 64, 87, 111, 112, 115}
_RAINBOW = {9, 10, 102}
_GRADIENT = {46, 89, 101}
_TWINKLE = {49, 50, 74, 108, 109, 117, 118}
_SPARKLE = {52, 65, 66, 78, 80}
_FADE = {1, 13, 38}


def category_for(effect_id: int) -> str:
    """Preview category used to animate an effect id."""
    if effect_id == 0:
        return "solid"
    if effect_id in _BREATHE:
        return "breathe"
    if effect_id in _CHASE:
        return "chase"
    if effect_id in _RAINBOW:
        return "rainbow"
    if effect_id in _GRADIENT:
        return "gradient"
    if effect_id in _TWINKLE:
        return "twinkle"
    if effect_id in _SPARKLE:
        return "sparkle"
    if effect_id in _FADE:
        return "fade"
    return "chase"


def effect_info(effect_id: int, name: str | None = None) -> EffectInfo:
    meta = EFFECTS.get(effect_id)
    return EffectInfo(
        id=effect_id,
        name=name or (meta.name if meta else f"Effect {effect_id}"),
        category=category_for(effect_id),
        motion=meta.motion if meta else None,
    )
