"""Keyword analysis of a free-form request: mood, energy, motion, colours."""

from __future__ import annotations

import re
from dataclasses import dataclass

from defaults.models import EnergyLevel, Mood, MotionType
from utils.colors import NAMES_BY_LENGTH, RGB, named_rgb

_MOOD_WORDS: dict[Mood, tuple[str, ...]] = {
    Mood.CALM: ("calm", "relax", "relaxing", "peaceful", "serene", "chill", "soothing", "zen", "tranquil"),
    Mood.COZY: ("cozy", "warm", "snug", "homey", "hygge", "fireplace", "campfire"),
    Mood.ROMANTIC: ("romantic", "romance", "love", "date", "intimate", "valentine"),
    Mood.ELEGANT: ("elegant", "classy", "sophisticated", "formal", "refined", "luxury"),
    Mood.FESTIVE: ("festive", "holiday", "celebration", "celebrate", "christmas", "party"),
    Mood.PLAYFUL: ("playful", "fun", "whimsical", "cheerful", "happy", "silly"),
    Mood.ENERGETIC: ("energetic", "hype", "pump", "exciting", "upbeat", "intense", "rave"),
    Mood.MAGICAL: ("magical", "magic", "fairy", "enchanted", "dreamy", "sparkly", "whimsy"),
    Mood.MYSTERIOUS: ("mysterious", "spooky", "eerie", "haunted", "dark", "gothic", "halloween"),
    Mood.DRAMATIC: ("dramatic", "bold", "epic", "storm", "thunder", "intense"),
    Mood.NATURAL: ("natural", "nature", "forest", "ocean", "earthy", "organic", "garden"),
    Mood.MODERN: ("modern", "sleek", "minimal", "minimalist", "clean", "contemporary"),
}

_ENERGY_WORDS: tuple[tuple[EnergyLevel, tuple[str, ...]], ...] = (
    (EnergyLevel.VERY_HIGH, ("crazy", "insane", "rave", "strobe", "wild", "max energy")),
    (EnergyLevel.HIGH, ("party", "energetic", "fast", "exciting", "hype", "upbeat", "dance", "game day")),
    (EnergyLevel.VERY_LOW, ("sleep", "bedtime", "meditation", "still", "static", "very calm")),
    (EnergyLevel.LOW, ("calm", "relax", "relaxing", "slow", "gentle", "soft", "cozy", "romantic", "chill")),
    (EnergyLevel.DYNAMIC, ("dynamic", "varied", "changing", "random")),
    (EnergyLevel.MEDIUM, ("festive", "fun", "cheerful", "lively")),
)

_MOTION_WORDS: dict[MotionType, tuple[str, ...]] = {
    MotionType.STATIC: ("static", "solid", "still", "steady", "no movement", "not moving"),
    MotionType.PULSING: ("pulse", "pulsing", "breathe", "breathing", "throb"),
    MotionType.FLOWING: ("flow", "flowing", "wave", "waves", "drift", "ripple"),
    MotionType.CHASING: ("chase", "chasing", "running", "racing", "marquee"),
    MotionType.TWINKLING: ("twinkle", "twinkling", "sparkle", "sparkling", "glitter", "shimmer", "stars"),
    MotionType.FLICKERING: ("flicker", "flickering", "candle", "fire", "flame", "campfire"),
    MotionType.EXPLOSIVE: ("fireworks", "explode", "burst", "lightning", "strobe"),
    MotionType.MORPHING: ("morph", "fade", "fading", "sunrise", "transition"),
}


def _has(text: str, phrase: str) -> bool:
    return re.search(rf"\b{re.escape(phrase)}\b", text) is not None


@dataclass(frozen=True)
class QueryAnalysis:
    original_query: str
    mood: Mood | None = None
    energy: EnergyLevel | None = None
    motion: MotionType | None = None
    color_preferences: tuple[RGB, ...] = ()

    @property
    def has_color_preferences(self) -> bool:
        return bool(self.color_preferences)


def analyze_query(text: str) -> QueryAnalysis:
    """Extract mood, energy, motion and named colours from text.

    Each attribute takes the first table entry with a matching word; colours
    are collected longest name first without overlapping ("warm white" is
    not also counted as "white").
    """
    lowered = text.lower()

    mood = next(
        (m for m, words in _MOOD_WORDS.items() if any(_has(lowered, w) for w in words)),
        None,
    )
    energy = next(
        (e for e, words in _ENERGY_WORDS if any(_has(lowered, w) for w in words)),
        None,
    )
    motion = next(
        (t for t, words in _MOTION_WORDS.items() if any(_has(lowered, w) for w in words)),
        None,
    )

    colors: list[tuple[int, RGB]] = []
    remaining = lowered
    for name in NAMES_BY_LENGTH:
        pattern = rf"\b{re.escape(name)}\b"
        for match in re.finditer(pattern, remaining):
            colors.append((match.start(), named_rgb(name)))
        remaining = re.sub(pattern, lambda m: " " * len(m.group(0)), remaining)
    colors.sort(key=lambda item: item[0])

    return QueryAnalysis(
        original_query=text,
        mood=mood,
        energy=energy,
        motion=motion,
        color_preferences=tuple(rgb for _pos, rgb in colors),
    )
