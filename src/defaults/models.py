"""Data models for default-filling: provenance, suggestions, user profile."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from utils.colors import RGB


class ParameterSource(str, Enum):
    USER_SPECIFIED = "user_specified"
    CONTEXT_INFERRED = "context_inferred"
    SYSTEM_DEFAULT = "system_default"

    @property
    def weight(self) -> float:
        return _SOURCE_WEIGHTS[self]


_SOURCE_WEIGHTS = {
    ParameterSource.USER_SPECIFIED: 1.0,
    ParameterSource.CONTEXT_INFERRED: 0.6,
    ParameterSource.SYSTEM_DEFAULT: 0.3,
}


class EnergyLevel(str, Enum):
    VERY_LOW = "very_low"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very_high"
    DYNAMIC = "dynamic"


class Mood(str, Enum):
    CALM = "calm"
    COZY = "cozy"
    ROMANTIC = "romantic"
    ELEGANT = "elegant"
    FESTIVE = "festive"
    PLAYFUL = "playful"
    ENERGETIC = "energetic"
    MAGICAL = "magical"
    MYSTERIOUS = "mysterious"
    DRAMATIC = "dramatic"
    NATURAL = "natural"
    MODERN = "modern"


class MotionType(str, Enum):
    STATIC = "static"
    PULSING = "pulsing"
    FLOWING = "flowing"
    CHASING = "chasing"
    TWINKLING = "twinkling"
    FLICKERING = "flickering"
    EXPLOSIVE = "explosive"
    MORPHING = "morphing"


@dataclass(frozen=True)
class DefaultsConfidence:
    colors_source: ParameterSource
    effect_source: ParameterSource
    brightness_source: ParameterSource
    speed_source: ParameterSource
    zone_source: ParameterSource

    @property
    def sources(self) -> tuple[ParameterSource, ...]:
        return (
            self.colors_source,
            self.effect_source,
            self.brightness_source,
            self.speed_source,
            self.zone_source,
        )

    @property
    def overall_confidence(self) -> float:
        """Mean provenance weight across the five parameters."""
        return sum(s.weight for s in self.sources) / len(self.sources)


@dataclass(frozen=True)
class PaletteInfo:
    name: str
    color_names: tuple[str, ...] = ()


@dataclass(frozen=True)
class EffectInfo:
    id: int
    name: str
    category: str
    motion: MotionType | None = None

    @property
    def is_static(self) -> bool:
        return self.id == 0 or self.motion is MotionType.STATIC


@dataclass(frozen=True)
class ZoneInfo:
    name: str


ALL_ZONES = ZoneInfo("All Zones")


@dataclass(frozen=True)
class LightingSuggestion:
    response_text: str
    colors: tuple[RGB, ...]
    palette: PaletteInfo
    effect: EffectInfo
    brightness: float
    speed: float | None
    zone: ZoneInfo
    device_payload: dict = field(hash=False, compare=False, default_factory=dict)


@dataclass(frozen=True)
class EnrichedSuggestion:
    suggestion: LightingSuggestion
    confidence: DefaultsConfidence


@dataclass(frozen=True)
class UserProfile:
    """Per-user preferences that bias context inference."""

    vibe_level: float | None = None
    quiet_hours_start: int | None = None  # minutes from midnight
    quiet_hours_end: int | None = None
    hoa_compliance: bool = False
    preferred_effect_styles: tuple[str, ...] = ()

    @classmethod
    def from_config(cls, config: dict) -> UserProfile:
        return cls(
            vibe_level=config.get("vibe_level"),
            quiet_hours_start=config.get("quiet_hours_start"),
            quiet_hours_end=config.get("quiet_hours_end"),
            hoa_compliance=bool(config.get("hoa_compliance", False)),
            preferred_effect_styles=tuple(config.get("preferred_effect_styles") or ()),
        )


@dataclass(frozen=True)
class DefaultsContext:
    """Ambient inputs to one resolution: darkness, clock, profile."""

    sky_darkness: float = 0.0
    hour: int = 12
    minute_of_day: int = 720
    profile: UserProfile | None = None
