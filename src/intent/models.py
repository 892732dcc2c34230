"""Data models for classified and resolved lighting commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from utils.colors import RGB

HIGH_CONFIDENCE = 0.85


class Tier(str, Enum):
    LOCAL = "local"
    REMOTE = "remote"


class Classification(str, Enum):
    EDIT = "edit"
    NEW_SCENE = "new_scene"
    AMBIGUOUS = "ambiguous"


# -- Command kinds ---------------------------------------------------------
# Each kind carries only the parameters that make sense for it.


@dataclass(frozen=True)
class Power:
    on: bool


@dataclass(frozen=True)
class Brightness:
    """Absolute brightness (0-255) or a relative delta."""

    value: int | None = None
    relative: bool = False
    delta: int = 0


@dataclass(frozen=True)
class SolidColor:
    rgb: RGB
    name: str


@dataclass(frozen=True)
class Effect:
    id: int
    name: str
    speed: int | None = None
    intensity: int | None = None


@dataclass(frozen=True)
class Scene:
    id: str
    name: str


@dataclass(frozen=True)
class Navigate:
    route: str | None = None
    tab: int | None = None


@dataclass(frozen=True)
class Unknown:
    pass


Command = Union[Power, Brightness, SolidColor, Effect, Scene, Navigate, Unknown]

_KIND_NAMES = {
    Power: "power",
    Brightness: "brightness",
    SolidColor: "solid_color",
    Effect: "effect",
    Scene: "scene",
    Navigate: "navigate",
    Unknown: "unknown",
}


@dataclass(frozen=True)
class Intent:
    """A parsed command with its confidence and the tier that produced it."""

    command: Command
    confidence: float
    raw_text: str
    tier: Tier = Tier.LOCAL

    @property
    def kind(self) -> str:
        return _KIND_NAMES[type(self.command)]

    @property
    def is_high_confidence(self) -> bool:
        return self.confidence > HIGH_CONFIDENCE

    @classmethod
    def unknown(cls, raw_text: str, tier: Tier = Tier.LOCAL) -> Intent:
        return cls(Unknown(), 0.0, raw_text, tier)


@dataclass(frozen=True)
class ClassificationResult:
    classification: Classification
    edit_score: float
    new_score: float
    matched_signals: tuple[tuple[str, str], ...] = ()
    matched_preset_name: str | None = None
    reasoning: str = ""


@dataclass(frozen=True)
class ActiveContext:
    """What the lights are currently showing."""

    is_on: bool = False
    effect_id: int = 0
    brightness: int | None = None
    colors: tuple[RGB, ...] = ()
    pattern_name: str | None = None

    @property
    def scene_running(self) -> bool:
        """Lights on with an animated (non-solid) effect."""
        return self.is_on and self.effect_id != 0


@dataclass
class CommandResult:
    """Outcome of one resolution tier (or of the fallback)."""

    response_text: str
    tier: Tier
    intent: Intent | None = None
    device_payload: dict | None = None
    preview_colors: list[RGB] = field(default_factory=list)
    clarification_options: list[str] = field(default_factory=list)
    zone: str | None = None

    @property
    def is_text_only(self) -> bool:
        """True when there is nothing to apply to the lights."""
        return (
            self.device_payload is None
            and not self.preview_colors
            and (self.intent is None or isinstance(self.intent.command, Unknown))
        )


@dataclass
class RoutedCommand:
    """Everything one route() call produced, returned to the caller."""

    text: str
    classification: ClassificationResult
    result: CommandResult
    enriched: object | None = None  # defaults.models.EnrichedSuggestion
    used_remote: bool = False
    fell_back: bool = False
