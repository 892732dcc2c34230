"""Records kept by the history store: usage events and learned habits."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

SOURCE_ADJUSTED = "suggestion_adjusted"
SOURCE_ACCEPTED = "suggestion_accepted"

HABIT_BRIGHTNESS_BIAS = "brightness_bias"
HABIT_EFFECT_PREFERENCE = "effect_preference"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class UsageEvent:
    """One applied or adjusted suggestion."""

    source: str  # SOURCE_ADJUSTED | SOURCE_ACCEPTED
    details: dict = field(default_factory=dict)
    pattern_name: str | None = None
    brightness: int | None = None  # 0-255
    effect_id: int | None = None
    speed: int | None = None  # 0-255
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: str = field(default_factory=_now)


@dataclass
class Habit:
    """A pattern mined from usage events.

    ``details`` holds the type-specific fields: ``context`` and ``bias`` for
    brightness biases, ``preferred_effects`` for effect preferences.
    """

    habit_type: str
    description: str = ""
    details: dict = field(default_factory=dict)
    sample_count: int = 0
    created_at: str = field(default_factory=_now)
