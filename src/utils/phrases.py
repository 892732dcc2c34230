"""Phrase pools for replies and clarification suggestions."""

import random

STARTUP_PHRASES = [
    "Lumen is ready.",
    "Lights standing by.",
    "Ready when you are.",
    "What should the lights do?",
    "Hello, I'm online.",
]

GOODBYE_PHRASES = [
    "Goodbye.",
    "Lights out. See you later.",
    "Signing off.",
]

FALLBACK_MESSAGE = "I'm not sure what you meant. Could you try one of these?"

# Clarification suggestions, keyed by the kind of partial local match.
BRIGHTNESS_SUGGESTIONS = ["Set brightness to 50%", "Full brightness", "Dim the lights"]
SOLID_COLOR_SUGGESTIONS = ["Warm white", "Cool white", "Set to red"]
POWER_SUGGESTIONS = ["Turn on the lights", "Turn off the lights"]
STARTER_SUGGESTIONS = [
    "Turn on the lights",
    "Set to warm white",
    "Show me something festive",
    "Surprise me",
]

SUGGESTIONS_BY_KIND = {
    "brightness": BRIGHTNESS_SUGGESTIONS,
    "solid_color": SOLID_COLOR_SUGGESTIONS,
    "power": POWER_SUGGESTIONS,
}


def pick_phrase(pool: list[str]) -> str:
    """Pick a random phrase from a pool."""
    return random.choice(pool)


def suggestions_for(kind: str | None) -> list[str]:
    """Clarification options for a partial match kind (starter set otherwise)."""
    return list(SUGGESTIONS_BY_KIND.get(kind or "", STARTER_SUGGESTIONS))
