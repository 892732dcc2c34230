"""Weighted keyword and regex signals used by the intent classifier.

Plain keywords match as case-insensitive substrings of the lowered input;
regex entries are searched as written.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field


@dataclass(frozen=True)
class SignalEntry:
    pattern: str
    weight: float
    is_regex: bool = False
    _compiled: re.Pattern | None = field(default=None, compare=False, repr=False)

    def matches(self, text: str) -> bool:
        """Test lowered, trimmed text against this signal."""
        if self._compiled is not None:
            return self._compiled.search(text) is not None
        return self.pattern in text


def _kw(keyword: str, weight: float) -> SignalEntry:
    return SignalEntry(keyword, weight)


def _re(pattern: str, weight: float) -> SignalEntry:
    return SignalEntry(pattern, weight, True, re.compile(pattern))


# Edit the running scene: adjustments, additions, preservation, undo.
EDIT_SIGNALS: tuple[SignalEntry, ...] = (
    _kw("brighter", 0.85),
    _kw("dimmer", 0.85),
    _kw("slower", 0.85),
    _kw("faster", 0.85),
    _kw("warmer", 0.80),
    _kw("cooler", 0.80),
    _kw("softer", 0.75),
    _kw("bolder", 0.75),
    _kw("more vibrant", 0.80),
    _kw("less vibrant", 0.80),
    _kw("more saturated", 0.75),
    _kw("less saturated", 0.75),
    _kw("more intense", 0.75),
    _kw("less intense", 0.75),
    _re(r"\bmore\b", 0.65),
    _re(r"\bless\b", 0.65),
    _re(r"\ba little\b", 0.70),
    _re(r"\ba lot\b", 0.65),
    _re(r"\bslightly\b", 0.70),
    _re(r"\bmuch\b", 0.50),
    _kw("add some", 0.80),
    _kw("add a", 0.75),
    _kw("include", 0.60),
    _kw("also", 0.55),
    _kw("plus", 0.55),
    _kw("with some", 0.70),
    _kw("throw in", 0.70),
    _kw("mix in", 0.75),
    _kw("sprinkle", 0.65),
    _kw("set brightness", 0.90),
    _kw("set speed", 0.90),
    _kw("brightness to", 0.90),
    _kw("speed to", 0.85),
    _kw("dim to", 0.90),
    _re(r"\b\d{1,3}\s*%", 0.70),
    _kw("half brightness", 0.85),
    _kw("full brightness", 0.85),
    _kw("keep the", 0.90),
    _kw("same colors", 0.90),
    _kw("same palette", 0.90),
    _kw("same effect", 0.85),
    _kw("don't change", 0.90),
    _kw("leave the", 0.80),
    _kw("just change", 0.85),
    _kw("just make", 0.75),
    _kw("only change", 0.85),
    _kw("but keep", 0.90),
    _kw("but make", 0.70),
    _kw("undo", 0.95),
    _kw("go back", 0.90),
    _kw("revert", 0.90),
    _kw("previous", 0.80),
    _kw("before", 0.50),
    _kw("redo", 0.85),
    _kw("make it chase", 0.70),
    _kw("add twinkle", 0.75),
    _kw("add sparkle", 0.75),
    _kw("make it breathe", 0.70),
    _kw("make it pulse", 0.70),
    _kw("make it static", 0.70),
    _kw("make it flow", 0.70),
    _kw("stop moving", 0.80),
    _kw("no movement", 0.80),
    _kw("turn up", 0.75),
    _kw("turn down", 0.75),
    _kw("bump up", 0.75),
    _kw("bump down", 0.75),
    _kw("crank up", 0.70),
    _kw("crank down", 0.70),
    _kw("dial down", 0.70),
    _kw("dial up", 0.70),
    _kw("tone down", 0.75),
    _kw("tone it down", 0.75),
)

# Replace the scene: themes, holidays, moods, explicit "something new".
NEW_SCENE_SIGNALS: tuple[SignalEntry, ...] = (
    _kw("party mode", 0.90),
    _kw("date night", 0.85),
    _kw("movie night", 0.80),
    _kw("game day", 0.85),
    _kw("game night", 0.80),
    _kw("dinner party", 0.80),
    _kw("cocktail hour", 0.80),
    _kw("yoga", 0.75),
    _kw("meditation", 0.75),
    _kw("reading mode", 0.75),
    _kw("bedtime", 0.70),
    _kw("wake up", 0.65),
    _kw("sunset", 0.85),
    _kw("sunrise", 0.80),
    _kw("ocean", 0.85),
    _kw("aurora", 0.85),
    _kw("northern lights", 0.85),
    _kw("tropical", 0.80),
    _kw("forest", 0.75),
    _kw("desert", 0.75),
    _kw("thunderstorm", 0.80),
    _kw("starry", 0.75),
    _kw("moonlight", 0.75),
    _kw("campfire", 0.80),
    _kw("lava", 0.80),
    _kw("underwater", 0.80),
    _kw("deep sea", 0.80),
    _kw("cherry blossom", 0.85),
    _kw("lavender field", 0.80),
    _kw("christmas", 0.95),
    _kw("halloween", 0.95),
    _kw("valentine", 0.90),
    _kw("st patrick", 0.90),
    _kw("fourth of july", 0.90),
    _kw("4th of july", 0.90),
    _kw("independence day", 0.90),
    _kw("easter", 0.85),
    _kw("hanukkah", 0.90),
    _kw("diwali", 0.85),
    _kw("new year", 0.85),
    _kw("thanksgiving", 0.85),
    _kw("mardi gras", 0.90),
    _kw("pride", 0.80),
    _kw("winter wonderland", 0.90),
    _kw("fireworks", 0.80),
    _kw("patriotic", 0.85),
    _kw("spooky", 0.80),
    _kw("festive", 0.70),
    _kw("holiday", 0.65),
    _kw("something different", 0.90),
    _kw("something new", 0.85),
    _kw("change it up", 0.85),
    _kw("start over", 0.90),
    _kw("new scene", 0.95),
    _kw("new look", 0.85),
    _kw("switch to", 0.80),
    _kw("show me", 0.60),
    _kw("give me", 0.55),
    _kw("set the mood", 0.70),
    _kw("surprise me", 0.80),
    _kw("try something", 0.70),
    _kw("how about", 0.55),
    _kw("cozy", 0.70),
    _kw("romantic", 0.70),
    _kw("zen", 0.70),
    _kw("dreamy", 0.70),
    _kw("mysterious", 0.65),
    _kw("ethereal", 0.70),
    _kw("bohemian", 0.70),
    _kw("vintage", 0.65),
    _kw("neon", 0.70),
    _kw("cyberpunk", 0.75),
    _kw("vaporwave", 0.80),
    _kw("retro", 0.65),
    _kw("minimalist", 0.65),
    _kw("spring", 0.60),
    _kw("summer", 0.60),
    _kw("autumn", 0.65),
    _kw("fall colors", 0.75),
    _kw("winter", 0.60),
    _kw("make my house look like", 0.95),
    _kw("make it look like", 0.85),
    _kw("turn my house into", 0.90),
    _kw("transform", 0.65),
    _kw("theme", 0.55),
)

# Could go either way; half the weight is added to both scores.
AMBIGUOUS_SIGNALS: tuple[SignalEntry, ...] = (
    _kw("something warm", 0.70),
    _kw("something cool", 0.70),
    _kw("something fun", 0.65),
    _kw("something calm", 0.65),
    _kw("something bright", 0.60),
    _kw("change the mood", 0.75),
    _kw("change the vibe", 0.75),
    _kw("different vibe", 0.70),
    _kw("different mood", 0.70),
    _kw("more festive", 0.65),
    _kw("more relaxing", 0.65),
    _kw("more dramatic", 0.65),
    _kw("more romantic", 0.65),
    _kw("more playful", 0.65),
    _kw("make it feel", 0.60),
)

SIGNAL_SETS: dict[str, tuple[SignalEntry, ...]] = {
    "edit": EDIT_SIGNALS,
    "new_scene": NEW_SCENE_SIGNALS,
    "ambiguous": AMBIGUOUS_SIGNALS,
}

AMBIGUITY_GAP = 0.25
MIN_CONFIDENCE = 0.30
ACTIVE_SCENE_BONUS = 0.15
PRESET_MATCH_BONUS = 0.40
SINGLE_COLOR_AMBIGUITY_BONUS = 0.35
