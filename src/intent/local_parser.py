"""Tier 1: deterministic pattern matching for common lighting commands.

Handles power, brightness, solid colours, saved scenes and app navigation
without touching the network. Every matcher returns a candidate Intent with a
fixed confidence; the best candidate wins and anything at or above
SHORT_CIRCUIT ends the search early.
"""

from __future__ import annotations

import re
from typing import Callable, Sequence

from intent.models import (
    Brightness,
    Effect,
    Intent,
    Navigate,
    Power,
    Scene,
    SolidColor,
)
from intent.presets import SavedScene
from utils.colors import NAMED_COLORS, NAMES_BY_LENGTH, display_name, hex_to_rgb

SHORT_CIRCUIT = 0.95
RELATIVE_STEP = 30
MIN_RELATIVE_BRIGHTNESS = 5

_POWER_ON = [
    re.compile(r"^(turn\s+)?on$"),
    re.compile(r"^lights?\s+on$"),
    re.compile(r"^turn\s+(the\s+)?lights?\s+on$"),
    re.compile(r"^power\s+on$"),
    re.compile(r"^switch\s+on$"),
    re.compile(r"^enable\s+lights?$"),
]

_POWER_OFF = [
    re.compile(r"^(turn\s+)?off$"),
    re.compile(r"^lights?\s+off$"),
    re.compile(r"^turn\s+(the\s+)?lights?\s+off$"),
    re.compile(r"^power\s+off$"),
    re.compile(r"^switch\s+off$"),
    re.compile(r"^disable\s+lights?$"),
    re.compile(r"^kill\s+(the\s+)?lights?$"),
    re.compile(r"^lights?\s+out$"),
    re.compile(r"^shut\s+(it\s+)?off$"),
    re.compile(r"^goodnight$"),
    re.compile(r"^good\s+night$"),
]

_PERCENT_RE = re.compile(r"(\d{1,3})\s*(%|percent)")
_SET_BRIGHTNESS_RE = re.compile(r"(?:set\s+)?brightness\s+(?:to\s+)?(\d{1,3})")
_UP_RE = re.compile(r"\b(brighter|bright(?:er)?|increase|raise|up)\b")
_DOWN_RE = re.compile(r"\b(darker|dimmer|dim(?:mer)?|decrease|lower|down)\b")
_COLOR_WORD_RE = re.compile(r"\b(color|red|blue|green|white)\b")
_HEX_RE = re.compile(r"(?:#|hex\s*)([0-9a-fA-F]{6})")

NAMED_LEVELS: dict[str, int] = {
    "full brightness": 255,
    "max brightness": 255,
    "maximum": 255,
    "full": 255,
    "half brightness": 128,
    "half": 128,
    "dim": 50,
    "very dim": 25,
    "night light": 15,
    "nightlight": 15,
    "movie mode": 30,
    "low": 40,
    "medium": 128,
}

# keyword -> (route, tab index)
NAVIGATION_TARGETS: dict[str, tuple[str | None, int | None]] = {
    "settings": ("/settings", 3),
    "system": ("/settings", 3),
    "schedule": (None, 1),
    "schedules": (None, 1),
    "calendar": (None, 1),
    "explore": (None, 2),
    "patterns": (None, 2),
    "library": (None, 2),
    "browse": (None, 2),
    "home": (None, 0),
    "dashboard": (None, 0),
    "zones": ("/zones", None),
    "scenes": ("/my-scenes", None),
    "my scenes": ("/my-scenes", None),
    "designs": ("/my-designs", None),
    "my designs": ("/my-designs", None),
    "design studio": ("/design-studio", None),
    "studio": ("/design-studio", None),
    "roofline": ("/settings/roofline-editor", None),
    "profile": ("/settings/profile", None),
}


def _percent_to_level(pct: int) -> int:
    return max(0, min(255, int(pct / 100 * 255 + 0.5)))


def _match_power(text: str, raw: str, scenes) -> Intent | None:
    if any(p.match(text) for p in _POWER_ON):
        return Intent(Power(on=True), 0.98, raw)
    if any(p.match(text) for p in _POWER_OFF):
        return Intent(Power(on=False), 0.98, raw)
    return None


def _match_brightness(text: str, raw: str, scenes) -> Intent | None:
    m = _PERCENT_RE.search(text)
    if m:
        pct = int(m.group(1))
        if 0 <= pct <= 100:
            return Intent(Brightness(value=_percent_to_level(pct)), 0.95, raw)

    m = _SET_BRIGHTNESS_RE.search(text)
    if m:
        value = int(m.group(1))
        if value <= 255:
            return Intent(Brightness(value=value), 0.93, raw)

    for key, level in NAMED_LEVELS.items():
        if text == key or text == f"set {key}":
            return Intent(Brightness(value=level), 0.93, raw)

    if _COLOR_WORD_RE.search(text):
        return None
    if _UP_RE.search(text):
        return Intent(Brightness(relative=True, delta=RELATIVE_STEP), 0.88, raw)
    if _DOWN_RE.search(text):
        return Intent(Brightness(relative=True, delta=-RELATIVE_STEP), 0.88, raw)
    return None


def _color_patterns(name: str) -> list[re.Pattern]:
    n = re.escape(name)
    return [
        re.compile(rf"^{n}$"),
        re.compile(rf"^set\s+(?:it\s+|lights?\s+)?(?:to\s+)?{n}$"),
        re.compile(rf"^(?:make|turn)\s+(?:it\s+|them\s+|lights?\s+)?{n}$"),
        re.compile(rf"^(?:change|switch)\s+(?:to\s+)?{n}$"),
        re.compile(rf"^{n}\s+(?:lights?|color|mode)$"),
    ]


_COLOR_PATTERNS = [(name, _color_patterns(name)) for name in NAMES_BY_LENGTH]


def _match_solid_color(text: str, raw: str, scenes) -> Intent | None:
    for name, patterns in _COLOR_PATTERNS:
        if any(p.match(text) for p in patterns):
            rgb = hex_to_rgb(NAMED_COLORS[name])
            return Intent(SolidColor(rgb=rgb, name=name), 0.92, raw)

    m = _HEX_RE.search(text)
    if m:
        hex_value = m.group(1).upper()
        return Intent(SolidColor(rgb=hex_to_rgb(hex_value), name=f"#{hex_value}"), 0.95, raw)
    return None


def _match_scene(text: str, raw: str, scenes: Sequence[SavedScene]) -> Intent | None:
    best: Intent | None = None
    for scene in scenes:
        name = scene.name.lower().strip()
        if not name:
            continue
        n = re.escape(name)
        patterns = (
            rf"^{n}$",
            rf"^(?:run|play|set|activate|start|load|apply)\s+{n}$",
            rf"^{n}\s+(?:scene|mode|pattern)$",
        )
        if any(re.match(p, text) for p in patterns):
            return Intent(Scene(id=scene.id, name=scene.name), 0.93, raw)
        if best is None and name in text and len(text) < len(name) + 20:
            best = Intent(Scene(id=scene.id, name=scene.name), 0.80, raw)
    return best


_NAV_KEYS = sorted(NAVIGATION_TARGETS, key=len, reverse=True)


def _match_navigation(text: str, raw: str, scenes) -> Intent | None:
    for key in _NAV_KEYS:
        k = re.escape(key)
        patterns = (
            rf"^(?:go\s+to|open|show|navigate\s+to|take\s+me\s+to)\s+(?:the\s+)?{k}$",
            rf"^{k}\s+(?:screen|page|tab|view)$",
            rf"^show\s+(?:me\s+)?(?:the\s+)?{k}$",
        )
        if any(re.match(p, text) for p in patterns):
            route, tab = NAVIGATION_TARGETS[key]
            return Intent(Navigate(route=route, tab=tab), 0.95, raw)
    return None


MATCHERS: list[Callable[[str, str, Sequence[SavedScene]], Intent | None]] = [
    _match_power,
    _match_brightness,
    _match_solid_color,
    _match_scene,
    _match_navigation,
]


def parse_local(text: str, saved_scenes: Sequence[SavedScene] = ()) -> Intent:
    """Run every matcher in order and return the most confident candidate.

    Empty input, or input no matcher recognises, yields Unknown at 0.0.
    """
    lowered = text.strip().lower()
    if not lowered:
        return Intent.unknown(text)

    best: Intent | None = None
    for matcher in MATCHERS:
        candidate = matcher(lowered, text, saved_scenes)
        if candidate is None:
            continue
        if best is None or candidate.confidence > best.confidence:
            best = candidate
        if best.confidence >= SHORT_CIRCUIT:
            break
    return best or Intent.unknown(text)


def to_device_payload(intent: Intent, current_brightness: int | None = None) -> dict | None:
    """Translate an intent into a device JSON payload.

    Relative brightness is resolved against current_brightness (128 when
    unknown) and clamped to 5-255. Scene, Navigate and Unknown intents have no
    direct payload.
    """
    cmd = intent.command
    if isinstance(cmd, Power):
        return {"on": cmd.on}
    if isinstance(cmd, Brightness):
        if cmd.relative:
            base = 128 if current_brightness is None else current_brightness
            value = max(MIN_RELATIVE_BRIGHTNESS, min(255, base + cmd.delta))
            return {"on": True, "bri": value}
        return {"on": True, "bri": cmd.value}
    if isinstance(cmd, SolidColor):
        return {"on": True, "seg": [{"fx": 0, "col": [list(cmd.rgb)]}]}
    if isinstance(cmd, Effect):
        seg = {"fx": cmd.id}
        if cmd.speed is not None:
            seg["sx"] = cmd.speed
        if cmd.intensity is not None:
            seg["ix"] = cmd.intensity
        return {"on": True, "seg": [seg]}
    return None


def response_text(intent: Intent) -> str:
    """Short confirmation sentence for a locally handled intent."""
    cmd = intent.command
    if isinstance(cmd, Power):
        return "Turning your lights on." if cmd.on else "Turning your lights off."
    if isinstance(cmd, Brightness):
        if cmd.relative:
            return "Increasing brightness." if cmd.delta > 0 else "Decreasing brightness."
        pct = int(cmd.value / 255 * 100 + 0.5)
        return f"Setting brightness to {pct}%."
    if isinstance(cmd, SolidColor):
        name = cmd.name if cmd.name.startswith("#") else display_name(cmd.name)
        return f"Setting lights to {name}."
    if isinstance(cmd, Effect):
        return f"Applying {cmd.name}."
    if isinstance(cmd, Scene):
        return f"Running {cmd.name}."
    if isinstance(cmd, Navigate):
        return "Opening that for you."
    return ""
