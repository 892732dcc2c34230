"""Edit-vs-new-scene classification of lighting commands.

Scores a command against the weighted signal tables, adds contextual
bonuses (a running animated scene, a saved preset name, a bare colour word
while several colours are showing) and decides which way the command leans.
Pure and deterministic: no I/O, no shared state.
"""

from __future__ import annotations

import re

from intent.models import Classification, ClassificationResult
from intent.signals import (
    ACTIVE_SCENE_BONUS,
    AMBIGUITY_GAP,
    AMBIGUOUS_SIGNALS,
    EDIT_SIGNALS,
    MIN_CONFIDENCE,
    NEW_SCENE_SIGNALS,
    PRESET_MATCH_BONUS,
    SINGLE_COLOR_AMBIGUITY_BONUS,
)

SINGLE_HUES = frozenset({
    "red", "blue", "green", "purple", "pink", "orange", "yellow", "cyan",
    "magenta", "teal", "white", "gold", "amber", "indigo", "violet", "coral",
    "salmon", "lime", "turquoise", "lavender",
})

_FILLER_RE = re.compile(r"\b(set|to|the|lights?|make|it|go)\b")


def name_matches(text: str, name: str) -> bool:
    """Whether a saved preset/scene name appears in lowered text.

    Short names (3 chars or fewer) need a word boundary so "red" does not
    match "bored".
    """
    name = name.lower().strip()
    if not name:
        return False
    if text == name:
        return True
    if len(name) <= 3:
        return re.search(rf"\b{re.escape(name)}\b", text) is not None
    return name in text


def _is_single_hue(text: str) -> bool:
    stripped = _FILLER_RE.sub(" ", text).strip()
    stripped = re.sub(r"\s+", " ", stripped)
    return stripped in SINGLE_HUES


def classify(
    text: str,
    active_scene_running: bool = False,
    active_color_count: int = 0,
    saved_names: list[str] | tuple[str, ...] = (),
) -> ClassificationResult:
    """Classify a command as an edit, a new scene, or ambiguous.

    Args:
        text: Raw command text.
        active_scene_running: Lights are on with a non-solid effect.
        active_color_count: Number of colours in the running scene.
        saved_names: Favourite names followed by saved scene names.
    """
    lowered = text.lower().strip()
    edit_score = 0.0
    new_score = 0.0
    matched: list[tuple[str, str]] = []
    reasons: list[str] = []

    for entry in EDIT_SIGNALS:
        if entry.matches(lowered):
            edit_score += entry.weight
            matched.append(("edit", entry.pattern))

    for entry in NEW_SCENE_SIGNALS:
        if entry.matches(lowered):
            new_score += entry.weight
            matched.append(("new_scene", entry.pattern))

    for entry in AMBIGUOUS_SIGNALS:
        if entry.matches(lowered):
            half = entry.weight * 0.5
            edit_score += half
            new_score += half
            matched.append(("ambiguous", entry.pattern))

    preset_name = None
    if lowered:
        for name in saved_names:
            if name_matches(lowered, name):
                preset_name = name
                new_score += PRESET_MATCH_BONUS
                reasons.append(f"matches saved scene '{name}'")
                break

    if active_scene_running:
        edit_score += ACTIVE_SCENE_BONUS
        reasons.append("an animated scene is running")

    if active_color_count > 1 and lowered and _is_single_hue(lowered):
        half = SINGLE_COLOR_AMBIGUITY_BONUS / 2
        edit_score += half
        new_score += half
        reasons.append("single colour word with a multi-colour scene active")

    classification = decide(edit_score, new_score)
    if matched:
        reasons.insert(0, f"{len(matched)} signal(s) matched")
    reasons.append(
        f"edit={edit_score:.2f} new={new_score:.2f} -> {classification.value}"
    )

    return ClassificationResult(
        classification=classification,
        edit_score=edit_score,
        new_score=new_score,
        matched_signals=tuple(matched),
        matched_preset_name=preset_name,
        reasoning="; ".join(reasons),
    )


def decide(edit_score: float, new_score: float) -> Classification:
    """Apply the confidence floor and the ambiguity gap to two scores."""
    top = max(edit_score, new_score)
    if top < MIN_CONFIDENCE or abs(edit_score - new_score) < AMBIGUITY_GAP:
        return Classification.AMBIGUOUS
    if edit_score > new_score:
        return Classification.EDIT
    return Classification.NEW_SCENE


def build_context_hint(result: ClassificationResult) -> str:
    """Render the classification as an instruction block for the remote model."""
    lines = [
        "COMMAND INTENT CLASSIFICATION:",
        f"- Classification: {result.classification.value.upper()}",
        f"- Edit score: {result.edit_score:.2f}, new scene score: {result.new_score:.2f}",
    ]
    if result.matched_preset_name:
        lines.append(f"- Matches saved scene: {result.matched_preset_name}")

    if result.classification is Classification.EDIT:
        lines.append(
            "ADJUSTMENT: modify the currently running scene. Keep every "
            "parameter the user did not mention."
        )
    elif result.classification is Classification.NEW_SCENE:
        lines.append(
            "NEW_SCENE: build a fresh scene. Do not carry over the current "
            "colors or effect unless asked."
        )
    else:
        lines.append(
            "AMBIGUOUS: the user may want to tweak the current scene or start "
            "over. Offer up to 3 clarificationOptions covering both readings."
        )
    return "\n".join(lines)
