"""Tests for phrase pools and suggestion helpers."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from utils.phrases import (
    FALLBACK_MESSAGE,
    GOODBYE_PHRASES,
    STARTER_SUGGESTIONS,
    STARTUP_PHRASES,
    pick_phrase,
    suggestions_for,
)


def test_pools_non_empty():
    assert len(STARTUP_PHRASES) > 0
    assert len(GOODBYE_PHRASES) > 0


def test_pick_returns_element_from_pool():
    for _ in range(20):
        assert pick_phrase(STARTUP_PHRASES) in STARTUP_PHRASES


def test_pick_varies():
    """pick_phrase should return more than one unique phrase over many calls."""
    results = {pick_phrase(STARTUP_PHRASES) for _ in range(50)}
    assert len(results) > 1


def test_fallback_message():
    assert FALLBACK_MESSAGE == "I'm not sure what you meant. Could you try one of these?"


def test_suggestions_by_kind():
    assert suggestions_for("brightness") == ["Set brightness to 50%", "Full brightness", "Dim the lights"]
    assert suggestions_for("solid_color") == ["Warm white", "Cool white", "Set to red"]
    assert suggestions_for("power") == ["Turn on the lights", "Turn off the lights"]


def test_suggestions_default_to_starters():
    assert suggestions_for(None) == STARTER_SUGGESTIONS
    assert suggestions_for("scene") == STARTER_SUGGESTIONS


def test_suggestion_counts_between_two_and_four():
    for kind in ("brightness", "solid_color", "power", None):
        assert 2 <= len(suggestions_for(kind)) <= 4


def test_suggestions_are_copies():
    suggestions_for(None).append("extra")
    assert "extra" not in STARTER_SUGGESTIONS
