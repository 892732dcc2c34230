"""Tests for edit-vs-new-scene classification."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from intent.classifier import build_context_hint, classify, decide, name_matches
from intent.models import Classification
from intent.signals import (
    ACTIVE_SCENE_BONUS,
    AMBIGUOUS_SIGNALS,
    EDIT_SIGNALS,
    NEW_SCENE_SIGNALS,
    PRESET_MATCH_BONUS,
    SINGLE_COLOR_AMBIGUITY_BONUS,
)


# --- Signal tables ---


def test_signal_tables_populated():
    assert len(EDIT_SIGNALS) > 50
    assert len(NEW_SCENE_SIGNALS) > 50
    assert len(AMBIGUOUS_SIGNALS) > 10


def test_all_weights_in_range():
    for entry in EDIT_SIGNALS + NEW_SCENE_SIGNALS + AMBIGUOUS_SIGNALS:
        assert 0 < entry.weight <= 1.0, entry.pattern


def test_regex_signal_respects_word_boundary():
    more = next(e for e in EDIT_SIGNALS if e.pattern == r"\bmore\b")
    assert more.matches("a bit more red")
    assert not more.matches("moreover")


# --- classify ---


def test_edit_command():
    result = classify("slower")
    assert result.classification is Classification.EDIT
    assert result.edit_score == pytest.approx(0.85)
    assert result.new_score == 0.0
    assert ("edit", "slower") in result.matched_signals


def test_new_scene_command():
    result = classify("Christmas")
    assert result.classification is Classification.NEW_SCENE
    assert result.new_score >= 0.95


def test_empty_text_is_ambiguous():
    result = classify("   ")
    assert result.classification is Classification.AMBIGUOUS
    assert result.edit_score == 0.0
    assert result.new_score == 0.0


def test_ambiguous_signal_splits_weight():
    result = classify("change the mood")
    assert result.edit_score == pytest.approx(0.375)
    assert result.new_score == pytest.approx(0.375)
    assert result.classification is Classification.AMBIGUOUS


def test_active_scene_bonus():
    result = classify("hello", active_scene_running=True)
    assert result.edit_score == pytest.approx(ACTIVE_SCENE_BONUS)
    assert result.classification is Classification.AMBIGUOUS


def test_preset_name_bonus():
    result = classify("Porch Party", saved_names=["Porch Party"])
    assert result.matched_preset_name == "Porch Party"
    assert result.new_score >= PRESET_MATCH_BONUS


def test_single_hue_with_multicolor_scene():
    result = classify("set it to red", active_color_count=3)
    half = SINGLE_COLOR_AMBIGUITY_BONUS / 2
    assert result.edit_score == pytest.approx(half)
    assert result.new_score == pytest.approx(half)
    assert result.classification is Classification.AMBIGUOUS


def test_single_hue_ignored_for_single_color_scene():
    result = classify("red", active_color_count=1)
    assert result.edit_score == 0.0


def test_classify_is_deterministic():
    a = classify("make it brighter and more festive", active_scene_running=True)
    b = classify("make it brighter and more festive", active_scene_running=True)
    assert a == b


# --- decide ---


def test_decide_gap_too_small():
    assert decide(0.40, 0.38) is Classification.AMBIGUOUS


def test_decide_below_floor():
    assert decide(0.25, 0.0) is Classification.AMBIGUOUS


def test_decide_clear_winner():
    assert decide(0.9, 0.1) is Classification.EDIT
    assert decide(0.1, 0.9) is Classification.NEW_SCENE


# --- name_matches ---


def test_short_name_needs_word_boundary():
    assert not name_matches("i am bored", "red")
    assert name_matches("go red now", "red")


def test_long_name_substring():
    assert name_matches("play the porch party please", "Porch Party")


def test_empty_name_never_matches():
    assert not name_matches("anything", "  ")


# --- hint ---


def test_context_hint_edit():
    hint = build_context_hint(classify("slower"))
    assert hint.startswith("COMMAND INTENT CLASSIFICATION:")
    assert "ADJUSTMENT" in hint


def test_context_hint_ambiguous_mentions_options():
    hint = build_context_hint(classify(""))
    assert "AMBIGUOUS" in hint
    assert "clarificationOptions" in hint
