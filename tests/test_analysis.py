"""Tests for keyword analysis of free-form requests."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from defaults.analysis import analyze_query
from defaults.models import EnergyLevel, Mood, MotionType


def test_cozy_candle():
    analysis = analyze_query("something cozy like a candle")
    assert analysis.mood is Mood.COZY
    assert analysis.energy is EnergyLevel.LOW
    assert analysis.motion is MotionType.FLICKERING


def test_party_is_festive_and_high_energy():
    analysis = analyze_query("Party time!")
    assert analysis.mood is Mood.FESTIVE
    assert analysis.energy is EnergyLevel.HIGH


def test_multi_word_colour_not_double_counted():
    analysis = analyze_query("warm white and blue")
    assert analysis.color_preferences == ((255, 244, 224), (0, 0, 255))


def test_colours_in_order_of_appearance():
    analysis = analyze_query("green then red")
    assert analysis.color_preferences == ((0, 255, 0), (255, 0, 0))
    assert analysis.has_color_preferences


def test_word_boundaries():
    # "redo" is not red, "fastidious" is not fast
    analysis = analyze_query("redo it, fastidious")
    assert analysis.color_preferences == ()
    assert analysis.energy is None


def test_nothing_recognised():
    analysis = analyze_query("")
    assert analysis.mood is None
    assert analysis.energy is None
    assert analysis.motion is None
    assert not analysis.has_color_preferences
