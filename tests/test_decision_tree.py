"""Tests for effect selection and speed recommendation."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from defaults.analysis import QueryAnalysis
from defaults.decision_tree import recommend_speed, select_effect, suggest_effects
from defaults.models import EnergyLevel, Mood, MotionType


def _analysis(**kwargs):
    return QueryAnalysis(original_query="test", **kwargs)


def test_motion_match_prefers_closest_energy():
    selection = select_effect(_analysis(motion=MotionType.TWINKLING, energy=EnergyLevel.LOW))
    assert selection.effect.id == 17
    assert selection.effect.name == "Twinkle"
    assert selection.is_inferred is True
    expected = (40 + (80 - 40) * 0.35) / 255
    assert recommend_speed(selection.effect.id, EnergyLevel.LOW) == pytest.approx(expected)


def test_preferred_style_picks_matching_category():
    selection = select_effect(
        _analysis(motion=MotionType.TWINKLING, energy=EnergyLevel.LOW),
        preferred_styles=["Twinkle"],
    )
    assert selection.effect.id == 49
    assert selection.effect.category == "twinkle"


def test_learned_preferences_break_ties():
    selection = select_effect(
        _analysis(motion=MotionType.TWINKLING, energy=EnergyLevel.LOW),
        learned_preferences={80: 1.0},
    )
    assert selection.effect.id == 80


def test_user_colors_skip_effects_that_ignore_them():
    analysis = _analysis(motion=MotionType.FLICKERING)
    assert suggest_effects(analysis)[0] == 38
    assert 38 not in suggest_effects(analysis, require_color_respect=True)
    assert select_effect(analysis, has_user_colors=True).effect.id == 66


def test_solid_only_when_static_requested():
    assert 0 not in suggest_effects(_analysis(mood=Mood.CALM))
    selection = select_effect(_analysis(motion=MotionType.STATIC))
    assert selection.effect.id == 0
    assert recommend_speed(selection.effect.id, None) == 0.0


@pytest.mark.parametrize("energy,effect_id", [
    (EnergyLevel.VERY_LOW, 0),
    (EnergyLevel.LOW, 2),
    (EnergyLevel.MEDIUM, 17),
    (EnergyLevel.HIGH, 28),
    (None, 0),
])
def test_energy_fallback_when_nothing_matches(energy, effect_id):
    selection = select_effect(_analysis(energy=energy))
    assert selection.effect.id == effect_id
    assert selection.is_inferred is False


def test_recommend_speed():
    assert recommend_speed(0, EnergyLevel.HIGH) == 0.0
    assert recommend_speed(999, None) == 0.5
    assert recommend_speed(28, None) == pytest.approx(150 / 255)
    assert recommend_speed(28, EnergyLevel.VERY_HIGH) == pytest.approx(220 / 255)
    assert recommend_speed(28, EnergyLevel.VERY_LOW) == pytest.approx(80 / 255)
