"""Tests for learned brightness bias and effect preferences."""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from learning import get_bias_tracker
from learning.models import HABIT_BRIGHTNESS_BIAS, HABIT_EFFECT_PREFERENCE, SOURCE_ADJUSTED, Habit
from learning.store import HistoryStore
from learning.tracker import BiasTracker


def _tracker(tmp_path):
    store = HistoryStore(str(tmp_path / "history.db"))
    return BiasTracker(store, "u1"), store


def _adjust_brightness(tracker, n, suggested, adjusted, darkness):
    for _ in range(n):
        tracker.record_adjustment("brightness", suggested, adjusted, darkness, 21)


def test_neutral_without_history(tmp_path):
    tracker, store = _tracker(tmp_path)
    assert tracker.get_brightness_bias(0.8, 21) == 1.0
    assert tracker.get_effect_preferences() == {}
    store.close()


def test_too_few_adjustments_skip_analysis(tmp_path):
    tracker, store = _tracker(tmp_path)
    _adjust_brightness(tracker, 4, 0.5, 0.8, 0.9)
    assert tracker.analyze_and_save_habits() is False
    assert tracker.cache_version == 0
    assert store.get_habits("u1") == []
    store.close()


def test_night_brightness_bias_learned(tmp_path):
    tracker, store = _tracker(tmp_path)
    _adjust_brightness(tracker, 5, 0.5, 0.6, 0.9)

    assert tracker.analyze_and_save_habits() is True
    assert tracker.cache_version == 1

    habits = store.get_habits("u1")
    assert len(habits) == 1
    assert habits[0].habit_type == HABIT_BRIGHTNESS_BIAS
    assert habits[0].description == "Prefers 20% brighter after dark"
    assert habits[0].sample_count == 5

    assert tracker.get_brightness_bias(0.9, 21) == pytest.approx(1.2)
    assert tracker.get_brightness_bias(0.6, 21) == pytest.approx(1.2)
    assert tracker.get_brightness_bias(0.2, 13) == 1.0
    store.close()


def test_dimmer_day_bias(tmp_path):
    tracker, store = _tracker(tmp_path)
    _adjust_brightness(tracker, 5, 0.8, 0.6, 0.1)

    assert tracker.analyze_and_save_habits() is True
    assert store.get_habits("u1")[0].description == "Prefers 25% dimmer during day"
    assert tracker.get_brightness_bias(0.1, 12) == pytest.approx(0.75)
    store.close()


def test_small_deviation_saves_nothing(tmp_path):
    tracker, store = _tracker(tmp_path)
    _adjust_brightness(tracker, 5, 0.5, 0.51, 0.9)
    assert tracker.analyze_and_save_habits() is True
    assert store.get_habits("u1") == []
    store.close()


def test_bias_without_darkness_uses_hour(tmp_path):
    tracker, store = _tracker(tmp_path)
    _adjust_brightness(tracker, 5, 0.5, 0.6, 0.9)
    tracker.analyze_and_save_habits()

    assert tracker.get_brightness_bias(None, 22) == pytest.approx(1.2)
    assert tracker.get_brightness_bias(None, 12) == 1.0
    store.close()


def test_effect_preferences_learned(tmp_path):
    tracker, store = _tracker(tmp_path)
    for effect_id in (28, 28, 28, 17, 17):
        tracker.record_adjustment("effect", 0, effect_id, 0.5, 20)

    assert tracker.analyze_and_save_habits() is True
    habit = store.get_habits("u1")[0]
    assert habit.habit_type == HABIT_EFFECT_PREFERENCE
    assert habit.details == {"preferred_effects": [28, 17]}
    assert tracker.get_effect_preferences() == {28: 0.5, 17: 0.5}
    store.close()


def test_single_effect_is_not_a_preference(tmp_path):
    tracker, store = _tracker(tmp_path)
    for _ in range(5):
        tracker.record_adjustment("effect", 0, 28, 0.5, 20)
    tracker.analyze_and_save_habits()
    assert tracker.get_effect_preferences() == {}
    store.close()


def test_adjustment_event_fields():
    store = MagicMock()
    tracker = BiasTracker(store, "u1")
    tracker.record_adjustment("brightness", 0.5, 0.6, 0.9, 21)

    user_id, event = store.log_event.call_args[0]
    assert user_id == "u1"
    assert event.source == SOURCE_ADJUSTED
    assert event.brightness == 153
    assert event.effect_id is None
    assert event.details == {
        "parameter": "brightness",
        "suggested": 0.5,
        "adjusted": 0.6,
        "sky_darkness": 0.9,
        "hour": 21,
    }


def test_accepted_event_fields():
    store = MagicMock()
    BiasTracker(store, "u1").record_accepted(1.0, 28, 0.3, 14)
    _user_id, event = store.log_event.call_args[0]
    assert event.brightness == 255
    assert event.effect_id == 28


def test_record_failures_are_non_fatal():
    store = MagicMock()
    store.log_event.side_effect = RuntimeError("disk full")
    tracker = BiasTracker(store, "u1")
    tracker.record_adjustment("brightness", 0.5, 0.6, 0.9, 21)
    tracker.record_accepted(0.5, 0, 0.9, 21)


def test_read_failures_fall_back_to_neutral():
    store = MagicMock()
    store.get_habits.side_effect = RuntimeError("locked")
    tracker = BiasTracker(store, "u1")
    assert tracker.get_brightness_bias(0.9, 21) == 1.0
    assert tracker.get_effect_preferences() == {}


def test_analysis_failure_returns_false():
    store = MagicMock()
    store.get_recent_events.side_effect = RuntimeError("locked")
    tracker = BiasTracker(store, "u1")
    assert tracker.analyze_and_save_habits() is False
    assert tracker.cache_version == 0


def test_snapshot_reused_until_invalidated():
    store = MagicMock()
    store.get_habits.return_value = [
        Habit(HABIT_BRIGHTNESS_BIAS, details={
            "context": {"sky_darkness_min": 0.6, "sky_darkness_max": 1.0}, "bias": 1.3,
        }),
    ]
    tracker = BiasTracker(store, "u1")

    assert tracker.get_brightness_bias(0.8, 21) == 1.3
    assert tracker.get_brightness_bias(0.9, 22) == 1.3
    tracker.get_effect_preferences()
    assert store.get_habits.call_count == 1

    tracker.invalidate()
    tracker.get_brightness_bias(0.8, 21)
    assert store.get_habits.call_count == 2


@pytest.mark.parametrize("order", [(0, 1), (1, 0)])
@pytest.mark.parametrize("darkness,bias", [(0.0, 0.8), (0.59, 0.8), (0.6, 1.3), (1.0, 1.3)])
def test_boundary_darkness_matches_one_range(order, darkness, bias):
    habits = [
        Habit(HABIT_BRIGHTNESS_BIAS, details={
            "context": {"sky_darkness_min": 0.0, "sky_darkness_max": 0.6}, "bias": 0.8,
        }),
        Habit(HABIT_BRIGHTNESS_BIAS, details={
            "context": {"sky_darkness_min": 0.6, "sky_darkness_max": 1.0}, "bias": 1.3,
        }),
    ]
    store = MagicMock()
    store.get_habits.return_value = [habits[i] for i in order]
    tracker = BiasTracker(store, "u1")

    assert tracker.get_brightness_bias(darkness, 12) == bias

def test_factory(tmp_path):
    assert get_bias_tracker({}) is None
    tracker = get_bias_tracker({"history_db_path": str(tmp_path / "h.db"), "user_id": "porch"})
    assert isinstance(tracker, BiasTracker)
    assert tracker.get_brightness_bias(0.5, 12) == 1.0
