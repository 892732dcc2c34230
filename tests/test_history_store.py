"""Tests for the SQLite history store."""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from learning.models import HABIT_BRIGHTNESS_BIAS, SOURCE_ACCEPTED, SOURCE_ADJUSTED, Habit, UsageEvent
from learning.store import HistoryStore

NOW = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)


def _store(tmp_path):
    return HistoryStore(str(tmp_path / "history.db"))


def _event(source=SOURCE_ADJUSTED, days_ago=0, **details):
    return UsageEvent(
        source=source,
        details=details,
        created_at=(NOW - timedelta(days=days_ago)).isoformat(),
    )


def test_creates_parent_directory(tmp_path):
    store = HistoryStore(str(tmp_path / "nested" / "dir" / "history.db"))
    assert (tmp_path / "nested" / "dir" / "history.db").exists()
    store.close()


def test_log_and_read_events(tmp_path):
    store = _store(tmp_path)
    store.log_event("u1", UsageEvent(
        source=SOURCE_ACCEPTED, brightness=200, effect_id=28, speed=150,
        details={"hour": 21}, created_at=NOW.isoformat(),
    ))

    events = store.get_recent_events("u1", now=NOW)
    assert len(events) == 1
    e = events[0]
    assert e.source == SOURCE_ACCEPTED
    assert (e.brightness, e.effect_id, e.speed) == (200, 28, 150)
    assert e.details == {"hour": 21}
    store.close()


def test_recent_events_newest_first_within_window(tmp_path):
    store = _store(tmp_path)
    store.log_event("u1", _event(days_ago=3, parameter="a"))
    store.log_event("u1", _event(days_ago=1, parameter="b"))
    store.log_event("u1", _event(days_ago=45, parameter="old"))
    store.log_event("u2", _event(days_ago=0, parameter="other user"))

    events = store.get_recent_events("u1", days=30, now=NOW)
    assert [e.details["parameter"] for e in events] == ["b", "a"]
    store.close()


def test_habits_most_recent_first_with_limit(tmp_path):
    store = _store(tmp_path)
    for i in range(3):
        store.save_habit("u1", Habit(HABIT_BRIGHTNESS_BIAS, f"habit {i}", {"bias": 1.0 + i / 10}, 5))
    store.save_habit("u2", Habit(HABIT_BRIGHTNESS_BIAS, "someone else"))

    habits = store.get_habits("u1", limit=2)
    assert [h.description for h in habits] == ["habit 2", "habit 1"]
    assert habits[0].details == {"bias": 1.2}
    assert habits[0].sample_count == 5
    store.close()


def test_malformed_details_are_tolerated(tmp_path):
    store = _store(tmp_path)
    store._conn.execute(
        "INSERT INTO habits (user_id, habit_type, description, details, created_at) "
        "VALUES (?, ?, ?, ?, ?)",
        ("u1", HABIT_BRIGHTNESS_BIAS, "broken", "{not json", NOW.isoformat()),
    )
    store._conn.commit()

    habits = store.get_habits("u1")
    assert habits[0].details == {}
    store.close()


def test_empty_store(tmp_path):
    store = _store(tmp_path)
    assert store.get_recent_events("nobody", now=NOW) == []
    assert store.get_habits("nobody") == []
    store.close()
