"""SQLite storage for suggestion usage events and learned habits."""

from __future__ import annotations

import json
import logging
import os
import sqlite3
import threading
from datetime import datetime, timedelta, timezone

from learning.models import Habit, UsageEvent

log = logging.getLogger("lumen.history")

_SCHEMA = """\
CREATE TABLE IF NOT EXISTS usage_events (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    source TEXT NOT NULL,
    pattern_name TEXT,
    brightness INTEGER,
    effect_id INTEGER,
    speed INTEGER,
    details TEXT,
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS habits (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id TEXT NOT NULL,
    habit_type TEXT NOT NULL,
    description TEXT,
    details TEXT,
    sample_count INTEGER DEFAULT 0,
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_usage_user_created ON usage_events(user_id, created_at);
CREATE INDEX IF NOT EXISTS idx_habits_user ON habits(user_id, id);
"""


class HistoryStore:
    """Thread-safe SQLite storage for usage events and habits."""

    def __init__(self, db_path: str):
        self._db_path = db_path
        self._lock = threading.Lock()

        parent = os.path.dirname(db_path)
        if parent:
            os.makedirs(parent, exist_ok=True)

        self._conn = sqlite3.connect(db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._conn.executescript(_SCHEMA)
        self._conn.commit()

    def log_event(self, user_id: str, event: UsageEvent) -> None:
        with self._lock:
            self._conn.execute(
                "INSERT INTO usage_events ("
                "  id, user_id, source, pattern_name, brightness, effect_id, speed,"
                "  details, created_at"
                ") VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    event.id,
                    user_id,
                    event.source,
                    event.pattern_name,
                    event.brightness,
                    event.effect_id,
                    event.speed,
                    json.dumps(event.details),
                    event.created_at,
                ),
            )
            self._conn.commit()

    def get_recent_events(self, user_id: str, days: int = 30,
                          now: datetime | None = None) -> list[UsageEvent]:
        """Events from the last ``days`` days, newest first."""
        now = now or datetime.now(timezone.utc)
        cutoff = (now - timedelta(days=days)).isoformat()
        with self._lock:
            rows = self._conn.execute(
                "SELECT * FROM usage_events WHERE user_id = ? AND created_at >= ? "
                "ORDER BY created_at DESC",
                (user_id, cutoff),
            ).fetchall()
        return [
            UsageEvent(
                source=row["source"],
                details=_load_json(row["details"]),
                pattern_name=row["pattern_name"],
                brightness=row["brightness"],
                effect_id=row["effect_id"],
                speed=row["speed"],
                id=row["id"],
                created_at=row["created_at"],
            )
            for row in rows
        ]

    def save_habit(self, user_id: str, habit: Habit) -> None:
        with self._lock:
            self._conn.execute(
                "INSERT INTO habits ("
                "  user_id, habit_type, description, details, sample_count, created_at"
                ") VALUES (?, ?, ?, ?, ?, ?)",
                (
                    user_id,
                    habit.habit_type,
                    habit.description,
                    json.dumps(habit.details),
                    habit.sample_count,
                    habit.created_at,
                ),
            )
            self._conn.commit()
        log.info("Saved %s habit for %s: %s", habit.habit_type, user_id, habit.description)

    def get_habits(self, user_id: str, limit: int = 20) -> list[Habit]:
        """Most recently saved habits first."""
        with self._lock:
            rows = self._conn.execute(
                "SELECT * FROM habits WHERE user_id = ? ORDER BY id DESC LIMIT ?",
                (user_id, limit),
            ).fetchall()
        return [
            Habit(
                habit_type=row["habit_type"],
                description=row["description"] or "",
                details=_load_json(row["details"]),
                sample_count=row["sample_count"] or 0,
                created_at=row["created_at"],
            )
            for row in rows
        ]

    def close(self) -> None:
        """Close the database connection."""
        try:
            self._conn.close()
        except Exception:
            pass


def _load_json(value: str | None) -> dict:
    if not value:
        return {}
    try:
        data = json.loads(value)
    except json.JSONDecodeError:
        log.warning("Ignoring malformed JSON column: %.60s", value)
        return {}
    return data if isinstance(data, dict) else {}
