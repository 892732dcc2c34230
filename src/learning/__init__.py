"""Usage history and learned preference biases."""

from __future__ import annotations

from learning.store import HistoryStore
from learning.tracker import BiasTracker


def get_bias_tracker(config: dict) -> BiasTracker | None:
    """Factory: a tracker over the configured history DB, or None if disabled."""
    db_path = config.get("history_db_path")
    if not db_path:
        return None
    store = HistoryStore(db_path)
    return BiasTracker(
        store,
        config.get("user_id", "default"),
        analysis_days=config.get("habit_analysis_days", 30),
    )
