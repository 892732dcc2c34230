"""Per-session state: suggestion history, conversation turns, latest result."""

from __future__ import annotations

import itertools
import threading
from collections import deque
from dataclasses import dataclass

from intent.models import ActiveContext, RoutedCommand


class SuggestionHistory:
    """Bounded, most-recent-last list of pattern names already suggested.

    Oldest entries fall off once the buffer is full. Re-suggesting a name
    moves it to the end instead of storing it twice.
    """

    def __init__(self, maxlen: int = 10):
        self._items: deque[str] = deque(maxlen=max(1, maxlen))
        self._lock = threading.Lock()

    def add(self, name: str | None) -> None:
        if not name or not name.strip():
            return
        name = name.strip()
        with self._lock:
            try:
                self._items.remove(name)
            except ValueError:
                pass
            self._items.append(name)

    def recent(self) -> list[str]:
        with self._lock:
            return list(self._items)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        return len(self._items)


@dataclass(frozen=True)
class SessionSnapshot:
    seq: int
    routed: RoutedCommand


class Session:
    """State owned by one conversation with the lighting assistant.

    Each route() call takes a sequence number up front and publishes its
    result at the end; a slower, older request never overwrites the result of
    a newer one.
    """

    def __init__(self, suggestion_history_size: int = 10, max_turns: int = 10,
                 active_context: ActiveContext | None = None):
        self.suggestions = SuggestionHistory(suggestion_history_size)
        self.active_context = active_context
        self._turns: deque[tuple[str, str]] = deque(maxlen=max(1, max_turns))
        self._seq = itertools.count(1)
        self._lock = threading.Lock()
        self._latest: SessionSnapshot | None = None

    def next_seq(self) -> int:
        with self._lock:
            return next(self._seq)

    def publish(self, seq: int, routed: RoutedCommand) -> bool:
        """Store routed as the latest result unless a newer one is already there."""
        with self._lock:
            if self._latest is not None and self._latest.seq > seq:
                return False
            self._latest = SessionSnapshot(seq, routed)
            return True

    @property
    def latest(self) -> RoutedCommand | None:
        snapshot = self._latest
        return snapshot.routed if snapshot else None

    def record_turn(self, user: str, assistant: str) -> None:
        with self._lock:
            self._turns.append((user, assistant))

    @property
    def turns(self) -> list[tuple[str, str]]:
        with self._lock:
            return list(self._turns)
